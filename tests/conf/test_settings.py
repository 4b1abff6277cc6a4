import pytest
from pydantic import ValidationError

from yamf.conf import DEFAULT_SETTINGS_FILEPATH, UNITTESTS_SETTINGS_FILEPATH, SettingsSourceError, YamfSettings
from yamf.conf import get_settings
from yamf.conf.utils import load_yaml_settings
from yamf.utils.yaml import dict_from_extended_yaml


@pytest.fixture
def fresh_singleton(monkeypatch):
    monkeypatch.setattr(get_settings, '_settings_singleton', None)
    monkeypatch.delenv('YAMF_CONFIG_YAML', raising=False)
    return monkeypatch


def test_packaged_files():
    assert load_yaml_settings(YamfSettings, DEFAULT_SETTINGS_FILEPATH).MAX_VALUE_SIZE == 1024
    assert load_yaml_settings(YamfSettings, UNITTESTS_SETTINGS_FILEPATH).MAX_VALUE_SIZE == 1024
    assert 'extends' not in dict_from_extended_yaml(filepath=UNITTESTS_SETTINGS_FILEPATH)


def test_extends_packaged_file(tmp_path):
    path = tmp_path / 'custom.yml'
    path.write_text('extends: default.yml\n')
    assert load_yaml_settings(YamfSettings, str(path)) == YamfSettings()

    path.write_text('extends: default.yml\nMAX_VALUE_SIZE: 0\n')
    assert load_yaml_settings(YamfSettings, str(path)).MAX_VALUE_SIZE == 0


def test_unknown_setting_is_rejected(tmp_path):
    path = tmp_path / 'custom.yml'
    path.write_text('MAX_VALUE_SZE: 10\n')
    with pytest.raises(ValidationError):
        load_yaml_settings(YamfSettings, str(path))


def test_settings_are_frozen():
    settings = YamfSettings()
    with pytest.raises(ValidationError):
        settings.MAX_VALUE_SIZE = 1


def test_default_source(fresh_singleton):
    assert get_settings.get_global_settings() == YamfSettings()
    assert get_settings.get_settings_source() == DEFAULT_SETTINGS_FILEPATH


def test_yaml_from_env(fresh_singleton, tmp_path):
    path = tmp_path / 'custom.yml'
    path.write_text('MAX_VALUE_SIZE: 16\n')
    fresh_singleton.setenv('YAMF_CONFIG_YAML', str(path))
    settings = get_settings.get_global_settings()
    assert settings.MAX_VALUE_SIZE == 16
    assert get_settings.get_global_settings() is settings


def test_loading_twice_from_another_file(fresh_singleton, tmp_path):
    path = tmp_path / 'custom.yml'
    path.write_text('MAX_VALUE_SIZE: 16\n')
    get_settings.get_global_settings()
    fresh_singleton.setenv('YAMF_CONFIG_YAML', str(path))
    with pytest.raises(SettingsSourceError, match='loading config twice with a different file'):
        get_settings.get_global_settings()


def test_only_the_yaml_env_is_read(fresh_singleton, tmp_path):
    path = tmp_path / 'custom.yml'
    path.write_text('MAX_VALUE_SIZE: 16\n')
    fresh_singleton.setenv('YAMF_CONFIG_FILE', 'some.python.module')
    fresh_singleton.setenv('YAMF_CONFIG_YAML', str(path))
    assert get_settings.get_global_settings().MAX_VALUE_SIZE == 16
    assert get_settings.get_settings_source() == str(path)
