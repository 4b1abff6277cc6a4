# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
from pathlib import Path
from typing import NamedTuple, Optional

from yamf.conf.settings import YamfSettings
from yamf.conf.utils import load_yaml_settings
from yamf.exceptions import YamfError

CONFIG_YAML_ENV = 'YAMF_CONFIG_YAML'


class SettingsSourceError(YamfError):
    """The settings were already loaded from somewhere else."""


class _SettingsMetadata(NamedTuple):
    source: str
    settings: YamfSettings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_global_settings() -> YamfSettings:
    """
    Returns the settings of the process, they're loaded on the first call and every later call must agree on the
    source.

    The yaml filepath in 'YAMF_CONFIG_YAML' is used, falling back to the `default.yml` shipped with the package.
    """
    yaml_path = os.environ.get(CONFIG_YAML_ENV, str(Path(__file__).parent / 'default.yml'))
    return _get_or_load(yaml_path)


def get_settings_source() -> str:
    """ Returns the path of the YAML file that was loaded.

    XXX: Will raise an assertion error if get_global_settings() wasn't used before.
    """
    assert _settings_singleton is not None, 'get_global_settings() not called before'
    return _settings_singleton.source


def _get_or_load(source: str) -> YamfSettings:
    global _settings_singleton

    if _settings_singleton is None:
        _settings_singleton = _SettingsMetadata(source=source, settings=load_yaml_settings(YamfSettings, source))
    elif _settings_singleton.source != source:
        raise SettingsSourceError('loading config twice with a different file')

    return _settings_singleton.settings
