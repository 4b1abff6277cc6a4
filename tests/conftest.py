import os

import pytest

from yamf.conf import UNITTESTS_SETTINGS_FILEPATH
from yamf.type_value import reset_max_value_size

os.environ['YAMF_CONFIG_YAML'] = os.environ.get('YAMF_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)


@pytest.fixture(autouse=True)
def _restore_max_value_size():
    yield
    reset_max_value_size()
