import doctest
import importlib

import pytest

MODULES_WITH_DOCTESTS = [
    'yamf.hash.blake2b',
    'yamf.serialization.adapters.generic_adapter',
    'yamf.serialization.adapters.hex',
    'yamf.serialization.encoding.type_value',
    'yamf.serialization.encoding.varu64',
    'yamf.serialization.stream',
    'yamf.type_value',
    'yamf.utils.dict',
    'yamf.utils.result',
    'yamf.utils.rwlock',
    'yamf.varu64',
]


@pytest.mark.parametrize('module_name', MODULES_WITH_DOCTESTS)
def test_doctests(module_name):
    module = importlib.import_module(module_name)
    failed, attempted = doctest.testmod(module)
    assert attempted > 0
    assert failed == 0
