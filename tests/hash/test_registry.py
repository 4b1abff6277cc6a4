import threading

import pytest
from structlog.testing import capture_logs

from yamf.exceptions import HashNotFoundError
from yamf.hash import Hash, HashRegistry, hash_equal, hash_to_type_value
from yamf.type_value import TypeValue
from yamf.utils.result import Err, Ok


class _CountingHash:
    """Fake hash whose digest is the number of bytes seen so far."""

    def __init__(self, hash_type=7):
        self._hash_type = hash_type
        self.count = 0

    @property
    def hash_type(self):
        return self._hash_type

    def update(self, data):
        self.count += len(data)

    def digest(self):
        return self.count.to_bytes(8, 'big')


def test_create_registered():
    registry = HashRegistry()
    registry.register(7, _CountingHash)
    h = registry.create(7).unwrap()
    assert isinstance(h, _CountingHash)
    assert isinstance(h, Hash)
    assert registry.create(7).unwrap() is not h


def test_create_not_found():
    registry = HashRegistry()
    result = registry.create(3)
    assert isinstance(result.unwrap_err(), HashNotFoundError)
    assert result.unwrap_err().hash_type == 3


def test_register_overwrites():
    with capture_logs() as logs:
        registry = HashRegistry()
        registry.register(7, lambda: _CountingHash(1))
        registry.register(7, lambda: _CountingHash(2))
    assert registry.create(7).unwrap().hash_type == 2
    assert [(log['event'], log['log_level']) for log in logs] == [
        ('hash factory registered', 'debug'),
        ('hash factory replaced', 'info'),
    ]


def test_register_invalid_type():
    registry = HashRegistry()
    with pytest.raises(ValueError):
        registry.register(-1, _CountingHash)
    with pytest.raises(ValueError):
        registry.register(2**64, _CountingHash)


def test_contains_and_registered_types():
    registry = HashRegistry()
    registry.register(9, _CountingHash)
    registry.register(1, _CountingHash)
    assert 9 in registry
    assert 2 not in registry
    assert registry.registered_types() == [1, 9]


def test_factory_exception_is_returned():
    error = RuntimeError('no entropy')

    def factory():
        raise error

    registry = HashRegistry()
    registry.register(1, factory)
    assert registry.create(1) == Err(error)


def test_factory_result_is_passed_through():
    error = ValueError('bad key')
    h = _CountingHash()
    registry = HashRegistry()
    registry.register(1, lambda: Err(error))
    registry.register(2, lambda: Ok(h))
    assert registry.create(1) == Err(error)
    assert registry.create(2) == Ok(h)


def test_type_value_to_hash():
    registry = HashRegistry()
    registry.register(7, _CountingHash)
    assert isinstance(registry.type_value_to_hash(TypeValue(7, b'ignored')).unwrap(), _CountingHash)
    assert isinstance(registry.type_value_to_hash(TypeValue(8)).unwrap_err(), HashNotFoundError)


def test_hash_to_type_value_does_not_change_the_hash():
    h = _CountingHash()
    h.update(b'abc')
    assert hash_to_type_value(h) == TypeValue(7, (3).to_bytes(8, 'big'))
    assert hash_to_type_value(h) == hash_to_type_value(h)
    h.update(b'd')
    assert hash_to_type_value(h) == TypeValue(7, (4).to_bytes(8, 'big'))


def test_hash_equal():
    h = _CountingHash()
    h.update(b'abc')
    assert hash_equal(h, TypeValue(7, (3).to_bytes(8, 'big')))
    assert not hash_equal(h, TypeValue(8, (3).to_bytes(8, 'big')))
    assert not hash_equal(h, TypeValue(7, (4).to_bytes(8, 'big')))
    assert h.count == 3


def test_concurrent_register_and_create():
    registry = HashRegistry()
    registry.register(0, _CountingHash)
    errors = []
    barrier = threading.Barrier(8)

    def writer(hash_type):
        barrier.wait()
        for _ in range(200):
            registry.register(hash_type, _CountingHash)

    def reader():
        barrier.wait()
        for _ in range(200):
            result = registry.create(0)
            if result.is_err():
                errors.append(result.unwrap_err())

    threads = [threading.Thread(target=writer, args=(i,)) for i in range(1, 5)]
    threads += [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert registry.registered_types() == [0, 1, 2, 3, 4]
