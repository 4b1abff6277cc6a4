import hashlib

from yamf.hash import HashRegistry, hash_equal, hash_to_type_value
from yamf.hash import blake2b
from yamf.type_value import TypeValue


def test_digest_is_64_bytes():
    h = blake2b.new()
    h.update(b'test')
    assert h.hash_type == blake2b.BLAKE2B_TYPE == 0
    assert h.digest() == hashlib.blake2b(b'test', digest_size=64).digest()
    assert len(h.digest()) == blake2b.DIGEST_LENGTH


def test_digest_can_be_taken_many_times():
    h = blake2b.new()
    h.update(b'te')
    first = h.digest()
    assert h.digest() == first
    h.update(b'st')
    assert h.digest() == hashlib.blake2b(b'test').digest()


def test_known_answer_abc():
    h = blake2b.new()
    h.update(b'abc')
    assert h.digest() == bytes.fromhex(
        'ba80a53f981c4d0d6a2797b69f12f6e94c212f14685ac4b74b12bb6fdbffa2d1'
        '7d87c5392aab792dc252d5de4533cc9518d38aa8dbf1925ab92386edd4009923'
    )


def test_registry_round_trip():
    registry = HashRegistry()
    blake2b.register(registry)

    h = registry.create(blake2b.BLAKE2B_TYPE).unwrap()
    h.update(b'payload')
    type_value = hash_to_type_value(h)
    assert type_value.type == 0

    received = TypeValue.from_bytes(type_value.to_bytes())
    check = registry.type_value_to_hash(received).unwrap()
    check.update(b'payload')
    assert hash_equal(check, received)
