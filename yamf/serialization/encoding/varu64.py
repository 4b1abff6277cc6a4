#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

r"""
This module implements VarU64, a canonical variable-length encoding of unsigned 64-bit integers.

The first byte (the header) decides the format:

- a header below 248 is the value itself, no more bytes follow
- a header `248 + k` (k = 0..7) is followed by `k + 1` bytes holding the value in big-endian order

Every value has exactly one canonical encoding, the shortest one:

| value range           | header | trailing bytes |
|-----------------------|--------|----------------|
| 0 .. 247              | value  | 0              |
| 248 .. 2**8 - 1       | 248    | 1              |
| 2**8 .. 2**16 - 1     | 249    | 2              |
| 2**16 .. 2**24 - 1    | 250    | 3              |
| 2**24 .. 2**32 - 1    | 251    | 4              |
| 2**32 .. 2**40 - 1    | 252    | 5              |
| 2**40 .. 2**48 - 1    | 253    | 6              |
| 2**48 .. 2**56 - 1    | 254    | 7              |
| 2**56 .. 2**64 - 1    | 255    | 8              |

Longer encodings are still decoded to the right value, but the result carries a `NonCanonicalError` as an advisory,
it is not a failure.

>>> se = Serializer.build_bytes_serializer()
>>> encode_varu64(se, 0)  # writes 00
1
>>> encode_varu64(se, 247)  # writes f7
1
>>> encode_varu64(se, 248)  # writes f8f8
2
>>> encode_varu64(se, 65536)  # writes fa010000
4
>>> bytes(se.finalize()).hex()
'00f7f8f8fa010000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('f8f8 fa010000'))
>>> decode_varu64(de)
Ok(VarU64Read(value=248, size=2, non_canonical=None))
>>> decode_varu64(de).unwrap().value
65536

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('f82a'))
>>> result = decode_varu64(de).unwrap()
>>> result.value, result.size, result.is_canonical
(42, 2, False)
>>> print(result.non_canonical)
non-canonical encoding: 42 uses 2 bytes instead of 1

>>> decode_varu64(Deserializer.build_bytes_deserializer(bytes.fromhex('f901')))
Err(OutOfDataError('not enough bytes to read'))
"""

from typing import NamedTuple, Optional

from yamf.serialization import Deserializer, Serializer
from yamf.serialization.exceptions import NonCanonicalError, SerializationError
from yamf.utils.result import Err, Ok, Result

MAX_VARU64 = (1 << 64) - 1
MAX_ENCODED_SIZE = 9

# headers below this value are the value itself
_FIRST_MULTI_BYTE_HEADER = 248


class VarU64Read(NamedTuple):
    """A successfully decoded VarU64."""

    value: int
    # number of bytes consumed, header included
    size: int
    # set when the encoding was longer than the canonical one
    non_canonical: Optional[NonCanonicalError]

    @property
    def is_canonical(self) -> bool:
        return self.non_canonical is None


def encoding_params(value: int) -> tuple[int, int]:
    """ Return the header byte and the number of trailing bytes of the canonical encoding of `value`.

    >>> encoding_params(247)
    (247, 0)
    >>> encoding_params(248)
    (248, 1)
    >>> encoding_params(2**64 - 1)
    (255, 8)
    """
    if not 0 <= value <= MAX_VARU64:
        raise ValueError(f'{value} is not an unsigned 64-bit integer')
    if value < _FIRST_MULTI_BYTE_HEADER:
        return value, 0
    length = (value.bit_length() + 7) // 8
    return _FIRST_MULTI_BYTE_HEADER + length - 1, length


def encoded_size(value: int) -> int:
    """Number of bytes of the canonical encoding of `value`, between 1 and 9."""
    _, length = encoding_params(value)
    return 1 + length


def encode_varu64(serializer: Serializer, value: int) -> int:
    """ Write the canonical encoding of `value` and return how many bytes were written.

    Raises `ValueError` for values that aren't unsigned 64-bit integers, errors from the serializer are propagated
    as they are.
    """
    header, length = encoding_params(value)
    data = bytes([header]) + value.to_bytes(length, byteorder='big') if length else bytes([header])
    serializer.write_bytes(data)
    return len(data)


def decode_varu64(deserializer: Deserializer) -> Result[VarU64Read, SerializationError]:
    """ Read a single VarU64.

    A short read, including not having any byte at all, results in `Err(OutOfDataError)`. A non-minimal encoding
    results in `Ok` with the `non_canonical` field set.
    """
    try:
        header = deserializer.read_byte()
        if header | 7 != 0xff:
            return Ok(VarU64Read(header, 1, None))
        length = (header & 7) + 1
        data = deserializer.read_bytes(length)
    except SerializationError as e:
        return Err(e)

    value = int.from_bytes(data, byteorder='big')
    size = 1 + length
    _, canonical_length = encoding_params(value)
    if canonical_length != length:
        return Ok(VarU64Read(value, size, NonCanonicalError(value, size, 1 + canonical_length)))
    return Ok(VarU64Read(value, size, None))
