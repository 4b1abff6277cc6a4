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
This module implements the type-length-value frame of a `TypeValue`:

    VarU64(type) || VarU64(len(value)) || value

>>> se = Serializer.build_bytes_serializer()
>>> encode_type_value(se, TypeValue(1, b'test'))
6
>>> bytes(se.finalize()).hex()
'010474657374'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('010474657374'))
>>> read = decode_type_value(de).unwrap()
>>> read.type_value == TypeValue(1, b'test'), read.size, read.is_canonical
(True, 6, True)

A declared length longer than the available data is an error, as is a length above the maximum value size:

>>> decode_type_value(Deserializer.build_bytes_deserializer(bytes.fromhex('000201')))
Err(OutOfDataError('not enough bytes to read'))
>>> decode_type_value(Deserializer.build_bytes_deserializer(bytes.fromhex('00f90401')))
Err(ValueTooBigError('value size 1025 exceeds the maximum of 1024'))

Non-canonical fields don't stop the decoding, the advisory is kept with the result:

>>> read = decode_type_value(Deserializer.build_bytes_deserializer(bytes.fromhex('f82a0101'))).unwrap()
>>> read.type_value, read.is_canonical
(TypeValue(type=42, value=b'\x01'), False)
"""

import sys
from typing import NamedTuple, Optional

from yamf.serialization import Deserializer, Serializer
from yamf.serialization.encoding.varu64 import decode_varu64, encode_varu64
from yamf.serialization.exceptions import NonCanonicalError, SerializationError, ValueTooBigError, WriteError
from yamf.type_value import TypeValue, get_max_value_size
from yamf.utils.result import Err, Ok, Result, propagate_result


class TypeValueRead(NamedTuple):
    """A successfully decoded frame."""

    type_value: TypeValue
    # number of bytes consumed
    size: int
    # advisory from the length field if it had one, otherwise from the type field
    non_canonical: Optional[NonCanonicalError]

    @property
    def is_canonical(self) -> bool:
        return self.non_canonical is None


def encode_type_value(serializer: Serializer, type_value: TypeValue) -> int:
    """ Write the frame of `type_value` and return how many bytes were written.

    When the serializer fails, the `WriteError` raised carries the total number of bytes written by this call.
    """
    written = 0
    try:
        written += encode_varu64(serializer, type_value.type)
        written += encode_varu64(serializer, len(type_value.value))
        if type_value.value:
            serializer.write_bytes(type_value.value)
            written += len(type_value.value)
    except WriteError as e:
        raise WriteError(str(e), written=written + e.written) from e
    return written


@propagate_result
def decode_type_value(deserializer: Deserializer) -> Result[TypeValueRead, SerializationError]:
    """ Read a single frame.

    The value bytes are not read at all when the declared length is above the maximum value size. The first fatal
    error is returned, in reading order, non-canonical fields are only reported when everything else succeeded.
    """
    type_read = decode_varu64(deserializer).unwrap_or_propagate()
    length_read = decode_varu64(deserializer).unwrap_or_propagate()

    length = length_read.value
    max_value_size = get_max_value_size()
    if max_value_size > 0 and length > max_value_size:
        return Err(ValueTooBigError(f'value size {length} exceeds the maximum of {max_value_size}'))
    if length > sys.maxsize:
        return Err(ValueTooBigError(f'value size {length} cannot be allocated'))

    value = b''
    if length > 0:
        try:
            value = bytes(deserializer.read_bytes(length))
        except SerializationError as e:
            return Err(e)

    non_canonical = length_read.non_canonical if length_read.non_canonical is not None else type_read.non_canonical
    return Ok(TypeValueRead(
        type_value=TypeValue(type_read.value, value),
        size=type_read.size + length_read.size + length,
        non_canonical=non_canonical,
    ))
