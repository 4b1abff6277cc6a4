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

r"""
Adapters that translate between binary data and its textual hex form on the fly.

The hex side is always lowercase with no separators when writing, both cases are accepted when reading.

>>> se = Serializer.build_bytes_serializer().with_hex()
>>> se.write_bytes(b'\x01\x04')
>>> se.write_byte(0xff)
>>> se.cur_pos()
3
>>> bytes(se.finalize())
b'0104ff'

>>> de = Deserializer.build_bytes_deserializer(b'0104FF').with_hex()
>>> de.read_byte()
1
>>> bytes(de.read_bytes(2))
b'\x04\xff'
>>> de.is_empty()
True

A lone trailing hex digit counts as missing data:

>>> de = Deserializer.build_bytes_deserializer(b'010').with_hex()
>>> de.read_byte()
1
>>> try:
...     de.read_byte()
... except OutOfDataError as e:
...     print(e)
incomplete hex digit pair
"""

import binascii
from typing import TypeVar

from typing_extensions import override

from yamf.serialization.deserializer import Deserializer
from yamf.serialization.exceptions import OutOfDataError, SerializationError, WriteError
from yamf.serialization.serializer import Serializer

from ..types import Buffer
from .generic_adapter import GenericDeserializerAdapter, GenericSerializerAdapter

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


def _unhexlify(text: Buffer) -> bytes:
    try:
        return binascii.unhexlify(bytes(memoryview(text)))
    except binascii.Error as e:
        raise SerializationError('invalid hex data') from e


class HexSerializer(GenericSerializerAdapter[S]):
    """Writes the hex text of every byte to the inner serializer, `cur_pos()` counts binary bytes."""

    def __init__(self, serializer: S) -> None:
        super().__init__(serializer)
        self._pos = 0

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        self.write_bytes(int.to_bytes(data, length=1, byteorder='big'))

    @override
    def write_bytes(self, data: Buffer) -> None:
        text = binascii.hexlify(memoryview(data))
        try:
            self.inner.write_bytes(text)
        except WriteError as e:
            # only whole digit pairs represent bytes that made it through
            self._pos += e.written // 2
            raise WriteError(str(e), written=e.written // 2) from e
        self._pos += len(text) // 2


class HexDeserializer(GenericDeserializerAdapter[D]):
    """Reads hex text from the inner deserializer and returns the decoded bytes."""

    @override
    def peek_byte(self) -> int:
        return self.peek_bytes(1)[0]

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> bytes:
        if n < 0:
            raise ValueError('value cannot be negative')
        text = bytes(memoryview(self.inner.peek_bytes(2 * n, exact=False)))
        if exact and len(text) < 2 * n:
            raise OutOfDataError('incomplete hex digit pair' if len(text) % 2 else 'not enough bytes to read')
        return _unhexlify(text[:len(text) - len(text) % 2])

    @override
    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> bytes:
        data = self.peek_bytes(n, exact=exact)
        self.inner.read_bytes(2 * len(data))
        return data

    @override
    def read_all(self) -> bytes:
        text = bytes(memoryview(self.inner.read_all()))
        if len(text) % 2:
            raise OutOfDataError('incomplete hex digit pair')
        return _unhexlify(text)
