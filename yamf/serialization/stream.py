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
Serializer and Deserializer implementations backed by binary file-like objects (files, sockets' `makefile('rb')`,
`io.BytesIO`, ...).

>>> import io
>>> out = io.BytesIO()
>>> se = Serializer.build_stream_serializer(out)
>>> se.write_bytes(b'\x01\x04test')
>>> se.cur_pos()
6
>>> out.getvalue()
b'\x01\x04test'

>>> de = Deserializer.build_stream_deserializer(io.BytesIO(b'\x01\x04test'))
>>> de.read_byte(), de.peek_byte()
(1, 4)
>>> bytes(de.read_bytes(5))
b'\x04test'
>>> de.is_empty()
True
"""

from typing import BinaryIO

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import OutOfDataError, WriteError
from .serializer import Serializer
from .types import Buffer

# upper bound for a single read() call, a bogus declared length must not turn into a huge allocation
_READ_CHUNK_SIZE = 64 * 1024


class StreamSerializer(Serializer):
    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._pos: int = 0

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def write_byte(self, data: int) -> None:
        self.write_bytes(int.to_bytes(data, length=1, byteorder='big'))

    @override
    def write_bytes(self, data: Buffer) -> None:
        view = memoryview(data).cast('B')
        written = 0
        while written < len(view):
            try:
                n = self._stream.write(view[written:])
            except OSError as e:
                raise WriteError(f'write failed: {e}', written=written) from e
            if not n:
                # a None means a non-blocking stream that would block, which we treat as a short write
                raise WriteError('short write', written=written)
            written += n
            self._pos += n


class StreamDeserializer(Deserializer):
    """ Deserializer over a readable binary stream.

    Peeked bytes are kept in a small look-ahead buffer, everything else is read from the stream on demand. A stream
    that returns no data is considered exhausted.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._pending = bytearray()
        self._eof = False

    def _fill(self, n: int) -> None:
        while len(self._pending) < n and not self._eof:
            chunk = self._stream.read(min(n - len(self._pending), _READ_CHUNK_SIZE))
            if not chunk:
                self._eof = True
                break
            self._pending += chunk

    def _consume(self, n: int) -> bytes:
        data = bytes(self._pending[:n])
        del self._pending[:n]
        return data

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise ValueError('trailing data')

    @override
    def is_empty(self) -> bool:
        self._fill(1)
        return not self._pending

    @override
    def peek_byte(self) -> int:
        self._fill(1)
        if not self._pending:
            raise OutOfDataError('not enough bytes to read')
        return self._pending[0]

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> bytes:
        if n < 0:
            raise ValueError('value cannot be negative')
        self._fill(n)
        if exact and len(self._pending) < n:
            raise OutOfDataError('not enough bytes to read')
        return bytes(self._pending[:n])

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        del self._pending[:1]
        return b

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> bytes:
        if n < 0:
            raise ValueError('value cannot be negative')
        self._fill(n)
        if exact and len(self._pending) < n:
            raise OutOfDataError('not enough bytes to read')
        return self._consume(n)

    @override
    def read_all(self) -> bytes:
        while not self._eof:
            self._fill(len(self._pending) + _READ_CHUNK_SIZE)
        return self._consume(len(self._pending))
