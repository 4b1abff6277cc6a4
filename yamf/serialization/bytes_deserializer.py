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

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import OutOfDataError
from .types import Buffer


class BytesDeserializer(Deserializer):
    """ Deserializer over an in-memory byte sequence.

    The data is never copied: reads return views into it and only an offset moves forward. Callers that keep the
    returned views around must copy them if the underlying buffer can change.
    """

    def __init__(self, data: Buffer) -> None:
        self._data = memoryview(data).cast('B')
        self._offset = 0

    def consumed(self) -> int:
        """Number of bytes read so far."""
        return self._offset

    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _take(self, n: int, *, exact: bool, consume: bool) -> memoryview:
        if n < 0:
            raise ValueError('value cannot be negative')
        if exact and self.remaining() < n:
            raise OutOfDataError('not enough bytes to read')
        view = self._data[self._offset:self._offset + n]
        if consume:
            self._offset += len(view)
        return view

    @override
    def finalize(self) -> None:
        if self.remaining():
            raise ValueError('trailing data')
        del self._data

    @override
    def is_empty(self) -> bool:
        return self._offset >= len(self._data)

    @override
    def peek_byte(self) -> int:
        if self.is_empty():
            raise OutOfDataError('not enough bytes to read')
        return self._data[self._offset]

    @override
    def peek_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        return self._take(n, exact=exact, consume=False)

    @override
    def read_byte(self) -> int:
        b = self.peek_byte()
        self._offset += 1
        return b

    @override
    def read_bytes(self, n: int, *, exact: bool = True) -> memoryview:
        return self._take(n, exact=exact, consume=True)

    @override
    def read_all(self) -> memoryview:
        return self._take(self.remaining(), exact=True, consume=True)
