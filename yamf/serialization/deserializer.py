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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, BinaryIO

from typing_extensions import Self

from .types import Buffer

if TYPE_CHECKING:
    from .adapters import HexDeserializer
    from .bytes_deserializer import BytesDeserializer
    from .stream import StreamDeserializer


class Deserializer(ABC):
    """ A byte source.

    Reading past the end of the data raises `OutOfDataError`, which is how a truncated value is told apart from a
    clean end of input (`is_empty()` before starting to read).
    """

    def finalize(self) -> None:
        """Check that all bytes were consumed, the deserializer cannot be used after this."""
        raise TypeError('this deserializer does not support finalization')

    @staticmethod
    def build_bytes_deserializer(data: Buffer) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data)

    @staticmethod
    def build_stream_deserializer(stream: BinaryIO) -> StreamDeserializer:
        from .stream import StreamDeserializer
        return StreamDeserializer(stream)

    @staticmethod
    def build_hex_deserializer(text: str | Buffer) -> HexDeserializer[BytesDeserializer]:
        """Deserializer that decodes the given hex text on the fly."""
        from .adapters import HexDeserializer
        from .bytes_deserializer import BytesDeserializer
        from .exceptions import SerializationError
        if isinstance(text, str):
            try:
                text = text.encode('ascii')
            except UnicodeEncodeError as e:
                raise SerializationError('invalid hex data') from e
        return HexDeserializer(BytesDeserializer(text))

    @abstractmethod
    def is_empty(self) -> bool:
        """Whether there are no more bytes, may block on a stream until it knows."""
        raise NotImplementedError

    @abstractmethod
    def peek_byte(self) -> int:
        """Next byte as an unsigned int, without consuming it."""
        raise NotImplementedError

    @abstractmethod
    def peek_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        """Next `n` bytes without consuming them, with exact=False fewer bytes are returned at the end of the input."""
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, n: int, *, exact: bool = True) -> Buffer:
        """Consume `n` bytes, or up to `n` bytes with exact=False."""
        raise NotImplementedError

    @abstractmethod
    def read_all(self) -> Buffer:
        """Consume everything that is left."""
        raise NotImplementedError

    def with_hex(self) -> HexDeserializer[Self]:
        """Helper method to read the current deserializer as hex text."""
        from .adapters import HexDeserializer
        return HexDeserializer(self)
