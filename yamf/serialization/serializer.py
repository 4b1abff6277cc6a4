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
    from .adapters import HexSerializer
    from .bytes_serializer import BytesSerializer
    from .stream import StreamSerializer


class Serializer(ABC):
    """ A byte sink.

    Implementations that cannot accept every byte raise `WriteError`, and `cur_pos()` must already account for the
    bytes accepted before the failure.
    """

    def finalize(self) -> Buffer:
        """Get the resulting byte sequence, the serializer cannot be reused after this."""
        raise TypeError('this serializer does not support finalization')

    @abstractmethod
    def cur_pos(self) -> int:
        """Number of bytes accepted so far."""
        raise NotImplementedError

    @abstractmethod
    def write_byte(self, data: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, data: Buffer) -> None:
        """Write all of `data` or raise `WriteError`."""
        raise NotImplementedError

    def with_hex(self) -> HexSerializer[Self]:
        """Helper method to wrap the current serializer with HexSerializer."""
        from .adapters import HexSerializer
        return HexSerializer(self)

    @staticmethod
    def build_bytes_serializer() -> BytesSerializer:
        from .bytes_serializer import BytesSerializer
        return BytesSerializer()

    @staticmethod
    def build_stream_serializer(stream: BinaryIO) -> StreamSerializer:
        from .stream import StreamSerializer
        return StreamSerializer(stream)
