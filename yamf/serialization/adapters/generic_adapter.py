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

"""
Base classes for adapters: a sink or source that wraps another one (`inner`) and transforms the bytes on the way.

Adapters forward their lifecycle (position, emptiness, finalization) to `inner` and leave the byte transformation
to subclasses. They can be used as context managers, a deserializer adapter then checks on a clean exit that its
input was fully consumed:

>>> from yamf.serialization.adapters import HexDeserializer
>>> with HexDeserializer(Deserializer.build_bytes_deserializer(b'0102')) as de:
...     first = de.read_byte()
Traceback (most recent call last):
    ...
ValueError: trailing data
"""

from types import TracebackType
from typing import Generic, Optional, TypeVar

from typing_extensions import Self, override

from yamf.serialization.deserializer import Deserializer
from yamf.serialization.serializer import Serializer

from ..types import Buffer

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class GenericSerializerAdapter(Serializer, Generic[S]):
    inner: S

    def __init__(self, serializer: S) -> None:
        self.inner = serializer

    @override
    def finalize(self) -> Buffer:
        return self.inner.finalize()

    @override
    def cur_pos(self) -> int:
        return self.inner.cur_pos()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        # the sink is left as is, the result is only available through finalize()
        return None


class GenericDeserializerAdapter(Deserializer, Generic[D]):
    inner: D

    def __init__(self, deserializer: D) -> None:
        self.inner = deserializer

    @override
    def finalize(self) -> None:
        self.inner.finalize()

    @override
    def is_empty(self) -> bool:
        return self.inner.is_empty()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        if exc_type is None:
            self.finalize()
