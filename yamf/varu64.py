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
>>> v = VarU64(65535)
>>> str(v), v.to_bytes().hex(), v.to_text()
('65535', 'f9ffff', 'f9ffff')
>>> VarU64.from_text('f9ffff') == v
True
>>> VarU64.from_bytes(bytes.fromhex('f82a')).value
42
>>> VarU64.from_bytes(bytes.fromhex('f82a'), strict=True)
Traceback (most recent call last):
    ...
yamf.serialization.exceptions.NonCanonicalError: non-canonical encoding: 42 uses 2 bytes instead of 1
"""

from __future__ import annotations

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from yamf.serialization import Deserializer, SerializationError, Serializer
from yamf.serialization.encoding.varu64 import MAX_VARU64, VarU64Read, decode_varu64, encode_varu64
from yamf.serialization.types import Buffer
from yamf.utils.result import Result


class VarU64:
    """An unsigned 64-bit integer that knows how to encode and decode itself as VarU64."""

    __slots__ = ('_value',)

    def __init__(self, value: int = 0) -> None:
        self.value = value

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, value: int) -> None:
        if not 0 <= value <= MAX_VARU64:
            raise ValueError(f'{value} is not an unsigned 64-bit integer')
        self._value = value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f'VarU64({self._value})'

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, VarU64):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def write_to(self, serializer: Serializer) -> int:
        return encode_varu64(serializer, self._value)

    def read_from(self, deserializer: Deserializer) -> Result[VarU64Read, SerializationError]:
        """Decode from `deserializer`, on success the value of this instance is replaced."""
        result = decode_varu64(deserializer)
        if result.is_ok():
            self._value = result.unwrap().value
        return result

    def to_bytes(self) -> bytes:
        serializer = Serializer.build_bytes_serializer()
        self.write_to(serializer)
        return bytes(serializer.finalize())

    def to_text(self) -> str:
        return self.to_bytes().hex()

    @classmethod
    def from_bytes(cls, data: Buffer, *, strict: bool = False) -> VarU64:
        """ Decode from the start of `data`, trailing bytes are ignored.

        A non-canonical encoding is accepted unless `strict=True`.
        """
        return cls._read_strict(Deserializer.build_bytes_deserializer(data), strict=strict)

    @classmethod
    def from_text(cls, text: str | Buffer, *, strict: bool = False) -> VarU64:
        return cls._read_strict(Deserializer.build_hex_deserializer(text), strict=strict)

    @classmethod
    def _read_strict(cls, deserializer: Deserializer, *, strict: bool) -> VarU64:
        read = decode_varu64(deserializer).unwrap_or_raise()
        if strict and read.non_canonical is not None:
            raise read.non_canonical
        return cls(read.value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        # validates from an int, an instance or the hex text, serializes to the hex text in JSON
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(_serialize, info_arg=True),
        )

    @classmethod
    def _validate(cls, value: Any) -> VarU64:
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, (str, bytes)):
            return cls.from_text(value)
        raise ValueError(f'expected an int, a VarU64 or its hex text, got {type(value).__name__}')


def _serialize(value: VarU64, info: core_schema.SerializationInfo) -> VarU64 | str:
    return value.to_text() if info.mode_is_json() else value
