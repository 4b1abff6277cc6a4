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
`TypeValue` pairs a numeric type identifier with an opaque byte value, following the Simple Type-Length-Value format:
https://github.com/AljoschaMeyer/stlv

>>> tv = TypeValue(1, b'test')
>>> tv.to_bytes().hex()
'010474657374'
>>> tv.to_text()
'010474657374'
>>> TypeValue.from_text('010474657374') == tv
True
>>> print(tv)
{Type: 1, Value: 74657374}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from yamf.serialization import Deserializer, SerializationError, Serializer
from yamf.serialization.types import Buffer
from yamf.utils.result import Result

if TYPE_CHECKING:
    from yamf.serialization.encoding.type_value import TypeValueRead

# process-wide ceiling for decoded value sizes, lazily initialized from the settings
_max_value_size: Optional[int] = None


def get_max_value_size() -> int:
    """ Maximum value size accepted when decoding, in bytes. Zero or less means there's no limit.

    Unless `set_max_value_size()` was called it's the `MAX_VALUE_SIZE` setting.
    """
    global _max_value_size
    if _max_value_size is None:
        from yamf.conf.get_settings import get_global_settings
        _max_value_size = get_global_settings().MAX_VALUE_SIZE
    return _max_value_size


def set_max_value_size(max_value_size: int) -> None:
    """ Change the maximum value size for every decoder in the process. Zero or less removes the limit.

    This isn't synchronized with running decoders, it's meant to be set during start-up.
    """
    global _max_value_size
    _max_value_size = int(max_value_size)


def reset_max_value_size() -> None:
    """Go back to the value from the settings."""
    global _max_value_size
    _max_value_size = None


@dataclass
class TypeValue:
    type: int = 0
    value: bytes = b''

    def __str__(self) -> str:
        return f'{{Type: {self.type}, Value: {self.value.hex()}}}'

    def equal(self, other: TypeValue) -> bool:
        return self.type == other.type and bytes(self.value) == bytes(other.value)

    def write_to(self, serializer: Serializer) -> int:
        """Encode into `serializer` and return the number of bytes written."""
        from yamf.serialization.encoding.type_value import encode_type_value
        return encode_type_value(serializer, self)

    def read_from(self, deserializer: Deserializer) -> Result[TypeValueRead, SerializationError]:
        """Decode from `deserializer`, on success the type and value of this instance are replaced."""
        from yamf.serialization.encoding.type_value import decode_type_value
        result = decode_type_value(deserializer)
        if result.is_ok():
            read = result.unwrap()
            self.type = read.type_value.type
            self.value = read.type_value.value
        return result

    def to_bytes(self) -> bytes:
        serializer = Serializer.build_bytes_serializer()
        self.write_to(serializer)
        return bytes(serializer.finalize())

    def to_text(self) -> str:
        """Lowercase hex of the binary encoding."""
        serializer = Serializer.build_bytes_serializer().with_hex()
        self.write_to(serializer)
        return bytes(serializer.finalize()).decode('ascii')

    @classmethod
    def from_bytes(cls, data: Buffer, *, strict: bool = False) -> TypeValue:
        """ Decode a frame from the start of `data`, bytes after the frame are ignored.

        Raises `SerializationError` subclasses on failure. A non-canonical encoding is accepted unless `strict=True`,
        in which case the `NonCanonicalError` is raised.
        """
        return cls._read_strict(Deserializer.build_bytes_deserializer(data), strict=strict)

    @classmethod
    def from_text(cls, text: str | Buffer, *, strict: bool = False) -> TypeValue:
        """Same as `from_bytes` but decoding the hex text form."""
        return cls._read_strict(Deserializer.build_hex_deserializer(text), strict=strict)

    @classmethod
    def _read_strict(cls, deserializer: Deserializer, *, strict: bool) -> TypeValue:
        type_value = cls()
        read = type_value.read_from(deserializer).unwrap_or_raise()
        if strict and read.non_canonical is not None:
            raise read.non_canonical
        return type_value

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        # validates from an instance or its text form, serializes to the text form in JSON
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(_serialize, info_arg=True),
        )

    @classmethod
    def _validate(cls, value: Any) -> TypeValue:
        if isinstance(value, cls):
            return value
        if isinstance(value, (str, bytes)):
            return cls.from_text(value)
        raise ValueError(f'expected a TypeValue or its hex text, got {type(value).__name__}')


def _serialize(type_value: TypeValue, info: core_schema.SerializationInfo) -> TypeValue | str:
    return type_value.to_text() if info.mode_is_json() else type_value
