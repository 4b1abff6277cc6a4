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

from yamf.exceptions import HashNotFoundError, YamfError
from yamf.hash import Hash, HashFactory, HashRegistry, hash_equal, hash_to_type_value
from yamf.serialization import (
    Deserializer,
    NonCanonicalError,
    OutOfDataError,
    SerializationError,
    Serializer,
    ValueTooBigError,
    WriteError,
)
from yamf.type_value import TypeValue, get_max_value_size, reset_max_value_size, set_max_value_size
from yamf.varu64 import VarU64
from yamf.version import __version__

__all__ = [
    '__version__',
    'YamfError',
    'HashNotFoundError',
    'Hash',
    'HashFactory',
    'HashRegistry',
    'hash_equal',
    'hash_to_type_value',
    'Serializer',
    'Deserializer',
    'SerializationError',
    'OutOfDataError',
    'NonCanonicalError',
    'ValueTooBigError',
    'WriteError',
    'TypeValue',
    'get_max_value_size',
    'set_max_value_size',
    'reset_max_value_size',
    'VarU64',
]
