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

from yamf.serialization.exceptions import SerializationError


class YamfError(Exception):
    """Base class for exceptions in yamf that aren't about the wire format."""
    pass


class HashNotFoundError(YamfError):
    """Raised when no hash constructor is registered for a type."""

    def __init__(self, hash_type: int) -> None:
        super().__init__(f'hash type {hash_type} not found')
        self.hash_type = hash_type


__all__ = [
    'YamfError',
    'HashNotFoundError',
    'SerializationError',
]
