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
BLAKE2b with a 64 byte digest, registered as hash type 0.

>>> h = new()
>>> h.update(b'abc')
>>> h.digest().hex()[:16]
'ba80a53f981c4d0d'
>>> len(h.digest()), h.hash_type
(64, 0)
"""

import hashlib

from yamf.hash import HashRegistry
from yamf.serialization.types import Buffer

BLAKE2B_TYPE = 0
DIGEST_LENGTH = 64


class Blake2bHash:
    __slots__ = ('_hash',)

    def __init__(self) -> None:
        self._hash = hashlib.blake2b(digest_size=DIGEST_LENGTH)

    @property
    def hash_type(self) -> int:
        return BLAKE2B_TYPE

    def update(self, data: Buffer) -> None:
        self._hash.update(data)

    def digest(self) -> bytes:
        return self._hash.digest()


def new() -> Blake2bHash:
    return Blake2bHash()


def register(registry: HashRegistry) -> None:
    """Make `registry` create `Blake2bHash` instances for `BLAKE2B_TYPE`."""
    registry.register(BLAKE2B_TYPE, new)
