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
Hashes are identified on the wire by a numeric type, a digest travels as a `TypeValue` of that type. A typical use
looks like this:

    registry = HashRegistry()
    blake2b.register(registry)

    h = registry.type_value_to_hash(received).unwrap_or_raise()
    h.update(data)
    if not hash_equal(h, received):
        ...

Nothing is registered by default, each component that needs lookups gets the registry it should use.
"""

from typing import Callable, Protocol, TypeAlias, Union, runtime_checkable

from structlog import get_logger

from yamf.exceptions import HashNotFoundError
from yamf.serialization.encoding.varu64 import MAX_VARU64
from yamf.serialization.types import Buffer
from yamf.type_value import TypeValue
from yamf.utils.result import Err, Ok, OkErr, Result
from yamf.utils.rwlock import ReadWriteLock

logger = get_logger()


@runtime_checkable
class Hash(Protocol):
    """ A streaming hash function instance.

    `digest()` must not change the state, it can be called any number of times and `update()` can be called after it.
    """

    @property
    def hash_type(self) -> int:
        ...

    def update(self, data: Buffer) -> None:
        ...

    def digest(self) -> bytes:
        ...


# a factory either returns the new instance or a `Result` with it
HashFactory: TypeAlias = Callable[[], Union[Hash, Result[Hash, Exception]]]


class HashRegistry:
    """ Table of hash factories indexed by hash type.

    Any number of threads can look up factories at the same time, registering is exclusive. Instances created by
    the registry aren't kept by it, they belong to the caller.
    """

    def __init__(self) -> None:
        self.log = logger.new()
        self._lock = ReadWriteLock()
        self._factories: dict[int, HashFactory] = {}

    def register(self, hash_type: int, factory: HashFactory) -> None:
        """Register `factory` for `hash_type`, replacing the previous one if any."""
        if not 0 <= hash_type <= MAX_VARU64:
            raise ValueError(f'{hash_type} is not a valid hash type')
        with self._lock.write_locked():
            replaced = hash_type in self._factories
            self._factories[hash_type] = factory
        if replaced:
            self.log.info('hash factory replaced', hash_type=hash_type)
        else:
            self.log.debug('hash factory registered', hash_type=hash_type)

    def __contains__(self, hash_type: int) -> bool:
        with self._lock.read_locked():
            return hash_type in self._factories

    def registered_types(self) -> list[int]:
        with self._lock.read_locked():
            return sorted(self._factories)

    def create(self, hash_type: int) -> Result[Hash, Exception]:
        """ Build a new instance of the hash registered for `hash_type`.

        Returns `Err(HashNotFoundError)` when nothing is registered. Errors from the factory are returned as they are,
        whether it raised them or returned them in an `Err`.
        """
        with self._lock.read_locked():
            factory = self._factories.get(hash_type)
        if factory is None:
            return Err(HashNotFoundError(hash_type))
        try:
            created = factory()
        except Exception as e:
            return Err(e)
        if isinstance(created, OkErr):
            return created
        return Ok(created)

    def type_value_to_hash(self, type_value: TypeValue) -> Result[Hash, Exception]:
        """New instance of the hash named by the type of `type_value`, the value itself is not used."""
        return self.create(type_value.type)


def hash_to_type_value(h: Hash) -> TypeValue:
    """`TypeValue` holding the current digest of `h`."""
    return TypeValue(h.hash_type, h.digest())


def hash_equal(h: Hash, type_value: TypeValue) -> bool:
    """Whether `type_value` holds the type and the current digest of `h`."""
    return h.hash_type == type_value.type and h.digest() == bytes(type_value.value)


__all__ = [
    'Hash',
    'HashFactory',
    'HashRegistry',
    'hash_to_type_value',
    'hash_equal',
]
