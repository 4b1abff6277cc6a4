#  Copyright 2025 Hathor Labs
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#  http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

"""
A small Rust-like `Result` type, used by the decoders to return failures as values.

>>> def half(n):
...     return Ok(n // 2) if n % 2 == 0 else Err('odd')
>>> half(4)
Ok(2)
>>> half(3)
Err('odd')
>>> half(4).map(str).unwrap()
'2'
>>> half(3).unwrap_or(-1)
-1

Inside a function decorated with `propagate_result`, `unwrap_or_propagate()` returns early with the `Err`:

>>> @propagate_result
... def quarter(n):
...     return half(half(n).unwrap_or_propagate())
>>> quarter(8), quarter(6), quarter(3)
(Ok(2), Err('odd'), Err('odd'))
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Final, Generic, Literal, NoReturn, ParamSpec, TypeAlias, TypeVar

from typing_extensions import TypeIs

T = TypeVar('T', covariant=True)  # Success type
E = TypeVar('E', covariant=True)  # Error type
U = TypeVar('U')
F = TypeVar('F')
V = TypeVar('V')
P = ParamSpec('P')


class _Outcome(Generic[V]):
    """Storage, equality and repr shared by `Ok` and `Err`, two results are equal if same variant and value."""

    __slots__ = ('_value',)
    __match_args__ = ('_value',)

    def __init__(self, value: V) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._value!r})'

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self) and self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))


class Ok(_Outcome[T]):
    """A successful result holding a value."""

    __slots__ = ()

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    def ok(self) -> T:
        return self._value

    def err(self) -> None:
        return None

    # every unwrap flavor gives the value back
    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, _default: U) -> T:
        return self._value

    def unwrap_or_raise(self) -> T:
        return self._value

    def unwrap_or_propagate(self) -> T:
        return self._value

    def unwrap_err(self) -> NoReturn:
        raise UnwrapError(self, f'unwrap_err() called on {self!r}')

    def map(self, op: Callable[[T], U]) -> Ok[U]:
        return Ok(op(self._value))

    def map_err(self, _op: Callable[[E], F]) -> Ok[T]:
        return self

    def and_then(self, op: Callable[[T], Result[U, E]]) -> Result[U, E]:
        return op(self._value)


class Err(_Outcome[E]):
    """A failed result holding an error, usually an exception instance that was not raised."""

    __slots__ = ()

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    def ok(self) -> None:
        return None

    def err(self) -> E:
        return self._value

    def unwrap(self) -> NoReturn:
        error = UnwrapError(self, f'unwrap() called on {self!r}')
        if isinstance(self._value, BaseException):
            raise error from self._value
        raise error

    def unwrap_or(self, default: U) -> U:
        return default

    def unwrap_or_raise(self) -> NoReturn:
        """Raise the contained exception itself."""
        if not isinstance(self._value, BaseException):
            raise UnwrapError(self, f'unwrap_or_raise() called on {self!r}, which does not hold an exception')
        raise self._value

    def unwrap_or_propagate(self) -> NoReturn:
        """Return this `Err` from the closest function decorated with `propagate_result`."""
        raise _ResultPropagationException(self)

    def unwrap_err(self) -> E:
        return self._value

    def map(self, _op: Callable[[T], U]) -> Err[E]:
        return self

    def map_err(self, op: Callable[[E], F]) -> Err[F]:
        return Err(op(self._value))

    def and_then(self, _op: Callable[[T], Result[U, E]]) -> Err[E]:
        return self


Result: TypeAlias = Ok[T] | Err[E]

# for isinstance() checks, since Result itself is a type alias
OkErr: Final = (Ok, Err)


class UnwrapError(Exception):
    """Raised by `unwrap*` calls on the wrong variant, the offending result is kept in `result`."""

    def __init__(self, result: Result[Any, Any], message: str) -> None:
        super().__init__(message)
        self.result = result


class _ResultPropagationException(Exception):
    def __init__(self, err: Err[Any]) -> None:
        super().__init__('unwrap_or_propagate() used outside of a function decorated with @propagate_result')
        self.err = err


def propagate_result(f: Callable[P, Result[T, E]]) -> Callable[P, Result[T, E]]:
    """Make `unwrap_or_propagate()` calls inside `f` return their `Err` from `f`."""
    @functools.wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, E]:
        try:
            return f(*args, **kwargs)
        except _ResultPropagationException as e:
            return e.err

    return wrapper


def is_ok(result: Result[T, E]) -> TypeIs[Ok[T]]:
    return result.is_ok()


def is_err(result: Result[T, E]) -> TypeIs[Err[E]]:
    return result.is_err()
