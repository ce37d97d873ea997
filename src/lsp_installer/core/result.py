"""Success-or-failure values for expected failure paths.

Fallible operations return ``Success(value)`` or ``Failure(error)`` instead of
raising. Transforms on a Failure are never invoked.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def get_or_none(self) -> T:
        return self.value

    def err_or_none(self) -> None:
        return None

    def get_or_else(self, default: object) -> T:
        return self.value

    def get_or_raise(self) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.value))

    def map_err(self, fn: Callable[[Any], Any]) -> Success[T]:
        return self

    def and_then(self, fn: Callable[[T], Result[U, F]]) -> Result[U, F]:
        return fn(self.value)

    def on_success(self, fn: Callable[[T], object]) -> Success[T]:
        fn(self.value)
        return self

    def on_failure(self, fn: Callable[[Any], object]) -> Success[T]:
        return self


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def get_or_none(self) -> None:
        return None

    def err_or_none(self) -> E:
        return self.error

    def get_or_else(self, default: U) -> U:
        return default

    def get_or_raise(self) -> NoReturn:
        """Raise the error if it is an exception, else wrap it in RuntimeError."""
        if isinstance(self.error, BaseException):
            raise self.error
        raise RuntimeError(str(self.error))

    def map(self, fn: Callable[[Any], Any]) -> Failure[E]:
        return self

    def map_err(self, fn: Callable[[E], F]) -> Failure[F]:
        return Failure(fn(self.error))

    def and_then(self, fn: Callable[[Any], Any]) -> Failure[E]:
        return self

    def on_success(self, fn: Callable[[Any], object]) -> Failure[E]:
        return self

    def on_failure(self, fn: Callable[[E], object]) -> Failure[E]:
        fn(self.error)
        return self


Result = Success[T] | Failure[E]


def catching(fn: Callable[[], T]) -> Result[T, Exception]:
    """Run ``fn`` and capture a raised Exception as a Failure."""
    try:
        return Success(fn())
    except Exception as exc:
        return Failure(exc)
