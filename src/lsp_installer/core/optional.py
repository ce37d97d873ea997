"""Present-or-absent values."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from lsp_installer.core.result import Failure, Success

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Present(Generic[T]):
    value: T

    def is_present(self) -> bool:
        return True

    def get_or_none(self) -> T:
        return self.value

    def get_or_else(self, default: object) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> Present[U]:
        return Present(fn(self.value))

    def if_present(self, fn: Callable[[T], object]) -> Present[T]:
        fn(self.value)
        return self

    def ok_or(self, error: object) -> Success[T]:
        return Success(self.value)


@dataclass(frozen=True, slots=True)
class Absent:
    def is_present(self) -> bool:
        return False

    def get_or_none(self) -> None:
        return None

    def get_or_else(self, default: U) -> U:
        return default

    def map(self, fn: Callable[[Any], Any]) -> Absent:
        return self

    def if_present(self, fn: Callable[[Any], object]) -> Absent:
        return self

    def ok_or(self, error: E) -> Failure[E]:
        return Failure(error)


Optional = Present[T] | Absent

_ABSENT = Absent()


def of(value: T) -> Present[T]:
    if value is None:
        raise ValueError("Optional.of() requires a non-None value; use of_nullable().")
    return Present(value)


def of_nullable(value: T | None) -> Optional[T]:
    return _ABSENT if value is None else Present(value)


def empty() -> Absent:
    return _ABSENT
