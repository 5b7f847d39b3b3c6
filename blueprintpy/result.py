from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from .either import Either, Left, Right

E = TypeVar("E")
A = TypeVar("A")
B = TypeVar("B")
E2 = TypeVar("E2")


class Result(Generic[E, A]):
    """Outcome of evaluating a blueprint: ``Success(value)`` or ``Failure(error)``.

    There is no third variant. Unexpected faults are raised, never stored.
    """
    def is_success(self) -> bool: raise NotImplementedError
    def is_failure(self) -> bool: return not self.is_success()

    def map(self, f: Callable[[A], B]) -> "Result[E, B]":
        if self.is_success():
            return Success(f(self.value))  # type: ignore[attr-defined]
        return self  # type: ignore[return-value]

    def flat_map(self, f: Callable[[A], "Result[E, B]"]) -> "Result[E, B]":
        if self.is_success():
            return f(self.value)  # type: ignore[attr-defined]
        return self  # type: ignore[return-value]

    def map_error(self, f: Callable[[E], E2]) -> "Result[E2, A]":
        if self.is_failure():
            return Failure(f(self.error))  # type: ignore[attr-defined]
        return self  # type: ignore[return-value]

    def fold(self, on_failure: Callable[[E], B], on_success: Callable[[A], B]) -> B:
        if self.is_success():
            return on_success(self.value)  # type: ignore[attr-defined]
        return on_failure(self.error)  # type: ignore[attr-defined]

    def get_or_else(self, default: A) -> A:
        return self.value if self.is_success() else default  # type: ignore[attr-defined]


@dataclass(frozen=True)
class Success(Result[E, A]):
    value: A
    def is_success(self) -> bool: return True


@dataclass(frozen=True)
class Failure(Result[E, A]):
    error: E
    def is_success(self) -> bool: return False


def from_either(e: Either[E, A]) -> Result[E, A]:
    if isinstance(e, Left):
        return Failure(e.error)
    return Success(e.value)  # type: ignore[attr-defined]


def to_either(r: Result[E, A]) -> Either[E, A]:
    if isinstance(r, Failure):
        return Left(r.error)
    return Right(r.value)  # type: ignore[attr-defined]
