from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

L = TypeVar("L")
A = TypeVar("A")
B = TypeVar("B")


class Either(Generic[L, A]):
    def is_left(self) -> bool: raise NotImplementedError
    def is_right(self) -> bool: return not self.is_left()

    def map(self, f: Callable[[A], B]) -> "Either[L, B]":
        if self.is_right():
            return Right(f(self.value))  # type: ignore[attr-defined]
        return self  # type: ignore[return-value]

    def flat_map(self, f: Callable[[A], "Either[L, B]"]) -> "Either[L, B]":
        if self.is_right():
            return f(self.value)  # type: ignore[attr-defined]
        return self  # type: ignore[return-value]

    def map_left(self, f: Callable[[L], B]) -> "Either[B, A]":
        if self.is_left():
            return Left(f(self.error))  # type: ignore[attr-defined]
        return self  # type: ignore[return-value]

    def get_or_else(self, default: A) -> A:
        return self.value if self.is_right() else default  # type: ignore[attr-defined]


@dataclass(frozen=True)
class Left(Either[L, A]):
    error: L
    def is_left(self) -> bool: return True


@dataclass(frozen=True)
class Right(Either[L, A]):
    value: A
    def is_left(self) -> bool: return False
