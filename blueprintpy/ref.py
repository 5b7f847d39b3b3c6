from __future__ import annotations
import threading
from typing import Any, Callable, Generic, Never, Tuple, TypeVar

from .core import Blueprint, sync

T = TypeVar("T")
R = TypeVar("R")


class Ref(Generic[T]):
    """Mutable cell whose reads and updates are atomic across threads.

    Every operation returns a blueprint; the cell is only touched when that
    blueprint is evaluated. Update functions run while the lock is held and
    are called exactly once per evaluation, so they must not block or call
    back into the same Ref.
    """
    def __init__(self, initial: T):
        self._value: T = initial
        self._lock = threading.Lock()

    @staticmethod
    def make(initial: T) -> Blueprint[Any, Never, "Ref[T]"]:
        return sync(lambda: Ref(initial))

    def get(self) -> Blueprint[Any, Never, T]:
        def read() -> T:
            with self._lock:
                return self._value
        return sync(read)

    def set(self, v: T) -> Blueprint[Any, Never, None]:
        def write() -> None:
            with self._lock:
                self._value = v
        return sync(write)

    def update(self, f: Callable[[T], T]) -> Blueprint[Any, Never, T]:
        def upd() -> T:
            with self._lock:
                self._value = f(self._value)
                return self._value
        return sync(upd)

    def get_and_update(self, f: Callable[[T], T]) -> Blueprint[Any, Never, T]:
        def upd() -> T:
            with self._lock:
                old = self._value
                self._value = f(old)
                return old
        return sync(upd)

    def modify(self, f: Callable[[T], Tuple[R, T]]) -> Blueprint[Any, Never, R]:
        def mod() -> R:
            with self._lock:
                out, new_v = f(self._value)
                self._value = new_v
                return out
        return sync(mod)
