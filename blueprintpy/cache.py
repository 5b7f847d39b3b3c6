from __future__ import annotations
from typing import Any, Dict, Generic, Never, Protocol, Tuple, TypeVar

from .core import Blueprint, unit
from .logger import Logger
from .option import NONE, Option, Some
from .ref import Ref

K = TypeVar("K")
V = TypeVar("V")

_State = Tuple[Dict[Any, Any], Tuple[Any, ...]]


class Cache(Protocol[K, V]):
    def get(self, key: K) -> Blueprint[Any, Never, Option[V]]: ...
    def set(self, key: K, value: V) -> Blueprint[Any, Never, None]: ...
    def unset(self, key: K) -> Blueprint[Any, Never, None]: ...


class BoundedCache(Generic[K, V]):
    """In-memory cache keeping at most ``capacity`` entries.

    Eviction is FIFO over first insertion: when a key that is not yet cached
    arrives and the cache is full, the oldest inserted key is dropped. Reads
    never change the order and overwriting a cached key keeps its position.

    The mapping and the insertion order live together in one :class:`Ref`
    as an immutable ``(dict, tuple)`` snapshot, so every operation is a
    single atomic ``modify`` and concurrent callers never observe a
    half-applied update.

    Args:
        ref: Cell holding the ``(mapping, order)`` state
        logger: Logger receiving hit/miss and eviction messages
        capacity: Maximum number of entries (must be >= 1)

    Example:
        ```python
        cache = Runtime.default.run(BoundedCache.make(ConsoleLogger(level="DEBUG")))
        Runtime.default.run(cache.set(TagId(1), TagName("alpha")))
        Runtime.default.run(cache.get(TagId(1)))  # Some(value='alpha')
        ```
    """
    def __init__(self, ref: Ref[_State], logger: Logger, capacity: int = 5):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._ref = ref
        self._log = logger
        self.capacity = capacity

    @staticmethod
    def make(logger: Logger, capacity: int = 5) -> Blueprint[Any, Never, "BoundedCache[K, V]"]:
        init: _State = ({}, ())
        return Ref.make(init).map(lambda ref: BoundedCache(ref, logger, capacity))

    def get(self, key: K) -> Blueprint[Any, Never, Option[V]]:
        def lookup(state: _State):
            cache, _ = state
            return Some(cache[key]) if key in cache else NONE

        return (
            self._log.debug(f"Getting key #{key}")
            .zip_right(self._ref.get().map(lookup))
            .tap(lambda res: self._log.info("hit!" if res.is_some() else "miss!"))
        )

    def set(self, key: K, value: V) -> Blueprint[Any, Never, None]:
        def step(state: _State) -> Tuple[Option[K], _State]:
            cache, keys = state
            if key in cache:
                return NONE, ({**cache, key: value}, keys)
            evicted: Option[K] = NONE
            if len(keys) >= self.capacity:
                oldest, keys = keys[0], keys[1:]
                cache = {k: v for k, v in cache.items() if k != oldest}
                evicted = Some(oldest)
            return evicted, ({**cache, key: value}, keys + (key,))

        def report(evicted: Option[K]) -> Blueprint[Any, Never, None]:
            if evicted.is_some():
                return self._log.debug(f"Removing key #{evicted.value}")  # type: ignore[attr-defined]
            return unit()

        return (
            self._log.debug(f"Setting key #{key}")
            .zip_right(self._ref.modify(step))
            .flat_map(report)
        )

    def unset(self, key: K) -> Blueprint[Any, Never, None]:
        def step(state: _State) -> Tuple[None, _State]:
            cache, keys = state
            if key not in cache:
                return None, state
            rest = {k: v for k, v in cache.items() if k != key}
            return None, (rest, tuple(k for k in keys if k != key))

        return self._log.debug(f"Unsetting key #{key}").zip_right(self._ref.modify(step))

    def snapshot(self) -> Blueprint[Any, Never, _State]:
        return self._ref.get().map(lambda state: (dict(state[0]), tuple(state[1])))
