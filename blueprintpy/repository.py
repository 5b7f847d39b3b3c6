from __future__ import annotations
from typing import Any, Dict, Never, Tuple

from .cache import Cache
from .core import Blueprint, from_result, succeed
from .domain import Tag, TagId, TagName
from .option import NONE, Option, Some
from .ref import Ref
from .result import Failure, Result, Success

_Store = Tuple[Dict[TagId, TagName], int]


class TagRepositoryError(Exception):
    pass


class DuplicateTagName(TagRepositoryError):
    def __init__(self, name: TagName):
        super().__init__(f"Tag named {name!r} already exists"); self.name = name


class TagNotFound(TagRepositoryError):
    def __init__(self, tag_id: TagId):
        super().__init__(f"Tag #{tag_id} not found"); self.tag_id = tag_id


class InMemoryTagRepository:
    """Tag store kept in memory, read through a cache.

    Ids are assigned sequentially starting at 1 and are never reused.
    ``find`` checks the cache first and fills it on a miss; ``delete``
    drops the cache entry before removing the tag.
    """
    def __init__(self, ref: Ref[_Store], cache: Cache[TagId, TagName]):
        self._ref = ref
        self._cache = cache

    @staticmethod
    def make(cache: Cache[TagId, TagName]) -> Blueprint[Any, Never, "InMemoryTagRepository"]:
        init: _Store = ({}, 0)
        return Ref.make(init).map(lambda ref: InMemoryTagRepository(ref, cache))

    def create(self, name: TagName) -> Blueprint[Any, DuplicateTagName, TagId]:
        def step(store: _Store) -> Tuple[Result[DuplicateTagName, TagId], _Store]:
            db, last_id = store
            if name in db.values():
                return Failure(DuplicateTagName(name)), store
            tag_id = TagId(last_id + 1)
            return Success(tag_id), ({**db, tag_id: name}, last_id + 1)

        return self._ref.modify(step).flat_map(from_result)

    def find(self, tag_id: TagId) -> Blueprint[Any, Never, Option[Tag]]:
        def from_store(store: _Store) -> Blueprint[Any, Never, Option[TagName]]:
            db, _ = store
            if tag_id in db:
                name = db[tag_id]
                return self._cache.set(tag_id, name).as_(Some(name))
            return succeed(NONE)

        def on_cache(hit: Option[TagName]) -> Blueprint[Any, Never, Option[TagName]]:
            if hit.is_some():
                return succeed(hit)
            return self._ref.get().flat_map(from_store)

        return self._cache.get(tag_id).flat_map(on_cache).map(lambda found: found.map(lambda name: Tag(tag_id, name)))

    def delete(self, tag_id: TagId) -> Blueprint[Any, TagNotFound, None]:
        def step(store: _Store) -> Tuple[Result[TagNotFound, None], _Store]:
            db, last_id = store
            if tag_id not in db:
                return Failure(TagNotFound(tag_id)), store
            return Success(None), ({k: v for k, v in db.items() if k != tag_id}, last_id)

        return self._cache.unset(tag_id).zip_right(self._ref.modify(step)).flat_map(from_result)
