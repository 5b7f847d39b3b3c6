from __future__ import annotations
from dataclasses import dataclass
from typing import NewType

# Distinct id and name types so a TagId is never passed where a plain int is meant
TagId = NewType("TagId", int)
TagName = NewType("TagName", str)


@dataclass(frozen=True)
class Tag:
    id: TagId
    name: TagName

    @staticmethod
    def from_int(n: int) -> "Tag":
        return Tag(TagId(n), TagName(f"Tag #{n}"))
