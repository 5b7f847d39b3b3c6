from __future__ import annotations
from typing import Tuple, TypeVar

from .context import Context
from .core import Blueprint
from .result import Failure, Success

A = TypeVar("A")
B = TypeVar("B")


def service(t: type[A]) -> Blueprint[Context, KeyError, A]:
    def run(ctx: Context):
        try:
            return Success(ctx.get(t))
        except KeyError as e:
            # Missing service is a typed failure, not a fault
            return Failure(e)

    return Blueprint(run)


def services(t1: type[A], t2: type[B]) -> Blueprint[Context, KeyError, Tuple[A, B]]:
    return service(t1).zip(service(t2))
