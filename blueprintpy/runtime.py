from __future__ import annotations
from typing import Any, ClassVar, Optional, TypeVar

from .core import Blueprint, die
from .logger import ConsoleLogger, Logger
from .result import Failure, Result

E = TypeVar("E"); A = TypeVar("A")


class Runtime:
    """Forces blueprints on the calling thread.

    ``run`` is the program boundary: it returns the success value or raises
    the failure as a fault. Blueprints are run with the runtime's ``base``
    environment, which is ``None`` unless given, so anything that still
    needs an environment should be ``provide``-d first.

    Args:
        base: Environment passed to every evaluated blueprint
        logger: Logger told about failures escalated by ``run``

    Example:
        ```python
        Runtime.default.run(succeed(42))  # 42
        Runtime.default.run(fail(ValueError("boom")))  # raises ValueError
        ```
    """
    default: ClassVar["Runtime"]

    def __init__(self, base: Any = None, logger: Optional[Logger] = None):
        self.base = base
        self.logger: Logger = logger or ConsoleLogger("blueprintpy.runtime", level="ERROR")

    def evaluate(self, bp: Blueprint[Any, E, A]) -> Result[E, A]:
        return bp.evaluate(self.base)

    def run(self, bp: Blueprint[Any, E, A]) -> A:
        res = self.evaluate(bp)
        if isinstance(res, Failure):
            self.logger.error(f"Unhandled failure: {res.error!r}").evaluate(None)
            die(res.error)
        return res.value  # type: ignore[attr-defined]


Runtime.default = Runtime()
