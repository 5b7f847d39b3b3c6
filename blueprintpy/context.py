from __future__ import annotations
from typing import Any, Dict, TypeVar

A = TypeVar("A")

class Context:
    """Type-keyed service container used as a blueprint environment.

    Context holds the services a program needs. It is immutable: adding a
    service returns a new Context, so one base environment can be shared
    and extended safely.

    Args:
        values: Optional initial services dictionary

    Example:
        ```python
        env = (Context()
               .with_service(Logger, ConsoleLogger())
               .with_service(Random, Random()))

        program = service(Random).flat_map(lambda r: r.next_int_between(1, 65))
        Runtime(env).run(program)
        ```
    """
    def __init__(self, values: Dict[type, Any] | None = None): self._values = dict(values or {})

    def get(self, t: type[A]) -> A:
        """Get a service from the context by type.

        Raises:
            KeyError: If the service type is not available
        """
        if t not in self._values: raise KeyError(f"Missing service: {t}")
        return self._values[t]

    def add(self, t: type[A], v: A) -> "Context":
        c = dict(self._values); c[t] = v; return Context(c)

    def with_service(self, t: type[A], v: A) -> "Context":
        """Convenient alias for add()."""
        return self.add(t, v)

    def __contains__(self, t: object) -> bool: return t in self._values

    def __repr__(self) -> str:
        return f"Context({', '.join(sorted(t.__name__ for t in self._values))})"
