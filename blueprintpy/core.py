from __future__ import annotations
from typing import Any, Callable, Generic, Never, NoReturn, Optional, Tuple, TypeVar

from .either import Either, Left, Right
from .result import Failure, Result, Success

R = TypeVar("R"); E = TypeVar("E"); A = TypeVar("A"); B = TypeVar("B"); E2 = TypeVar("E2")


class FatalError(Exception):
    """Raised when a failure that is not itself an exception is escalated to a fault."""
    def __init__(self, error: Any):
        super().__init__(repr(error)); self.error = error


def die(error: Any) -> NoReturn:
    if isinstance(error, BaseException):
        raise error
    raise FatalError(error)


class Blueprint(Generic[R, E, A]):
    """A value describing a computation.

    The computation needs an environment of type ``R`` to run and ends with
    either a ``Success`` carrying an ``A`` or a ``Failure`` carrying an ``E``.
    Nothing happens until :meth:`evaluate` is called, and a blueprint can be
    evaluated any number of times.

    Args:
        run: Function from the environment to a ``Result``

    Example:
        ```python
        greet = access(lambda name: f"Hello {name}!").map(str.upper)
        greet.evaluate("world")  # Success(value='HELLO WORLD!')
        ```
    """
    def __init__(self, run: Callable[[R], Result[E, A]]): self._run_impl = run

    def evaluate(self, env: R) -> Result[E, A]:
        return self._run_impl(env)

    def map(self, f: Callable[[A], B]) -> "Blueprint[R, E, B]":
        def run(env: R):
            return self.evaluate(env).map(f)
        return Blueprint(run)

    def flat_map(self, f: Callable[[A], "Blueprint[R, E, B]"]) -> "Blueprint[R, E, B]":
        def run(env: R):
            res = self.evaluate(env)
            if isinstance(res, Failure):
                return res
            return f(res.value).evaluate(env)  # type: ignore[attr-defined]
        return Blueprint(run)

    def either(self) -> "Blueprint[R, Never, Either[E, A]]":
        """Move the error into the success channel; the result never fails."""
        def run(env: R):
            res = self.evaluate(env)
            if isinstance(res, Failure):
                return Success(Left(res.error))
            return Success(Right(res.value))  # type: ignore[attr-defined]
        return Blueprint(run)

    def provide(self, env: R) -> "Blueprint[Any, E, A]":
        """Fix the environment; whatever the caller passes later is ignored."""
        def run(_: Any):
            return self.evaluate(env)
        return Blueprint(run)

    def or_die(self) -> "Blueprint[R, Never, A]":
        """Assume the happy path: a failure is raised as a fault instead of returned.

        The error should be an exception. Anything else is wrapped in
        :class:`FatalError`.
        """
        def run(env: R):
            res = self.evaluate(env)
            if isinstance(res, Failure):
                die(res.error)
            return res
        return Blueprint(run)

    def as_(self, value: B) -> "Blueprint[R, E, B]":
        return self.map(lambda _: value)

    def unit(self) -> "Blueprint[R, E, None]":
        return self.as_(None)

    def zip(self, other: "Blueprint[R, E, B]") -> "Blueprint[R, E, Tuple[A, B]]":
        return self.flat_map(lambda a: other.map(lambda b: (a, b)))

    # Sequence, keeping the right-hand value (ZIO's *>)
    def zip_right(self, other: "Blueprint[R, E, B]") -> "Blueprint[R, E, B]":
        return self.flat_map(lambda _: other)

    def tap(self, f: Callable[[A], "Blueprint[R, E, Any]"]) -> "Blueprint[R, E, A]":
        return self.flat_map(lambda a: f(a).as_(a))

    def map_error(self, f: Callable[[E], E2]) -> "Blueprint[R, E2, A]":
        def run(env: R):
            return self.evaluate(env).map_error(f)
        return Blueprint(run)

    def catch_all(self, f: Callable[[E], "Blueprint[R, E2, A]"]) -> "Blueprint[R, E2, A]":
        def run(env: R):
            res = self.evaluate(env)
            if isinstance(res, Failure):
                return f(res.error).evaluate(env)
            return res
        return Blueprint(run)

    def or_else(self, that: "Blueprint[R, E2, A]") -> "Blueprint[R, E2, A]":
        return self.catch_all(lambda _: that)

    def fold(self, on_failure: Callable[[E], B], on_success: Callable[[A], B]) -> "Blueprint[R, Never, B]":
        def run(env: R):
            return Success(self.evaluate(env).fold(on_failure, on_success))
        return Blueprint(run)

    def fold_m(self, on_failure: Callable[[E], "Blueprint[R, E2, B]"], on_success: Callable[[A], "Blueprint[R, E2, B]"]) -> "Blueprint[R, E2, B]":
        def run(env: R):
            return self.evaluate(env).fold(on_failure, on_success).evaluate(env)
        return Blueprint(run)

    def ignore(self) -> "Blueprint[R, Never, None]":
        return self.fold(lambda _: None, lambda _: None)

    def repeat_n(self, n: int) -> "Blueprint[R, E, A]":
        """Run once, then ``n`` more times while successful; keep the last result."""
        if n < 0:
            raise ValueError("n must be >= 0")
        def run(env: R):
            res = self.evaluate(env)
            for _ in range(n):
                if isinstance(res, Failure):
                    break
                res = self.evaluate(env)
            return res
        return Blueprint(run)

    def __repr__(self) -> str:
        return f"Blueprint({getattr(self._run_impl, '__qualname__', self._run_impl)!r})"


def succeed(a: A) -> Blueprint[Any, Never, A]:
    def run(_: Any): return Success(a)
    return Blueprint(run)

def fail(e: E) -> Blueprint[Any, E, Never]:
    def run(_: Any): return Failure(e)
    return Blueprint(run)

def unit() -> Blueprint[Any, Never, None]:
    return succeed(None)

# Deferred total computation: thunk runs at evaluate time, never captured as a failure
def sync(thunk: Callable[[], A]) -> Blueprint[Any, Never, A]:
    def run(_: Any): return Success(thunk())
    return Blueprint(run)

def attempt(thunk: Callable[[], A], on_error: Optional[Callable[[Exception], E]] = None) -> Blueprint[Any, E, A]:
    """Run a possibly throwing ``thunk``, capturing a raised exception as a failure.

    ``on_error`` maps the exception before it enters the error channel.
    """
    def run(_: Any):
        try:
            return Success(thunk())
        except Exception as ex:
            return Failure(on_error(ex) if on_error else ex)
    return Blueprint(run)

def environment() -> Blueprint[R, Never, R]:
    def run(env: R): return Success(env)
    return Blueprint(run)

def access(f: Callable[[R], A]) -> Blueprint[R, Never, A]:
    def run(env: R): return Success(f(env))
    return Blueprint(run)

def access_m(f: Callable[[R], Blueprint[R, E, A]]) -> Blueprint[R, E, A]:
    def run(env: R): return f(env).evaluate(env)
    return Blueprint(run)

def from_result(res: Result[E, A]) -> Blueprint[Any, E, A]:
    def run(_: Any): return res
    return Blueprint(run)
