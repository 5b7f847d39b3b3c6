from __future__ import annotations
from typing import Any, Generic, Optional, TypeVar

import anyio
import anyio.abc
import anyio.to_thread

from .core import Blueprint, die
from .result import Failure, Result
from .runtime import Runtime

E = TypeVar("E"); A = TypeVar("A")


class FiberInterrupted(Exception):
    pass


class AnyIOFiber(Generic[E, A]):
    """Handle on a blueprint running in an :class:`AnyIORuntime` task group."""
    def __init__(self, done: anyio.Event, cancel_scope: anyio.CancelScope):
        self._done = done; self._scope = cancel_scope
        self._result: Optional[Result[E, A]] = None
        self._fault: Optional[BaseException] = None

    async def await_(self) -> Result[E, A]:
        """Wait for completion and return the ``Result``; faults are re-raised."""
        await self._done.wait()
        if self._fault is not None:
            raise self._fault
        assert self._result is not None
        return self._result

    async def join(self) -> A:
        """Wait for completion and return the value, raising failures like ``Runtime.run``."""
        res = await self.await_()
        if isinstance(res, Failure):
            die(res.error)
        return res.value  # type: ignore[attr-defined]

    def interrupt(self) -> None:
        # A running evaluation is not stopped; the cancel lands once its thread returns
        self._scope.cancel()


class AnyIORuntime:
    """Runs blueprints on worker threads under an anyio task group.

    Blueprints are synchronous, so each one is evaluated with
    ``anyio.to_thread.run_sync``. Use it as an async context manager;
    leaving the block waits for every forked fiber.

    Example:
        ```python
        async with AnyIORuntime() as rt:
            producer = await rt.fork(fill_cache)
            consumer = await rt.fork(read_cache)
            await producer.join(); await consumer.join()
        ```
    """
    def __init__(self, base: Any = None, runtime: Optional[Runtime] = None):
        self._runtime = runtime or Runtime(base)
        self._tg: Optional[anyio.abc.TaskGroup] = None

    async def __aenter__(self) -> "AnyIORuntime":
        self._tg = await anyio.create_task_group().__aenter__(); return self

    async def __aexit__(self, et, e, tb):
        assert self._tg is not None
        try:
            return await self._tg.__aexit__(et, e, tb)
        finally:
            self._tg = None

    async def run(self, bp: Blueprint[Any, E, A]) -> A:
        return await anyio.to_thread.run_sync(self._runtime.run, bp)

    async def fork(self, bp: Blueprint[Any, E, A]) -> AnyIOFiber[E, A]:
        if self._tg is None: raise RuntimeError("Use AnyIORuntime in 'async with' context")
        done = anyio.Event()
        holder: dict[str, AnyIOFiber[E, A]] = {}

        async def worker(task_status=anyio.TASK_STATUS_IGNORED):
            with anyio.CancelScope() as scope:
                fiber: AnyIOFiber[E, A] = AnyIOFiber(done, scope)
                holder["fiber"] = fiber
                task_status.started()
                try:
                    fiber._result = await anyio.to_thread.run_sync(self._runtime.evaluate, bp)
                except anyio.get_cancelled_exc_class():
                    fiber._fault = FiberInterrupted()
                    raise
                except BaseException as ex:
                    fiber._fault = ex
                finally:
                    done.set()

        await self._tg.start(worker)
        return holder["fiber"]
