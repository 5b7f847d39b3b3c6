from .core import (
    Blueprint,
    FatalError,
    die,
    succeed,
    fail,
    unit,
    sync,
    attempt,
    environment,
    access,
    access_m,
    from_result,
)
from .result import Result, Success, Failure, from_either as result_from_either, to_either as result_to_either
from .either import Either, Left, Right
from .option import Option, Some, NONE, from_nullable
from .context import Context
from .services import service, services
from .ref import Ref
from .runtime import Runtime
from .anyio_runtime import AnyIORuntime, AnyIOFiber, FiberInterrupted
from .logger import Logger, ConsoleLogger, TestLogger, log_debug, log_info, log_error
from .random import Random, random_int_between, random_float
from .cache import Cache, BoundedCache
from .domain import TagId, TagName, Tag
from .repository import InMemoryTagRepository, TagRepositoryError, DuplicateTagName, TagNotFound
