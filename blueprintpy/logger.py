from __future__ import annotations
import sys, datetime as _dt, json
from typing import Any, Dict, List, Never, Optional, Protocol, Tuple, runtime_checkable

from .context import Context
from .core import Blueprint, sync
from .ref import Ref
from .services import service


_LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}


@runtime_checkable
class Logger(Protocol):
    def debug(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: ...
    def info(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: ...
    def warn(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: ...
    def error(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: ...


class ConsoleLogger:
    def __init__(self, name: str = "blueprintpy", level: str = "INFO", json_output: bool = False, context: Optional[Dict[str, Any]] = None):
        self.name = name
        self.level = _LEVELS.get(level.upper(), 20)
        self.json_output = json_output
        self.context = dict(context or {})

    def set_level(self, level: str) -> None:
        self.level = _LEVELS.get(level.upper(), self.level)

    def bind(self, **fields: Any) -> "ConsoleLogger":
        ctx = dict(self.context); ctx.update(fields)
        return ConsoleLogger(self.name, level=self.level_name, json_output=self.json_output, context=ctx)

    @property
    def level_name(self) -> str:
        for k, v in _LEVELS.items():
            if v == self.level: return k
        return "INFO"

    def _write(self, level: str, msg: str, fields: Dict[str, Any]) -> None:
        if _LEVELS[level] < self.level:
            return
        ts = _dt.datetime.now(_dt.timezone.utc).isoformat()
        all_fields: Dict[str, Any] = {}
        all_fields.update(self.context)
        all_fields.update(fields)
        if self.json_output:
            data: Dict[str, Any] = {"ts": ts, "name": self.name, "level": level, "msg": msg}
            if all_fields:
                data["fields"] = all_fields
            print(json.dumps(data, separators=(",", ":"), default=str), file=sys.stderr)
        else:
            extras = "".join([f" {k}={v}" for k, v in sorted(all_fields.items())]) if all_fields else ""
            print(f"[{ts}] {self.name} {level}: {msg}{extras}", file=sys.stderr)

    def _log(self, level: str, msg: str, **fields: Any) -> Blueprint[Any, Never, None]:
        return sync(lambda: self._write(level, msg, fields))

    def debug(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: return self._log("DEBUG", msg, **fields)
    def info(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: return self._log("INFO", msg, **fields)
    def warn(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: return self._log("WARN", msg, **fields)
    def error(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: return self._log("ERROR", msg, **fields)


class TestLogger:
    """Logger that records ``(level, msg)`` pairs instead of printing them."""
    __test__ = False

    def __init__(self) -> None:
        self._ref: Ref[List[Tuple[str, str]]] = Ref([])

    def _log(self, level: str, msg: str) -> Blueprint[Any, Never, None]:
        return self._ref.update(lambda msgs: msgs + [(level, msg)]).unit()

    def debug(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: return self._log("debug", msg)
    def info(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: return self._log("info", msg)
    def warn(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: return self._log("warn", msg)
    def error(self, msg: str, **fields: Any) -> Blueprint[Any, Never, None]: return self._log("error", msg)

    def messages(self) -> Blueprint[Any, Never, List[Tuple[str, str]]]:
        return self._ref.get()


# Helpers for programs that receive the logger through a Context
def log_debug(msg: str) -> Blueprint[Context, KeyError, None]:
    return service(Logger).flat_map(lambda log: log.debug(msg))

def log_info(msg: str) -> Blueprint[Context, KeyError, None]:
    return service(Logger).flat_map(lambda log: log.info(msg))

def log_error(msg: str) -> Blueprint[Context, KeyError, None]:
    return service(Logger).flat_map(lambda log: log.error(msg))
