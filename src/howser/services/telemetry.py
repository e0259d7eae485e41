"""Timing spans for service operations.

Disabled by default.  ``--debug`` enables it: ``@traced`` service methods
then record a span tree (parse, match ...) that is logged through
structlog and attached to ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from howser.services.result import ServiceResult

log = structlog.get_logger("howser.telemetry")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_current: ContextVar[Span | None] = ContextVar("_current", default=None)


@dataclass
class Span:
    """A timed region with nested child regions."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a region under the current span; yields None when disabled."""
    parent = _current.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name)
    parent.children.append(span)
    token = _current.set(span)
    try:
        yield span
    finally:
        span.finished = time.perf_counter()
        _current.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:
    """Time a service method and merge its span tree into ``ServiceResult.meta``."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _current.set(span)
        try:
            result = func(*args, **kwargs)
        finally:
            span.finished = time.perf_counter()
            _current.reset(token)

        log.debug("span.complete", span_name=span.name, duration_ms=round(span.duration_ms, 2))
        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """The active span, for annotation; None when telemetry is off."""
    if not _enabled.get():
        return None
    return _current.get()
