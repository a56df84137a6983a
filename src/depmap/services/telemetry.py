"""Timing spans for ``depmap -v``.

``@traced`` opens a root span around a service method and attaches the
finished tree to ``ServiceResult.meta["telemetry"]``. ``trace_span`` times a
step under whichever span is active. Both are inert until
:func:`enable_telemetry` runs, which ``AppContext`` does for ``--verbose``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec

import structlog

from depmap.services.result import ServiceResult

log = structlog.get_logger("depmap.telemetry")

_enabled: ContextVar[bool] = ContextVar("depmap_telemetry", default=False)
_current_span: ContextVar[Span | None] = ContextVar("depmap_span", default=None)


@dataclass
class Span:
    """A named, timed step and the steps nested inside it."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        tree: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            tree["annotations"] = dict(self.annotations)
        if self.children:
            tree["children"] = [child.to_dict() for child in self.children]
        return tree


@contextmanager
def _activate(span: Span) -> Generator[Span]:
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a step of a traced call. Yields None outside one."""
    parent = _current_span.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    child = Span(name)
    parent.children.append(child)
    with _activate(child):
        yield child


P = ParamSpec("P")


def traced(func: Callable[P, ServiceResult]) -> Callable[P, ServiceResult]:
    """Record a span tree for a service method in the result's meta."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> ServiceResult:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(func.__qualname__)
        ok = False
        try:
            with _activate(span):
                result = func(*args, **kwargs)
            ok = result.ok
        finally:
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=round(span.duration_ms, 2),
                ok=ok,
                steps=len(span.children),
            )
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
