"""Per-parse diagnostic collection and the nesting depth guard"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from surfdoc.core.blocks import Span
from surfdoc.core.models import Diagnostic, Severity


logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 16

_sink:      ContextVar[Optional[list[Diagnostic]]] = ContextVar("surfdoc_diagnostics", default=None)
_max_depth: ContextVar[int] = ContextVar("surfdoc_max_depth", default=DEFAULT_MAX_DEPTH)
_depth:     ContextVar[int] = ContextVar("surfdoc_depth", default=0)


@contextmanager
def collecting(max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[list[Diagnostic]]:
    """Collect diagnostics reported inside the block into the yielded list."""
    diagnostics: list[Diagnostic] = []
    sink_token = _sink.set(diagnostics)
    depth_token = _max_depth.set(max_depth)
    try:
        yield diagnostics
    finally:
        _sink.reset(sink_token)
        _max_depth.reset(depth_token)


def report(
    severity: Severity,
    message: str,
    span: Optional[Span] = None,
    code: Optional[str] = None,
    ) -> None:
    """Record a diagnostic; a no-op outside of collecting() apart from logging."""
    logger.debug("%s: %s [%s]", severity.value, message, code)
    sink = _sink.get()
    if sink is not None:
        sink.append(Diagnostic(severity=severity, message=message, span=span, code=code))


def warn(message: str, span: Optional[Span] = None, code: Optional[str] = None) -> None:
    report(Severity.warning, message, span, code)


@contextmanager
def nested() -> Iterator[bool]:
    """Enter one nesting level; yields False once the depth limit is exceeded."""
    level = _depth.get() + 1
    token = _depth.set(level)
    try:
        yield level <= _max_depth.get()
    finally:
        _depth.reset(token)
