"""Trace callbacks for the layout engine."""

from __future__ import annotations

import logging
from typing import Mapping

from traylayout.contracts.protocols import TraceCallback

__all__ = ["make_logging_trace", "null_trace"]


def make_logging_trace(logger: logging.Logger) -> TraceCallback:
    """Build a trace callback that forwards events to ``logger`` at DEBUG."""

    def trace(event: str, payload: Mapping[str, object]) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            details = ", ".join(f"{key}={value!r}" for key, value in payload.items())
            logger.debug(f"{event}: {details}")

    return trace


def null_trace(event: str, payload: Mapping[str, object]) -> None:
    """Trace callback that discards every event."""
