"""Diagnostics sinks for recoverable certificate format warnings.

A sink is told about every anomaly the reader or the accessors detect.
It is a side channel only: nothing it does changes what the parsing
functions return.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol


class DiagnosticsSink(Protocol):
    """Receives structured certificate format warnings."""

    def warn(self, at: str, reason: str, **fields: Any) -> None:
        """Record one warning raised at `at` for `reason`."""


class LoggingSink:
    """Forward warnings to a `logging` logger with the fields in `extra`."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("i2pcert")

    def warn(self, at: str, reason: str, **fields: Any) -> None:
        self._logger.warning(
            "certificate format warning",
            extra={"at": at, "reason": reason, "fields": dict(fields)},
        )


class NullSink:
    """Discard every warning."""

    def warn(self, at: str, reason: str, **fields: Any) -> None:
        return None


_default_sink: DiagnosticsSink = LoggingSink()


def get_default_sink() -> DiagnosticsSink:
    return _default_sink


def set_default_sink(sink: Optional[DiagnosticsSink]) -> DiagnosticsSink:
    """Replace the process-wide sink; `None` restores logging.

    Returns the previous sink so tests can put it back.
    """
    global _default_sink
    previous = _default_sink
    _default_sink = sink if sink is not None else LoggingSink()
    return previous
