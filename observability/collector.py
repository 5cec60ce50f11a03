"""
Trace Collector

The registry's only handle on observability: it reports the outcome
of each call here and moves on.

DESIGN RULES:
- capture() never raises into the caller
- Tracing can be switched off at runtime
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from observability.sink import ConsoleTraceSink, TraceSink
from observability.trace import ExecutionTrace


logger = logging.getLogger(__name__)


class TraceCollector:
    """Turns invocation outcomes into ExecutionTrace records for a sink."""

    def __init__(self, sink: Optional[TraceSink] = None, enabled: bool = True):
        """
        Args:
            sink: Destination for traces (ConsoleTraceSink when omitted)
            enabled: Initial on/off state
        """
        self._sink = sink or ConsoleTraceSink()
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    def capture(
        self,
        request_id: str,
        tool_id: str,
        caller_id: str,
        started_at: datetime,
        success: bool = True,
        error_code: Optional[str] = None,
        error: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Record one finished invocation.

        `finished_at` is stamped here, so call this once the envelope
        is final.
        """
        if not self._enabled:
            return

        try:
            self._sink.emit(ExecutionTrace(
                request_id=request_id,
                tool_id=tool_id,
                caller_id=caller_id,
                success=success,
                started_at=started_at,
                finished_at=datetime.now(),
                metadata=dict(metadata or {}),
                error_code=error_code,
                error=error,
            ))
        except Exception as e:
            logger.warning(f"Dropped trace {request_id} for {tool_id}: {e}")
