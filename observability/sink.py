"""
Trace Sinks

Where finished traces go. The registry does not care which one is wired in.

DESIGN RULES:
- emit() is fire-and-forget
- A broken sink logs a warning; it never fails the invocation
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import List

from observability.trace import ExecutionTrace


logger = logging.getLogger(__name__)

METADATA_PREVIEW_CHARS = 60


class TraceSink(ABC):
    """Destination for finished traces."""

    @abstractmethod
    def emit(self, trace: ExecutionTrace) -> None:
        ...


def format_trace_line(trace: ExecutionTrace) -> str:
    """
    One-line summary, e.g.

        [TRACE] ✓ 1b2c3d4e tool=get-stock-price caller=agent-123 latency=84ms
    """
    mark = "✓" if trace.success else "✗"
    line = (
        f"[TRACE] {mark} {trace.request_id[:8]} "
        f"tool={trace.tool_id} caller={trace.caller_id} "
        f"latency={trace.latency_ms}ms"
    )
    if trace.error_code:
        line += f" error={trace.error_code}: {trace.error}"
    return line


class ConsoleTraceSink(TraceSink):
    """Human-readable lines on stdout (local development)."""

    def __init__(self, verbose: bool = False):
        self._verbose = verbose

    def emit(self, trace: ExecutionTrace) -> None:
        try:
            print(format_trace_line(trace))
            if not self._verbose:
                return
            for key, value in trace.metadata.items():
                preview = str(value)
                if len(preview) > METADATA_PREVIEW_CHARS:
                    preview = preview[:METADATA_PREVIEW_CHARS - 3] + "..."
                print(f"    {key}: {preview}")
        except Exception as e:
            logger.warning(f"Console trace sink failed for {trace.request_id}: {e}")


class JsonTraceSink(TraceSink):
    """One JSON object per line, for log shippers."""

    def emit(self, trace: ExecutionTrace) -> None:
        try:
            print(json.dumps(trace.to_dict(), default=str))
        except Exception as e:
            logger.warning(f"JSON trace sink failed for {trace.request_id}: {e}")


class MemoryTraceSink(TraceSink):
    """Keeps traces in a list."""

    def __init__(self):
        self.traces: List[ExecutionTrace] = []

    def emit(self, trace: ExecutionTrace) -> None:
        self.traces.append(trace)
