"""
Invocation Trace

One record per tool or widget call, built after the envelope is final.

DESIGN RULES:
- Plain record, frozen once built
- Knows nothing about tools, providers or envelopes
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ExecutionTrace:
    """What was called, by whom, how long it took and how it ended."""

    request_id: str
    tool_id: str
    caller_id: str
    success: bool
    started_at: datetime
    finished_at: datetime
    metadata: Dict[str, Any] = field(default_factory=dict)
    error_code: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.success and self.error_code is not None:
            raise ValueError(f"Successful trace {self.request_id} cannot carry error code {self.error_code!r}")

    @property
    def latency_ms(self) -> int:
        return int((self.finished_at - self.started_at).total_seconds() * 1000)

    @property
    def status(self) -> str:
        """'ok' or the envelope error code."""
        return "ok" if self.success else (self.error_code or "error")

    def to_dict(self) -> Dict[str, Any]:
        record = asdict(self)
        record["started_at"] = self.started_at.isoformat()
        record["finished_at"] = self.finished_at.isoformat()
        record["latency_ms"] = self.latency_ms
        return record
