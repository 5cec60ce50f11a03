"""
Result Envelope

Uniform {text, data, ui} result returned by every tool and widget call.
Failures use the same shape plus an `error` block.

DESIGN RULES:
- Constructed once per invocation, immutable afterwards
- `ui` is always present (alert node on failure)
- `data` is None on failure
- `error` is present iff the call failed
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ui.builders import build_alert
from ui.nodes import AlertVariant, UINode, node_to_dict


class ErrorCode(str, Enum):
    """Stable failure codes carried by error envelopes."""
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    UPSTREAM_DATA_ERROR = "upstream_data_error"
    TIMEOUT = "timeout"
    INTERNAL_ERROR = "internal_error"


class ErrorInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    field: Optional[str] = Field(default=None, description="Offending input field, if any")


class ResultEnvelope(BaseModel):
    """
    Terminal output of one tool or widget invocation.
    """
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Plain-language summary")
    data: Any = Field(default=None, description="Caller-facing structured result")
    ui: UINode = Field(..., description="Root of the UI node tree")
    error: Optional[ErrorInfo] = Field(default=None, description="Failure details")

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Envelope text must be non-empty")
        return value

    @model_validator(mode="after")
    def _failure_shape(self) -> "ResultEnvelope":
        if self.error is not None:
            if self.data is not None:
                raise ValueError("Failed envelopes must carry data=None")
            if self.ui.kind != "alert":
                raise ValueError("Failed envelopes must carry an alert node")
        return self

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, text: str, data: Any, ui: Any) -> "ResultEnvelope":
        """Factory for successful results."""
        return cls(text=text, data=data, ui=ui)

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: str,
        text: Optional[str] = None,
        field: Optional[str] = None,
    ) -> "ResultEnvelope":
        """
        Factory for failed results.

        Args:
            code: Failure classification
            message: Human-readable detail, shown in the alert node
            text: Summary text (defaults to message)
            field: Offending input field for validation failures

        Blank message or text falls back to a description of the code,
        so building a failure never fails itself.
        """
        message = message.strip() or code.value.replace("_", " ").capitalize()
        if not (text and text.strip()):
            text = message
        return cls(
            text=text,
            data=None,
            ui=build_alert(AlertVariant.ERROR, message),
            error=ErrorInfo(code=code, message=message, field=field),
        )

    def to_wire(self) -> Dict[str, Any]:
        """Flatten for transport. `error` is omitted on success."""
        wire = {
            "text": self.text,
            "data": self.model_dump(mode="json", include={"data"})["data"],
            "ui": node_to_dict(self.ui),
        }
        if self.error is not None:
            wire["error"] = self.error.model_dump(mode="json", exclude_none=True)
        return wire
