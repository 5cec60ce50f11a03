"""Error taxonomy for tool registration and dispatch."""

from typing import Optional

from schemas.envelope import ErrorCode


class ToolRegistryError(RuntimeError):
    """Base error for tool registry failures."""
    code = ErrorCode.INTERNAL_ERROR


class DuplicateIdError(ToolRegistryError):
    """Raised when registering a tool or widget with an id already in use."""


class NotFoundError(ToolRegistryError):
    """Raised when looking up an unknown tool or widget id."""
    code = ErrorCode.NOT_FOUND


class ValidationError(ToolRegistryError):
    """Raised when raw input fails a tool's input schema."""
    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UpstreamDataError(ToolRegistryError):
    """Raised by handlers when the provider has no usable data for a request."""
    code = ErrorCode.UPSTREAM_DATA_ERROR
