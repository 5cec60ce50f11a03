# Tool contracts, registry and market data tools
from tools.base import FieldSpec, FieldType, InputSchema, PinnedWidget, Pricing, ToolContract
from tools.errors import (
    DuplicateIdError,
    NotFoundError,
    ToolRegistryError,
    UpstreamDataError,
    ValidationError,
)
from tools.registry import ToolRegistry, bootstrap_tools, build_default_registry

__all__ = [
    "FieldSpec",
    "FieldType",
    "InputSchema",
    "PinnedWidget",
    "Pricing",
    "ToolContract",
    "DuplicateIdError",
    "NotFoundError",
    "ToolRegistryError",
    "UpstreamDataError",
    "ValidationError",
    "ToolRegistry",
    "bootstrap_tools",
    "build_default_registry",
]
