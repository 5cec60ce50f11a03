"""
Tool Base Interface

Declarative contract for one callable tool and for pinned widgets.
The contract describes identity, input shape and the handler;
the registry owns dispatch.

DESIGN RULES:
- Input is validated before it reaches a handler
- Validation is fail-fast in field-declaration order
- No implicit rounding, trimming or case folding
- Optional fields always declare a default
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from schemas.context import CallerContext
from schemas.envelope import ResultEnvelope
from tools.errors import ValidationError


class FieldType(str, Enum):
    """Primitive types an input field may declare."""
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ENUM = "enum"


_TYPE_LABELS = {
    bool: "boolean",
    int: "integer",
    float: "number",
    str: "string",
}


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    return _TYPE_LABELS.get(type(value), type(value).__name__)


class FieldSpec(BaseModel):
    """
    One declared input field.

    Optional fields must set `default`; the default is applied
    when the field is absent (or null) in raw input.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    type: FieldType
    required: bool = True
    default: Any = None
    description: str = ""
    enum_values: Optional[List[str]] = Field(default=None, description="Allowed values for enum fields")

    @model_validator(mode="after")
    def _check_declaration(self) -> "FieldSpec":
        if self.type == FieldType.ENUM and not self.enum_values:
            raise ValueError(f"Enum field '{self.name}' must declare enum_values")
        if not self.required:
            if "default" not in self.model_fields_set:
                raise ValueError(f"Optional field '{self.name}' must declare a default")
            # Defaults go through the same checks as caller input
            try:
                self.coerce(self.default)
            except ValidationError as e:
                raise ValueError(f"Invalid default: {e}") from e
        return self

    def coerce(self, value: Any) -> Any:
        """
        Check a present value against the declared primitive.

        Returns:
            The normalized value

        Raises:
            ValidationError naming this field and the expected constraint
        """
        if self.type == FieldType.STRING:
            if isinstance(value, str):
                return value
        elif self.type == FieldType.NUMBER:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return value
        elif self.type == FieldType.INTEGER:
            if isinstance(value, int) and not isinstance(value, bool):
                return value
            if isinstance(value, float) and value.is_integer():
                return int(value)
        elif self.type == FieldType.BOOLEAN:
            if isinstance(value, bool):
                return value
        elif self.type == FieldType.ENUM:
            if isinstance(value, str) and value in (self.enum_values or []):
                return value
            raise ValidationError(
                f"Field '{self.name}' must be one of {self.enum_values}, got {value!r}",
                field=self.name,
            )

        raise ValidationError(
            f"Field '{self.name}' expected {self.type.value}, got {_describe(value)}",
            field=self.name,
        )

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "string" if self.type == FieldType.ENUM else self.type.value,
        }
        if self.enum_values:
            schema["enum"] = list(self.enum_values)
        if self.description:
            schema["description"] = self.description
        if not self.required:
            schema["default"] = self.default
        return schema


class InputSchema(BaseModel):
    """Ordered set of input fields for one tool."""
    model_config = ConfigDict(frozen=True)

    fields: List[FieldSpec] = Field(default_factory=list)
    description: str = ""

    @model_validator(mode="after")
    def _unique_names(self) -> "InputSchema":
        names = [spec.name for spec in self.fields]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate input field names: {duplicates}")
        return self

    def validate_input(self, raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Validate raw input, fail-fast on the first invalid field.

        Args:
            raw: Caller-supplied mapping (None is treated as empty)

        Returns:
            Normalized input containing every declared field,
            defaults applied. Undeclared keys are dropped.

        Raises:
            ValidationError for the first field that fails
        """
        if raw is None:
            raw = {}
        if not isinstance(raw, Mapping):
            raise ValidationError(f"Input must be an object, got {_describe(raw)}")

        normalized: Dict[str, Any] = {}
        for spec in self.fields:
            value = raw.get(spec.name)
            if value is None:
                if spec.required:
                    raise ValidationError(f"Missing required field '{spec.name}'", field=spec.name)
                normalized[spec.name] = spec.default
                continue
            normalized[spec.name] = spec.coerce(value)
        return normalized

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {spec.name: spec.to_json_schema() for spec in self.fields},
            "required": [spec.name for spec in self.fields if spec.required],
        }
        if self.description:
            schema["description"] = self.description
        return schema


class Pricing(BaseModel):
    """Informational cost per use. Not enforced."""
    model_config = ConfigDict(frozen=True)

    amount: float = 0.0
    currency: str = "USD"


ToolHandler = Callable[[Dict[str, Any], CallerContext, Any], Union[Awaitable[ResultEnvelope], ResultEnvelope]]
WidgetProducer = Callable[[Any], Union[Awaitable[ResultEnvelope], ResultEnvelope]]


@dataclass(frozen=True)
class ToolContract:
    """
    Declarative description of one callable tool.

    The handler receives (normalized input, caller context, provider)
    and returns a ResultEnvelope or raises.
    """
    id: str
    name: str
    description: str
    input_schema: InputSchema
    handler: ToolHandler
    output_description: str = ""
    pricing: Pricing = field(default_factory=Pricing)

    def __post_init__(self):
        if not self.id:
            raise ValueError("Tool id must be non-empty")

    def validate(self, raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        return self.input_schema.validate_input(raw)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tool definition for registration/display."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema.to_json_schema(),
            "output_description": self.output_description,
            "pricing": self.pricing.model_dump(),
        }


@dataclass(frozen=True)
class PinnedWidget:
    """A no-input, dashboard-style producer of a ResultEnvelope."""
    id: str
    name: str
    description: str
    label: str
    icon: str
    get_widget: WidgetProducer
    type: str = "widget"

    def __post_init__(self):
        if not self.id:
            raise ValueError("Widget id must be non-empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "label": self.label,
            "icon": self.icon,
        }


# Shared by every market data tool
TICKER_FIELD = FieldSpec(
    name="ticker",
    type=FieldType.STRING,
    description="Stock ticker symbol (e.g. AAPL)",
)
