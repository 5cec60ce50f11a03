"""
UI Node Model

Closed tagged variant of renderable UI nodes.
A node is plain data: {kind, payload, children}.

DESIGN RULES:
- Immutable once built
- Children order is render order (never re-sorted)
- Leaf kinds (text, table, chart, alert) carry no children
- Only the wire boundary flattens nodes into dicts
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class NodeKind(str, Enum):
    """Enumerated node kinds."""
    TEXT = "text"
    TABLE = "table"
    CHART = "chart"
    CARD = "card"
    DIV = "div"
    ALERT = "alert"


class AlertVariant(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# --- Payloads ---

class TextPayload(_Frozen):
    content: str = Field(..., min_length=1, description="Text block content")


class TableColumn(_Frozen):
    """One declared table column."""
    key: str = Field(..., min_length=1, description="Row mapping key")
    header: str = Field(..., description="Column header")
    type: str = Field(default="text", description="Cell type hint: text, number, link")
    width: Optional[Union[int, str]] = Field(default=None, description="Optional width hint")


class TablePayload(_Frozen):
    columns: List[TableColumn]
    rows: List[Dict[str, Any]] = Field(default_factory=list)


class DataKeys(_Frozen):
    """Which point fields feed the x-axis, y-axis and series label."""
    x: str
    y: str
    name: Optional[str] = None


class Trend(_Frozen):
    value: float = Field(..., description="Signed numeric delta")
    text: str = Field(..., description="Display string")


class ChartPayload(_Frozen):
    chart_type: str = Field(default="line", description="line, bar, area")
    title: str
    description: Optional[str] = None
    data: List[Dict[str, Any]] = Field(default_factory=list)
    data_keys: DataKeys
    trend: Optional[Trend] = None
    footer: Optional[str] = None


class CardPayload(_Frozen):
    title: Optional[str] = None
    content: Optional[str] = None


class DivPayload(_Frozen):
    style: Dict[str, str] = Field(default_factory=dict)


class AlertPayload(_Frozen):
    variant: AlertVariant
    message: str = Field(..., min_length=1)


# --- Nodes ---

# Leaf nodes pin `children` to an empty tuple.

class TextNode(_Frozen):
    kind: Literal["text"] = "text"
    payload: TextPayload
    children: Tuple[Any, ...] = Field(default=(), max_length=0)


class TableNode(_Frozen):
    kind: Literal["table"] = "table"
    payload: TablePayload
    children: Tuple[Any, ...] = Field(default=(), max_length=0)


class ChartNode(_Frozen):
    kind: Literal["chart"] = "chart"
    payload: ChartPayload
    children: Tuple[Any, ...] = Field(default=(), max_length=0)


class AlertNode(_Frozen):
    kind: Literal["alert"] = "alert"
    payload: AlertPayload
    children: Tuple[Any, ...] = Field(default=(), max_length=0)


class CardNode(_Frozen):
    kind: Literal["card"] = "card"
    payload: CardPayload = Field(default_factory=CardPayload)
    children: Tuple["UINode", ...] = ()


class DivNode(_Frozen):
    kind: Literal["div"] = "div"
    payload: DivPayload = Field(default_factory=DivPayload)
    children: Tuple["UINode", ...] = ()


UINode = Annotated[
    Union[TextNode, TableNode, ChartNode, CardNode, DivNode, AlertNode],
    Field(discriminator="kind"),
]

CardNode.model_rebuild()
DivNode.model_rebuild()

_node_adapter: TypeAdapter = TypeAdapter(UINode)


def node_to_dict(node: Any) -> Dict[str, Any]:
    """Flatten a node tree into its wire form."""
    return _node_adapter.dump_python(node, mode="json")


def node_from_dict(data: Dict[str, Any]) -> Any:
    """Rebuild a node tree from its wire form (used by renderers and tests)."""
    return _node_adapter.validate_python(data)
