"""
UI Builders

Fluent configure-then-build helpers for every node kind.

DESIGN RULES:
- Builders accumulate configuration, nodes are emitted by build()
- Required sub-fields are checked at build() time
- Violations raise SchemaError, never a half-built node
- Inputs are copied so later caller mutation cannot leak into a node
"""

import copy
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ui.nodes import (
    AlertNode,
    AlertPayload,
    AlertVariant,
    CardNode,
    CardPayload,
    ChartNode,
    ChartPayload,
    DataKeys,
    DivNode,
    DivPayload,
    TableColumn,
    TableNode,
    TablePayload,
    TextNode,
    TextPayload,
    Trend,
)


class SchemaError(ValueError):
    """Raised when a builder is asked to emit a node that violates its shape."""
    code = "schema_error"


def _wrap(factory, **kwargs):
    # pydantic failures surface as SchemaError to builder callers
    try:
        return factory(**kwargs)
    except PydanticValidationError as e:
        raise SchemaError(str(e)) from e


class TextBuilder:
    def __init__(self, content: str = ""):
        self._content = content

    def content(self, content: str) -> "TextBuilder":
        self._content = content
        return self

    def build(self) -> TextNode:
        if not self._content:
            raise SchemaError("Text node requires non-empty content")
        return TextNode(payload=TextPayload(content=self._content))


class TableBuilder:
    """
    Builds a table node.

    Rows are mappings keyed by column key. Extra keys are kept but
    ignored by renderers; missing keys render as empty cells.
    """

    def __init__(self):
        self._columns: List[TableColumn] = []
        self._rows: List[Dict[str, Any]] = []

    def add_column(self, column: Union[TableColumn, Mapping[str, Any]]) -> "TableBuilder":
        if not isinstance(column, TableColumn):
            column = _wrap(TableColumn, **dict(column))
        self._columns.append(column)
        return self

    def add_columns(self, columns: Iterable[Union[TableColumn, Mapping[str, Any]]]) -> "TableBuilder":
        for column in columns:
            self.add_column(column)
        return self

    def add_row(self, row: Mapping[str, Any]) -> "TableBuilder":
        self._rows.append(copy.deepcopy(dict(row)))
        return self

    def rows(self, rows: Iterable[Mapping[str, Any]]) -> "TableBuilder":
        """Replace all rows."""
        self._rows = []
        for row in rows:
            self.add_row(row)
        return self

    def build(self) -> TableNode:
        if not self._columns:
            raise SchemaError("Table node requires at least one column")

        seen = set()
        for column in self._columns:
            if column.key in seen:
                raise SchemaError(f"Duplicate table column key '{column.key}'")
            seen.add(column.key)

        payload = _wrap(TablePayload, columns=list(self._columns), rows=copy.deepcopy(self._rows))
        return TableNode(payload=payload)


class ChartBuilder:
    """
    Builds a chart node.

    Every point in the series must carry the x and y data keys
    (the whole series is checked, not just the first point).
    """

    def __init__(self):
        self._type = "line"
        self._title: Optional[str] = None
        self._description: Optional[str] = None
        self._data: List[Dict[str, Any]] = []
        self._data_keys: Optional[DataKeys] = None
        self._trend: Optional[Trend] = None
        self._footer: Optional[str] = None

    def type(self, chart_type: str) -> "ChartBuilder":
        self._type = chart_type
        return self

    def title(self, title: str) -> "ChartBuilder":
        self._title = title
        return self

    def description(self, description: str) -> "ChartBuilder":
        self._description = description
        return self

    def chart_data(self, data: Iterable[Mapping[str, Any]]) -> "ChartBuilder":
        self._data = [copy.deepcopy(dict(point)) for point in data]
        return self

    def data_keys(self, x: str, y: str, name: Optional[str] = None) -> "ChartBuilder":
        self._data_keys = _wrap(DataKeys, x=x, y=y, name=name)
        return self

    def trend(self, value: float, text: str) -> "ChartBuilder":
        self._trend = _wrap(Trend, value=value, text=text)
        return self

    def footer(self, footer: str) -> "ChartBuilder":
        self._footer = footer
        return self

    def build(self) -> ChartNode:
        if not self._title:
            raise SchemaError("Chart node requires a title")
        if self._data_keys is None:
            raise SchemaError("Chart node requires data keys")

        for index, point in enumerate(self._data):
            for key in (self._data_keys.x, self._data_keys.y):
                if key not in point:
                    raise SchemaError(f"Chart point {index} is missing data key '{key}'")

        payload = _wrap(
            ChartPayload,
            chart_type=self._type,
            title=self._title,
            description=self._description,
            data=self._data,
            data_keys=self._data_keys,
            trend=self._trend,
            footer=self._footer,
        )
        return ChartNode(payload=payload)


class _ContainerBuilder:
    """Shared add_child contract for card and div."""

    def __init__(self):
        self._children: List[Any] = []

    def add_child(self, node: Any) -> "_ContainerBuilder":
        if node is None or not hasattr(node, "kind"):
            raise SchemaError(f"Cannot add non-node child: {node!r}")
        self._children.append(node)
        return self


class CardBuilder(_ContainerBuilder):
    def __init__(self, title: Optional[str] = None, content: Optional[str] = None):
        super().__init__()
        self._title = title
        self._content = content

    def title(self, title: str) -> "CardBuilder":
        self._title = title
        return self

    def content(self, content: str) -> "CardBuilder":
        self._content = content
        return self

    def build(self) -> CardNode:
        return _wrap(
            CardNode,
            payload=CardPayload(title=self._title, content=self._content),
            children=tuple(self._children),
        )


class DivBuilder(_ContainerBuilder):
    def __init__(self, style: Optional[Mapping[str, str]] = None):
        super().__init__()
        self._style = dict(style or {})

    def style(self, style: Mapping[str, str]) -> "DivBuilder":
        self._style = dict(style)
        return self

    def build(self) -> DivNode:
        return _wrap(
            DivNode,
            payload=_wrap(DivPayload, style=self._style),
            children=tuple(self._children),
        )


class AlertBuilder:
    def __init__(self):
        self._variant: Optional[str] = None
        self._message: Optional[str] = None

    def with_variant(self, variant: Union[AlertVariant, str]) -> "AlertBuilder":
        self._variant = variant
        return self

    def with_message(self, message: str) -> "AlertBuilder":
        self._message = message
        return self

    def build(self) -> AlertNode:
        return AlertNode(payload=_wrap(AlertPayload, variant=self._variant, message=self._message))


# --- Convenience entry points ---

def build_text(content: str) -> TextNode:
    return TextBuilder(content).build()


def build_table(
    columns: Iterable[Union[TableColumn, Mapping[str, Any]]],
    rows: Iterable[Mapping[str, Any]] = (),
) -> TableNode:
    return TableBuilder().add_columns(columns).rows(rows).build()


def build_chart(
    chart_type: str,
    title: str,
    series: Iterable[Mapping[str, Any]],
    data_keys: Mapping[str, Optional[str]],
    description: Optional[str] = None,
    trend: Optional[Mapping[str, Any]] = None,
    footer: Optional[str] = None,
) -> ChartNode:
    """
    Build a chart in one call.

    Args:
        chart_type: line, bar or area
        title: Chart title
        series: Ordered data points
        data_keys: {"x": ..., "y": ..., "name": optional label}
        description: Optional subtitle
        trend: Optional {"value": signed delta, "text": display string}
        footer: Optional footer text
    """
    if "x" not in data_keys or "y" not in data_keys:
        raise SchemaError("data_keys must name both 'x' and 'y'")

    builder = (
        ChartBuilder()
        .type(chart_type)
        .title(title)
        .chart_data(series)
        .data_keys(data_keys["x"], data_keys["y"], data_keys.get("name"))
    )
    if description is not None:
        builder.description(description)
    if trend is not None:
        builder.trend(trend["value"], trend["text"])
    if footer is not None:
        builder.footer(footer)
    return builder.build()


def build_card(title: Optional[str] = None, content: Optional[str] = None) -> CardBuilder:
    """Start a card; chain add_child() calls then build()."""
    return CardBuilder(title=title, content=content)


def build_div(style: Optional[Mapping[str, str]] = None) -> DivBuilder:
    """Start a plain container; chain add_child() calls then build()."""
    return DivBuilder(style=style)


def build_alert(variant: Union[AlertVariant, str], message: str) -> AlertNode:
    return AlertBuilder().with_variant(variant).with_message(message).build()
