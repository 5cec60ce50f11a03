# UI Node Model Package
from ui.nodes import (
    AlertNode,
    AlertVariant,
    CardNode,
    ChartNode,
    DivNode,
    NodeKind,
    TableColumn,
    TableNode,
    TextNode,
    UINode,
    node_from_dict,
    node_to_dict,
)
from ui.builders import (
    AlertBuilder,
    CardBuilder,
    ChartBuilder,
    DivBuilder,
    SchemaError,
    TableBuilder,
    TextBuilder,
    build_alert,
    build_card,
    build_chart,
    build_div,
    build_table,
    build_text,
)

__all__ = [
    "AlertNode",
    "AlertVariant",
    "CardNode",
    "ChartNode",
    "DivNode",
    "NodeKind",
    "TableColumn",
    "TableNode",
    "TextNode",
    "UINode",
    "node_from_dict",
    "node_to_dict",
    "AlertBuilder",
    "CardBuilder",
    "ChartBuilder",
    "DivBuilder",
    "SchemaError",
    "TableBuilder",
    "TextBuilder",
    "build_alert",
    "build_card",
    "build_chart",
    "build_div",
    "build_table",
    "build_text",
]
