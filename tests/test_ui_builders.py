"""
UI Node Model Tests

Builders, composition order and the wire form.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from ui import (
    NodeKind,
    SchemaError,
    build_alert,
    build_card,
    build_chart,
    build_div,
    build_table,
    build_text,
    node_from_dict,
    node_to_dict,
)


COLUMNS = [
    {"key": "metric", "header": "Metric", "type": "text"},
    {"key": "value", "header": "Value", "type": "text", "width": 120},
]
ROWS = [
    {"metric": "Volume", "value": "1,000,000"},
    {"metric": "Open", "value": "$150.00"},
]


def test_text_requires_content():
    node = build_text("hello")
    assert node.kind == NodeKind.TEXT
    assert node.payload.content == "hello"
    assert node.children == ()

    with pytest.raises(SchemaError):
        build_text("")


def test_table_payload_reads_back_unchanged():
    node = build_table(COLUMNS, ROWS)

    assert node.kind == "table"
    assert [c.model_dump(exclude_none=True) for c in node.payload.columns] == COLUMNS
    assert node.payload.rows == ROWS


def test_table_copies_rows():
    rows = [{"metric": "Volume", "value": "1"}]
    node = build_table(COLUMNS, rows)
    rows[0]["value"] = "changed"
    rows.append({"metric": "Extra"})

    assert node.payload.rows == [{"metric": "Volume", "value": "1"}]


def test_table_rejects_empty_and_duplicate_columns():
    with pytest.raises(SchemaError):
        build_table([], ROWS)

    with pytest.raises(SchemaError, match="Duplicate"):
        build_table([{"key": "a", "header": "A"}, {"key": "a", "header": "Again"}], [])


def test_table_keeps_extra_and_missing_row_keys():
    node = build_table(COLUMNS, [{"metric": "Only"}, {"metric": "x", "value": "y", "other": 1}])
    assert node.payload.rows[0] == {"metric": "Only"}
    assert node.payload.rows[1]["other"] == 1


def test_chart_builds_with_trend_and_footer():
    node = build_chart(
        "line",
        "AAPL Price History",
        [{"time": "2024-01-01", "price": 10.0}, {"time": "2024-01-02", "price": 11.0}],
        {"x": "time", "y": "price", "name": "Price"},
        description="desc",
        trend={"value": -1.5, "text": "-1.50% change"},
        footer="daily",
    )

    payload = node.payload
    assert node.kind == NodeKind.CHART
    assert payload.chart_type == "line"
    assert payload.data_keys.x == "time"
    assert payload.trend.value == -1.5
    assert payload.footer == "daily"
    assert [p["price"] for p in payload.data] == [10.0, 11.0]


def test_chart_rejects_points_missing_data_keys():
    with pytest.raises(SchemaError, match="price"):
        build_chart("line", "t", [{"time": "a"}], {"x": "time", "y": "price"})

    with pytest.raises(SchemaError):
        build_chart("line", "t", [{"time": "a", "price": 1}, {"price": 2}], {"x": "time", "y": "price"})


def test_chart_allows_empty_series():
    node = build_chart("line", "Empty", [], {"x": "time", "y": "price"})
    assert node.payload.data == []


def test_card_children_keep_insertion_order():
    a = build_text("first")
    b = build_table(COLUMNS, ROWS)
    c = build_text("third")

    card = build_card(title="T", content="body").add_child(a).add_child(b).add_child(c).build()

    assert card.kind == "card"
    assert list(card.children) == [a, b, c]
    assert card.payload.title == "T"


def test_div_composes_like_card():
    inner = build_card().add_child(build_text("x")).build()
    div = build_div({"padding": "4px"}).add_child(inner).add_child(build_alert("info", "note")).build()

    assert div.kind == NodeKind.DIV
    assert [child.kind for child in div.children] == ["card", "alert"]
    assert div.payload.style == {"padding": "4px"}


def test_add_child_rejects_non_nodes():
    with pytest.raises(SchemaError):
        build_card().add_child({"kind": "text"})


def test_alert_variants():
    assert build_alert("error", "boom").payload.variant.value == "error"
    with pytest.raises(SchemaError):
        build_alert("fatal", "boom")


def test_built_nodes_are_frozen():
    node = build_text("x")
    with pytest.raises(PydanticValidationError):
        node.payload = None


def test_wire_form_nests_children():
    chart = build_chart("line", "c", [{"x": 1, "y": 2}], {"x": "x", "y": "y"})
    card = build_card(title="Card").add_child(chart).build()

    wire = node_to_dict(card)

    assert wire["kind"] == "card"
    assert wire["payload"]["title"] == "Card"
    assert wire["children"][0]["kind"] == "chart"
    assert wire["children"][0]["children"] == []
    assert node_from_dict(wire) == card
