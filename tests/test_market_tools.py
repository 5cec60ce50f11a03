"""
Market Data Tool Tests

End-to-end through the registry with an in-memory provider.
"""

import pytest

from schemas.envelope import ErrorCode
from tools.errors import UpstreamDataError
from tools.registry import build_default_registry


AAPL_BAR = {"o": 150, "c": 157.5, "h": 158, "l": 149, "v": 1000000, "t": 1700000000000}


def _table_rows(node):
    return {row["metric"]: row["value"] for row in node.payload.rows}


@pytest.mark.asyncio
async def test_price_for_known_ticker(registry, provider, caller):
    provider.bars["AAPL"] = [AAPL_BAR]

    envelope = await registry.invoke("get-stock-price", {"ticker": "AAPL"}, caller)

    assert envelope.error is None
    assert envelope.data["price"] == 157.5
    assert envelope.data["changePercent"] == 5.0
    assert envelope.data["change"] == 7.5
    assert envelope.text == "AAPL is trading at $157.50. Today's change: 5.00%"

    card = envelope.ui
    assert card.kind == "card"
    assert card.payload.title == "AAPL Stock Price and Stats"
    assert [child.kind for child in card.children] == ["chart", "table"]

    chart, table = card.children
    assert chart.payload.trend.value == 5.0
    assert chart.payload.trend.text == "5.00% change"
    assert chart.payload.data == [{"time": "2023-11-14", "price": 157.5}]

    assert _table_rows(table) == {
        "Volume": "1,000,000",
        "Open": "$150.00",
        "High": "$158.00",
        "Low": "$149.00",
        "VWAP": "N/A",
    }


@pytest.mark.asyncio
async def test_price_requests_recent_daily_bars(registry, provider, caller):
    provider.bars["AAPL"] = [AAPL_BAR]
    await registry.invoke("get-stock-price", {"ticker": "AAPL"}, caller)

    name, ticker, multiplier, timespan, _, _, sort, limit = provider.calls[0]
    assert (name, ticker, multiplier, timespan, sort, limit) == ("aggregates", "AAPL", 1, "day", "desc", 10)


@pytest.mark.asyncio
async def test_price_chart_is_oldest_first(registry, provider, caller):
    provider.bars["MSFT"] = [
        {"o": 10, "c": 11, "t": 1700092800000},
        {"o": 9, "c": 10, "t": 1700006400000},
    ]

    envelope = await registry.invoke("get-stock-price", {"ticker": "MSFT"}, caller)

    chart = envelope.ui.children[0]
    assert [point["price"] for point in chart.payload.data] == [10, 11]
    assert envelope.data["changePercent"] == 10.0


@pytest.mark.asyncio
async def test_price_without_stats_table(provider, caller):
    registry = build_default_registry(provider=provider, include_price_table=False)
    provider.bars["AAPL"] = [AAPL_BAR]

    envelope = await registry.invoke("get-stock-price", {"ticker": "AAPL"}, caller)

    assert [child.kind for child in envelope.ui.children] == ["chart"]


@pytest.mark.asyncio
async def test_price_for_unknown_ticker(registry, caller):
    envelope = await registry.invoke("get-stock-price", {"ticker": "ZZZZ"}, caller)

    assert envelope.data is None
    assert envelope.ui.kind == "alert"
    assert envelope.error.code == ErrorCode.UPSTREAM_DATA_ERROR
    assert envelope.text == "No data available for ZZZZ"


@pytest.mark.asyncio
async def test_news_respects_limit(registry, provider, caller):
    provider.news["TSLA"] = [
        {
            "title": f"Headline {i}",
            "publisher": {"name": "Wire"},
            "published_utc": "2024-03-0%dT12:00:00Z" % (i + 1),
            "article_url": f"https://news.example/{i}",
        }
        for i in range(5)
    ]

    envelope = await registry.invoke("get-stock-news", {"ticker": "TSLA", "limit": 3}, caller)

    assert len(envelope.data["articles"]) == 3
    assert envelope.text == "Found 3 news articles for TSLA"
    table = envelope.ui
    assert [column.header for column in table.payload.columns] == ["Source", "Title", "Link", "Published"]
    assert len(table.payload.rows) == 3
    assert table.payload.rows[0]["url"] == {"text": "Read More", "url": "https://news.example/0"}
    assert table.payload.rows[0]["timestamp"] == "2024-03-01"
    assert envelope.data["articles"][0]["timestamp"] == "2024-03-01T12:00:00Z"


@pytest.mark.asyncio
async def test_news_default_limit(registry, provider, caller):
    await registry.invoke("get-stock-news", {"ticker": "TSLA"}, caller)
    assert provider.calls == [("ticker_news", "TSLA", 5)]


@pytest.mark.asyncio
async def test_empty_news_is_not_an_error(registry, caller):
    envelope = await registry.invoke("get-stock-news", {"ticker": "TSLA"}, caller)
    assert envelope.error is None
    assert envelope.data == {"articles": []}
    assert envelope.ui.payload.rows == []


@pytest.mark.asyncio
async def test_chart_tool(registry, provider, caller):
    provider.bars["AAPL"] = [
        {"o": 1, "c": 2, "t": 1700006400000},
        {"o": 2, "c": 3, "t": 1700092800000},
    ]

    envelope = await registry.invoke(
        "get-stock-chart",
        {"ticker": "AAPL", "multiplier": 1, "timespan": "day", "from": "2023-11-15", "to": "2023-11-16"},
        caller,
    )

    chart = envelope.ui
    assert chart.kind == "chart"
    assert chart.payload.title == "AAPL Price History"
    assert chart.payload.description == "From 2023-11-15 to 2023-11-16"
    assert chart.payload.footer == "dayly price data with multiplier 1"
    assert chart.payload.data == [
        {"date": "2023-11-15", "price": 2},
        {"date": "2023-11-16", "price": 3},
    ]
    assert envelope.data["results"][0] == {"o": 1, "c": 2, "t": 1700006400000}


@pytest.mark.asyncio
async def test_chart_tool_rejects_bad_timespan(registry, provider, caller):
    envelope = await registry.invoke(
        "get-stock-chart",
        {"ticker": "AAPL", "multiplier": 1, "timespan": "fortnight", "from": "a", "to": "b"},
        caller,
    )
    assert envelope.error.code == ErrorCode.VALIDATION_ERROR
    assert envelope.error.field == "timespan"
    assert provider.calls == []


@pytest.mark.asyncio
async def test_details_tool(registry, provider, caller):
    provider.details["AAPL"] = {
        "ticker": "AAPL",
        "name": "Apple Inc.",
        "market_cap": 3000000000000,
        "primary_exchange": "XNAS",
        "homepage_url": "https://www.apple.com",
    }

    envelope = await registry.invoke("get-stock-details", {"ticker": "AAPL"}, caller)

    assert envelope.text == "AAPL (Apple Inc.) is listed on XNAS"
    rows = {row["field"]: row["value"] for row in envelope.ui.payload.rows}
    assert rows["Market Cap"] == "3,000,000,000,000"
    assert rows["Description"] == "N/A"
    assert rows["Industry"] == "N/A"
    assert envelope.data["name"] == "Apple Inc."


@pytest.mark.asyncio
async def test_details_for_unknown_ticker(registry, caller):
    envelope = await registry.invoke("get-stock-details", {"ticker": "ZZZZ"}, caller)
    assert envelope.error.code == ErrorCode.UPSTREAM_DATA_ERROR


@pytest.mark.asyncio
async def test_dividends_tool(registry, provider, caller):
    provider.dividend_records["KO"] = [
        {"ex_dividend_date": "2024-03-14", "pay_date": "2024-04-01", "cash_amount": 0.5},
        {"ex_dividend_date": "2023-11-30", "pay_date": "2023-12-15", "cash_amount": 0.46},
    ]

    envelope = await registry.invoke("get-stock-dividends", {"ticker": "KO"}, caller)

    assert envelope.text == "Retrieved last 2 dividend records for KO"
    assert envelope.ui.payload.rows[0] == {"date": "2024-03-14", "amount": "$0.50", "payDate": "2024-04-01"}
    assert len(envelope.data) == 2
    assert provider.calls == [("dividends", "KO", 10)]


@pytest.mark.asyncio
async def test_splits_tool(registry, provider, caller):
    provider.split_records["NVDA"] = [
        {"execution_date": "2024-06-10", "split_from": 1, "split_to": 10},
    ]

    envelope = await registry.invoke("get-stock-splits", {"ticker": "NVDA", "limit": 1}, caller)

    assert envelope.text == "Retrieved last 1 stock splits for NVDA"
    assert envelope.ui.payload.rows == [{"date": "2024-06-10", "ratio": "10:1"}]
    assert [column.header for column in envelope.ui.payload.columns] == ["Execution Date", "Split Ratio"]


@pytest.mark.asyncio
async def test_market_overview_with_one_index_missing(registry, provider):
    provider.prev["DIA"] = [{"o": 380, "c": 385.5}]
    provider.prev["SPY"] = [{"o": 500, "c": 505}]
    provider.prev["QQQ"] = [{"o": 440, "c": 435.6}]

    envelope = await registry.invoke_widget("marketOverview")

    assert envelope.error is None
    assert envelope.text == "Market Overview - S&P 500: 1.00%"

    table, chart = envelope.ui.children
    assert len(table.payload.rows) == 4
    iwm = table.payload.rows[3]
    assert iwm == {"name": "Russell 2000", "price": "N/A", "change": "+$0.00", "changePercent": "+0.00%"}
    assert table.payload.rows[2]["changePercent"] == "-1.00%"
    assert table.payload.rows[0]["price"] == "$385.50"

    assert [point["time"] for point in chart.payload.data] == ["Dow Jones", "S&P 500", "NASDAQ"]
    assert [result["available"] for result in envelope.data] == [True, True, True, False]


@pytest.mark.asyncio
async def test_market_overview_survives_index_failure(registry, provider):
    provider.prev["SPY"] = [{"o": 500, "c": 495}]
    provider.failures["DIA"] = UpstreamDataError("HTTP 403")

    envelope = await registry.invoke_widget("marketOverview")

    assert envelope.error is None
    assert envelope.data[0]["price"] == "N/A"
    assert envelope.text == "Market Overview - S&P 500: -1.00%"


@pytest.mark.asyncio
async def test_market_overview_all_indices_failing(registry, provider):
    for ticker in ("DIA", "SPY", "QQQ", "IWM"):
        provider.failures[ticker] = RuntimeError("connection refused")

    envelope = await registry.invoke_widget("marketOverview")

    assert envelope.data is None
    assert envelope.ui.kind == "alert"
    assert envelope.error.code == ErrorCode.UPSTREAM_DATA_ERROR
    assert "Polygon.io API key" in envelope.text


@pytest.mark.asyncio
async def test_every_invocation_is_traced(registry, provider, caller, trace_sink):
    provider.bars["AAPL"] = [AAPL_BAR]

    await registry.invoke("get-stock-price", {"ticker": "AAPL"}, caller)
    await registry.invoke("get-stock-price", {"ticker": "ZZZZ"}, caller)
    await registry.invoke_widget("marketOverview")

    assert [t.success for t in trace_sink.traces] == [True, False, False]
    assert trace_sink.traces[0].caller_id == "agent-123"
    assert trace_sink.traces[2].caller_id == "pinned"


@pytest.mark.asyncio
async def test_details_text_with_missing_name_and_exchange(registry, provider, caller):
    provider.details["XYZ"] = {"ticker": "XYZ", "market_cap": 10}

    envelope = await registry.invoke("get-stock-details", {"ticker": "XYZ"}, caller)

    assert envelope.text == "XYZ (N/A) is listed on N/A"
