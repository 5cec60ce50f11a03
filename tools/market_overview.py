"""
Market Overview Widget

Pinned dashboard summary of the major index ETFs.

DESIGN RULES:
- All index lookups are issued concurrently
- A failed or empty lookup degrades to a placeholder row
- Only when every lookup fails does the widget fail as a whole
"""

import asyncio
import logging
from typing import Any, Dict, List

from providers.base import MarketDataProvider
from schemas.envelope import ResultEnvelope
from tools.base import PinnedWidget
from tools.errors import UpstreamDataError
from tools.formatting import (
    NOT_AVAILABLE,
    format_money,
    format_signed_money,
    format_signed_percent,
)
from tools.metrics import percent_change, price_change
from ui.builders import CardBuilder, ChartBuilder, TableBuilder

logger = logging.getLogger(__name__)

# ETFs tracking the major indices
INDICES = [
    {"ticker": "DIA", "name": "Dow Jones"},
    {"ticker": "SPY", "name": "S&P 500"},
    {"ticker": "QQQ", "name": "NASDAQ"},
    {"ticker": "IWM", "name": "Russell 2000"},
]

HEADLINE_INDEX = "S&P 500"


def _placeholder(name: str) -> Dict[str, Any]:
    return {
        "name": name,
        "price": NOT_AVAILABLE,
        "change": 0.0,
        "changePercent": 0.0,
        "isPositive": True,
        "available": False,
    }


async def _fetch_index(provider: MarketDataProvider, ticker: str, name: str) -> Dict[str, Any]:
    try:
        bars = await provider.previous_close(ticker)
    except Exception as e:
        logger.warning(f"Previous close lookup failed for {ticker}: {e}")
        return _placeholder(name)

    if not bars:
        logger.warning(f"No previous close for {ticker}")
        return _placeholder(name)

    bar = bars[0]
    change = price_change(bar.open, bar.close)
    return {
        "name": name,
        "price": round(bar.close, 2) if bar.close is not None else NOT_AVAILABLE,
        "change": round(change, 2),
        "changePercent": percent_change(bar.open, bar.close),
        "isPositive": change >= 0,
        "available": bar.close is not None,
    }


def _table_row(result: Dict[str, Any]) -> Dict[str, str]:
    price = result["price"]
    return {
        "name": result["name"],
        "price": NOT_AVAILABLE if price == NOT_AVAILABLE else format_money(price, separators=True),
        "change": format_signed_money(result["change"]),
        "changePercent": format_signed_percent(result["changePercent"]),
    }


async def get_market_overview(provider: MarketDataProvider) -> ResultEnvelope:
    results: List[Dict[str, Any]] = await asyncio.gather(
        *(_fetch_index(provider, index["ticker"], index["name"]) for index in INDICES)
    )

    if not any(result["available"] for result in results):
        raise UpstreamDataError(
            "Unable to load market data at this time. "
            "Please check your Polygon.io API key and permissions."
        )

    table = (
        TableBuilder()
        .add_columns([
            {"key": "name", "header": "Index", "type": "text"},
            {"key": "price", "header": "Price", "type": "text"},
            {"key": "change", "header": "Change", "type": "text"},
            {"key": "changePercent", "header": "%", "type": "text"},
        ])
        .rows(_table_row(result) for result in results)
        .build()
    )

    chart = (
        ChartBuilder()
        .type("line")
        .title("Major Indices")
        .description("Previous close by index")
        .chart_data(
            {"time": result["name"], "price": result["price"]}
            for result in results
            if result["available"]
        )
        .data_keys(x="time", y="price", name="Price")
        .build()
    )

    headline = next(result for result in results if result["name"] == HEADLINE_INDEX)
    return ResultEnvelope.ok(
        text=f"Market Overview - {HEADLINE_INDEX}: {headline['changePercent']:.2f}%",
        data=results,
        ui=CardBuilder().add_child(table).add_child(chart).build(),
    )


MARKET_OVERVIEW_WIDGET = PinnedWidget(
    id="marketOverview",
    name="Market Overview",
    description="Shows current status of major market indices",
    label="Markets",
    icon="chart-line",
    get_widget=get_market_overview,
)
