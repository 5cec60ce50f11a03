import pytest
from typing import Any, Dict, List, Optional

from observability.collector import TraceCollector
from observability.sink import MemoryTraceSink
from providers.base import (
    AggregateBar,
    Dividend,
    MarketDataProvider,
    NewsArticle,
    Split,
    TickerDetails,
)
from schemas.context import CallerContext
from tools.registry import build_default_registry


class StubProvider(MarketDataProvider):
    """
    In-memory provider.

    Tests fill the dicts keyed by ticker; `failures` maps a ticker
    to an exception raised by previous_close().
    """

    def __init__(self):
        self.bars: Dict[str, List[Dict[str, Any]]] = {}
        self.prev: Dict[str, List[Dict[str, Any]]] = {}
        self.news: Dict[str, List[Dict[str, Any]]] = {}
        self.details: Dict[str, Dict[str, Any]] = {}
        self.dividend_records: Dict[str, List[Dict[str, Any]]] = {}
        self.split_records: Dict[str, List[Dict[str, Any]]] = {}
        self.failures: Dict[str, Exception] = {}
        self.calls: List[tuple] = []

    async def aggregates(self, ticker, multiplier, timespan, from_date, to_date, sort=None, limit=None):
        self.calls.append(("aggregates", ticker, multiplier, timespan, from_date, to_date, sort, limit))
        return [AggregateBar.model_validate(bar) for bar in self.bars.get(ticker, [])]

    async def previous_close(self, ticker):
        self.calls.append(("previous_close", ticker))
        if ticker in self.failures:
            raise self.failures[ticker]
        return [AggregateBar.model_validate(bar) for bar in self.prev.get(ticker, [])]

    async def ticker_news(self, ticker, limit):
        self.calls.append(("ticker_news", ticker, limit))
        return [NewsArticle.model_validate(item) for item in self.news.get(ticker, [])[:limit]]

    async def ticker_details(self, ticker) -> Optional[TickerDetails]:
        self.calls.append(("ticker_details", ticker))
        data = self.details.get(ticker)
        return TickerDetails.model_validate(data) if data else None

    async def dividends(self, ticker, limit):
        self.calls.append(("dividends", ticker, limit))
        return [Dividend.model_validate(item) for item in self.dividend_records.get(ticker, [])[:limit]]

    async def splits(self, ticker, limit):
        self.calls.append(("splits", ticker, limit))
        return [Split.model_validate(item) for item in self.split_records.get(ticker, [])[:limit]]


@pytest.fixture
def provider():
    return StubProvider()


@pytest.fixture
def trace_sink():
    return MemoryTraceSink()


@pytest.fixture
def registry(provider, trace_sink):
    return build_default_registry(
        provider=provider,
        trace_collector=TraceCollector(sink=trace_sink),
        timeout_seconds=5.0,
    )


@pytest.fixture
def caller():
    return CallerContext(id="agent-123")
