# Market data providers
from providers.base import (
    AggregateBar,
    Dividend,
    MarketDataProvider,
    NewsArticle,
    ProviderError,
    Publisher,
    Split,
    TickerDetails,
)
from providers.polygon import PolygonClient

__all__ = [
    "AggregateBar",
    "Dividend",
    "MarketDataProvider",
    "NewsArticle",
    "ProviderError",
    "Publisher",
    "Split",
    "TickerDetails",
    "PolygonClient",
]
