"""
Market Data Provider Interface

Outbound boundary consumed by tool handlers.
Records mirror the provider's field names; unknown fields are kept.

DESIGN RULES:
- Every list operation returns a possibly-empty ordered list
- An empty result is a valid outcome, not a transport fault
- Transport faults and HTTP errors raise ProviderError
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from tools.errors import UpstreamDataError


class ProviderError(UpstreamDataError):
    """Raised when the provider cannot be reached or rejects a request."""


class _Record(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class AggregateBar(_Record):
    """One OHLCV bar. Short aliases match the provider's wire format."""
    open: Optional[float] = Field(default=None, alias="o")
    close: Optional[float] = Field(default=None, alias="c")
    high: Optional[float] = Field(default=None, alias="h")
    low: Optional[float] = Field(default=None, alias="l")
    volume: Optional[float] = Field(default=None, alias="v")
    vwap: Optional[float] = Field(default=None, alias="vw")
    timestamp: Optional[int] = Field(default=None, alias="t")


class Publisher(_Record):
    name: Optional[str] = None


class NewsArticle(_Record):
    title: str = ""
    publisher: Publisher = Field(default_factory=Publisher)
    published_utc: Optional[str] = None
    article_url: Optional[str] = None


class TickerDetails(_Record):
    ticker: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    market_cap: Optional[float] = None
    primary_exchange: Optional[str] = None
    sic_description: Optional[str] = None
    homepage_url: Optional[str] = None


class Dividend(_Record):
    ex_dividend_date: Optional[str] = None
    pay_date: Optional[str] = None
    cash_amount: Optional[float] = None


class Split(_Record):
    execution_date: Optional[str] = None
    split_from: Optional[float] = None
    split_to: Optional[float] = None


class MarketDataProvider(ABC):
    """
    Abstract market data source.

    Implementations:
    - PolygonClient (REST)
    - test stubs
    """

    @abstractmethod
    async def aggregates(
        self,
        ticker: str,
        multiplier: int,
        timespan: str,
        from_date: str,
        to_date: str,
        sort: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[AggregateBar]:
        """Aggregated price bars over a date range at a given granularity."""
        pass

    @abstractmethod
    async def previous_close(self, ticker: str) -> List[AggregateBar]:
        """Previous-session bar (zero or one element)."""
        pass

    @abstractmethod
    async def ticker_news(self, ticker: str, limit: int) -> List[NewsArticle]:
        pass

    @abstractmethod
    async def ticker_details(self, ticker: str) -> Optional[TickerDetails]:
        """Reference/profile details, None if the ticker is unknown."""
        pass

    @abstractmethod
    async def dividends(self, ticker: str, limit: int) -> List[Dividend]:
        pass

    @abstractmethod
    async def splits(self, ticker: str, limit: int) -> List[Split]:
        pass

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""
        return None
