"""
Polygon.io REST client.

Thin async wrapper over the endpoints the market data tools need.
One instance is shared across concurrent invocations; it holds
read-only credentials and a pooled httpx.AsyncClient.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from providers.base import (
    AggregateBar,
    Dividend,
    MarketDataProvider,
    NewsArticle,
    ProviderError,
    Split,
    TickerDetails,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.polygon.io"


def _segment(value: Any) -> str:
    """Escape caller input used as a single URL path segment."""
    return quote(str(value), safe="")


class PolygonClient(MarketDataProvider):
    """Async Polygon.io client."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            api_key: Polygon API key, sent as a bearer token
            base_url: API root
            timeout: Per-request timeout in seconds
            client: Pre-built AsyncClient (tests inject a MockTransport here)
        """
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        query = {key: value for key, value in (params or {}).items() if value is not None}
        headers = {"Authorization": f"Bearer {self._api_key}"}
        try:
            response = await self._client.get(path, params=query, headers=headers)
        except httpx.TimeoutException as exc:
            raise ProviderError(f"Market data request timed out: {path}") from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Market data request failed: {exc}") from exc

        if response.status_code == 404:
            # Unknown ticker: treated as "no data", not as a fault
            logger.debug(f"404 from provider for {path}")
            return {}

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                f"Market data provider returned HTTP {response.status_code} for {path}"
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError("Invalid JSON in market data response") from exc

        if not isinstance(data, dict):
            raise ProviderError("Malformed market data response")
        if data.get("status") == "ERROR":
            raise ProviderError(data.get("error") or data.get("message") or "Unknown provider error")
        return data

    @staticmethod
    def _results(data: Dict[str, Any]) -> List[Dict[str, Any]]:
        results = data.get("results") or []
        return results if isinstance(results, list) else [results]

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
        data = await self._get(
            f"/v2/aggs/ticker/{_segment(ticker)}/range/{multiplier}/{_segment(timespan)}/"
            f"{_segment(from_date)}/{_segment(to_date)}",
            {"sort": sort, "limit": limit},
        )
        return [AggregateBar.model_validate(item) for item in self._results(data)]

    async def previous_close(self, ticker: str) -> List[AggregateBar]:
        data = await self._get(f"/v2/aggs/ticker/{_segment(ticker)}/prev")
        return [AggregateBar.model_validate(item) for item in self._results(data)]

    async def ticker_news(self, ticker: str, limit: int) -> List[NewsArticle]:
        data = await self._get("/v2/reference/news", {"ticker": ticker, "limit": limit})
        return [NewsArticle.model_validate(item) for item in self._results(data)]

    async def ticker_details(self, ticker: str) -> Optional[TickerDetails]:
        data = await self._get(f"/v3/reference/tickers/{_segment(ticker)}")
        results = data.get("results")
        if not results:
            return None
        return TickerDetails.model_validate(results)

    async def dividends(self, ticker: str, limit: int) -> List[Dividend]:
        data = await self._get("/v3/reference/dividends", {"ticker": ticker, "limit": limit})
        return [Dividend.model_validate(item) for item in self._results(data)]

    async def splits(self, ticker: str, limit: int) -> List[Split]:
        data = await self._get("/v3/reference/splits", {"ticker": ticker, "limit": limit})
        return [Split.model_validate(item) for item in self._results(data)]
