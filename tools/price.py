"""
Stock Price Tool

Latest daily bar for a ticker plus a short price history.
"""

from datetime import date, timedelta
from typing import Any, Dict, Optional

from providers.base import MarketDataProvider
from schemas.context import CallerContext
from schemas.envelope import ResultEnvelope
from tools.base import InputSchema, ToolContract, TICKER_FIELD
from tools.errors import UpstreamDataError
from tools.formatting import format_count, format_date_ms, format_money
from tools.metrics import format_change, percent_change, price_change
from ui.builders import CardBuilder, ChartBuilder, TableBuilder

LOOKBACK_DAYS = 7  # calendar days, covers 5 trading days
BAR_LIMIT = 10


def _stats_table(bar) -> Any:
    return (
        TableBuilder()
        .add_columns([
            {"key": "metric", "header": "Metric", "type": "text"},
            {"key": "value", "header": "Value", "type": "text"},
        ])
        .rows([
            {"metric": "Volume", "value": format_count(bar.volume)},
            {"metric": "Open", "value": format_money(bar.open)},
            {"metric": "High", "value": format_money(bar.high)},
            {"metric": "Low", "value": format_money(bar.low)},
            {"metric": "VWAP", "value": format_money(bar.vwap)},
        ])
        .build()
    )


def build_price_tool(include_table: bool = True, today: Optional[date] = None) -> ToolContract:
    """
    Args:
        include_table: Attach the Volume/Open/High/Low/VWAP table to the card
        today: Fixed end date (defaults to the current date at call time)
    """

    async def handler(
        params: Dict[str, Any],
        caller: CallerContext,
        provider: MarketDataProvider,
    ) -> ResultEnvelope:
        ticker = params["ticker"]
        end = today or date.today()
        start = end - timedelta(days=LOOKBACK_DAYS)

        bars = await provider.aggregates(
            ticker,
            1,
            "day",
            start.isoformat(),
            end.isoformat(),
            sort="desc",
            limit=BAR_LIMIT,
        )
        if not bars or bars[0].close is None:
            raise UpstreamDataError(f"No data available for {ticker}")

        latest = bars[0]
        change = price_change(latest.open, latest.close)
        change_percent = percent_change(latest.open, latest.close)

        # Bars arrive newest first; charts read oldest first
        chart = (
            ChartBuilder()
            .type("line")
            .title(f"{ticker} 5-Day Price History")
            .description("Price movement over the last 5 trading days")
            .chart_data(
                {"time": format_date_ms(bar.timestamp), "price": bar.close}
                for bar in reversed(bars)
            )
            .data_keys(x="time", y="price", name="Price")
            .trend(change_percent, format_change(change_percent))
            .build()
        )

        text = f"{ticker} is trading at {format_money(latest.close)}. Today's change: {change_percent:.2f}%"
        card = (
            CardBuilder()
            .title(f"{ticker} Stock Price and Stats")
            .content(text)
            .add_child(chart)
        )
        if include_table:
            card.add_child(_stats_table(latest))

        return ResultEnvelope.ok(
            text=text,
            data={
                "price": latest.close,
                "high": latest.high,
                "low": latest.low,
                "volume": latest.volume,
                "change": change,
                "changePercent": change_percent,
            },
            ui=card.build(),
        )

    return ToolContract(
        id="get-stock-price",
        name="Get Stock Price",
        description="Fetches current stock price, daily stats, and 24h price history for a ticker symbol",
        input_schema=InputSchema(
            fields=[TICKER_FIELD],
            description="Input parameters for the stock price request",
        ),
        output_description="Current stock price information",
        handler=handler,
    )
