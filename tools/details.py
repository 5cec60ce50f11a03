"""Stock Ticker Details Tool"""

from typing import Any, Dict

from providers.base import MarketDataProvider
from schemas.context import CallerContext
from schemas.envelope import ResultEnvelope
from tools.base import InputSchema, ToolContract, TICKER_FIELD
from tools.errors import UpstreamDataError
from tools.formatting import NOT_AVAILABLE, format_count
from ui.builders import TableBuilder


async def get_stock_details(
    params: Dict[str, Any],
    caller: CallerContext,
    provider: MarketDataProvider,
) -> ResultEnvelope:
    ticker = params["ticker"]
    details = await provider.ticker_details(ticker)
    if details is None:
        raise UpstreamDataError(f"No details available for {ticker}")

    table = (
        TableBuilder()
        .add_columns([
            {"key": "field", "header": "Field", "type": "text"},
            {"key": "value", "header": "Value", "type": "text"},
        ])
        .rows([
            {"field": "Name", "value": details.name or NOT_AVAILABLE},
            {"field": "Description", "value": details.description or NOT_AVAILABLE},
            {"field": "Market Cap", "value": format_count(details.market_cap)},
            {"field": "Exchange", "value": details.primary_exchange or NOT_AVAILABLE},
            {"field": "Industry", "value": details.sic_description or NOT_AVAILABLE},
            {"field": "Homepage", "value": details.homepage_url or NOT_AVAILABLE},
        ])
        .build()
    )

    return ResultEnvelope.ok(
        text=(
            f"{ticker} ({details.name or NOT_AVAILABLE}) "
            f"is listed on {details.primary_exchange or NOT_AVAILABLE}"
        ),
        data=details.model_dump(exclude_none=True),
        ui=table,
    )


STOCK_DETAILS_TOOL = ToolContract(
    id="get-stock-details",
    name="Get Stock Details",
    description="Fetches detailed information about a stock ticker including name, market cap, exchange",
    input_schema=InputSchema(
        fields=[TICKER_FIELD],
        description="Input parameters for the ticker details request",
    ),
    output_description="Detailed ticker information",
    handler=get_stock_details,
)
