"""Stock Dividends Tool"""

from typing import Any, Dict

from providers.base import MarketDataProvider
from schemas.context import CallerContext
from schemas.envelope import ResultEnvelope
from tools.base import FieldSpec, FieldType, InputSchema, ToolContract, TICKER_FIELD
from tools.formatting import format_date_str, format_money
from ui.builders import TableBuilder

DEFAULT_LIMIT = 10


async def get_stock_dividends(
    params: Dict[str, Any],
    caller: CallerContext,
    provider: MarketDataProvider,
) -> ResultEnvelope:
    ticker = params["ticker"]
    records = await provider.dividends(ticker, params["limit"])

    table = (
        TableBuilder()
        .add_columns([
            {"key": "date", "header": "Ex-Dividend Date", "type": "text"},
            {"key": "amount", "header": "Amount", "type": "text"},
            {"key": "payDate", "header": "Pay Date", "type": "text"},
        ])
        .rows(
            {
                "date": format_date_str(record.ex_dividend_date),
                "amount": format_money(record.cash_amount),
                "payDate": format_date_str(record.pay_date),
            }
            for record in records
        )
        .build()
    )

    return ResultEnvelope.ok(
        text=f"Retrieved last {len(records)} dividend records for {ticker}",
        data=[record.model_dump(exclude_none=True) for record in records],
        ui=table,
    )


STOCK_DIVIDENDS_TOOL = ToolContract(
    id="get-stock-dividends",
    name="Get Stock Dividends",
    description="Fetches dividend history for a ticker symbol",
    input_schema=InputSchema(
        fields=[
            TICKER_FIELD,
            FieldSpec(
                name="limit",
                type=FieldType.INTEGER,
                required=False,
                default=DEFAULT_LIMIT,
                description="Number of dividend records to fetch (default 10)",
            ),
        ],
        description="Input parameters for the dividends request",
    ),
    output_description="Dividend history information",
    handler=get_stock_dividends,
)
