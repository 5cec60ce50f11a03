"""Stock Splits Tool"""

from typing import Any, Dict, Optional

from providers.base import MarketDataProvider
from schemas.context import CallerContext
from schemas.envelope import ResultEnvelope
from tools.base import FieldSpec, FieldType, InputSchema, ToolContract, TICKER_FIELD
from tools.formatting import NOT_AVAILABLE, format_date_str
from ui.builders import TableBuilder

DEFAULT_LIMIT = 5


def _ratio_part(value: Optional[float]) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:g}"


async def get_stock_splits(
    params: Dict[str, Any],
    caller: CallerContext,
    provider: MarketDataProvider,
) -> ResultEnvelope:
    ticker = params["ticker"]
    records = await provider.splits(ticker, params["limit"])

    table = (
        TableBuilder()
        .add_columns([
            {"key": "date", "header": "Execution Date", "type": "text"},
            {"key": "ratio", "header": "Split Ratio", "type": "text"},
        ])
        .rows(
            {
                "date": format_date_str(record.execution_date),
                "ratio": f"{_ratio_part(record.split_to)}:{_ratio_part(record.split_from)}",
            }
            for record in records
        )
        .build()
    )

    return ResultEnvelope.ok(
        text=f"Retrieved last {len(records)} stock splits for {ticker}",
        data=[record.model_dump(exclude_none=True) for record in records],
        ui=table,
    )


STOCK_SPLITS_TOOL = ToolContract(
    id="get-stock-splits",
    name="Get Stock Splits",
    description="Fetches stock split history for a ticker symbol",
    input_schema=InputSchema(
        fields=[
            TICKER_FIELD,
            FieldSpec(
                name="limit",
                type=FieldType.INTEGER,
                required=False,
                default=DEFAULT_LIMIT,
                description="Number of split records to fetch (default 5)",
            ),
        ],
        description="Input parameters for the splits request",
    ),
    output_description="Stock split history information",
    handler=get_stock_splits,
)
