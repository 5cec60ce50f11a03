"""Stock Chart Tool"""

from typing import Any, Dict

from providers.base import MarketDataProvider
from schemas.context import CallerContext
from schemas.envelope import ResultEnvelope
from tools.base import FieldSpec, FieldType, InputSchema, ToolContract, TICKER_FIELD
from tools.errors import UpstreamDataError
from tools.formatting import format_date_ms
from ui.builders import ChartBuilder

TIMESPANS = ["minute", "hour", "day", "week", "month", "quarter", "year"]


async def get_stock_chart(
    params: Dict[str, Any],
    caller: CallerContext,
    provider: MarketDataProvider,
) -> ResultEnvelope:
    ticker = params["ticker"]
    multiplier = params["multiplier"]
    timespan = params["timespan"]
    from_date = params["from"]
    to_date = params["to"]

    bars = await provider.aggregates(ticker, multiplier, timespan, from_date, to_date)
    if not bars:
        raise UpstreamDataError(f"No price history available for {ticker} from {from_date} to {to_date}")

    chart = (
        ChartBuilder()
        .type("line")
        .title(f"{ticker} Price History")
        .description(f"From {from_date} to {to_date}")
        .chart_data({"date": format_date_ms(bar.timestamp), "price": bar.close} for bar in bars)
        .data_keys(x="date", y="price", name="Price")
        .footer(f"{timespan}ly price data with multiplier {multiplier}")
        .build()
    )

    return ResultEnvelope.ok(
        text=f"Retrieved historical data for {ticker} from {from_date} to {to_date}",
        data={"results": [bar.model_dump(by_alias=True, exclude_none=True) for bar in bars]},
        ui=chart,
    )


STOCK_CHART_TOOL = ToolContract(
    id="get-stock-chart",
    name="View Stock Chart",
    description="View historical price chart for a ticker symbol",
    input_schema=InputSchema(
        fields=[
            TICKER_FIELD,
            FieldSpec(name="multiplier", type=FieldType.INTEGER, description="Time multiplier"),
            FieldSpec(name="timespan", type=FieldType.ENUM, enum_values=TIMESPANS, description="Bar size"),
            FieldSpec(name="from", type=FieldType.STRING, description="From date (YYYY-MM-DD)"),
            FieldSpec(name="to", type=FieldType.STRING, description="To date (YYYY-MM-DD)"),
        ],
        description="Input parameters for chart data request",
    ),
    output_description="Historical price data",
    handler=get_stock_chart,
)
