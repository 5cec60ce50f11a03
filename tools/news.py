"""Stock News Tool"""

from typing import Any, Dict

from providers.base import MarketDataProvider
from schemas.context import CallerContext
from schemas.envelope import ResultEnvelope
from tools.base import FieldSpec, FieldType, InputSchema, ToolContract, TICKER_FIELD
from tools.formatting import format_date_str
from ui.builders import TableBuilder

DEFAULT_LIMIT = 5


async def get_stock_news(
    params: Dict[str, Any],
    caller: CallerContext,
    provider: MarketDataProvider,
) -> ResultEnvelope:
    ticker = params["ticker"]
    results = await provider.ticker_news(ticker, params["limit"])

    articles = [
        {
            "title": article.title,
            "publisher": article.publisher.name,
            "timestamp": article.published_utc,
            "url": article.article_url,
        }
        for article in results
    ]

    table = (
        TableBuilder()
        .add_columns([
            {"key": "publisher", "header": "Source", "type": "text"},
            {"key": "title", "header": "Title", "type": "text"},
            {"key": "url", "header": "Link", "type": "link"},
            {"key": "timestamp", "header": "Published", "type": "text"},
        ])
        .rows(
            {
                **article,
                "url": {"text": "Read More", "url": article["url"]},
                "timestamp": format_date_str(article["timestamp"]),
            }
            for article in articles
        )
        .build()
    )

    return ResultEnvelope.ok(
        text=f"Found {len(articles)} news articles for {ticker}",
        data={"articles": articles},
        ui=table,
    )


STOCK_NEWS_TOOL = ToolContract(
    id="get-stock-news",
    name="Get Stock News",
    description="Fetches latest news articles for a ticker symbol",
    input_schema=InputSchema(
        fields=[
            TICKER_FIELD,
            FieldSpec(
                name="limit",
                type=FieldType.INTEGER,
                required=False,
                default=DEFAULT_LIMIT,
                description="Number of news items to fetch (default 5)",
            ),
        ],
        description="Input parameters for the news request",
    ),
    output_description="Latest stock news articles",
    handler=get_stock_news,
)
