from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings.
    """
    model_config = SettingsConfigDict(env_prefix="MARKET_TOOLS_", env_file=".env", extra="ignore")

    # Service Info
    service_name: str = "market-data-tools"
    service_title: str = "Stock Prices and Data Service"
    service_description: str = (
        "Real-time stock prices, news, historical data, stock splits, "
        "dividends, and detailed company information"
    )
    service_version: str = "1.0.0"
    environment: str = "local"
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 2022

    # Market data provider (Polygon.io)
    polygon_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("MARKET_TOOLS_POLYGON_API_KEY", "POLYGON_API_KEY"),
    )
    polygon_base_url: str = "https://api.polygon.io"
    provider_timeout_seconds: float = 10.0

    # Dispatch
    tool_timeout_seconds: float = 30.0
    price_include_stats_table: bool = True

    # Tracing
    trace_enabled: bool = True
    trace_format: str = "console"  # console | json

settings = Settings()
