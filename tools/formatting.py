"""Display formatting shared by the market data tools."""

from datetime import datetime, timezone
from typing import Optional, Union

NOT_AVAILABLE = "N/A"


def format_date_ms(timestamp_ms: Optional[Union[int, float]]) -> str:
    """Epoch milliseconds -> YYYY-MM-DD (UTC)."""
    if timestamp_ms is None:
        return NOT_AVAILABLE
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d")


def format_date_str(value: Optional[str]) -> str:
    """ISO date or datetime string -> YYYY-MM-DD. Unparseable input is returned as-is."""
    if not value:
        return NOT_AVAILABLE
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return value


def format_money(value: Optional[float], separators: bool = False) -> str:
    if value is None:
        return NOT_AVAILABLE
    if separators:
        return f"${value:,.2f}"
    return f"${value:.2f}"


def format_signed_money(value: float) -> str:
    """+$1.50 / -$1.50"""
    sign = "+" if value >= 0 else "-"
    return f"{sign}${abs(value):,.2f}"


def format_signed_percent(value: float) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:,.2f}%"


def format_count(value: Optional[float]) -> str:
    """Thousands separators, no decimals for whole numbers."""
    if value is None:
        return NOT_AVAILABLE
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"
