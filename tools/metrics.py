"""
Derived Metrics

Percent-change is the only computation the tools perform.

DESIGN RULES:
- Pure functions, no side effects
- Sign preserved, rounded to 2 decimals
- A zero or missing baseline is replaced by 1 so the result is always defined
"""

from typing import Optional


def percent_change(open_price: Optional[float], close_price: Optional[float]) -> float:
    """
    Compute (close - open) / open * 100 rounded to 2 decimals.

    A missing close counts as no change. A zero or missing open is
    substituted with 1 as the denominator.
    """
    if close_price is None:
        return 0.0
    change = close_price - (open_price or 0.0)
    denominator = open_price or 1.0
    # `or 0.0` folds -0.0 into 0.0
    return round(change / denominator * 100, 2) or 0.0


def price_change(open_price: Optional[float], close_price: Optional[float]) -> float:
    """Absolute close - open, 0.0 when close is missing."""
    if close_price is None:
        return 0.0
    return close_price - (open_price or 0.0)


def format_change(percent: float) -> str:
    """Display string for a trend, e.g. '5.00% change'."""
    return f"{percent:.2f}% change"
