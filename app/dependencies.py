"""
FastAPI Dependencies

All object creation happens here, not per request.
The provider client is built once from settings and handed to the registry.

RULE: FastAPI routes call exactly two entry points -
ToolRegistry.invoke() and ToolRegistry.invoke_widget()
"""

from functools import lru_cache

from app.core.config import settings
from observability.collector import TraceCollector
from observability.sink import ConsoleTraceSink, JsonTraceSink
from providers.polygon import PolygonClient
from tools.registry import ToolRegistry, build_default_registry


@lru_cache(maxsize=1)
def get_provider() -> PolygonClient:
    return PolygonClient(
        api_key=settings.polygon_api_key,
        base_url=settings.polygon_base_url,
        timeout=settings.provider_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_registry() -> ToolRegistry:
    """
    Create and cache the ToolRegistry singleton.

    Registration happens here, once, before the first request.
    A duplicate tool id fails startup.
    """
    sink = JsonTraceSink() if settings.trace_format == "json" else ConsoleTraceSink()
    return build_default_registry(
        provider=get_provider(),
        trace_collector=TraceCollector(sink=sink, enabled=settings.trace_enabled),
        timeout_seconds=settings.tool_timeout_seconds,
        include_price_table=settings.price_include_stats_table,
    )
