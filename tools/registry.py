"""
Tool Registry

Explicit tool registration and uniform dispatch.
No auto-discovery - all tools and widgets are registered explicitly at startup.

DESIGN RULES:
- Registration happens once, before serving; duplicate ids fail fast
- Registry is read-only during dispatch (no locking needed)
- Input is validated before the handler runs
- No raw fault crosses invoke()/invoke_widget(): every failure
  becomes an error-shaped ResultEnvelope
- The provider is injected once and threaded into every handler
"""

import asyncio
import inspect
import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from observability.collector import TraceCollector
from schemas.context import CallerContext, PINNED_CALLER
from schemas.envelope import ErrorCode, ResultEnvelope
from tools.base import PinnedWidget, ToolContract
from tools.errors import (
    DuplicateIdError,
    NotFoundError,
    UpstreamDataError,
    ValidationError,
)


logger = logging.getLogger(__name__)


def _is_async(func: Any) -> bool:
    """True for coroutine functions and objects with an async __call__."""
    return inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(getattr(func, "__call__", None))


def _message(exc: Exception, fallback: str) -> str:
    return str(exc).strip() or fallback


class ToolRegistry:
    """
    Central registry and dispatcher for tools and pinned widgets.

    Tool and widget ids share one namespace.
    """

    TIMEOUT_SECONDS = 30.0  # Max time per handler execution

    def __init__(
        self,
        provider: Any = None,
        trace_collector: Optional[TraceCollector] = None,
        timeout_seconds: Optional[float] = None,
    ):
        """
        Args:
            provider: Market data client handed to every handler
            trace_collector: Receives one trace per invocation (disabled if None)
            timeout_seconds: Per-call handler timeout
        """
        self._provider = provider
        self._tools: Dict[str, ToolContract] = {}
        self._widgets: Dict[str, PinnedWidget] = {}
        self._trace_collector = trace_collector or TraceCollector(enabled=False)
        self._timeout = timeout_seconds if timeout_seconds is not None else self.TIMEOUT_SECONDS

    @property
    def provider(self) -> Any:
        return self._provider

    # --- Registration ---

    def _check_unique(self, item_id: str) -> None:
        if item_id in self._tools or item_id in self._widgets:
            raise DuplicateIdError(f"Id '{item_id}' already registered")

    def register(self, contract: ToolContract) -> None:
        """
        Register a tool contract.

        Raises:
            DuplicateIdError: if the id is already taken
        """
        self._check_unique(contract.id)
        self._tools[contract.id] = contract
        logger.debug(f"Registered tool {contract.id}")

    def register_widget(self, widget: PinnedWidget) -> None:
        self._check_unique(widget.id)
        self._widgets[widget.id] = widget
        logger.debug(f"Registered widget {widget.id}")

    def get(self, tool_id: str) -> ToolContract:
        try:
            return self._tools[tool_id]
        except KeyError as exc:
            raise NotFoundError(f"Unknown tool '{tool_id}'") from exc

    def get_widget(self, widget_id: str) -> PinnedWidget:
        try:
            return self._widgets[widget_id]
        except KeyError as exc:
            raise NotFoundError(f"Unknown widget '{widget_id}'") from exc

    def list_tools(self) -> List[ToolContract]:
        return list(self._tools.values())

    def list_widgets(self) -> List[PinnedWidget]:
        return list(self._widgets.values())

    # --- Dispatch ---

    async def invoke(
        self,
        tool_id: str,
        raw_input: Optional[Mapping[str, Any]],
        caller: CallerContext,
    ) -> ResultEnvelope:
        """
        Validate input, run the tool handler and normalize the outcome.

        Flow:
        1. Look up contract (unknown id -> not_found envelope)
        2. Validate input (failure -> validation_error envelope, handler not called)
        3. Run handler(normalized_input, caller, provider) under timeout
        4. Handler failure -> error envelope; success -> handler envelope unchanged

        Returns:
            ResultEnvelope (never raises for runtime failures)
        """
        request_id = str(uuid.uuid4())
        started_at = datetime.now()
        logger.info(f"User / Agent {caller.id} requested {tool_id}")

        try:
            contract = self.get(tool_id)
        except NotFoundError as e:
            logger.warning(f"[{request_id}] {e}")
            envelope = ResultEnvelope.fail(ErrorCode.NOT_FOUND, str(e))
            self._trace(request_id, tool_id, caller.id, started_at, envelope)
            return envelope

        try:
            params = contract.validate(raw_input)
        except ValidationError as e:
            logger.warning(f"[{request_id}] Invalid input for {tool_id} from {caller.id}: {e}")
            envelope = ResultEnvelope.fail(
                ErrorCode.VALIDATION_ERROR,
                str(e),
                text=f"Invalid input for {contract.name}: {e}",
                field=e.field,
            )
            self._trace(request_id, tool_id, caller.id, started_at, envelope)
            return envelope

        envelope = await self._run(
            request_id,
            label=contract.name,
            item_id=tool_id,
            caller_id=caller.id,
            func=contract.handler,
            args=(params, caller, self._provider),
        )
        self._trace(request_id, tool_id, caller.id, started_at, envelope, {"input": params})
        return envelope

    async def invoke_widget(self, widget_id: str) -> ResultEnvelope:
        """Same contract as invoke() without input or validation."""
        request_id = str(uuid.uuid4())
        started_at = datetime.now()
        caller_id = PINNED_CALLER.id

        try:
            widget = self.get_widget(widget_id)
        except NotFoundError as e:
            logger.warning(f"[{request_id}] {e}")
            envelope = ResultEnvelope.fail(ErrorCode.NOT_FOUND, str(e))
            self._trace(request_id, widget_id, caller_id, started_at, envelope)
            return envelope

        envelope = await self._run(
            request_id,
            label=widget.name,
            item_id=widget_id,
            caller_id=caller_id,
            func=widget.get_widget,
            args=(self._provider,),
        )
        self._trace(request_id, widget_id, caller_id, started_at, envelope, {"kind": "widget"})
        return envelope

    async def _run(
        self,
        request_id: str,
        label: str,
        item_id: str,
        caller_id: str,
        func: Callable[..., Any],
        args: Tuple[Any, ...],
    ) -> ResultEnvelope:
        """Execute a handler under timeout and map any failure to an envelope."""

        async def _execute():
            if _is_async(func):
                return await func(*args)
            # Sync handlers run in a worker thread so the timeout can fire
            # and other invocations keep running
            result = await asyncio.to_thread(func, *args)
            if inspect.isawaitable(result):
                result = await result
            return result

        try:
            result = await asyncio.wait_for(_execute(), timeout=self._timeout)
        except asyncio.TimeoutError:
            logger.error(f"[{request_id}] {item_id} timed out after {self._timeout}s (caller {caller_id})")
            return ResultEnvelope.fail(
                ErrorCode.TIMEOUT,
                f"{label} timed out. Please try again.",
            )
        except UpstreamDataError as e:
            logger.warning(f"[{request_id}] {item_id} upstream data error (caller {caller_id}): {e}")
            return ResultEnvelope.fail(
                ErrorCode.UPSTREAM_DATA_ERROR,
                _message(e, f"No data available from {label}"),
            )
        except ValidationError as e:
            logger.warning(f"[{request_id}] {item_id} rejected input (caller {caller_id}): {e}")
            return ResultEnvelope.fail(
                ErrorCode.VALIDATION_ERROR,
                _message(e, f"Invalid input for {label}"),
                field=e.field,
            )
        except Exception as e:
            logger.exception(f"[{request_id}] {item_id} failed (caller {caller_id})")
            return ResultEnvelope.fail(
                ErrorCode.INTERNAL_ERROR,
                f"{label} failed: {_message(e, type(e).__name__)}",
            )

        if not isinstance(result, ResultEnvelope):
            logger.error(f"[{request_id}] {item_id} returned {type(result).__name__}, not ResultEnvelope")
            return ResultEnvelope.fail(
                ErrorCode.INTERNAL_ERROR,
                f"{label} returned an invalid result",
            )
        return result

    def _trace(
        self,
        request_id: str,
        item_id: str,
        caller_id: str,
        started_at: datetime,
        envelope: ResultEnvelope,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        error = envelope.error
        self._trace_collector.capture(
            request_id=request_id,
            tool_id=item_id,
            caller_id=caller_id,
            started_at=started_at,
            success=error is None,
            error_code=error.code.value if error else None,
            error=error.message if error else None,
            metadata=metadata,
        )


# --- Tool Registration Bootstrap ---

def bootstrap_tools(registry: ToolRegistry, include_price_table: bool = True) -> ToolRegistry:
    """
    Register the market data tools and widgets.

    Called once at startup to populate the registry.
    """
    from tools.chart import STOCK_CHART_TOOL
    from tools.details import STOCK_DETAILS_TOOL
    from tools.dividends import STOCK_DIVIDENDS_TOOL
    from tools.market_overview import MARKET_OVERVIEW_WIDGET
    from tools.news import STOCK_NEWS_TOOL
    from tools.price import build_price_tool
    from tools.splits import STOCK_SPLITS_TOOL

    for contract in (
        build_price_tool(include_table=include_price_table),
        STOCK_NEWS_TOOL,
        STOCK_CHART_TOOL,
        STOCK_DETAILS_TOOL,
        STOCK_DIVIDENDS_TOOL,
        STOCK_SPLITS_TOOL,
    ):
        registry.register(contract)

    registry.register_widget(MARKET_OVERVIEW_WIDGET)
    return registry


def build_default_registry(
    provider: Any,
    trace_collector: Optional[TraceCollector] = None,
    timeout_seconds: Optional[float] = None,
    include_price_table: bool = True,
) -> ToolRegistry:
    """Return a registry pre-populated with the built-in tools."""
    registry = ToolRegistry(
        provider=provider,
        trace_collector=trace_collector,
        timeout_seconds=timeout_seconds,
    )
    return bootstrap_tools(registry, include_price_table=include_price_table)
