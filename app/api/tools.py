"""
Tools API Routes

Thin delegation layer to the tool registry.
Contains NO business logic, validation or tool-specific code.

DESIGN RULE: envelopes are returned as-is. The only transport-level
distinction is an unknown id, which is answered with HTTP 404.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.core.config import settings
from app.core.metadata import EXAMPLE_QUERIES, SERVICE_TAGS
from app.dependencies import get_registry
from schemas.context import CallerContext
from schemas.envelope import ErrorCode, ResultEnvelope
from tools.registry import ToolRegistry


router = APIRouter()


class InvokeRequest(BaseModel):
    """API request for one tool invocation."""
    input: Dict[str, Any] = Field(default_factory=dict, description="Raw tool input")
    caller: CallerContext = Field(..., description="Invoking agent/user")


def _respond(envelope: ResultEnvelope) -> JSONResponse:
    status = 404 if envelope.error and envelope.error.code == ErrorCode.NOT_FOUND else 200
    return JSONResponse(status_code=status, content=envelope.to_wire())


@router.get("/metadata")
def metadata() -> Dict[str, Any]:
    return {
        "title": settings.service_title,
        "description": settings.service_description,
        "version": settings.service_version,
        "tags": SERVICE_TAGS,
        "exampleQueries": EXAMPLE_QUERIES,
    }


@router.get("/tools")
def list_tools(registry: ToolRegistry = Depends(get_registry)) -> List[Dict[str, Any]]:
    return [contract.to_dict() for contract in registry.list_tools()]


@router.get("/widgets")
def list_widgets(registry: ToolRegistry = Depends(get_registry)) -> List[Dict[str, Any]]:
    return [widget.to_dict() for widget in registry.list_widgets()]


@router.post("/tools/{tool_id}")
async def invoke_tool(
    tool_id: str,
    request: InvokeRequest,
    registry: ToolRegistry = Depends(get_registry),
) -> JSONResponse:
    """
    Invoke a tool.

    Validation, execution and failure mapping happen in the registry.
    """
    envelope = await registry.invoke(tool_id, request.input, request.caller)
    return _respond(envelope)


@router.get("/widgets/{widget_id}")
async def invoke_widget(
    widget_id: str,
    registry: ToolRegistry = Depends(get_registry),
) -> JSONResponse:
    envelope = await registry.invoke_widget(widget_id)
    return _respond(envelope)
