from pydantic import BaseModel, ConfigDict, Field


class CallerContext(BaseModel):
    """
    Identity of the invoking agent or user.

    Passed read-only to every handler. Used for logging and
    tracing only, never for authorization inside the core.
    Extra identifying fields supplied by the host are kept.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(..., min_length=1, description="Caller identifier")


# Caller used for pinned widgets, which are invoked without a caller.
PINNED_CALLER = CallerContext(id="pinned")
