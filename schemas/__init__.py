# Envelope and caller schemas
from schemas.context import CallerContext, PINNED_CALLER
from schemas.envelope import ErrorCode, ErrorInfo, ResultEnvelope

__all__ = ["CallerContext", "PINNED_CALLER", "ErrorCode", "ErrorInfo", "ResultEnvelope"]
