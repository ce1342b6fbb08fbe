"""API error contract

Use-case errors are raised as ClientError and rendered as
{"error": {"code": ..., "message": ...}}.
"""

import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """Use-case error surfaced to an HTTP client"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} ({exc.error.reason})")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.error.code}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.error.code, "message": exc.error.message}},
    )


def status_for(error: Error) -> int:
    """HTTP status for a use-case error code"""
    if error.code.endswith("_NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    if error.code in ("INVOICE_ALREADY_EXISTS", "AGREEMENT_ALREADY_SIGNED", "AGREEMENT_VOIDED"):
        return status.HTTP_409_CONFLICT
    if error.code.endswith("_FAILED"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST
