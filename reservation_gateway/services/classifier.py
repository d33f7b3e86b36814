from __future__ import annotations

from fastapi import Response, status
from fastapi.responses import PlainTextResponse

from reservation_gateway.services.exceptions import (
    BackendRequestError,
    FeeParseError,
    ServiceError,
)

FEE_RETRIEVAL_FAILED = "fee retrieval failed"
NOT_FOUND = "unknown hospital, doctor, category or appointment"


def error_response(exc: ServiceError) -> Response:
    """Translate an orchestration failure into the outbound HTTP response."""

    if isinstance(exc, BackendRequestError):
        return PlainTextResponse(NOT_FOUND, status_code=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, FeeParseError):
        # The parse detail is logged, never returned.
        return PlainTextResponse(
            FEE_RETRIEVAL_FAILED, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return PlainTextResponse(
        str(exc), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )
