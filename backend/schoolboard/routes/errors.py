"""Map service exceptions to HTTP responses."""

import logging

from fastapi import HTTPException

from ..errors import (
    DuplicateRecordError,
    InvalidScopeError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)


def to_http_exception(exc: Exception, action: str) -> HTTPException:
    """Translate an exception raised while handling ``action`` into an HTTPException."""
    if isinstance(exc, HTTPException):
        return exc
    if isinstance(exc, InvalidScopeError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, RecordNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, DuplicateRecordError):
        return HTTPException(status_code=409, detail=str(exc))

    logger.error(f"API Error ({action}): {exc}")
    return HTTPException(status_code=500, detail=str(exc) or f"Failed to {action}")
