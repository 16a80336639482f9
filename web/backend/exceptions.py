#!/usr/bin/env python3
"""
Error handlers for the web application.

Scoring errors carry a machine-readable code that decides the HTTP status;
the reason is already safe to show to the user.
"""

import logging
from typing import Dict

from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.errors import (
    APIError,
    NotFoundError,
    PersistenceError,
    QuotaExceededError,
    RateLimitError,
    ScoringError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_CODE: Dict[str, int] = {
    ValidationError.code: 400,
    NotFoundError.code: 404,
    RateLimitError.code: 429,
    QuotaExceededError.code: 503,
    APIError.code: 502,
    PersistenceError.code: 500,
}


async def scoring_exception_handler(
    request: Request,
    exc: ScoringError
) -> JSONResponse:
    """
    Handle scoring pipeline errors.

    Args:
        request: The FastAPI request.
        exc: The scoring error.

    Returns:
        JSONResponse with error details.
    """
    status_code = STATUS_BY_CODE.get(exc.code, 500)
    if status_code >= 500:
        logger.error(f"Scoring error in {request.url.path}: {exc.code} {exc.reason}")
    else:
        logger.info(f"Scoring request rejected in {request.url.path}: {exc.code} {exc.reason}")

    content = {
        "success": False,
        "error": exc.reason,
        "code": exc.code
    }
    headers = None
    if isinstance(exc, RateLimitError) and exc.retry_after_seconds is not None:
        content["retry_after_seconds"] = exc.retry_after_seconds
        headers = {"Retry-After": str(exc.retry_after_seconds)}

    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "code": "HTTP_ERROR"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "code": "INTERNAL_ERROR"
        }
    )
