"""Map domain errors onto HTTP status codes."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from marketplace.api.registry import SessionNotFoundError
from marketplace.domain.errors import (
    ComparisonLimitError,
    InvalidTransitionError,
    MarketplaceError,
    PricingError,
    UnknownDestinationError,
    UnknownNegotiationError,
    UnknownOfferError,
)

logger = structlog.get_logger()

STATUS_CODES: dict[type[MarketplaceError], int] = {
    SessionNotFoundError: 404,
    UnknownOfferError: 404,
    UnknownDestinationError: 404,
    UnknownNegotiationError: 404,
    InvalidTransitionError: 409,
    PricingError: 422,
    ComparisonLimitError: 422,
}


def status_code_for(exc: MarketplaceError) -> int:
    """Return the HTTP status for *exc*, defaulting to 400."""
    for error_type, code in STATUS_CODES.items():
        if isinstance(exc, error_type):
            return code
    return 400


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers for ``MarketplaceError`` and model validation errors."""

    @app.exception_handler(MarketplaceError)
    async def marketplace_error(request: Request, exc: MarketplaceError) -> JSONResponse:
        code = status_code_for(exc)
        logger.info("request_rejected", path=request.url.path, status=code, error=str(exc))
        return JSONResponse(status_code=code, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def model_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        logger.info("request_invalid", path=request.url.path, errors=errors)
        return JSONResponse(status_code=422, content={"detail": errors})
