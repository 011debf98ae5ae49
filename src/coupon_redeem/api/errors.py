"""Exception-to-response mapping.

Every refused redemption and every malformed request body becomes a
``400`` whose ``message`` is the literal failure text.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from coupon_redeem.core.exceptions import RedemptionError

logger = logging.getLogger(__name__)


async def redemption_error_handler(request: Request, exc: RedemptionError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": exc.message},
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = [error["msg"] for error in exc.errors()]
    logger.debug(f"Rejected request body on {request.url.path}: {messages}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": messages[0] if messages else "Bad Request", "errors": messages},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the 400 handlers on an application."""
    app.add_exception_handler(RedemptionError, redemption_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
