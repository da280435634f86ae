"""Interface layer error handling.

Maps the login error taxonomy onto HTTP responses of the form
``{"error": <kind>, "detail": <client-safe message>}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from libre.domain.error import ErrorKind, LoginError, NotFoundError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.CLIENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INFRASTRUCTURE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.PROTOCOL: status.HTTP_502_BAD_GATEWAY,
}


async def login_error_handler(request: Request, exc: LoginError) -> JSONResponse:
    """Render a classified login failure.

    Internal messages stay in the logs; only ``exc.detail`` reaches the client.
    """
    if exc.kind == ErrorKind.INFRASTRUCTURE:
        logger.error(
            f"Login failed ({exc.kind.value}) on {request.url.path}: {exc}"
        )
    else:
        logger.warning(
            f"Login failed ({exc.kind.value}) on {request.url.path}: {exc}"
        )

    return JSONResponse(
        status_code=STATUS_BY_KIND[exc.kind],
        content={"error": exc.kind.value, "detail": exc.detail},
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning(f"{exc.resource} not found on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "not_found", "detail": f"{exc.resource} not found"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register domain error handlers on the application."""
    app.add_exception_handler(LoginError, login_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
