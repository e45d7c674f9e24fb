"""Error Handlers — global exception handlers mapping every failure to the envelope.

Invariants:
    - RestaurantApiError → its own status and `{success: false, message}` body
    - RequestValidationError (malformed JSON / wrong body type) → 400
    - Unmatched route or method → 404 route envelope
    - Exception (catch-all) → 500, never leaks internals outside development mode

Design Decisions:
    - Four-layer handler: domain, request validation, HTTP routing, catch-all
    - `error` detail gated on Settings.development_mode, read per request
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from restaurant_api.config import get_settings
from restaurant_api.core.errors import RestaurantApiError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register restaurant domain/infrastructure error handler."""

    @app.exception_handler(RestaurantApiError)
    async def restaurant_error_handler(request: Request, exc: RestaurantApiError):
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(
                include_detail=get_settings().development_mode,
            ),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request body parsing error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Invalid request on {request.url.path}: {exc.errors()}",
        )
        content = {"success": False, "message": "Invalid request body"}
        if get_settings().development_mode:
            content["error"] = "; ".join(
                f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
                for e in exc.errors()
            )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=content,
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unknown path or method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "success": False,
                    "message": f"Route {request.method} {request.url.path} not found",
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details in production."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        content = {"success": False, "message": "Internal server error"}
        if get_settings().development_mode:
            content["error"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )
