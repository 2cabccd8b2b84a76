# devicehub/error_handlers.py
"""
Global exception handlers.

  - DeviceHubError         -> its own status + {"error": {code, message, field?}}
  - HTTPException          -> its status + {"error": {code, message}} (404 -> NOT_FOUND)
  - RequestValidationError -> 400 with field-level details
  - Exception (catch-all)  -> 500, never leaks internal details
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from devicehub.core.errors import DeviceHubError

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(DeviceHubError)
    async def domain_error_handler(request: Request, exc: DeviceHubError):
        log = logger.error if exc.http_status >= 500 else logger.info
        log("%s on %s: %s", exc.code, request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
        logger.info("%s on %s: %s", code, request.url.path, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": {"code": code, "message": str(exc.detail)}},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Invalid request on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invalid request data",
                    "details": [
                        {
                            "field": ".".join(str(loc) for loc in e["loc"]),
                            "message": e["msg"],
                        }
                        for e in exc.errors()
                    ],
                }
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"code": "INTERNAL_ERROR", "message": "internal error"}},
        )
