# backend/app/core/errors.py

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("authgate.errors")


def _message(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"

    # loc looks like ("body", "email"); the leading part is noise to clients
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    msg = first.get("msg", "invalid value")
    return f"Invalid {field}: {msg}" if field else f"Invalid request: {msg}"


def install_error_handlers(app: FastAPI) -> None:
    """Every error leaves the API as {"message": "..."}."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _message(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _message(400, _describe_validation_error(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        # details stay in the server log
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _message(500, "Server Error")
