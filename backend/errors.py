# backend/errors.py
"""Centralized mapping from exceptions to JSON error responses."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from agents.config import config

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "path", "query", "header"}


class AppError(Exception):
    """An error that carries the HTTP status it should be reported with."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(AppError):
    def __init__(self, message: str):
        super().__init__(message, 404)


def _log(request: Request, error: Exception, level: int = logging.ERROR) -> None:
    logger.log(level, "Error occurred: %s", {
        "message": str(error),
        "url": str(request.url),
        "method": request.method,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


def validation_details(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        details.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return details


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    _log(request, exc, logging.WARNING)
    return JSONResponse(
        status_code=400,
        content={"error": "Validation failed", "details": validation_details(exc.errors())},
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    _log(request, exc, logging.WARNING if exc.status_code < 500 else logging.ERROR)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message or "An error occurred"})


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    _log(request, exc, logging.WARNING)
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    _log(request, exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Database error", "message": "An error occurred while processing your request"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) if config.is_development else "Something went wrong",
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
