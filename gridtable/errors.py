from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GridTableError(Exception):
    """Base class for errors raised while assembling a table."""


class FilterError(GridTableError, ValueError):
    """Raised when a filter receives a case or payload it cannot apply."""


class TableConfigurationError(GridTableError):
    """Raised when a table declaration does not match its model."""


class TableNotFoundError(GridTableError, LookupError):
    """Raised when no table is registered under the requested key."""


def _error_payload(code: str, message: str, details: object, request_id: str | None):
    return {"code": code, "message": message, "details": details, "request_id": request_id}


def _request_id(request: Request) -> str:
    rid = getattr(request.state, "request_id", None)
    return str(rid) if rid else "unknown"


def register_error_handlers(app) -> None:
    @app.exception_handler(FilterError)
    async def filter_error_handler(request: Request, exc: FilterError):
        return JSONResponse(
            status_code=400,
            content=_error_payload("invalid_filter", str(exc), None, _request_id(request)),
        )

    @app.exception_handler(TableNotFoundError)
    async def table_not_found_handler(request: Request, exc: TableNotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_payload("table_not_found", str(exc), None, _request_id(request)),
        )

    @app.exception_handler(TableConfigurationError)
    async def table_configuration_handler(request: Request, exc: TableConfigurationError):
        logger.error(
            "Table configuration error on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            extra={"request_id": _request_id(request)},
        )
        return JSONResponse(
            status_code=500,
            content=_error_payload(
                "table_configuration_error", str(exc), None, _request_id(request)
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        code = f"http_{exc.status_code}"
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        details = None if isinstance(exc.detail, str) else exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_payload(code, message, details, _request_id(request)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
            extra={"request_id": _request_id(request)},
        )
        return JSONResponse(
            status_code=500,
            content=_error_payload(
                "internal_error", "Internal server error", None, _request_id(request)
            ),
        )
