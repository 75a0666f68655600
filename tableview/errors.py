from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class TableConfigError(ValueError):
    """A table configuration or view state that cannot be rendered."""

    code = "table_config_error"


class DuplicateFieldError(TableConfigError):
    code = "duplicate_field"


class InvalidSortError(TableConfigError):
    code = "invalid_sort"


class InvalidPageError(TableConfigError):
    code = "invalid_page"


class MissingParentResolverError(TableConfigError):
    code = "missing_parent_resolver"


class MissingParentLoaderError(TableConfigError):
    code = "missing_parent_loader"


class UnknownEventError(TableConfigError):
    code = "unknown_event"


class UnknownTableError(LookupError):
    code = "unknown_table"


class UnknownParentError(LookupError):
    code = "unknown_parent"



def _error_payload(code: str, message: str, details: object, request_id: str | None):
    return {"code": code, "message": message, "details": details, "request_id": request_id}


def _request_id(request: Request) -> str:
    rid = getattr(request.state, "request_id", None)
    return str(rid) if rid else "unknown"


def _sanitize_input(value):
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, dict):
        return {key: _sanitize_input(val) for key, val in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_sanitize_input(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def register_error_handlers(app) -> None:
    @app.exception_handler(TableConfigError)
    async def table_config_error_handler(request: Request, exc: TableConfigError):
        logger.warning("Rejected table request on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=400,
            content=_error_payload(exc.code, str(exc), None, _request_id(request)),
        )

    @app.exception_handler(UnknownTableError)
    @app.exception_handler(UnknownParentError)
    async def not_found_handler(request: Request, exc: UnknownTableError | UnknownParentError):
        message = str(exc.args[0]) if exc.args else "Not found"

        return JSONResponse(
            status_code=404,
            content=_error_payload(exc.code, message, None, _request_id(request)),
        )

    async def _handle_http_exception(request: Request, status_code: int, detail: object):
        code = f"http_{status_code}"
        message = "Request failed"
        details = None
        if isinstance(detail, dict):
            code = detail.get("code", code)
            message = detail.get("message", message)
            details = detail.get("details")
        elif isinstance(detail, str):
            message = detail
        else:
            details = detail
        return JSONResponse(
            status_code=status_code,
            content=_error_payload(code, message, details, _request_id(request)),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return await _handle_http_exception(request, exc.status_code, exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail if getattr(exc, "detail", None) is not None else "Request failed"
        return await _handle_http_exception(request, exc.status_code, detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = []
        for error in exc.errors():
            error_copy = dict(error)
            if "input" in error_copy:
                error_copy["input"] = _sanitize_input(error_copy.get("input"))
            # ctx may carry the raw exception object
            error_copy.pop("ctx", None)
            errors.append(error_copy)
        return JSONResponse(
            status_code=422,
            content=_error_payload(
                "validation_error", "Validation error", errors, _request_id(request)
            ),
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
