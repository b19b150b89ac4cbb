# File: /wpquery/core/error_handlers.py | Version: 1.1 | Title: Error Handlers (query errors always; standardized bodies optional)
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from wpquery.queries.errors import QueryExecutionError, QueryParseError

log = logging.getLogger(__name__)

_CODE_MAP = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
    500: "INTERNAL_SERVER_ERROR",
}


def _err(code: int, message: str, error_code: str | None = None):
    return {"error": {"code": error_code or _CODE_MAP.get(code, "ERROR"), "message": message}}


def register_query_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(QueryParseError)
    async def _parse_exc(_req: Request, exc: QueryParseError):
        return JSONResponse(status_code=400, content=_err(400, str(exc)))

    @app.exception_handler(QueryExecutionError)
    async def _db_exc(_req: Request, exc: QueryExecutionError):
        # cause is already logged by the executor; never echo it
        return JSONResponse(status_code=500, content=_err(500, exc.message, exc.code))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_exc(_req: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_err(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exc(_req: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content=_err(422, "Validation error"))

    @app.exception_handler(Exception)
    async def _unhandled(_req: Request, exc: Exception):
        # Avoid leaking internals
        log.exception("Unhandled error")
        return JSONResponse(status_code=500, content=_err(500, "Internal server error"))
