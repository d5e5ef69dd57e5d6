from collections.abc import Mapping, Sequence
from typing import Any, cast
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from pydantic import BaseModel

from pagination_api.core.logging import get_logger


class ErrorBody(BaseModel):
    """Structured error body."""
    type: str
    message: str
    details: dict[str, object] | None = None


class ErrorEnvelope(BaseModel):
    error: ErrorBody
    meta: dict[str, object]


def _build_meta(request: Request) -> dict[str, object]:
    """Collect metadata for error responses."""
    return {
        "request_id": getattr(request.state, "correlation_id", "-"),
        "path": request.url.path,
        "method": request.method,
    }


def _serialize_validation_errors(errors: Sequence[Mapping[Any, Any]]) -> list[dict[str, object]]:
    """Serialize validation errors, stringifying exceptions carried in ctx."""

    serialized_errors: list[dict[str, object]] = []

    for error in errors:
        serialized_error: dict[str, object] = dict(error)

        if "ctx" in serialized_error and isinstance(serialized_error["ctx"], dict):
            ctx: dict[str, object] = cast(dict[str, object], serialized_error["ctx"]).copy()
            if "error" in ctx:
                ctx["error"] = str(ctx["error"])
            serialized_error["ctx"] = ctx
        serialized_errors.append(serialized_error)
    return serialized_errors


def _error_response(
    request: Request,
    status_code: int,
    error: ErrorBody,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    body = ErrorEnvelope(error=error, meta=_build_meta(request))
    return JSONResponse(
        status_code=status_code, content=body.model_dump(), headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Wrap HTTP, validation and unexpected errors in one JSON envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        get_logger(__name__, request).warning(
            "HTTP error", extra={"status_code": exc.status_code}
        )
        if isinstance(exc.detail, dict):
            error = ErrorBody(
                type="http_error",
                message="Request failed",
                details=cast(dict[str, object], exc.detail),
            )
        else:
            error = ErrorBody(type="http_error", message=exc.detail or "HTTP error")
        return _error_response(request, exc.status_code, error, exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        get_logger(__name__, request).info("Validation error")
        error = ErrorBody(
            type="validation_error",
            message="Invalid request payload",
            details={"errors": _serialize_validation_errors(exc.errors())},
        )
        return _error_response(request, HTTP_422_UNPROCESSABLE_CONTENT, error)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        get_logger(__name__, request).exception("Unhandled server error", exc_info=exc)
        error = ErrorBody(type="server_error", message="Internal Server Error")
        return _error_response(request, HTTP_500_INTERNAL_SERVER_ERROR, error)
