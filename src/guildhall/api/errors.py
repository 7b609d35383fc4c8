"""Exception handlers that turn failures into ``success: false`` envelopes."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from guildhall.errors import GuildhallError, PolicyValidationError

logger = logging.getLogger(__name__)


def failure(status_code: int, reason: str | list[str]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "reason": reason})


def _format_validation_errors(exc: RequestValidationError) -> str:
    errors = exc.errors()
    for error in errors:
        if error.get("type") == "json_invalid":
            detail = error.get("ctx", {}).get("error", error.get("msg", ""))
            return f"While trying to read JSON: {detail}"
        if error.get("type") == "model_attributes_type" and isinstance(error.get("input"), bytes | str):
            # non-JSON content type, the raw body reached the model
            return f"While trying to read JSON: {error.get('msg', '')}"
    return "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in errors
    )


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def malformed_request_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
        return failure(status.HTTP_400_BAD_REQUEST, _format_validation_errors(exc))

    @app.exception_handler(PolicyValidationError)
    async def policy_handler(request: Request, exc: PolicyValidationError):  # type: ignore[override]
        return failure(422, exc.reasons)

    @app.exception_handler(GuildhallError)
    async def domain_handler(request: Request, exc: GuildhallError):  # type: ignore[override]
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @app.exception_handler(DBAPIError)
    async def store_handler(request: Request, exc: DBAPIError):  # type: ignore[override]
        logger.warning("store rejected %s %s: %s", request.method, request.url.path, exc.orig)
        return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc.orig))
