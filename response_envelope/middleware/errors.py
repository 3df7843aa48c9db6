from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from response_envelope.core.config import get_settings
from response_envelope.schemas.envelope import DynamicEnvelope, Envelope

logger = logging.getLogger(__name__)

# statuses that must not carry a body
BODYLESS_STATUSES = frozenset({HTTPStatus.NO_CONTENT, HTTPStatus.NOT_MODIFIED})


def envelope_response(envelope: Union[Envelope[Any], DynamicEnvelope]) -> JSONResponse:
    """Render an envelope as JSON, using its status code as the HTTP status."""
    return JSONResponse(status_code=envelope.status_code, content=envelope.to_wire())


def format_validation_error(error: dict[str, Any]) -> str:
    loc = ".".join(str(part) for part in error.get("loc", ()))
    msg = str(error.get("msg", "invalid"))
    return f"{loc}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers that answer with failure envelopes."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        logger.warning("HTTP exception", extra={"path": str(request.url), "detail": exc.detail})
        headers = getattr(exc, "headers", None)
        if exc.status_code in BODYLESS_STATUSES:
            return Response(status_code=exc.status_code, headers=headers)
        envelope = DynamicEnvelope.fail(str(exc.detail), exc.status_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=envelope.to_wire(),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Validation error", extra={"path": str(request.url), "errors": exc.errors()})
        messages = [format_validation_error(err) for err in exc.errors()] or ["validation_error"]
        envelope = DynamicEnvelope.fail(messages, get_settings().VALIDATION_ERROR_STATUS)
        return envelope_response(envelope)

    @app.middleware("http")
    async def catch_unhandled_exceptions(request: Request, call_next):  # type: ignore[no-untyped-def]
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            logger.exception("Unhandled exception", extra={"path": str(request.url)})
            message = str(exc) if get_settings().EXPOSE_INTERNAL_ERRORS else "internal_error"
            return envelope_response(
                DynamicEnvelope.fail(message, HTTPStatus.INTERNAL_SERVER_ERROR)
            )
