"""
Custom Exception Handlers

Global handlers that answer with the ``{"message": ...}`` body used by the
user routes. Routes translate their own errors; these cover framework-level
failures (unknown paths, wrong methods, unparsable bodies).
"""

import logging

from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from config import get_settings

logger = logging.getLogger(__name__)


def _request_id(request: Request):
    return getattr(request.state, "request_id", None)


async def not_found_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle 404 Not Found errors raised by routing."""
    logger.info("404 for %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=404,
        content={
            "message": getattr(exc, "detail", None) or "Recurso não encontrado.",
            "request_id": _request_id(request),
        },
    )


async def method_not_allowed_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle 405 Method Not Allowed errors."""
    return JSONResponse(
        status_code=405,
        content={
            "message": f"Método {request.method} não permitido para {request.url.path}.",
            "request_id": _request_id(request),
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors.

    Malformed bodies are answered with 400, like the field checks done inside
    the routes, instead of FastAPI's default 422.
    """
    errors = exc.errors()
    logger.info("Invalid request body for %s %s: %s", request.method, request.url.path, errors)

    fields = sorted({str(err["loc"][-1]) for err in errors if err.get("loc")})
    message = "Requisição inválida."
    if fields:
        message = f"Requisição inválida. Verifique os campos: {', '.join(fields)}."

    return JSONResponse(
        status_code=400,
        content={"message": message, "request_id": _request_id(request)},
    )


async def generic_http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle any other HTTPException, keeping its status code."""
    status_code = getattr(exc, "status_code", 500)
    if status_code >= 500:
        logger.error("HTTP %s for %s %s: %s", status_code, request.method, request.url.path, exc.detail)

    return JSONResponse(
        status_code=status_code,
        content={"message": exc.detail, "request_id": _request_id(request)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert unexpected Python exceptions to a 500 response."""
    logger.error(f"Unexpected error: {exc}", exc_info=True)

    content = {"message": "Erro interno do servidor.", "request_id": _request_id(request)}
    if get_settings().expose_error_details:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)
