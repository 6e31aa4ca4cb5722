"""
Error Handling Middleware

Assigns a request id to every request and turns exceptions that escape the
routes and exception handlers into a JSON 500 response.
"""

import logging
import uuid
from typing import Callable
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from config import get_settings

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle uncaught exceptions and standardize error responses.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse the caller's request id when one is sent
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as exc:
            logger.error(
                f"Unhandled exception in request {request_id}: {exc}",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "client": request.client.host if request.client else "unknown",
                },
                exc_info=True,
            )

            content = {"message": "Erro interno do servidor.", "request_id": request_id}
            if get_settings().expose_error_details:
                content["error"] = str(exc)

            return JSONResponse(
                status_code=500,
                content=content,
                headers={"X-Request-ID": request_id},
            )
