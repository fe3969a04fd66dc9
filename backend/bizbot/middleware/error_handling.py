"""
Error handling middleware.
Centralizes error handling and response formatting for the BizBot backend.
"""
import json
import logging
import traceback
from typing import Callable, Optional

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from bizbot.core.exceptions import BizBotError

logger = logging.getLogger(__name__)


async def bizbot_error_handler(request: Request, exc: BizBotError) -> JSONResponse:
    """Exception handler turning a BizBotError raised in an endpoint into the error envelope."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Request failed",
        extra={
            "path": request.url.path,
            "method": request.method,
            "error": exc.message,
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for centralized error handling and logging."""

    def __init__(self, app, is_production: bool = True):
        super().__init__(app)
        self.is_production = is_production

    async def _get_request_body(self, request: Request) -> Optional[dict]:
        """
        Safely extract request body for error logging.
        """
        try:
            if hasattr(request.state, "body"):
                body_bytes = request.state.body
            else:
                body_bytes = await request.body()
                request.state.body = body_bytes

            if not body_bytes:
                return None

            body_str = body_bytes.decode("utf-8")
            return json.loads(body_str)
        except Exception:
            return None

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            response = await call_next(request)
            return response

        except Exception as e:
            body = await self._get_request_body(request)
            tb_str = traceback.format_exc()

            logger.error(
                "Unhandled error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "request_body": body,
                    "traceback": tb_str if not self.is_production else None,
                },
                exc_info=True,
            )

            # Don't expose internal errors in production
            if self.is_production:
                message = "An internal error occurred. Please try again later."
            else:
                message = f"{type(e).__name__}: {str(e)}"

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"success": False, "error": message},
            )
