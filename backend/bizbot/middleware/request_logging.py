"""
Request logging middleware.
Logs HTTP requests and responses as JSON lines for monitoring and debugging.
"""
import json
import logging
import time
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from bizbot.api.dependencies.auth import decode_jwt_local, extract_token

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = {"password", "token", "secret", "api_key", "apikey", "credit_card"}

DEFAULT_IGNORE_PATHS = (
    "/api/health",
    "/docs",
    "/openapi.json",
    "/redoc",
    "/favicon.ico",
)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    def __init__(self, app, ignore_paths: tuple = (), jwt_secret: Optional[str] = None):
        super().__init__(app)
        self.ignore_paths = ignore_paths or DEFAULT_IGNORE_PATHS
        self.jwt_secret = jwt_secret

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.ignore_paths:
            return await call_next(request)

        start_time = time.time()
        client_ip = self._get_client_ip(request)

        request_log = {
            "type": "request",
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": client_ip,
            "user_agent": request.headers.get("user-agent"),
            "timestamp": start_time,
        }

        user_id = self._extract_user_id(request)
        if user_id:
            request_log["user_id"] = user_id

        if request.method in ("POST", "PUT", "PATCH", "DELETE"):
            body = await self._get_request_body(request)
            if body:
                request_log["body"] = body

        logger.info(json.dumps(request_log, default=str))

        response = await call_next(request)

        process_time = time.time() - start_time

        response_log = {
            "type": "response",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
            "client_ip": client_ip,
            "timestamp": time.time(),
        }
        if user_id:
            response_log["user_id"] = user_id

        # Log level based on status code
        if response.status_code >= 500:
            logger.error(json.dumps(response_log))
        elif response.status_code >= 400:
            logger.warning(json.dumps(response_log))
        else:
            logger.info(json.dumps(response_log))

        response.headers["X-Process-Time"] = str(process_time)

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request."""
        # Check for forwarded headers (when behind proxy)
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"

    def _extract_user_id(self, request: Request) -> Optional[str]:
        """Extract the user ID from the auth cookie or header if present."""
        token = extract_token(request)
        if not token:
            return None

        claims = decode_jwt_local(token, self.jwt_secret)
        if claims and claims.get("userId"):
            return str(claims["userId"])
        return None

    async def _get_request_body(self, request: Request) -> Optional[dict]:
        """
        Safely extract and parse request body.
        Returns None if body cannot be read or parsed.
        """
        try:
            if hasattr(request.state, "body"):
                body_bytes = request.state.body
            else:
                body_bytes = await request.body()
                request.state.body = body_bytes

            if not body_bytes:
                return None

            body_data = json.loads(body_bytes.decode("utf-8"))

            if isinstance(body_data, dict):
                return {
                    k: "***REDACTED***" if k.lower() in SENSITIVE_FIELDS else v
                    for k, v in body_data.items()
                }

            return body_data

        except (UnicodeDecodeError, json.JSONDecodeError):
            # Non-JSON bodies are not logged
            return None
