"""
Route classification middleware.
Categorizes every page request and applies the configured authorization policy.
"""
import logging
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from bizbot.api.dependencies.auth import get_user_from_request
from bizbot.core.routing import (
    LOGIN_PATH,
    AuthorizationPolicy,
    RouteCategory,
    classify_path,
    is_filtered_path,
)

logger = logging.getLogger(__name__)


class RouteClassifierMiddleware(BaseHTTPMiddleware):
    """
    Middleware that classifies request paths before normal handling.

    Static, API, public and uncategorized paths always pass through. Protected
    paths pass through under ``DEFERRED_TO_CLIENT``; under ``ENFORCED`` they
    redirect to the login page unless the request carries a valid token.
    """

    def __init__(
        self,
        app,
        policy: AuthorizationPolicy = AuthorizationPolicy.DEFERRED_TO_CLIENT,
        jwt_secret: Optional[str] = None,
    ):
        super().__init__(app)
        self.policy = policy
        self.jwt_secret = jwt_secret

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if not is_filtered_path(path):
            return await call_next(request)

        category = classify_path(path)
        request.state.route_category = category
        logger.debug(f"Route {path} classified as {category.value}")

        if category is RouteCategory.PROTECTED and self.policy is AuthorizationPolicy.ENFORCED:
            if get_user_from_request(request, self.jwt_secret) is None:
                logger.info(f"Redirecting unauthenticated request for {path} to {LOGIN_PATH}")
                return RedirectResponse(url=LOGIN_PATH, status_code=307)

        return await call_next(request)
