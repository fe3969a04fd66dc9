"""
BizBot Backend
FastAPI application serving the BizBot chat relay and the page routing filter.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bizbot import __version__
from bizbot.api.routers import api_router
from bizbot.config.settings import Settings, get_settings
from bizbot.core.exceptions import BizBotError
from bizbot.core.logging_config import setup_logging
from bizbot.core.routing import AuthorizationPolicy
from bizbot.middleware.error_handling import ErrorHandlingMiddleware, bizbot_error_handler
from bizbot.middleware.request_logging import RequestLoggingMiddleware
from bizbot.middleware.route_classifier import RouteClassifierMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    settings: Settings = app.state.settings
    logging.info(f"Starting {settings.app_name} ({settings.environment})")

    if not settings.openai_api_key:
        logging.error("OpenAI configuration missing! Check OPENAI_API_KEY")

    if settings.route_auth_policy is AuthorizationPolicy.DEFERRED_TO_CLIENT:
        logging.warning("Protected pages are not checked server-side (ROUTE_AUTH_POLICY=deferred_to_client)")

    yield

    logging.info("Shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Business assistant chat relay",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware (last added runs first)
    app.add_middleware(ErrorHandlingMiddleware, is_production=settings.is_production)
    app.add_middleware(
        RouteClassifierMiddleware,
        policy=settings.route_auth_policy,
        jwt_secret=settings.jwt_secret,
    )
    if settings.enable_request_logging:
        app.add_middleware(RequestLoggingMiddleware, jwt_secret=settings.jwt_secret)

    app.add_exception_handler(BizBotError, bizbot_error_handler)

    # Include API router
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
