from fastapi import APIRouter

from .endpoints import chatbot
from .endpoints import debug
from .endpoints import health

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, prefix="", tags=["health"])
api_router.include_router(chatbot.router, prefix="", tags=["chatbot"])
api_router.include_router(debug.router, prefix="", tags=["debug"])
