"""
BizBot chat endpoint.

Relays a user's question plus their business metrics to the completion
provider and returns the reply.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from bizbot.api.dependencies.auth import AuthUser, get_optional_user
from bizbot.api.models import ChatResponse, ErrorResponse
from bizbot.config.settings import Settings, get_settings
from bizbot.controllers.chat_controller import ChatRelayController

# ============================================================================
# Dependency Injection
# ============================================================================


def get_chat_controller(settings: Settings = Depends(get_settings)) -> ChatRelayController:
    """Dependency injection for ChatRelayController."""
    return ChatRelayController(settings)


# ============================================================================
# Router
# ============================================================================

router = APIRouter()


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "/chatbot",
    status_code=status.HTTP_200_OK,
    response_model=ChatResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Message is required"},
        401: {"model": ErrorResponse, "description": "Authentication required"},
        500: {"model": ErrorResponse, "description": "Configuration or provider error"},
    },
)
async def chatbot(
    request: Request,
    user: Optional[AuthUser] = Depends(get_optional_user),
    controller: ChatRelayController = Depends(get_chat_controller),
) -> JSONResponse:
    """
    Answer a business question with BizBot.

    Body: ``{"message": str, "businessData": {...}}``. The body is read raw so
    that the authentication check runs before any body validation.
    """
    body = await request.body()
    return await controller.handle(user, body)
