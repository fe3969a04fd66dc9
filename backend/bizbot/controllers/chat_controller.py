"""
Chat relay controller for BizBot.

Runs the chatbot pipeline: identity, body validation, configuration, prompt,
one completion call. Each step either passes or ends the request with an
error envelope.
"""
import json
import logging
from typing import Optional

import pydantic
from fastapi.responses import JSONResponse

from bizbot.api.dependencies.auth import AuthUser
from bizbot.api.models.chat import ChatRequest, ChatResponse
from bizbot.config.settings import Settings
from bizbot.core.exceptions import (
    AuthenticationError,
    BizBotError,
    ConfigurationError,
    UnknownError,
    ValidationError,
)
from bizbot.services.completion import CompletionProvider, OpenAICompletionProvider
from bizbot.services.prompts import build_chat_system_prompt

logger = logging.getLogger(__name__)


class ChatRelayController:
    """Controller for BizBot chat operations."""

    def __init__(self, settings: Settings, provider: Optional[CompletionProvider] = None):
        """
        Initialize the controller.

        Args:
            settings: Application settings holding the OpenAI credentials
            provider: Completion provider override; built from settings when None
        """
        self.settings = settings
        self.provider = provider

    def _authenticate(self, user: Optional[AuthUser]) -> AuthUser:
        if user is None:
            raise AuthenticationError()
        return user

    def _parse_request(self, body: bytes) -> ChatRequest:
        """
        Parse and validate the chat request body.

        Raises:
            ValidationError: If the body is not a JSON object or the message is empty
        """
        try:
            payload = json.loads(body or b"null")
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise ValidationError("Invalid JSON body")

        if not isinstance(payload, dict):
            raise ValidationError("Invalid JSON body")

        try:
            request = ChatRequest.model_validate(payload)
        except pydantic.ValidationError:
            raise ValidationError("Invalid JSON body")

        if not request.message:
            raise ValidationError("Message is required")

        return request

    def _get_provider(self) -> CompletionProvider:
        if not self.settings.openai_api_key:
            raise ConfigurationError()

        if self.provider is None:
            self.provider = OpenAICompletionProvider.from_settings(self.settings)
        return self.provider

    async def generate_reply(self, user: Optional[AuthUser], body: bytes) -> ChatResponse:
        """
        Generate a BizBot reply for one chat request.

        Args:
            user: Resolved caller, None when unauthenticated
            body: Raw request body

        Returns:
            ChatResponse with the trimmed reply text

        Raises:
            BizBotError: On the first failing step
        """
        caller = self._authenticate(user)
        request = self._parse_request(body)
        provider = self._get_provider()

        system_prompt = build_chat_system_prompt(request.business_data)
        logger.debug(f"Generating chat reply for user {caller.user_id}")

        text = await provider.complete(system_prompt, request.message)
        return ChatResponse(response=text.strip())

    async def handle(self, user: Optional[AuthUser], body: bytes) -> JSONResponse:
        """Run the pipeline and always answer with a JSON envelope."""
        try:
            reply = await self.generate_reply(user, body)
            return JSONResponse(status_code=200, content=reply.model_dump())
        except BizBotError as e:
            if e.status_code >= 500:
                logger.error(f"Chatbot request failed: {e.message}")
            return JSONResponse(status_code=e.status_code, content=e.to_dict())
        except Exception as e:
            logger.error(f"Chatbot API error: {e}", exc_info=True)
            error = UnknownError()
            return JSONResponse(status_code=error.status_code, content=error.to_dict())
