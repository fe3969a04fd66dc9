"""
Completion providers for the BizBot chat relay.

A provider turns a system prompt plus one user message into reply text. The
OpenAI implementation makes exactly one chat-completions call per request.
"""
from __future__ import annotations

import logging
from typing import Protocol

from openai import APIStatusError, AsyncOpenAI

from bizbot.config.settings import Settings
from bizbot.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class CompletionProvider(Protocol):
    """Anything that can answer a chat message given a system prompt."""

    async def complete(self, system_prompt: str, message: str) -> str:
        """Return the reply text or raise UpstreamError."""
        ...


class OpenAICompletionProvider:
    """Chat completions through the OpenAI API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: float,
        max_tokens: int,
        client: AsyncOpenAI | None = None,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        # Single attempt per request: the SDK retries twice unless told otherwise
        self.client = client or AsyncOpenAI(api_key=api_key, max_retries=0)

    @classmethod
    def from_settings(cls, settings: Settings, client: AsyncOpenAI | None = None) -> OpenAICompletionProvider:
        """Build a provider with the model parameters configured in settings."""
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
            client=client,
        )

    async def complete(self, system_prompt: str, message: str) -> str:
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": message},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except APIStatusError as e:
            logger.error(
                f"OpenAI API error ({e.status_code}): {e.body}",
                extra={"status_code": e.status_code, "provider_error": e.body},
            )
            raise UpstreamError() from e

        text = None
        if completion.choices:
            text = completion.choices[0].message.content
        if not text:
            raise UpstreamError("No response from OpenAI")

        return text
