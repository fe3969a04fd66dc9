"""Completion provider services package."""

from .provider import CompletionProvider, OpenAICompletionProvider

__all__ = ["CompletionProvider", "OpenAICompletionProvider"]
