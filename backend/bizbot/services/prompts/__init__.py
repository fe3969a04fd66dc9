from .chat_prompts import (
    CHAT_SYSTEM_PROMPT_TEMPLATE,
    build_chat_system_prompt,
)

__all__ = [
    "CHAT_SYSTEM_PROMPT_TEMPLATE",
    "build_chat_system_prompt",
]
