"""
Pytest configuration and shared fixtures for BizBot backend tests.
"""
import time
from typing import List, Optional, Tuple

import pytest
from authlib.jose import jwt
from fastapi.testclient import TestClient

from bizbot.api.endpoints.chatbot import get_chat_controller
from bizbot.config.settings import Settings
from bizbot.controllers.chat_controller import ChatRelayController
from bizbot.core.exceptions import UpstreamError
from main import create_app

TEST_JWT_SECRET = "test-jwt-secret"


class StubCompletionProvider:
    """Deterministic completion provider that records every call."""

    def __init__(self, reply: Optional[str] = "Stub reply", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    async def complete(self, system_prompt: str, message: str) -> str:
        self.calls.append((system_prompt, message))
        if self.error is not None:
            raise self.error
        if not self.reply:
            raise UpstreamError("No response from OpenAI")
        return self.reply


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "test",
        "debug": True,
        "jwt_secret": TEST_JWT_SECRET,
        "openai_api_key": "sk-test",
        "log_level": "DEBUG",
        "enable_request_logging": True,
    }
    values.update(overrides)

    # Pass env-style keys so explicit values win over variables in the environment
    kwargs = {}
    for name, value in values.items():
        alias = Settings.model_fields[name].validation_alias
        kwargs[alias or name] = value
    return Settings(_env_file=None, **kwargs)


def make_token(
    user_id: str = "user-123",
    email: str = "owner@example.com",
    secret: str = TEST_JWT_SECRET,
    expires_in: int = 3600,
) -> str:
    """Mint an HS256 token shaped like the ones issued by the web app's login route."""
    now = int(time.time())
    payload = {"userId": user_id, "email": email, "iat": now, "exp": now + expires_in}
    return jwt.encode({"alg": "HS256"}, payload, secret).decode("utf-8")


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def stub_provider() -> StubCompletionProvider:
    return StubCompletionProvider()


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def build_client():
    """Factory building a TestClient around an app with the given settings and provider."""

    def _build(settings: Optional[Settings] = None, provider=None) -> TestClient:
        settings = settings or make_settings()
        app = create_app(settings)
        if provider is not None:
            app.dependency_overrides[get_chat_controller] = lambda: ChatRelayController(settings, provider)
        return TestClient(app)

    return _build


@pytest.fixture
def client(build_client, settings, stub_provider) -> TestClient:
    return build_client(settings, stub_provider)
