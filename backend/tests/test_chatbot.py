"""
Tests for the BizBot chat relay endpoint.

Every gate of the pipeline is exercised through the HTTP API with a stubbed
completion provider, so no request ever leaves the process.
"""
from conftest import StubCompletionProvider, make_settings, make_token

from bizbot.core.exceptions import UpstreamError

CHATBOT_URL = "/api/chatbot"


class TestAuthentication:
    """Requests without a resolvable identity are rejected first."""

    def test_missing_token_returns_401(self, client, stub_provider):
        response = client.post(CHATBOT_URL, json={"message": "Hello"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Authentication required"}
        assert stub_provider.calls == [], "Provider must not be called without identity"

    def test_token_signed_with_other_secret_returns_401(self, client):
        headers = {"Authorization": f"Bearer {make_token(secret='someone-else')}"}

        response = client.post(CHATBOT_URL, json={"message": "Hello"}, headers=headers)

        assert response.status_code == 401

    def test_expired_token_returns_401(self, client):
        headers = {"Authorization": f"Bearer {make_token(expires_in=-3600)}"}

        response = client.post(CHATBOT_URL, json={"message": "Hello"}, headers=headers)

        assert response.status_code == 401

    def test_recently_expired_token_returns_401(self, client):
        headers = {"Authorization": f"Bearer {make_token(expires_in=-30)}"}

        response = client.post(CHATBOT_URL, json={"message": "Hello"}, headers=headers)

        assert response.status_code == 401, "Expired tokens get no grace period"

    def test_auth_checked_before_body(self, client):
        response = client.post(CHATBOT_URL, content=b"not json")

        assert response.status_code == 401

    def test_cookie_token_is_accepted(self, client, stub_provider):
        client.cookies.set("auth-token", make_token())

        response = client.post(CHATBOT_URL, json={"message": "Hello"})

        assert response.status_code == 200
        assert len(stub_provider.calls) == 1


class TestValidation:
    """Identity present but the body is unusable."""

    def test_missing_message_returns_400(self, client, auth_headers, stub_provider):
        response = client.post(CHATBOT_URL, json={"businessData": {}}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Message is required"}
        assert stub_provider.calls == []

    def test_empty_message_returns_400(self, client, auth_headers, stub_provider):
        response = client.post(CHATBOT_URL, json={"message": ""}, headers=auth_headers)

        assert response.status_code == 400
        assert stub_provider.calls == []

    def test_malformed_json_returns_400(self, client, auth_headers):
        response = client.post(CHATBOT_URL, content=b"{message:", headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Invalid JSON body"}

    def test_non_object_body_returns_400(self, client, auth_headers):
        response = client.post(CHATBOT_URL, json=["How's my profit?"], headers=auth_headers)

        assert response.status_code == 400

    def test_empty_message_rejected_even_without_api_key(self, build_client, auth_headers):
        client = build_client(make_settings(openai_api_key=""), StubCompletionProvider())

        response = client.post(CHATBOT_URL, json={"message": ""}, headers=auth_headers)

        assert response.status_code == 400


class TestConfiguration:
    def test_missing_api_key_returns_500(self, build_client, auth_headers):
        provider = StubCompletionProvider()
        client = build_client(make_settings(openai_api_key=""), provider)

        response = client.post(CHATBOT_URL, json={"message": "Hello"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "OpenAI API key is missing"}
        assert provider.calls == []


class TestProviderFailures:
    def test_upstream_error_returns_500(self, build_client, auth_headers):
        provider = StubCompletionProvider(error=UpstreamError())
        client = build_client(provider=provider)

        response = client.post(CHATBOT_URL, json={"message": "Hello"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "OpenAI API request failed. Check server logs.",
        }

    def test_empty_reply_returns_500(self, build_client, auth_headers):
        client = build_client(provider=StubCompletionProvider(reply=""))

        response = client.post(CHATBOT_URL, json={"message": "Hello"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json()["error"] == "No response from OpenAI"

    def test_unexpected_error_returns_generic_500(self, build_client, auth_headers):
        provider = StubCompletionProvider(error=RuntimeError("socket exploded: secret details"))
        client = build_client(provider=provider)

        response = client.post(CHATBOT_URL, json={"message": "Hello"}, headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to generate response"}
        assert "secret details" not in response.text


class TestSuccess:
    def test_profit_question_returns_provider_reply(self, build_client, auth_headers):
        reply = "Your profit looks solid at $5,000, about 12.5% margin 👍"
        provider = StubCompletionProvider(reply=reply)
        client = build_client(provider=provider)

        response = client.post(
            CHATBOT_URL,
            json={
                "message": "How's my profit?",
                "businessData": {"netProfit": 5000, "profitMargin": 12.5},
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "response": reply}

        system_prompt, message = provider.calls[0]
        assert message == "How's my profit?"
        assert "Net Profit: $5,000" in system_prompt
        assert "Profit Margin: 12.5%" in system_prompt

    def test_reply_is_trimmed(self, build_client, auth_headers):
        client = build_client(provider=StubCompletionProvider(reply="\n  Sales are up 📈  \n"))

        response = client.post(CHATBOT_URL, json={"message": "Sales?"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["response"] == "Sales are up 📈"

    def test_missing_business_data_uses_defaults(self, build_client, auth_headers):
        provider = StubCompletionProvider()
        client = build_client(provider=provider)

        response = client.post(CHATBOT_URL, json={"message": "Anything?"}, headers=auth_headers)

        assert response.status_code == 200
        system_prompt, _ = provider.calls[0]
        assert "Total Sales: $0" in system_prompt
        assert "Top Expense Category: N/A ($0)" in system_prompt
