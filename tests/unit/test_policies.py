"""
Tests for pipeline policies.

Date: 2026-10-18
"""

import pytest

from azopenai.client.credentials import KeyCredential
from azopenai.client.exceptions import InsecureTransportError
from azopenai.client.pipeline import PipelineRequest
from azopenai.client.policies import (
    APIVersionPolicy,
    BearerTokenPolicy,
    KeyCredentialPolicy,
    OpenAIPolicy,
    RequestLoggingPolicy,
)


class Terminal:
    """End of chain; records the request it was handed."""

    def __init__(self, response=None):
        self.requests = []
        self.response = response

    async def __call__(self, request):
        self.requests.append(request)
        return self.response


class StubResponse:
    status_code = 200
    headers = {}


def make_request(url: str = "https://res.openai.azure.com/openai/completions") -> PipelineRequest:
    return PipelineRequest.create("POST", url)


class TestAPIVersionPolicy:
    """Test api-version handling."""

    @pytest.mark.asyncio
    async def test_sets_version(self):
        terminal = Terminal()
        await APIVersionPolicy("2024-08-01-preview").send(make_request(), terminal)
        assert terminal.requests[0].url.query["api-version"] == "2024-08-01-preview"

    @pytest.mark.asyncio
    async def test_overwrites_caller_version(self):
        """A version already on the request is replaced, never duplicated."""
        terminal = Terminal()
        request = make_request("https://res.openai.azure.com/openai/completions?api-version=old")
        await APIVersionPolicy("new").send(request, terminal)
        assert terminal.requests[0].url.query.getall("api-version") == ["new"]


class TestOpenAIPolicy:
    """Test request adaptation for the public endpoint."""

    @pytest.mark.asyncio
    async def test_strips_api_version(self):
        terminal = Terminal()
        request = make_request("https://api.openai.com/v1/completions?api-version=v&x=1")
        await OpenAIPolicy().send(request, terminal)

        query = terminal.requests[0].url.query
        assert "api-version" not in query
        assert query["x"] == "1"


class TestKeyCredentialPolicy:
    """Test static key authentication."""

    @pytest.mark.asyncio
    async def test_api_key_header(self):
        terminal = Terminal()
        policy = KeyCredentialPolicy(KeyCredential("secret"), "api-key")
        await policy.send(make_request(), terminal)
        assert terminal.requests[0].headers["api-key"] == "secret"

    @pytest.mark.asyncio
    async def test_bearer_prefix(self):
        terminal = Terminal()
        policy = KeyCredentialPolicy(KeyCredential("sk-1"), "Authorization", prefix="Bearer ")
        await policy.send(make_request("https://api.openai.com/v1/completions"), terminal)
        assert terminal.requests[0].headers["Authorization"] == "Bearer sk-1"

    @pytest.mark.asyncio
    async def test_rotated_key_used(self):
        credential = KeyCredential("old")
        policy = KeyCredentialPolicy(credential, "api-key")
        credential.update("new")

        terminal = Terminal()
        await policy.send(make_request(), terminal)
        assert terminal.requests[0].headers["api-key"] == "new"

    @pytest.mark.asyncio
    async def test_refuses_plain_http(self):
        terminal = Terminal()
        policy = KeyCredentialPolicy(KeyCredential("secret"), "api-key")

        with pytest.raises(InsecureTransportError):
            await policy.send(make_request("http://localhost:8080/openai/completions"), terminal)
        assert terminal.requests == []

    @pytest.mark.asyncio
    async def test_plain_http_when_allowed(self):
        terminal = Terminal()
        policy = KeyCredentialPolicy(KeyCredential("secret"), "api-key", allow_insecure=True)
        await policy.send(make_request("http://localhost:8080/openai/completions"), terminal)
        assert terminal.requests[0].headers["api-key"] == "secret"


class TestBearerTokenPolicy:
    """Test token authentication."""

    @pytest.mark.asyncio
    async def test_attaches_token(self, token_credential):
        terminal = Terminal()
        policy = BearerTokenPolicy(token_credential, ["scope/.default"])
        await policy.send(make_request(), terminal)

        assert terminal.requests[0].headers["Authorization"] == "Bearer token-1"
        assert token_credential.calls == [("scope/.default",)]

    @pytest.mark.asyncio
    async def test_refuses_plain_http(self, token_credential):
        policy = BearerTokenPolicy(token_credential, ["scope/.default"])

        with pytest.raises(InsecureTransportError):
            await policy.send(make_request("http://localhost/openai/completions"), Terminal())
        assert token_credential.calls == []

    def test_requires_scope(self, token_credential):
        with pytest.raises(ValueError):
            BearerTokenPolicy(token_credential, [])


class TestRequestLoggingPolicy:
    """Test attempt logging."""

    @pytest.mark.asyncio
    async def test_passes_response_through(self):
        response = StubResponse()
        terminal = Terminal(response)
        request = make_request()
        request.headers["api-key"] = "secret"

        result = await RequestLoggingPolicy().send(request, terminal)

        assert result is response
        assert terminal.requests[0].headers["api-key"] == "secret"
