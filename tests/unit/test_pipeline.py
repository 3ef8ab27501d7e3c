"""
Tests for the request pipeline and its retry loop.

Date: 2026-10-18
"""

import asyncio

import pytest

from azopenai.client.credentials import TOKEN_SCOPE
from azopenai.client.exceptions import InsecureTransportError, TimeoutError, TransportError
from azopenai.client.pipeline import Pipeline, PipelineRequest
from azopenai.client.policies import BearerTokenPolicy
from azopenai.client.retry import RetryConfig

URL = "https://res.openai.azure.com/openai/deployments/d/chat/completions"


def fast_retry(max_retries: int = 3) -> RetryConfig:
    return RetryConfig(max_retries=max_retries, initial_delay=0, jitter=False)


class RecordingPolicy:
    """Stamps each attempt so tests can see what the transport received."""

    def __init__(self):
        self.call_count = 0

    async def send(self, request, next_):
        self.call_count += 1
        request.headers["x-attempt"] = str(self.call_count)
        return await next_(request)


class TestPipelineRequest:
    """Test request construction and query manipulation."""

    def test_create_uppercases_method(self):
        request = PipelineRequest.create("post", URL)
        assert request.method == "POST"
        assert str(request.url) == URL

    def test_create_keeps_escaped_path(self):
        request = PipelineRequest.create("POST", "https://h/openai/deployments/my%2Fdep/x")
        assert str(request.url) == "https://h/openai/deployments/my%2Fdep/x"

    def test_set_json(self):
        request = PipelineRequest.create("POST", URL)
        request.set_json({"a": 1, "b": [True]})
        assert request.content == b'{"a":1,"b":[true]}'
        assert request.headers["Content-Type"] == "application/json"

    def test_set_query_param_replaces_all_values(self):
        request = PipelineRequest.create("POST", URL + "?api-version=old&api-version=older&x=1")
        request.set_query_param("api-version", "new")
        assert request.url.query.getall("api-version") == ["new"]
        assert request.url.query["x"] == "1"

    def test_remove_query_param(self):
        request = PipelineRequest.create("POST", URL + "?api-version=v&x=1")
        request.remove_query_param("api-version")
        assert "api-version" not in request.url.query
        assert request.url.query["x"] == "1"

    def test_remove_last_query_param(self):
        request = PipelineRequest.create("POST", URL + "?api-version=v")
        request.remove_query_param("api-version")
        assert str(request.url) == URL

    def test_remove_missing_param_is_noop(self):
        request = PipelineRequest.create("POST", URL)
        request.remove_query_param("api-version")
        assert str(request.url) == URL

    def test_copy_isolates_headers(self):
        request = PipelineRequest.create("POST", URL)
        request.headers["a"] = "1"
        clone = request.copy()
        clone.headers["a"] = "2"
        assert request.headers["a"] == "1"

    def test_skip_body_download(self):
        request = PipelineRequest.create("POST", URL)
        assert request.stream is False
        request.skip_body_download()
        assert request.stream is True


class TestPipelineRetry:
    """Test dispatch retry behavior."""

    @pytest.mark.asyncio
    async def test_success_first_try(self, make_transport, make_response):
        transport = make_transport([make_response([b"{}"])])
        pipeline = Pipeline(transport, retry=fast_retry())

        response = await pipeline.run(PipelineRequest.create("POST", URL))

        assert response.status_code == 200
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_policies_run_in_order(self, make_transport, make_response):
        order = []

        class Named:
            def __init__(self, name):
                self.name = name

            async def send(self, request, next_):
                order.append(self.name)
                return await next_(request)

        transport = make_transport([make_response()])
        pipeline = Pipeline(transport, [Named("a"), Named("b")], retry=fast_retry())
        await pipeline.run(PipelineRequest.create("POST", URL))

        assert order == ["a", "b"]

    @pytest.mark.asyncio
    async def test_retry_reruns_policies_on_fresh_copy(self, make_transport, make_response):
        """Each attempt is signed again and starts from the caller's request."""
        first = make_response(status_code=503)
        transport = make_transport([first, make_response()])
        policy = RecordingPolicy()
        pipeline = Pipeline(transport, [policy], retry=fast_retry())
        request = PipelineRequest.create("POST", URL)

        response = await pipeline.run(request)

        assert response.status_code == 200
        assert policy.call_count == 2
        assert [r.headers["x-attempt"] for r in transport.requests] == ["1", "2"]
        assert "x-attempt" not in request.headers
        assert first.closed

    @pytest.mark.asyncio
    async def test_bearer_token_fetched_per_attempt(
        self, make_transport, make_response, token_credential
    ):
        transport = make_transport([make_response(status_code=503), make_response()])
        pipeline = Pipeline(
            transport,
            [BearerTokenPolicy(token_credential, [TOKEN_SCOPE])],
            retry=fast_retry()
        )

        await pipeline.run(PipelineRequest.create("POST", URL))

        assert [r.headers["Authorization"] for r in transport.requests] == [
            "Bearer token-1",
            "Bearer token-2",
        ]
        assert token_credential.calls == [(TOKEN_SCOPE,), (TOKEN_SCOPE,)]

    @pytest.mark.asyncio
    async def test_transport_error_retried(self, make_transport, make_response):
        transport = make_transport([
            TransportError("connection reset"),
            TimeoutError("connect timed out"),
            make_response(),
        ])
        pipeline = Pipeline(transport, retry=fast_retry())

        response = await pipeline.run(PipelineRequest.create("POST", URL))

        assert response.status_code == 200
        assert len(transport.requests) == 3

    @pytest.mark.asyncio
    async def test_transport_error_exhausted(self, make_transport):
        transport = make_transport([TransportError("down"), TransportError("still down")])
        pipeline = Pipeline(transport, retry=fast_retry(max_retries=1))

        with pytest.raises(TransportError, match="still down"):
            await pipeline.run(PipelineRequest.create("POST", URL))

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self, make_transport, make_response):
        transport = make_transport([make_response(status_code=400), make_response()])
        pipeline = Pipeline(transport, retry=fast_retry())

        response = await pipeline.run(PipelineRequest.create("POST", URL))

        assert response.status_code == 400
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_exhaustion_returns_last_response(self, make_transport, make_response):
        responses = [make_response(status_code=429) for _ in range(3)]
        transport = make_transport(responses)
        pipeline = Pipeline(transport, retry=fast_retry(max_retries=2))

        response = await pipeline.run(PipelineRequest.create("POST", URL))

        assert response is responses[-1]
        assert not response.closed
        assert all(r.closed for r in responses[:-1])

    @pytest.mark.asyncio
    async def test_insecure_transport_not_retried(self, make_transport):
        transport = make_transport([InsecureTransportError("no TLS"), None])
        pipeline = Pipeline(transport, retry=fast_retry())

        with pytest.raises(InsecureTransportError):
            await pipeline.run(PipelineRequest.create("POST", URL))
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_unexpected_error_not_retried(self, make_transport):
        transport = make_transport([ValueError("bug"), None])
        pipeline = Pipeline(transport, retry=fast_retry())

        with pytest.raises(ValueError):
            await pipeline.run(PipelineRequest.create("POST", URL))
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_retry_after_honoured(self, monkeypatch, make_transport, make_response):
        delays = []

        async def fake_sleep(delay):
            delays.append(delay)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)
        transport = make_transport([
            make_response(status_code=429, headers={"Retry-After": "7"}),
            make_response(status_code=503, headers={"retry-after-ms": "250"}),
            make_response(),
        ])
        pipeline = Pipeline(transport, retry=fast_retry())

        await pipeline.run(PipelineRequest.create("POST", URL))

        assert delays == [7.0, 0.25]

    @pytest.mark.asyncio
    async def test_retry_after_capped_at_max_delay(self, monkeypatch, make_transport, make_response):
        delays = []

        async def fake_sleep(delay):
            delays.append(delay)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)
        transport = make_transport([
            make_response(status_code=429, headers={"Retry-After": "86400"}),
            make_response(status_code=429, headers={"Retry-After": "inf"}),
            make_response(),
        ])
        config = RetryConfig(max_retries=3, initial_delay=0.5, max_delay=10.0, jitter=False)
        pipeline = Pipeline(transport, retry=config)

        response = await pipeline.run(PipelineRequest.create("POST", URL))

        assert response.status_code == 200
        assert delays == [10.0, 1.0]

    @pytest.mark.asyncio
    async def test_no_retries_configured(self, make_transport, make_response):
        transport = make_transport([make_response(status_code=500)])
        pipeline = Pipeline(transport, retry=fast_retry(max_retries=0))

        response = await pipeline.run(PipelineRequest.create("POST", URL))

        assert response.status_code == 500
