"""Tests for notepilot.providers.client against httpx.MockTransport."""

import httpx
import pytest

from notepilot.providers.client import CompletionClient
from notepilot.providers.errors import (
    FormatError,
    PreconditionError,
    TransportError,
)
from notepilot.providers.models import CompletionRequest

from conftest import TransportRecorder, json_response


def _request(**overrides) -> CompletionRequest:
    base = dict(
        prompt="Summarize X",
        provider="openai-compatible",
        api_endpoint="https://x/v1",
        api_key="sk-test",
        model="gpt-3.5-turbo",
        temperature=0.7,
        max_tokens=1000,
    )
    base.update(overrides)
    return CompletionRequest(**base)


class TestComplete:
    async def test_openai_end_to_end(self):
        recorder = TransportRecorder(
            json_response(200, {"choices": [{"message": {"content": " Result. "}}]}),
        )
        client = CompletionClient(transport=recorder.transport)

        assert await client.complete(_request()) == "Result."

        sent = recorder.requests[0]
        assert sent.method == "POST"
        assert str(sent.url) == "https://x/v1/chat/completions"
        assert sent.headers["Authorization"] == "Bearer sk-test"
        assert recorder.body()["messages"] == [
            {"role": "user", "content": "Summarize X"},
        ]

    async def test_gemini_request_shape(self):
        recorder = TransportRecorder(
            json_response(
                200,
                {"candidates": [{"content": {"parts": [{"text": "ok"}]}}]},
            ),
        )
        client = CompletionClient(transport=recorder.transport)
        text = await client.complete(
            _request(
                provider="gemini",
                api_endpoint="https://g/v1beta",
                model="gemini-pro",
                system_prompt="Be brief",
            ),
        )
        assert text == "ok"
        sent = recorder.requests[0]
        assert str(sent.url) == "https://g/v1beta/models/gemini-pro:generateContent"
        assert sent.headers["x-goog-api-key"] == "sk-test"
        assert recorder.body()["contents"][0]["parts"][0]["text"].startswith(
            "Instructions: Be brief\nTask: ",
        )

    async def test_anthropic_request_shape(self):
        recorder = TransportRecorder(json_response(200, {"completion": " Hi"}))
        client = CompletionClient(transport=recorder.transport)
        text = await client.complete(
            _request(provider="anthropic", api_endpoint="https://a/v1"),
        )
        assert text == "Hi"
        assert str(recorder.requests[0].url) == "https://a/v1/complete"
        assert recorder.requests[0].headers["x-api-key"] == "sk-test"

    async def test_unexpected_schema_is_format_error(self):
        recorder = TransportRecorder(json_response(200, {"result": "x"}))
        client = CompletionClient(transport=recorder.transport)
        with pytest.raises(FormatError, match="Unexpected API response format"):
            await client.complete(_request())

    async def test_non_json_body_is_format_error(self):
        recorder = TransportRecorder(
            lambda request: httpx.Response(200, text="<html>"),
        )
        client = CompletionClient(transport=recorder.transport)
        with pytest.raises(FormatError):
            await client.complete(_request())

    async def test_http_error_uses_provider_message(self):
        recorder = TransportRecorder(
            json_response(401, {"error": {"message": "Incorrect API key"}}),
        )
        client = CompletionClient(transport=recorder.transport)
        with pytest.raises(TransportError) as exc_info:
            await client.complete(_request())
        assert exc_info.value.message == "Incorrect API key"
        assert exc_info.value.status_code == 401

    async def test_http_error_without_json_uses_transport_text(self):
        recorder = TransportRecorder(
            lambda request: httpx.Response(502, text="Bad gateway"),
        )
        client = CompletionClient(transport=recorder.transport)
        with pytest.raises(TransportError, match="502"):
            await client.complete(_request())

    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = CompletionClient(transport=httpx.MockTransport(handler))
        with pytest.raises(TransportError, match="connection refused"):
            await client.complete(_request())

    async def test_single_attempt(self):
        recorder = TransportRecorder(json_response(500, {"message": "boom"}))
        client = CompletionClient(transport=recorder.transport)
        with pytest.raises(TransportError, match="boom"):
            await client.complete(_request())
        assert len(recorder.requests) == 1

    @pytest.mark.parametrize(
        "overrides,match",
        [
            ({"api_key": "sk-\u00e9"}, "API key"),
            ({"api_endpoint": "http://[::1/v1"}, "Invalid API endpoint"),
        ],
    )
    async def test_unsendable_config_is_precondition(self, overrides, match):
        recorder = TransportRecorder(json_response(200, {}))
        client = CompletionClient(transport=recorder.transport)
        with pytest.raises(PreconditionError, match=match):
            await client.complete(_request(**overrides))
        assert recorder.requests == []


class TestListModels:
    async def test_returns_ids_in_order(self):
        recorder = TransportRecorder(
            json_response(200, {"data": [{"id": "b"}, {"id": "a"}]}),
        )
        client = CompletionClient(transport=recorder.transport)
        ids = await client.list_models("lingyiwanwu", "https://y/v1", "k")
        assert ids == ["b", "a"]
        sent = recorder.requests[0]
        assert sent.method == "GET"
        assert str(sent.url) == "https://y/v1/models"
        assert sent.headers["Authorization"] == "Bearer k"

    async def test_missing_data_is_format_error(self):
        recorder = TransportRecorder(json_response(200, {"object": "list"}))
        client = CompletionClient(transport=recorder.transport)
        with pytest.raises(FormatError):
            await client.list_models("custom", "https://y/v1", "k")
