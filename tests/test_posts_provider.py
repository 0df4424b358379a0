"""Tests for PostsStreamProvider -- all mocked, no job server needed."""

import httpx
import pytest

from poststream.config.settings import Settings
from poststream.providers.errors import ApiError, build_api_error
from poststream.providers.posts_provider import STREAM_FALLBACK_ERROR, PostsStreamProvider
from poststream.streaming.driver import CancellationToken, StreamOutcome

BODY = (
    b'event: post\ndata: {"post":{"id":"p1"}}\n\n'
    b'event: result\ndata: {"post":{"id":"p1"},"version":null}\n\n'
)


def _provider(handler, **settings) -> tuple[PostsStreamProvider, httpx.AsyncClient]:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://jobs.test/api"
    )
    return PostsStreamProvider(settings=Settings(_env_file=None, **settings), client=client), client


class TestPostsStreamProvider:
    @pytest.mark.asyncio
    async def test_streams_events_into_handlers(self, handlers):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["accept"] = request.headers.get("accept")
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, headers={"content-type": "text/event-stream"}, content=BODY)

        provider, client = _provider(handler, api_token="secret")
        async with client:
            outcome = await provider.stream_post_generation("gen-1", handlers)

        assert outcome == StreamOutcome.COMPLETED
        assert seen["url"] == "http://jobs.test/api/posts/generate/gen-1/stream"
        assert seen["accept"] == "text/event-stream"
        assert seen["auth"] == "Bearer secret"
        handlers.on_post.assert_called_once()
        handlers.on_result.assert_called_once()
        assert handlers.on_result.call_args.args[0].version is None
        handlers.on_error.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self, handlers):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, content=b"")

        provider, client = _provider(handler)
        async with client:
            await provider.stream_post_generation("gen-1", handlers)
        assert seen["auth"] is None

    @pytest.mark.asyncio
    async def test_error_response_raises_api_error(self, handlers):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Generation not found"})

        provider, client = _provider(handler)
        async with client:
            with pytest.raises(ApiError) as exc_info:
                await provider.stream_post_generation("missing", handlers)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Generation not found"
        handlers.on_error.assert_not_called()

    @pytest.mark.asyncio
    async def test_cancelled_token_skips_request(self, handlers):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, content=BODY)

        cancel = CancellationToken()
        cancel.cancel()
        provider, client = _provider(handler)
        async with client:
            outcome = await provider.stream_post_generation("gen-1", handlers, cancel)

        assert outcome == StreamOutcome.CANCELLED
        assert calls == []
        handlers.on_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_owned_client_closed_on_exit(self):
        async with PostsStreamProvider(settings=Settings(_env_file=None)) as provider:
            client = provider._client
        assert client.is_closed


class TestBuildApiError:
    def test_list_message_is_joined(self):
        response = httpx.Response(400, json={"message": ["id must be a UUID", "id is required"]})
        error = build_api_error(response, STREAM_FALLBACK_ERROR)
        assert error.message == "id must be a UUID, id is required"
        assert error.status_code == 400

    def test_non_json_body_uses_fallback(self):
        response = httpx.Response(502, content=b"<html>Bad gateway</html>")
        error = build_api_error(response, STREAM_FALLBACK_ERROR)
        assert error.message == "Unable to stream the post generation."
        assert str(error) == error.message

    def test_blank_message_uses_fallback(self):
        response = httpx.Response(500, json={"message": "  "})
        assert build_api_error(response, "fallback").message == "fallback"
