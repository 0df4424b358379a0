"""Posts provider -- opens the post generation stream on the job server."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from poststream.config.settings import Settings
from poststream.streaming.dispatcher import GenerationStreamHandlers
from poststream.streaming.driver import (
    ByteStreamReader,
    CancellationToken,
    StreamOutcome,
    read_generation_stream,
)

from .errors import build_api_error

logger = logging.getLogger(__name__)

STREAM_FALLBACK_ERROR = "Unable to stream the post generation."


class PostsStreamProvider:
    """Streams post generation progress via the job server's event stream."""

    STREAM_PATH = "/posts/generate/{generation_id}/stream"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or Settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self._settings.api_base_url,
            timeout=httpx.Timeout(
                self._settings.request_timeout,
                read=self._settings.stream_read_timeout,
            ),
        )

    async def __aenter__(self) -> "PostsStreamProvider":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "text/event-stream"}
        if self._settings.api_token:
            headers["Authorization"] = f"Bearer {self._settings.api_token}"
        return headers

    async def stream_post_generation(
        self,
        generation_id: str,
        handlers: GenerationStreamHandlers,
        cancel: Optional[CancellationToken] = None,
    ) -> StreamOutcome:
        """Stream events for ``generation_id`` into ``handlers``.

        Raises ApiError when the server rejects the request. Once the stream
        is open, failures go to ``handlers.on_error`` and the outcome is
        returned.
        """
        if cancel is not None and cancel.cancelled:
            logger.info(f"Generation {generation_id} cancelled before request")
            return StreamOutcome.CANCELLED

        request = self._client.build_request(
            "GET",
            self.STREAM_PATH.format(generation_id=generation_id),
            headers=self._headers(),
        )
        response = await self._client.send(request, stream=True)

        if not response.is_success:
            try:
                await response.aread()
                raise build_api_error(response, STREAM_FALLBACK_ERROR)
            finally:
                await response.aclose()

        logger.info(f"Streaming generation {generation_id}")
        reader = ByteStreamReader(response.aiter_bytes(), on_release=response.aclose)
        return await read_generation_stream(reader, handlers, cancel)
