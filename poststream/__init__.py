"""Client for post generation progress streams."""

from poststream.models import GenerationPost, PostEvent, PostVersion, ResultEvent, TitleEvent
from poststream.providers import ApiError, PostsStreamProvider
from poststream.streaming import (
    ByteStreamReader,
    CancellationToken,
    GenerationStreamHandlers,
    HandlerError,
    MalformedEventError,
    StreamOutcome,
    TransportError,
    read_generation_stream,
)

__all__ = [
    "GenerationPost",
    "PostEvent",
    "PostVersion",
    "ResultEvent",
    "TitleEvent",
    "ApiError",
    "PostsStreamProvider",
    "ByteStreamReader",
    "CancellationToken",
    "GenerationStreamHandlers",
    "HandlerError",
    "MalformedEventError",
    "StreamOutcome",
    "TransportError",
    "read_generation_stream",
]
