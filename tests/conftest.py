"""Shared helpers for generation stream tests."""

from __future__ import annotations

import socket
import threading
import time
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import uvicorn

from poststream.streaming.dispatcher import GenerationStreamHandlers
from poststream.streaming.driver import ByteStreamReader, CancellationToken


def make_reader(
    chunks: Iterable[bytes], cancel_before: Optional[dict[int, CancellationToken]] = None
) -> tuple[ByteStreamReader, AsyncMock]:
    """Reader over fixed chunks; returns the reader and its release mock.

    ``cancel_before`` maps a chunk index to a token that is cancelled just
    before that chunk is handed out, simulating a cancel during a read.
    """
    chunks = list(chunks)

    async def source():
        for i, chunk in enumerate(chunks):
            if cancel_before and i in cancel_before:
                cancel_before[i].cancel()
            yield chunk

    release = AsyncMock()
    return ByteStreamReader(source(), on_release=release), release


def split_at(data: bytes, *offsets: int) -> list[bytes]:
    """Split bytes at the given offsets."""
    bounds = [0, *offsets, len(data)]
    return [data[a:b] for a, b in zip(bounds, bounds[1:])]


@pytest.fixture
def handlers():
    return GenerationStreamHandlers(
        on_post=MagicMock(),
        on_result=MagicMock(),
        on_title=MagicMock(),
        on_error=MagicMock(),
    )


@pytest.fixture
def recorded():
    """Handlers that append ("name", payload) tuples to one ordered list."""
    calls: list[tuple[str, object]] = []
    recorder = GenerationStreamHandlers(
        on_post=lambda p: calls.append(("post", p.model_dump(by_alias=True))),
        on_result=lambda p: calls.append(("result", p.model_dump(by_alias=True))),
        on_title=lambda p: calls.append(("title", p.model_dump(by_alias=True))),
        on_error=lambda e: calls.append(("error", type(e).__name__)),
    )
    return recorder, calls


@contextmanager
def serve_in_thread(app, timeout: float = 5.0) -> Iterator[str]:
    """Serve an ASGI app with uvicorn on a free local port; yields its base URL."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind(("127.0.0.1", 0))
    host, port = sock.getsockname()

    server = uvicorn.Server(uvicorn.Config(app, log_level="error"))
    thread = threading.Thread(target=server.run, kwargs={"sockets": [sock]}, daemon=True)
    thread.start()
    deadline = time.monotonic() + timeout
    while not server.started:
        if time.monotonic() > deadline or not thread.is_alive():
            raise RuntimeError("uvicorn did not start")
        time.sleep(0.02)

    try:
        yield f"http://{host}:{port}"
    finally:
        server.should_exit = True
        thread.join(timeout=timeout)
        sock.close()
