"""Stream driver: the pull-loop that feeds chunks through the parser.

One iteration issues exactly one read. Cancellation is polled before each
read, and the reader is released exactly once on every exit path.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterable, AsyncIterator, Awaitable, Callable, Optional, Union

from .assembler import EMPTY_FRAME, EventAssembler, PendingFrame
from .decoder import LineFramer, StreamDecoder
from .dispatcher import EventDispatcher, GenerationStreamHandlers
from .errors import TransportError

logger = logging.getLogger(__name__)


class StreamOutcome(str, Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class CancellationToken:
    """Cooperative cancellation signal shared between caller and driver."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()


# Tagged results of a single read.


@dataclass(frozen=True)
class Chunk:
    data: bytes


@dataclass(frozen=True)
class EndOfStream:
    pass


@dataclass(frozen=True)
class ReadFailed:
    error: TransportError


@dataclass(frozen=True)
class ReadCancelled:
    pass


ReadResult = Union[Chunk, EndOfStream, ReadFailed, ReadCancelled]


class ByteStreamReader:
    """Single-owner reader over an async byte iterable.

    ``release`` is idempotent and calls the optional ``on_release`` callback
    once, which is where a transport closes its response.
    """

    def __init__(
        self,
        source: AsyncIterable[bytes],
        on_release: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        self._iterator: AsyncIterator[bytes] = source.__aiter__()
        self._on_release = on_release
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    async def read(self) -> Optional[bytes]:
        """Return the next chunk, or ``None`` at end of stream."""
        try:
            return await self._iterator.__anext__()
        except StopAsyncIteration:
            return None

    async def release(self) -> None:
        if self._released:
            return
        self._released = True
        aclose = getattr(self._iterator, "aclose", None)
        try:
            if aclose is not None:
                await aclose()
        finally:
            if self._on_release is not None:
                await self._on_release()


async def read_next(reader: ByteStreamReader, cancel: Optional[CancellationToken]) -> ReadResult:
    """Perform one read and classify the result without raising."""
    if cancel is not None and cancel.cancelled:
        return ReadCancelled()
    try:
        chunk = await reader.read()
    except Exception as e:
        if cancel is not None and cancel.cancelled:
            return ReadCancelled()
        return ReadFailed(TransportError(f"Stream read failed: {e}", cause=e))
    if chunk is None:
        return EndOfStream()
    return Chunk(chunk)


async def read_generation_stream(
    reader: ByteStreamReader,
    handlers: GenerationStreamHandlers,
    cancel: Optional[CancellationToken] = None,
) -> StreamOutcome:
    """Consume a generation stream, dispatching events to ``handlers``.

    Returns how the stream ended. Transport failures are also reported to
    ``handlers.on_error``; cancellation never is.
    """
    decoder = StreamDecoder()
    framer = LineFramer()
    dispatcher = EventDispatcher(handlers)
    frame: PendingFrame = EMPTY_FRAME

    def consume(current: PendingFrame, lines: list[str]) -> PendingFrame:
        next_frame, completed = EventAssembler.feed_lines(current, lines)
        for done in completed:
            dispatcher.dispatch(done)
        return next_frame

    outcome = StreamOutcome.COMPLETED
    try:
        while True:
            result = await read_next(reader, cancel)

            if isinstance(result, Chunk):
                frame = consume(frame, framer.feed(decoder.decode(result.data)))
                continue

            if isinstance(result, EndOfStream):
                frame = consume(frame, framer.feed(decoder.decode(None)))
                frame = consume(frame, framer.flush())
                break

            if isinstance(result, ReadCancelled):
                logger.info("Generation stream cancelled")
                outcome = StreamOutcome.CANCELLED
                break

            logger.error(f"Generation stream failed: {result.error}")
            outcome = StreamOutcome.FAILED
            dispatcher.report_error(result.error)
            break

        if frame.has_data:
            dispatcher.dispatch(frame)
            frame = EMPTY_FRAME
    finally:
        await reader.release()

    logger.info(f"Generation stream closed: {outcome.value}")
    return outcome
