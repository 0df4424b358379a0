from .assembler import DEFAULT_EVENT_NAME, EventAssembler, PendingFrame
from .decoder import LineFramer, StreamDecoder
from .dispatcher import EventDispatcher, GenerationStreamHandlers
from .driver import ByteStreamReader, CancellationToken, StreamOutcome, read_generation_stream
from .errors import GenerationStreamError, HandlerError, MalformedEventError, TransportError
from .events import GenerationEventType, SSEEvent

__all__ = [
    "DEFAULT_EVENT_NAME",
    "EventAssembler",
    "PendingFrame",
    "LineFramer",
    "StreamDecoder",
    "EventDispatcher",
    "GenerationStreamHandlers",
    "ByteStreamReader",
    "CancellationToken",
    "StreamOutcome",
    "read_generation_stream",
    "GenerationStreamError",
    "HandlerError",
    "MalformedEventError",
    "TransportError",
    "GenerationEventType",
    "SSEEvent",
]
