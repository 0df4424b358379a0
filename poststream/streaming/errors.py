"""Error taxonomy for generation stream consumption."""

from __future__ import annotations


class GenerationStreamError(Exception):
    """Base class for every error delivered through the error channel."""


class TransportError(GenerationStreamError):
    """The underlying read failed for a reason other than cancellation.

    The stream terminates after this error is reported.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class MalformedEventError(GenerationStreamError):
    """A completed frame carried data that is not a valid payload.

    Raised for both invalid JSON and JSON that does not fit the routed
    payload shape. Processing continues with the next frame.
    """

    def __init__(self, event_name: str, data: str, cause: BaseException | None = None) -> None:
        preview = data[:100] + "..." if len(data) > 100 else data
        super().__init__(f"Failed to parse '{event_name}' event: {cause}. Data: {preview}")
        self.event_name = event_name
        self.data = data
        self.cause = cause


class HandlerError(GenerationStreamError):
    """A caller-supplied handler raised while processing an event."""

    def __init__(self, event_name: str, cause: BaseException) -> None:
        super().__init__(f"Handler for '{event_name}' event failed: {cause}")
        self.event_name = event_name
        self.cause = cause
