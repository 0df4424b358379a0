"""Routes completed frames to the caller's handlers."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from poststream.models.generation import PostEvent, ResultEvent, TitleEvent

from .assembler import PendingFrame
from .errors import HandlerError, MalformedEventError
from .events import GenerationEventType

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


@dataclass
class GenerationStreamHandlers:
    """Optional callbacks invoked synchronously as events complete."""

    on_post: Optional[Callable[[PostEvent], Any]] = None
    on_result: Optional[Callable[[ResultEvent], Any]] = None
    on_title: Optional[Callable[[TitleEvent], Any]] = None
    on_error: Optional[Callable[[Exception], Any]] = None


# Closed mapping: event name -> (payload model, handler attribute).
EVENT_ROUTES: dict[str, tuple[type[BaseModel], str]] = {
    GenerationEventType.POST.value: (PostEvent, "on_post"),
    GenerationEventType.RESULT.value: (ResultEvent, "on_result"),
    GenerationEventType.TITLE.value: (TitleEvent, "on_title"),
}


class EventDispatcher:
    """Parses frame data as JSON and calls the handler for its event name.

    Malformed frames and failing handlers are reported through ``on_error``
    and never stop the stream. Event names outside ``EVENT_ROUTES`` are
    dropped.
    """

    def __init__(self, handlers: GenerationStreamHandlers) -> None:
        self._handlers = handlers

    def dispatch(self, frame: PendingFrame) -> None:
        data = frame.data
        if not data:
            return

        route = EVENT_ROUTES.get(frame.event_name)

        try:
            parsed = json.loads(data, parse_constant=_reject_constant)
            if route is not None:
                payload = route[0].model_validate(parsed)
        except (ValueError, ValidationError, RecursionError) as e:
            logger.warning(f"Malformed '{frame.event_name}' event dropped: {e}")
            self.report_error(MalformedEventError(frame.event_name, data, cause=e))
            return

        if route is None:
            logger.debug(f"No route for '{frame.event_name}' event, discarding")
            return

        handler = getattr(self._handlers, route[1])
        if handler is None:
            return

        logger.debug(f"Dispatching '{frame.event_name}' event")
        try:
            handler(payload)
        except Exception as e:
            logger.warning(f"Handler for '{frame.event_name}' event raised: {e}")
            self.report_error(HandlerError(frame.event_name, e))

    def report_error(self, error: Exception) -> None:
        if self._handlers.on_error is not None:
            self._handlers.on_error(error)
