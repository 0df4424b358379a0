"""Event assembly: turns framed lines into completed frames."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

DEFAULT_EVENT_NAME = "message"

_COMMENT_PREFIX = ":"
_EVENT_PREFIX = "event:"
_DATA_PREFIX = "data:"


@dataclass(frozen=True)
class PendingFrame:
    """An event under construction: its name and the data lines seen so far."""

    event_name: str = DEFAULT_EVENT_NAME
    data_lines: tuple[str, ...] = ()

    @property
    def has_data(self) -> bool:
        return bool(self.data_lines)

    @property
    def data(self) -> str:
        return "\n".join(self.data_lines)


EMPTY_FRAME = PendingFrame()


class EventAssembler:
    """Line classifier for the event-stream framing.

    Each call takes the current frame and returns the next one, plus the
    completed frame when a blank line closes one that carries data. Only a
    blank line completes a frame.
    """

    @staticmethod
    def process(frame: PendingFrame, line: str) -> tuple[PendingFrame, Optional[PendingFrame]]:
        if not line:
            completed = frame if frame.has_data else None
            return EMPTY_FRAME, completed

        if line.startswith(_COMMENT_PREFIX):
            return frame, None

        if line.startswith(_EVENT_PREFIX):
            return replace(frame, event_name=line[len(_EVENT_PREFIX):].strip()), None

        if line.startswith(_DATA_PREFIX):
            value = line[len(_DATA_PREFIX):].strip()
            return replace(frame, data_lines=frame.data_lines + (value,)), None

        # id:, retry: and anything else are not supported
        return frame, None

    @classmethod
    def feed_lines(
        cls, frame: PendingFrame, lines: Iterable[str]
    ) -> tuple[PendingFrame, list[PendingFrame]]:
        """Fold a batch of lines, returning the final frame and completed frames in order."""
        completed: list[PendingFrame] = []
        for line in lines:
            frame, done = cls.process(frame, line)
            if done is not None:
                completed.append(done)
        return frame, completed
