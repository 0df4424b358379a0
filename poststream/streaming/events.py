"""Generation stream event types and wire serialization."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel


class GenerationEventType(str, Enum):
    """Event names the generation stream carries."""

    # Post summary created or updated while the job runs
    POST = "post"
    # Job finished: final post summary and the generated version
    RESULT = "result"
    # Title generated for the post
    TITLE = "title"


@dataclass
class SSEEvent:
    """A single generation event ready for wire serialization."""

    event_type: Union[GenerationEventType, str]
    data: Union[BaseModel, dict[str, Any]]
    sequence_id: Optional[int] = None

    def to_sse_string(self) -> str:
        """Serialize to event-stream wire format.

        Format:
            event: <type>
            data: <json>
            id: <seq>          (only when sequence_id is set)

            (terminated by a blank line)
        """
        if isinstance(self.data, BaseModel):
            data_json = self.data.model_dump_json(by_alias=True, exclude_none=True)
        else:
            data_json = json.dumps(self.data, default=str)
        name = self.event_type.value if isinstance(self.event_type, GenerationEventType) else self.event_type
        wire = f"event: {name}\ndata: {data_json}\n"
        if self.sequence_id is not None:
            wire += f"id: {self.sequence_id}\n"
        return wire + "\n"
