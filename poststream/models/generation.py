"""Payload contracts for post generation stream events.

Field names follow Python conventions; the wire uses camelCase, so every
model accepts both and serializes back to camelCase with ``by_alias=True``.
Unknown fields are kept so newer server payloads still round-trip.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class GenerationPost(_WireModel):
    """Summary of the post being generated, as reported mid-job."""

    id: str
    title: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    post_type: Optional[str] = None
    platform: Optional[str] = None
    theme_id: Optional[str] = None
    angle_id: Optional[str] = None
    final_version_id: Optional[str] = None


class PostVersion(_WireModel):
    """A generated version of the post. Only the id is guaranteed."""

    id: str
    text: Optional[str] = None
    created_at: Optional[str] = None


class PostEvent(_WireModel):
    post: GenerationPost


class ResultEvent(_WireModel):
    post: GenerationPost
    version: Optional[PostVersion] = None


class TitleEvent(_WireModel):
    post_id: str
    title: str
