"""API error construction for non-success responses."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The job server answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def build_api_error(response: httpx.Response, fallback: str) -> ApiError:
    """Build an ApiError from a read response body.

    Servers report ``{"message": "..."}`` or ``{"message": ["...", "..."]}``;
    anything else falls back to ``fallback``.
    """
    message = fallback
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        raw = body.get("message")
        if isinstance(raw, str) and raw.strip():
            message = raw
        elif isinstance(raw, list):
            parts = [str(p) for p in raw if p]
            if parts:
                message = ", ".join(parts)

    logger.error(f"API error {response.status_code}: {message}")
    return ApiError(message, status_code=response.status_code)
