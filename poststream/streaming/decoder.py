"""Incremental byte decoding and line framing for event-stream bodies."""

from __future__ import annotations

import codecs
import re

# Lines end with "\n" or "\r\n". A lone "\r" is not a terminator.
_LINE_BREAK = re.compile(r"\r?\n")


class StreamDecoder:
    """Stateful UTF-8 decoder that spans chunk boundaries.

    A multi-byte character split across two chunks is held back until the
    rest of it arrives, instead of turning into replacement characters.
    Malformed bytes degrade to U+FFFD. A leading byte-order mark is dropped.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8-sig")(errors="replace")

    def decode(self, chunk: bytes | None, final: bool = False) -> str:
        """Decode the next chunk. Pass ``None`` (or ``final=True``) to flush."""
        if chunk is None:
            return self._decoder.decode(b"", final=True)
        return self._decoder.decode(chunk, final=final)


class LineFramer:
    """Accumulates decoded text and hands back complete lines.

    The fragment after the last terminator stays in the buffer until more
    text arrives or the stream ends.
    """

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, text: str) -> list[str]:
        if not text:
            return []
        self._buffer += text
        lines = _LINE_BREAK.split(self._buffer)
        self._buffer = lines.pop()
        return lines

    def flush(self) -> list[str]:
        """Return the unterminated remainder as a final line, if any."""
        remainder, self._buffer = self._buffer, ""
        return [remainder] if remainder else []
