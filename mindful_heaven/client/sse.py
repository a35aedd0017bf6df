"""
Incremental decoder for chat-completion event streams.

The relay forwards the upstream ``text/event-stream`` body unchanged. Each
event of interest is a ``data: <json>`` line whose JSON carries the next
text fragment at ``choices[0].delta.content``; ``data: [DONE]`` ends the
stream.

``SSEDecoder`` accepts the body in arbitrary byte chunks. UTF-8 is decoded
incrementally, so a multi-byte character split across chunks is still
decoded correctly, and the fragments produced do not depend on where the
chunks were split.
"""

from __future__ import annotations

import codecs
import json
from typing import Any, Iterable, List, Optional

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def delta_content(event: Any) -> Optional[str]:
    """``choices[0].delta.content`` of a decoded event, or None when absent."""
    if not isinstance(event, dict):
        return None
    choices = event.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    delta = choices[0].get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None


class SSEDecoder:
    """Turns event-stream bytes into completion text fragments.

    Lines are split on ``\\n`` with a trailing ``\\r`` removed. Blank lines,
    comment lines (starting with ``:``) and lines without the ``data: ``
    prefix are skipped. When a data line does not parse as JSON it is put
    back in front of the buffer and decoding pauses until more bytes arrive.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""
        self.done = False

    def feed(self, chunk: bytes) -> List[str]:
        """Add bytes and return the fragments that became complete."""
        if self.done:
            return []
        self._buffer += self._decoder.decode(chunk)
        return self._drain()

    def close(self) -> List[str]:
        """Signal end of input; flushes a last data line not followed by a newline."""
        if self.done:
            return []
        self._buffer += self._decoder.decode(b"", final=True)
        if self._buffer and not self._buffer.endswith("\n"):
            self._buffer += "\n"
        fragments = self._drain()
        self.done = True
        return fragments

    def _drain(self) -> List[str]:
        fragments: List[str] = []
        while not self.done:
            newline_index = self._buffer.find("\n")
            if newline_index == -1:
                break
            line = self._buffer[:newline_index]
            self._buffer = self._buffer[newline_index + 1 :]

            if line.endswith("\r"):
                line = line[:-1]
            if line.startswith(":") or not line.strip():
                continue
            if not line.startswith(DATA_PREFIX):
                continue

            payload = line[len(DATA_PREFIX) :].strip()
            if payload == DONE_SENTINEL:
                self.done = True
                break

            try:
                event = json.loads(payload)
            except ValueError:
                self._buffer = f"{line}\n{self._buffer}"
                break

            content = delta_content(event)
            if content:
                fragments.append(content)
        return fragments


def decode_stream(chunks: Iterable[bytes]) -> str:
    """Concatenated text of a complete event stream."""
    decoder = SSEDecoder()
    parts: List[str] = []
    for chunk in chunks:
        parts.extend(decoder.feed(chunk))
    parts.extend(decoder.close())
    return "".join(parts)
