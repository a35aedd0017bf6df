"""
Client for AI chat sessions.

Sending a message stores the user turn, relays the whole conversation to
the support assistant and grows an assistant entry in the local transcript
as fragments stream in. The finished answer is stored as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import httpx

from mindful_heaven.core.logging_config import get_logger

from .sse import SSEDecoder

logger = get_logger(__name__)

API_PREFIX = "/api/v1"
DEFAULT_RELAY_ERROR = "Failed to get AI response"


class RelayError(Exception):
    """The relay answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass
class TranscriptEntry:
    role: str
    content: str

    def as_message(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return DEFAULT_RELAY_ERROR
    if isinstance(body, dict):
        return body.get("error") or body.get("detail") or DEFAULT_RELAY_ERROR
    return DEFAULT_RELAY_ERROR


class AIChatClient:
    """AI chat operations against a Mindful Heaven server.

    Args:
        http: Client whose ``base_url`` points at the server
        access_token: Bearer token of the signed-in user
        on_update: Called with the transcript whenever it changes
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        access_token: Optional[str] = None,
        on_update: Optional[Callable[[List[TranscriptEntry]], None]] = None,
    ) -> None:
        self.http = http
        self.headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}
        self.on_update = on_update
        self.transcript: List[TranscriptEntry] = []

    def _changed(self) -> None:
        if self.on_update is not None:
            self.on_update(self.transcript)

    async def create_chat(self, title: Optional[str] = None) -> Dict:
        response = await self.http.post(f"{API_PREFIX}/chats", json={"title": title}, headers=self.headers)
        response.raise_for_status()
        self.transcript = []
        return response.json()

    async def load(self, chat_id: str) -> List[TranscriptEntry]:
        """Replace the transcript with the stored history of a chat."""
        response = await self.http.get(f"{API_PREFIX}/chats/{chat_id}/messages", headers=self.headers)
        response.raise_for_status()
        self.transcript = [TranscriptEntry(m["role"], m["content"]) for m in response.json()["messages"]]
        self._changed()
        return self.transcript

    async def _store(self, chat_id: str, role: str, content: str) -> None:
        response = await self.http.post(
            f"{API_PREFIX}/chats/{chat_id}/messages",
            json={"role": role, "content": content},
            headers=self.headers,
        )
        response.raise_for_status()

    async def send(self, chat_id: str, text: str) -> Optional[TranscriptEntry]:
        """
        Send a user message and stream the assistant's answer into the transcript.

        Blank input is ignored.

        Returns:
            The assistant entry, or None when nothing was sent

        Raises:
            RelayError: the relay rejected the request; the user message stays
                in the transcript and no assistant entry is added
        """
        text = text.strip()
        if not text:
            return None

        self.transcript.append(TranscriptEntry("user", text))
        self._changed()
        await self._store(chat_id, "user", text)

        history = [entry.as_message() for entry in self.transcript]
        async with self.http.stream(
            "POST", f"{API_PREFIX}/ai-chat", json={"messages": history}, headers=self.headers
        ) as response:
            if not response.is_success:
                await response.aread()
                message = _error_message(response)
                logger.warning(f"Relay refused chat {chat_id}: {response.status_code} {message}")
                raise RelayError(response.status_code, message)

            assistant = TranscriptEntry("assistant", "")
            self.transcript.append(assistant)
            self._changed()

            decoder = SSEDecoder()
            async for chunk in response.aiter_bytes():
                fragments = decoder.feed(chunk)
                if fragments:
                    assistant.content += "".join(fragments)
                    self._changed()
                if decoder.done:
                    break
            tail = decoder.close()
            if tail:
                assistant.content += "".join(tail)
                self._changed()

        await self._store(chat_id, "assistant", assistant.content)
        return assistant
