"""
Chat-completion relay.

Forwards a conversation to the upstream chat-completion API with the support
assistant's system prompt prepended, and hands the upstream answer back
either as the raw event stream or as a single JSON completion.

Upstream failures are mapped to the three errors the web client knows how
to show: rate limited (429), payment required (402) and everything else
(500). Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

import httpx

from mindful_heaven.core.errors import UpstreamError, ValidationFailed
from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.core.monitoring import log_completion_call
from mindful_heaven.server.core.config import settings
from mindful_heaven.server.core.constant import SYSTEM_PROMPT

logger = get_logger(__name__)

RELAYED_ROLES = ("user", "assistant")

RATE_LIMITED_MESSAGE = "Rate limits exceeded, please try again later."
PAYMENT_REQUIRED_MESSAGE = "Payment required, please add funds."
UNAVAILABLE_MESSAGE = "AI service temporarily unavailable"


def upstream_failure(status_code: Optional[int]) -> UpstreamError:
    """Translate an upstream status (None for transport failures) into the relay's error."""
    if status_code == 429:
        return UpstreamError(RATE_LIMITED_MESSAGE, status_code=429)
    if status_code == 402:
        return UpstreamError(PAYMENT_REQUIRED_MESSAGE, status_code=402)
    return UpstreamError(UNAVAILABLE_MESSAGE, status_code=500)


def validate_messages(messages: Sequence[Any]) -> List[Dict[str, str]]:
    """Normalise relay input into plain ``{role, content}`` dicts.

    Accepts Pydantic models or mappings.

    Raises:
        ValidationFailed: when there are no messages or a role is not relayable
    """
    if not messages:
        raise ValidationFailed("Messages are required")

    normalised = []
    for message in messages:
        role = message["role"] if isinstance(message, dict) else message.role
        content = message["content"] if isinstance(message, dict) else message.content
        if role not in RELAYED_ROLES:
            raise ValidationFailed(f"Unsupported message role: {role}")
        normalised.append({"role": role, "content": content})
    return normalised


@dataclass
class UpstreamStream:
    """An open streaming upstream response and the client that owns it."""

    response: httpx.Response
    client: httpx.AsyncClient

    def iter_bytes(self) -> AsyncIterator[bytes]:
        return self.response.aiter_bytes()

    async def aclose(self) -> None:
        await self.response.aclose()
        await self.client.aclose()


class CompletionRelay:
    """Client of the upstream chat-completion API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str,
        timeout_seconds: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self._transport,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

    def build_payload(self, messages: List[Dict[str, str]], stream: bool) -> Dict[str, Any]:
        """Request body sent upstream, system prompt first."""
        return {
            "model": self.model,
            "messages": [{"role": "system", "content": SYSTEM_PROMPT}, *messages],
            "stream": stream,
        }

    def _require_api_key(self) -> None:
        if not self.api_key:
            logger.error("Completion relay called without an upstream API key configured")
            raise upstream_failure(None)

    async def open_stream(self, messages: Sequence[Any]) -> UpstreamStream:
        """
        Start a streaming completion.

        The caller owns the returned stream and must close it once the body
        has been forwarded.

        Raises:
            ValidationFailed: on invalid input
            UpstreamError: when the upstream call fails or answers non-2xx
        """
        payload = self.build_payload(validate_messages(messages), stream=True)
        self._require_api_key()

        client = self._client()
        try:
            request = client.build_request("POST", "/chat/completions", json=payload)
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            await client.aclose()
            logger.error(f"Completion upstream unreachable: {e}")
            log_completion_call(self.model, streamed=True, status_code=0)
            raise upstream_failure(None) from e

        log_completion_call(self.model, streamed=True, status_code=response.status_code)
        if response.is_success:
            return UpstreamStream(response=response, client=client)

        body = await response.aread()
        await response.aclose()
        await client.aclose()
        logger.error(f"Completion upstream error {response.status_code}: {body[:500]!r}")
        raise upstream_failure(response.status_code)

    async def complete(self, messages: Sequence[Any]) -> str:
        """
        Run a non-streaming completion and return the assistant text.

        Raises:
            ValidationFailed: on invalid input
            UpstreamError: when the upstream call fails, answers non-2xx or
                returns a body without a completion
        """
        payload = self.build_payload(validate_messages(messages), stream=False)
        self._require_api_key()

        async with self._client() as client:
            try:
                response = await client.post("/chat/completions", json=payload)
            except httpx.HTTPError as e:
                logger.error(f"Completion upstream unreachable: {e}")
                log_completion_call(self.model, streamed=False, status_code=0)
                raise upstream_failure(None) from e

        log_completion_call(self.model, streamed=False, status_code=response.status_code)
        if not response.is_success:
            logger.error(f"Completion upstream error {response.status_code}: {response.text[:500]}")
            raise upstream_failure(response.status_code)

        try:
            return response.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Completion upstream returned an unexpected body: {e}")
            raise upstream_failure(None) from e


def get_completion_relay() -> CompletionRelay:
    return CompletionRelay(
        api_key=settings.openai.api_key,
        model=settings.openai.model,
        base_url=settings.openai.base_url,
        timeout_seconds=settings.openai.timeout_seconds,
    )
