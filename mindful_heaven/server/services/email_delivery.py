"""
Transactional email through the Resend HTTP API.
"""

from __future__ import annotations

from typing import Optional

import httpx

from mindful_heaven.core.logging_config import get_logger
from mindful_heaven.server.core.config import settings

logger = get_logger(__name__)

RESET_CODE_SUBJECT = "Your Password Reset Code - Mindful Heaven"


class EmailDeliveryError(Exception):
    """Raised when the email provider rejects or cannot receive a message."""


def render_reset_code_email(code: str, ttl_minutes: int) -> str:
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: #4F7A6E; text-align: center;">🌿 Mindful Heaven</h1>
  <h2 style="color: #333; text-align: center;">Password Reset</h2>
  <p style="text-align: center; color: #666;">Use the code below to reset your password:</p>
  <div style="background: linear-gradient(135deg, #E8F0ED 0%, #F5E6D3 100%); padding: 30px; text-align: center; border-radius: 15px; margin: 20px 0; border: 1px solid #D1E0DA;">
    <span style="font-size: 36px; font-weight: bold; letter-spacing: 10px; color: #4F7A6E; font-family: monospace;">{code}</span>
  </div>
  <p style="text-align: center; color: #999; font-size: 14px;">This code expires in {ttl_minutes} minutes.</p>
  <p style="text-align: center; color: #999; font-size: 14px;">If you didn't request this, please ignore this email.</p>
  <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;" />
  <p style="text-align: center; color: #bbb; font-size: 12px;">Mindful Heaven - Your safe space for mental wellness</p>
</div>
"""



class EmailService:
    """Sends email through Resend."""

    def __init__(
        self,
        api_key: Optional[str],
        from_address: str,
        base_url: str = "https://api.resend.com",
        timeout_seconds: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.from_address = from_address
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def send(self, to: str, subject: str, html: str) -> str:
        """
        Send one HTML email.

        Returns:
            The provider's message id (empty when it does not return one)

        Raises:
            EmailDeliveryError: when no API key is configured, the provider
                is unreachable, or it answers non-2xx
        """
        if not self.api_key:
            raise EmailDeliveryError("Email delivery is not configured")

        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout_seconds, transport=self._transport
        ) as client:
            try:
                response = await client.post(
                    "/emails",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={"from": self.from_address, "to": [to], "subject": subject, "html": html},
                )
            except httpx.HTTPError as e:
                raise EmailDeliveryError(f"Email provider unreachable: {e}") from e

        if not response.is_success:
            raise EmailDeliveryError(f"Email provider answered {response.status_code}: {response.text[:300]}")

        try:
            message_id = response.json().get("id", "")
        except ValueError:
            message_id = ""
        logger.info(f"Email sent: subject={subject!r}, id={message_id}")
        return message_id

    async def send_reset_code(self, to: str, code: str, ttl_minutes: int) -> str:
        return await self.send(to, RESET_CODE_SUBJECT, render_reset_code_email(code, ttl_minutes))


def get_email_service() -> EmailService:
    return EmailService(
        api_key=settings.resend.api_key,
        from_address=settings.resend.from_address,
        base_url=settings.resend.base_url,
        timeout_seconds=settings.resend.timeout_seconds,
    )
