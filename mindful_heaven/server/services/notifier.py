"""
In-app notification fan-out.

Notifications are written only for recipients whose profile has
notifications enabled; a missing profile counts as enabled.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from mindful_heaven.core.database.entities.notifications import Notification, NotificationType, ReferenceType
from mindful_heaven.core.database.repositories import NotificationRepository, ProfileRepository
from mindful_heaven.core.logging_config import get_logger

logger = get_logger(__name__)

PREVIEW_CHARS = 50


def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    text = text.strip()
    return text if len(text) <= limit else f"{text[:limit]}..."


class Notifier:
    def __init__(self, session: AsyncSession) -> None:
        self.notifications = NotificationRepository(session)
        self.profiles = ProfileRepository(session)

    async def notify(
        self,
        user_id: str,
        title: str,
        message: str,
        type: NotificationType,
        reference_id: Optional[str] = None,
        reference_type: Optional[ReferenceType] = None,
    ) -> Optional[Notification]:
        """Create a notification, or return None when the recipient opted out."""
        profile = await self.profiles.get_by_user_id(user_id)
        if profile is not None and not profile.notifications_enabled:
            logger.debug(f"Notification suppressed, recipient opted out: user_id={user_id}")
            return None
        return await self.notifications.create(
            Notification(
                user_id=user_id,
                title=title,
                message=message,
                type=type,
                reference_id=reference_id,
                reference_type=reference_type,
            )
        )

    async def forum_reply(self, post_author_id: str, post_id: str, post_title: str, replier_alias: str):
        return await self.notify(
            post_author_id,
            "New reply to your post",
            f'{replier_alias} replied to "{preview(post_title)}"',
            NotificationType.FORUM,
            reference_id=post_id,
            reference_type=ReferenceType.FORUM_POST,
        )

    async def peer_message(self, recipient_id: str, chat_id: str, sender_alias: str, message_preview: str):
        return await self.notify(
            recipient_id,
            f"New message from {sender_alias}",
            preview(message_preview),
            NotificationType.MESSAGE,
            reference_id=chat_id,
            reference_type=ReferenceType.PEER_CHAT,
        )
