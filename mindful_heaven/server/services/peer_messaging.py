"""
Service for peer-to-peer conversations.

Conversation lists, starting or reopening a chat, the per-user message view,
sending with media and both deletion modes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from mindful_heaven.core.database.entities.peer_chats import PeerChat, PeerMessage
from mindful_heaven.core.database.entities.profiles import Profile, default_alias
from mindful_heaven.core.database.repositories import PeerChatRepository, ProfileRepository
from mindful_heaven.core.errors import NotFound, ValidationFailed
from mindful_heaven.core.logging_config import get_logger

from .notifier import Notifier

logger = get_logger(__name__)


def message_preview(message: PeerMessage) -> str:
    """Text shown for a message in the conversation list."""
    if message.video_url:
        return "🎥 Video"
    if message.image_url:
        return "📷 Image"
    return message.content


@dataclass
class ConversationEntry:
    chat: PeerChat
    other: Profile
    last_message: Optional[str]


class PeerMessagingService:
    """Peer chats as seen by one user."""

    def __init__(self, session: AsyncSession) -> None:
        self.chats = PeerChatRepository(session)
        self.profiles = ProfileRepository(session)
        self.notifier = Notifier(session)

    async def _participant_chat(self, chat_id: str, user_id: str) -> PeerChat:
        chat = await self.chats.get_for_participant(chat_id, user_id)
        if chat is None:
            raise NotFound("Chat not found")
        return chat

    async def conversations(self, user_id: str) -> List[ConversationEntry]:
        """Visible chats, most recent first, with the other side's profile and a preview."""
        chats = await self.chats.list_visible(user_id)
        others = [chat.other_participant(user_id) for chat in chats]
        profiles = await self.profiles.get_many(others)
        latest = await self.chats.last_messages(chat.id for chat in chats)

        entries = []
        for chat, other_id in zip(chats, others):
            other = profiles.get(other_id) or Profile(user_id=other_id, anonymous_alias=default_alias(other_id))
            last = latest.get(chat.id)
            entries.append(ConversationEntry(chat=chat, other=other, last_message=message_preview(last) if last else None))
        return entries

    async def start_chat(self, user_id: str, other_user_id: str) -> PeerChat:
        """
        Chat with another user: the existing one (restored if hidden), or a new one.

        Raises:
            ValidationFailed: chatting with oneself
            NotFound: the other user has no profile
        """
        if other_user_id == user_id:
            raise ValidationFailed("You cannot start a chat with yourself")
        if await self.profiles.get_by_user_id(other_user_id) is None:
            raise NotFound("User not found")

        existing = await self.chats.find_between(user_id, other_user_id)
        if existing is not None:
            if existing.id in await self.chats.hidden_chat_ids(user_id):
                await self.chats.unhide(user_id, existing.id)
                logger.debug(f"Restored hidden chat {existing.id} for user {user_id}")
            return existing

        chat = await self.chats.create(PeerChat(participant1_id=user_id, participant2_id=other_user_id))
        logger.debug(f"Created peer chat {chat.id}")
        return chat

    async def messages(self, chat_id: str, user_id: str) -> List[PeerMessage]:
        chat = await self._participant_chat(chat_id, user_id)
        return await self.chats.visible_messages(chat.id, user_id)

    async def send(
        self,
        chat_id: str,
        sender_id: str,
        content: str = "",
        image_url: Optional[str] = None,
        video_url: Optional[str] = None,
    ) -> PeerMessage:
        """
        Send a message and notify the other participant.

        Raises:
            NotFound: not a participant of the chat
            ValidationFailed: nothing to send, or both an image and a video
        """
        chat = await self._participant_chat(chat_id, sender_id)
        content = (content or "").strip()
        if not content and not image_url and not video_url:
            raise ValidationFailed("Message cannot be empty")
        if image_url and video_url:
            raise ValidationFailed("A message can carry one image or one video")

        message = await self.chats.add_message(
            chat,
            PeerMessage(chat_id=chat.id, sender_id=sender_id, content=content, image_url=image_url, video_url=video_url),
        )

        recipient = chat.other_participant(sender_id)
        aliases = await self.profiles.aliases_for([sender_id])
        await self.notifier.peer_message(recipient, chat.id, aliases[sender_id], message_preview(message))
        return message

    async def _own_message(self, message_id: str, user_id: str) -> PeerMessage:
        message = await self.chats.get_message(message_id)
        if message is None or message.sender_id != user_id:
            raise NotFound("Message not found")
        return message

    async def delete_for_me(self, message_id: str, user_id: str) -> PeerMessage:
        message = await self._own_message(message_id, user_id)
        message.deleted_for_sender = True
        return await self.chats.save_message(message)

    async def delete_for_everyone(self, message_id: str, user_id: str) -> PeerMessage:
        message = await self._own_message(message_id, user_id)
        message.deleted_for_everyone = True
        return await self.chats.save_message(message)

    async def hide(self, chat_id: str, user_id: str) -> int:
        chat = await self._participant_chat(chat_id, user_id)
        return await self.chats.hide(user_id, [chat.id])

    async def hide_all(self, user_id: str) -> int:
        chats = await self.chats.list_all_for(user_id)
        return await self.chats.hide(user_id, [chat.id for chat in chats])
