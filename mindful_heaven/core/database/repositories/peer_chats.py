"""
Peer chat repository.

Covers the conversation list of a user (minus hidden conversations), the
message stream of a chat with per-user deletion flags applied, and the
hidden-conversation markers.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy import and_, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now_naive
from ..entities.peer_chats import HiddenConversation, PeerChat, PeerMessage
from .base import AsyncBaseRepository


def _involves(user_id: str):
    return or_(PeerChat.participant1_id == user_id, PeerChat.participant2_id == user_id)


class PeerChatRepository(AsyncBaseRepository[PeerChat]):
    """Repository for peer chats, their messages and hidden markers."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PeerChat)

    async def hidden_chat_ids(self, user_id: str) -> Set[str]:
        stmt = select(HiddenConversation.chat_id).where(HiddenConversation.user_id == user_id)
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def list_visible(self, user_id: str) -> List[PeerChat]:
        """Chats the user takes part in and has not hidden, most recent first."""
        hidden = select(HiddenConversation.chat_id).where(HiddenConversation.user_id == user_id)
        stmt = (
            select(PeerChat)
            .where(_involves(user_id))
            .where(PeerChat.id.not_in(hidden))
            .order_by(PeerChat.updated_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_all_for(self, user_id: str) -> List[PeerChat]:
        result = await self.session.execute(select(PeerChat).where(_involves(user_id)))
        return list(result.scalars().all())

    async def find_between(self, user_a: str, user_b: str) -> Optional[PeerChat]:
        """Chat between two users regardless of who started it."""
        stmt = select(PeerChat).where(
            or_(
                and_(PeerChat.participant1_id == user_a, PeerChat.participant2_id == user_b),
                and_(PeerChat.participant1_id == user_b, PeerChat.participant2_id == user_a),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_for_participant(self, chat_id: str, user_id: str) -> Optional[PeerChat]:
        chat = await self.get_by_id(chat_id)
        if chat is None or not chat.has_participant(user_id):
            return None
        return chat

    async def hide(self, user_id: str, chat_ids: Iterable[str]) -> int:
        """Hide chats from the user's list. Already hidden chats are skipped.

        Returns:
            Number of newly hidden chats
        """
        already = await self.hidden_chat_ids(user_id)
        added = 0
        for chat_id in chat_ids:
            if chat_id in already:
                continue
            self.session.add(HiddenConversation(user_id=user_id, chat_id=chat_id))
            already.add(chat_id)
            added += 1
        await self.session.commit()
        return added

    async def unhide(self, user_id: str, chat_id: str) -> None:
        await self.session.execute(
            delete(HiddenConversation).where(
                HiddenConversation.user_id == user_id, HiddenConversation.chat_id == chat_id
            )
        )
        await self.session.commit()

    async def visible_messages(self, chat_id: str, viewer_id: str) -> List[PeerMessage]:
        """Messages of a chat as ``viewer_id`` sees them, oldest first.

        Messages deleted for everyone are dropped, as are the viewer's own
        messages deleted for the sender.
        """
        stmt = (
            select(PeerMessage)
            .where(PeerMessage.chat_id == chat_id)
            .where(PeerMessage.deleted_for_everyone == False)  # noqa: E712
            .where(or_(PeerMessage.sender_id != viewer_id, PeerMessage.deleted_for_sender == False))  # noqa: E712
            .order_by(PeerMessage.created_at.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def last_messages(self, chat_ids: Iterable[str]) -> Dict[str, PeerMessage]:
        """Most recent message per chat that has not been deleted for everyone."""
        ids = list(chat_ids)
        if not ids:
            return {}
        stmt = (
            select(PeerMessage)
            .where(PeerMessage.chat_id.in_(ids))
            .where(PeerMessage.deleted_for_everyone == False)  # noqa: E712
            .order_by(PeerMessage.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        latest: Dict[str, PeerMessage] = {}
        for message in result.scalars().all():
            latest.setdefault(message.chat_id, message)
        return latest

    async def add_message(self, chat: PeerChat, message: PeerMessage) -> PeerMessage:
        """Store a message and bump the chat's ``updated_at``."""
        self.session.add(message)
        chat.updated_at = utc_now_naive()
        self.session.add(chat)
        await self.session.commit()
        await self.session.refresh(message)
        return message

    async def get_message(self, message_id: str) -> Optional[PeerMessage]:
        return await self.session.get(PeerMessage, message_id)

    async def save_message(self, message: PeerMessage) -> PeerMessage:
        self.session.add(message)
        await self.session.commit()
        await self.session.refresh(message)
        return message
