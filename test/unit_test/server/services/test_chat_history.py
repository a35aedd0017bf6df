"""Unit tests for the AI chat history service."""

import pytest

from mindful_heaven.core.database.entities.ai_chats import MessageRole
from mindful_heaven.server.services.chat_history import ChatHistoryService, title_from_message

pytestmark = pytest.mark.asyncio


class TestTitleFromMessage:
    async def test_short_message_kept(self):
        assert title_from_message("  Feeling stressed  ") == "Feeling stressed"

    async def test_long_message_truncated(self):
        text = "I have been feeling really overwhelmed at work lately"
        assert title_from_message(text) == text[:30] + "..."

    async def test_exactly_thirty_characters(self):
        text = "x" * 30
        assert title_from_message(text) == text


class TestChatHistoryService:
    async def test_first_user_message_titles_chat(self, session):
        service = ChatHistoryService(session)
        chat = await service.create_chat("user-1")
        assert chat.title == "New Chat"

        await service.add_message(chat, MessageRole.USER, "How do I sleep better?")
        await service.add_message(chat, MessageRole.ASSISTANT, "Try a wind-down routine.")
        await service.add_message(chat, MessageRole.USER, "Anything else?")

        refreshed = await service.get_chat(chat.id, "user-1")
        assert refreshed.title == "How do I sleep better?"

    async def test_explicit_title_is_kept(self, session):
        service = ChatHistoryService(session)
        chat = await service.create_chat("user-1", "Evening check-in")

        await service.add_message(chat, MessageRole.USER, "Hello")

        assert (await service.get_chat(chat.id, "user-1")).title == "Evening check-in"

    async def test_messages_in_order(self, session):
        service = ChatHistoryService(session)
        chat = await service.create_chat("user-1")
        await service.add_message(chat, MessageRole.USER, "one")
        await service.add_message(chat, MessageRole.ASSISTANT, "two")

        messages = await service.messages(chat)

        assert [(m.role, m.content) for m in messages] == [(MessageRole.USER, "one"), (MessageRole.ASSISTANT, "two")]

    async def test_chats_are_scoped_to_owner(self, session):
        service = ChatHistoryService(session)
        chat = await service.create_chat("user-1")

        assert await service.get_chat(chat.id, "user-2") is None
        assert await service.list_chats("user-2") == []

    async def test_delete_removes_messages(self, session):
        service = ChatHistoryService(session)
        chat = await service.create_chat("user-1")
        await service.add_message(chat, MessageRole.USER, "bye")

        await service.delete_chat(chat)

        assert await service.get_chat(chat.id, "user-1") is None
        assert await service.chats.count_messages(chat.id) == 0
