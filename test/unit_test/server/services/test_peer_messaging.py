"""Unit tests for the peer messaging service."""

import pytest
import pytest_asyncio

from mindful_heaven.core.database.entities.peer_chats import PeerMessage
from mindful_heaven.core.database.entities.profiles import Profile
from mindful_heaven.core.database.entities.users import User
from mindful_heaven.core.database.repositories import NotificationRepository
from mindful_heaven.core.errors import NotFound, ValidationFailed
from mindful_heaven.server.services.peer_messaging import PeerMessagingService, message_preview

pytestmark = pytest.mark.asyncio


async def _make_user(session, user_id: str, alias: str, notifications_enabled: bool = True) -> None:
    session.add(User(id=user_id, email=f"{user_id}@example.com", password_hash="x"))
    session.add(Profile(user_id=user_id, anonymous_alias=alias, notifications_enabled=notifications_enabled))
    await session.commit()


@pytest_asyncio.fixture
async def service(session):
    await _make_user(session, "alice", "Calm Owl")
    await _make_user(session, "bob", "Quiet River")
    return PeerMessagingService(session)


class TestMessagePreview:
    async def test_video_wins(self):
        assert message_preview(PeerMessage(chat_id="c", sender_id="s", video_url="v")) == "🎥 Video"

    async def test_image(self):
        assert message_preview(PeerMessage(chat_id="c", sender_id="s", image_url="i")) == "📷 Image"

    async def test_text(self):
        assert message_preview(PeerMessage(chat_id="c", sender_id="s", content="hi")) == "hi"


class TestStartChat:
    async def test_cannot_chat_with_self(self, service):
        with pytest.raises(ValidationFailed, match="yourself"):
            await service.start_chat("alice", "alice")

    async def test_unknown_user(self, service):
        with pytest.raises(NotFound):
            await service.start_chat("alice", "nobody")

    async def test_reuses_existing_chat_in_either_direction(self, service):
        chat = await service.start_chat("alice", "bob")

        assert (await service.start_chat("bob", "alice")).id == chat.id

    async def test_restores_hidden_chat(self, service):
        chat = await service.start_chat("alice", "bob")
        await service.hide(chat.id, "alice")
        assert await service.conversations("alice") == []

        again = await service.start_chat("alice", "bob")

        assert again.id == chat.id
        assert [entry.chat.id for entry in await service.conversations("alice")] == [chat.id]


class TestSend:
    async def test_send_notifies_other_participant(self, service, session):
        chat = await service.start_chat("alice", "bob")

        await service.send(chat.id, "alice", "hello there")

        notifications = await NotificationRepository(session).list_for_user("bob")
        assert len(notifications) == 1
        assert notifications[0].title == "New message from Calm Owl"
        assert notifications[0].message == "hello there"
        assert notifications[0].reference_id == chat.id

    async def test_opted_out_recipient_is_not_notified(self, session):
        await _make_user(session, "carol", "Still Lake")
        await _make_user(session, "dave", "Soft Rain", notifications_enabled=False)
        service = PeerMessagingService(session)
        chat = await service.start_chat("carol", "dave")

        await service.send(chat.id, "carol", "hi")

        assert await NotificationRepository(session).list_for_user("dave") == []

    async def test_empty_message_rejected(self, service):
        chat = await service.start_chat("alice", "bob")

        with pytest.raises(ValidationFailed, match="Message cannot be empty"):
            await service.send(chat.id, "alice", "   ")

    async def test_image_and_video_together_rejected(self, service):
        chat = await service.start_chat("alice", "bob")

        with pytest.raises(ValidationFailed):
            await service.send(chat.id, "alice", "", image_url="http://x/i.png", video_url="http://x/v.mp4")

    async def test_outsider_cannot_send(self, service, session):
        await _make_user(session, "eve", "Night Fox")
        chat = await service.start_chat("alice", "bob")

        with pytest.raises(NotFound):
            await service.send(chat.id, "eve", "hi")

    async def test_media_preview_in_conversation_list(self, service):
        chat = await service.start_chat("alice", "bob")
        await service.send(chat.id, "alice", "", image_url="http://localhost/storage/message_images/alice/1.png")

        entries = await service.conversations("bob")

        assert entries[0].last_message == "📷 Image"
        assert entries[0].other.anonymous_alias == "Calm Owl"


class TestDeletion:
    async def test_delete_for_me_hides_from_sender_only(self, service):
        chat = await service.start_chat("alice", "bob")
        message = await service.send(chat.id, "alice", "oops")

        await service.delete_for_me(message.id, "alice")

        assert await service.messages(chat.id, "alice") == []
        assert [m.id for m in await service.messages(chat.id, "bob")] == [message.id]

    async def test_delete_for_everyone(self, service):
        chat = await service.start_chat("alice", "bob")
        kept = await service.send(chat.id, "alice", "keep")
        removed = await service.send(chat.id, "alice", "remove")

        await service.delete_for_everyone(removed.id, "alice")

        assert [m.id for m in await service.messages(chat.id, "bob")] == [kept.id]
        assert (await service.conversations("bob"))[0].last_message == "keep"

    async def test_cannot_delete_others_message(self, service):
        chat = await service.start_chat("alice", "bob")
        message = await service.send(chat.id, "alice", "mine")

        with pytest.raises(NotFound):
            await service.delete_for_everyone(message.id, "bob")


class TestHide:
    async def test_hide_all_is_idempotent(self, service, session):
        await _make_user(session, "carol", "Still Lake")
        await service.start_chat("alice", "bob")
        await service.start_chat("alice", "carol")

        assert await service.hide_all("alice") == 2
        assert await service.hide_all("alice") == 0
        assert await service.conversations("alice") == []
        assert len(await service.conversations("bob")) == 1
