"""
API endpoints for peer-to-peer messaging.

A conversation list that hides chats the caller removed, starting or
reopening a chat, per-user message views, sending text with an optional
image or video, and deleting messages for oneself or for everyone.
"""

from fastapi import APIRouter, status

from mindful_heaven.core.models.io import (
    HideResult,
    PeerChatRead,
    PeerChatStart,
    PeerMessageCreate,
    PeerMessageRead,
    PublicProfileRead,
)
from mindful_heaven.server.services.deps import CurrentUserDep, SessionDep
from mindful_heaven.server.services.peer_messaging import PeerMessagingService

router = APIRouter(tags=["peer-chats"])


@router.get(
    "",
    response_model=list[PeerChatRead],
    summary="List Conversations",
    description="The caller's visible conversations, most recent first, with the other participant "
    "and a preview of the last message.",
)
async def list_conversations(user: CurrentUserDep, session: SessionDep) -> list[PeerChatRead]:
    entries = await PeerMessagingService(session).conversations(user.id)
    return [
        PeerChatRead(
            id=e.chat.id,
            other_user=PublicProfileRead.model_validate(e.other),
            last_message=e.last_message,
            created_at=e.chat.created_at,
            updated_at=e.chat.updated_at,
        )
        for e in entries
    ]


@router.post(
    "",
    response_model=PeerChatRead,
    summary="Start Conversation",
    description="Open the conversation with another user, restoring it if the caller had hidden it, "
    "or create it.",
    responses={
        400: {"description": "Cannot start a chat with yourself"},
        404: {"description": "User not found"},
    },
)
async def start_conversation(payload: PeerChatStart, user: CurrentUserDep, session: SessionDep) -> PeerChatRead:
    service = PeerMessagingService(session)
    chat = await service.start_chat(user.id, payload.other_user_id)
    other = await service.profiles.get_or_create(chat.other_participant(user.id))
    return PeerChatRead(
        id=chat.id,
        other_user=PublicProfileRead.model_validate(other),
        created_at=chat.created_at,
        updated_at=chat.updated_at,
    )


@router.post(
    "/hide-all",
    response_model=HideResult,
    summary="Hide All Conversations",
    description="Remove every conversation from the caller's list. The other participants keep theirs.",
)
async def hide_all_conversations(user: CurrentUserDep, session: SessionDep) -> HideResult:
    return HideResult(hidden=await PeerMessagingService(session).hide_all(user.id))


@router.post(
    "/{chat_id}/hide",
    response_model=HideResult,
    summary="Hide Conversation",
    description="Remove one conversation from the caller's list. Starting it again restores it.",
    responses={404: {"description": "Chat not found"}},
)
async def hide_conversation(chat_id: str, user: CurrentUserDep, session: SessionDep) -> HideResult:
    return HideResult(hidden=await PeerMessagingService(session).hide(chat_id, user.id))


@router.get(
    "/{chat_id}/messages",
    response_model=list[PeerMessageRead],
    summary="List Messages",
    description="Messages of a conversation, oldest first, without those deleted for everyone "
    "and without the caller's own messages deleted for them.",
    responses={404: {"description": "Chat not found"}},
)
async def list_messages(chat_id: str, user: CurrentUserDep, session: SessionDep) -> list[PeerMessageRead]:
    messages = await PeerMessagingService(session).messages(chat_id, user.id)
    return [PeerMessageRead.model_validate(m) for m in messages]


@router.post(
    "/{chat_id}/messages",
    response_model=PeerMessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send Message",
    responses={
        400: {"description": "Message cannot be empty"},
        404: {"description": "Chat not found"},
    },
)
async def send_message(
    chat_id: str, payload: PeerMessageCreate, user: CurrentUserDep, session: SessionDep
) -> PeerMessageRead:
    """
    Send a message.

    - **content**: Text, may be empty when media is attached.
    - **image_url** / **video_url**: URL of an uploaded object in ``message_images``.
    """
    message = await PeerMessagingService(session).send(
        chat_id, user.id, payload.content, payload.image_url, payload.video_url
    )
    return PeerMessageRead.model_validate(message)


@router.post(
    "/messages/{message_id}/delete-for-me",
    response_model=PeerMessageRead,
    summary="Delete Message For Me",
    responses={404: {"description": "Message not found or not yours"}},
)
async def delete_message_for_me(message_id: str, user: CurrentUserDep, session: SessionDep) -> PeerMessageRead:
    message = await PeerMessagingService(session).delete_for_me(message_id, user.id)
    return PeerMessageRead.model_validate(message)


@router.post(
    "/messages/{message_id}/delete-for-everyone",
    response_model=PeerMessageRead,
    summary="Delete Message For Everyone",
    responses={404: {"description": "Message not found or not yours"}},
)
async def delete_message_for_everyone(message_id: str, user: CurrentUserDep, session: SessionDep) -> PeerMessageRead:
    message = await PeerMessagingService(session).delete_for_everyone(message_id, user.id)
    return PeerMessageRead.model_validate(message)
