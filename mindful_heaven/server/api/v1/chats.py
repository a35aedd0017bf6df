"""
API endpoints for AI chat sessions and their messages.

Each session is one conversation with the support assistant. Messages are
stored here by the client around each relay call; the first user message of
an untitled session becomes its title.
"""

from fastapi import APIRouter, HTTPException, status

from mindful_heaven.core.database.entities.ai_chats import ChatSession
from mindful_heaven.core.models.io import (
    ChatHistoryRead,
    ChatMessageCreate,
    ChatMessageRead,
    ChatSessionCreate,
    ChatSessionRead,
    ChatSessionUpdate,
)
from mindful_heaven.server.services.chat_history import ChatHistoryService
from mindful_heaven.server.services.deps import CurrentUserDep, SessionDep

router = APIRouter(tags=["chats"])


async def _owned_chat(service: ChatHistoryService, chat_id: str, user_id: str) -> ChatSession:
    chat = await service.get_chat(chat_id, user_id)
    if chat is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Chat {chat_id} not found")
    return chat


@router.get(
    "",
    response_model=list[ChatSessionRead],
    summary="List Chat Sessions",
    description="The caller's chat sessions, most recently active first.",
)
async def list_chats(user: CurrentUserDep, session: SessionDep) -> list[ChatSessionRead]:
    chats = await ChatHistoryService(session).list_chats(user.id)
    return [ChatSessionRead.model_validate(c) for c in chats]


@router.post(
    "",
    response_model=ChatSessionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Chat Session",
    description="Start a new chat session, titled 'New Chat' unless a title is given.",
    responses={201: {"description": "Chat session created successfully"}},
)
async def create_chat(payload: ChatSessionCreate, user: CurrentUserDep, session: SessionDep) -> ChatSessionRead:
    chat = await ChatHistoryService(session).create_chat(user.id, payload.title)
    return ChatSessionRead.model_validate(chat)


@router.patch(
    "/{chat_id}",
    response_model=ChatSessionRead,
    summary="Rename Chat Session",
    responses={404: {"description": "Chat session not found"}},
)
async def rename_chat(
    chat_id: str, payload: ChatSessionUpdate, user: CurrentUserDep, session: SessionDep
) -> ChatSessionRead:
    service = ChatHistoryService(session)
    chat = await _owned_chat(service, chat_id, user.id)
    chat = await service.rename_chat(chat, payload.title)
    return ChatSessionRead.model_validate(chat)


@router.delete(
    "/{chat_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Chat Session",
    description="Delete a chat session together with its messages.",
    responses={
        204: {"description": "Chat session deleted successfully"},
        404: {"description": "Chat session not found"},
    },
)
async def delete_chat(chat_id: str, user: CurrentUserDep, session: SessionDep) -> None:
    service = ChatHistoryService(session)
    chat = await _owned_chat(service, chat_id, user.id)
    await service.delete_chat(chat)


@router.get(
    "/{chat_id}/messages",
    response_model=ChatHistoryRead,
    summary="Get Chat History",
    description="A chat session with all its messages in chronological order.",
    responses={404: {"description": "Chat session not found"}},
)
async def get_chat_history(chat_id: str, user: CurrentUserDep, session: SessionDep) -> ChatHistoryRead:
    service = ChatHistoryService(session)
    chat = await _owned_chat(service, chat_id, user.id)
    messages = await service.messages(chat)
    return ChatHistoryRead(
        session=ChatSessionRead.model_validate(chat),
        messages=[ChatMessageRead.model_validate(m) for m in messages],
    )


@router.post(
    "/{chat_id}/messages",
    response_model=ChatMessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Chat Message",
    description="Append a user or assistant message to a chat session.",
    responses={
        201: {"description": "Message stored"},
        404: {"description": "Chat session not found"},
    },
)
async def add_chat_message(
    chat_id: str, payload: ChatMessageCreate, user: CurrentUserDep, session: SessionDep
) -> ChatMessageRead:
    """
    Add a message.

    - **role**: ``user`` or ``assistant``.
    - **content**: Message text.
    """
    service = ChatHistoryService(session)
    chat = await _owned_chat(service, chat_id, user.id)
    message = await service.add_message(chat, payload.role, payload.content)
    return ChatMessageRead.model_validate(message)
