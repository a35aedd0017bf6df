"""
API endpoints for in-app notifications.
"""

from fastapi import APIRouter, HTTPException, status

from mindful_heaven.core.database.repositories import NotificationRepository
from mindful_heaven.core.models.io import MarkedRead, NotificationRead, UnreadCount
from mindful_heaven.server.services.deps import CurrentUserDep, SessionDep

router = APIRouter(tags=["notifications"])


@router.get(
    "",
    response_model=list[NotificationRead],
    summary="List Notifications",
    description="The caller's notifications, newest first.",
)
async def list_notifications(user: CurrentUserDep, session: SessionDep) -> list[NotificationRead]:
    notifications = await NotificationRepository(session).list_for_user(user.id)
    return [NotificationRead.model_validate(n) for n in notifications]


@router.get(
    "/unread-count",
    response_model=UnreadCount,
    summary="Count Unread Notifications",
)
async def unread_count(user: CurrentUserDep, session: SessionDep) -> UnreadCount:
    return UnreadCount(count=await NotificationRepository(session).unread_count(user.id))


@router.post(
    "/read-all",
    response_model=MarkedRead,
    summary="Mark All Read",
)
async def mark_all_read(user: CurrentUserDep, session: SessionDep) -> MarkedRead:
    return MarkedRead(updated=await NotificationRepository(session).mark_all_read(user.id))


@router.post(
    "/{notification_id}/read",
    response_model=NotificationRead,
    summary="Mark Notification Read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_read(notification_id: str, user: CurrentUserDep, session: SessionDep) -> NotificationRead:
    repo = NotificationRepository(session)
    notification = await repo.get_for_user(notification_id, user.id)
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Notification {notification_id} not found")
    notification.read = True
    notification = await repo.update(notification)
    return NotificationRead.model_validate(notification)


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Notification",
    responses={404: {"description": "Notification not found"}},
)
async def delete_notification(notification_id: str, user: CurrentUserDep, session: SessionDep) -> None:
    repo = NotificationRepository(session)
    notification = await repo.get_for_user(notification_id, user.id)
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Notification {notification_id} not found")
    await repo.delete(notification_id)
