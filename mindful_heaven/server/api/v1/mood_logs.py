"""
API endpoints for the mood journal.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from mindful_heaven.core.database.entities.mood_logs import MoodLog
from mindful_heaven.core.database.repositories import MoodLogRepository
from mindful_heaven.core.models.io import MoodLogCreate, MoodLogRead
from mindful_heaven.server.services.deps import CurrentUserDep, SessionDep

router = APIRouter(tags=["mood-logs"])


@router.get(
    "",
    response_model=list[MoodLogRead],
    summary="List Mood Logs",
    description="The caller's journal entries, newest first.",
)
async def list_mood_logs(
    user: CurrentUserDep,
    session: SessionDep,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
) -> list[MoodLogRead]:
    logs = await MoodLogRepository(session).list_for_user(user.id, limit=limit)
    return [MoodLogRead.model_validate(log) for log in logs]


@router.post(
    "",
    response_model=MoodLogRead,
    status_code=status.HTTP_201_CREATED,
    summary="Log Mood",
    description="Record how the caller feels, with optional notes.",
)
async def create_mood_log(payload: MoodLogCreate, user: CurrentUserDep, session: SessionDep) -> MoodLogRead:
    """
    Add a journal entry.

    - **mood**: One of ``great``, ``good``, ``okay``, ``low``, ``struggling``.
    - **notes**: Optional free text; blank is stored as no notes.
    """
    notes = (payload.notes or "").strip() or None
    log = await MoodLogRepository(session).create(MoodLog(user_id=user.id, mood=payload.mood, notes=notes))
    return MoodLogRead.model_validate(log)


@router.delete(
    "/{log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Mood Log",
    responses={404: {"description": "Mood log not found"}},
)
async def delete_mood_log(log_id: str, user: CurrentUserDep, session: SessionDep) -> None:
    repo = MoodLogRepository(session)
    log = await repo.get_by_id(log_id)
    if log is None or log.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Mood log {log_id} not found")
    await repo.delete(log_id)
