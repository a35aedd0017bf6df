"""
API endpoints for profiles.

A profile is the anonymous identity a user shows in the forum and in peer
messaging.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from mindful_heaven.core.database.repositories import ProfileRepository
from mindful_heaven.core.models.io import ProfileRead, ProfileUpdate, PublicProfileRead
from mindful_heaven.server.services.deps import CurrentUserDep, SessionDep

router = APIRouter(tags=["profiles"])


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


@router.get(
    "/me",
    response_model=ProfileRead,
    summary="Get My Profile",
    description="The caller's profile; a default anonymous profile is created on first access.",
)
async def get_my_profile(user: CurrentUserDep, session: SessionDep) -> ProfileRead:
    profile = await ProfileRepository(session).get_or_create(user.id)
    return ProfileRead.model_validate(profile)


@router.patch(
    "/me",
    response_model=ProfileRead,
    summary="Update My Profile",
    description="Update alias, avatar, bio or notification preference.",
    responses={
        200: {"description": "Profile updated"},
        400: {"description": "Anonymous identity cannot be empty"},
    },
)
async def update_my_profile(payload: ProfileUpdate, user: CurrentUserDep, session: SessionDep) -> ProfileRead:
    """
    Update the caller's profile. Omitted fields are left as they are.

    - **anonymous_alias**: Must not be blank.
    - **avatar_url**: Blank clears the avatar.
    - **bio**: Blank clears the bio.
    - **notifications_enabled**: Whether to receive notifications.
    """
    repo = ProfileRepository(session)
    profile = await repo.get_or_create(user.id)
    changes = payload.model_dump(exclude_unset=True)

    if "anonymous_alias" in changes:
        alias = (changes["anonymous_alias"] or "").strip()
        if not alias:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Anonymous identity cannot be empty")
        profile.anonymous_alias = alias
    if "avatar_url" in changes:
        profile.avatar_url = _blank_to_none(changes["avatar_url"])
    if "bio" in changes:
        profile.bio = _blank_to_none(changes["bio"])
    if changes.get("notifications_enabled") is not None:
        profile.notifications_enabled = changes["notifications_enabled"]

    profile = await repo.update(profile)
    return ProfileRead.model_validate(profile)


@router.get(
    "/search",
    response_model=list[PublicProfileRead],
    summary="Search Profiles",
    description="Find other users by alias to start a conversation with.",
)
async def search_profiles(
    user: CurrentUserDep,
    session: SessionDep,
    q: str = Query(default="", description="Case-insensitive alias fragment"),
) -> list[PublicProfileRead]:
    profiles = await ProfileRepository(session).search(q, exclude_user_id=user.id)
    return [PublicProfileRead.model_validate(p) for p in profiles]


@router.get(
    "/{user_id}",
    response_model=PublicProfileRead,
    summary="Get Profile",
    description="Public profile of a user.",
    responses={404: {"description": "Profile not found"}},
)
async def get_profile(user_id: str, user: CurrentUserDep, session: SessionDep) -> PublicProfileRead:
    profile = await ProfileRepository(session).get_by_user_id(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Profile {user_id} not found")
    return PublicProfileRead.model_validate(profile)
