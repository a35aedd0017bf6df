"""
Profile repository.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.profiles import Profile, default_alias
from .base import AsyncBaseRepository


class ProfileRepository(AsyncBaseRepository[Profile]):
    """Repository for anonymous profiles."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Profile)

    async def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_or_create(self, user_id: str) -> Profile:
        """Return the user's profile, creating the default one if missing."""
        profile = await self.get_by_user_id(user_id)
        if profile is not None:
            return profile
        return await self.create(Profile(user_id=user_id, anonymous_alias=default_alias(user_id)))

    async def get_many(self, user_ids: Iterable[str]) -> Dict[str, Profile]:
        """Map user id to profile for the given ids; unknown ids are absent."""
        ids = list(set(user_ids))
        if not ids:
            return {}
        result = await self.session.execute(select(Profile).where(Profile.user_id.in_(ids)))
        return {p.user_id: p for p in result.scalars().all()}

    async def aliases_for(self, user_ids: Iterable[str]) -> Dict[str, str]:
        """Map user id to anonymous alias, falling back to the default alias."""
        ids = list(set(user_ids))
        profiles = await self.get_many(ids)
        return {uid: profiles[uid].anonymous_alias if uid in profiles else default_alias(uid) for uid in ids}

    async def search(self, query: str, exclude_user_id: str, limit: int = 50) -> List[Profile]:
        """Profiles whose alias contains ``query`` (case-insensitive), ordered by alias."""
        stmt = (
            select(Profile)
            .where(Profile.user_id != exclude_user_id)
            .where(func.lower(Profile.anonymous_alias).contains(query.strip().lower()))
            .order_by(Profile.anonymous_alias)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
