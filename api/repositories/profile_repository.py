"""Profile repository for the singleton profile row."""

from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models import Profile, utcnow
from repositories.utils import log_slow_query


class ProfileRepository:
    """Repository for the single Profile row (id 1)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("get_profile")
    async def get(self) -> Profile | None:
        result = await self.db.execute(
            select(Profile).where(Profile.id == Profile.SINGLETON_ID)
        )
        return result.scalar_one_or_none()

    @log_slow_query("update_profile")
    async def update(self, changes: dict[str, Any]) -> Profile | None:
        """Overwrite only the supplied columns. Returns None if no profile exists."""
        result = await self.db.execute(
            update(Profile)
            .where(Profile.id == Profile.SINGLETON_ID)
            .values(**changes, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        refreshed = await self.db.execute(
            select(Profile)
            .where(Profile.id == Profile.SINGLETON_ID)
            .execution_options(populate_existing=True)
        )
        return refreshed.scalar_one()

    @log_slow_query("create_initial_profile")
    async def create_initial(
        self,
        *,
        name: str,
        title: str,
        bio: str,
        email: str,
        location: str,
        phone: str | None = None,
        linkedin_url: str | None = None,
        github_url: str | None = None,
        twitter_url: str | None = None,
    ) -> Profile:
        profile = Profile(
            id=Profile.SINGLETON_ID,
            name=name,
            title=title,
            bio=bio,
            email=email,
            phone=phone,
            location=location,
            linkedin_url=linkedin_url,
            github_url=github_url,
            twitter_url=twitter_url,
        )
        self.db.add(profile)
        await self.db.flush()
        await self.db.refresh(profile)
        return profile

    @log_slow_query("profile_exists")
    async def exists(self) -> bool:
        result = await self.db.execute(select(func.count()).select_from(Profile))
        return result.scalar_one() > 0
