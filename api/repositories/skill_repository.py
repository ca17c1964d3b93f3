"""Skill repository for database operations."""

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models import Skill, SkillCategory
from repositories.utils import log_slow_query

DUPLICATE_NAME_MESSAGE = "A skill with this name already exists"

_STRONGEST_FIRST = (Skill.level.desc(), Skill.name.asc())


class SkillRepository:
    """Repository for Skill database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("get_all_skills")
    async def get_all(self) -> list[Skill]:
        """All skills grouped by category, then alphabetical."""
        result = await self.db.execute(
            select(Skill).order_by(Skill.category.asc(), Skill.name.asc())
        )
        return list(result.scalars().all())

    @log_slow_query("get_skill_by_id")
    async def get_by_id(self, skill_id: int) -> Skill | None:
        result = await self.db.execute(select(Skill).where(Skill.id == skill_id))
        return result.scalar_one_or_none()

    @log_slow_query("get_skills_by_category")
    async def get_by_category(self, category: SkillCategory) -> list[Skill]:
        result = await self.db.execute(
            select(Skill)
            .where(Skill.category == category.value)
            .order_by(*_STRONGEST_FIRST)
        )
        return list(result.scalars().all())

    @log_slow_query("get_skills_by_min_level")
    async def get_by_min_level(self, min_level: int) -> list[Skill]:
        result = await self.db.execute(
            select(Skill).where(Skill.level >= min_level).order_by(*_STRONGEST_FIRST)
        )
        return list(result.scalars().all())

    @log_slow_query("get_skill_by_name")
    async def get_by_name(self, name: str) -> Skill | None:
        """Case-insensitive exact match on name."""
        result = await self.db.execute(
            select(Skill).where(func.lower(Skill.name) == name.lower()).limit(1)
        )
        return result.scalar_one_or_none()

    @log_slow_query("create_skill", conflict_message=DUPLICATE_NAME_MESSAGE)
    async def create(
        self,
        *,
        name: str,
        category: SkillCategory,
        level: int,
        years_experience: int | None = None,
        description: str | None = None,
    ) -> Skill:
        skill = Skill(
            name=name,
            category=category.value,
            level=level,
            years_experience=years_experience,
            description=description,
        )
        self.db.add(skill)
        await self.db.flush()
        await self.db.refresh(skill)
        return skill

    @log_slow_query("update_skill", conflict_message=DUPLICATE_NAME_MESSAGE)
    async def update(self, skill_id: int, changes: dict[str, Any]) -> Skill | None:
        """Overwrite only the supplied columns. Returns None if the id is unknown.

        A ``category`` in ``changes`` must already be a SkillCategory.
        """
        values = dict(changes)
        if isinstance(values.get("category"), SkillCategory):
            values["category"] = values["category"].value

        result = await self.db.execute(
            update(Skill)
            .where(Skill.id == skill_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        refreshed = await self.db.execute(
            select(Skill)
            .where(Skill.id == skill_id)
            .execution_options(populate_existing=True)
        )
        return refreshed.scalar_one()

    @log_slow_query("delete_skill")
    async def delete(self, skill_id: int) -> bool:
        result = await self.db.execute(delete(Skill).where(Skill.id == skill_id))
        return result.rowcount > 0

    @log_slow_query("get_skill_categories")
    async def get_categories(self) -> list[str]:
        """Distinct categories in use, sorted."""
        result = await self.db.execute(
            select(Skill.category).distinct().order_by(Skill.category.asc())
        )
        return list(result.scalars().all())

    @log_slow_query("count_skills")
    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Skill))
        return result.scalar_one()
