"""Project repository for database operations."""

from typing import Any

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models import Project, utcnow
from repositories.utils import LIKE_ESCAPE, contains_pattern, log_slow_query

DUPLICATE_TITLE_MESSAGE = "A project with this title already exists"

_NEWEST_FIRST = (Project.created_at.desc(), Project.id.desc())


class ProjectRepository:
    """Repository for Project database operations.

    Every list comes back newest first.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("get_all_projects")
    async def get_all(self) -> list[Project]:
        result = await self.db.execute(select(Project).order_by(*_NEWEST_FIRST))
        return list(result.scalars().all())

    @log_slow_query("get_project_by_id")
    async def get_by_id(self, project_id: int) -> Project | None:
        result = await self.db.execute(select(Project).where(Project.id == project_id))
        return result.scalar_one_or_none()

    @log_slow_query("get_projects_by_category")
    async def get_by_category(self, category: str) -> list[Project]:
        """Expects category to be pre-normalized (lowercase) by service layer."""
        result = await self.db.execute(
            select(Project)
            .where(Project.category == category)
            .order_by(*_NEWEST_FIRST)
        )
        return list(result.scalars().all())

    @log_slow_query("get_featured_projects")
    async def get_featured(self) -> list[Project]:
        result = await self.db.execute(
            select(Project).where(Project.featured.is_(True)).order_by(*_NEWEST_FIRST)
        )
        return list(result.scalars().all())

    @log_slow_query("get_project_by_title")
    async def get_by_title(self, title: str) -> Project | None:
        """Case-insensitive exact match on title."""
        result = await self.db.execute(
            select(Project).where(func.lower(Project.title) == title.lower()).limit(1)
        )
        return result.scalar_one_or_none()

    @log_slow_query("search_projects")
    async def search(self, query: str) -> list[Project]:
        """Case-insensitive substring match on title or description."""
        pattern = contains_pattern(query)
        result = await self.db.execute(
            select(Project)
            .where(
                or_(
                    Project.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Project.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(*_NEWEST_FIRST)
        )
        return list(result.scalars().all())

    @log_slow_query("create_project", conflict_message=DUPLICATE_TITLE_MESSAGE)
    async def create(
        self,
        *,
        title: str,
        description: str,
        technologies: str,
        category: str,
        long_description: str | None = None,
        github_url: str | None = None,
        demo_url: str | None = None,
        image_url: str | None = None,
        featured: bool = False,
    ) -> Project:
        """Insert a project. ``technologies`` is the stored JSON array string."""
        project = Project(
            title=title,
            description=description,
            long_description=long_description,
            technologies=technologies,
            github_url=github_url,
            demo_url=demo_url,
            image_url=image_url,
            category=category,
            featured=featured,
        )
        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)
        return project

    @log_slow_query("update_project", conflict_message=DUPLICATE_TITLE_MESSAGE)
    async def update(self, project_id: int, changes: dict[str, Any]) -> Project | None:
        """Overwrite only the supplied columns. Returns None if the id is unknown."""
        result = await self.db.execute(
            update(Project)
            .where(Project.id == project_id)
            .values(**changes, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        refreshed = await self.db.execute(
            select(Project)
            .where(Project.id == project_id)
            .execution_options(populate_existing=True)
        )
        return refreshed.scalar_one()

    @log_slow_query("delete_project")
    async def delete(self, project_id: int) -> bool:
        """Returns True if a row was removed."""
        result = await self.db.execute(delete(Project).where(Project.id == project_id))
        return result.rowcount > 0

    @log_slow_query("count_projects")
    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Project))
        return result.scalar_one()

    @log_slow_query("get_projects_paginated")
    async def get_paginated(self, limit: int, offset: int) -> list[Project]:
        result = await self.db.execute(
            select(Project).order_by(*_NEWEST_FIRST).limit(limit).offset(offset)
        )
        return list(result.scalars().all())
