"""Tests for seed_service."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models import parse_technologies
from repositories.profile_repository import ProfileRepository
from repositories.project_repository import ProjectRepository
from repositories.skill_repository import SkillRepository
from services.seed_service import (
    DEFAULT_PROJECTS,
    DEFAULT_SKILLS,
    run_seed,
    seed_database,
    seed_projects,
)
from tests.factories import ProjectFactory, create_async

pytestmark = pytest.mark.integration


class TestSeedDatabase:
    async def test_seeds_empty_database(self, db_session: AsyncSession):
        await seed_database(db_session)

        profile = await ProfileRepository(db_session).get()
        assert profile is not None
        assert profile.name == "John Doe"
        assert await SkillRepository(db_session).count() == len(DEFAULT_SKILLS)
        assert await ProjectRepository(db_session).count() == len(DEFAULT_PROJECTS)

    async def test_running_twice_does_not_duplicate(self, db_session: AsyncSession):
        await seed_database(db_session)
        await seed_database(db_session)

        assert await SkillRepository(db_session).count() == len(DEFAULT_SKILLS)
        assert await ProjectRepository(db_session).count() == len(DEFAULT_PROJECTS)

    async def test_existing_projects_are_left_alone(self, db_session: AsyncSession):
        await create_async(ProjectFactory, db_session, title="Mine")

        created = await seed_projects(db_session)

        assert created == 0
        assert await ProjectRepository(db_session).count() == 1

    async def test_seeded_projects_store_json_technologies(
        self, db_session: AsyncSession
    ):
        await seed_projects(db_session)

        project = await ProjectRepository(db_session).get_by_title("Portfolio Website")
        assert project is not None
        expected = DEFAULT_PROJECTS[0]["technologies"]
        assert parse_technologies(project.technologies) == expected


class TestRunSeed:
    async def test_commits_in_own_session(self, session_maker):
        await run_seed(session_maker)

        async with session_maker() as session:
            assert await ProfileRepository(session).exists() is True
