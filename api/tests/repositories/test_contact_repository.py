"""Tests for ContactRepository.

Tests inbox queries against in-memory SQLite, including the time-window
queries used by rate limiting, stats and cleanup.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from repositories.contact_repository import ContactRepository
from tests.factories import ContactMessageFactory, create_async, days_ago


class TestContactRepositoryCreate:
    async def test_create_sets_created_at(self, db_session: AsyncSession):
        repo = ContactRepository(db_session)

        message = await repo.create(
            name="Jane",
            email="jane@example.com",
            subject="Hello",
            message="Nice portfolio, let's talk.",
        )

        assert message.id is not None
        assert message.created_at is not None


class TestContactRepositoryListing:
    async def test_get_all_newest_first(self, db_session: AsyncSession):
        old = await create_async(
            ContactMessageFactory, db_session, created_at=days_ago(5)
        )
        new = await create_async(
            ContactMessageFactory, db_session, created_at=days_ago(1)
        )
        repo = ContactRepository(db_session)

        assert [m.id for m in await repo.get_all()] == [new.id, old.id]

    async def test_paginated_with_count(self, db_session: AsyncSession):
        for day in range(4):
            await create_async(
                ContactMessageFactory, db_session, created_at=days_ago(day)
            )
        repo = ContactRepository(db_session)

        page = await repo.get_paginated(limit=3, offset=3)

        assert await repo.count() == 4
        assert len(page) == 1

    async def test_search_matches_name_email_or_subject(
        self, db_session: AsyncSession
    ):
        by_name = await create_async(
            ContactMessageFactory,
            db_session,
            name="Alice Martin",
            email="a@example.com",
            subject="Hi",
        )
        by_subject = await create_async(
            ContactMessageFactory,
            db_session,
            name="Bob",
            email="b@example.com",
            subject="Question for martin",
        )
        await create_async(
            ContactMessageFactory,
            db_session,
            name="Carol",
            email="c@example.com",
            subject="Hello",
            message="martin appears only in the body",
        )
        repo = ContactRepository(db_session)

        result = await repo.search("MARTIN")

        assert {m.id for m in result} == {by_name.id, by_subject.id}


class TestContactRepositoryTimeWindows:
    async def test_get_recent_uses_cutoff(self, db_session: AsyncSession):
        recent = await create_async(
            ContactMessageFactory, db_session, created_at=days_ago(2)
        )
        await create_async(ContactMessageFactory, db_session, created_at=days_ago(10))
        repo = ContactRepository(db_session)

        assert [m.id for m in await repo.get_recent(7)] == [recent.id]

    async def test_count_by_email_since(self, db_session: AsyncSession):
        email = "repeat@example.com"
        await create_async(
            ContactMessageFactory, db_session, email=email, created_at=days_ago(0, 2)
        )
        await create_async(
            ContactMessageFactory, db_session, email=email, created_at=days_ago(0, 20)
        )
        await create_async(
            ContactMessageFactory, db_session, email=email, created_at=days_ago(2)
        )
        await create_async(ContactMessageFactory, db_session, email="other@example.com")
        repo = ContactRepository(db_session)

        assert await repo.count_by_email_since(email, days_ago(1)) == 2

    async def test_delete_older_than_returns_count(self, db_session: AsyncSession):
        keep = await create_async(
            ContactMessageFactory, db_session, created_at=days_ago(10)
        )
        await create_async(ContactMessageFactory, db_session, created_at=days_ago(40))
        await create_async(ContactMessageFactory, db_session, created_at=days_ago(90))
        repo = ContactRepository(db_session)

        deleted = await repo.delete_older_than(30)

        assert deleted == 2
        assert [m.id for m in await repo.get_all()] == [keep.id]

    async def test_delete_single_message(self, db_session: AsyncSession):
        message = await create_async(ContactMessageFactory, db_session)
        repo = ContactRepository(db_session)

        assert await repo.delete(message.id) is True
        assert await repo.get_by_id(message.id) is None
