"""Contact message repository for database operations."""

from datetime import datetime, timedelta

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import ContactMessage, utcnow
from repositories.utils import LIKE_ESCAPE, contains_pattern, log_slow_query

_NEWEST_FIRST = (ContactMessage.created_at.desc(), ContactMessage.id.desc())


class ContactRepository:
    """Repository for ContactMessage database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @log_slow_query("get_all_messages")
    async def get_all(self) -> list[ContactMessage]:
        result = await self.db.execute(select(ContactMessage).order_by(*_NEWEST_FIRST))
        return list(result.scalars().all())

    @log_slow_query("get_message_by_id")
    async def get_by_id(self, message_id: int) -> ContactMessage | None:
        result = await self.db.execute(
            select(ContactMessage).where(ContactMessage.id == message_id)
        )
        return result.scalar_one_or_none()

    @log_slow_query("create_message")
    async def create(
        self, *, name: str, email: str, subject: str, message: str
    ) -> ContactMessage:
        """Expects email to be pre-normalized (lowercase) by service layer."""
        contact = ContactMessage(
            name=name, email=email, subject=subject, message=message
        )
        self.db.add(contact)
        await self.db.flush()
        await self.db.refresh(contact)
        return contact

    @log_slow_query("delete_message")
    async def delete(self, message_id: int) -> bool:
        result = await self.db.execute(
            delete(ContactMessage).where(ContactMessage.id == message_id)
        )
        return result.rowcount > 0

    @log_slow_query("get_messages_paginated")
    async def get_paginated(self, limit: int, offset: int) -> list[ContactMessage]:
        result = await self.db.execute(
            select(ContactMessage).order_by(*_NEWEST_FIRST).limit(limit).offset(offset)
        )
        return list(result.scalars().all())

    @log_slow_query("count_messages")
    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(ContactMessage))
        return result.scalar_one()

    @log_slow_query("get_recent_messages")
    async def get_recent(self, days: int) -> list[ContactMessage]:
        """Messages created within the last ``days`` days."""
        cutoff = utcnow() - timedelta(days=days)
        result = await self.db.execute(
            select(ContactMessage)
            .where(ContactMessage.created_at >= cutoff)
            .order_by(*_NEWEST_FIRST)
        )
        return list(result.scalars().all())

    @log_slow_query("search_messages")
    async def search(self, query: str) -> list[ContactMessage]:
        """Case-insensitive substring match on name, email or subject."""
        pattern = contains_pattern(query)
        result = await self.db.execute(
            select(ContactMessage)
            .where(
                or_(
                    ContactMessage.name.ilike(pattern, escape=LIKE_ESCAPE),
                    ContactMessage.email.ilike(pattern, escape=LIKE_ESCAPE),
                    ContactMessage.subject.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(*_NEWEST_FIRST)
        )
        return list(result.scalars().all())

    @log_slow_query("count_messages_by_email_since")
    async def count_by_email_since(self, email: str, since: datetime) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(ContactMessage)
            .where(ContactMessage.email == email, ContactMessage.created_at >= since)
        )
        return result.scalar_one()

    @log_slow_query("delete_old_messages")
    async def delete_older_than(self, days: int) -> int:
        """Delete messages created more than ``days`` days ago. Returns the count."""
        cutoff = utcnow() - timedelta(days=days)
        result = await self.db.execute(
            delete(ContactMessage)
            .where(ContactMessage.created_at < cutoff)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
