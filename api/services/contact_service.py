"""Contact service: public submissions and the admin inbox.

Submissions go through three gates before they are stored:
- content check (at least three words, not just digits)
- per-email limit of MAX_MESSAGES_PER_WINDOW messages per RATE_LIMIT_WINDOW
- spam heuristics, which only tag the message in the logs
"""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import BadRequestError, NotFoundError
from core.logger import get_logger
from models import ContactMessage, utcnow
from repositories.contact_repository import ContactRepository
from schemas import (
    ContactMessageCreate,
    ContactMessageResponse,
    ContactSubmissionResponse,
    MessageStats,
    Page,
    PaginationInfo,
)
from services.listing import require_search_query, validate_pagination

logger = get_logger(__name__)

RATE_LIMIT_WINDOW = timedelta(hours=24)
MAX_MESSAGES_PER_WINDOW = 3

MIN_RECENT_DAYS = 1
MAX_RECENT_DAYS = 365
MIN_CLEANUP_DAYS = 30
# Keeps the cutoff date inside datetime range
MAX_CLEANUP_DAYS = 36500

SPAM_KEYWORDS = (
    "viagra",
    "casino",
    "lottery",
    "winner",
    "congratulations",
    "click here",
    "free money",
    "urgent",
    "act now",
    "limited time",
)
MAX_CAPS_RATIO = 0.5
MAX_EXCLAMATIONS = 5

THANK_YOU_MESSAGE = "Thank you for your message! I'll get back to you soon."


def is_valid_content(message: str) -> bool:
    """At least three words, and not only digits and whitespace."""
    if len(message.split()) < 3:
        return False
    return not all(c.isnumeric() or c.isspace() for c in message)


def is_likely_spam(subject: str, message: str) -> bool:
    """Keyword, shouting and exclamation-mark heuristics."""
    subject_lower = subject.lower()
    message_lower = message.lower()
    if any(k in message_lower or k in subject_lower for k in SPAM_KEYWORDS):
        return True

    letters = [c for c in message if c.isalpha()]
    if letters:
        caps = sum(1 for c in letters if c.isupper())
        if caps / len(letters) > MAX_CAPS_RATIO:
            return True

    return message.count("!") > MAX_EXCLAMATIONS


def _is_spam(message: ContactMessage) -> bool:
    return is_likely_spam(message.subject, message.message)


def _not_found(message_id: int) -> NotFoundError:
    return NotFoundError(f"Message with ID {message_id} not found")


def _to_responses(messages: list[ContactMessage]) -> list[ContactMessageResponse]:
    return [ContactMessageResponse.model_validate(m) for m in messages]


def _validate_recent_days(days: int) -> None:
    if not MIN_RECENT_DAYS <= days <= MAX_RECENT_DAYS:
        raise BadRequestError(
            f"Days must be between {MIN_RECENT_DAYS} and {MAX_RECENT_DAYS}"
        )


async def submit_message(
    db: AsyncSession, data: ContactMessageCreate
) -> ContactSubmissionResponse:
    """Store a contact form message. Email arrives lowercased."""
    if not is_valid_content(data.message):
        logger.info("contact.invalid_content", email=data.email)
        raise BadRequestError("Message content appears to be invalid")

    repo = ContactRepository(db)

    recent = await repo.count_by_email_since(data.email, utcnow() - RATE_LIMIT_WINDOW)
    if recent >= MAX_MESSAGES_PER_WINDOW:
        logger.warning("contact.rate_limited", email=data.email, recent_count=recent)
        raise BadRequestError(
            "Too many messages sent recently. "
            "Please wait before sending another message."
        )

    message = await repo.create(
        name=data.name, email=data.email, subject=data.subject, message=data.message
    )
    logger.info("contact.submitted", message_id=message.id, email=message.email)

    if _is_spam(message):
        logger.warning(
            "contact.spam_suspected",
            message_id=message.id,
            email=message.email,
            subject=message.subject,
        )

    return ContactSubmissionResponse(
        id=message.id, submitted_at=message.created_at, message=THANK_YOU_MESSAGE
    )


async def get_all_messages(db: AsyncSession) -> list[ContactMessageResponse]:
    return _to_responses(await ContactRepository(db).get_all())


async def get_message(db: AsyncSession, message_id: int) -> ContactMessageResponse:
    message = await ContactRepository(db).get_by_id(message_id)
    if message is None:
        logger.info("contact.not_found", message_id=message_id)
        raise _not_found(message_id)
    return ContactMessageResponse.model_validate(message)


async def get_messages_paginated(
    db: AsyncSession, page: int, page_size: int
) -> Page[ContactMessageResponse]:
    offset = validate_pagination(page, page_size)
    repo = ContactRepository(db)
    messages = await repo.get_paginated(page_size, offset)
    total = await repo.count()
    return Page[ContactMessageResponse](
        items=_to_responses(messages),
        pagination=PaginationInfo.build(page, page_size, total),
    )


async def search_messages(db: AsyncSession, query: str) -> list[ContactMessageResponse]:
    cleaned = require_search_query(query)
    return _to_responses(await ContactRepository(db).search(cleaned))


async def get_recent_messages(
    db: AsyncSession, days: int
) -> list[ContactMessageResponse]:
    _validate_recent_days(days)
    return _to_responses(await ContactRepository(db).get_recent(days))


async def delete_message(db: AsyncSession, message_id: int) -> None:
    if not await ContactRepository(db).delete(message_id):
        logger.info("contact.not_found", message_id=message_id)
        raise _not_found(message_id)
    logger.info("contact.deleted", message_id=message_id)


async def get_message_stats(db: AsyncSession) -> MessageStats:
    repo = ContactRepository(db)
    total = await repo.count()
    this_week = await repo.get_recent(7)
    this_month = await repo.get_recent(30)
    return MessageStats(
        total_messages=total,
        messages_this_week=len(this_week),
        messages_this_month=len(this_month),
        spam_messages=sum(1 for m in this_month if _is_spam(m)),
    )


async def cleanup_old_messages(db: AsyncSession, days: int) -> int:
    """Delete messages older than ``days`` days (at least MIN_CLEANUP_DAYS)."""
    if days < MIN_CLEANUP_DAYS:
        raise BadRequestError(
            f"Cannot delete messages newer than {MIN_CLEANUP_DAYS} days"
        )
    if days > MAX_CLEANUP_DAYS:
        raise BadRequestError(f"Days cannot exceed {MAX_CLEANUP_DAYS}")
    deleted = await ContactRepository(db).delete_older_than(days)
    logger.info("contact.cleanup", days=days, deleted_count=deleted)
    return deleted
