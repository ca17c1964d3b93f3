"""SQLAlchemy models for the portfolio: profile, projects, skills, contact inbox."""

import json
from datetime import UTC, datetime
from enum import Enum as PyEnum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from core.database import Base
from core.logger import get_logger

logger = get_logger(__name__)


def utcnow() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamp columns."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utcnow, index=True)

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)


class SkillCategory(str, PyEnum):
    """Closed set of skill categories."""

    FRONTEND = "Frontend"
    BACKEND = "Backend"
    DATABASE = "Database"
    DEVOPS = "DevOps"
    TOOLS = "Tools"
    MOBILE = "Mobile"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str | None) -> "SkillCategory | None":
        """Case-insensitive lookup. Returns None for unknown values."""
        if not value:
            return None
        wanted = value.strip().lower()
        for category in cls:
            if category.value.lower() == wanted:
                return category
        return None

    @classmethod
    def values(cls) -> list[str]:
        return [category.value for category in cls]


SKILL_LEVELS: dict[int, str] = {
    1: "Beginner",
    2: "Novice",
    3: "Intermediate",
    4: "Advanced",
    5: "Expert",
}


def level_description(level: int) -> str:
    return SKILL_LEVELS.get(level, "Unknown")


def technologies_as_json(technologies: list[str]) -> str:
    """Serialize a technology list the way it is stored: ["Rust","SQLite"]."""
    return json.dumps(list(technologies), separators=(",", ":"), ensure_ascii=False)


def parse_technologies(raw: str | None) -> list[str]:
    """Inverse of technologies_as_json. Unreadable values map to an empty list."""
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("project.technologies.unparseable", raw=raw[:100])
        return []
    if not isinstance(value, list):
        logger.warning("project.technologies.unparseable", raw=raw[:100])
        return []
    return [str(item) for item in value]


class Profile(Base):
    """Singleton portfolio owner profile. The only row has id 1."""

    __tablename__ = "profile"
    __table_args__ = (CheckConstraint("id = 1", name="ck_profile_singleton"),)

    SINGLETON_ID = 1

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    bio: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    location: Mapped[str] = mapped_column(String(100), nullable=False)
    linkedin_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    github_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    twitter_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    def social_links(self) -> list[tuple[str, str]]:
        """(platform, url) pairs for the social accounts that are set."""
        links = [
            ("LinkedIn", self.linkedin_url),
            ("GitHub", self.github_url),
            ("Twitter", self.twitter_url),
        ]
        return [(platform, url) for platform, url in links if url]


class Project(TimestampMixin, Base):
    """Portfolio project. ``technologies`` holds a JSON array string."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    long_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    technologies: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    github_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    demo_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class Skill(Base):
    """A skill with a 1..5 proficiency level."""

    __tablename__ = "skills"
    __table_args__ = (
        CheckConstraint("level >= 1 AND level <= 5", name="ck_skills_level_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False)
    years_experience: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )

    @property
    def level_description(self) -> str:
        return level_description(self.level)


class ContactMessage(Base):
    """Message submitted through the public contact form."""

    __tablename__ = "contact_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )


# Case-insensitive uniqueness backs up the service-level duplicate checks
Index("uq_projects_title_lower", func.lower(Project.title), unique=True)
Index("uq_skills_name_lower", func.lower(Skill.name), unique=True)
