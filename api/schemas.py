"""Pydantic schemas for API request/response validation."""

import math
import re
from datetime import datetime
from typing import Annotated, Any, ClassVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from models import parse_technologies

# C0/C1 control characters except \t (0x09) and \n (0x0a)
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")

_HTTP_URL = TypeAdapter(HttpUrl)


def sanitize_text(value: str) -> str:
    """Trim, then drop control characters other than newline and tab."""
    return _CONTROL_CHARS_RE.sub("", value.strip())


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, str):
        return sanitize_text(value)
    if isinstance(value, list):
        return [_sanitize_value(item) for item in value]
    return value


def _check_http_url(value: str) -> str:
    """Accept only scheme-qualified http(s) URLs; keep the caller's spelling."""
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http or https URL") from None
    return value


def _lowercase(value: str) -> str:
    return value.lower()


HttpUrlStr = Annotated[str, AfterValidator(_check_http_url)]
NormalizedEmail = Annotated[EmailStr, AfterValidator(_lowercase)]
Technology = Annotated[str, Field(min_length=1, max_length=50)]


# =============================================================================
# Input base classes
# =============================================================================


class SanitizedInput(BaseModel):
    """Base for request bodies: every string is sanitized before validation.

    Empty strings in optional fields become ``None``.
    """

    model_config = ConfigDict(extra="ignore")

    # Fields where an empty string means "not provided"
    blank_as_null: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _sanitize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = {key: _sanitize_value(value) for key, value in data.items()}
        for key in cls.blank_as_null:
            if cleaned.get(key) == "":
                cleaned[key] = None
        return cleaned


class PartialUpdate(SanitizedInput):
    """Base for PUT bodies where every field is optional (partial merge)."""

    # Columns that may be cleared by sending an explicit null
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict[str, Any]:
        """Fields present in the payload.

        An explicit null clears a nullable column and is dropped for
        required ones.
        """
        supplied = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in supplied.items()
            if value is not None or key in self.nullable_fields
        }


# =============================================================================
# Project Schemas
# =============================================================================


class ProjectCreate(SanitizedInput):
    """Request body for creating a project."""

    blank_as_null: ClassVar[frozenset[str]] = frozenset(
        {"long_description", "github_url", "demo_url", "image_url"}
    )

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=500)
    long_description: str | None = Field(default=None, max_length=2000)
    technologies: list[Technology] = Field(min_length=1)
    github_url: HttpUrlStr | None = None
    demo_url: HttpUrlStr | None = None
    image_url: HttpUrlStr | None = None
    category: str = Field(min_length=1, max_length=50)
    featured: bool | None = None


class ProjectUpdate(PartialUpdate):
    """Request body for updating a project. Omitted fields are left as-is."""

    blank_as_null: ClassVar[frozenset[str]] = frozenset(
        {"long_description", "github_url", "demo_url", "image_url"}
    )
    nullable_fields: ClassVar[frozenset[str]] = blank_as_null

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=500)
    long_description: str | None = Field(default=None, max_length=2000)
    technologies: list[Technology] | None = Field(default=None, min_length=1)
    github_url: HttpUrlStr | None = None
    demo_url: HttpUrlStr | None = None
    image_url: HttpUrlStr | None = None
    category: str | None = Field(default=None, min_length=1, max_length=50)
    featured: bool | None = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    long_description: str | None = None
    technologies: list[str]
    github_url: str | None = None
    demo_url: str | None = None
    image_url: str | None = None
    category: str
    featured: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("technologies", mode="before")
    @classmethod
    def _decode_technologies(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_technologies(value)
        return value


# =============================================================================
# Skill Schemas
# =============================================================================


class SkillCreate(SanitizedInput):
    """Request body for creating a skill.

    ``category`` membership is checked by the skills service so an unknown
    category is reported as a bad request rather than a field error.
    """

    blank_as_null: ClassVar[frozenset[str]] = frozenset({"description"})

    name: str = Field(min_length=1, max_length=100)
    category: str = Field(min_length=1, max_length=50)
    level: int = Field(ge=1, le=5)
    years_experience: int | None = Field(default=None, ge=0, le=50)
    description: str | None = Field(default=None, max_length=500)


class SkillUpdate(PartialUpdate):
    blank_as_null: ClassVar[frozenset[str]] = frozenset({"description"})
    nullable_fields: ClassVar[frozenset[str]] = frozenset(
        {"description", "years_experience"}
    )

    name: str | None = Field(default=None, min_length=1, max_length=100)
    category: str | None = Field(default=None, min_length=1, max_length=50)
    level: int | None = Field(default=None, ge=1, le=5)
    years_experience: int | None = Field(default=None, ge=0, le=50)
    description: str | None = Field(default=None, max_length=500)


class SkillResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    level: int
    level_description: str
    years_experience: int | None = None
    description: str | None = None
    created_at: datetime


class SkillCategoriesResponse(BaseModel):
    """Categories currently in use, plus the full allowed set."""

    used: list[str]
    available: list[str]


# =============================================================================
# Profile Schemas
# =============================================================================


class ProfileUpdate(PartialUpdate):
    """Request body for updating the singleton profile."""

    blank_as_null: ClassVar[frozenset[str]] = frozenset(
        {"phone", "linkedin_url", "github_url", "twitter_url"}
    )
    nullable_fields: ClassVar[frozenset[str]] = blank_as_null

    name: str | None = Field(default=None, min_length=1, max_length=100)
    title: str | None = Field(default=None, min_length=1, max_length=200)
    bio: str | None = Field(default=None, min_length=1, max_length=1000)
    email: NormalizedEmail | None = None
    phone: str | None = Field(default=None, max_length=20)
    location: str | None = Field(default=None, min_length=1, max_length=100)
    linkedin_url: HttpUrlStr | None = None
    github_url: HttpUrlStr | None = None
    twitter_url: HttpUrlStr | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    title: str
    bio: str
    email: str
    phone: str | None = None
    location: str
    linkedin_url: str | None = None
    github_url: str | None = None
    twitter_url: str | None = None
    updated_at: datetime


class SocialLink(BaseModel):
    platform: str
    url: str


class ProfileSummary(BaseModel):
    """Short profile card: who, what, where, and links."""

    name: str
    title: str
    location: str
    social_links: list[SocialLink]


class ProfileExistsResponse(BaseModel):
    exists: bool


# =============================================================================
# Contact Schemas
# =============================================================================


class ContactMessageCreate(SanitizedInput):
    """Public contact form submission."""

    name: str = Field(min_length=1, max_length=100)
    email: NormalizedEmail
    subject: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1, max_length=2000)


class ContactMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    subject: str
    message: str
    created_at: datetime


class ContactSubmissionResponse(BaseModel):
    id: int
    submitted_at: datetime
    message: str


class MessageStats(BaseModel):
    total_messages: int
    messages_this_week: int
    messages_this_month: int
    spam_messages: int


class CleanupRequest(BaseModel):
    days: int


class CleanupResponse(BaseModel):
    deleted_count: int
    message: str


# =============================================================================
# Envelope Schemas
# =============================================================================


class PaginationInfo(BaseModel):
    page: int
    page_size: int
    total_count: int
    total_pages: int

    @classmethod
    def build(cls, page: int, page_size: int, total_count: int) -> "PaginationInfo":
        return cls(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=math.ceil(total_count / page_size),
        )


class Page[ItemT](BaseModel):
    """One page of results as returned by the services."""

    items: list[ItemT]
    pagination: PaginationInfo


class ApiResponse[DataT](BaseModel):
    """Success envelope wrapped around every JSON payload."""

    success: bool = True
    data: DataT | None = None
    message: str | None = None
    pagination: PaginationInfo | None = None


class ErrorDetail(BaseModel):
    field: str
    message: str


class ErrorBody(BaseModel):
    code: int
    message: str
    details: str | None = None
    validation_errors: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Failure envelope. Documented on routes; rendered by core.errors."""

    success: bool = False
    error: ErrorBody


class HealthResponse(BaseModel):
    status: str
    service: str
