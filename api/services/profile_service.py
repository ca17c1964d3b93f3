"""Profile service for the singleton portfolio profile."""

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import BadRequestError, NotFoundError
from core.logger import get_logger
from repositories.profile_repository import ProfileRepository
from schemas import (
    ProfileExistsResponse,
    ProfileResponse,
    ProfileSummary,
    ProfileUpdate,
    SocialLink,
)

logger = get_logger(__name__)

PROFILE_NOT_FOUND = "Profile not found"


async def get_profile(db: AsyncSession) -> ProfileResponse:
    profile = await ProfileRepository(db).get()
    if profile is None:
        logger.warning("profile.not_found")
        raise NotFoundError(PROFILE_NOT_FOUND)
    return ProfileResponse.model_validate(profile)


async def update_profile(db: AsyncSession, data: ProfileUpdate) -> ProfileResponse:
    """Merge the supplied fields into the profile. Email arrives lowercased."""
    changes = data.changes()
    if not changes:
        raise BadRequestError("No updates provided")

    profile = await ProfileRepository(db).update(changes)
    if profile is None:
        logger.warning("profile.not_found")
        raise NotFoundError(PROFILE_NOT_FOUND)

    logger.info("profile.updated", fields=sorted(changes))
    return ProfileResponse.model_validate(profile)


async def profile_exists(db: AsyncSession) -> ProfileExistsResponse:
    return ProfileExistsResponse(exists=await ProfileRepository(db).exists())


async def get_profile_summary(db: AsyncSession) -> ProfileSummary:
    profile = await ProfileRepository(db).get()
    if profile is None:
        logger.warning("profile.not_found")
        raise NotFoundError(PROFILE_NOT_FOUND)
    return ProfileSummary(
        name=profile.name,
        title=profile.title,
        location=profile.location,
        social_links=[
            SocialLink(platform=platform, url=url)
            for platform, url in profile.social_links()
        ],
    )
