"""Skill service: category and level rules, duplicate name checks."""

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import BadRequestError, ConflictError, NotFoundError
from core.logger import get_logger
from models import Skill, SkillCategory
from repositories.skill_repository import DUPLICATE_NAME_MESSAGE, SkillRepository
from schemas import SkillCategoriesResponse, SkillCreate, SkillResponse, SkillUpdate

logger = get_logger(__name__)

MIN_LEVEL = 1
MAX_LEVEL = 5


def parse_category(value: str) -> SkillCategory:
    """Resolve a category name in any casing, or raise BadRequestError."""
    category = SkillCategory.parse(value)
    if category is None:
        raise BadRequestError(f"Invalid skill category: {value}")
    return category


def _not_found(skill_id: int) -> NotFoundError:
    return NotFoundError(f"Skill with ID {skill_id} not found")


def _to_responses(skills: list[Skill]) -> list[SkillResponse]:
    return [SkillResponse.model_validate(skill) for skill in skills]


async def get_all_skills(db: AsyncSession) -> list[SkillResponse]:
    return _to_responses(await SkillRepository(db).get_all())


async def get_skill(db: AsyncSession, skill_id: int) -> SkillResponse:
    skill = await SkillRepository(db).get_by_id(skill_id)
    if skill is None:
        logger.info("skill.not_found", skill_id=skill_id)
        raise _not_found(skill_id)
    return SkillResponse.model_validate(skill)


async def get_skills_by_category(
    db: AsyncSession, category: str
) -> list[SkillResponse]:
    parsed = parse_category(category)
    return _to_responses(await SkillRepository(db).get_by_category(parsed))


async def get_skills_by_min_level(
    db: AsyncSession, min_level: int
) -> list[SkillResponse]:
    if not MIN_LEVEL <= min_level <= MAX_LEVEL:
        raise BadRequestError(
            f"Skill level must be between {MIN_LEVEL} and {MAX_LEVEL}"
        )
    return _to_responses(await SkillRepository(db).get_by_min_level(min_level))


async def get_skill_categories(db: AsyncSession) -> SkillCategoriesResponse:
    used = await SkillRepository(db).get_categories()
    return SkillCategoriesResponse(used=used, available=SkillCategory.values())


async def create_skill(db: AsyncSession, data: SkillCreate) -> SkillResponse:
    """Create a skill. Names are unique regardless of case."""
    category = parse_category(data.category)
    repo = SkillRepository(db)

    if await repo.get_by_name(data.name) is not None:
        logger.info("skill.duplicate_name", name=data.name)
        raise ConflictError(DUPLICATE_NAME_MESSAGE)

    skill = await repo.create(
        name=data.name,
        category=category,
        level=data.level,
        years_experience=data.years_experience,
        description=data.description,
    )
    logger.info(
        "skill.created", skill_id=skill.id, name=skill.name, category=skill.category
    )
    return SkillResponse.model_validate(skill)


async def update_skill(
    db: AsyncSession, skill_id: int, data: SkillUpdate
) -> SkillResponse:
    changes = data.changes()
    if not changes:
        raise BadRequestError("No updates provided")

    if "category" in changes:
        changes["category"] = parse_category(changes["category"])

    repo = SkillRepository(db)

    if "name" in changes:
        existing = await repo.get_by_name(changes["name"])
        if existing is not None and existing.id != skill_id:
            logger.info("skill.duplicate_name", name=changes["name"])
            raise ConflictError(DUPLICATE_NAME_MESSAGE)

    skill = await repo.update(skill_id, changes)
    if skill is None:
        logger.info("skill.not_found", skill_id=skill_id)
        raise _not_found(skill_id)

    logger.info("skill.updated", skill_id=skill_id, fields=sorted(changes))
    return SkillResponse.model_validate(skill)


async def delete_skill(db: AsyncSession, skill_id: int) -> None:
    if not await SkillRepository(db).delete(skill_id):
        logger.info("skill.not_found", skill_id=skill_id)
        raise _not_found(skill_id)
    logger.info("skill.deleted", skill_id=skill_id)
