"""Project service: validation, normalization and duplicate checks for projects."""

from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import BadRequestError, ConflictError, NotFoundError
from core.logger import get_logger
from models import Project, technologies_as_json
from repositories.project_repository import DUPLICATE_TITLE_MESSAGE, ProjectRepository
from schemas import Page, PaginationInfo, ProjectCreate, ProjectResponse, ProjectUpdate
from services.listing import require_search_query, validate_pagination

logger = get_logger(__name__)


def normalize_category(category: str) -> str:
    """Project categories are free-form but stored trimmed and lowercase."""
    return category.strip().lower()


def _not_found(project_id: int) -> NotFoundError:
    return NotFoundError(f"Project with ID {project_id} not found")


def _to_responses(projects: list[Project]) -> list[ProjectResponse]:
    return [ProjectResponse.model_validate(project) for project in projects]


async def get_all_projects(db: AsyncSession) -> list[ProjectResponse]:
    projects = await ProjectRepository(db).get_all()
    logger.debug("projects.listed", count=len(projects))
    return _to_responses(projects)


async def get_project(db: AsyncSession, project_id: int) -> ProjectResponse:
    project = await ProjectRepository(db).get_by_id(project_id)
    if project is None:
        logger.info("project.not_found", project_id=project_id)
        raise _not_found(project_id)
    return ProjectResponse.model_validate(project)


async def get_featured_projects(db: AsyncSession) -> list[ProjectResponse]:
    return _to_responses(await ProjectRepository(db).get_featured())


async def get_projects_by_category(
    db: AsyncSession, category: str
) -> list[ProjectResponse]:
    normalized = normalize_category(category)
    if not normalized:
        raise BadRequestError("Category cannot be empty")
    return _to_responses(await ProjectRepository(db).get_by_category(normalized))


async def search_projects(db: AsyncSession, query: str) -> list[ProjectResponse]:
    cleaned = require_search_query(query)
    projects = await ProjectRepository(db).search(cleaned)
    logger.debug("projects.searched", query=cleaned, count=len(projects))
    return _to_responses(projects)


async def get_projects_paginated(
    db: AsyncSession, page: int, page_size: int
) -> Page[ProjectResponse]:
    offset = validate_pagination(page, page_size)
    repo = ProjectRepository(db)
    projects = await repo.get_paginated(page_size, offset)
    total = await repo.count()
    return Page[ProjectResponse](
        items=_to_responses(projects),
        pagination=PaginationInfo.build(page, page_size, total),
    )


async def create_project(db: AsyncSession, data: ProjectCreate) -> ProjectResponse:
    """Create a project. Titles are unique regardless of case."""
    repo = ProjectRepository(db)

    if await repo.get_by_title(data.title) is not None:
        logger.info("project.duplicate_title", title=data.title)
        raise ConflictError(DUPLICATE_TITLE_MESSAGE)

    project = await repo.create(
        title=data.title,
        description=data.description,
        long_description=data.long_description,
        technologies=technologies_as_json(data.technologies),
        github_url=data.github_url,
        demo_url=data.demo_url,
        image_url=data.image_url,
        category=normalize_category(data.category),
        featured=bool(data.featured),
    )
    logger.info("project.created", project_id=project.id, title=project.title)
    return ProjectResponse.model_validate(project)


async def update_project(
    db: AsyncSession, project_id: int, data: ProjectUpdate
) -> ProjectResponse:
    """Partially update a project: only supplied fields change."""
    changes = data.changes()
    if not changes:
        raise BadRequestError("No updates provided")

    repo = ProjectRepository(db)

    if "title" in changes:
        existing = await repo.get_by_title(changes["title"])
        if existing is not None and existing.id != project_id:
            logger.info("project.duplicate_title", title=changes["title"])
            raise ConflictError(DUPLICATE_TITLE_MESSAGE)
    if "category" in changes:
        changes["category"] = normalize_category(changes["category"])
    if "technologies" in changes:
        changes["technologies"] = technologies_as_json(changes["technologies"])

    project = await repo.update(project_id, changes)
    if project is None:
        logger.info("project.not_found", project_id=project_id)
        raise _not_found(project_id)

    logger.info("project.updated", project_id=project_id, fields=sorted(changes))
    return ProjectResponse.model_validate(project)


async def delete_project(db: AsyncSession, project_id: int) -> None:
    if not await ProjectRepository(db).delete(project_id):
        logger.info("project.not_found", project_id=project_id)
        raise _not_found(project_id)
    logger.info("project.deleted", project_id=project_id)
