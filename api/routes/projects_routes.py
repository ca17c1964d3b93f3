"""Project endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Path

from core.database import DbSession
from schemas import (
    ApiResponse,
    ErrorResponse,
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from services import projects_service
from services.listing import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_ROW_ID

router = APIRouter(
    prefix="/api/projects",
    tags=["projects"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

ProjectId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


@router.get("", response_model=ApiResponse[list[ProjectResponse]])
async def list_projects(
    db: DbSession,
    category: str | None = None,
    featured: bool | None = None,
    search: str | None = None,
    page: int | None = None,
    page_size: int | None = None,
) -> ApiResponse[list[ProjectResponse]]:
    """List projects.

    Filters apply in this order, first match wins: pagination (``page`` or
    ``page_size``), ``search``, ``category``, ``featured=true``, everything.
    """
    if page is not None or page_size is not None:
        result = await projects_service.get_projects_paginated(
            db,
            DEFAULT_PAGE if page is None else page,
            DEFAULT_PAGE_SIZE if page_size is None else page_size,
        )
        return ApiResponse(data=result.items, pagination=result.pagination)

    if search is not None:
        projects = await projects_service.search_projects(db, search)
    elif category is not None:
        projects = await projects_service.get_projects_by_category(db, category)
    elif featured:
        projects = await projects_service.get_featured_projects(db)
    else:
        projects = await projects_service.get_all_projects(db)
    return ApiResponse(data=projects)


@router.get(
    "/{project_id}",
    response_model=ApiResponse[ProjectResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_project(
    project_id: ProjectId, db: DbSession
) -> ApiResponse[ProjectResponse]:
    return ApiResponse(data=await projects_service.get_project(db, project_id))


@router.post(
    "",
    response_model=ApiResponse[ProjectResponse],
    responses={409: {"model": ErrorResponse}},
)
async def create_project(
    body: ProjectCreate, db: DbSession
) -> ApiResponse[ProjectResponse]:
    project = await projects_service.create_project(db, body)
    return ApiResponse(data=project, message="Project created successfully")


@router.put(
    "/{project_id}",
    response_model=ApiResponse[ProjectResponse],
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_project(
    project_id: ProjectId, body: ProjectUpdate, db: DbSession
) -> ApiResponse[ProjectResponse]:
    project = await projects_service.update_project(db, project_id, body)
    return ApiResponse(data=project, message="Project updated successfully")


@router.delete(
    "/{project_id}",
    response_model=ApiResponse[dict[str, Any]],
    responses={404: {"model": ErrorResponse}},
)
async def delete_project(
    project_id: ProjectId, db: DbSession
) -> ApiResponse[dict[str, Any]]:
    await projects_service.delete_project(db, project_id)
    return ApiResponse(data={}, message="Project deleted successfully")
