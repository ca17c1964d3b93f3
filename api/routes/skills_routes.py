"""Skill endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Path

from core.database import DbSession
from schemas import (
    ApiResponse,
    ErrorResponse,
    SkillCategoriesResponse,
    SkillCreate,
    SkillResponse,
    SkillUpdate,
)
from services import skills_service
from services.listing import MAX_ROW_ID

router = APIRouter(
    prefix="/api/skills",
    tags=["skills"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

SkillId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


@router.get("", response_model=ApiResponse[list[SkillResponse]])
async def list_skills(
    db: DbSession,
    category: str | None = None,
    min_level: int | None = None,
) -> ApiResponse[list[SkillResponse]]:
    """List skills, optionally by category or minimum level (category wins)."""
    if category is not None:
        skills = await skills_service.get_skills_by_category(db, category)
    elif min_level is not None:
        skills = await skills_service.get_skills_by_min_level(db, min_level)
    else:
        skills = await skills_service.get_all_skills(db)
    return ApiResponse(data=skills)


# Declared before /{skill_id} so "categories" is not parsed as an id
@router.get("/categories", response_model=ApiResponse[SkillCategoriesResponse])
async def get_categories(db: DbSession) -> ApiResponse[SkillCategoriesResponse]:
    return ApiResponse(data=await skills_service.get_skill_categories(db))


@router.get(
    "/{skill_id}",
    response_model=ApiResponse[SkillResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_skill(skill_id: SkillId, db: DbSession) -> ApiResponse[SkillResponse]:
    return ApiResponse(data=await skills_service.get_skill(db, skill_id))


@router.post(
    "",
    response_model=ApiResponse[SkillResponse],
    responses={409: {"model": ErrorResponse}},
)
async def create_skill(body: SkillCreate, db: DbSession) -> ApiResponse[SkillResponse]:
    skill = await skills_service.create_skill(db, body)
    return ApiResponse(data=skill, message="Skill created successfully")


@router.put(
    "/{skill_id}",
    response_model=ApiResponse[SkillResponse],
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_skill(
    skill_id: SkillId, body: SkillUpdate, db: DbSession
) -> ApiResponse[SkillResponse]:
    skill = await skills_service.update_skill(db, skill_id, body)
    return ApiResponse(data=skill, message="Skill updated successfully")


@router.delete(
    "/{skill_id}",
    response_model=ApiResponse[dict[str, Any]],
    responses={404: {"model": ErrorResponse}},
)
async def delete_skill(
    skill_id: SkillId, db: DbSession
) -> ApiResponse[dict[str, Any]]:
    await skills_service.delete_skill(db, skill_id)
    return ApiResponse(data={}, message="Skill deleted successfully")
