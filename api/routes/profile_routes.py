"""Profile endpoints."""

from fastapi import APIRouter

from core.database import DbSession
from schemas import (
    ApiResponse,
    ErrorResponse,
    ProfileExistsResponse,
    ProfileResponse,
    ProfileSummary,
    ProfileUpdate,
)
from services import profile_service

router = APIRouter(
    prefix="/api/profile",
    tags=["profile"],
    responses={500: {"model": ErrorResponse}},
)


@router.get(
    "",
    response_model=ApiResponse[ProfileResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_profile(db: DbSession) -> ApiResponse[ProfileResponse]:
    return ApiResponse(data=await profile_service.get_profile(db))


@router.put(
    "",
    response_model=ApiResponse[ProfileResponse],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_profile(
    body: ProfileUpdate, db: DbSession
) -> ApiResponse[ProfileResponse]:
    profile = await profile_service.update_profile(db, body)
    return ApiResponse(data=profile, message="Profile updated successfully")


@router.get(
    "/summary",
    response_model=ApiResponse[ProfileSummary],
    responses={404: {"model": ErrorResponse}},
)
async def get_profile_summary(db: DbSession) -> ApiResponse[ProfileSummary]:
    return ApiResponse(data=await profile_service.get_profile_summary(db))


@router.get("/exists", response_model=ApiResponse[ProfileExistsResponse])
async def check_profile_exists(db: DbSession) -> ApiResponse[ProfileExistsResponse]:
    return ApiResponse(data=await profile_service.profile_exists(db))
