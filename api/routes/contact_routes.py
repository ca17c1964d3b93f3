"""Contact form and inbox endpoints.

``POST /api/contact`` is public and throttled per client IP. The inbox
endpoints under ``/messages``, ``/stats`` and ``/cleanup`` are meant for the
site owner.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Path, Request

from core.database import DbSession
from core.ratelimit import CONTACT_SUBMIT_LIMIT, limiter
from schemas import (
    ApiResponse,
    CleanupRequest,
    CleanupResponse,
    ContactMessageCreate,
    ContactMessageResponse,
    ContactSubmissionResponse,
    ErrorResponse,
    MessageStats,
)
from services import contact_service
from services.listing import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_ROW_ID

router = APIRouter(
    prefix="/api/contact",
    tags=["contact"],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

MessageId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


@router.post(
    "",
    response_model=ApiResponse[ContactSubmissionResponse],
    responses={429: {"model": ErrorResponse}},
)
@limiter.limit(CONTACT_SUBMIT_LIMIT)
async def submit_contact_message(
    request: Request, body: ContactMessageCreate, db: DbSession
) -> ApiResponse[ContactSubmissionResponse]:
    submission = await contact_service.submit_message(db, body)
    return ApiResponse(data=submission, message="Message submitted successfully")


@router.get("/messages", response_model=ApiResponse[list[ContactMessageResponse]])
async def list_messages(
    db: DbSession,
    search: str | None = None,
    days: int | None = None,
    page: int | None = None,
    page_size: int | None = None,
) -> ApiResponse[list[ContactMessageResponse]]:
    """List inbox messages, newest first.

    Filters apply in this order, first match wins: pagination (``page`` or
    ``page_size``), ``search``, ``days``, everything.
    """
    if page is not None or page_size is not None:
        result = await contact_service.get_messages_paginated(
            db,
            DEFAULT_PAGE if page is None else page,
            DEFAULT_PAGE_SIZE if page_size is None else page_size,
        )
        return ApiResponse(data=result.items, pagination=result.pagination)

    if search is not None:
        messages = await contact_service.search_messages(db, search)
    elif days is not None:
        messages = await contact_service.get_recent_messages(db, days)
    else:
        messages = await contact_service.get_all_messages(db)
    return ApiResponse(data=messages)


@router.get(
    "/messages/{message_id}",
    response_model=ApiResponse[ContactMessageResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_message(
    message_id: MessageId, db: DbSession
) -> ApiResponse[ContactMessageResponse]:
    return ApiResponse(data=await contact_service.get_message(db, message_id))


@router.delete(
    "/messages/{message_id}",
    response_model=ApiResponse[dict[str, Any]],
    responses={404: {"model": ErrorResponse}},
)
async def delete_message(
    message_id: MessageId, db: DbSession
) -> ApiResponse[dict[str, Any]]:
    await contact_service.delete_message(db, message_id)
    return ApiResponse(data={}, message="Message deleted successfully")


@router.get("/stats", response_model=ApiResponse[MessageStats])
async def get_message_stats(db: DbSession) -> ApiResponse[MessageStats]:
    return ApiResponse(data=await contact_service.get_message_stats(db))


@router.post("/cleanup", response_model=ApiResponse[CleanupResponse])
async def cleanup_old_messages(
    body: CleanupRequest, db: DbSession
) -> ApiResponse[CleanupResponse]:
    deleted = await contact_service.cleanup_old_messages(db, body.days)
    return ApiResponse(
        data=CleanupResponse(
            deleted_count=deleted,
            message=f"Successfully deleted {deleted} old messages",
        )
    )
