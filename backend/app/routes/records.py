"""
HealthTrack Backend — Health Record Routes
===========================================

What:  POST /record (create), GET /record/{report_id} (public read),
       PUT /record/{report_id} (update).
Who:   Called by the record form and the shareable record page.

Auth:
    Create and update require a bearer token. Reads are public: anyone with
    the report ID can view the record.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.record import RecordCreatedResponse, RecordPayload, RecordResponse
from app.security import get_current_user_id
from app.services.record_service import record_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Records"])


@router.post(
    "/record",
    response_model=RecordCreatedResponse,
    responses={
        400: {"description": "Missing field or future date of birth", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a health record for the caller",
)
async def create_record(
    body: RecordPayload,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> RecordCreatedResponse:
    return await record_service.create_record(
        db=db,
        user_id=user_id,
        condition=body.condition,
        dob=body.dob,
        gender=body.gender,
    )


@router.get(
    "/record/{report_id}",
    response_model=RecordResponse,
    responses={
        404: {"description": "Record not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a health record by report ID",
)
async def get_record(
    report_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> RecordResponse:
    return await record_service.get_record(db=db, report_id=report_id)


@router.put(
    "/record/{report_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Missing field or future date of birth", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Record not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a health record by report ID",
)
async def update_record(
    report_id: str,
    body: RecordPayload,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    # TODO: reject updates from users other than the record's creator
    logger.info("Record %s update requested by user %s", report_id, user_id)
    return await record_service.update_record(
        db=db,
        report_id=report_id,
        condition=body.condition,
        dob=body.dob,
        gender=body.gender,
    )
