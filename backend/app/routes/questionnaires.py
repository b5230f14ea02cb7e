"""
HealthTrack Backend — Questionnaire Routes
===========================================

What:  POST /submit-questionnaire (authenticated) and GET /dlq/{dlq_id}
       (public) for questionnaire batches.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse
from app.schemas.questionnaire import BatchResponse, QuestionnaireSubmission, SubmissionResponse
from app.security import get_current_user_id
from app.services.questionnaire_service import questionnaire_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Questionnaires"])


@router.post(
    "/submit-questionnaire",
    response_model=SubmissionResponse,
    responses={
        400: {"description": "No (valid) responses", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Save a batch of questionnaire answers",
)
async def submit_questionnaire(
    body: QuestionnaireSubmission,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db_session),
) -> SubmissionResponse:
    return await questionnaire_service.submit(db=db, user_id=user_id, responses=body.responses)


@router.get(
    "/dlq/{dlq_id}",
    response_model=BatchResponse,
    responses={
        404: {"description": "Unknown DLQ ID", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get every answer in a questionnaire batch",
)
async def get_batch(
    dlq_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> BatchResponse:
    return await questionnaire_service.get_by_batch_id(db=db, dlq_id=dlq_id)
