"""
HealthTrack Backend — Questionnaire Service
============================================

What:  Stores a batch of questionnaire answers under one generated DLQ ID
       and reads a batch back in submission order.
How:   Cleans the submitted entries, generates the batch ID from the
       submitter's initials, and writes every row with ONE multi-row INSERT
       (atomic without an explicit transaction).
Who:   Called by /submit-questionnaire and /dlq/{dlq_id}.

DLQ ID format:
    "DLQ_" + up to two uppercase initials + random 4-digit number
    e.g. "Jane Mary Doe" → "DLQ_JM4821"
"""

import logging
import random
from typing import List, Optional, Sequence, Tuple, Union

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.questionnaire import QuestionnaireResponse
from app.models.user import User
from app.schemas.questionnaire import (
    BatchResponse,
    QuestionnaireAnswer,
    QuestionnaireEntry,
    SubmissionResponse,
)

logger = logging.getLogger(__name__)


def generate_dlq_id(full_name: str) -> str:
    """Build a batch identifier from the first two name initials."""
    initials = "".join(part[:1] for part in full_name.split(" ")).upper()[:2]
    return f"DLQ_{initials}{random.randint(1000, 9999)}"


def stringify_response(value: Optional[Union[str, bool, int, float]]) -> str:
    """Render a scalar answer the way the web client displays it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def clean_entries(entries: Sequence[QuestionnaireEntry]) -> List[Tuple[str, str, str]]:
    """
    Drop incomplete entries and normalize the rest.

    An entry survives when section and question are non-empty after trimming
    and a response was sent. An explicit null is a sent response; only an
    omitted one is missing.

    Returns:
        (section, question, response) tuples in submission order.
    """
    cleaned = []
    for entry in entries:
        section = (entry.section or "").strip()
        question = (entry.question or "").strip()
        if not section or not question or "response" not in entry.model_fields_set:
            continue
        cleaned.append((section, question, stringify_response(entry.response).strip()))
    return cleaned


class QuestionnaireService:
    """Business logic for questionnaire batches. Stateless."""

    async def submit(
        self,
        db: AsyncSession,
        user_id: int,
        responses: Optional[Sequence[QuestionnaireEntry]],
    ) -> SubmissionResponse:
        """
        Persist a batch and return its DLQ ID.

        Raises:
            ValidationError: No responses, or none survive cleaning (→ 400)
            DatabaseError: Lookup or insert failed (→ 500)
        """
        if not responses:
            raise ValidationError(message="No responses provided", field="responses")

        cleaned = clean_entries(responses)
        if not cleaned:
            raise ValidationError(message="No valid responses to save.", field="responses")

        try:
            result = await db.execute(select(User.name).where(User.id == user_id))
            full_name = result.scalar_one_or_none() or "User"
            dlq_id = generate_dlq_id(full_name)

            await db.execute(
                insert(QuestionnaireResponse).values(
                    [
                        {
                            "user_id": user_id,
                            "dlq_id": dlq_id,
                            "section": section,
                            "question": question,
                            "response": response,
                        }
                        for section, question, response in cleaned
                    ]
                )
            )
            await db.commit()

        except SQLAlchemyError as e:
            logger.error("POST /submit-questionnaire error: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Failed to save responses",
                context={"operation": "submit_questionnaire", "user_id": user_id},
            )

        logger.info(
            "Questionnaire saved: dlq_id=%s user_id=%s answers=%d",
            dlq_id, user_id, len(cleaned),
        )
        return SubmissionResponse(dlq_id=dlq_id)

    async def get_by_batch_id(self, db: AsyncSession, dlq_id: str) -> BatchResponse:
        """
        Return every answer in a batch, oldest first. No authentication.

        Raises:
            NotFoundError: No rows carry this DLQ ID (→ 404)
            DatabaseError: Query failed (→ 500)
        """
        try:
            result = await db.execute(
                select(
                    QuestionnaireResponse.section,
                    QuestionnaireResponse.question,
                    QuestionnaireResponse.response,
                )
                .where(QuestionnaireResponse.dlq_id == dlq_id)
                .order_by(QuestionnaireResponse.id)
            )
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("GET /dlq/%s error: %s", dlq_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Server error while fetching responses.",
                context={"operation": "get_by_batch_id", "dlq_id": dlq_id},
            )

        if not rows:
            raise NotFoundError(
                message="No responses found for this DLQ ID.",
                resource="questionnaire batch",
                resource_id=dlq_id,
            )

        return BatchResponse(
            dlq_id=dlq_id,
            responses=[
                QuestionnaireAnswer(section=row.section, question=row.question, response=row.response)
                for row in rows
            ],
        )


questionnaire_service = QuestionnaireService()
