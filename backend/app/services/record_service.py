"""
HealthTrack Backend — Record Service
=====================================

What:  Creates, fetches and updates health records.
How:   Validates the payload, generates a short report ID from the owner's
       name and the condition, and runs parameterized statements against
       `health_records` (joined with `users` for reads).
Who:   Called by the /record route handlers.

Report ID format:
    <name initial><condition initial><last 4 digits of epoch ms><random digit>
    e.g. "Jane Doe" + "Flu" at ...48213 ms, digit 7 → "JF82137"

    Two submissions in the same 10-second window with matching initials
    collide one time in ten. The store does not enforce uniqueness, so a
    collision produces two rows with the same code; lookups return the
    oldest and updates touch both.

Ownership:
    update_record does not check that the caller created the record. Any
    authenticated user who knows a report ID can update it.
"""

import logging
import random
import time
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.health_record import HealthRecord
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.record import RecordCreatedResponse, RecordResponse

logger = logging.getLogger(__name__)


def generate_report_id(name: str, condition: str, now_ms: Optional[int] = None) -> str:
    """Build a short, human-readable (not unique) report identifier."""
    first = name[:1].upper() or "X"
    second = condition[:1].upper() or "Z"
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    timestamp = str(now_ms)[-4:]
    return f"{first}{second}{timestamp}{random.randint(0, 9)}"


def parse_dob(value: str) -> date:
    """
    Parse and check a date of birth.

    Accepts an ISO 8601 date ("2000-01-01") or datetime. Naive datetimes are
    taken as UTC. A date counts as its midnight UTC, so today's date is
    accepted and tomorrow's is not.

    Raises:
        ValidationError: Unparseable, or later than the current time.
    """
    now = datetime.now(timezone.utc)
    try:
        parsed_date = date.fromisoformat(value)
        moment = datetime(parsed_date.year, parsed_date.month, parsed_date.day, tzinfo=timezone.utc)
    except ValueError:
        try:
            moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(message="Invalid date of birth", field="dob")
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        parsed_date = moment.date()

    if moment > now:
        raise ValidationError(message="DOB cannot be in the future", field="dob")
    return parsed_date


def _validate_payload(condition: Optional[str], dob: Optional[str], gender: Optional[str]) -> date:
    if not condition or not dob or not gender:
        raise ValidationError(message="All fields required")
    return parse_dob(dob)


class RecordService:
    """
    Business logic for health records.

    Error Handling Strategy:
        Validation happens before any query. SQLAlchemy errors are wrapped in
        DatabaseError (details logged, generic message returned).
    """

    async def create_record(
        self,
        db: AsyncSession,
        user_id: int,
        condition: Optional[str],
        dob: Optional[str],
        gender: Optional[str],
    ) -> RecordCreatedResponse:
        """
        Create a record owned by `user_id` and return its generated report ID.

        Raises:
            ValidationError: Missing field, bad or future dob (→ 400)
            DatabaseError: Query or insert failed (→ 500)
        """
        dob_date = _validate_payload(condition, dob, gender)

        try:
            result = await db.execute(select(User.name).where(User.id == user_id))
            name = result.scalar_one_or_none() or "Unknown"
            report_id = generate_report_id(name, condition)

            db.add(
                HealthRecord(
                    user_id=user_id,
                    report_id=report_id,
                    condition=condition,
                    dob=dob_date,
                    gender=gender,
                )
            )
            await db.flush()
            await db.commit()

        except SQLAlchemyError as e:
            logger.error("POST /record error: %s", str(e), exc_info=True)
            raise DatabaseError(context={"operation": "create_record", "user_id": user_id})

        logger.info("Health record created: report_id=%s user_id=%s", report_id, user_id)
        return RecordCreatedResponse(report_id=report_id)

    async def get_record(self, db: AsyncSession, report_id: str) -> RecordResponse:
        """
        Fetch a record with its owner's name. No authentication.

        Raises:
            NotFoundError: No record has this report ID (→ 404)
            DatabaseError: Query failed (→ 500)
        """
        try:
            result = await db.execute(
                select(
                    User.name,
                    HealthRecord.condition,
                    HealthRecord.dob,
                    HealthRecord.gender,
                    HealthRecord.report_id,
                )
                .join(User, HealthRecord.user_id == User.id)
                .where(HealthRecord.report_id == report_id)
                .order_by(HealthRecord.id)
                .limit(1)
            )
            row = result.first()
        except SQLAlchemyError as e:
            logger.error("GET /record/%s error: %s", report_id, str(e), exc_info=True)
            raise DatabaseError(context={"operation": "get_record", "report_id": report_id})

        if row is None:
            raise NotFoundError(message="Record not found", resource="record", resource_id=report_id)

        return RecordResponse(
            name=row.name,
            condition=row.condition,
            dob=row.dob,
            gender=row.gender,
            report_id=row.report_id,
        )

    async def update_record(
        self,
        db: AsyncSession,
        report_id: str,
        condition: Optional[str],
        dob: Optional[str],
        gender: Optional[str],
    ) -> MessageResponse:
        """
        Overwrite condition/dob/gender and refresh updated_at.

        Raises:
            ValidationError: Missing field, bad or future dob (→ 400)
            NotFoundError: No record has this report ID (→ 404)
            DatabaseError: Update failed (→ 500)
        """
        dob_date = _validate_payload(condition, dob, gender)

        try:
            result = await db.execute(
                update(HealthRecord)
                .where(HealthRecord.report_id == report_id)
                .values(
                    condition=condition,
                    dob=dob_date,
                    gender=gender,
                    updated_at=datetime.now(timezone.utc),
                )
            )
            updated = result.rowcount
            if updated:
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("PUT /record/%s error: %s", report_id, str(e), exc_info=True)
            raise DatabaseError(context={"operation": "update_record", "report_id": report_id})

        if not updated:
            raise NotFoundError(message="Record not found", resource="record", resource_id=report_id)

        logger.info("Health record updated: report_id=%s rows=%d", report_id, updated)
        return MessageResponse(message="Record updated successfully")


record_service = RecordService()
