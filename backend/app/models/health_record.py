"""
HealthTrack Backend — Health Record SQLAlchemy Model
=====================================================

What:  ORM model for the `health_records` table.
Who:   Used by RecordService for create, lookup-by-report-id and update.

Table Design Rationale:
    - report_id: short human-readable code handed to the user. Indexed for
      lookups but deliberately NOT unique: the generator can collide and
      duplicate codes are accepted by the store.
    - dob: DATE, never in the future (enforced by the service layer)
    - updated_at: refreshed on every update
"""

from datetime import date, datetime, timezone

from sqlalchemy import TIMESTAMP, Date, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class HealthRecord(Base):
    """
    A single health record owned by the user who created it.

    Lifecycle:
        1. Created by an authenticated user for themselves
        2. Optionally updated by report_id (no ownership check)
        3. Never deleted
    """

    __tablename__ = "health_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        comment="Creator of the record",
    )

    report_id: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="Generated short code, e.g. JF48213",
    )

    condition: Mapped[str] = mapped_column(String(255), nullable=False)

    dob: Mapped[date] = mapped_column(Date, nullable=False, comment="Date of birth")

    gender: Mapped[str] = mapped_column(String(50), nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Last write time (UTC)",
    )

    def __repr__(self) -> str:
        return f"<HealthRecord(report_id='{self.report_id}', user_id={self.user_id})>"
