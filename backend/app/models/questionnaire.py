"""
HealthTrack Backend — Questionnaire Response SQLAlchemy Model
==============================================================

What:  ORM model for the `questionnaire_responses` table.
Who:   Written in bulk by QuestionnaireService.submit; read by batch id.

A batch has no table of its own: it is every row sharing one `dlq_id`.
Rows are append-only and the serial `id` defines their display order.
"""

from datetime import datetime, timezone

from sqlalchemy import TIMESTAMP, ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class QuestionnaireResponse(Base):
    """One answered question inside a DLQ batch."""

    __tablename__ = "questionnaire_responses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
    )

    dlq_id: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="Batch identifier shared by every row of one submission",
    )

    section: Mapped[str] = mapped_column(String(255), nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)

    submitted_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<QuestionnaireResponse(id={self.id}, dlq_id='{self.dlq_id}')>"
