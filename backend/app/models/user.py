"""
HealthTrack Backend — User SQLAlchemy Model
============================================

What:  ORM model for the `users` table (the credential store).
Who:   Written by AuthService.register; read by login and by the record and
       questionnaire services to resolve the display name used in IDs.

Table Design Rationale:
    - Integer primary key: the token carries this id, so it stays small
    - email: unique index — the database is the final arbiter of duplicates,
      even when two registrations race past the pre-insert check
    - password_hash: bcrypt output (salt embedded), never the raw password
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class User(Base):
    """
    A registered account.

    Lifecycle:
        Created on registration; never updated or deleted by this service.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name; its initials seed report and DLQ identifiers",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Login identifier, unique across users",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash with embedded salt",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
