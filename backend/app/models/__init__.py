"""
HealthTrack Backend — ORM Models
=================================

Importing this package registers every table with Base.metadata, which
Alembic (--autogenerate) and the test suite (create_all) both rely on.
"""

from app.models.user import User
from app.models.health_record import HealthRecord
from app.models.questionnaire import QuestionnaireResponse

__all__ = ["User", "HealthRecord", "QuestionnaireResponse"]
