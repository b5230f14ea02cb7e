"""
HealthTrack Backend — Health Record Schemas
============================================
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class RecordPayload(BaseModel):
    """
    Body of POST /record and PUT /record/{report_id}.

    dob is accepted as a string (ISO 8601 date or datetime) and parsed by
    RecordService, which owns the "not in the future" rule. condition and
    gender are capped at their health_records column widths.
    """
    condition: Optional[str] = Field(default=None, max_length=255, description="Diagnosed condition")
    dob: Optional[str] = Field(default=None, description="Date of birth (YYYY-MM-DD)")
    gender: Optional[str] = Field(default=None, max_length=50)


class RecordCreatedResponse(BaseModel):
    message: str = Field(default="Health record created")
    report_id: str = Field(serialization_alias="reportId", description="Generated short code")


class RecordResponse(BaseModel):
    """Public view of a record joined with its owner's name."""
    name: str = Field(description="Owner's display name")
    condition: str
    dob: date
    gender: str
    report_id: str

    model_config = {"from_attributes": True}
