"""
HealthTrack Backend — Questionnaire Schemas
============================================

Every field of a submitted entry is optional at the schema level: entries
missing a section, question or response are dropped by the service rather
than failing the whole batch. An explicit `"response": null` counts as
present (stored as "null"); only an omitted response is missing, which the
service tells apart through `model_fields_set`.

section is capped at the VARCHAR(255) column, so an over-long section
rejects the whole submission with a 400.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field


class QuestionnaireEntry(BaseModel):
    section: Optional[str] = Field(default=None, max_length=255)
    question: Optional[str] = Field(default=None)
    # Scalar answers (scores, yes/no) are stored as text
    response: Optional[Union[str, bool, int, float]] = Field(default=None)


class QuestionnaireSubmission(BaseModel):
    responses: Optional[List[QuestionnaireEntry]] = Field(
        default=None,
        description="Question/answer pairs belonging to one batch",
    )


class SubmissionResponse(BaseModel):
    message: str = Field(default="Responses saved successfully!")
    dlq_id: str = Field(serialization_alias="dlqId", description="Generated batch identifier")


class QuestionnaireAnswer(BaseModel):
    section: str
    question: str
    response: str

    model_config = {"from_attributes": True}


class BatchResponse(BaseModel):
    dlq_id: str = Field(serialization_alias="dlqId")
    responses: List[QuestionnaireAnswer] = Field(description="Answers in submission order")
