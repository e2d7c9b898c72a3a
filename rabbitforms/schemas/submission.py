"""Submission API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from rabbitforms.domain.enums import SubmissionStatus


class PublicSubmissionRequest(BaseModel):
    """Request body for POST /public/{business_slug}/forms/{form_slug}/submissions.

    status is draft for partial saves, completed (default) otherwise.
    """

    data: JsonValue = Field(default_factory=dict)
    metadata: JsonValue = None
    status: SubmissionStatus = SubmissionStatus.COMPLETED
    signature_url: str | None = None
    duplicate_check_key: str | None = Field(default=None, max_length=128)


class SubmissionStatusUpdate(BaseModel):
    """Request body for PATCH /submissions/{id}/status."""

    status: SubmissionStatus


class SubmissionResponse(BaseModel):
    """Submission in list/get responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    form_id: str
    business_id: str
    data: JsonValue
    metadata: JsonValue
    signature_url: str | None
    is_duplicate: bool
    duplicate_check_key: str | None
    status: SubmissionStatus
    submitted_at: datetime
    created_at: datetime


class PublicSubmissionResponse(BaseModel):
    """Acknowledgement returned to the public capture page."""

    id: str
    status: SubmissionStatus
    submitted_at: datetime
