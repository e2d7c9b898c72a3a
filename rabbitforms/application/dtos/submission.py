"""DTOs for submission use cases (no dependency on ORM or presentation schemas)."""

from dataclasses import dataclass
from datetime import datetime

from rabbitforms.domain.enums import SubmissionStatus
from rabbitforms.domain.value_objects.json_document import JsonValue


@dataclass(frozen=True)
class SubmissionToPersist:
    """Submission ready to insert: business resolved, duplicate flag computed."""

    form_id: str
    business_id: str
    data: JsonValue
    metadata: JsonValue
    status: SubmissionStatus
    submitted_at: datetime
    is_duplicate: bool
    duplicate_check_key: str | None
    signature_url: str | None = None


@dataclass(frozen=True)
class SubmissionResult:
    """Submission read-model."""

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
