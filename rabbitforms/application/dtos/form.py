"""DTOs for form use cases (no dependency on ORM or presentation schemas)."""

from dataclasses import dataclass
from datetime import datetime

from rabbitforms.domain.value_objects.json_document import JsonValue


@dataclass(frozen=True)
class FormCreate:
    """Input for creating a form (write-model). Documents are already validated."""

    business_id: str
    title: str
    slug: str
    description: str | None
    schema: JsonValue
    settings: JsonValue
    conditional_logic: JsonValue
    created_by: str | None = None


@dataclass(frozen=True)
class FormResult:
    """Form read-model (result of get_by_id, create_form, publish, etc.)."""

    id: str
    business_id: str
    title: str
    description: str | None
    slug: str
    schema: JsonValue
    settings: JsonValue
    conditional_logic: JsonValue
    is_active: bool
    is_published: bool
    created_by: str | None
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None
