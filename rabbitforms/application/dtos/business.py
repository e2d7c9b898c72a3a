"""DTOs for business use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from rabbitforms.domain.value_objects.json_document import JsonValue


@dataclass(frozen=True)
class BusinessResult:
    """Business read-model (result of get_by_id, get_by_slug, create_business, etc.)."""

    id: str
    name: str
    slug: str
    logo_url: str | None
    custom_domain: str | None
    theme: JsonValue
    is_active: bool
    created_at: datetime
    updated_at: datetime
