"""Form domain entity.

Holds the publish lifecycle rules. The schema document is produced by the
builder and stays opaque here apart from the "has at least one field" check.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from rabbitforms.domain.exceptions import EmptySchemaException, ValidationException


def schema_has_fields(schema: Any) -> bool:
    """Return whether a form schema document declares at least one field.

    A schema is either a mapping with a ``fields`` list or a bare list of
    fields. Anything else counts as empty.
    """
    if isinstance(schema, dict):
        fields = schema.get("fields")
        return isinstance(fields, list) and len(fields) > 0
    if isinstance(schema, list):
        return len(schema) > 0
    return False


@dataclass
class FormEntity:
    """Domain entity for a form.

    Created as a draft. Publishing requires a non-empty schema and stamps
    published_at exactly once; unpublishing keeps that history.
    """

    id: str
    business_id: str
    schema: Any
    is_published: bool = False
    is_active: bool = True
    published_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("Form ID is required", field="id")
        if not self.business_id:
            raise ValidationException("Form must belong to a business", field="business_id")

    def publish(self, now: datetime) -> bool:
        """Publish the form. Idempotent when already published.

        Args:
            now: Timestamp used for published_at on the first publish.

        Returns:
            True if state changed, False if the form was already published.

        Raises:
            EmptySchemaException: If the schema has no fields.
        """
        if not schema_has_fields(self.schema):
            raise EmptySchemaException(self.id)
        if self.is_published:
            return False
        self.is_published = True
        if self.published_at is None:
            self.published_at = now
        return True

    def unpublish(self) -> bool:
        """Take the form offline. published_at is preserved. Returns True if state changed."""
        if not self.is_published:
            return False
        self.is_published = False
        return True

    def replace_schema(self, schema: Any) -> None:
        """Swap in a new schema; a published form must keep at least one field.

        Raises:
            EmptySchemaException: If the form is published and schema is empty.
        """
        if self.is_published and not schema_has_fields(schema):
            raise EmptySchemaException(self.id)
        self.schema = schema

    def accepts_public_submissions(self) -> bool:
        """Return whether the public capture surface should accept answers."""
        return self.is_published and self.is_active
