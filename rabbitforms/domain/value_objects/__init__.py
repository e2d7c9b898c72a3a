"""Domain value objects and shared value types."""

from rabbitforms.domain.value_objects.core import (
    ENCRYPTION_KEY_HEX_LENGTH,
    BusinessSlug,
    EmailAddress,
    EncryptionKey,
    FormSlug,
)
from rabbitforms.domain.value_objects.json_document import (
    JsonValue,
    document_or_empty,
    validate_json_document,
)

__all__ = [
    "ENCRYPTION_KEY_HEX_LENGTH",
    "BusinessSlug",
    "EmailAddress",
    "EncryptionKey",
    "FormSlug",
    "JsonValue",
    "document_or_empty",
    "validate_json_document",
]
