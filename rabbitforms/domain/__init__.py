"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from rabbitforms.domain.entities import (
    BusinessEntity,
    FormEntity,
    SubmissionEntity,
    UserEntity,
)
from rabbitforms.domain.enums import SubmissionStatus, UserRole
from rabbitforms.domain.exceptions import (
    AuthorizationException,
    DuplicateSlugException,
    DuplicateSlugInBusinessException,
    EmptySchemaException,
    InvalidRoleBusinessPairingException,
    InvalidTransitionException,
    RabbitFormsException,
    ResourceNotFoundException,
    TenantMismatchException,
    ValidationException,
)
from rabbitforms.domain.value_objects import (
    BusinessSlug,
    EmailAddress,
    EncryptionKey,
    FormSlug,
    JsonValue,
)

__all__ = [
    # Entities
    "BusinessEntity",
    "FormEntity",
    "SubmissionEntity",
    "UserEntity",
    # Enums
    "SubmissionStatus",
    "UserRole",
    # Exceptions
    "AuthorizationException",
    "DuplicateSlugException",
    "DuplicateSlugInBusinessException",
    "EmptySchemaException",
    "InvalidRoleBusinessPairingException",
    "InvalidTransitionException",
    "RabbitFormsException",
    "ResourceNotFoundException",
    "TenantMismatchException",
    "ValidationException",
    # Value objects
    "BusinessSlug",
    "EmailAddress",
    "EncryptionKey",
    "FormSlug",
    "JsonValue",
]
