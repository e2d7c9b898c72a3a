"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from rabbitforms.domain.entities.business import BusinessEntity
from rabbitforms.domain.entities.form import (
    FormEntity,
    schema_has_fields,
)
from rabbitforms.domain.entities.submission import SubmissionEntity
from rabbitforms.domain.entities.user import UserEntity, check_role_business_pairing

__all__ = [
    "BusinessEntity",
    "FormEntity",
    "SubmissionEntity",
    "UserEntity",
    "check_role_business_pairing",
    "schema_has_fields",
]
