"""Persistence models: ORM entities and mixins."""

from rabbitforms.infrastructure.persistence.models.business import Business
from rabbitforms.infrastructure.persistence.models.form import Form
from rabbitforms.infrastructure.persistence.models.mixins import (
    BusinessMixin,
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
)
from rabbitforms.infrastructure.persistence.models.submission import Submission
from rabbitforms.infrastructure.persistence.models.user import User

__all__ = [
    "Business",
    "BusinessMixin",
    "CreatedAtMixin",
    "CuidMixin",
    "Form",
    "Submission",
    "TimestampMixin",
    "User",
]
