"""Persistence repositories. Re-exports for dependency injection."""

from rabbitforms.infrastructure.persistence.repositories.base import BaseRepository
from rabbitforms.infrastructure.persistence.repositories.business_repo import (
    BusinessRepository,
)
from rabbitforms.infrastructure.persistence.repositories.form_repo import FormRepository
from rabbitforms.infrastructure.persistence.repositories.submission_repo import (
    SubmissionRepository,
)
from rabbitforms.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "BusinessRepository",
    "FormRepository",
    "SubmissionRepository",
    "UserRepository",
]
