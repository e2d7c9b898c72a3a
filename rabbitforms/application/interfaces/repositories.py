"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
Write methods translate storage unique-constraint violations into the
matching domain exception instead of leaking IntegrityError.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from rabbitforms.domain.enums import SubmissionStatus, UserRole

if TYPE_CHECKING:
    from rabbitforms.application.dtos.business import BusinessResult
    from rabbitforms.application.dtos.form import FormCreate, FormResult
    from rabbitforms.application.dtos.submission import (
        SubmissionResult,
        SubmissionToPersist,
    )
    from rabbitforms.application.dtos.user import UserResult
    from rabbitforms.domain.value_objects.json_document import JsonValue


# Business repository interface
class IBusinessRepository(Protocol):
    """Protocol for business repository (DIP)."""

    async def get_by_id(self, business_id: str) -> BusinessResult | None:
        """Return business by ID."""

    async def get_by_slug(self, slug: str) -> BusinessResult | None:
        """Return business by its globally unique slug."""

    async def list_businesses(
        self, skip: int = 0, limit: int = 100, *, active_only: bool = False
    ) -> list[BusinessResult]:
        """Return businesses ordered by creation (newest first)."""

    async def create_business(
        self,
        name: str,
        slug: str,
        logo_url: str | None,
        custom_domain: str | None,
        theme: JsonValue,
    ) -> BusinessResult:
        """Insert a business. Raises DuplicateSlugException on slug conflict."""

    async def update_business(
        self, business_id: str, changes: Mapping[str, Any]
    ) -> BusinessResult | None:
        """Apply column changes; None when not found. Raises DuplicateSlugException."""

    async def set_active(self, business_id: str, is_active: bool) -> BusinessResult | None:
        """Flip is_active; None when not found."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def get_by_email(self, email: str) -> UserResult | None:
        """Return user by (normalized) email."""

    async def list_users(
        self, business_id: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        """Return users, optionally only those of one business."""

    async def create_user(
        self,
        email: str,
        role: UserRole,
        business_id: str | None,
        full_name: str | None,
        user_id: str | None = None,
    ) -> UserResult:
        """Insert a user. Raises DuplicateEmailException on email conflict."""

    async def update_profile(
        self, user_id: str, changes: Mapping[str, Any]
    ) -> UserResult | None:
        """Apply email/full_name changes; None when not found. Raises DuplicateEmailException."""

    async def set_role(
        self, user_id: str, role: UserRole, business_id: str | None
    ) -> UserResult | None:
        """Set role and business together; None when not found."""

    async def set_active(self, user_id: str, is_active: bool) -> UserResult | None:
        """Flip is_active; None when not found."""


# Form repository interface
class IFormRepository(Protocol):
    """Protocol for form repository (DIP)."""

    async def get_by_id(self, form_id: str) -> FormResult | None:
        """Return form by ID."""

    async def get_by_id_for_update(self, form_id: str) -> FormResult | None:
        """Return form by ID, locking the row until the transaction ends."""

    async def get_by_slug(self, business_id: str, slug: str) -> FormResult | None:
        """Return form by (business_id, slug)."""

    async def list_by_business(
        self,
        business_id: str,
        skip: int = 0,
        limit: int = 100,
        *,
        published_only: bool = False,
    ) -> list[FormResult]:
        """Return forms for business (newest first)."""

    async def has_published_forms(self, business_id: str) -> bool:
        """Return whether any form of the business was ever published."""

    async def create_form(self, data: FormCreate) -> FormResult:
        """Insert a draft form. Raises DuplicateSlugInBusinessException."""

    async def update_form(
        self, form_id: str, changes: Mapping[str, Any]
    ) -> FormResult | None:
        """Apply column changes; None when not found. Raises DuplicateSlugInBusinessException."""


# Submission repository interface
class ISubmissionRepository(Protocol):
    """Protocol for submission repository (DIP)."""

    async def get_by_id(self, submission_id: str) -> SubmissionResult | None:
        """Return submission by ID."""

    async def list_submissions(
        self,
        business_id: str,
        form_id: str | None = None,
        status: SubmissionStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[SubmissionResult]:
        """Return submissions for business (newest first), optionally filtered."""

    async def duplicate_key_exists(self, form_id: str, duplicate_check_key: str) -> bool:
        """Return whether a submission for form already carries this key."""

    async def create_submission(self, data: SubmissionToPersist) -> SubmissionResult:
        """Insert a submission."""

    async def update_status(
        self,
        submission_id: str,
        status: SubmissionStatus,
        submitted_at: datetime | None = None,
    ) -> SubmissionResult | None:
        """Set status (and submitted_at when given); None when not found."""
