"""User repository. Interface methods return application DTOs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitforms.application.dtos.user import UserResult
from rabbitforms.domain.enums import UserRole
from rabbitforms.domain.exceptions import DuplicateEmailException
from rabbitforms.infrastructure.persistence.models.user import User
from rabbitforms.infrastructure.persistence.repositories.base import (
    BaseRepository,
    is_unique_violation,
)
from rabbitforms.shared.utils.datetime import ensure_utc


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        email=u.email,
        full_name=u.full_name,
        role=UserRole(u.role),
        business_id=u.business_id,
        is_active=u.is_active,
        created_at=ensure_utc(u.created_at),
        updated_at=ensure_utc(u.updated_at),
    )


def _is_email_conflict(e: IntegrityError) -> bool:
    return is_unique_violation(e, "uq_users_email", "users.email")


class UserRepository(BaseRepository[User]):
    """User repository. create_user, update_profile, set_role, activate/deactivate."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await self.get_entity(user_id)
        return _user_to_result(user) if user else None

    async def get_by_email(self, email: str) -> UserResult | None:
        result = await self.db.execute(
            select(User).where(User.email == email.strip().lower())
        )
        user = result.scalar_one_or_none()
        return _user_to_result(user) if user else None

    async def list_users(
        self, business_id: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        stmt = select(User)
        if business_id is not None:
            stmt = stmt.where(User.business_id == business_id)
        stmt = stmt.order_by(User.created_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [_user_to_result(u) for u in result.scalars().all()]

    async def create_user(
        self,
        email: str,
        role: UserRole,
        business_id: str | None,
        full_name: str | None,
        user_id: str | None = None,
    ) -> UserResult:
        """Create user; id defaults to a CUID unless the auth flow supplies one.

        Raises DuplicateEmailException on unique constraint violation.
        """
        user = User(
            email=email.strip().lower(),
            role=role.value,
            business_id=business_id,
            full_name=full_name,
            is_active=True,
        )
        if user_id is not None:
            user.id = user_id
        try:
            created = await self.create(user)
        except IntegrityError as e:
            if not _is_email_conflict(e):
                raise
            raise DuplicateEmailException(user.email) from e
        return _user_to_result(created)

    async def update_profile(
        self, user_id: str, changes: Mapping[str, Any]
    ) -> UserResult | None:
        """Apply email/full_name changes. Role and business are not accepted here."""
        if set(changes) - {"email", "full_name"}:
            raise ValueError("update_profile accepts only email and full_name")
        user = await self.get_entity(user_id)
        if not user:
            return None
        try:
            updated = await self.apply_changes(user, changes)
        except IntegrityError as e:
            if not _is_email_conflict(e):
                raise
            raise DuplicateEmailException(str(changes.get("email", user.email))) from e
        return _user_to_result(updated)

    async def set_role(
        self, user_id: str, role: UserRole, business_id: str | None
    ) -> UserResult | None:
        user = await self.get_entity(user_id)
        if not user:
            return None
        updated = await self.apply_changes(
            user, {"role": role.value, "business_id": business_id}
        )
        return _user_to_result(updated)

    async def set_active(self, user_id: str, is_active: bool) -> UserResult | None:
        user = await self.get_entity(user_id)
        if not user:
            return None
        updated = await self.apply_changes(user, {"is_active": is_active})
        return _user_to_result(updated)
