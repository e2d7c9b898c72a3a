"""User application service: provisioning, profile updates, role changes, activation."""

from __future__ import annotations

import logging

from rabbitforms.application.dtos.user import UserResult
from rabbitforms.application.interfaces.repositories import (
    IBusinessRepository,
    IUserRepository,
)
from rabbitforms.domain.entities.user import UserEntity, check_role_business_pairing
from rabbitforms.domain.enums import UserRole
from rabbitforms.domain.exceptions import (
    AuthorizationException,
    DuplicateEmailException,
    ResourceNotFoundException,
    ValidationException,
)
from rabbitforms.domain.value_objects.core import EmailAddress

logger = logging.getLogger(__name__)


def _email(value: str) -> str:
    try:
        return EmailAddress(value).value
    except ValueError as e:
        raise ValidationException(str(e), field="email") from e


class UserService:
    """User lifecycle. Roles change only through change_role (super admin, never self)."""

    def __init__(
        self,
        user_repo: IUserRepository,
        business_repo: IBusinessRepository,
        *,
        allow_super_admin_business: bool = True,
    ) -> None:
        self.user_repo = user_repo
        self.business_repo = business_repo
        self.allow_super_admin_business = allow_super_admin_business

    async def _check_pairing(self, role: UserRole, business_id: str | None) -> None:
        business_is_active: bool | None = None
        if business_id is not None:
            business = await self.business_repo.get_by_id(business_id)
            business_is_active = business.is_active if business else None
        check_role_business_pairing(
            role,
            business_id,
            business_is_active,
            allow_super_admin_business=self.allow_super_admin_business,
        )

    async def create_user(
        self,
        email: str,
        role: UserRole,
        business_id: str | None = None,
        full_name: str | None = None,
        user_id: str | None = None,
    ) -> UserResult:
        """Create a user record for an identity provisioned by the auth flow.

        Raises:
            InvalidRoleBusinessPairingException: If role and business do not fit.
            DuplicateEmailException: If the email is already registered.
        """
        normalized = _email(email)
        await self._check_pairing(role, business_id)
        if await self.user_repo.get_by_email(normalized):
            raise DuplicateEmailException(normalized)
        created = await self.user_repo.create_user(
            email=normalized,
            role=role,
            business_id=business_id,
            full_name=full_name,
            user_id=user_id,
        )
        logger.info(
            "Created user %s role=%s business=%s", created.id, role.value, business_id
        )
        return created

    async def get_user(self, user_id: str) -> UserResult:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def list_users(
        self, business_id: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        return await self.user_repo.list_users(business_id=business_id, skip=skip, limit=limit)

    async def update_profile(
        self,
        user_id: str,
        email: str | None = None,
        full_name: str | None = None,
    ) -> UserResult:
        """Update email and/or full name. Role and business are not touched here."""
        if email is None and full_name is None:
            raise ValidationException("At least one of email or full_name is required")
        current = await self.get_user(user_id)
        changes: dict[str, str | None] = {}
        if email is not None:
            normalized = _email(email)
            if normalized != current.email:
                existing = await self.user_repo.get_by_email(normalized)
                if existing and existing.id != user_id:
                    raise DuplicateEmailException(normalized)
                changes["email"] = normalized
        if full_name is not None:
            changes["full_name"] = full_name.strip() or None
        if not changes:
            return current
        updated = await self.user_repo.update_profile(user_id, changes)
        if not updated:
            raise ResourceNotFoundException("user", user_id)
        return updated

    async def change_role(
        self,
        actor: UserResult,
        user_id: str,
        role: UserRole,
        business_id: str | None = None,
    ) -> UserResult:
        """Change a user's role (and business affiliation, which must fit the new role).

        Raises:
            AuthorizationException: If actor is not an active super admin or targets themself.
            InvalidRoleBusinessPairingException: If role and business do not fit.
        """
        actor_entity = UserEntity(
            id=actor.id,
            email=actor.email,
            role=actor.role,
            business_id=actor.business_id,
            is_active=actor.is_active,
        )
        if not actor_entity.can_change_role_of(user_id):
            logger.warning("Denied role change of user %s by %s", user_id, actor.id)
            raise AuthorizationException(resource="user", action="change_role")
        await self.get_user(user_id)
        await self._check_pairing(role, business_id)
        updated = await self.user_repo.set_role(user_id, role, business_id)
        if not updated:
            raise ResourceNotFoundException("user", user_id)
        logger.info(
            "User %s role changed to %s by %s", user_id, role.value, actor.id
        )
        return updated

    async def deactivate_user(self, user_id: str) -> UserResult:
        updated = await self.user_repo.set_active(user_id, False)
        if not updated:
            raise ResourceNotFoundException("user", user_id)
        logger.info("Deactivated user %s", user_id)
        return updated

    async def activate_user(self, user_id: str) -> UserResult:
        updated = await self.user_repo.set_active(user_id, True)
        if not updated:
            raise ResourceNotFoundException("user", user_id)
        logger.info("Activated user %s", user_id)
        return updated
