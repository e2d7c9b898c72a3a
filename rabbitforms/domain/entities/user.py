"""User domain entity and role/business pairing rule."""

from dataclasses import dataclass

from rabbitforms.domain.enums import UserRole
from rabbitforms.domain.exceptions import (
    InvalidRoleBusinessPairingException,
    ValidationException,
)


def check_role_business_pairing(
    role: UserRole,
    business_id: str | None,
    business_is_active: bool | None,
    *,
    allow_super_admin_business: bool,
) -> None:
    """Enforce which business a user of the given role may reference.

    Args:
        role: The user's role.
        business_id: Referenced business, if any.
        business_is_active: Active flag of that business; None when it does not exist.
        allow_super_admin_business: Deployment policy for super admins with a business.

    Raises:
        InvalidRoleBusinessPairingException: If the pairing is not allowed.
    """
    if role == UserRole.BUSINESS_ADMIN:
        if not business_id:
            raise InvalidRoleBusinessPairingException(
                role.value, business_id, "business_admin requires a business"
            )
        if business_is_active is None:
            raise InvalidRoleBusinessPairingException(
                role.value, business_id, "business does not exist"
            )
        if not business_is_active:
            raise InvalidRoleBusinessPairingException(
                role.value, business_id, "business is not active"
            )
        return
    if business_id is None:
        return
    if not allow_super_admin_business:
        raise InvalidRoleBusinessPairingException(
            role.value, business_id, "super_admin may not belong to a business"
        )
    if business_is_active is None:
        raise InvalidRoleBusinessPairingException(
            role.value, business_id, "business does not exist"
        )


@dataclass
class UserEntity:
    """Domain entity for a platform user."""

    id: str
    email: str
    role: UserRole
    business_id: str | None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationException("User ID is required", field="id")

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN

    def can_change_role_of(self, target_user_id: str) -> bool:
        """Return whether this user may change the role of target_user_id.

        Only active super admins may, and never for their own account.
        """
        return self.is_active and self.is_super_admin and target_user_id != self.id
