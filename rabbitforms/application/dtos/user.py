"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from rabbitforms.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.)."""

    id: str
    email: str
    full_name: str | None
    role: UserRole
    business_id: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN
