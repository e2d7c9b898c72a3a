"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from rabbitforms.domain.enums import UserRole


class UserCreateRequest(BaseModel):
    """Request body for provisioning a user record.

    id is optional: the auth-provisioning flow passes the identity
    provider's user id so both records share it.
    """

    id: str | None = Field(default=None, min_length=1, max_length=128)
    email: EmailStr
    full_name: str | None = Field(default=None, max_length=255)
    role: UserRole
    business_id: str | None = None


class UserProfileUpdate(BaseModel):
    """Request body for PATCH /users/{id}. Role is changed only via PUT /users/{id}/role."""

    email: EmailStr | None = None
    full_name: str | None = Field(default=None, max_length=255)


class UserRoleUpdate(BaseModel):
    """Request body for PUT /users/{id}/role (super admin only, never on self)."""

    role: UserRole
    business_id: str | None = None


class UserResponse(BaseModel):
    """User response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: str | None
    role: UserRole
    business_id: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
