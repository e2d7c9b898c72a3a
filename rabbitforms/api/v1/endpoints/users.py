"""User API: provisioning, profile, role changes, activation."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from rabbitforms.api.v1.dependencies import (
    get_authorization_service,
    get_current_user,
    get_current_user_for_write,
    get_user_service,
    get_user_service_for_write,
)
from rabbitforms.application.dtos.user import UserResult
from rabbitforms.application.services.authorization_service import AuthorizationService
from rabbitforms.application.services.user_service import UserService
from rabbitforms.domain.exceptions import AuthorizationException
from rabbitforms.schemas.user import (
    UserCreateRequest,
    UserProfileUpdate,
    UserResponse,
    UserRoleUpdate,
)

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    body: UserCreateRequest,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    user_svc: Annotated[UserService, Depends(get_user_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Provision a user record. Super admin only."""
    authz.require_super_admin(actor, "user", "create")
    result = await user_svc.create_user(
        email=body.email,
        role=body.role,
        business_id=body.business_id,
        full_name=body.full_name,
        user_id=body.id,
    )
    return UserResponse.model_validate(result)


@router.get("", response_model=list[UserResponse])
async def list_users(
    actor: Annotated[UserResult, Depends(get_current_user)],
    user_svc: Annotated[UserService, Depends(get_user_service)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
    business_id: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List users; business admins are limited to their own business."""
    if not actor.is_super_admin:
        business_id = business_id or actor.business_id
        authz.require(actor, business_id, "user", "list")
    results = await user_svc.list_users(business_id=business_id, skip=skip, limit=limit)
    return [UserResponse.model_validate(u) for u in results]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    actor: Annotated[UserResult, Depends(get_current_user)],
    user_svc: Annotated[UserService, Depends(get_user_service)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    target = await user_svc.get_user(user_id)
    if target.id != actor.id:
        authz.require(actor, target.business_id, "user", "read")
    return UserResponse.model_validate(target)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_profile(
    user_id: str,
    body: UserProfileUpdate,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    user_svc: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Update own profile (super admins may update anyone's). Never changes role."""
    if user_id != actor.id and not actor.is_super_admin:
        raise AuthorizationException(resource="user", action="update")
    result = await user_svc.update_profile(
        user_id, email=body.email, full_name=body.full_name
    )
    return UserResponse.model_validate(result)


@router.put("/{user_id}/role", response_model=UserResponse)
async def change_role(
    user_id: str,
    body: UserRoleUpdate,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    user_svc: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Change role and business affiliation. Super admin only, never on own account."""
    result = await user_svc.change_role(actor, user_id, body.role, body.business_id)
    return UserResponse.model_validate(result)


@router.post("/{user_id}/deactivate", response_model=UserResponse)
async def deactivate_user(
    user_id: str,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    user_svc: Annotated[UserService, Depends(get_user_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    authz.require_super_admin(actor, "user", "deactivate")
    return UserResponse.model_validate(await user_svc.deactivate_user(user_id))


@router.post("/{user_id}/activate", response_model=UserResponse)
async def activate_user(
    user_id: str,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    user_svc: Annotated[UserService, Depends(get_user_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    authz.require_super_admin(actor, "user", "activate")
    return UserResponse.model_validate(await user_svc.activate_user(user_id))
