"""Business API: thin routes delegating to BusinessService."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from rabbitforms.api.v1.dependencies import (
    get_authorization_service,
    get_business_service,
    get_business_service_for_write,
    get_current_user,
    get_current_user_for_write,
)
from rabbitforms.application.dtos.user import UserResult
from rabbitforms.application.services.authorization_service import AuthorizationService
from rabbitforms.application.services.business_service import BusinessService
from rabbitforms.schemas.business import (
    BusinessCreateRequest,
    BusinessResponse,
    BusinessUpdate,
)

router = APIRouter()


@router.post("", response_model=BusinessResponse, status_code=201)
async def create_business(
    body: BusinessCreateRequest,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    business_svc: Annotated[BusinessService, Depends(get_business_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Create a business. Super admin only."""
    authz.require_super_admin(actor, "business", "create")
    result = await business_svc.create_business(
        name=body.name,
        slug=body.slug,
        logo_url=body.logo_url,
        custom_domain=body.custom_domain,
        theme=body.theme,
    )
    return BusinessResponse.model_validate(result)


@router.get("", response_model=list[BusinessResponse])
async def list_businesses(
    actor: Annotated[UserResult, Depends(get_current_user)],
    business_svc: Annotated[BusinessService, Depends(get_business_service)],
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    active_only: bool = False,
):
    """Super admins see every business; business admins only their own."""
    if not actor.is_super_admin:
        business = await business_svc.get_business(actor.business_id or "")
        return [BusinessResponse.model_validate(business)]
    results = await business_svc.list_businesses(
        skip=skip, limit=limit, active_only=active_only
    )
    return [BusinessResponse.model_validate(b) for b in results]


@router.get("/{business_id}", response_model=BusinessResponse)
async def get_business(
    business_id: str,
    actor: Annotated[UserResult, Depends(get_current_user)],
    business_svc: Annotated[BusinessService, Depends(get_business_service)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    authz.require(actor, business_id, "business", "read")
    return BusinessResponse.model_validate(await business_svc.get_business(business_id))


@router.patch("/{business_id}", response_model=BusinessResponse)
async def update_business(
    business_id: str,
    body: BusinessUpdate,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    business_svc: Annotated[BusinessService, Depends(get_business_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Partial update; slug is frozen once a form of the business was published."""
    authz.require(actor, business_id, "business", "update")
    result = await business_svc.update_business(
        business_id, body.model_dump(exclude_unset=True)
    )
    return BusinessResponse.model_validate(result)


@router.post("/{business_id}/deactivate", response_model=BusinessResponse)
async def deactivate_business(
    business_id: str,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    business_svc: Annotated[BusinessService, Depends(get_business_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    authz.require_super_admin(actor, "business", "deactivate")
    return BusinessResponse.model_validate(
        await business_svc.deactivate_business(business_id)
    )


@router.post("/{business_id}/activate", response_model=BusinessResponse)
async def activate_business(
    business_id: str,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    business_svc: Annotated[BusinessService, Depends(get_business_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    authz.require_super_admin(actor, "business", "activate")
    return BusinessResponse.model_validate(
        await business_svc.activate_business(business_id)
    )
