"""Form API: builder CRUD and publish lifecycle, scoped to the actor's business."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from rabbitforms.api.v1.dependencies import (
    get_authorization_service,
    get_current_user,
    get_current_user_for_write,
    get_form_service,
    get_form_service_for_write,
)
from rabbitforms.application.dtos.user import UserResult
from rabbitforms.application.services.authorization_service import AuthorizationService
from rabbitforms.application.services.form_service import FormService
from rabbitforms.domain.exceptions import ValidationException
from rabbitforms.schemas.form import FormCreateRequest, FormResponse, FormUpdate

router = APIRouter()


async def _authorized_form_id(
    form_id: str,
    actor: UserResult,
    form_svc: FormService,
    authz: AuthorizationService,
    action: str,
) -> str:
    form = await form_svc.get_form(form_id)
    authz.require(actor, form.business_id, "form", action)
    return form.id


@router.post("", response_model=FormResponse, status_code=201)
async def create_form(
    body: FormCreateRequest,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    form_svc: Annotated[FormService, Depends(get_form_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Create a draft form in the given business."""
    authz.require(actor, body.business_id, "form", "create")
    result = await form_svc.create_form(
        business_id=body.business_id,
        title=body.title,
        slug=body.slug,
        description=body.description,
        schema=body.schema_,
        settings=body.settings,
        conditional_logic=body.conditional_logic,
        created_by=actor.id,
    )
    return FormResponse.model_validate(result)


@router.get("", response_model=list[FormResponse])
async def list_forms(
    actor: Annotated[UserResult, Depends(get_current_user)],
    form_svc: Annotated[FormService, Depends(get_form_service)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
    business_id: str | None = None,
    published_only: bool = False,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List forms of one business (defaults to the actor's own business)."""
    target = business_id or actor.business_id
    if not target:
        raise ValidationException("business_id query parameter is required", field="business_id")
    authz.require(actor, target, "form", "list")
    results = await form_svc.list_forms(
        target, skip=skip, limit=limit, published_only=published_only
    )
    return [FormResponse.model_validate(f) for f in results]


@router.get("/{form_id}", response_model=FormResponse)
async def get_form(
    form_id: str,
    actor: Annotated[UserResult, Depends(get_current_user)],
    form_svc: Annotated[FormService, Depends(get_form_service)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    form = await form_svc.get_form(form_id)
    authz.require(actor, form.business_id, "form", "read")
    return FormResponse.model_validate(form)


@router.patch("/{form_id}", response_model=FormResponse)
async def update_form(
    form_id: str,
    body: FormUpdate,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    form_svc: Annotated[FormService, Depends(get_form_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Partial edit; applies live when the form is published."""
    await _authorized_form_id(form_id, actor, form_svc, authz, "update")
    return FormResponse.model_validate(
        await form_svc.update_form(form_id, body.changes())
    )


@router.post("/{form_id}/publish", response_model=FormResponse)
async def publish_form(
    form_id: str,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    form_svc: Annotated[FormService, Depends(get_form_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Publish; 422 EMPTY_SCHEMA when the schema has no fields."""
    await _authorized_form_id(form_id, actor, form_svc, authz, "publish")
    return FormResponse.model_validate(await form_svc.publish_form(form_id))


@router.post("/{form_id}/unpublish", response_model=FormResponse)
async def unpublish_form(
    form_id: str,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    form_svc: Annotated[FormService, Depends(get_form_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    await _authorized_form_id(form_id, actor, form_svc, authz, "unpublish")
    return FormResponse.model_validate(await form_svc.unpublish_form(form_id))


@router.post("/{form_id}/deactivate", response_model=FormResponse)
async def deactivate_form(
    form_id: str,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    form_svc: Annotated[FormService, Depends(get_form_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    await _authorized_form_id(form_id, actor, form_svc, authz, "deactivate")
    return FormResponse.model_validate(await form_svc.deactivate_form(form_id))


@router.post("/{form_id}/activate", response_model=FormResponse)
async def activate_form(
    form_id: str,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    form_svc: Annotated[FormService, Depends(get_form_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    await _authorized_form_id(form_id, actor, form_svc, authz, "activate")
    return FormResponse.model_validate(await form_svc.activate_form(form_id))
