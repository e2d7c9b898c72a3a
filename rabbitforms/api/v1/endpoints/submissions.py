"""Submission API: listing and status lifecycle for business admins."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from rabbitforms.api.v1.dependencies import (
    get_authorization_service,
    get_current_user,
    get_current_user_for_write,
    get_submission_service,
    get_submission_service_for_write,
)
from rabbitforms.application.dtos.user import UserResult
from rabbitforms.application.services.authorization_service import AuthorizationService
from rabbitforms.application.services.submission_service import SubmissionService
from rabbitforms.domain.enums import SubmissionStatus
from rabbitforms.domain.exceptions import ValidationException
from rabbitforms.schemas.submission import SubmissionResponse, SubmissionStatusUpdate

router = APIRouter()


@router.get("", response_model=list[SubmissionResponse])
async def list_submissions(
    actor: Annotated[UserResult, Depends(get_current_user)],
    submission_svc: Annotated[SubmissionService, Depends(get_submission_service)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
    business_id: str | None = None,
    form_id: str | None = None,
    status: SubmissionStatus | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    """List submissions of one business (defaults to the actor's own), newest first."""
    target = business_id or actor.business_id
    if not target:
        raise ValidationException("business_id query parameter is required", field="business_id")
    authz.require(actor, target, "submission", "list")
    results = await submission_svc.list_submissions(
        target, form_id=form_id, status=status, skip=skip, limit=limit
    )
    return [SubmissionResponse.model_validate(s) for s in results]


@router.get("/{submission_id}", response_model=SubmissionResponse)
async def get_submission(
    submission_id: str,
    actor: Annotated[UserResult, Depends(get_current_user)],
    submission_svc: Annotated[SubmissionService, Depends(get_submission_service)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    submission = await submission_svc.get_submission(submission_id)
    authz.require(actor, submission.business_id, "submission", "read")
    return SubmissionResponse.model_validate(submission)


@router.patch("/{submission_id}/status", response_model=SubmissionResponse)
async def transition_submission_status(
    submission_id: str,
    body: SubmissionStatusUpdate,
    actor: Annotated[UserResult, Depends(get_current_user_for_write)],
    submission_svc: Annotated[SubmissionService, Depends(get_submission_service_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Move along draft -> completed -> archived; 409 INVALID_TRANSITION otherwise."""
    submission = await submission_svc.get_submission(submission_id)
    authz.require(actor, submission.business_id, "submission", "update")
    result = await submission_svc.transition_submission_status(submission_id, body.status)
    return SubmissionResponse.model_validate(result)
