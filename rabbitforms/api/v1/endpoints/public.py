"""Public capture API: unauthenticated form rendering and submission.

Only published, active forms of active businesses resolve; anything else is 404.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from rabbitforms.api.v1.dependencies import get_form_service, get_public_services
from rabbitforms.application.services.form_service import FormService
from rabbitforms.application.services.submission_service import SubmissionService
from rabbitforms.schemas.form import PublicFormResponse
from rabbitforms.schemas.submission import (
    PublicSubmissionRequest,
    PublicSubmissionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _capture_metadata(request: Request, supplied: object) -> object:
    """Merge request-derived capture details into client metadata (client keys win)."""
    if supplied is not None and not isinstance(supplied, dict):
        return supplied
    forwarded = request.headers.get("X-Forwarded-For")
    client_host = request.client.host if request.client else None
    captured = {
        "user_agent": request.headers.get("User-Agent"),
        "referrer": request.headers.get("Referer"),
        "ip_address": (forwarded.split(",")[0].strip() if forwarded else None) or client_host,
    }
    captured = {k: v for k, v in captured.items() if v is not None}
    return {**captured, **(supplied or {})}


@router.get("/{business_slug}/forms/{form_slug}", response_model=PublicFormResponse)
async def get_public_form(
    business_slug: str,
    form_slug: str,
    form_svc: Annotated[FormService, Depends(get_form_service)],
):
    form = await form_svc.get_public_form(business_slug, form_slug)
    return PublicFormResponse.model_validate(form)


@router.post(
    "/{business_slug}/forms/{form_slug}/submissions",
    response_model=PublicSubmissionResponse,
    status_code=201,
)
async def submit_public_form(
    business_slug: str,
    form_slug: str,
    body: PublicSubmissionRequest,
    request: Request,
    services: Annotated[tuple[FormService, SubmissionService], Depends(get_public_services)],
):
    """Record answers for a published form. Draft saves are allowed; archival is not."""
    form_svc, submission_svc = services
    form =await form_svc.get_public_form(business_slug, form_slug)
    result = await submission_svc.create_submission(
        form.id,
        body.data,
        _capture_metadata(request, body.metadata),
        status=body.status,
        duplicate_check_key=body.duplicate_check_key,
        signature_url=body.signature_url,
        business_id=form.business_id,
    )
    return PublicSubmissionResponse(
        id=result.id, status=result.status, submitted_at=result.submitted_at
    )
