"""Submission application service: capture, duplicate flagging, status lifecycle."""

from __future__ import annotations

import logging
from typing import Any

from rabbitforms.application.dtos.submission import SubmissionResult, SubmissionToPersist
from rabbitforms.application.interfaces.repositories import (
    IFormRepository,
    ISubmissionRepository,
)
from rabbitforms.application.services.duplicate_key_service import DuplicateKeyService
from rabbitforms.domain.entities.submission import SubmissionEntity
from rabbitforms.domain.enums import SubmissionStatus
from rabbitforms.domain.exceptions import ResourceNotFoundException
from rabbitforms.domain.value_objects.json_document import document_or_empty
from rabbitforms.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class SubmissionService:
    """Writes submissions with business_id taken from the form, never from the caller."""

    def __init__(
        self,
        submission_repo: ISubmissionRepository,
        form_repo: IFormRepository,
        duplicate_key_service: DuplicateKeyService | None = None,
    ) -> None:
        self.submission_repo = submission_repo
        self.form_repo = form_repo
        self.duplicate_key_service = duplicate_key_service or DuplicateKeyService()

    async def create_submission(
        self,
        form_id: str,
        data: Any,
        metadata: Any = None,
        *,
        status: SubmissionStatus = SubmissionStatus.COMPLETED,
        duplicate_check_key: str | None = None,
        signature_url: str | None = None,
        business_id: str | None = None,
    ) -> SubmissionResult:
        """Record a submission against a form.

        The form row is locked for the rest of the transaction so the
        duplicate lookup and the insert are serialized per form.

        Args:
            form_id: Target form.
            data: Answers document.
            metadata: Capture metadata (user agent, referrer, ...).
            status: Initial status, draft for partial saves.
            duplicate_check_key: Precomputed fingerprint; computed from the
                form's duplicate_check_fields setting when omitted.
            signature_url: Optional signature image reference.
            business_id: Optional expected business; must match the form's.

        Raises:
            ValidationException: If status is archived.
            ResourceNotFoundException: If the form does not exist.
            TenantMismatchException: If business_id differs from the form's.
        """
        SubmissionEntity.check_initial_status(status)
        form = await self.form_repo.get_by_id_for_update(form_id)
        if not form:
            raise ResourceNotFoundException("form", form_id)
        resolved_business_id = SubmissionEntity.resolve_business_id(
            form.id, form.business_id, business_id
        )
        answers = document_or_empty(data, "data")
        meta = document_or_empty(metadata, "metadata")

        key = duplicate_check_key
        if key is None:
            key = self.duplicate_key_service.compute_key(
                form.id,
                answers,
                self.duplicate_key_service.fields_from_settings(form.settings),
            )
        is_duplicate = False
        if key is not None:
            is_duplicate = await self.submission_repo.duplicate_key_exists(form.id, key)

        created = await self.submission_repo.create_submission(
            SubmissionToPersist(
                form_id=form.id,
                business_id=resolved_business_id,
                data=answers,
                metadata=meta,
                status=status,
                submitted_at=utc_now(),
                is_duplicate=is_duplicate,
                duplicate_check_key=key,
                signature_url=signature_url,
            )
        )
        if is_duplicate:
            logger.warning(
                "Submission %s on form %s flagged as duplicate", created.id, form.id
            )
        logger.info(
            "Created submission %s (form=%s status=%s)", created.id, form.id, status.value
        )
        return created

    async def get_submission(self, submission_id: str) -> SubmissionResult:
        submission = await self.submission_repo.get_by_id(submission_id)
        if not submission:
            raise ResourceNotFoundException("submission", submission_id)
        return submission

    async def list_submissions(
        self,
        business_id: str,
        form_id: str | None = None,
        status: SubmissionStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[SubmissionResult]:
        return await self.submission_repo.list_submissions(
            business_id, form_id=form_id, status=status, skip=skip, limit=limit
        )

    async def transition_submission_status(
        self, submission_id: str, requested: SubmissionStatus
    ) -> SubmissionResult:
        """Move a submission along draft -> completed -> archived.

        Finalizing a draft re-stamps submitted_at.

        Raises:
            InvalidTransitionException: If the transition is not allowed.
        """
        current = await self.get_submission(submission_id)
        entity = SubmissionEntity(
            id=current.id,
            form_id=current.form_id,
            business_id=current.business_id,
            status=current.status,
        )
        if not entity.can_transition(current.status, requested):
            logger.warning(
                "Rejected transition of submission %s: %s -> %s",
                submission_id,
                current.status.value,
                requested.value,
            )
        entity.transition_to(requested)
        submitted_at = utc_now() if requested == SubmissionStatus.COMPLETED else None
        updated = await self.submission_repo.update_status(
            submission_id, requested, submitted_at=submitted_at
        )
        if not updated:
            raise ResourceNotFoundException("submission", submission_id)
        logger.info(
            "Submission %s moved %s -> %s",
            submission_id,
            current.status.value,
            requested.value,
        )
        return updated
