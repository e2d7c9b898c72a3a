"""Submission repository. Returns application DTOs; no delete (archive instead)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitforms.application.dtos.submission import SubmissionResult, SubmissionToPersist
from rabbitforms.domain.enums import SubmissionStatus
from rabbitforms.infrastructure.persistence.models.submission import Submission
from rabbitforms.infrastructure.persistence.repositories.base import BaseRepository
from rabbitforms.shared.utils.datetime import ensure_utc


def _submission_to_result(s: Submission) -> SubmissionResult:
    """Map ORM Submission to application SubmissionResult."""
    return SubmissionResult(
        id=s.id,
        form_id=s.form_id,
        business_id=s.business_id,
        data=s.data,
        metadata=s.metadata_,
        signature_url=s.signature_url,
        is_duplicate=s.is_duplicate,
        duplicate_check_key=s.duplicate_check_key,
        status=SubmissionStatus(s.status),
        submitted_at=ensure_utc(s.submitted_at),
        created_at=ensure_utc(s.created_at),
    )


class SubmissionRepository(BaseRepository[Submission]):
    """Submission repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Submission)

    async def get_by_id(self, submission_id: str) -> SubmissionResult | None:
        submission = await self.get_entity(submission_id)
        return _submission_to_result(submission) if submission else None

    async def list_submissions(
        self,
        business_id: str,
        form_id: str | None = None,
        status: SubmissionStatus | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[SubmissionResult]:
        stmt = select(Submission).where(Submission.business_id == business_id)
        if form_id is not None:
            stmt = stmt.where(Submission.form_id == form_id)
        if status is not None:
            stmt = stmt.where(Submission.status == status.value)
        stmt = stmt.order_by(Submission.submitted_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [_submission_to_result(s) for s in result.scalars().all()]

    async def duplicate_key_exists(self, form_id: str, duplicate_check_key: str) -> bool:
        result = await self.db.execute(
            select(
                exists().where(
                    Submission.form_id == form_id,
                    Submission.duplicate_check_key == duplicate_check_key,
                )
            )
        )
        return bool(result.scalar())

    async def create_submission(self, data: SubmissionToPersist) -> SubmissionResult:
        submission = Submission(
            form_id=data.form_id,
            business_id=data.business_id,
            data=data.data,
            metadata_=data.metadata,
            signature_url=data.signature_url,
            is_duplicate=data.is_duplicate,
            duplicate_check_key=data.duplicate_check_key,
            status=data.status.value,
            submitted_at=data.submitted_at,
        )
        created = await self.create(submission)
        return _submission_to_result(created)

    async def update_status(
        self,
        submission_id: str,
        status: SubmissionStatus,
        submitted_at: datetime | None = None,
    ) -> SubmissionResult | None:
        submission = await self.get_entity(submission_id)
        if not submission:
            return None
        changes: dict[str, object] = {"status": status.value}
        if submitted_at is not None:
            changes["submitted_at"] = submitted_at
        updated = await self.apply_changes(submission, changes)
        return _submission_to_result(updated)
