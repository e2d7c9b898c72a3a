"""Submission domain entity: tenant consistency and status state machine."""

from dataclasses import dataclass
from typing import ClassVar

from rabbitforms.domain.enums import SubmissionStatus
from rabbitforms.domain.exceptions import (
    InvalidTransitionException,
    TenantMismatchException,
    ValidationException,
)


@dataclass
class SubmissionEntity:
    """Domain entity for a submission.

    business_id is denormalized from the form and must always match it.
    Status moves draft -> completed -> archived; archived is terminal.
    """

    id: str
    form_id: str
    business_id: str
    status: SubmissionStatus

    ALLOWED_TRANSITIONS: ClassVar[dict[SubmissionStatus, frozenset[SubmissionStatus]]] = {
        SubmissionStatus.DRAFT: frozenset({SubmissionStatus.COMPLETED}),
        SubmissionStatus.COMPLETED: frozenset({SubmissionStatus.ARCHIVED}),
        SubmissionStatus.ARCHIVED: frozenset(),
    }

    INITIAL_STATUSES: ClassVar[frozenset[SubmissionStatus]] = frozenset(
        {SubmissionStatus.DRAFT, SubmissionStatus.COMPLETED}
    )

    def __post_init__(self) -> None:
        if not self.form_id:
            raise ValidationException("Submission must reference a form", field="form_id")
        if not self.business_id:
            raise ValidationException(
                "Submission must reference a business", field="business_id"
            )

    @classmethod
    def can_transition(cls, current: SubmissionStatus, requested: SubmissionStatus) -> bool:
        return requested in cls.ALLOWED_TRANSITIONS[current]

    @classmethod
    def check_initial_status(cls, status: SubmissionStatus) -> None:
        """Raise unless a new submission may start in status.

        Archived is reachable only from completed, so it is never an initial status.

        Raises:
            ValidationException: If status is not draft or completed.
        """
        if status not in cls.INITIAL_STATUSES:
            raise ValidationException(
                f"Submissions cannot be created {status.value}", field="status"
            )

    def transition_to(self, requested: SubmissionStatus) -> None:
        """Move to requested status.

        Raises:
            InvalidTransitionException: If the transition is not allowed.
        """
        if not self.can_transition(self.status, requested):
            raise InvalidTransitionException(
                self.id, self.status.value, requested.value
            )
        self.status = requested

    @staticmethod
    def resolve_business_id(
        form_id: str, form_business_id: str, requested_business_id: str | None
    ) -> str:
        """Return the business_id to stamp on a new submission.

        Raises:
            TenantMismatchException: If the caller asked for a different business.
        """
        if requested_business_id is not None and requested_business_id != form_business_id:
            raise TenantMismatchException(form_id, form_business_id, requested_business_id)
        return form_business_id
