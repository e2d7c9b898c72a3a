"""Submission ORM model. business_id is denormalized from the form for tenant scoping."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from rabbitforms.domain.enums import SubmissionStatus
from rabbitforms.infrastructure.persistence.database import Base
from rabbitforms.infrastructure.persistence.models.mixins import (
    BusinessMixin,
    CreatedAtMixin,
    CuidMixin,
)


class Submission(CuidMixin, BusinessMixin, CreatedAtMixin, Base):
    """Submission. Table: submissions. Never hard-deleted; archived instead."""

    __tablename__ = "submissions"

    form_id: Mapped[str] = mapped_column(
        String, ForeignKey("forms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    data: Mapped[Any] = mapped_column(JSON, nullable=False, default=dict)
    # "metadata" is reserved on declarative classes
    metadata_: Mapped[Any] = mapped_column("metadata", JSON, nullable=False, default=dict)
    signature_url: Mapped[str | None] = mapped_column(String, nullable=True)
    is_duplicate: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    duplicate_check_key: Mapped[str | None] = mapped_column(String(128), nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=SubmissionStatus.COMPLETED.value
    )
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    __table_args__ = (
        Index("ix_submissions_form_duplicate_key", "form_id", "duplicate_check_key"),
        Index("ix_submissions_business_submitted", "business_id", "submitted_at"),
        CheckConstraint(
            "status IN ({})".format(
                ", ".join(
                    "'{}'".format(v.replace("'", "''"))
                    for v in SubmissionStatus.values()
                )
            ),
            name="submissions_status_check",
        ),
    )
