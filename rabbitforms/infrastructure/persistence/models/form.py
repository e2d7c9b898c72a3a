"""Form ORM model. Schema/settings/logic are opaque JSON documents from the builder."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from rabbitforms.infrastructure.persistence.database import Base
from rabbitforms.infrastructure.persistence.models.mixins import (
    BusinessMixin,
    CuidMixin,
    TimestampMixin,
)


class Form(CuidMixin, BusinessMixin, TimestampMixin, Base):
    """Form. Table: forms. Unique (business_id, slug); published_at set once on first publish."""

    __tablename__ = "forms"

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    slug: Mapped[str] = mapped_column(String(100), nullable=False)
    schema: Mapped[Any] = mapped_column(JSON, nullable=False, default=dict)
    settings: Mapped[Any] = mapped_column(JSON, nullable=False, default=dict)
    conditional_logic: Mapped[Any] = mapped_column(JSON, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    created_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("business_id", "slug", name="uq_forms_business_slug"),
        Index("ix_forms_business_published", "business_id", "is_published"),
    )
