"""Business ORM model. Root entity of the tenant hierarchy (no business_id)."""

from typing import Any

from sqlalchemy import JSON, Boolean, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from rabbitforms.infrastructure.persistence.database import Base
from rabbitforms.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Business(CuidMixin, TimestampMixin, Base):
    """Business (tenant root). Table: businesses. Slug globally unique; never hard-deleted."""

    __tablename__ = "businesses"

    name: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String(63), nullable=False)
    logo_url: Mapped[str | None] = mapped_column(String, nullable=True)
    custom_domain: Mapped[str | None] = mapped_column(String, nullable=True)
    theme: Mapped[Any] = mapped_column(JSON, nullable=False, default=dict)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (UniqueConstraint("slug", name="uq_businesses_slug"),)
