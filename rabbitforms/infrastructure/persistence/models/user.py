"""User ORM model (platform admin accounts)."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from rabbitforms.domain.enums import UserRole
from rabbitforms.infrastructure.persistence.database import Base
from rabbitforms.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: users. Email unique (stored lowercased).

    business_id is nullable: business_admin rows always carry one, super_admin
    rows may (deployment policy, enforced in the service layer).
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), nullable=False)
    full_name: Mapped[str | None] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(String, nullable=False, index=True)
    business_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("businesses.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        CheckConstraint(
            "role IN ({})".format(
                ", ".join("'{}'".format(v.replace("'", "''")) for v in UserRole.values())
            ),
            name="users_role_check",
        ),
        CheckConstraint(
            "role <> 'business_admin' OR business_id IS NOT NULL",
            name="users_business_admin_has_business",
        ),
    )
