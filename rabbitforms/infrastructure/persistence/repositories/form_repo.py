"""Form repository. Returns application DTOs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitforms.application.dtos.form import FormCreate, FormResult
from rabbitforms.domain.exceptions import DuplicateSlugInBusinessException
from rabbitforms.infrastructure.persistence.models.form import Form
from rabbitforms.infrastructure.persistence.repositories.base import (
    BaseRepository,
    is_unique_violation,
)
from rabbitforms.shared.utils.datetime import ensure_utc


def _form_to_result(f: Form) -> FormResult:
    """Map ORM Form to application FormResult."""
    return FormResult(
        id=f.id,
        business_id=f.business_id,
        title=f.title,
        description=f.description,
        slug=f.slug,
        schema=f.schema,
        settings=f.settings,
        conditional_logic=f.conditional_logic,
        is_active=f.is_active,
        is_published=f.is_published,
        created_by=f.created_by,
        created_at=ensure_utc(f.created_at),
        updated_at=ensure_utc(f.updated_at),
        published_at=ensure_utc(f.published_at),
    )


def _is_slug_conflict(e: IntegrityError) -> bool:
    return is_unique_violation(
        e, "uq_forms_business_slug", "forms.business_id", "forms.slug"
    )


class FormRepository(BaseRepository[Form]):
    """Form repository. (business_id, slug) conflicts surface as DuplicateSlugInBusinessException."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Form)

    async def get_by_id(self, form_id: str) -> FormResult | None:
        form = await self.get_entity(form_id)
        return _form_to_result(form) if form else None

    async def get_by_id_for_update(self, form_id: str) -> FormResult | None:
        form = await self.get_entity(form_id, for_update=True)
        return _form_to_result(form) if form else None

    async def get_by_slug(self, business_id: str, slug: str) -> FormResult | None:
        result = await self.db.execute(
            select(Form).where(Form.business_id == business_id, Form.slug == slug)
        )
        form = result.scalar_one_or_none()
        return _form_to_result(form) if form else None

    async def list_by_business(
        self,
        business_id: str,
        skip: int = 0,
        limit: int = 100,
        *,
        published_only: bool = False,
    ) -> list[FormResult]:
        stmt = select(Form).where(Form.business_id == business_id)
        if published_only:
            stmt = stmt.where(Form.is_published.is_(True))
        stmt = stmt.order_by(Form.created_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [_form_to_result(f) for f in result.scalars().all()]

    async def has_published_forms(self, business_id: str) -> bool:
        """Return True if any form of the business has a published_at (ever published)."""
        result = await self.db.execute(
            select(
                exists().where(
                    Form.business_id == business_id, Form.published_at.is_not(None)
                )
            )
        )
        return bool(result.scalar())

    async def create_form(self, data: FormCreate) -> FormResult:
        """Insert a draft form.

        Raises DuplicateSlugInBusinessException on unique constraint violation.
        """
        form = Form(
            business_id=data.business_id,
            title=data.title,
            slug=data.slug,
            description=data.description,
            schema=data.schema,
            settings=data.settings,
            conditional_logic=data.conditional_logic,
            created_by=data.created_by,
            is_active=True,
            is_published=False,
        )
        try:
            created = await self.create(form)
        except IntegrityError as e:
            if not _is_slug_conflict(e):
                raise
            raise DuplicateSlugInBusinessException(data.business_id, data.slug) from e
        return _form_to_result(created)

    async def update_form(
        self, form_id: str, changes: Mapping[str, Any]
    ) -> FormResult | None:
        form = await self.get_entity(form_id)
        if not form:
            return None
        try:
            updated = await self.apply_changes(form, changes)
        except IntegrityError as e:
            if not _is_slug_conflict(e):
                raise
            raise DuplicateSlugInBusinessException(
                form.business_id, str(changes.get("slug", form.slug))
            ) from e
        return _form_to_result(updated)
