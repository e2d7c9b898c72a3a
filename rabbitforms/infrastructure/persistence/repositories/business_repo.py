"""Business repository. Returns application DTOs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rabbitforms.application.dtos.business import BusinessResult
from rabbitforms.domain.exceptions import DuplicateSlugException
from rabbitforms.domain.value_objects.json_document import JsonValue
from rabbitforms.infrastructure.persistence.models.business import Business
from rabbitforms.infrastructure.persistence.repositories.base import (
    BaseRepository,
    is_unique_violation,
)
from rabbitforms.shared.utils.datetime import ensure_utc


def _business_to_result(b: Business) -> BusinessResult:
    """Map ORM Business to application BusinessResult."""
    return BusinessResult(
        id=b.id,
        name=b.name,
        slug=b.slug,
        logo_url=b.logo_url,
        custom_domain=b.custom_domain,
        theme=b.theme,
        is_active=b.is_active,
        created_at=ensure_utc(b.created_at),
        updated_at=ensure_utc(b.updated_at),
    )


def _is_slug_conflict(e: IntegrityError) -> bool:
    return is_unique_violation(e, "uq_businesses_slug", "businesses.slug")


class BusinessRepository(BaseRepository[Business]):
    """Business repository. Slug conflicts surface as DuplicateSlugException."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Business)

    async def get_by_id(self, business_id: str) -> BusinessResult | None:
        business = await self.get_entity(business_id)
        return _business_to_result(business) if business else None

    async def get_by_slug(self, slug: str) -> BusinessResult | None:
        result = await self.db.execute(select(Business).where(Business.slug == slug))
        business = result.scalar_one_or_none()
        return _business_to_result(business) if business else None

    async def list_businesses(
        self, skip: int = 0, limit: int = 100, *, active_only: bool = False
    ) -> list[BusinessResult]:
        stmt = select(Business)
        if active_only:
            stmt = stmt.where(Business.is_active.is_(True))
        stmt = stmt.order_by(Business.created_at.desc()).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [_business_to_result(b) for b in result.scalars().all()]

    async def create_business(
        self,
        name: str,
        slug: str,
        logo_url: str | None,
        custom_domain: str | None,
        theme: JsonValue,
    ) -> BusinessResult:
        """Insert a business.

        Raises DuplicateSlugException on unique constraint violation.
        """
        business = Business(
            name=name,
            slug=slug,
            logo_url=logo_url,
            custom_domain=custom_domain,
            theme=theme,
            is_active=True,
        )
        try:
            created = await self.create(business)
        except IntegrityError as e:
            if not _is_slug_conflict(e):
                raise
            raise DuplicateSlugException(slug) from e
        return _business_to_result(created)

    async def update_business(
        self, business_id: str, changes: Mapping[str, Any]
    ) -> BusinessResult | None:
        business = await self.get_entity(business_id)
        if not business:
            return None
        try:
            updated = await self.apply_changes(business, changes)
        except IntegrityError as e:
            if not _is_slug_conflict(e):
                raise
            raise DuplicateSlugException(str(changes.get("slug", business.slug))) from e
        return _business_to_result(updated)

    async def set_active(self, business_id: str, is_active: bool) -> BusinessResult | None:
        business = await self.get_entity(business_id)
        if not business:
            return None
        updated = await self.apply_changes(business, {"is_active": is_active})
        return _business_to_result(updated)
