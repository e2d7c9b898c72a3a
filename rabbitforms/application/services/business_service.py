"""Business (tenant root) lifecycle: create, update, deactivate."""

from __future__ import annotations

import logging
from typing import Any

from rabbitforms.application.dtos.business import BusinessResult
from rabbitforms.application.interfaces.repositories import (
    IBusinessRepository,
    IFormRepository,
)
from rabbitforms.domain.entities.business import BusinessEntity
from rabbitforms.domain.exceptions import (
    DuplicateSlugException,
    ResourceNotFoundException,
    ValidationException,
)
from rabbitforms.domain.value_objects.core import BusinessSlug
from rabbitforms.domain.value_objects.json_document import document_or_empty

logger = logging.getLogger(__name__)


def _slug(value: str) -> BusinessSlug:
    try:
        return BusinessSlug(value)
    except ValueError as e:
        raise ValidationException(str(e), field="slug") from e


def _require_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationException("Business name is required", field="name")
    return name.strip()


class BusinessService:
    """Creates and maintains businesses. Caller owns the transaction."""

    def __init__(
        self, business_repo: IBusinessRepository, form_repo: IFormRepository
    ) -> None:
        self.business_repo = business_repo
        self.form_repo = form_repo

    async def create_business(
        self,
        name: str,
        slug: str,
        logo_url: str | None = None,
        custom_domain: str | None = None,
        theme: Any = None,
    ) -> BusinessResult:
        """Create a business (super-admin action).

        The slug pre-check gives a friendly error; the unique index on slug
        still decides under concurrent creation (the repository translates
        the violation into the same DuplicateSlugException).

        Raises:
            ValidationException: If name, slug or theme is malformed.
            DuplicateSlugException: If the slug is taken.
        """
        clean_name = _require_name(name)
        business_slug = _slug(slug)
        theme_doc = document_or_empty(theme, "theme")
        if await self.business_repo.get_by_slug(business_slug.value):
            logger.warning("Rejected business create: slug %s already exists", business_slug.value)
            raise DuplicateSlugException(business_slug.value)
        created = await self.business_repo.create_business(
            name=clean_name,
            slug=business_slug.value,
            logo_url=logo_url,
            custom_domain=custom_domain,
            theme=theme_doc,
        )
        logger.info("Created business %s (slug=%s)", created.id, created.slug)
        return created

    async def get_business(self, business_id: str) -> BusinessResult:
        business = await self.business_repo.get_by_id(business_id)
        if not business:
            raise ResourceNotFoundException("business", business_id)
        return business

    async def get_business_by_slug(self, slug: str) -> BusinessResult:
        business = await self.business_repo.get_by_slug(slug)
        if not business:
            raise ResourceNotFoundException("business", slug)
        return business

    async def list_businesses(
        self, skip: int = 0, limit: int = 100, *, active_only: bool = False
    ) -> list[BusinessResult]:
        return await self.business_repo.list_businesses(
            skip=skip, limit=limit, active_only=active_only
        )

    async def update_business(
        self, business_id: str, changes: dict[str, Any]
    ) -> BusinessResult:
        """Apply a partial update (name, slug, logo_url, custom_domain, theme).

        Slug changes are refused once any form of the business has been
        published, since public URLs embed the slug.
        """
        current = await self.get_business(business_id)
        allowed = {"name", "slug", "logo_url", "custom_domain", "theme"}
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationException(
                f"Unsupported business fields: {', '.join(sorted(unknown))}"
            )
        update: dict[str, Any] = dict(changes)
        if "name" in update:
            update["name"] = _require_name(update["name"])
        if "theme" in update:
            update["theme"] = document_or_empty(update["theme"], "theme")
        if "slug" in update:
            new_slug = _slug(update["slug"])
            entity = BusinessEntity(
                id=current.id,
                name=current.name,
                slug=BusinessSlug(current.slug),
                is_active=current.is_active,
            )
            entity.change_slug(
                new_slug,
                has_published_forms=await self.form_repo.has_published_forms(business_id),
            )
            if new_slug.value == current.slug:
                del update["slug"]
            else:
                existing = await self.business_repo.get_by_slug(new_slug.value)
                if existing and existing.id != business_id:
                    raise DuplicateSlugException(new_slug.value)
                update["slug"] = new_slug.value
        if not update:
            return current
        updated = await self.business_repo.update_business(business_id, update)
        if not updated:
            raise ResourceNotFoundException("business", business_id)
        logger.info("Updated business %s fields=%s", business_id, sorted(update))
        return updated

    async def deactivate_business(self, business_id: str) -> BusinessResult:
        """Soft-disable a business (never hard-deleted)."""
        updated = await self.business_repo.set_active(business_id, False)
        if not updated:
            raise ResourceNotFoundException("business", business_id)
        logger.info("Deactivated business %s", business_id)
        return updated

    async def activate_business(self, business_id: str) -> BusinessResult:
        updated = await self.business_repo.set_active(business_id, True)
        if not updated:
            raise ResourceNotFoundException("business", business_id)
        logger.info("Activated business %s", business_id)
        return updated
