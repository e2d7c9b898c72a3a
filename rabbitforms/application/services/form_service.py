"""Form application service: create, edit, publish lifecycle, public lookup."""

from __future__ import annotations

import logging
from typing import Any

from rabbitforms.application.dtos.form import FormCreate, FormResult
from rabbitforms.application.interfaces.repositories import (
    IBusinessRepository,
    IFormRepository,
)
from rabbitforms.domain.entities.form import FormEntity
from rabbitforms.domain.exceptions import (
    DuplicateSlugInBusinessException,
    ResourceNotFoundException,
    ValidationException,
)
from rabbitforms.domain.value_objects.core import FormSlug
from rabbitforms.domain.value_objects.json_document import (
    document_or_empty,
    validate_json_document,
)
from rabbitforms.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_DOCUMENT_FIELDS = ("schema", "settings", "conditional_logic")
_EDITABLE_FIELDS = {"title", "description", "slug", *_DOCUMENT_FIELDS}


def _slug(value: str) -> str:
    try:
        return FormSlug(value).value
    except ValueError as e:
        raise ValidationException(str(e), field="slug") from e


def _title(value: str) -> str:
    if not value or not value.strip():
        raise ValidationException("Form title is required", field="title")
    return value.strip()


def _entity(form: FormResult) -> FormEntity:
    return FormEntity(
        id=form.id,
        business_id=form.business_id,
        schema=form.schema,
        is_published=form.is_published,
        is_active=form.is_active,
        published_at=form.published_at,
    )


class FormService:
    """Form lifecycle. Edits to a published form apply live; published_at is never reset."""

    def __init__(
        self, form_repo: IFormRepository, business_repo: IBusinessRepository
    ) -> None:
        self.form_repo = form_repo
        self.business_repo = business_repo

    async def create_form(
        self,
        business_id: str,
        title: str,
        slug: str,
        description: str | None = None,
        schema: Any = None,
        settings: Any = None,
        conditional_logic: Any = None,
        created_by: str | None = None,
    ) -> FormResult:
        """Create a draft form under a business.

        Raises:
            ResourceNotFoundException: If the business does not exist.
            DuplicateSlugInBusinessException: If the business already has this slug.
        """
        if not await self.business_repo.get_by_id(business_id):
            raise ResourceNotFoundException("business", business_id)
        form_slug = _slug(slug)
        data = FormCreate(
            business_id=business_id,
            title=_title(title),
            slug=form_slug,
            description=description,
            schema=document_or_empty(schema, "schema"),
            settings=document_or_empty(settings, "settings"),
            conditional_logic=document_or_empty(conditional_logic, "conditional_logic"),
            created_by=created_by,
        )
        if await self.form_repo.get_by_slug(business_id, form_slug):
            raise DuplicateSlugInBusinessException(business_id, form_slug)
        created = await self.form_repo.create_form(data)
        logger.info(
            "Created form %s (business=%s slug=%s)", created.id, business_id, form_slug
        )
        return created

    async def get_form(self, form_id: str) -> FormResult:
        form = await self.form_repo.get_by_id(form_id)
        if not form:
            raise ResourceNotFoundException("form", form_id)
        return form

    async def list_forms(
        self,
        business_id: str,
        skip: int = 0,
        limit: int = 100,
        *,
        published_only: bool = False,
    ) -> list[FormResult]:
        return await self.form_repo.list_by_business(
            business_id, skip=skip, limit=limit, published_only=published_only
        )

    async def get_public_form(self, business_slug: str, form_slug: str) -> FormResult:
        """Resolve a form from its public URL; only published forms of active businesses resolve."""
        business = await self.business_repo.get_by_slug(business_slug)
        if not business or not business.is_active:
            raise ResourceNotFoundException("business", business_slug)
        form = await self.form_repo.get_by_slug(business.id, form_slug)
        if not form or not _entity(form).accepts_public_submissions():
            raise ResourceNotFoundException("form", f"{business_slug}/{form_slug}")
        return form

    async def update_form(self, form_id: str, changes: dict[str, Any]) -> FormResult:
        """Apply a partial edit. Live for published forms; cannot empty a published schema.

        Raises:
            ValidationException: For unknown fields or malformed values.
            EmptySchemaException: If a published form's schema would lose all fields.
            DuplicateSlugInBusinessException: If the new slug is taken in the business.
        """
        current = await self.get_form(form_id)
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValidationException(
                f"Unsupported form fields: {', '.join(sorted(unknown))}"
            )
        update: dict[str, Any] = dict(changes)
        if "title" in update:
            update["title"] = _title(update["title"])
        for name in _DOCUMENT_FIELDS:
            if name in update:
                update[name] = validate_json_document(update[name], name)
        if "schema" in update:
            _entity(current).replace_schema(update["schema"])
        if "slug" in update:
            update["slug"] = _slug(update["slug"])
            if update["slug"] == current.slug:
                del update["slug"]
            else:
                existing = await self.form_repo.get_by_slug(current.business_id, update["slug"])
                if existing:
                    raise DuplicateSlugInBusinessException(current.business_id, update["slug"])
        if not update:
            return current
        updated = await self.form_repo.update_form(form_id, update)
        if not updated:
            raise ResourceNotFoundException("form", form_id)
        logger.info("Updated form %s fields=%s", form_id, sorted(update))
        return updated

    async def publish_form(self, form_id: str) -> FormResult:
        """Publish a form; published_at is stamped only on the first publish.

        Raises:
            EmptySchemaException: If the schema has no fields.
        """
        form = await self.form_repo.get_by_id_for_update(form_id)
        if not form:
            raise ResourceNotFoundException("form", form_id)
        entity = _entity(form)
        if not entity.publish(utc_now()):
            return form
        updated = await self.form_repo.update_form(
            form_id,
            {"is_published": True, "published_at": entity.published_at},
        )
        if not updated:
            raise ResourceNotFoundException("form", form_id)
        logger.info("Published form %s (first published at %s)", form_id, updated.published_at)
        return updated

    async def unpublish_form(self, form_id: str) -> FormResult:
        """Take a form offline; published_at keeps the first publish time."""
        form = await self.get_form(form_id)
        if not _entity(form).unpublish():
            return form
        updated = await self.form_repo.update_form(form_id, {"is_published": False})
        if not updated:
            raise ResourceNotFoundException("form", form_id)
        logger.info("Unpublished form %s", form_id)
        return updated

    async def deactivate_form(self, form_id: str) -> FormResult:
        await self.get_form(form_id)
        updated = await self.form_repo.update_form(form_id, {"is_active": False})
        if not updated:
            raise ResourceNotFoundException("form", form_id)
        logger.info("Deactivated form %s", form_id)
        return updated

    async def activate_form(self, form_id: str) -> FormResult:
        await self.get_form(form_id)
        updated = await self.form_repo.update_form(form_id, {"is_active": True})
        if not updated:
            raise ResourceNotFoundException("form", form_id)
        return updated
