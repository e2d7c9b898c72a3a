"""Business domain entity.

Represents the tenant root, independent of persistence.
"""

from dataclasses import dataclass

from rabbitforms.domain.exceptions import ValidationException
from rabbitforms.domain.value_objects.core import BusinessSlug


@dataclass
class BusinessEntity:
    """Domain entity for a business (tenant root).

    Owns all users, forms and submissions under it. Deactivated rather
    than deleted. Validation runs on construction.
    """

    id: str
    name: str
    slug: BusinessSlug
    is_active: bool = True

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate business rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Business ID is required", field="id")
        if not self.name or not self.name.strip():
            raise ValidationException("Business name is required", field="name")

    def deactivate(self) -> None:
        """Set is_active to False. Idempotent."""
        self.is_active = False

    def activate(self) -> None:
        """Set is_active to True. Idempotent."""
        self.is_active = True

    def change_slug(self, new_slug: BusinessSlug, *, has_published_forms: bool) -> None:
        """Change the slug while it is not yet part of any public form URL.

        Args:
            new_slug: New slug value object.
            has_published_forms: Whether any form of this business was ever published.

        Raises:
            ValidationException: If a form has been published under the current slug.
        """
        if has_published_forms and new_slug != self.slug:
            raise ValidationException(
                "Business slug cannot change after a form has been published",
                field="slug",
            )
        self.slug = new_slug
