"""Business API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator


def _normalize_slug(value: str) -> str:
    """Lowercase, no spaces, join with '-' (e.g. 'Acme Co' -> 'acme-co')."""
    return "-".join(value.strip().lower().split())


class BusinessCreateRequest(BaseModel):
    """Request body for creating a business (super admin only).

    Slug is normalized (lowercase, spaces replaced with '-') before the
    pattern check, and is part of every public form URL.
    """

    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(
        ...,
        min_length=2,
        max_length=63,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
        description="Globally unique URL slug",
    )
    logo_url: str | None = None
    custom_domain: str | None = Field(default=None, max_length=253)
    theme: JsonValue = None

    @field_validator("slug", mode="before")
    @classmethod
    def normalize_slug(cls, v: str) -> str:
        return _normalize_slug(v) if isinstance(v, str) else v


class BusinessUpdate(BaseModel):
    """Request body for PATCH /businesses/{id} (partial).

    Slug changes are rejected once any form of the business has been published.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=2, max_length=63)
    logo_url: str | None = None
    custom_domain: str | None = Field(default=None, max_length=253)
    theme: JsonValue = None


class BusinessResponse(BaseModel):
    """Business in list/get responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    logo_url: str | None
    custom_domain: str | None
    theme: JsonValue
    is_active: bool
    created_at: datetime
    updated_at: datetime
