"""Form API schemas. Schema, settings and conditional logic are opaque JSON documents."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class FormCreateRequest(BaseModel):
    """Request body for creating a draft form under a business."""

    business_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    schema_: JsonValue = Field(default=None, alias="schema")
    settings: JsonValue = None
    conditional_logic: JsonValue = None

    model_config = ConfigDict(populate_by_name=True)


class FormUpdate(BaseModel):
    """Request body for PATCH /forms/{id} (partial). Applies live to published forms."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    schema_: JsonValue = Field(default=None, alias="schema")
    settings: JsonValue = None
    conditional_logic: JsonValue = None

    model_config = ConfigDict(populate_by_name=True)

    def changes(self) -> dict:
        """Return only the fields the client sent, keyed by column name."""
        return self.model_dump(exclude_unset=True, by_alias=True)


class FormResponse(BaseModel):
    """Form in list/get responses."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    business_id: str
    title: str
    description: str | None
    slug: str
    schema_: JsonValue = Field(alias="schema")
    settings: JsonValue
    conditional_logic: JsonValue
    is_active: bool
    is_published: bool
    created_by: str | None
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None


class PublicFormResponse(BaseModel):
    """Form as rendered by the public capture page (no admin fields)."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    description: str | None
    slug: str
    schema_: JsonValue = Field(alias="schema")
    settings: JsonValue
    conditional_logic: JsonValue
