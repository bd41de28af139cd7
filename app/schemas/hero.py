"""Pydantic schemas for the hero section."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.schemas.carousel import CLEAR_IMAGE_MARKER
from app.schemas.common import blank_to_none
from app.services.image_storage import public_image_url


class HeroUpdate(BaseModel):
    """Schema for the multipart fields of a hero update."""

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    button_content: str | None = Field(None, max_length=255)
    image_url: str | None = None

    @field_validator("title", "description", "button_content", mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return blank_to_none(value)

    @property
    def clears_image(self) -> bool:
        return self.image_url == CLEAR_IMAGE_MARKER


class HeroResponse(BaseModel):
    """Schema for hero response."""

    id: UUID
    title: str | None
    description: str | None
    button_content: str | None
    image_url: str | None
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("image_url")
    @classmethod
    def as_public_url(cls, value: str | None) -> str | None:
        return public_image_url(value)
