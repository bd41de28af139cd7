"""Pydantic schemas for carousel items."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator, model_validator

from app.config import settings
from app.schemas.common import blank_to_none
from app.services.image_storage import public_image_url

# Form value sent by the dashboard to drop the current image
CLEAR_IMAGE_MARKER = "null"

# Live orders must stay below the reorder displacement range
MAX_ORDER = settings.reorder_temp_offset - 1


class CarouselItemCreate(BaseModel):
    """Schema for the multipart fields of a new carousel item."""

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    order: int = Field(..., ge=1, le=MAX_ORDER)
    link: str | None = Field(None, max_length=2048)

    @field_validator("title", "description", "link", mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return blank_to_none(value)


class CarouselItemUpdate(BaseModel):
    """Schema for the multipart fields of a carousel item update.

    Text fields are always overwritten (missing means cleared); ``order`` is
    only changed when supplied.
    """

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    order: int | None = Field(None, ge=1, le=MAX_ORDER)
    link: str | None = Field(None, max_length=2048)
    image_url: str | None = None

    @field_validator("title", "description", "link", "order", mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return blank_to_none(value)

    @property
    def clears_image(self) -> bool:
        return self.image_url == CLEAR_IMAGE_MARKER


class CarouselItemResponse(BaseModel):
    """Schema for carousel item response."""

    id: UUID
    image_url: str | None
    title: str | None
    description: str | None
    order: int
    link: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("image_url")
    @classmethod
    def as_public_url(cls, value: str | None) -> str | None:
        return public_image_url(value)


class ReorderEntry(BaseModel):
    """Schema for a single item in a reorder batch."""

    id: StrictStr = Field(..., min_length=1)
    order: StrictInt = Field(..., le=MAX_ORDER)


class ReorderRequest(BaseModel):
    """Schema for a batch reorder: the complete desired arrangement."""

    items: list[ReorderEntry]

    @model_validator(mode="after")
    def check_distinct(self) -> "ReorderRequest":
        ids = [entry.id for entry in self.items]
        if len(set(ids)) != len(ids):
            raise ValueError("Each item may appear only once in a reorder batch")
        orders = [entry.order for entry in self.items]
        if len(set(orders)) != len(orders):
            raise ValueError("Order values in a reorder batch must be distinct")
        return self
