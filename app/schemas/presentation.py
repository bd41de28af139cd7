"""Pydantic schemas for the presentation page."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.presentation import DEFAULT_COUNTER_LABELS
from app.models.types import decode_list
from app.schemas.carousel import CLEAR_IMAGE_MARKER
from app.schemas.common import blank_to_none
from app.services.image_storage import public_image_url

# Slider position given to an image block whose image was cleared
CLEARED_IMAGE_SLIDER_VALUE = 50


class ContentBlock(BaseModel):
    """A text or image block of the presentation page.

    Keys the editor adds beyond the ones below are kept as-is.
    """

    id: str = Field(..., min_length=1)
    type: Literal["text", "image"]
    content: str | None = None
    url: str | None = None
    alt_text: str | None = None
    caption: str | None = None
    original_width: int | None = None
    original_height: int | None = None
    width: int | None = None
    height: int | None = None
    size_slider_value: float = 0

    model_config = {"extra": "allow"}

    @property
    def is_image(self) -> bool:
        return self.type == "image"

    @property
    def has_pending_url(self) -> bool:
        """True when the editor sent no usable url for an image block."""
        return not self.url or self.url.startswith("blob:")

    def cleared(self) -> "ContentBlock":
        return self.model_copy(
            update={
                "url": None,
                "original_width": None,
                "original_height": None,
                "width": None,
                "height": None,
                "size_slider_value": CLEARED_IMAGE_SLIDER_VALUE,
            }
        )


class PresentationUpdate(BaseModel):
    """Schema for the multipart fields of a presentation update."""

    director_name: str | None = Field(None, max_length=255)
    director_position: str | None = Field(None, max_length=255)
    director_image: str | None = None
    counter1_value: int = 0
    counter1_label: str = DEFAULT_COUNTER_LABELS[0]
    counter2_value: int = 0
    counter2_label: str = DEFAULT_COUNTER_LABELS[1]
    counter3_value: int = 0
    counter3_label: str = DEFAULT_COUNTER_LABELS[2]
    content_blocks: list[ContentBlock] = Field(default_factory=list)

    @field_validator("director_name", "director_position", mode="before")
    @classmethod
    def empty_as_null(cls, value):
        return blank_to_none(value)

    @field_validator("counter1_value", "counter2_value", "counter3_value", mode="before")
    @classmethod
    def empty_counter_as_zero(cls, value):
        return 0 if blank_to_none(value) is None else value

    @field_validator("counter1_label", "counter2_label", "counter3_label", mode="before")
    @classmethod
    def empty_label_as_default(cls, value, info):
        if blank_to_none(value) is not None:
            return value
        index = int(info.field_name[len("counter")]) - 1
        return DEFAULT_COUNTER_LABELS[index]

    @field_validator("content_blocks", mode="before")
    @classmethod
    def decode_blocks(cls, value):
        if value is None or isinstance(value, (str, bytes)):
            return decode_list(value)
        return value

    @property
    def clears_director_image(self) -> bool:
        return self.director_image in (CLEAR_IMAGE_MARKER, "")


class PresentationResponse(BaseModel):
    """Schema for presentation response."""

    id: UUID
    section_name: str
    content_blocks: list[ContentBlock]
    director_name: str | None
    director_position: str | None
    director_image: str | None
    counter1_value: int
    counter1_label: str
    counter2_value: int
    counter2_label: str
    counter3_value: int
    counter3_label: str
    updated_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("director_image")
    @classmethod
    def as_public_url(cls, value: str | None) -> str | None:
        return public_image_url(value)

    @field_validator("content_blocks")
    @classmethod
    def block_urls_as_public(cls, blocks: list[ContentBlock]) -> list[ContentBlock]:
        return [
            block.model_copy(update={"url": public_image_url(block.url)})
            if block.is_image and block.url
            else block
            for block in blocks
        ]
