"""Carousel item model - the order-keyed banners of the home page."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin


class CarouselItem(Base, UUIDMixin, TimestampMixin):
    """A single carousel banner.

    ``order`` is unique across the table and defines the display sequence
    (ascending). Values need not be contiguous.
    """

    __tablename__ = "carousel_items"

    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(
        "order",
        Integer,
        nullable=False,
        unique=True,
    )
    link: Mapped[str | None] = mapped_column(String(2048), nullable=True)
