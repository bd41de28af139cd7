"""Hero section model (single row)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin

DEFAULT_HERO = {
    "title": "Welcome to LABTIM",
    "description": "Discover our research, publications, and team members.",
    "button_content": "Learn More",
    "image_url": None,
}


class Hero(Base, UUIDMixin, TimestampMixin):
    """The home page hero banner. Only one row is ever used."""

    __tablename__ = "heroes"

    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    button_content: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
