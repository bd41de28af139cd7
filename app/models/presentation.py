"""Presentation page model - flexible content blocks plus director and counters."""

from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, UUIDMixin
from app.models.types import JSONEncodedList

MAIN_PRESENTATION_SECTION = "main_presentation"

DEFAULT_COUNTER_LABELS = ("Permanents", "Articles impactés", "Articles publiés")


class PresentationContent(Base, UUIDMixin, TimestampMixin):
    """Editable presentation page, keyed by section name."""

    __tablename__ = "presentation_content"

    section_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    content_blocks: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONEncodedList,
        nullable=False,
        default=list,
    )
    director_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    director_position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    director_image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    counter1_value: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    counter1_label: Mapped[str] = mapped_column(
        String(100), default=DEFAULT_COUNTER_LABELS[0], nullable=False
    )
    counter2_value: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    counter2_label: Mapped[str] = mapped_column(
        String(100), default=DEFAULT_COUNTER_LABELS[1], nullable=False
    )
    counter3_value: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    counter3_label: Mapped[str] = mapped_column(
        String(100), default=DEFAULT_COUNTER_LABELS[2], nullable=False
    )
