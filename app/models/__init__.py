from app.models.base import Base
from app.models.user import User, UserRole
from app.models.carousel_item import CarouselItem
from app.models.hero import Hero, DEFAULT_HERO
from app.models.presentation import (
    PresentationContent,
    MAIN_PRESENTATION_SECTION,
    DEFAULT_COUNTER_LABELS,
)

__all__ = [
    "Base",
    "User",
    "UserRole",
    "CarouselItem",
    # Site sections
    "Hero",
    "DEFAULT_HERO",
    "PresentationContent",
    "MAIN_PRESENTATION_SECTION",
    "DEFAULT_COUNTER_LABELS",
]
