"""Service for the hero section."""

import logging

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import MissingImageError
from app.models import DEFAULT_HERO, Hero
from app.schemas.hero import HeroUpdate
from app.services.image_storage import HERO_IMAGE_DIR, ImageStorage

logger = logging.getLogger(__name__)


class HeroService:
    """Reads and edits the single hero row."""

    def __init__(self, db: AsyncSession, storage: ImageStorage):
        self.db = db
        self.storage = storage

    async def _find(self) -> Hero | None:
        result = await self.db.execute(select(Hero).order_by(Hero.created_at).limit(1))
        return result.scalar_one_or_none()

    async def get_or_create(self) -> Hero:
        """Return the hero, creating the default one on first access."""
        hero = await self._find()
        if hero is not None:
            return hero

        hero = Hero(**DEFAULT_HERO)
        self.db.add(hero)
        await self.db.flush()
        await self.db.refresh(hero)
        await self.db.commit()
        logger.info("Default hero section created")
        return hero

    async def update(self, data: HeroUpdate, image: UploadFile | None) -> Hero:
        """Update the hero, creating it if this is the very first save."""
        hero = await self._find()

        async with self.storage.stage(image, HERO_IMAGE_DIR) as staged:
            if hero is None:
                if not staged.path:
                    raise MissingImageError(
                        "An image is required to create the initial hero section."
                    )
                hero = Hero(image_url=staged.path)
                self.db.add(hero)
                previous_image = None
            else:
                previous_image = hero.image_url
                if staged.path:
                    hero.image_url = staged.path
                elif data.clears_image:
                    hero.image_url = None

            hero.title = data.title
            hero.description = data.description
            hero.button_content = data.button_content

            await self.db.flush()
            await self.db.commit()
            staged.commit()

        await self.db.refresh(hero)

        if previous_image and previous_image != hero.image_url:
            self.storage.delete(previous_image)

        logger.info("Hero section updated")
        return hero
