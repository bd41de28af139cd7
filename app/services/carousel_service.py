"""Service for carousel item operations."""

import logging
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import DuplicateOrderError, ItemNotFoundError, MissingImageError
from app.models import CarouselItem
from app.schemas.carousel import CarouselItemCreate, CarouselItemUpdate, ReorderRequest
from app.services.image_storage import CAROUSEL_IMAGE_DIR, ImageStorage, has_file
from app.services.reorder import OrderKeyReorderer

logger = logging.getLogger(__name__)


class CarouselService:
    """Service for carousel CRUD and batch reordering."""

    def __init__(self, db: AsyncSession, storage: ImageStorage):
        self.db = db
        self.storage = storage

    async def list_all(self) -> list[CarouselItem]:
        """List every carousel item in display order."""
        result = await self.db.execute(
            select(CarouselItem).order_by(CarouselItem.order)
        )
        return list(result.scalars().all())

    async def get(self, item_id: UUID) -> CarouselItem:
        """Get a carousel item or raise ItemNotFoundError."""
        result = await self.db.execute(
            select(CarouselItem).where(CarouselItem.id == item_id)
        )
        item = result.scalar_one_or_none()
        if item is None:
            raise ItemNotFoundError("Carousel item not found", missing_ids=[str(item_id)])
        return item

    async def _find_by_order(self, order: int) -> CarouselItem | None:
        result = await self.db.execute(
            select(CarouselItem).where(CarouselItem.order == order)
        )
        return result.scalar_one_or_none()

    async def create(
        self, data: CarouselItemCreate, image: UploadFile | None
    ) -> CarouselItem:
        """Create a new carousel item at a caller-chosen, unused order."""
        if not has_file(image):
            raise MissingImageError("An image is required to create a carousel item.")

        if await self._find_by_order(data.order):
            raise DuplicateOrderError(data.order)

        async with self.storage.stage(image, CAROUSEL_IMAGE_DIR) as staged:
            item = CarouselItem(
                image_url=staged.path,
                title=data.title,
                description=data.description,
                order=data.order,
                link=data.link,
            )
            self.db.add(item)

            try:
                await self.db.flush()
                await self.db.refresh(item)
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                raise DuplicateOrderError(data.order)

            staged.commit()

        logger.info(f"Created carousel item {item.id} at order {item.order}")
        return item

    async def update(
        self, item_id: UUID, data: CarouselItemUpdate, image: UploadFile | None
    ) -> CarouselItem:
        """Update a carousel item, optionally replacing or clearing its image."""
        item = await self.get(item_id)

        if data.order is not None and data.order != item.order:
            existing = await self._find_by_order(data.order)
            if existing is not None and existing.id != item.id:
                raise DuplicateOrderError(data.order)

        previous_image = item.image_url

        async with self.storage.stage(image, CAROUSEL_IMAGE_DIR) as staged:
            if staged.path:
                item.image_url = staged.path
            elif data.clears_image:
                item.image_url = None

            item.title = data.title
            item.description = data.description
            item.link = data.link
            if data.order is not None:
                item.order = data.order

            try:
                await self.db.flush()
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                raise DuplicateOrderError(data.order)

            staged.commit()

        await self.db.refresh(item)

        if previous_image and previous_image != item.image_url:
            self.storage.delete(previous_image)

        logger.info(f"Updated carousel item {item.id}")
        return item

    async def delete(self, item_id: UUID) -> None:
        """Delete a carousel item and its stored image."""
        item = await self.get(item_id)
        image_url = item.image_url

        await self.db.delete(item)
        await self.db.commit()

        self.storage.delete(image_url)
        logger.info(f"Deleted carousel item {item_id}")

    async def reorder(self, request: ReorderRequest) -> None:
        """Apply a complete arrangement in one transaction."""
        reorderer = OrderKeyReorderer(self.db, CarouselItem, label="carousel item")
        await reorderer.apply(request.items)
