"""Service for the presentation page."""

import logging
from contextlib import AsyncExitStack
from typing import Any

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import DEFAULT_COUNTER_LABELS, MAIN_PRESENTATION_SECTION, PresentationContent
from app.schemas.presentation import PresentationUpdate
from app.services.image_storage import (
    PRESENTATION_IMAGE_DIR,
    ImageStorage,
    StagedUpload,
    is_external_url,
    stored_image_path,
)

logger = logging.getLogger(__name__)


def _owns(path: str | None) -> bool:
    return bool(path) and not is_external_url(path) and path.startswith(f"{PRESENTATION_IMAGE_DIR}/")


def _local_images(blocks: list[dict[str, Any]], director_image: str | None) -> set[str]:
    """Stored images the presentation owns.

    Blocks may point at images of other sections; those are never collected.
    """
    paths = {
        block["url"]
        for block in blocks
        if block.get("type") == "image" and _owns(block.get("url"))
    }
    if _owns(director_image):
        paths.add(director_image)
    return paths


class PresentationService:
    """Reads and edits the main presentation section."""

    def __init__(self, db: AsyncSession, storage: ImageStorage):
        self.db = db
        self.storage = storage

    async def get_or_create(self) -> PresentationContent:
        """Return the main presentation, creating an empty one on first access."""
        result = await self.db.execute(
            select(PresentationContent).where(
                PresentationContent.section_name == MAIN_PRESENTATION_SECTION
            )
        )
        presentation = result.scalar_one_or_none()
        if presentation is not None:
            return presentation

        presentation = PresentationContent(
            section_name=MAIN_PRESENTATION_SECTION,
            content_blocks=[],
            counter1_value=0,
            counter1_label=DEFAULT_COUNTER_LABELS[0],
            counter2_value=0,
            counter2_label=DEFAULT_COUNTER_LABELS[1],
            counter3_value=0,
            counter3_label=DEFAULT_COUNTER_LABELS[2],
        )
        self.db.add(presentation)
        await self.db.flush()
        await self.db.refresh(presentation)
        await self.db.commit()
        logger.info("Default presentation content created")
        return presentation

    async def update(
        self,
        data: PresentationUpdate,
        block_images: dict[int, UploadFile],
        director_image: UploadFile | None,
    ) -> PresentationContent:
        """Replace the presentation content.

        ``block_images`` maps a block index to the file uploaded for it.
        Stored images the new content no longer references are deleted once
        the update is committed.
        """
        presentation = await self.get_or_create()
        previous_images = _local_images(presentation.content_blocks, presentation.director_image)

        staged_uploads: list[StagedUpload] = []
        async with AsyncExitStack() as stack:
            new_blocks = []
            for index, block in enumerate(data.content_blocks):
                if block.is_image:
                    staged = await stack.enter_async_context(
                        self.storage.stage(block_images.get(index), PRESENTATION_IMAGE_DIR)
                    )
                    staged_uploads.append(staged)
                    if staged.path:
                        block = block.model_copy(update={"url": staged.path})
                    elif block.has_pending_url:
                        block = block.cleared()
                    else:
                        block = block.model_copy(update={"url": stored_image_path(block.url)})
                new_blocks.append(block.model_dump())

            staged_director = await stack.enter_async_context(
                self.storage.stage(director_image, PRESENTATION_IMAGE_DIR)
            )
            staged_uploads.append(staged_director)
            if staged_director.path:
                presentation.director_image = staged_director.path
            elif data.clears_director_image:
                presentation.director_image = None
            elif data.director_image:
                presentation.director_image = stored_image_path(data.director_image)

            presentation.content_blocks = new_blocks
            presentation.director_name = data.director_name
            presentation.director_position = data.director_position
            presentation.counter1_value = data.counter1_value
            presentation.counter1_label = data.counter1_label
            presentation.counter2_value = data.counter2_value
            presentation.counter2_label = data.counter2_label
            presentation.counter3_value = data.counter3_value
            presentation.counter3_label = data.counter3_label

            await self.db.flush()
            await self.db.commit()
            for staged in staged_uploads:
                staged.commit()

        await self.db.refresh(presentation)

        kept = _local_images(presentation.content_blocks, presentation.director_image)
        for path in previous_images - kept:
            self.storage.delete(path)

        logger.info(f"Presentation updated with {len(new_blocks)} content block(s)")
        return presentation
