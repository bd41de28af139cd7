"""Presentation page routes."""

import re

from fastapi import APIRouter, Request
from starlette.datastructures import UploadFile

from app.api.deps import AdminUser, DBSession, Storage, http_error
from app.errors import CMSError
from app.schemas.common import DataResponse, parse_form
from app.schemas.presentation import PresentationResponse, PresentationUpdate
from app.services.presentation_service import PresentationService

router = APIRouter(prefix="/presentation", tags=["presentation"])

# Multipart key of the file uploaded for the block at that index
BLOCK_IMAGE_FIELD = re.compile(r"^image_(\d+)$")


@router.get("/main", response_model=DataResponse[PresentationResponse])
async def get_main_presentation(db: DBSession, storage: Storage) -> dict:
    """Get the main presentation content, creating it if needed."""
    service = PresentationService(db, storage)
    presentation = await service.get_or_create()
    return {"success": True, "data": presentation}


@router.put("/main", response_model=DataResponse[PresentationResponse])
async def update_main_presentation(
    request: Request,
    current_user: AdminUser,
    db: DBSession,
    storage: Storage,
) -> dict:
    """Update the main presentation from a multipart form.

    Besides the scalar fields and the ``content_blocks`` JSON string, the
    form may carry ``director_image`` and ``image_<index>`` files.
    """
    service = PresentationService(db, storage)
    form = await request.form()

    fields = {}
    block_images: dict[int, UploadFile] = {}
    director_image: UploadFile | None = None
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            match = BLOCK_IMAGE_FIELD.match(key)
            if match:
                block_images[int(match.group(1))] = value
            elif key == "director_image":
                director_image = value
        elif key in PresentationUpdate.model_fields:
            fields[key] = value

    try:
        data = parse_form(PresentationUpdate, **fields)
        presentation = await service.update(data, block_images, director_image)
    except CMSError as e:
        raise http_error(e)
    finally:
        await form.close()

    return {"success": True, "data": presentation}
