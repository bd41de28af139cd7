"""Carousel management routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Form, UploadFile, status

from app.api.deps import AdminUser, DBSession, Storage, http_error
from app.errors import CMSError
from app.schemas.carousel import (
    CarouselItemCreate,
    CarouselItemResponse,
    CarouselItemUpdate,
    ReorderRequest,
)
from app.schemas.common import DataResponse, ListResponse, MessageResponse, parse_form
from app.services.carousel_service import CarouselService

router = APIRouter(prefix="/carousel", tags=["carousel"])

OptionalForm = Annotated[str | None, Form()]


@router.get("", response_model=ListResponse[CarouselItemResponse])
async def list_carousel_items(db: DBSession, storage: Storage) -> dict:
    """List all carousel items in display order."""
    service = CarouselService(db, storage)
    items = await service.list_all()
    return {"success": True, "count": len(items), "data": items}


@router.get("/{item_id}", response_model=DataResponse[CarouselItemResponse])
async def get_carousel_item(item_id: UUID, db: DBSession, storage: Storage) -> dict:
    """Get a single carousel item."""
    service = CarouselService(db, storage)

    try:
        item = await service.get(item_id)
    except CMSError as e:
        raise http_error(e)

    return {"success": True, "data": item}


@router.post(
    "",
    response_model=DataResponse[CarouselItemResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_carousel_item(
    current_user: AdminUser,
    db: DBSession,
    storage: Storage,
    order: OptionalForm = None,
    title: OptionalForm = None,
    description: OptionalForm = None,
    link: OptionalForm = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> dict:
    """Create a carousel item from a multipart upload."""
    service = CarouselService(db, storage)

    try:
        data = parse_form(
            CarouselItemCreate,
            order=order,
            title=title,
            description=description,
            link=link,
        )
        item = await service.create(data, image)
    except CMSError as e:
        raise http_error(e)

    return {"success": True, "data": item}


@router.put("/reorder", response_model=MessageResponse)
async def reorder_carousel_items(
    data: ReorderRequest,
    current_user: AdminUser,
    db: DBSession,
    storage: Storage,
) -> dict:
    """Apply a complete carousel arrangement in one transaction."""
    service = CarouselService(db, storage)

    try:
        await service.reorder(data)
    except CMSError as e:
        raise http_error(e)

    return {"success": True, "message": "Carousel order updated successfully."}


@router.put("/{item_id}", response_model=DataResponse[CarouselItemResponse])
async def update_carousel_item(
    item_id: UUID,
    current_user: AdminUser,
    db: DBSession,
    storage: Storage,
    order: OptionalForm = None,
    title: OptionalForm = None,
    description: OptionalForm = None,
    link: OptionalForm = None,
    image_url: OptionalForm = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> dict:
    """Update a carousel item; ``image_url=null`` removes its image."""
    service = CarouselService(db, storage)

    try:
        data = parse_form(
            CarouselItemUpdate,
            order=order,
            title=title,
            description=description,
            link=link,
            image_url=image_url,
        )
        item = await service.update(item_id, data, image)
    except CMSError as e:
        raise http_error(e)

    return {"success": True, "data": item}


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_carousel_item(
    item_id: UUID,
    current_user: AdminUser,
    db: DBSession,
    storage: Storage,
) -> dict:
    """Delete a carousel item and its image."""
    service = CarouselService(db, storage)

    try:
        await service.delete(item_id)
    except CMSError as e:
        raise http_error(e)

    return {"success": True, "message": "Carousel item deleted successfully"}
