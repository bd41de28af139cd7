"""Hero section routes."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from app.api.deps import AdminUser, DBSession, Storage, http_error
from app.errors import CMSError
from app.schemas.common import DataResponse, parse_form
from app.schemas.hero import HeroResponse, HeroUpdate
from app.services.hero_service import HeroService

router = APIRouter(prefix="/hero", tags=["hero"])


@router.get("", response_model=DataResponse[HeroResponse])
async def get_hero(db: DBSession, storage: Storage) -> dict:
    """Get the hero section, creating the default one if needed."""
    service = HeroService(db, storage)
    hero = await service.get_or_create()
    return {"success": True, "data": hero}


@router.put("", response_model=DataResponse[HeroResponse])
async def update_hero(
    current_user: AdminUser,
    db: DBSession,
    storage: Storage,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    button_content: Annotated[str | None, Form()] = None,
    image_url: Annotated[str | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
) -> dict:
    """Update the hero section."""
    service = HeroService(db, storage)

    try:
        data = parse_form(
            HeroUpdate,
            title=title,
            description=description,
            button_content=button_content,
            image_url=image_url,
        )
        hero = await service.update(data, image)
    except CMSError as e:
        raise http_error(e)

    return {"success": True, "data": hero}
