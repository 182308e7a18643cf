"""Menu API — categories, items and customisation options.

Learn: Reads are public (the storefront needs them before login).
Writes require an admin and, through CatalogService, push MENU_UPDATE
to every connected client.

Route order matters: the static /categories and /options paths are
declared before /{item_id} so they are not swallowed by it.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import require_admin
from fastfood.config import settings
from fastfood.db.engine import get_db
from fastfood.realtime.router import EventRouter, get_event_router
from fastfood.schemas.menu import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    MenuItemCreate,
    MenuItemRead,
    MenuItemUpdate,
    OptionCreate,
    OptionRead,
    OptionUpdate,
)
from fastfood.services.catalog_service import CatalogService, DuplicateCategoryError
from fastfood.services.image_store import ImageStore, ImageUploadError, get_image_store

router = APIRouter(prefix="/menu")

_admin = [Depends(require_admin)]


def _svc(
    db: AsyncSession = Depends(get_db),
    events: EventRouter = Depends(get_event_router),
) -> CatalogService:
    return CatalogService(db, events)


# ─── Categories ─────────────────────────────────────────

@router.get("/categories", response_model=list[CategoryRead])
async def list_categories(svc: CatalogService = Depends(_svc)):
    return await svc.list_categories()


@router.post("/categories", response_model=CategoryRead, status_code=201, dependencies=_admin)
async def create_category(body: CategoryCreate, svc: CatalogService = Depends(_svc)):
    try:
        return await svc.create_category(**body.model_dump())
    except DuplicateCategoryError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/categories/{category_id}", response_model=CategoryRead, dependencies=_admin)
async def update_category(
    category_id: uuid.UUID,
    body: CategoryUpdate,
    svc: CatalogService = Depends(_svc),
):
    try:
        category = await svc.update_category(
            category_id, body.model_dump(exclude_unset=True, exclude_none=True)
        )
    except DuplicateCategoryError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.put(
    "/categories/{category_id}/background-image",
    response_model=CategoryRead,
    dependencies=_admin,
)
async def update_category_background(
    category_id: uuid.UUID,
    image: UploadFile = File(...),
    svc: CatalogService = Depends(_svc),
    store: ImageStore = Depends(get_image_store),
):
    """Upload a new background image for the category."""
    if not await svc.get_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")

    content = await image.read()
    if not content:
        raise HTTPException(status_code=400, detail="No image file provided")
    try:
        url = await store.upload(
            content,
            image.content_type or "application/octet-stream",
            folder=settings.cloudinary_category_folder,
        )
    except ImageUploadError as e:
        raise HTTPException(status_code=502, detail=f"Image upload failed: {e}")

    return await svc.set_category_background(category_id, url)


@router.delete("/categories/{category_id}", dependencies=_admin)
async def delete_category(category_id: uuid.UUID, svc: CatalogService = Depends(_svc)):
    if not await svc.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"deleted": True}


# ─── Options ────────────────────────────────────────────

@router.get("/options/types", response_model=list[str])
async def list_option_types(svc: CatalogService = Depends(_svc)):
    return await svc.list_option_types()


@router.get("/options", response_model=list[OptionRead])
async def list_options(svc: CatalogService = Depends(_svc)):
    return await svc.list_options()


@router.get("/options/{option_type}", response_model=list[OptionRead])
async def list_options_by_type(option_type: str, svc: CatalogService = Depends(_svc)):
    return await svc.list_options(type=option_type)


@router.post("/options", response_model=OptionRead, status_code=201, dependencies=_admin)
async def create_option(body: OptionCreate, svc: CatalogService = Depends(_svc)):
    return await svc.create_option(**body.model_dump())


@router.put("/options/{option_id}", response_model=OptionRead, dependencies=_admin)
async def update_option(
    option_id: uuid.UUID,
    body: OptionUpdate,
    svc: CatalogService = Depends(_svc),
):
    option = await svc.update_option(
        option_id, body.model_dump(exclude_unset=True, exclude_none=True)
    )
    if not option:
        raise HTTPException(status_code=404, detail="Option not found")
    return option


@router.delete("/options/{option_id}", dependencies=_admin)
async def delete_option(option_id: uuid.UUID, svc: CatalogService = Depends(_svc)):
    if not await svc.delete_option(option_id):
        raise HTTPException(status_code=404, detail="Option not found")
    return {"deleted": True}


# ─── Menu items ─────────────────────────────────────────

@router.get("", response_model=list[MenuItemRead])
async def list_items(
    category: Optional[str] = None,
    svc: CatalogService = Depends(_svc),
):
    """All menu items, optionally filtered by category (case-insensitive)."""
    return await svc.list_items(category=category)


@router.get("/{item_id}", response_model=MenuItemRead)
async def get_item(item_id: uuid.UUID, svc: CatalogService = Depends(_svc)):
    item = await svc.get_item(item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@router.post("", response_model=MenuItemRead, status_code=201, dependencies=_admin)
async def create_item(body: MenuItemCreate, svc: CatalogService = Depends(_svc)):
    return await svc.create_item(**body.model_dump())


@router.put("/{item_id}", response_model=MenuItemRead, dependencies=_admin)
async def update_item(
    item_id: uuid.UUID,
    body: MenuItemUpdate,
    svc: CatalogService = Depends(_svc),
):
    item = await svc.update_item(
        item_id, body.model_dump(exclude_unset=True, exclude_none=True)
    )
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


@router.delete("/{item_id}", dependencies=_admin)
async def delete_item(item_id: uuid.UUID, svc: CatalogService = Depends(_svc)):
    if not await svc.delete_item(item_id):
        raise HTTPException(status_code=404, detail="Menu item not found")
    return {"deleted": True}
