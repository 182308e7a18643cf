"""Catalog service — menu categories, items and customisation options.

Learn: Service layer separates business logic from HTTP routing.
Every mutation commits first, then tells every connected client to
refetch the menu (MENU_UPDATE carries no payload). Reads never notify.
"""

import uuid
from typing import Any, Optional

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.db.models import MenuCategory, MenuItem, MenuOption
from fastfood.events.types import MENU_UPDATE
from fastfood.realtime.router import TO_ALL_CONNECTED, Event, EventRouter


class DuplicateCategoryError(Exception):
    """Raised when a category type slug is already taken."""
    pass


def _apply(obj: Any, fields: dict[str, Any]) -> None:
    for key, value in fields.items():
        setattr(obj, key, value)


class CatalogService:
    """Business logic for the menu catalog."""

    def __init__(self, db: AsyncSession, events: EventRouter):
        self.db = db
        self.events = events

    async def _menu_changed(self) -> None:
        await self.events.dispatch(TO_ALL_CONNECTED, Event(MENU_UPDATE))

    # ─── Categories ─────────────────────────────────────

    async def list_categories(self) -> list[MenuCategory]:
        result = await self.db.execute(
            select(MenuCategory).order_by(MenuCategory.created_at)
        )
        return list(result.scalars().all())

    async def get_category(self, category_id: uuid.UUID) -> MenuCategory | None:
        return await self.db.get(MenuCategory, category_id)

    async def _ensure_type_free(self, type_: str) -> None:
        result = await self.db.execute(
            select(MenuCategory.id).where(MenuCategory.type == type_)
        )
        if result.first():
            raise DuplicateCategoryError(f"Category type '{type_}' already exists")

    async def create_category(
        self,
        name: str,
        type: str,
        font_color: Optional[str] = None,
        background_color: Optional[str] = None,
        background_image_url: Optional[str] = None,
    ) -> MenuCategory:
        await self._ensure_type_free(type)
        category = MenuCategory(
            name=name,
            type=type,
            font_color=font_color,
            background_color=background_color,
            background_image_url=background_image_url,
        )
        self.db.add(category)
        await self.db.commit()
        await self._menu_changed()
        return category

    async def update_category(
        self, category_id: uuid.UUID, fields: dict[str, Any]
    ) -> MenuCategory | None:
        category = await self.get_category(category_id)
        if not category:
            return None
        if "type" in fields and fields["type"] != category.type:
            await self._ensure_type_free(fields["type"])
        _apply(category, fields)
        await self.db.commit()
        await self._menu_changed()
        return category

    async def set_category_background(
        self, category_id: uuid.UUID, image_url: str
    ) -> MenuCategory | None:
        return await self.update_category(
            category_id, {"background_image_url": image_url}
        )

    async def delete_category(self, category_id: uuid.UUID) -> bool:
        category = await self.get_category(category_id)
        if not category:
            return False
        await self.db.delete(category)
        await self.db.commit()
        await self._menu_changed()
        return True

    # ─── Menu items ─────────────────────────────────────

    async def list_items(self, category: Optional[str] = None) -> list[MenuItem]:
        """All items, optionally filtered by category (case-insensitive)."""
        query = select(MenuItem).order_by(MenuItem.created_at)
        if category:
            query = query.where(func.lower(MenuItem.category) == category.lower())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_item(self, item_id: uuid.UUID) -> MenuItem | None:
        return await self.db.get(MenuItem, item_id)

    async def create_item(
        self,
        name: str,
        price: float,
        category: str,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
        option_types: list[str] | None = None,
        removable_ingredients: list[str] | None = None,
    ) -> MenuItem:
        item = MenuItem(
            name=name,
            description=description,
            price=price,
            image_url=image_url,
            category=category,
            option_types=option_types or [],
            removable_ingredients=removable_ingredients or [],
        )
        self.db.add(item)
        await self.db.commit()
        await self._menu_changed()
        return item

    async def update_item(
        self, item_id: uuid.UUID, fields: dict[str, Any]
    ) -> MenuItem | None:
        item = await self.get_item(item_id)
        if not item:
            return None
        _apply(item, fields)
        await self.db.commit()
        await self._menu_changed()
        return item

    async def delete_item(self, item_id: uuid.UUID) -> bool:
        item = await self.get_item(item_id)
        if not item:
            return False
        await self.db.delete(item)
        await self.db.commit()
        await self._menu_changed()
        return True

    # ─── Options ────────────────────────────────────────

    async def list_options(self, type: Optional[str] = None) -> list[MenuOption]:
        query = select(MenuOption).order_by(MenuOption.type, MenuOption.name)
        if type:
            query = query.where(MenuOption.type == type)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_option_types(self) -> list[str]:
        result = await self.db.execute(
            select(distinct(MenuOption.type)).order_by(MenuOption.type)
        )
        return list(result.scalars().all())

    async def create_option(
        self,
        name: str,
        type: str,
        image_url: Optional[str] = None,
        price: Optional[float] = None,
    ) -> MenuOption:
        option = MenuOption(name=name, type=type, image_url=image_url, price=price)
        self.db.add(option)
        await self.db.commit()
        await self._menu_changed()
        return option

    async def update_option(
        self, option_id: uuid.UUID, fields: dict[str, Any]
    ) -> MenuOption | None:
        option = await self.db.get(MenuOption, option_id)
        if not option:
            return None
        _apply(option, fields)
        await self.db.commit()
        await self._menu_changed()
        return option

    async def delete_option(self, option_id: uuid.UUID) -> bool:
        option = await self.db.get(MenuOption, option_id)
        if not option:
            return False
        await self.db.delete(option)
        await self.db.commit()
        await self._menu_changed()
        return True
