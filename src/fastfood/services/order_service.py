"""Order service — placement, history and status changes.

Learn: Two real-time notifications come out of here:
- a new order goes to every connected admin (NEW_ORDER)
- a status change goes to the customer who placed it (ORDER_STATUS_UPDATE)

Both are sent after the commit, so whatever a client reads back from
the API already reflects the change it was notified about.
"""

import uuid
from typing import Any, Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.db.models import MenuItem, Order
from fastfood.events.types import NEW_ORDER, ORDER_STATUS_UPDATE
from fastfood.realtime.router import TO_ALL_ADMINS, Event, EventRouter, ToUser
from fastfood.schemas.order import OrderRead

logger = structlog.get_logger()


class MenuItemNotFoundError(Exception):
    """Raised when an order references an item missing from the catalog."""
    pass


def order_payload(order: Order) -> dict[str, Any]:
    """JSON-ready order record, as sent in event frames."""
    return OrderRead.model_validate(order).model_dump(mode="json")


class OrderService:
    """Business logic for orders."""

    def __init__(self, db: AsyncSession, events: EventRouter):
        self.db = db
        self.events = events

    # ─── Create ──────────────────────────────────────────

    async def place_order(
        self,
        user_id: Optional[str],
        customer_name: str,
        order_type: str,
        lines: list[dict[str, Any]],
        total_amount: float,
        arrival_time: Optional[str] = None,
        address: Optional[dict[str, Any]] = None,
    ) -> Order:
        """Snapshot each referenced menu item into the order and notify admins."""
        items = []
        for line in lines:
            menu_item = await self.db.get(MenuItem, line["item_id"])
            if not menu_item:
                raise MenuItemNotFoundError(
                    f"Menu item with id {line['item_id']} not found"
                )
            items.append({
                "item_id": str(menu_item.id),
                "item_name": menu_item.name,
                "item_description": menu_item.description,
                "item_price": menu_item.price,
                "item_image_url": menu_item.image_url,
                "item_category": menu_item.category,
                "item_options": list(line.get("item_options") or []),
                "excluded_ingredients": list(line.get("excluded_ingredients") or []),
                "quantity": line["quantity"],
            })

        order = Order(
            user_id=user_id,
            customer_name=customer_name,
            order_type=order_type,
            arrival_time=arrival_time,
            address=address if order_type == "delivery" else None,
            items=items,
            total_amount=total_amount,
            status="pending",
        )
        self.db.add(order)
        await self.db.commit()

        logger.info("order.placed", order_id=str(order.id), user_id=user_id)
        await self.events.dispatch(
            TO_ALL_ADMINS, Event(NEW_ORDER, {"order": order_payload(order)})
        )
        return order

    # ─── Read ────────────────────────────────────────────

    async def get_order(self, order_id: uuid.UUID) -> Order | None:
        return await self.db.get(Order, order_id)

    async def list_for_user(self, user_id: str) -> list[Order]:
        result = await self.db.execute(
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.order_date.desc())
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[Order]:
        result = await self.db.execute(
            select(Order).order_by(Order.order_date.desc())
        )
        return list(result.scalars().all())

    # ─── Status ──────────────────────────────────────────

    async def update_status(self, order_id: uuid.UUID, status: str) -> Order | None:
        """Set the status and push the updated order to its owner, if online."""
        order = await self.get_order(order_id)
        if not order:
            return None

        previous = order.status
        order.status = status
        await self.db.commit()

        logger.info(
            "order.status_changed",
            order_id=str(order.id),
            from_status=previous,
            to_status=status,
        )
        if order.user_id:
            await self.events.dispatch(
                ToUser(order.user_id),
                Event(ORDER_STATUS_UPDATE, {"order": order_payload(order)}),
            )
        return order
