"""Orders API — place, list and advance orders.

Learn: Every order carries the placing customer's subject id, which is
exactly the key the connection registry uses, so a status change can
be pushed back to that customer over the WebSocket.
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood.auth.dependencies import get_current_user, require_admin
from fastfood.auth.jwt import Identity
from fastfood.db.engine import get_db
from fastfood.realtime.router import EventRouter, get_event_router
from fastfood.schemas.order import OrderCreate, OrderRead, OrderStatusUpdate
from fastfood.services.order_service import MenuItemNotFoundError, OrderService

router = APIRouter(prefix="/orders")


def _svc(
    db: AsyncSession = Depends(get_db),
    events: EventRouter = Depends(get_event_router),
) -> OrderService:
    return OrderService(db, events)


@router.post("", response_model=OrderRead, status_code=201)
async def place_order(
    body: OrderCreate,
    identity: Identity = Depends(get_current_user),
    svc: OrderService = Depends(_svc),
):
    """Place an order. Every admin online receives NEW_ORDER."""
    try:
        return await svc.place_order(
            user_id=identity.subject_id,
            customer_name=body.customer_name,
            order_type=body.order_type,
            lines=[line.model_dump() for line in body.items],
            total_amount=body.total_amount,
            arrival_time=body.arrival_time,
            address=body.address.model_dump() if body.address else None,
        )
    except MenuItemNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/my-orders", response_model=list[OrderRead])
async def my_orders(
    identity: Identity = Depends(get_current_user),
    svc: OrderService = Depends(_svc),
):
    """The caller's orders, newest first."""
    return await svc.list_for_user(identity.subject_id)


@router.get("", response_model=list[OrderRead], dependencies=[Depends(require_admin)])
async def list_orders(svc: OrderService = Depends(_svc)):
    return await svc.list_all()


@router.put("/{order_id}", response_model=OrderRead, dependencies=[Depends(require_admin)])
async def update_order_status(
    order_id: uuid.UUID,
    body: OrderStatusUpdate,
    svc: OrderService = Depends(_svc),
):
    """Move an order to a new status and notify its owner."""
    order = await svc.update_status(order_id, body.status)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
