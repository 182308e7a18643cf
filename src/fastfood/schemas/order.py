"""Pydantic schemas for orders.

Learn: OrderCreate carries only what the customer chooses (item ids,
quantities, customisations). The server fills each order line from the
catalog, so prices and names in OrderRead come from the database, not
from the client.
"""

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

OrderType = Literal["takeaway", "eat_in", "delivery"]
OrderStatus = Literal[
    "pending", "preparing", "ready", "out_for_delivery", "completed", "cancelled"
]

DELIVERY_ADDRESS_FIELDS = ("street", "city", "postal_code", "phone")


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    phone: Optional[str] = None


class OrderLineCreate(BaseModel):
    item_id: uuid.UUID
    quantity: int = Field(..., ge=1)
    item_options: list[str] = Field(default_factory=list)
    excluded_ingredients: list[str] = Field(default_factory=list)


class OrderCreate(BaseModel):
    items: list[OrderLineCreate] = Field(..., min_length=1)
    total_amount: float = Field(..., ge=0)
    customer_name: str = Field(..., min_length=1, max_length=200)
    order_type: OrderType
    arrival_time: Optional[str] = None
    address: Optional[Address] = None

    @model_validator(mode="after")
    def require_delivery_address(self):
        if self.order_type != "delivery":
            return self
        missing = [
            f for f in DELIVERY_ADDRESS_FIELDS
            if not (self.address and getattr(self.address, f))
        ]
        if missing:
            raise ValueError(
                f"Delivery orders require address fields: {', '.join(missing)}"
            )
        return self


class OrderLine(BaseModel):
    """Snapshot of a menu item as it was when the order was placed."""
    item_id: str
    item_name: str
    item_description: Optional[str] = None
    item_price: float
    item_image_url: Optional[str] = None
    item_category: str
    item_options: list[str] = []
    excluded_ingredients: list[str] = []
    quantity: int


class OrderRead(BaseModel):
    id: uuid.UUID
    user_id: Optional[str] = None
    customer_name: str
    order_type: OrderType
    address: Optional[Address] = None
    arrival_time: Optional[str] = None
    items: list[OrderLine]
    total_amount: float
    status: OrderStatus
    order_date: datetime

    model_config = {"from_attributes": True}


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
