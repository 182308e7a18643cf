"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Alembic migrations mirror these definitions.

Key concepts:
- UUID primary keys (generic Uuid type: native on PostgreSQL, CHAR on SQLite)
- JSON columns for document-shaped data (order lines, address, opening hours)
- Python-side defaults so values are loaded right after flush (no lazy
  refresh needed on an AsyncSession)
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, DateTime, Float, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_uuid() -> uuid.UUID:
    return uuid.uuid4()


# ══════════════════════════════════════════════════════════════
# Accounts
# ══════════════════════════════════════════════════════════════


class User(Base):
    """A customer or an administrator.

    Learn: role is embedded in every token issued for this user, so a
    role change takes effect on the next login.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="user")
    fcm_token: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


# ══════════════════════════════════════════════════════════════
# Catalog
# ══════════════════════════════════════════════════════════════


class MenuCategory(Base):
    """A menu section (Burgers, Pizzas, ...). `type` is the stable slug."""

    __tablename__ = "menu_categories"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    background_image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    font_color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    background_color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


class MenuItem(Base):
    """Something a customer can order.

    Learn: category holds the category's `type` slug rather than a
    foreign key, and option_types names the option groups (e.g.
    "sauceOptions") the item can be customised with.
    """

    __tablename__ = "menu_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    option_types: Mapped[list] = mapped_column(JSON, default=list)
    removable_ingredients: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )


class MenuOption(Base):
    """A customisation choice (a sauce, a drink, a filling) grouped by type."""

    __tablename__ = "menu_options"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)


# ══════════════════════════════════════════════════════════════
# Orders
# ══════════════════════════════════════════════════════════════


class Order(Base):
    """A placed order.

    Learn: items is a JSON snapshot of each ordered menu item (name,
    price, category, ...) taken at placement time, so later catalog
    edits never rewrite order history.
    """

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=new_uuid)
    user_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    order_type: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    arrival_time: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    items: Mapped[list] = mapped_column(JSON, default=list)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="pending")
    order_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, index=True
    )


# ══════════════════════════════════════════════════════════════
# Restaurant settings
# ══════════════════════════════════════════════════════════════

MAIN_SETTINGS_ID = "main_settings"


def default_hours() -> dict:
    """Opening hours keyed by ISO weekday ("1" = Monday)."""
    weekday = {"is_open": True, "open_time": "11:00", "close_time": "22:00"}
    late = {"is_open": True, "open_time": "11:00", "close_time": "23:00"}
    return {
        "1": dict(weekday),
        "2": dict(weekday),
        "3": dict(weekday),
        "4": dict(weekday),
        "5": dict(late),
        "6": dict(late),
        "7": {"is_open": False, "open_time": "11:00", "close_time": "22:00"},
    }


class RestaurantSettings(Base):
    """Singleton row (id = "main_settings")."""

    __tablename__ = "restaurant_settings"

    id: Mapped[str] = mapped_column(String(50), primary_key=True, default=MAIN_SETTINGS_ID)
    hours: Mapped[dict] = mapped_column(JSON, default=default_hours)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow
    )
