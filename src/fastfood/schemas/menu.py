"""Pydantic schemas for the menu catalog: categories, items, options.

Learn: Pydantic v2 models validate request/response data. Separate
"Create"/"Update" schemas (input) from "Read" schemas (output). Update
schemas are all-optional; only fields actually sent are applied.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


# ─── Categories ─────────────────────────────────────────

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1, max_length=100)
    font_color: Optional[str] = None
    background_color: Optional[str] = None
    background_image_url: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    font_color: Optional[str] = None
    background_color: Optional[str] = None


class CategoryRead(BaseModel):
    id: uuid.UUID
    name: str
    type: str
    font_color: Optional[str] = None
    background_color: Optional[str] = None
    background_image_url: Optional[str] = None

    model_config = {"from_attributes": True}


# ─── Menu items ─────────────────────────────────────────

class MenuItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: float = Field(..., ge=0)
    image_url: Optional[str] = None
    category: str = Field(..., min_length=1)
    option_types: list[str] = Field(default_factory=list)
    removable_ingredients: list[str] = Field(default_factory=list)


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    image_url: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    option_types: Optional[list[str]] = None
    removable_ingredients: Optional[list[str]] = None


class MenuItemRead(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    category: str
    option_types: list[str] = []
    removable_ingredients: list[str] = []

    model_config = {"from_attributes": True}


# ─── Options ────────────────────────────────────────────

class OptionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1, max_length=100)
    image_url: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)


class OptionUpdate(BaseModel):
    """An option's type is fixed once created."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    image_url: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)


class OptionRead(BaseModel):
    id: uuid.UUID
    name: str
    type: str
    image_url: Optional[str] = None
    price: Optional[float] = None

    model_config = {"from_attributes": True}
