# -*- coding: utf-8 -*-
"""Fridge — Pydantic models."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

FridgeCategory = Literal[
    "Fruits",
    "Légumes",
    "Viandes",
    "Poissons",
    "Produits laitiers",
    "Céréales",
    "Condiments",
    "Autre",
]
FridgeUnit = Literal["g", "kg", "ml", "L", "pcs", "cup", "tbsp"]
FridgeSortBy = Literal["name", "added_date", "expiration_date"]

FRIDGE_CATEGORIES: List[str] = [
    "Fruits",
    "Légumes",
    "Viandes",
    "Poissons",
    "Produits laitiers",
    "Céréales",
    "Condiments",
    "Autre",
]


class FridgeItem(BaseModel):
    id: str
    user_id: str
    name: str = Field(..., min_length=1, max_length=200)
    quantity: float = Field(..., ge=0)
    unit: FridgeUnit
    category: FridgeCategory
    expiration_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    added_date: str = Field(..., description="ISO8601 timestamp")
    image_url: Optional[str] = None
    notes: Optional[str] = None


class FridgeItemCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    quantity: float = Field(..., ge=0)
    unit: FridgeUnit
    category: FridgeCategory
    expiration_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    image_url: Optional[str] = None
    notes: Optional[str] = None


class FridgeItemUpdateRequest(BaseModel):
    """Partial update. An explicit ``expiration_date: null`` clears the date."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    quantity: Optional[float] = Field(None, ge=0)
    unit: Optional[FridgeUnit] = None
    category: Optional[FridgeCategory] = None
    expiration_date: Optional[str] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None


class ExpirationStatus(BaseModel):
    is_expired: bool = False
    is_expiring_soon: bool = False
    days_remaining: Optional[int] = None


class FridgeItemView(FridgeItem):
    expiration: ExpirationStatus = Field(default_factory=ExpirationStatus)


class FridgeStats(BaseModel):
    total_items: int
    items_by_category: Dict[str, int]
    expiring_count: int
    expired_count: int
    estimated_value: float
