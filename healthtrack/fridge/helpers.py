# -*- coding: utf-8 -*-
"""Fridge — expiration status, statistics, sorting and filtering."""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from ..utils import parse_day
from .models import FRIDGE_CATEGORIES, ExpirationStatus, FridgeItem, FridgeItemView, FridgeStats

EXPIRING_SOON_DAYS = 3

# Average price per item, in euros.
CATEGORY_PRICES: Dict[str, float] = {
    "Fruits": 3,
    "Légumes": 2.5,
    "Viandes": 8,
    "Poissons": 10,
    "Produits laitiers": 4,
    "Céréales": 3,
    "Condiments": 5,
    "Autre": 3,
}


def get_expiration_status(expiration_date: Optional[str], today: Optional[date] = None) -> ExpirationStatus:
    expires = parse_day(expiration_date)
    if expires is None:
        return ExpirationStatus()
    remaining = (expires - (today or date.today())).days
    if remaining < 0:
        return ExpirationStatus(is_expired=True)
    return ExpirationStatus(
        is_expired=False,
        is_expiring_soon=remaining < EXPIRING_SOON_DAYS,
        days_remaining=remaining,
    )


def with_status(item: FridgeItem, today: Optional[date] = None) -> FridgeItemView:
    return FridgeItemView(**item.model_dump(), expiration=get_expiration_status(item.expiration_date, today))


def calculate_stats(items: List[FridgeItem], today: Optional[date] = None) -> FridgeStats:
    by_category = {c: 0 for c in FRIDGE_CATEGORIES}
    expiring = 0
    expired = 0
    for item in items:
        by_category[item.category] = by_category.get(item.category, 0) + 1
        status = get_expiration_status(item.expiration_date, today)
        if status.is_expired:
            expired += 1
        elif status.is_expiring_soon:
            expiring += 1
    value = sum(CATEGORY_PRICES.get(item.category, 3) for item in items)
    return FridgeStats(
        total_items=len(items),
        items_by_category=by_category,
        expiring_count=expiring,
        expired_count=expired,
        estimated_value=value,
    )


def get_expired_items(items: List[FridgeItem], today: Optional[date] = None) -> List[FridgeItem]:
    return [i for i in items if get_expiration_status(i.expiration_date, today).is_expired]


def sort_items(items: List[FridgeItem], sort_by: str) -> List[FridgeItem]:
    if sort_by == "name":
        return sorted(items, key=lambda i: i.name.lower())
    if sort_by == "added_date":
        return sorted(items, key=lambda i: i.added_date, reverse=True)
    if sort_by == "expiration_date":
        # Items without a date go last.
        return sorted(items, key=lambda i: (i.expiration_date is None, i.expiration_date or ""))
    return list(items)


def filter_items(
    items: List[FridgeItem], category: Optional[str] = None, search_query: Optional[str] = None
) -> List[FridgeItem]:
    out = list(items)
    if category:
        out = [i for i in out if i.category == category]
    q = (search_query or "").strip().lower()
    if q:
        out = [
            i
            for i in out
            if q in i.name.lower() or q in i.category.lower() or (i.notes and q in i.notes.lower())
        ]
    return out
