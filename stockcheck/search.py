"""
Search, filtering and sorting over extracted items.

All functions return new lists and leave their input untouched.
"""

from enum import Enum
from typing import List, Sequence

from stockcheck.models import InventoryItem
from stockcheck.reconciliation import ReconciliationStatus


class SortCriteria(str, Enum):
    ARTICLE_ASC = "article_asc"
    ARTICLE_DESC = "article_desc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    QUANTITY_ASC = "quantity_asc"
    QUANTITY_DESC = "quantity_desc"
    STATUS = "status"


_STATUS_ORDER = {status: pos for pos, status in enumerate(ReconciliationStatus)}


def search_items(items: Sequence[InventoryItem], query: str) -> List[InventoryItem]:
    """Case-insensitive search over article, name, barcode and storage locations."""
    if not query or not query.strip():
        return list(items)
    needle = query.strip().lower()
    return [
        item for item in items
        if needle in item.article.lower()
        or needle in item.name.lower()
        or needle in item.barcode.lower()
        or needle in item.storage_locations_display().lower()
    ]


def filter_by_status(items: Sequence[InventoryItem], status: ReconciliationStatus) -> List[InventoryItem]:
    return [item for item in items if item.status == status]


def filter_by_storage_location(items: Sequence[InventoryItem], cell_query: str) -> List[InventoryItem]:
    if not cell_query or not cell_query.strip():
        return list(items)
    needle = cell_query.strip().lower()
    return [item for item in items if needle in item.storage_locations_display().lower()]


def sort_items(items: Sequence[InventoryItem], criteria: SortCriteria) -> List[InventoryItem]:
    if criteria is SortCriteria.ARTICLE_ASC:
        return sorted(items, key=lambda i: i.article)
    if criteria is SortCriteria.ARTICLE_DESC:
        return sorted(items, key=lambda i: i.article, reverse=True)
    if criteria is SortCriteria.NAME_ASC:
        return sorted(items, key=lambda i: i.name)
    if criteria is SortCriteria.NAME_DESC:
        return sorted(items, key=lambda i: i.name, reverse=True)
    if criteria is SortCriteria.QUANTITY_ASC:
        return sorted(items, key=lambda i: i.required_quantity)
    if criteria is SortCriteria.QUANTITY_DESC:
        return sorted(items, key=lambda i: i.required_quantity, reverse=True)
    if criteria is SortCriteria.STATUS:
        return sorted(items, key=lambda i: _STATUS_ORDER[i.status])
    raise ValueError(f"Unknown sort criteria: {criteria!r}")
