"""
Data model
==========

Core structures that flow through extraction: storage locations, inventory
items and the canonical table handed to presentation/export layers.
"""

import math
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, computed_field, field_validator

from stockcheck.reconciliation import ReconciliationStatus, derive_status


class CanonicalField(str, Enum):
    """Semantic columns that arbitrary source headers are mapped onto."""
    ARTICLE = "article"
    NAME = "name"
    BARCODE = "barcode"
    REQUIRED_QTY = "required_qty"
    UNIT = "unit"
    STORAGE_CELLS = "storage_cells"
    FILE_STOCK_QTY = "file_stock_qty"


class StorageLocation(BaseModel):
    """
    Physical storage slot, displayed as ``{zone}{section}-{shelf}-{bin}``.

    Attributes:
        zone: single letter of the warehouse zone
        section: rack section number
        shelf: shelf level inside the section
        bin: bin position on the shelf
    """
    zone: str
    section: int
    shelf: int
    bin: int

    class Config:
        frozen = True

    def to_display_string(self) -> str:
        return f"{self.zone}{self.section}-{self.shelf}-{self.bin}"

    def __str__(self) -> str:
        return self.to_display_string()


def _check_quantity(v: float) -> float:
    if not math.isfinite(v) or v < 0:
        raise ValueError(f"quantity must be a finite non-negative number, got {v!r}")
    return v


def dedupe_locations(locations: List[StorageLocation]) -> List[StorageLocation]:
    seen = set()
    unique: List[StorageLocation] = []
    for loc in locations:
        key = loc.to_display_string()
        if key in seen:
            continue
        seen.add(key)
        unique.append(loc)
    return unique


class InventoryItem(BaseModel):
    """
    One line-item of a waybill, ready for physical counting.

    ``status`` is computed from the quantities on every read, so it follows
    any change of ``actual_quantity``, whether through the helpers below or a
    plain assignment (assignments are validated too).
    """
    article: str = ""
    name: str = ""
    barcode: str = ""
    required_quantity: float = 0.0
    actual_quantity: float = 0.0
    unit: str = ""
    storage_locations: List[StorageLocation] = []
    file_stock_quantity: float = 0.0
    source_row_index: int = 0

    class Config:
        validate_assignment = True

    @field_validator("required_quantity", "actual_quantity", "file_stock_quantity")
    @classmethod
    def validate_quantity(cls, v: float) -> float:
        return _check_quantity(v)

    @field_validator("storage_locations")
    @classmethod
    def validate_locations(cls, v: List[StorageLocation]) -> List[StorageLocation]:
        return dedupe_locations(v)

    @computed_field
    @property
    def status(self) -> ReconciliationStatus:
        return derive_status(self.required_quantity, self.actual_quantity)

    def update_actual_quantity(self, quantity: float) -> ReconciliationStatus:
        """Record the counted quantity and return the recomputed status."""
        self.actual_quantity = _check_quantity(float(quantity))
        return self.status

    def add_storage_location(self, location: StorageLocation) -> bool:
        """Append *location* unless one with the same display string is present."""
        key = location.to_display_string()
        added = all(loc.to_display_string() != key for loc in self.storage_locations)
        if added:
            self.storage_locations = self.storage_locations + [location]
        return added

    def remove_storage_location(self, display_string: str) -> bool:
        target = (display_string or "").strip()
        kept = [loc for loc in self.storage_locations if loc.to_display_string() != target]
        removed = len(kept) != len(self.storage_locations)
        self.storage_locations = kept
        return removed

    def storage_locations_display(self) -> str:
        return ", ".join(loc.to_display_string() for loc in self.storage_locations)


class CanonicalTable(BaseModel):
    """
    Result of one extraction.

    Attributes:
        header_row_index: index of the header row in ``original_matrix``
        headers: final headers, synthetic columns included
        items: extracted line-items in source order
        original_matrix: the untouched input rows, kept for export
        column_mapping: identity mapping over the final header width
    """
    header_row_index: int
    headers: List[str]
    items: List[InventoryItem]
    original_matrix: List[List[Any]]
    column_mapping: List[int]

    class Config:
        frozen = True
