"""
Reconciliation rules: status derivation and quantity formatting.

The status of an item is never cached on its own; every change of the counted
quantity goes back through :func:`derive_status`.
"""

from __future__ import annotations

from enum import Enum


class ReconciliationStatus(str, Enum):
    """Outcome of comparing the counted quantity with the required one."""
    PENDING = "pending"
    MATCH = "match"
    MISMATCH = "mismatch"


_STATUS_SYMBOLS = {
    ReconciliationStatus.PENDING: "",
    ReconciliationStatus.MATCH: "✓",
    ReconciliationStatus.MISMATCH: "⚠",
}

_STATUS_COLORS = {
    ReconciliationStatus.PENDING: "gray",
    ReconciliationStatus.MATCH: "green",
    ReconciliationStatus.MISMATCH: "yellow",
}


def derive_status(required: float, actual: float) -> ReconciliationStatus:
    """
    Derive the reconciliation status.

    ``actual == 0`` means "not counted yet" and wins over everything else;
    otherwise the two quantities must be exactly equal to match.
    """
    if actual == 0:
        return ReconciliationStatus.PENDING
    if actual == required:
        return ReconciliationStatus.MATCH
    return ReconciliationStatus.MISMATCH


def format_quantity(quantity: float) -> str:
    """Render integral quantities without a decimal point (``12.0`` -> ``"12"``)."""
    if float(quantity).is_integer():
        return str(int(quantity))
    return str(float(quantity))


def format_actual_quantity(quantity: float) -> str:
    """Like :func:`format_quantity`, but an uncounted (zero) quantity renders empty."""
    if quantity == 0:
        return ""
    return format_quantity(quantity)


def status_symbol(status: ReconciliationStatus) -> str:
    return _STATUS_SYMBOLS[ReconciliationStatus(status)]


def status_color(status: ReconciliationStatus) -> str:
    return _STATUS_COLORS[ReconciliationStatus(status)]
