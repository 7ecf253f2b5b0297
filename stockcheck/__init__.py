"""
stockcheck: extract inventory line-items from noisy spreadsheet exports and
reconcile them against counted quantities.
"""

from stockcheck.extraction import ExtractionEngine, ExtractionResult, ExtractionStatus
from stockcheck.models import CanonicalField, CanonicalTable, InventoryItem, StorageLocation
from stockcheck.reconciliation import ReconciliationStatus, derive_status

__version__ = "0.1.0"

__all__ = [
    "ExtractionEngine",
    "ExtractionResult",
    "ExtractionStatus",
    "CanonicalField",
    "CanonicalTable",
    "InventoryItem",
    "StorageLocation",
    "ReconciliationStatus",
    "derive_status",
]
