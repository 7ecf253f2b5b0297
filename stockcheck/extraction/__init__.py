"""
Extraction subpackage.

Public API:
  - ExtractionEngine       (orchestrator, in engine.py)
  - HeaderLocator          (header row identification)
  - TableAssembler         (row filtering, synthetic columns, items)
  - ColumnMapper           (header -> canonical field matching)
  - RowClassifier          (service-row / data-row decisions)
  - StorageCodec           (storage-location codes)
  - EngineConfig           (tunable vocabularies and thresholds)
"""

from stockcheck.extraction.config import DEFAULT_CONFIG, EngineConfig
from stockcheck.extraction.data_cleaner import DataCleaner
from stockcheck.extraction.storage_codec import StorageCodec
from stockcheck.extraction.column_mapper import ColumnMapper
from stockcheck.extraction.row_classifier import RowClassifier
from stockcheck.extraction.header_locator import HeaderLocation, HeaderLocator
from stockcheck.extraction.table_assembler import TableAssembler
from stockcheck.extraction.engine import ExtractionEngine, ExtractionResult, ExtractionStatus
from stockcheck.extraction.exceptions import (
    EmptyTableError,
    ExtractionError,
    ProfileError,
    TableNotFoundError,
)

__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "DataCleaner",
    "StorageCodec",
    "ColumnMapper",
    "RowClassifier",
    "HeaderLocation",
    "HeaderLocator",
    "TableAssembler",
    "ExtractionEngine",
    "ExtractionResult",
    "ExtractionStatus",
    "ExtractionError",
    "TableNotFoundError",
    "EmptyTableError",
    "ProfileError",
]
