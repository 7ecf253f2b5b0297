"""
Export shaping: turn a canonical table into rows or a DataFrame for an
external writer. No files are written here.
"""

from typing import Any, List, Sequence

import pandas as pd

from stockcheck.extraction.data_cleaner import DataCleaner
from stockcheck.models import CanonicalTable
from stockcheck.reconciliation import format_actual_quantity, format_quantity, status_symbol

EXPORT_HEADERS = ["Артикул", "Наименование", "Кол-во", "Факт", "Статус", "Ячейки"]

DATAFRAME_COLUMNS = [
    "source_row_index",
    "article",
    "name",
    "barcode",
    "unit",
    "required_quantity",
    "actual_quantity",
    "file_stock_quantity",
    "status",
    "storage_locations",
]


def validate_matrix(matrix: Sequence[Sequence[Any]]) -> bool:
    """True when the matrix has at least one non-blank cell."""
    return any(not DataCleaner.is_empty(cell) for row in (matrix or []) for cell in (row or []))


def to_export_rows(table: CanonicalTable) -> List[List[str]]:
    """Header row followed by one display row per item."""
    rows: List[List[str]] = [list(EXPORT_HEADERS)]
    for item in table.items:
        rows.append([
            item.article,
            item.name,
            format_quantity(item.required_quantity),
            format_actual_quantity(item.actual_quantity),
            status_symbol(item.status),
            item.storage_locations_display(),
        ])
    return rows


def to_dataframe(table: CanonicalTable) -> pd.DataFrame:
    records = [
        {
            "source_row_index": item.source_row_index,
            "article": item.article,
            "name": item.name,
            "barcode": item.barcode,
            "unit": item.unit,
            "required_quantity": item.required_quantity,
            "actual_quantity": item.actual_quantity,
            "file_stock_quantity": item.file_stock_quantity,
            "status": item.status.value,
            "storage_locations": item.storage_locations_display(),
        }
        for item in table.items
    ]
    return pd.DataFrame.from_records(records, columns=DATAFRAME_COLUMNS)
