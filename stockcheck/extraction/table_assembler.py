"""
TableAssembler: turn the rows under a located header into inventory items.

Steps:
1. headers = trimmed cells of the header row;
2. later rows filtered through :meth:`RowClassifier.is_plausible_data_row`;
3. synthetic "actual" and "status" columns inserted right after the
   required-quantity column (plus a file-stock copy when the source has one),
   shifting headers and every row by the same offsets;
4. one :class:`InventoryItem` per row via :class:`ColumnMapper`.

Malformed cells never raise: quantities fall back to 0.0, missing columns to
``""`` and unparsable storage codes are dropped.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from stockcheck.extraction.column_mapper import ColumnMapper
from stockcheck.extraction.config import DEFAULT_CONFIG, EngineConfig
from stockcheck.extraction.data_cleaner import DataCleaner
from stockcheck.extraction.row_classifier import RowClassifier
from stockcheck.extraction.storage_codec import StorageCodec
from stockcheck.logger import get_logger
from stockcheck.models import CanonicalField, CanonicalTable, InventoryItem

logger = get_logger(__name__)


class TableAssembler:

    def __init__(
        self,
        cfg: EngineConfig = DEFAULT_CONFIG,
        classifier: Optional[RowClassifier] = None,
        mapper: Optional[ColumnMapper] = None,
        codec: Optional[StorageCodec] = None,
    ):
        self._cfg = cfg
        self._classifier = classifier or RowClassifier(cfg)
        self._mapper = mapper or ColumnMapper(cfg)
        self._codec = codec or StorageCodec(cfg)

    # -----------------------------------------------------------------
    # Row filtering
    # -----------------------------------------------------------------

    def filter_rows(self, matrix: Sequence[Sequence[Any]], header_row_index: int) -> List[Tuple[int, List[str]]]:
        """``(source_index, cells)`` for every plausible data row below the header."""
        kept: List[Tuple[int, List[str]]] = []
        for idx in range(header_row_index + 1, len(matrix)):
            cells = DataCleaner.row_to_strs(matrix[idx])
            if self._classifier.is_plausible_data_row(cells):
                kept.append((idx, cells))
            elif self._classifier.has_content(cells):
                logger.debug("Row %s dropped: %s", idx, cells[0] if cells else "")
        return kept

    # -----------------------------------------------------------------
    # Synthetic columns
    # -----------------------------------------------------------------

    def insert_synthetic_columns(
        self,
        headers: List[str],
        rows: List[List[str]],
    ) -> Tuple[List[str], List[List[str]]]:
        """
        Insert "actual" and "status" after the required-quantity column, and a
        copy of the file-stock column after them when the source has one.

        Returns new lists; rows are padded to the header width first so every
        row shifts by the same offsets. Without a quantity column nothing is
        inserted.
        """
        qty_idx = self._mapper.column_for(headers, CanonicalField.REQUIRED_QTY)
        if qty_idx is None:
            return list(headers), [list(r) for r in rows]

        stock_idx = self._mapper.column_for(headers, CanonicalField.FILE_STOCK_QTY)
        if stock_idx == qty_idx:
            stock_idx = None

        width = len(headers)
        insert_at = qty_idx + 1
        synthetic = [self._cfg.actual_quantity_header, self._cfg.status_header]
        if stock_idx is not None:
            synthetic.append(self._cfg.file_stock_header)

        new_headers = list(headers[:insert_at]) + synthetic + list(headers[insert_at:])
        new_rows: List[List[str]] = []
        for row in rows:
            padded = list(row) + [""] * max(0, width - len(row))
            values = ["", ""]
            if stock_idx is not None:
                values.append(padded[stock_idx])
            new_rows.append(padded[:insert_at] + values + padded[insert_at:])

        logger.debug(
            "Inserted %s after column %s (%s)",
            ", ".join(synthetic),
            qty_idx,
            headers[qty_idx],
        )
        return new_headers, new_rows

    # -----------------------------------------------------------------
    # Items
    # -----------------------------------------------------------------

    def build_item(self, headers: Sequence[str], row: Sequence[str], source_row_index: int, columns=None) -> InventoryItem:
        values = self._mapper.map_row(headers, row, columns)
        return InventoryItem(
            article=values[CanonicalField.ARTICLE],
            name=values[CanonicalField.NAME],
            barcode=values[CanonicalField.BARCODE],
            required_quantity=DataCleaner.to_quantity(values[CanonicalField.REQUIRED_QTY]),
            # counted by the operator, never read from the file
            actual_quantity=0.0,
            unit=values[CanonicalField.UNIT],
            storage_locations=self._codec.parse_list(values[CanonicalField.STORAGE_CELLS]),
            file_stock_quantity=DataCleaner.to_quantity(values[CanonicalField.FILE_STOCK_QTY]),
            source_row_index=source_row_index,
        )

    def assemble(self, matrix: Sequence[Sequence[Any]], header_row_index: int) -> CanonicalTable:
        """
        Build the canonical table for *header_row_index*.

        The table may have zero items; the engine reports that case as an
        empty result.
        """
        if header_row_index < 0 or header_row_index >= len(matrix):
            raise IndexError(f"header_row_index {header_row_index} outside matrix of {len(matrix)} rows")

        headers = DataCleaner.row_to_strs(matrix[header_row_index])
        kept = self.filter_rows(matrix, header_row_index)
        source_indices = [idx for idx, _ in kept]
        headers, rows = self.insert_synthetic_columns(headers, [cells for _, cells in kept])

        columns = self._mapper.map_columns(headers)
        items = [
            self.build_item(headers, row, source_idx, columns)
            for source_idx, row in zip(source_indices, rows)
        ]
        logger.info("Assembled %s item(s) under header row %s", len(items), header_row_index)

        return CanonicalTable(
            header_row_index=header_row_index,
            headers=headers,
            items=items,
            original_matrix=[list(r) for r in matrix],
            column_mapping=list(range(len(headers))),
        )
