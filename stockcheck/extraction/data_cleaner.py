"""
DataCleaner: value normalisation utilities for the extraction engine.

Responsibilities:
- Cell-level string conversion (``cell_to_str``)
- Empty-cell / numeric-cell detection
- Quantity parsing with a 0.0 default for malformed cells
- Header-text normalisation for synonym matching
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, List, Sequence

import pandas as pd

from stockcheck.extraction.config import PURE_NUMBER_RE


class DataCleaner:
    """Stateless helper that normalises raw cell values and header text."""

    # ----- cell → string ---------------------------------------------------

    @staticmethod
    def is_empty(value: Any) -> bool:
        return DataCleaner.cell_to_str(value) == ""

    @staticmethod
    def cell_to_str(value: Any) -> str:
        """Convert an arbitrary cell value to a clean string."""
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, bool):
            return str(value).lower()
        if pd.isna(value):
            return ""
        if isinstance(value, (datetime, date, pd.Timestamp)):
            if isinstance(value, datetime):
                if value.time() == datetime.min.time():
                    return value.date().isoformat()
                return value.isoformat(sep=" ", timespec="seconds")
            return value.isoformat()
        # Numeric cells from a reader: 12.0 reads as "12"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        text = str(value).strip()
        if text.lower() in {"nan", "none", "nat"}:
            return ""
        return text

    @staticmethod
    def row_to_strs(row: Sequence[Any]) -> List[str]:
        return [DataCleaner.cell_to_str(c) for c in (row or [])]

    # ----- numbers ---------------------------------------------------------

    @staticmethod
    def is_numeric(text: Any) -> bool:
        return bool(PURE_NUMBER_RE.match(DataCleaner.cell_to_str(text)))

    @staticmethod
    def to_quantity(value: Any) -> float:
        """
        Parse a quantity cell; anything unparsable, negative or non-finite is 0.0.

        Accepts a comma decimal separator and thousands separated by spaces
        (``"1 200,5"``).
        """
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            number = float(value)
        else:
            text = DataCleaner.cell_to_str(value)
            text = re.sub(r"\s+", "", text).replace(",", ".")
            if not text:
                return 0.0
            try:
                number = float(text)
            except ValueError:
                return 0.0
        if not math.isfinite(number) or number < 0:
            return 0.0
        return number

    # ----- header text normalisation ---------------------------------------

    @staticmethod
    def normalize_header(text: Any) -> str:
        """Lower-case a header and collapse inner whitespace."""
        raw = DataCleaner.cell_to_str(text)
        return re.sub(r"\s+", " ", raw).strip().lower()
