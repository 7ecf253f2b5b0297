"""
RowClassifier: tell service rows (totals, signatures, counterparties, dates)
from rows that may carry a product.

Only the first cell decides whether a row is a service row; the denylist and
month names come from :class:`EngineConfig` and are shared by header search
and row filtering.
"""

from __future__ import annotations

import re
from typing import Any, Sequence

from stockcheck.extraction.config import (
    DEFAULT_CONFIG,
    ISO_DATE_RE,
    STARTS_WITH_LETTER_RE,
    EngineConfig,
)
from stockcheck.extraction.data_cleaner import DataCleaner


class RowClassifier:

    def __init__(self, cfg: EngineConfig = DEFAULT_CONFIG):
        self._cfg = cfg
        self._terms = tuple(t.lower() for t in cfg.service_row_terms if t)
        words = "|".join(re.escape(w.strip().lower()) for w in cfg.service_row_words if w and w.strip())
        self._words_re = re.compile(rf"(?<!\w)(?:{words})(?!\w)") if words else None
        months = "|".join(re.escape(m.lower()) for m in cfg.month_names if m)
        self._month_date_re = re.compile(rf"^\d{{1,2}}\s+(?:{months})\s+\d{{4}}") if months else None
        self._article_res = tuple(re.compile(p, re.IGNORECASE) for p in cfg.article_code_patterns)

    # ------------------------------------------------------------------

    def is_date_like(self, text: Any) -> bool:
        value = DataCleaner.cell_to_str(text).lower()
        if not value:
            return False
        if ISO_DATE_RE.match(value):
            return True
        return bool(self._month_date_re and self._month_date_re.match(value))

    def is_service_row(self, first_cell: Any) -> bool:
        """True for totals/signature/counterparty/address lines and date lines."""
        value = DataCleaner.cell_to_str(first_cell).lower()
        if not value:
            return False
        if any(term in value for term in self._terms):
            return True
        if self._words_re and self._words_re.search(value):
            return True
        return self.is_date_like(value)

    def is_article_code(self, text: Any) -> bool:
        value = DataCleaner.cell_to_str(text)
        return bool(value) and any(r.fullmatch(value) for r in self._article_res)

    @staticmethod
    def has_content(row: Sequence[Any]) -> bool:
        return any(not DataCleaner.is_empty(c) for c in (row or []))

    def is_plausible_data_row(self, row: Sequence[Any]) -> bool:
        """
        A row survives when it has content, is not a service row and its first
        cell is blank, an integer, starts with a letter or is an article code.
        """
        if not self.has_content(row):
            return False
        first = DataCleaner.cell_to_str(row[0]) if row else ""
        if self.is_service_row(first):
            return False
        if not first:
            return True
        return bool(
            DataCleaner.is_numeric(first)
            or STARTS_WITH_LETTER_RE.match(first)
            or self.is_article_code(first)
        )
