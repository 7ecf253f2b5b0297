"""
ColumnMapper: map arbitrary header text onto canonical fields.

Resolution order for one field:
1. exact (case-insensitive) match of a header against any synonym;
2. only when no exact match exists, substring match in either direction,
   synonyms tried most-specific first; a header that is an exact synonym of
   another field is left to that field;
3. when the field is still empty, the ordered fallback strategies registered
   for it (longest plausible text for NAME, code-pattern scan for
   STORAGE_CELLS).
"""

from __future__ import annotations

import re
from typing import Any, Collection, Dict, List, Optional, Sequence, Set, Tuple

from stockcheck.extraction.config import DEFAULT_CONFIG, STORAGE_CODE_PATTERN, EngineConfig
from stockcheck.extraction.data_cleaner import DataCleaner
from stockcheck.models import CanonicalField


def _cell(row_cells: Sequence[Any], idx: Optional[int]) -> str:
    if idx is None or idx < 0 or idx >= len(row_cells):
        return ""
    return DataCleaner.cell_to_str(row_cells[idx])


# ---------------------------------------------------------------------------
# Fallback strategies
# ---------------------------------------------------------------------------

class FallbackStrategy:
    """
    Heuristic used when synonym matching leaves a field empty.

    ``apply`` returns ``(column_index, value)`` or ``(None, "")``. Columns in
    *claimed* already belong to another canonical field.
    """

    tag: str = ""
    field: CanonicalField

    def apply(
        self,
        headers: Sequence[str],
        row_cells: Sequence[Any],
        claimed: Set[int],
    ) -> Tuple[Optional[int], str]:
        raise NotImplementedError


class LongestTextNameFallback(FallbackStrategy):
    """Pick the longest unclaimed cell that is neither a number nor a code."""

    tag = "longest_text"
    field = CanonicalField.NAME

    def __init__(self, cfg: EngineConfig = DEFAULT_CONFIG):
        self._article_res = tuple(re.compile(p, re.IGNORECASE) for p in cfg.article_code_patterns)
        self._storage_re = re.compile(STORAGE_CODE_PATTERN)

    def _is_candidate(self, text: str) -> bool:
        if not text or DataCleaner.is_numeric(text):
            return False
        if any(r.fullmatch(text) for r in self._article_res):
            return False
        return not self._storage_re.search(text)

    def apply(self, headers, row_cells, claimed):
        best_idx: Optional[int] = None
        best = ""
        for idx in range(len(row_cells)):
            if idx in claimed:
                continue
            text = _cell(row_cells, idx)
            if self._is_candidate(text) and len(text) > len(best):
                best_idx, best = idx, text
        return best_idx, best


class StoragePatternFallback(FallbackStrategy):
    """
    First unclaimed column holding a full storage code; only when none does,
    the first one holding a short zone+number.
    """

    tag = "storage_pattern"
    field = CanonicalField.STORAGE_CELLS

    def __init__(self, cfg: EngineConfig = DEFAULT_CONFIG):
        self._storage_re = re.compile(STORAGE_CODE_PATTERN)
        self._shorthand_res = tuple(re.compile(p) for p in cfg.storage_shorthand_patterns)

    def apply(self, headers, row_cells, claimed):
        cells = [(idx, _cell(row_cells, idx)) for idx in range(len(row_cells)) if idx not in claimed]
        for idx, text in cells:
            if text and self._storage_re.search(text):
                return idx, text
        for idx, text in cells:
            if text and any(r.fullmatch(text) for r in self._shorthand_res):
                return idx, text
        return None, ""


def default_fallbacks(cfg: EngineConfig = DEFAULT_CONFIG) -> List[FallbackStrategy]:
    return [LongestTextNameFallback(cfg), StoragePatternFallback(cfg)]


# ---------------------------------------------------------------------------
# ColumnMapper
# ---------------------------------------------------------------------------

class ColumnMapper:
    """
    Resolve canonical field values from one data row.

    Typical use inside the assembler::

        mapper = ColumnMapper(cfg)
        values = mapper.map_row(headers, row_cells)
        values[CanonicalField.NAME]
    """

    def __init__(
        self,
        cfg: EngineConfig = DEFAULT_CONFIG,
        fallbacks: Optional[Sequence[FallbackStrategy]] = None,
    ):
        self._cfg = cfg
        self._fallbacks = list(fallbacks) if fallbacks is not None else default_fallbacks(cfg)

    @property
    def fallbacks(self) -> List[FallbackStrategy]:
        return list(self._fallbacks)

    @staticmethod
    def find_column(
        headers: Sequence[Any],
        synonyms: Sequence[str],
        reserved: Collection[str] = (),
    ) -> Optional[int]:
        """
        Index of the header matching *synonyms*, exact matches first; ``None`` if none.

        Headers listed in *reserved* (exact synonyms of other fields) are never
        taken by the substring pass: "Товар" must not become an article column
        just because it is contained in "код товара".
        """
        normed = [DataCleaner.normalize_header(h) for h in headers]
        terms = [s.strip().lower() for s in synonyms if s and s.strip()]

        for term in terms:
            for idx, header in enumerate(normed):
                if header and header == term:
                    return idx

        for term in terms:
            for idx, header in enumerate(normed):
                if not header or header in reserved:
                    continue
                if term in header or header in term:
                    return idx
        return None

    def reserved_headers(self, canonical: CanonicalField) -> Set[str]:
        """Normalised synonyms of every field other than *canonical*."""
        return {
            term.strip().lower()
            for f, terms in self._cfg.field_synonyms.items() if f is not canonical
            for term in terms if term and term.strip()
        }

    def column_for(self, headers: Sequence[Any], canonical: CanonicalField) -> Optional[int]:
        return self.find_column(headers, self._cfg.synonyms_for(canonical), self.reserved_headers(canonical))

    def resolve(self, headers: Sequence[Any], row_cells: Sequence[Any], synonyms: Sequence[str]) -> str:
        """Value of the matched column, or ``""`` when nothing matches or the row is too short."""
        return _cell(row_cells, self.find_column(headers, synonyms))

    def map_columns(self, headers: Sequence[Any]) -> Dict[CanonicalField, Optional[int]]:
        return {f: self.column_for(headers, f) for f in CanonicalField}

    def map_row(
        self,
        headers: Sequence[Any],
        row_cells: Sequence[Any],
        columns: Optional[Dict[CanonicalField, Optional[int]]] = None,
    ) -> Dict[CanonicalField, str]:
        """
        Resolve every canonical field for one row, then run the fallbacks for
        the fields that stayed empty. *columns* can be precomputed with
        :meth:`map_columns` when many rows share the same headers.
        """
        if columns is None:
            columns = self.map_columns(headers)
        values = {f: _cell(row_cells, idx) for f, idx in columns.items()}
        claimed = {idx for f, idx in columns.items() if idx is not None and f is not CanonicalField.NAME}

        for strategy in self._fallbacks:
            if values.get(strategy.field):
                continue
            _, value = strategy.apply(headers, row_cells, claimed)
            if value:
                values[strategy.field] = value
        return values
