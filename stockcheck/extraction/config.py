"""
Centralised configuration for the extraction engine.

Synonym lists, denylist terms, keyword weights, acceptance thresholds and the
storage-location grid all live here so that the components stay free of
hard-coded values. ``EngineConfig`` is built once and injected into every
component; ``stockcheck.profile_loader`` derives overridden copies from YAML.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

from stockcheck.models import CanonicalField


# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (shared across modules)
# ---------------------------------------------------------------------------

PURE_NUMBER_RE = re.compile(r"^\s*-?\d+(?:[.,]\d+)?\s*$")
INTEGER_RE = re.compile(r"^\s*\d+\s*$")
ISO_DATE_RE = re.compile(r"^\s*\d{4}-\d{1,2}-\d{1,2}(?:[ T]\d{1,2}:\d{2}(?::\d{2})?)?")
STARTS_WITH_LETTER_RE = re.compile(r"^[^\W\d_]")

# Letter, then three numeric groups: A1-1-1, S13-3-4
STORAGE_CODE_PATTERN = r"([A-Z])([0-9]+)-([0-9]+)-([0-9]+)"


# ---------------------------------------------------------------------------
# Default vocabularies
# ---------------------------------------------------------------------------

DEFAULT_FIELD_SYNONYMS: Dict[CanonicalField, Tuple[str, ...]] = {
    CanonicalField.ARTICLE: ("артикул", "арт.", "код товара", "article", "sku"),
    CanonicalField.NAME: (
        "наименование", "товар", "название", "номенклатура", "работы", "услуги", "name",
    ),
    CanonicalField.BARCODE: ("штрихкод", "штрих-код", "штрих", "barcode", "ean"),
    CanonicalField.REQUIRED_QTY: ("количество", "кол-во", "колво", "кол.", "qty", "quantity"),
    CanonicalField.UNIT: ("ед. изм.", "ед.изм.", "ед.", "ед", "единица", "unit"),
    CanonicalField.STORAGE_CELLS: (
        "ячейка хранения", "ячейки", "ячейка", "место хранения", "хранение", "location",
    ),
    CanonicalField.FILE_STOCK_QTY: ("остаток", "остатки", "stock"),
}

DEFAULT_SERVICE_ROW_TERMS: Tuple[str, ...] = (
    # totals
    "итого", "всего", "сумма прописью",
    # signatures
    "подпись", "исполнитель", "руководитель", "бухгалтер", "м.п.",
    "отпуск", "принял", "сдал",
    # counterparties
    "заказчик", "поставщик", "получатель", "плательщик", "груз", "договор",
    # addresses
    "адрес",
)

# Organisation identifiers and legal forms; matched as whole words only, so
# "ООО«Ромашка»" is a service row and "Ключ длинный" is not.
DEFAULT_SERVICE_ROW_WORDS: Tuple[str, ...] = (
    "инн", "кпп", "огрн", "р/с", "ооо", "оао", "зао", "пао",
)

# Genitive forms first: "26 сентября 2025" is the usual export layout.
DEFAULT_MONTH_NAMES: Tuple[str, ...] = (
    "января", "февраля", "марта", "апреля", "мая", "июня",
    "июля", "августа", "сентября", "октября", "ноября", "декабря",
    "январь", "февраль", "март", "апрель", "май", "июнь",
    "июль", "август", "сентябрь", "октябрь", "ноябрь", "декабрь",
)

DEFAULT_ARTICLE_CODE_PATTERNS: Tuple[str, ...] = (
    r"valmo\d+",
    r"арт\.?\s*\d+",
    r"[a-zа-яё]{2,}[-_]?\d{3,}",
)

DEFAULT_STORAGE_SHORTHAND_PATTERNS: Tuple[str, ...] = (
    r"[A-Z]\d{1,2}",
    r"[A-Z]\d{1,2}-\d",
)


@dataclass(frozen=True)
class KeywordGroup:
    """One header keyword group: a cell scores the group weight on any hit."""

    name: str
    contains: Tuple[str, ...] = ()
    exact: Tuple[str, ...] = ()

    def matches(self, lower_cell: str) -> bool:
        if lower_cell in self.exact:
            return True
        return any(term in lower_cell for term in self.contains)


# Checked in order; the first matching group decides a cell's score.
DEFAULT_KEYWORD_GROUPS: Tuple[KeywordGroup, ...] = (
    KeywordGroup("row_number", exact=("№", "номер", "№ п/п", "п/п")),
    KeywordGroup("article", contains=("артикул",)),
    KeywordGroup("name", contains=("товар", "наименование", "работы", "услуги")),
    KeywordGroup("quantity", contains=("кол-во", "количество", "колво")),
    KeywordGroup("unit", contains=("единица", "ед"), exact=("ед.",)),
    KeywordGroup("barcode", contains=("штрих",)),
    KeywordGroup("storage_cell", contains=("ячейка", "хранение")),
    KeywordGroup("file_stock", contains=("остаток",)),
    KeywordGroup("receipt", contains=("поступление",)),
)

DEFAULT_HEADER_WEIGHTS: Dict[str, float] = {
    "row_number": 1.5,
    "article": 1.5,
    "name": 1.5,
    "quantity": 1.5,
    "unit": 1.0,
    "barcode": 1.0,
    "storage_cell": 1.0,
    "file_stock": 1.0,
    "receipt": 0.3,
    # bonus for a bare integer in the first cell of a scored row
    "leading_number": 0.8,
}


@dataclass(frozen=True)
class AcceptanceThresholds:
    primary: float = 3.0
    fallback: float = 1.5


@dataclass(frozen=True)
class LocationRanges:
    section: Tuple[int, int] = (1, 13)
    shelf: Tuple[int, int] = (1, 3)
    bin: Tuple[int, int] = (1, 4)


# ---------------------------------------------------------------------------
# EngineConfig
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EngineConfig:
    """Immutable bag of vocabularies and thresholds used by every component."""

    field_synonyms: Dict[CanonicalField, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_FIELD_SYNONYMS)
    )
    service_row_terms: Tuple[str, ...] = DEFAULT_SERVICE_ROW_TERMS
    service_row_words: Tuple[str, ...] = DEFAULT_SERVICE_ROW_WORDS
    month_names: Tuple[str, ...] = DEFAULT_MONTH_NAMES

    # Header scoring
    keyword_groups: Tuple[KeywordGroup, ...] = DEFAULT_KEYWORD_GROUPS
    header_weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_HEADER_WEIGHTS))
    acceptance_thresholds: AcceptanceThresholds = AcceptanceThresholds()
    header_scan_width: int = 20
    # A primary-scan header must hit this many distinct strong groups
    strong_header_groups: Tuple[str, ...] = ("row_number", "article", "name", "quantity")
    min_strong_groups: int = 2

    # Anchor-from-data fallback
    anchor_window: int = 20
    anchor_min_cells: int = 3

    # Row plausibility / name fallback
    article_code_patterns: Tuple[str, ...] = DEFAULT_ARTICLE_CODE_PATTERNS
    storage_shorthand_patterns: Tuple[str, ...] = DEFAULT_STORAGE_SHORTHAND_PATTERNS

    # Storage grid
    location_alphabet: Tuple[str, ...] = ("A", "B", "C", "D", "F", "I", "J", "K", "S")
    location_ranges: LocationRanges = LocationRanges()

    # Synthetic columns
    actual_quantity_header: str = "Факт"
    status_header: str = "Статус"
    file_stock_header: str = "Остаток (файл)"

    def synonyms_for(self, canonical: CanonicalField) -> Tuple[str, ...]:
        return tuple(self.field_synonyms.get(canonical, ()))

    def weight_for(self, group_name: str) -> float:
        return float(self.header_weights.get(group_name, 0.0))

    def with_overrides(self, **overrides: Any) -> "EngineConfig":
        """Return a copy with *overrides* applied; unknown names raise ``TypeError``."""
        return replace(self, **overrides)


DEFAULT_CONFIG = EngineConfig()
