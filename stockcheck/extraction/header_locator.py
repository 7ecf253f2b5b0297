"""
HeaderLocator: identify which row of a raw matrix is the table header.

Rows are scored by header keywords (article, name, quantity, unit, ...), each
keyword group carrying its own weight. Three strategies run in order:

1. ``keyword_scan``   whole matrix; the best row at the primary threshold that
                      hits at least two distinct strong groups, else the first
                      row at the lower fallback threshold;
2. ``data_anchor``    find a row that looks like product data and search the
                      rows just above it for a weaker header;
3. not found         a normal outcome for malformed input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Set

from stockcheck.extraction.config import DEFAULT_CONFIG, INTEGER_RE, EngineConfig
from stockcheck.extraction.data_cleaner import DataCleaner
from stockcheck.extraction.row_classifier import RowClassifier
from stockcheck.logger import get_logger

logger = get_logger(__name__)

STRATEGY_KEYWORD_SCAN = "keyword_scan"
STRATEGY_KEYWORD_SCAN_FORWARD = "keyword_scan_forward"
STRATEGY_DATA_ANCHOR = "data_anchor"
STRATEGY_NOT_FOUND = "not_found"


@dataclass
class HeaderCandidate:
    row_index: int
    score: float
    matched_keywords: Set[str] = field(default_factory=set)


@dataclass
class HeaderLocation:
    """
    Result of :meth:`HeaderLocator.locate`.

    ``row_index`` is ``-1`` when no header was found; ``debug`` carries the
    scored rows and the reason the winner was chosen.
    """
    row_index: int
    strategy: str
    score: float = 0.0
    matched_keywords: Set[str] = field(default_factory=set)
    debug: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.row_index >= 0


class HeaderLocator:

    def __init__(self, cfg: EngineConfig = DEFAULT_CONFIG, classifier: Optional[RowClassifier] = None):
        self._cfg = cfg
        self._classifier = classifier or RowClassifier(cfg)
        self._article_res = tuple(re.compile(p, re.IGNORECASE) for p in cfg.article_code_patterns)

    # -----------------------------------------------------------------
    # Scoring
    # -----------------------------------------------------------------

    def match_group(self, cell: Any) -> Optional[str]:
        """Name of the first keyword group the cell hits, or ``None``."""
        lower = DataCleaner.normalize_header(cell)
        if not lower:
            return None
        for group in self._cfg.keyword_groups:
            if group.matches(lower):
                return group.name
        return None

    def score_row(
        self,
        row: Sequence[Any],
        row_index: int = 0,
        width: Optional[int] = None,
        leading_number_bonus: bool = True,
    ) -> HeaderCandidate:
        """
        Weighted keyword score over the first *width* cells of *row*.

        A bare integer in the first cell adds the ``leading_number`` weight
        unless *leading_number_bonus* is off.
        """
        cells = DataCleaner.row_to_strs(row)
        if width is not None:
            cells = cells[:width]
        candidate = HeaderCandidate(row_index=row_index, score=0.0)
        for col, cell in enumerate(cells):
            if not cell:
                continue
            group = self.match_group(cell)
            if group is not None:
                candidate.score += self._cfg.weight_for(group)
                candidate.matched_keywords.add(group)
            elif leading_number_bonus and col == 0 and INTEGER_RE.match(cell):
                candidate.score += self._cfg.weight_for("leading_number")
                candidate.matched_keywords.add("leading_number")
        return candidate

    def is_candidate_row(self, row: Sequence[Any]) -> bool:
        if not self._classifier.has_content(row):
            return False
        return not self._classifier.is_service_row(row[0])

    # -----------------------------------------------------------------
    # Strategy 1: keyword-scored scan
    # -----------------------------------------------------------------

    def _strong_hits(self, cand: HeaderCandidate) -> int:
        return len(cand.matched_keywords & set(self._cfg.strong_header_groups))

    def _keyword_scan(self, rows: List[List[str]], scanned: List[dict]) -> Optional[HeaderLocation]:
        thresholds = self._cfg.acceptance_thresholds
        width = self._cfg.header_scan_width
        candidates: List[HeaderCandidate] = []
        for i, row in enumerate(rows):
            if not self.is_candidate_row(row) or self.looks_like_data_anchor(row):
                continue
            cand = self.score_row(row, i, width=width)
            candidates.append(cand)
            if cand.score > 0:
                scanned.append({
                    "row_idx": i,
                    "score": cand.score,
                    "matched": sorted(cand.matched_keywords),
                })

        # Highest score wins; ties go to the bottom-most row.
        confident = [
            cand for cand in candidates
            if cand.score >= thresholds.primary and self._strong_hits(cand) >= self._cfg.min_strong_groups
        ]
        if confident:
            best = max(confident, key=lambda c: (c.score, c.row_index))
            return HeaderLocation(best.row_index, STRATEGY_KEYWORD_SCAN, best.score, best.matched_keywords)

        for cand in candidates:
            if cand.score >= thresholds.fallback:
                return HeaderLocation(
                    cand.row_index, STRATEGY_KEYWORD_SCAN_FORWARD, cand.score, cand.matched_keywords
                )
        return None

    # -----------------------------------------------------------------
    # Strategy 2: anchor from a data row
    # -----------------------------------------------------------------

    def looks_like_data_anchor(self, row: Sequence[Any]) -> bool:
        """Numeric first cell, enough filled cells and a product code somewhere."""
        cells = DataCleaner.row_to_strs(row)
        if not cells or not INTEGER_RE.match(cells[0]):
            return False
        if sum(1 for c in cells if c) < self._cfg.anchor_min_cells:
            return False
        return any(r.fullmatch(c) for c in cells if c for r in self._article_res)

    def _anchor_scan(self, rows: List[List[str]]) -> Optional[HeaderLocation]:
        threshold = self._cfg.acceptance_thresholds.fallback
        window = self._cfg.anchor_window
        for i, row in enumerate(rows):
            if not self.looks_like_data_anchor(row):
                continue
            logger.debug("Data anchor candidate at row %s", i)
            for j in range(i - 1, max(0, i - window) - 1, -1):
                cand = self.score_row(rows[j], j, leading_number_bonus=False)
                if cand.score >= threshold:
                    location = HeaderLocation(j, STRATEGY_DATA_ANCHOR, cand.score, cand.matched_keywords)
                    location.debug["anchor_row_idx"] = i
                    return location
        return None

    # -----------------------------------------------------------------
    # Entry point
    # -----------------------------------------------------------------

    def locate(self, matrix: Sequence[Sequence[Any]]) -> HeaderLocation:
        """Run the strategies in order over the whole matrix."""
        rows = [DataCleaner.row_to_strs(r) for r in (matrix or [])]
        scanned: List[dict] = []

        location = self._keyword_scan(rows, scanned)
        if location is None:
            location = self._anchor_scan(rows)
        if location is None:
            logger.warning("No header row found in %s rows", len(rows))
            return HeaderLocation(
                -1,
                STRATEGY_NOT_FOUND,
                debug={
                    "scanned_rows": scanned,
                    "chosen_header_row_idx": -1,
                    "chosen_reason": "no_header_row_detected",
                },
            )

        location.debug.update({
            "scanned_rows": scanned,
            "chosen_header_row_idx": location.row_index,
            "chosen_reason": location.strategy,
        })
        logger.info(
            "Header row %s chosen by %s (score %.1f, keywords: %s)",
            location.row_index,
            location.strategy,
            location.score,
            ", ".join(sorted(location.matched_keywords)),
        )
        return location
