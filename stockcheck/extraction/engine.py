"""
ExtractionEngine: raw matrix in, canonical table out.

Wires the components together once per configuration:

    engine = ExtractionEngine()
    result = engine.extract(matrix)
    if result.ok:
        for item in result.table.items:
            ...

The engine is stateless between calls; one instance can serve many matrices,
from several threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from stockcheck.extraction.column_mapper import ColumnMapper
from stockcheck.extraction.config import DEFAULT_CONFIG, EngineConfig
from stockcheck.extraction.exceptions import EmptyTableError, TableNotFoundError
from stockcheck.extraction.header_locator import HeaderLocation, HeaderLocator
from stockcheck.extraction.row_classifier import RowClassifier
from stockcheck.extraction.storage_codec import StorageCodec
from stockcheck.extraction.table_assembler import TableAssembler
from stockcheck.logger import get_logger
from stockcheck.models import CanonicalTable

logger = get_logger(__name__)


class ExtractionStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    EMPTY = "empty"


_MESSAGES = {
    ExtractionStatus.OK: "",
    ExtractionStatus.NOT_FOUND: "No table detected: no row looks like a header.",
    ExtractionStatus.EMPTY: "Headers found, but no data rows.",
}


@dataclass
class ExtractionResult:
    status: ExtractionStatus
    header: HeaderLocation
    table: Optional[CanonicalTable] = None

    @property
    def ok(self) -> bool:
        return self.status is ExtractionStatus.OK

    @property
    def message(self) -> str:
        return _MESSAGES[self.status]

    def unwrap(self) -> CanonicalTable:
        """Return the table, or raise the exception matching the status."""
        if self.status is ExtractionStatus.NOT_FOUND:
            raise TableNotFoundError(self.message)
        if self.status is ExtractionStatus.EMPTY:
            raise EmptyTableError(self.message)
        return self.table


class ExtractionEngine:

    def __init__(self, cfg: EngineConfig = DEFAULT_CONFIG):
        self.config = cfg
        self.codec = StorageCodec(cfg)
        self.classifier = RowClassifier(cfg)
        self.mapper = ColumnMapper(cfg)
        self.locator = HeaderLocator(cfg, classifier=self.classifier)
        self.assembler = TableAssembler(cfg, classifier=self.classifier, mapper=self.mapper, codec=self.codec)

    def locate(self, matrix: Sequence[Sequence[Any]]) -> HeaderLocation:
        return self.locator.locate(matrix)

    def assemble(self, matrix: Sequence[Sequence[Any]], header_row_index: int) -> CanonicalTable:
        return self.assembler.assemble(matrix, header_row_index)

    def extract(self, matrix: Sequence[Sequence[Any]]) -> ExtractionResult:
        """Locate the header and assemble the table; never raises for bad rows or cells."""
        header = self.locate(matrix)
        if not header.found:
            return ExtractionResult(ExtractionStatus.NOT_FOUND, header)

        table = self.assemble(matrix, header.row_index)
        if not table.items:
            logger.warning("Header row %s found, but no data rows survived filtering", header.row_index)
            return ExtractionResult(ExtractionStatus.EMPTY, header, table)
        return ExtractionResult(ExtractionStatus.OK, header, table)
