"""
StorageCodec: parse, validate and format storage-location codes.

A code is a zone letter followed by three hyphen-separated numbers,
``A1-1-1`` .. ``S13-3-4``. The zone alphabet and numeric ranges come from
:class:`EngineConfig`; by default nine letters (E, G and H are not used by the
warehouse) x 13 sections x 3 shelves x 4 bins.
"""

from __future__ import annotations

import re
from typing import List, Optional

from stockcheck.extraction.config import DEFAULT_CONFIG, STORAGE_CODE_PATTERN, EngineConfig
from stockcheck.models import StorageLocation, dedupe_locations


class StorageCodec:

    def __init__(self, cfg: EngineConfig = DEFAULT_CONFIG):
        self._cfg = cfg
        self._code_re = re.compile(rf"^{STORAGE_CODE_PATTERN}$")

    def parse(self, text: Optional[str]) -> Optional[StorageLocation]:
        """
        Parse a single code; ``None`` on anything that does not match.

        Ranges are not checked here, so an interactive caller can tell
        "not a code" (``None``) from "code outside the grid" (``is_valid``).
        """
        if not isinstance(text, str):
            return None
        match = self._code_re.match(text.strip())
        if not match:
            return None
        zone, section, shelf, bin_ = match.groups()
        return StorageLocation(zone=zone, section=int(section), shelf=int(shelf), bin=int(bin_))

    def is_valid(self, location: StorageLocation) -> bool:
        ranges = self._cfg.location_ranges
        return (
            location.zone in self._cfg.location_alphabet
            and ranges.section[0] <= location.section <= ranges.section[1]
            and ranges.shelf[0] <= location.shelf <= ranges.shelf[1]
            and ranges.bin[0] <= location.bin <= ranges.bin[1]
        )

    @staticmethod
    def format(location: StorageLocation) -> str:
        return location.to_display_string()

    def parse_list(self, text: Optional[str]) -> List[StorageLocation]:
        """Parse a comma-separated list, dropping blanks and unparsable segments."""
        if not isinstance(text, str) or not text.strip():
            return []
        parsed: List[StorageLocation] = []
        for segment in text.split(","):
            segment = segment.strip()
            if not segment:
                continue
            location = self.parse(segment)
            if location is not None:
                parsed.append(location)
        return dedupe_locations(parsed)

    def enumerate_all(self) -> List[StorageLocation]:
        """Every location of the grid in zone, section, shelf, bin order."""
        ranges = self._cfg.location_ranges
        return [
            StorageLocation(zone=zone, section=section, shelf=shelf, bin=bin_)
            for zone in self._cfg.location_alphabet
            for section in range(ranges.section[0], ranges.section[1] + 1)
            for shelf in range(ranges.shelf[0], ranges.shelf[1] + 1)
            for bin_ in range(ranges.bin[0], ranges.bin[1] + 1)
        ]

    # ----- cascading picker ------------------------------------------------

    def available_zones(self) -> List[str]:
        return list(self._cfg.location_alphabet)

    def available_sections(self, zone: str) -> List[int]:
        if zone not in self._cfg.location_alphabet:
            return []
        low, high = self._cfg.location_ranges.section
        return list(range(low, high + 1))
