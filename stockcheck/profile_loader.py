"""
Engine profile loader
=====================

Reads a YAML profile and turns it into an :class:`EngineConfig`. A profile
only lists what it changes; everything else keeps the defaults. Invalid
entries are skipped rather than rejected, so one bad value never blocks a
counting session.

Example profile::

    field_synonyms:
      article: ["артикул", "код"]
    service_row_terms: ["итого", "подпись"]
    header_weights:
      name: 2.0
    acceptance_thresholds:
      primary: 3.5
      fallback: 1.5
    location_alphabet: [A, B, C]
    location_ranges:
      section: [1, 20]
    header_scan_width: 30
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from stockcheck.config import get_settings
from stockcheck.extraction.config import (
    DEFAULT_CONFIG,
    AcceptanceThresholds,
    EngineConfig,
    LocationRanges,
)
from stockcheck.extraction.exceptions import ProfileError
from stockcheck.logger import get_logger
from stockcheck.models import CanonicalField

logger = get_logger(__name__)

# stockcheck/profile_loader.py -> parents[1] is the repository root
REPO_ROOT = Path(__file__).resolve().parents[1]

_INT_KEYS = ("header_scan_width", "anchor_window", "anchor_min_cells", "min_strong_groups")
_STR_LIST_KEYS = (
    "service_row_terms",
    "service_row_words",
    "month_names",
    "strong_header_groups",
    "storage_shorthand_patterns",
)
# Zones must stay within what STORAGE_CODE_PATTERN can parse
_ZONE_RE = re.compile(r"[A-Z]")
_SYNTHETIC_KEYS = {
    "actual": "actual_quantity_header",
    "status": "status_header",
    "file_stock": "file_stock_header",
}


def _ensure_dict(value: Any) -> Dict[str, Any]:
    if isinstance(value, dict):
        return value
    return {}


def _ensure_str_list(value: Any) -> List[str]:
    """Keep non-blank strings only."""
    if not isinstance(value, list):
        return []
    out: List[str] = []
    for item in value:
        if isinstance(item, str) and item.strip():
            out.append(item.strip())
    return out


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _as_positive_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _as_range(value: Any) -> Optional[Tuple[int, int]]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    low, high = value
    if any(isinstance(v, bool) or not isinstance(v, int) for v in (low, high)):
        return None
    if low < 0 or low > high:
        return None
    return int(low), int(high)


def _canonical_field(name: Any) -> Optional[CanonicalField]:
    if not isinstance(name, str):
        return None
    key = name.strip().lower()
    for f in CanonicalField:
        if key in (f.value, f.name.lower()):
            return f
    return None


def _valid_patterns(patterns: List[str]) -> List[str]:
    valid: List[str] = []
    for p in patterns:
        try:
            re.compile(p)
        except re.error:
            logger.warning("Skipping invalid regex in profile: %r", p)
            continue
        valid.append(p)
    return valid


def _resolve_path(profile_path: str) -> Path:
    path = Path(profile_path).expanduser()
    if path.is_absolute() or path.exists():
        return path
    return (REPO_ROOT / path).resolve()


def load_profile(profile_path: Optional[str]) -> Dict[str, Any]:
    """
    Load a YAML profile and return the sanitised overrides it declares.

    Raises:
        FileNotFoundError: the file does not exist
        ProfileError: the file is not valid YAML
    """
    if not profile_path:
        return {}

    path = _resolve_path(profile_path)
    if not path.exists():
        raise FileNotFoundError(f"profile not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ProfileError(f"Failed to parse profile {path}: {e}") from e
    data = _ensure_dict(raw)

    overrides: Dict[str, Any] = {}

    synonyms: Dict[CanonicalField, Tuple[str, ...]] = {}
    for key, value in _ensure_dict(data.get("field_synonyms")).items():
        canonical = _canonical_field(key)
        terms = _ensure_str_list(value)
        if canonical is not None and terms:
            synonyms[canonical] = tuple(terms)
    if synonyms:
        overrides["field_synonyms"] = synonyms

    for key in _STR_LIST_KEYS:
        values = _ensure_str_list(data.get(key))
        if key == "storage_shorthand_patterns":
            values = _valid_patterns(values)
        if values:
            overrides[key] = tuple(values)

    patterns = _valid_patterns(_ensure_str_list(data.get("article_code_patterns")))
    if patterns:
        overrides["article_code_patterns"] = tuple(patterns)

    weights: Dict[str, float] = {}
    for key, value in _ensure_dict(data.get("header_weights")).items():
        number = _as_number(value)
        if isinstance(key, str) and key.strip() and number is not None and number >= 0:
            weights[key.strip()] = number
    if weights:
        overrides["header_weights"] = weights

    thresholds = _ensure_dict(data.get("acceptance_thresholds"))
    primary = _as_number(thresholds.get("primary"))
    fallback = _as_number(thresholds.get("fallback"))
    if primary is not None or fallback is not None:
        overrides["acceptance_thresholds"] = {"primary": primary, "fallback": fallback}

    alphabet = [
        v.upper() for v in _ensure_str_list(data.get("location_alphabet"))
        if _ZONE_RE.fullmatch(v.upper())
    ]
    if alphabet:
        overrides["location_alphabet"] = tuple(dict.fromkeys(alphabet))

    ranges: Dict[str, Tuple[int, int]] = {}
    for key, value in _ensure_dict(data.get("location_ranges")).items():
        parsed = _as_range(value)
        if key in ("section", "shelf", "bin") and parsed is not None:
            ranges[key] = parsed
    if ranges:
        overrides["location_ranges"] = ranges

    for key in _INT_KEYS:
        number = _as_positive_int(data.get(key))
        if number is not None:
            overrides[key] = number

    for key, attr in _SYNTHETIC_KEYS.items():
        value = _ensure_dict(data.get("synthetic_headers")).get(key)
        if isinstance(value, str) and value.strip():
            overrides[attr] = value.strip()

    return overrides


def build_engine_config(overrides: Dict[str, Any], base: EngineConfig = DEFAULT_CONFIG) -> EngineConfig:
    """Apply sanitised *overrides* (as returned by :func:`load_profile`) on top of *base*."""
    changes: Dict[str, Any] = {}
    for key, value in (overrides or {}).items():
        if key == "field_synonyms":
            merged = dict(base.field_synonyms)
            merged.update(value)
            changes[key] = merged
        elif key == "header_weights":
            merged_weights = dict(base.header_weights)
            merged_weights.update(value)
            changes[key] = merged_weights
        elif key == "acceptance_thresholds":
            current = base.acceptance_thresholds
            changes[key] = AcceptanceThresholds(
                primary=value.get("primary") if value.get("primary") is not None else current.primary,
                fallback=value.get("fallback") if value.get("fallback") is not None else current.fallback,
            )
        elif key == "location_ranges":
            current_ranges = base.location_ranges
            changes[key] = LocationRanges(
                section=value.get("section", current_ranges.section),
                shelf=value.get("shelf", current_ranges.shelf),
                bin=value.get("bin", current_ranges.bin),
            )
        else:
            changes[key] = value
    return base.with_overrides(**changes)


def load_engine_config(profile_path: Optional[str] = None) -> EngineConfig:
    """
    Build the engine configuration for this process.

    Environment settings (``STOCKCHECK_*``) apply first; the profile, taken
    from *profile_path* or ``STOCKCHECK_PROFILE_PATH``, overrides them.
    """
    settings = get_settings()
    base = DEFAULT_CONFIG.with_overrides(
        header_scan_width=settings.HEADER_SCAN_WIDTH,
        anchor_window=settings.ANCHOR_WINDOW,
    )
    path = profile_path or settings.PROFILE_PATH
    overrides = load_profile(path)
    if overrides:
        logger.info("Engine profile %s overrides: %s", path, ", ".join(sorted(overrides)))
    return build_engine_config(overrides, base)
