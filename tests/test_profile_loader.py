"""
YAML engine profiles and environment settings.
"""
import pytest
from pydantic import ValidationError

from stockcheck import ExtractionEngine
from stockcheck.config import Settings, get_settings
from stockcheck.extraction import DEFAULT_CONFIG, ProfileError
from stockcheck.models import CanonicalField
from stockcheck.profile_loader import build_engine_config, load_engine_config, load_profile


def _write(tmp_path, text, name="profile.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_no_profile_means_no_overrides():
    assert load_profile(None) == {}
    assert load_profile("") == {}


def test_missing_profile_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_profile(str(tmp_path / "nope.yaml"))


def test_broken_yaml_raises_profile_error(tmp_path):
    path = _write(tmp_path, "field_synonyms: [unclosed\n")
    with pytest.raises(ProfileError):
        load_profile(path)


def test_empty_or_non_mapping_profile(tmp_path):
    assert load_profile(_write(tmp_path, "")) == {}
    assert load_profile(_write(tmp_path, "- just\n- a list\n", name="list.yaml")) == {}


def test_invalid_entries_are_skipped(tmp_path):
    path = _write(tmp_path, """
field_synonyms:
  article: ["код позиции", "", 5]
  no_such_field: ["x"]
service_row_terms: "not a list"
article_code_patterns: ["(unclosed", "xx\\\\d+"]
header_weights:
  name: 2.0
  unit: -1
  barcode: "heavy"
acceptance_thresholds:
  primary: 4
location_alphabet: ["a", "B", "CD", "b"]
location_ranges:
  section: [1, 20]
  shelf: [3, 1]
header_scan_width: 0
anchor_window: 5
synthetic_headers:
  actual: "Counted"
""")
    overrides = load_profile(path)
    assert overrides["field_synonyms"] == {CanonicalField.ARTICLE: ("код позиции",)}
    assert "service_row_terms" not in overrides
    assert overrides["article_code_patterns"] == ("xx\\d+",)
    assert overrides["header_weights"] == {"name": 2.0}
    assert overrides["acceptance_thresholds"] == {"primary": 4.0, "fallback": None}
    assert overrides["location_alphabet"] == ("A", "B")
    assert overrides["location_ranges"] == {"section": (1, 20)}
    assert "header_scan_width" not in overrides
    assert overrides["anchor_window"] == 5
    assert overrides["actual_quantity_header"] == "Counted"


def test_build_engine_config_merges_with_base():
    cfg = build_engine_config({
        "field_synonyms": {CanonicalField.ARTICLE: ("код позиции",)},
        "header_weights": {"name": 2.0},
        "acceptance_thresholds": {"primary": 4.0, "fallback": None},
        "location_ranges": {"section": (1, 20)},
    })
    assert cfg.synonyms_for(CanonicalField.ARTICLE) == ("код позиции",)
    assert cfg.synonyms_for(CanonicalField.NAME) == DEFAULT_CONFIG.synonyms_for(CanonicalField.NAME)
    assert cfg.weight_for("name") == 2.0
    assert cfg.weight_for("article") == DEFAULT_CONFIG.weight_for("article")
    assert cfg.acceptance_thresholds.primary == 4.0
    assert cfg.acceptance_thresholds.fallback == DEFAULT_CONFIG.acceptance_thresholds.fallback
    assert cfg.location_ranges.section == (1, 20)
    assert cfg.location_ranges.shelf == DEFAULT_CONFIG.location_ranges.shelf
    # the shared default is never modified
    assert DEFAULT_CONFIG.synonyms_for(CanonicalField.ARTICLE)[0] == "артикул"


def test_profile_changes_extraction(tmp_path):
    path = _write(tmp_path, 'field_synonyms:\n  article: ["код позиции"]\n')
    matrix = [
        ["№", "Код позиции", "Наименование", "Количество"],
        ["1", "X-100", "Гайка", "4"],
    ]
    assert ExtractionEngine().extract(matrix).unwrap().items[0].article == ""
    engine = ExtractionEngine(load_engine_config(path))
    assert engine.extract(matrix).unwrap().items[0].article == "X-100"


def test_environment_settings(monkeypatch):
    monkeypatch.setenv("STOCKCHECK_HEADER_SCAN_WIDTH", "30")
    monkeypatch.setenv("STOCKCHECK_LOG_LEVEL", "debug")
    settings = get_settings()
    assert settings.HEADER_SCAN_WIDTH == 30
    assert settings.LOG_LEVEL == "DEBUG"
    assert load_engine_config().header_scan_width == 30


def test_profile_overrides_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("STOCKCHECK_ANCHOR_WINDOW", "7")
    monkeypatch.setenv("STOCKCHECK_PROFILE_PATH", _write(tmp_path, "anchor_window: 3\n"))
    cfg = load_engine_config()
    assert cfg.anchor_window == 3
    assert cfg.header_scan_width == DEFAULT_CONFIG.header_scan_width


def test_settings_validation(monkeypatch):
    monkeypatch.setenv("STOCKCHECK_LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        Settings()
    monkeypatch.setenv("STOCKCHECK_LOG_LEVEL", "INFO")
    monkeypatch.setenv("STOCKCHECK_ANCHOR_WINDOW", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_location_alphabet_is_limited_to_latin_letters(tmp_path):
    path = _write(tmp_path, 'location_alphabet: ["Б", "ä", "k", "Z", "1"]\n')
    assert load_profile(path)["location_alphabet"] == ("K", "Z")


def test_service_words_and_strong_groups_from_profile(tmp_path):
    path = _write(tmp_path, """
service_row_words: ["ип"]
strong_header_groups: ["article", "name"]
min_strong_groups: 1
""")
    cfg = load_engine_config(path)
    assert cfg.service_row_words == ("ип",)
    assert cfg.strong_header_groups == ("article", "name")
    assert cfg.min_strong_groups == 1
