"""
Header-to-field matching and the fallback strategies.
"""
import pytest

from stockcheck.extraction import DEFAULT_CONFIG, ColumnMapper
from stockcheck.extraction.column_mapper import (
    FallbackStrategy,
    LongestTextNameFallback,
    StoragePatternFallback,
)
from stockcheck.models import CanonicalField


@pytest.fixture
def mapper():
    return ColumnMapper()


def _syn(field):
    return DEFAULT_CONFIG.synonyms_for(field)


def test_exact_match_is_case_insensitive(mapper):
    headers = ["АРТИКУЛ", "Товар", "Кол-во"]
    assert mapper.find_column(headers, _syn(CanonicalField.ARTICLE)) == 0
    assert mapper.find_column(headers, _syn(CanonicalField.NAME)) == 1
    assert mapper.find_column(headers, _syn(CanonicalField.REQUIRED_QTY)) == 2


def test_exact_match_beats_earlier_substring(mapper):
    headers = ["Количество мест", "Количество"]
    assert mapper.find_column(headers, _syn(CanonicalField.REQUIRED_QTY)) == 1


def test_substring_match_in_both_directions(mapper):
    assert mapper.find_column(["Наименование товара"], _syn(CanonicalField.NAME)) == 0
    # header text contained in a synonym
    assert mapper.find_column(["№", "Код"], _syn(CanonicalField.ARTICLE)) == 1


def test_blank_headers_never_match(mapper):
    assert mapper.find_column(["", "  ", "Артикул"], _syn(CanonicalField.ARTICLE)) == 2
    assert mapper.find_column(["", None], _syn(CanonicalField.ARTICLE)) is None


def test_resolve_returns_empty_for_short_row(mapper):
    headers = ["Артикул", "Товар", "Кол-во"]
    assert mapper.resolve(headers, ["VALMO001"], _syn(CanonicalField.REQUIRED_QTY)) == ""
    assert mapper.resolve(headers, ["VALMO001", "Гайка", " 4 "], _syn(CanonicalField.REQUIRED_QTY)) == "4"


def test_map_row_direct_matches(mapper):
    headers = ["Артикул", "Наименование", "Кол-во", "Ед. изм.", "Штрих-код", "Ячейка", "Остаток"]
    row = ["VALMO001", "Гайка", "4", "шт", "4600000000012", "A1-1-1", "9"]
    values = mapper.map_row(headers, row)
    assert values[CanonicalField.ARTICLE] == "VALMO001"
    assert values[CanonicalField.NAME] == "Гайка"
    assert values[CanonicalField.REQUIRED_QTY] == "4"
    assert values[CanonicalField.UNIT] == "шт"
    assert values[CanonicalField.BARCODE] == "4600000000012"
    assert values[CanonicalField.STORAGE_CELLS] == "A1-1-1"
    assert values[CanonicalField.FILE_STOCK_QTY] == "9"


def test_name_fallback_picks_longest_plain_text(mapper):
    headers = ["Код", "Кол-во", "Описание позиции", "Комментарий"]
    row = ["X-1", "5", "Гайка шестигранная М8", "срочно"]
    values = mapper.map_row(headers, row)
    assert values[CanonicalField.ARTICLE] == "X-1"
    assert values[CanonicalField.NAME] == "Гайка шестигранная М8"


def test_name_fallback_skips_numbers_codes_and_claimed_columns():
    fallback = LongestTextNameFallback()
    row = ["VALMO000123", "123456789012345", "A1-1-1, B2-2-2", "Болт", "Очень длинный текст"]
    idx, value = fallback.apply([], row, claimed={4})
    assert (idx, value) == (3, "Болт")


def test_storage_fallback_scans_row_cells(mapper):
    headers = ["Артикул", "Товар", "Кол-во", "Примечание"]
    row = ["VALMO001", "Гайка", "3", "B4-2-1"]
    values = mapper.map_row(headers, row)
    assert values[CanonicalField.STORAGE_CELLS] == "B4-2-1"


@pytest.mark.parametrize("cell", ["K7", "K12-3"])
def test_storage_fallback_accepts_shorthand(cell):
    idx, value = StoragePatternFallback().apply([], ["VALMO001", cell], claimed=set())
    assert (idx, value) == (1, cell)


def test_fallbacks_do_not_override_matched_values(mapper):
    headers = ["Артикул", "Товар", "Кол-во"]
    row = ["VALMO001", "Гайка", "3", "Очень длинное описание без заголовка"]
    assert mapper.map_row(headers, row)[CanonicalField.NAME] == "Гайка"


def test_custom_fallback_registry():
    class FixedUnit(FallbackStrategy):
        tag = "fixed_unit"
        field = CanonicalField.UNIT

        def apply(self, headers, row_cells, claimed):
            return None, "шт"

    mapper = ColumnMapper(fallbacks=[FixedUnit()])
    values = mapper.map_row(["Артикул", "Кол-во"], ["VALMO001", "3"])
    assert values[CanonicalField.UNIT] == "шт"
    # the default name fallback is not registered here
    assert values[CanonicalField.NAME] == ""
    assert [f.tag for f in mapper.fallbacks] == ["fixed_unit"]


def test_name_header_is_not_taken_as_article(mapper):
    headers = ["№", "Товар", "Кол-во", "Ед."]
    values = mapper.map_row(headers, ["1", "Гайка М8", "3", "шт"])
    assert values[CanonicalField.ARTICLE] == ""
    assert values[CanonicalField.NAME] == "Гайка М8"
    assert mapper.column_for(headers, CanonicalField.ARTICLE) is None


def test_reserved_headers_exclude_own_synonyms(mapper):
    reserved = mapper.reserved_headers(CanonicalField.ARTICLE)
    assert "товар" in reserved
    assert "артикул" not in reserved


def test_storage_fallback_skips_claimed_shorthand_article(mapper):
    headers = ["Артикул", "Товар", "Кол-во", "Примечание"]
    values = mapper.map_row(headers, ["K7", "Гайка", "3", "B4-2-1"])
    assert values[CanonicalField.ARTICLE] == "K7"
    assert values[CanonicalField.STORAGE_CELLS] == "B4-2-1"


def test_storage_fallback_prefers_full_code_over_earlier_shorthand():
    row = ["VALMO001", "K7", "Гайка", "C3-2-1"]
    assert StoragePatternFallback().apply([], row, claimed=set()) == (3, "C3-2-1")
