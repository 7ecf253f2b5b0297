"""
Unit tests for stockcheck.extraction.storage_codec.
"""
import pytest

from stockcheck.extraction.config import LocationRanges
from stockcheck.extraction import DEFAULT_CONFIG, StorageCodec
from stockcheck.models import StorageLocation


@pytest.fixture
def codec():
    return StorageCodec()


class TestParse:

    def test_parse_basic(self, codec):
        loc = codec.parse("A1-1-1")
        assert loc == StorageLocation(zone="A", section=1, shelf=1, bin=1)

    def test_parse_trims_whitespace(self, codec):
        loc = codec.parse("  S13-3-4 ")
        assert loc is not None
        assert (loc.zone, loc.section, loc.shelf, loc.bin) == ("S", 13, 3, 4)

    @pytest.mark.parametrize("text", [
        "", "   ", "A1-1", "A1-1-1-1", "AA1-1-1", "1-1-1", "A-1-1", "a1-1-1",
        "A1-x-1", "A1 - 1 - 1", "ячейка A1-1-1", "A1-1-1,B2-2-2",
    ])
    def test_parse_rejects_non_codes(self, codec, text):
        assert codec.parse(text) is None

    def test_parse_non_string_returns_none(self, codec):
        assert codec.parse(None) is None
        assert codec.parse(11) is None

    def test_parse_does_not_check_ranges(self, codec):
        loc = codec.parse("E20-9-9")
        assert loc is not None
        assert codec.is_valid(loc) is False


class TestValidity:

    @pytest.mark.parametrize("zone", ["A", "B", "C", "D", "F", "I", "J", "K", "S"])
    def test_alphabet_letters_are_valid(self, codec, zone):
        assert codec.is_valid(StorageLocation(zone=zone, section=1, shelf=1, bin=1))

    @pytest.mark.parametrize("zone", ["E", "G", "H", "Z"])
    def test_skipped_letters_are_invalid(self, codec, zone):
        assert not codec.is_valid(StorageLocation(zone=zone, section=1, shelf=1, bin=1))

    @pytest.mark.parametrize("section,shelf,bin_", [(0, 1, 1), (14, 1, 1), (1, 0, 1), (1, 4, 1), (1, 1, 0), (1, 1, 5)])
    def test_out_of_range_is_invalid(self, codec, section, shelf, bin_):
        assert not codec.is_valid(StorageLocation(zone="A", section=section, shelf=shelf, bin=bin_))

    def test_bounds_are_inclusive(self, codec):
        assert codec.is_valid(StorageLocation(zone="S", section=13, shelf=3, bin=4))


class TestFormat:

    def test_format(self, codec):
        assert codec.format(StorageLocation(zone="B", section=5, shelf=2, bin=3)) == "B5-2-3"

    def test_round_trip_over_whole_grid(self, codec):
        for loc in codec.enumerate_all():
            assert codec.parse(codec.format(loc)) == loc


class TestParseList:

    def test_keeps_input_order(self, codec):
        locs = codec.parse_list("B2-2-2, A1-1-1")
        assert [codec.format(l) for l in locs] == ["B2-2-2", "A1-1-1"]

    def test_drops_blank_and_broken_segments(self, codec):
        locs = codec.parse_list("A1-1-1, , мусор, C3-1, D4-2-2,")
        assert [codec.format(l) for l in locs] == ["A1-1-1", "D4-2-2"]

    def test_deduplicates(self, codec):
        locs = codec.parse_list("A1-1-1, A1-1-1 ,B1-1-1")
        assert [codec.format(l) for l in locs] == ["A1-1-1", "B1-1-1"]

    def test_empty_input(self, codec):
        assert codec.parse_list("") == []
        assert codec.parse_list(None) == []


class TestEnumerateAll:

    def test_size_and_uniqueness(self, codec):
        all_locs = codec.enumerate_all()
        assert len(all_locs) == 9 * 13 * 3 * 4 == 1404
        assert len(set(all_locs)) == 1404
        assert all(codec.is_valid(l) for l in all_locs)

    def test_order(self, codec):
        all_locs = [codec.format(l) for l in codec.enumerate_all()]
        assert all_locs[:5] == ["A1-1-1", "A1-1-2", "A1-1-3", "A1-1-4", "A1-2-1"]
        assert all_locs[12] == "A2-1-1"
        assert all_locs[156] == "B1-1-1"
        assert all_locs[-1] == "S13-3-4"

    def test_follows_configured_grid(self):
        cfg = DEFAULT_CONFIG.with_overrides(
            location_alphabet=("A", "B"),
            location_ranges=LocationRanges(section=(1, 2)),
        )
        assert len(StorageCodec(cfg).enumerate_all()) == 2 * 2 * 3 * 4


class TestPicker:

    def test_available_zones(self, codec):
        assert codec.available_zones() == ["A", "B", "C", "D", "F", "I", "J", "K", "S"]

    def test_available_sections(self, codec):
        assert codec.available_sections("K") == list(range(1, 14))
        assert codec.available_sections("E") == []
