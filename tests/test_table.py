"""Tests for colour-count table building, symmetry restore and sorting."""

import itertools

import pytest

from dither16.core.colour import InvalidInputError, SwapFlags
from dither16.core.palette import PaletteCode
from dither16.core.subspace import Subspace
from dither16.core.table import (
    ColourCount,
    ColourCountTable,
    build_colour_count_table,
    restore_code,
    restore_symmetry,
    settle_counts,
    sort_by_intensity,
)


def _pairs(table):
    return [(e.code.value, e.count) for e in table]


def _table(*pairs):
    return ColourCountTable(ColourCount(PaletteCode(c), n) for c, n in pairs)


ALL_FLAGS = [
    SwapFlags(rb=rb, gb=gb, rg=rg)
    for rb, gb, rg in itertools.product([False, True], repeat=3)
]


class TestBuildTable:
    def test_patent_example(self):
        table = build_colour_count_table(Subspace.S2, 15, 15, 16)
        assert _pairs(table) == [(0x03, 18), (0x09, 15), (0x0B, 15), (0x07, 16)]
        assert table.total == 64

    def test_zero_counts_dropped(self):
        table = build_colour_count_table(Subspace.S0, 64, 0, 0)
        assert _pairs(table) == [(0x00, 64)]

    def test_origin_only(self):
        table = build_colour_count_table(Subspace.S3, 0, 0, 0)
        assert _pairs(table) == [(0x09, 64)]

    def test_rounding_deficit_kept(self):
        table = build_colour_count_table(Subspace.S2, 1, -1, 0)
        assert _pairs(table) == [(0x03, 64), (0x09, 1), (0x0B, -1)]
        assert table.total == 64
        assert not table.is_settled

    def test_negative_count_rejected(self):
        with pytest.raises(InvalidInputError, match="out of range"):
            build_colour_count_table(Subspace.S0, -2, 0, 0)

    def test_overflow_rejected(self):
        with pytest.raises(InvalidInputError, match="out of range"):
            build_colour_count_table(Subspace.S1, 40, 30, 0)

    def test_capacity(self):
        table = _table((0, 16), (1, 16), (2, 16), (3, 16))
        with pytest.raises(InvalidInputError, match="at most 4"):
            table.append(ColourCount(PaletteCode(4), 1))

    def test_zero_count_entry_rejected(self):
        with pytest.raises(InvalidInputError):
            ColourCountTable().append(ColourCount(PaletteCode(0), 0))


class TestRestore:
    def test_patent_example(self):
        table = build_colour_count_table(Subspace.S2, 15, 15, 16)
        restored = restore_symmetry(table, SwapFlags(rb=True, gb=True))
        assert _pairs(restored) == [(0x05, 18), (0x0C, 15), (0x0D, 15), (0x07, 16)]

    def test_no_flags_is_identity(self):
        for value in [0, 1, 3, 7, 9, 11, 15]:
            code = PaletteCode(value)
            assert restore_code(code, SwapFlags()) == code

    @pytest.mark.parametrize("flags", ALL_FLAGS)
    def test_achromatic_codes_fixed(self, flags):
        for value in (0x00, 0x07, 0x0F):
            assert restore_code(PaletteCode(value), flags) == PaletteCode(value)

    @pytest.mark.parametrize("flags", ALL_FLAGS)
    def test_intensity_bit_preserved(self, flags):
        for value in (0x01, 0x03, 0x09, 0x0B):
            code = PaletteCode(value)
            assert restore_code(code, flags).intensity == code.intensity

    def test_red_to_blue(self):
        assert restore_code(PaletteCode(0x09), SwapFlags(rb=True)) == PaletteCode(0x0C)

    def test_red_to_green(self):
        assert restore_code(PaletteCode(0x09), SwapFlags(rg=True)) == PaletteCode(0x0A)


class TestSort:
    def test_patent_example(self):
        table = _table((0x05, 18), (0x0C, 15), (0x0D, 15), (0x07, 16))
        assert _pairs(sort_by_intensity(table)) == [
            (0x05, 18), (0x07, 16), (0x0C, 15), (0x0D, 15),
        ]

    def test_blue_below_red(self):
        table = _table((0x01, 32), (0x04, 32))
        assert [c for c, _ in _pairs(sort_by_intensity(table))] == [0x04, 0x01]


class TestSettle:
    def test_positive_table_unchanged(self):
        table = _table((0x05, 18), (0x07, 16), (0x0C, 15), (0x0D, 15))
        assert _pairs(settle_counts(table)) == _pairs(table)

    def test_deficit_after_overshoot(self):
        table = _table((0x03, 64), (0x09, 1), (0x0B, -1))
        assert _pairs(settle_counts(table)) == [(0x03, 64)]

    def test_deficit_first(self):
        table = _table((0x00, -1), (0x01, 30), (0x03, 35))
        settled = settle_counts(table)
        assert _pairs(settled) == [(0x01, 29), (0x03, 35)]
        assert settled.is_settled

    def test_deficit_in_middle(self):
        table = _table((0x00, 40), (0x01, -1), (0x03, 25))
        assert _pairs(settle_counts(table)) == [(0x00, 40), (0x03, 24)]
