"""Tests for colour parsing and symmetry normalization."""

import numpy as np
import pytest

from dither16.core.colour import (
    Colour,
    InvalidInputError,
    SwapFlags,
    normalize,
    parse_colour,
)


class TestColour:
    def test_from_hex_lowercase(self):
        assert Colour.from_hex("#ff8000").rgb == (255, 128, 0)

    def test_from_hex_uppercase(self):
        assert Colour.from_hex("#FF8000") == Colour(255, 128, 0)

    def test_hex_property(self):
        assert Colour(18, 52, 86).hex == "#123456"

    @pytest.mark.parametrize(
        "text", ["ff0000", "#ff00", "#ff00000", "#gg0000", "", "#12345z"]
    )
    def test_malformed_hex(self, text):
        with pytest.raises(InvalidInputError, match="#RRGGBB"):
            Colour.from_hex(text)

    @pytest.mark.parametrize("rgb", [(256, 0, 0), (0, -1, 0), (0, 0, 1000)])
    def test_out_of_range(self, rgb):
        with pytest.raises(InvalidInputError, match="out of range"):
            Colour(*rgb)

    def test_non_integer_component(self):
        with pytest.raises(InvalidInputError, match="integer"):
            Colour(1.5, 0, 0)

    def test_bool_component_rejected(self):
        with pytest.raises(InvalidInputError):
            Colour(True, 0, 0)

    def test_numpy_integers_accepted(self):
        c = Colour(np.uint8(10), np.int64(20), 30)
        assert c.rgb == (10, 20, 30)
        assert type(c.red) is int

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            Colour(300, 0, 0)


class TestParseColour:
    def test_hex_string(self):
        assert parse_colour("#00ff00") == Colour(0, 255, 0)

    def test_tuple(self):
        assert parse_colour((1, 2, 3)) == Colour(1, 2, 3)

    def test_list(self):
        assert parse_colour([1, 2, 3]) == Colour(1, 2, 3)

    def test_colour_passthrough(self):
        c = Colour(4, 5, 6)
        assert parse_colour(c) is c

    def test_wrong_length(self):
        with pytest.raises(InvalidInputError, match="3 colour components"):
            parse_colour((1, 2))

    def test_not_iterable(self):
        with pytest.raises(InvalidInputError):
            parse_colour(42)


class TestNormalize:
    def test_patent_example(self):
        rgb, flags = normalize(Colour(128, 31, 190))
        assert rgb == (190, 128, 31)
        assert flags == SwapFlags(rb=True, gb=True, rg=False)

    def test_already_ordered(self):
        rgb, flags = normalize(Colour(200, 100, 50))
        assert rgb == (200, 100, 50)
        assert flags == SwapFlags()

    def test_red_blue_only(self):
        rgb, flags = normalize(Colour(10, 20, 30))
        assert rgb == (30, 20, 10)
        assert flags == SwapFlags(rb=True)

    def test_red_green_only(self):
        rgb, flags = normalize(Colour(20, 30, 10))
        assert rgb == (30, 20, 10)
        assert flags == SwapFlags(rg=True)

    def test_uses_latest_values(self):
        # R/B swap leaves r=20 < g=30, so R/G must swap too
        rgb, flags = normalize(Colour(10, 30, 20))
        assert rgb == (30, 20, 10)
        assert flags == SwapFlags(rb=True, rg=True)

    def test_equal_components_do_not_swap(self):
        _, flags = normalize(Colour(50, 50, 50))
        assert flags == SwapFlags()

    def test_always_descending(self):
        for r in range(0, 256, 51):
            for g in range(0, 256, 51):
                for b in range(0, 256, 51):
                    (nr, ng, nb), _ = normalize(Colour(r, g, b))
                    assert nr >= ng >= nb
                    assert sorted((nr, ng, nb)) == sorted((r, g, b))
