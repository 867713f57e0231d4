"""Tests for package name normalization."""

import pytest

from partmatch_mcp.packages import normalize_package


class TestNormalizePackage:
    """Tests for normalize_package."""

    @pytest.mark.parametrize("input_val,expected", [
        # Separators and case
        ("SOT-23", "SOT23"),
        ("sot 23", "SOT23"),
        ("SOT23", "SOT23"),
        ("TO-220", "TO220"),
        ("to_220", "TO220"),
        ("QFN-32 5x5", "QFN325X5"),
        # Chip sizes
        ("0603", "0603"),
        ("SMD_0603", "0603"),
        ("smd 0805", "0805"),
        (603, "0603"),
        (1206, "1206"),
        # Small outline
        ("SO-8", "SOIC8"),
        ("SOP-8", "SOIC8"),
        ("SOIC8", "SOIC8"),
        ("SOIC-14", "SOIC14"),
        ("SOIC", "SOIC8"),
        # Aliases
        ("TO-263", "D2PAK"),
        ("TO-263-3", "D2PAK"),
        ("D2PAK", "D2PAK"),
        ("TO-252", "DPAK"),
        ("SC-70", "SOT323"),
        ("SC-70-6", "SOT363"),
        ("DO-214AC", "SMA"),
        ("DO-214AB", "SMC"),
    ])
    def test_normalizes(self, input_val, expected):
        assert normalize_package(input_val) == expected

    @pytest.mark.parametrize("input_val", [None, True, False, "", "   ", "-_/", [1], 2.5])
    def test_not_a_package(self, input_val):
        assert normalize_package(input_val) is None

    def test_different_packages_stay_distinct(self):
        assert normalize_package("SOT-23") != normalize_package("SOT-223")
        assert normalize_package("TO-220") != normalize_package("TO-263")
        assert normalize_package("0603") != normalize_package("0805")
        assert normalize_package("SOIC-8") != normalize_package("SOIC-14")
