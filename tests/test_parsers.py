"""Tests for value-string parsing."""

import pytest

from partmatch_mcp.parsers import as_number, normalize_text, parse_quantity, parse_value, units_differ
from partmatch_mcp.specs import SpecUnit, SpecValue, coerce_specs, spec


class TestParseValue:
    """Tests for parse_value."""

    @pytest.mark.parametrize("input_val,expected", [
        # European notation
        ("4k7", 4700),
        ("10k0", 10000),
        ("4R7", 4.7),
        ("1M5", 1500000),
        ("4n7", 4.7e-9),
        # SI prefixes
        ("10k", 10000),
        ("10K", 10000),
        ("2.2M", 2200000),
        ("100nF", 1e-7),
        ("0.1uF", 1e-7),
        ("100mA", 0.1),
        ("8MHz", 8e6),
        ("10 kΩ", 10000),
        ("470R", 470),
        ("100ohm", 100),
        # Units without prefix
        ("25V", 25),
        ("3.3v", 3.3),
        ("±5%", 5),
        ("20ppm", 20),
        ("5mm", 5),
        ("620nm", 620),
        # Fractions
        ("1/4W", 0.25),
        ("1/10W", 0.1),
        # Plain numbers
        ("100", 100),
        ("0603", 603),
        ("-40", -40),
        ("1e3", 1000),
        ("1,000", 1000),
    ])
    def test_quantities(self, input_val: str, expected: float):
        assert parse_value(input_val) == pytest.approx(expected)

    @pytest.mark.parametrize("input_val", [
        "", "   ", "X7R", "C0G", "SOT-23", "N-Channel", "10k5k", "1/0W", "STM32", None,
        # Not finite once scaled
        "1e999", "-1e400", "1e999999999", "1e400V", "9" * 400, "9" * 400 + "/3W",
        "9" * 400 + "/" + "9" * 400, "9" * 400 + "k1",
    ])
    def test_non_quantities(self, input_val):
        assert parse_value(input_val) is None


class TestParseQuantity:
    """Value plus normalized unit."""

    @pytest.mark.parametrize("input_val,expected", [
        ("25V", (25, "v")),
        ("25 v", (25, "v")),
        ("2.54mm", (2.54, "mm")),
        ("10 kΩ", (10000, "ohm")),
        ("470R", (470, "ohm")),
        ("4R7", (4.7, "ohm")),
        ("100ohms", (100, "ohm")),
        ("1/4W", (0.25, "w")),
        ("±1%", (1, "%")),
        ("4k7", (4700, None)),
        ("100", (100, None)),
    ])
    def test_units(self, input_val, expected):
        value, unit = parse_quantity(input_val)
        assert value == pytest.approx(expected[0])
        assert unit == expected[1]

    def test_units_differ(self):
        assert units_differ("v", "a")
        assert not units_differ("v", "v")
        assert not units_differ("v", None)
        assert not units_differ(None, None)


class TestAsNumber:
    """Tests for spec value coercion."""

    @pytest.mark.parametrize("value,expected", [
        (5, 5.0),
        (4.7, 4.7),
        ("10k", 10000.0),
        ("X7R", None),
        (None, None),
        (True, None),
        (False, None),
        (float("nan"), None),
        (object(), None),
        (10**400, None),
        ("1e999", None),
        (float("inf"), float("inf")),
    ])
    def test_coercion(self, value, expected):
        assert as_number(value) == expected

    def test_normalize_text(self):
        assert normalize_text("  X7R ") == "x7r"
        assert normalize_text(True) == "true"
        assert normalize_text(None) is None


class TestSpecValue:
    """Tests for SpecValue helpers."""

    def test_formatted(self):
        assert SpecValue(25, SpecUnit.VOLTS).formatted() == "25V"
        assert SpecValue("X7R").formatted() == "X7R"
        assert SpecValue(None, SpecUnit.VOLTS).formatted() == "N/A"

    def test_is_in_range(self):
        value = SpecValue(3.3, SpecUnit.VOLTS, min_value=1.8, max_value=5.5)
        assert value.is_in_range(3.3)
        assert value.is_in_range(1.8)
        assert not value.is_in_range(6.0)
        assert not value.is_in_range(1.0)
        assert SpecValue(1).is_in_range(1e9)

    def test_numeric(self):
        assert SpecValue("100nF", SpecUnit.FARADS).numeric == pytest.approx(1e-7)
        assert SpecValue("X7R").numeric is None

    def test_unit_symbols(self):
        assert SpecUnit.OHMS.symbol == "Ω"
        assert SpecUnit.HERTZ.symbol == "Hz"
        assert SpecUnit.NONE.symbol == ""

    def test_immutable(self):
        value = SpecValue(1)
        with pytest.raises(AttributeError):
            value.value = 2

    def test_spec_helpers(self):
        wrapped = SpecValue(5, SpecUnit.VOLTS)
        assert spec(wrapped) is wrapped
        assert spec("N").value == "N"
        assert coerce_specs(None) == {}
        assert coerce_specs({"a": 1, "": 2}) == {"a": SpecValue(1)}
