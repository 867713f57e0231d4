"""Tests for the component type taxonomy."""

import pytest

from partmatch_mcp.types import ComponentType, _BASE_TYPES, base_type, vendor_types


class TestBaseTypeMapping:
    """The base type table must cover every member and stay flat."""

    def test_every_member_has_a_declared_base(self):
        missing = [t for t in ComponentType if t not in _BASE_TYPES]
        assert missing == []

    def test_mapping_has_no_extra_keys(self):
        assert set(_BASE_TYPES) == set(ComponentType)

    @pytest.mark.parametrize("component_type", list(ComponentType))
    def test_base_is_its_own_base(self, component_type: ComponentType):
        base = component_type.base_type
        assert base.base_type is base

    @pytest.mark.parametrize("component_type,expected", [
        (ComponentType.RESISTOR_CHIP_YAGEO, ComponentType.RESISTOR),
        (ComponentType.RESISTOR_THT_VISHAY, ComponentType.RESISTOR),
        (ComponentType.CAPACITOR_CERAMIC_MURATA, ComponentType.CAPACITOR),
        (ComponentType.MOSFET_INFINEON, ComponentType.MOSFET),
        (ComponentType.IGBT_INFINEON, ComponentType.IGBT),
        (ComponentType.VOLTAGE_REGULATOR_LINEAR_ST, ComponentType.VOLTAGE_REGULATOR),
        (ComponentType.MICROCONTROLLER_INFINEON, ComponentType.MICROCONTROLLER),
        (ComponentType.CONNECTOR_WURTH, ComponentType.CONNECTOR),
        (ComponentType.MEMORY_FLASH_WINBOND, ComponentType.MEMORY_FLASH),
        (ComponentType.OSCILLATOR_IQD, ComponentType.OSCILLATOR),
        (ComponentType.RESISTOR, ComponentType.RESISTOR),
        (ComponentType.GENERIC, ComponentType.GENERIC),
    ])
    def test_known_bases(self, component_type: ComponentType, expected: ComponentType):
        assert component_type.base_type is expected
        assert base_type(component_type) is expected

    def test_vendor_types_are_all_variants(self):
        variants = vendor_types()
        assert ComponentType.MOSFET_ST in variants
        assert ComponentType.MOSFET not in variants
        assert all(t.base_type is not t for t in variants)


class TestSpecificity:
    """Specificity ranks used by the resolver."""

    @pytest.mark.parametrize("component_type,expected", [
        (ComponentType.GENERIC, 0),
        (ComponentType.IC, 1),
        (ComponentType.LOGIC_IC, 1),
        (ComponentType.ANALOG_IC, 2),
        (ComponentType.DIGITAL_IC, 2),
        (ComponentType.OPAMP, 3),
        (ComponentType.RESISTOR, 3),
        (ComponentType.OPAMP_TI, 4),
        (ComponentType.CONNECTOR_JST, 4),
    ])
    def test_levels(self, component_type: ComponentType, expected: int):
        assert component_type.specificity == expected

    @pytest.mark.parametrize("component_type", list(vendor_types()))
    def test_variant_outranks_its_base(self, component_type: ComponentType):
        assert component_type.specificity > component_type.base_type.specificity
        assert component_type.is_more_specific_than(component_type.base_type)
        assert not component_type.base_type.is_more_specific_than(component_type)

    def test_not_more_specific_than_itself(self):
        assert not ComponentType.MOSFET.is_more_specific_than(ComponentType.MOSFET)


class TestTypeProperties:
    """Flags, vendor names and lookups."""

    @pytest.mark.parametrize("component_type,passive,semiconductor", [
        (ComponentType.RESISTOR_CHIP_VISHAY, True, False),
        (ComponentType.CAPACITOR, True, False),
        (ComponentType.CRYSTAL_EPSON, True, False),
        (ComponentType.MOSFET_ST, False, True),
        (ComponentType.LED_SMD_WURTH, False, True),
        (ComponentType.CONNECTOR_WURTH, False, False),
        (ComponentType.GENERIC, False, False),
    ])
    def test_flags(self, component_type: ComponentType, passive: bool, semiconductor: bool):
        assert component_type.is_passive is passive
        assert component_type.is_semiconductor is semiconductor

    @pytest.mark.parametrize("component_type,expected", [
        (ComponentType.MOSFET_INFINEON, "INFINEON"),
        (ComponentType.RESISTOR_CHIP_YAGEO, "YAGEO"),
        (ComponentType.OPAMP_AD, "AD"),
        (ComponentType.RESISTOR, None),
        (ComponentType.LOGIC_IC, None),
    ])
    def test_manufacturer(self, component_type: ComponentType, expected: str | None):
        assert component_type.manufacturer == expected

    def test_same_family(self):
        assert ComponentType.MOSFET_ST.is_same_family(ComponentType.MOSFET_INFINEON)
        assert ComponentType.MOSFET_ST.is_same_family(ComponentType.MOSFET)
        assert not ComponentType.MOSFET_ST.is_same_family(ComponentType.IGBT_INFINEON)
        assert not ComponentType.MOSFET.is_same_family(None)

    def test_derived_types(self):
        derived = ComponentType.RESISTOR.derived_types()
        assert ComponentType.RESISTOR_CHIP_YAGEO in derived
        assert ComponentType.RESISTOR_CHIP_BOURNS in derived
        assert ComponentType.RESISTOR not in derived
        assert ComponentType.MOSFET_ST.derived_types() == ()

    @pytest.mark.parametrize("name,expected", [
        ("MOSFET_ST", ComponentType.MOSFET_ST),
        ("mosfet_st", ComponentType.MOSFET_ST),
        ("  resistor ", ComponentType.RESISTOR),
        ("NOT_A_TYPE", None),
        ("", None),
        (None, None),
    ])
    def test_from_name(self, name, expected):
        assert ComponentType.from_name(name) is expected

    def test_str_is_identifier(self):
        assert str(ComponentType.LED_HIGHPOWER_CREE) == "LED_HIGHPOWER_CREE"
