"""Component type taxonomy.

Every type belongs to exactly one generic base type. Vendor variants
(``RESISTOR_CHIP_YAGEO``) map to their base (``RESISTOR``); base and
category types map to themselves. The mapping is an explicit table that
must name every member: the module refuses to import otherwise, so a new
variant cannot silently become its own base.
"""

from enum import Enum


class ComponentType(str, Enum):
    """Closed enumeration of component types. Values are stable identifiers."""

    # Category types
    GENERIC = "GENERIC"
    IC = "IC"
    LOGIC_IC = "LOGIC_IC"
    ANALOG_IC = "ANALOG_IC"
    DIGITAL_IC = "DIGITAL_IC"

    # Base component types
    RESISTOR = "RESISTOR"
    CAPACITOR = "CAPACITOR"
    INDUCTOR = "INDUCTOR"
    DIODE = "DIODE"
    TRANSISTOR = "TRANSISTOR"
    MOSFET = "MOSFET"
    IGBT = "IGBT"
    LED = "LED"
    MICROCONTROLLER = "MICROCONTROLLER"
    OPAMP = "OPAMP"
    VOLTAGE_REGULATOR = "VOLTAGE_REGULATOR"
    CRYSTAL = "CRYSTAL"
    OSCILLATOR = "OSCILLATOR"
    MEMORY = "MEMORY"
    MEMORY_FLASH = "MEMORY_FLASH"
    MEMORY_EEPROM = "MEMORY_EEPROM"
    CONNECTOR = "CONNECTOR"
    SENSOR = "SENSOR"
    TEMPERATURE_SENSOR = "TEMPERATURE_SENSOR"
    FUSE = "FUSE"

    # Resistors
    RESISTOR_CHIP_YAGEO = "RESISTOR_CHIP_YAGEO"
    RESISTOR_THT_YAGEO = "RESISTOR_THT_YAGEO"
    RESISTOR_CHIP_VISHAY = "RESISTOR_CHIP_VISHAY"
    RESISTOR_THT_VISHAY = "RESISTOR_THT_VISHAY"
    RESISTOR_CHIP_PANASONIC = "RESISTOR_CHIP_PANASONIC"
    RESISTOR_CHIP_BOURNS = "RESISTOR_CHIP_BOURNS"

    # Capacitors
    CAPACITOR_CERAMIC_YAGEO = "CAPACITOR_CERAMIC_YAGEO"
    CAPACITOR_CERAMIC_MURATA = "CAPACITOR_CERAMIC_MURATA"
    CAPACITOR_CERAMIC_TDK = "CAPACITOR_CERAMIC_TDK"
    CAPACITOR_CERAMIC_SAMSUNG = "CAPACITOR_CERAMIC_SAMSUNG"
    CAPACITOR_CERAMIC_KEMET = "CAPACITOR_CERAMIC_KEMET"
    CAPACITOR_TANTALUM_KEMET = "CAPACITOR_TANTALUM_KEMET"
    CAPACITOR_TANTALUM_AVX = "CAPACITOR_TANTALUM_AVX"
    CAPACITOR_ELECTROLYTIC_PANASONIC = "CAPACITOR_ELECTROLYTIC_PANASONIC"
    CAPACITOR_ELECTROLYTIC_NICHICON = "CAPACITOR_ELECTROLYTIC_NICHICON"

    # Inductors
    INDUCTOR_CHIP_MURATA = "INDUCTOR_CHIP_MURATA"
    INDUCTOR_CHIP_TDK = "INDUCTOR_CHIP_TDK"
    INDUCTOR_CHIP_BOURNS = "INDUCTOR_CHIP_BOURNS"
    INDUCTOR_CHIP_COILCRAFT = "INDUCTOR_CHIP_COILCRAFT"
    INDUCTOR_THT_BOURNS = "INDUCTOR_THT_BOURNS"

    # Discrete semiconductors
    DIODE_VISHAY = "DIODE_VISHAY"
    DIODE_ON = "DIODE_ON"
    DIODE_ROHM = "DIODE_ROHM"
    TRANSISTOR_VISHAY = "TRANSISTOR_VISHAY"
    TRANSISTOR_NXP = "TRANSISTOR_NXP"
    MOSFET_INFINEON = "MOSFET_INFINEON"
    MOSFET_ST = "MOSFET_ST"
    MOSFET_VISHAY = "MOSFET_VISHAY"
    MOSFET_ONSEMI = "MOSFET_ONSEMI"
    MOSFET_NEXPERIA = "MOSFET_NEXPERIA"
    MOSFET_ROHM = "MOSFET_ROHM"
    IGBT_INFINEON = "IGBT_INFINEON"
    IGBT_ONSEMI = "IGBT_ONSEMI"

    # LEDs
    LED_STANDARD_VISHAY = "LED_STANDARD_VISHAY"
    LED_SMD_VISHAY = "LED_SMD_VISHAY"
    LED_STANDARD_KINGBRIGHT = "LED_STANDARD_KINGBRIGHT"
    LED_SMD_KINGBRIGHT = "LED_SMD_KINGBRIGHT"
    LED_STANDARD_WURTH = "LED_STANDARD_WURTH"
    LED_SMD_WURTH = "LED_SMD_WURTH"
    LED_HIGHPOWER_CREE = "LED_HIGHPOWER_CREE"
    LED_HIGHPOWER_OSRAM = "LED_HIGHPOWER_OSRAM"

    # Microcontrollers
    MICROCONTROLLER_ST = "MICROCONTROLLER_ST"
    MICROCONTROLLER_TI = "MICROCONTROLLER_TI"
    MICROCONTROLLER_INFINEON = "MICROCONTROLLER_INFINEON"
    MICROCONTROLLER_NXP = "MICROCONTROLLER_NXP"
    MICROCONTROLLER_MICROCHIP = "MICROCONTROLLER_MICROCHIP"
    MICROCONTROLLER_ATMEL = "MICROCONTROLLER_ATMEL"
    MICROCONTROLLER_RENESAS = "MICROCONTROLLER_RENESAS"
    MICROCONTROLLER_CYPRESS = "MICROCONTROLLER_CYPRESS"

    # Op-amps
    OPAMP_TI = "OPAMP_TI"
    OPAMP_ST = "OPAMP_ST"
    OPAMP_AD = "OPAMP_AD"
    OPAMP_INFINEON = "OPAMP_INFINEON"
    OPAMP_ON = "OPAMP_ON"

    # Voltage regulators
    VOLTAGE_REGULATOR_LINEAR_TI = "VOLTAGE_REGULATOR_LINEAR_TI"
    VOLTAGE_REGULATOR_SWITCHING_TI = "VOLTAGE_REGULATOR_SWITCHING_TI"
    VOLTAGE_REGULATOR_LINEAR_ST = "VOLTAGE_REGULATOR_LINEAR_ST"
    VOLTAGE_REGULATOR_SWITCHING_ST = "VOLTAGE_REGULATOR_SWITCHING_ST"
    VOLTAGE_REGULATOR_LINEAR_INFINEON = "VOLTAGE_REGULATOR_LINEAR_INFINEON"
    VOLTAGE_REGULATOR_SWITCHING_INFINEON = "VOLTAGE_REGULATOR_SWITCHING_INFINEON"
    VOLTAGE_REGULATOR_LINEAR_ON = "VOLTAGE_REGULATOR_LINEAR_ON"
    VOLTAGE_REGULATOR_SWITCHING_ON = "VOLTAGE_REGULATOR_SWITCHING_ON"

    # Timing
    CRYSTAL_EPSON = "CRYSTAL_EPSON"
    CRYSTAL_NDK = "CRYSTAL_NDK"
    CRYSTAL_ABRACON = "CRYSTAL_ABRACON"
    CRYSTAL_IQD = "CRYSTAL_IQD"
    OSCILLATOR_EPSON = "OSCILLATOR_EPSON"
    OSCILLATOR_NDK = "OSCILLATOR_NDK"
    OSCILLATOR_ABRACON = "OSCILLATOR_ABRACON"
    OSCILLATOR_IQD = "OSCILLATOR_IQD"

    # Memory
    MEMORY_ST = "MEMORY_ST"
    MEMORY_MICROCHIP = "MEMORY_MICROCHIP"
    MEMORY_ATMEL = "MEMORY_ATMEL"
    MEMORY_INFINEON = "MEMORY_INFINEON"
    MEMORY_NXP = "MEMORY_NXP"
    MEMORY_FLASH_WINBOND = "MEMORY_FLASH_WINBOND"
    MEMORY_EEPROM_WINBOND = "MEMORY_EEPROM_WINBOND"

    # Connectors
    CONNECTOR_MOLEX = "CONNECTOR_MOLEX"
    CONNECTOR_TE = "CONNECTOR_TE"
    CONNECTOR_JST = "CONNECTOR_JST"
    CONNECTOR_HIROSE = "CONNECTOR_HIROSE"
    CONNECTOR_WURTH = "CONNECTOR_WURTH"

    # Sensors
    TEMPERATURE_SENSOR_TI = "TEMPERATURE_SENSOR_TI"
    TEMPERATURE_SENSOR_ST = "TEMPERATURE_SENSOR_ST"
    TEMPERATURE_SENSOR_MAXIM = "TEMPERATURE_SENSOR_MAXIM"

    # Circuit protection
    FUSE_LITTELFUSE = "FUSE_LITTELFUSE"
    FUSE_BUSSMANN = "FUSE_BUSSMANN"

    def __str__(self) -> str:
        return self.value

    @property
    def base_type(self) -> "ComponentType":
        return _BASE_TYPES[self]

    @property
    def is_vendor_specific(self) -> bool:
        return _BASE_TYPES[self] is not self

    @property
    def specificity(self) -> int:
        """Rank used by the resolver: higher is narrower.

        GENERIC 0, IC/LOGIC_IC 1, ANALOG_IC/DIGITAL_IC 2,
        component base types 3, vendor variants 4.
        """
        if self.is_vendor_specific:
            return 4
        return _CATEGORY_SPECIFICITY.get(self, 3)

    @property
    def is_passive(self) -> bool:
        return _BASE_TYPES[self] in _PASSIVE_BASES

    @property
    def is_semiconductor(self) -> bool:
        return _BASE_TYPES[self] in _SEMICONDUCTOR_BASES

    @property
    def manufacturer(self) -> str | None:
        """Vendor suffix of a vendor variant ("YAGEO"), None for base types."""
        if not self.is_vendor_specific:
            return None
        return self.value.rsplit("_", 1)[-1]

    def is_same_family(self, other: "ComponentType | None") -> bool:
        if other is None:
            return False
        return self.base_type is other.base_type

    def is_more_specific_than(self, other: "ComponentType") -> bool:
        """True when ``self`` is a variant of ``other`` or outranks it."""
        if self is other:
            return False
        if self.base_type is other:
            return True
        return self.specificity > other.specificity

    def derived_types(self) -> tuple["ComponentType", ...]:
        """All vendor variants whose base is this type, in declaration order."""
        return tuple(t for t in ComponentType if t is not self and _BASE_TYPES[t] is self)

    @classmethod
    def from_name(cls, name: str) -> "ComponentType | None":
        """Case-insensitive lookup by identifier; None if unknown."""
        if not isinstance(name, str):
            return None
        try:
            return cls(name.strip().upper())
        except ValueError:
            return None


_T = ComponentType

_CATEGORY_SPECIFICITY: dict[ComponentType, int] = {
    _T.GENERIC: 0,
    _T.IC: 1,
    _T.LOGIC_IC: 1,
    _T.ANALOG_IC: 2,
    _T.DIGITAL_IC: 2,
}


# =============================================================================
# BASE TYPE MAPPING
# =============================================================================
# One entry per member. Checked below at import time.

_BASE_TYPES: dict[ComponentType, ComponentType] = {
    # Category and base types are their own base
    _T.GENERIC: _T.GENERIC,
    _T.IC: _T.IC,
    _T.LOGIC_IC: _T.LOGIC_IC,
    _T.ANALOG_IC: _T.ANALOG_IC,
    _T.DIGITAL_IC: _T.DIGITAL_IC,
    _T.RESISTOR: _T.RESISTOR,
    _T.CAPACITOR: _T.CAPACITOR,
    _T.INDUCTOR: _T.INDUCTOR,
    _T.DIODE: _T.DIODE,
    _T.TRANSISTOR: _T.TRANSISTOR,
    _T.MOSFET: _T.MOSFET,
    _T.IGBT: _T.IGBT,
    _T.LED: _T.LED,
    _T.MICROCONTROLLER: _T.MICROCONTROLLER,
    _T.OPAMP: _T.OPAMP,
    _T.VOLTAGE_REGULATOR: _T.VOLTAGE_REGULATOR,
    _T.CRYSTAL: _T.CRYSTAL,
    _T.OSCILLATOR: _T.OSCILLATOR,
    _T.MEMORY: _T.MEMORY,
    _T.MEMORY_FLASH: _T.MEMORY_FLASH,
    _T.MEMORY_EEPROM: _T.MEMORY_EEPROM,
    _T.CONNECTOR: _T.CONNECTOR,
    _T.SENSOR: _T.SENSOR,
    _T.TEMPERATURE_SENSOR: _T.TEMPERATURE_SENSOR,
    _T.FUSE: _T.FUSE,
    # Resistors
    _T.RESISTOR_CHIP_YAGEO: _T.RESISTOR,
    _T.RESISTOR_THT_YAGEO: _T.RESISTOR,
    _T.RESISTOR_CHIP_VISHAY: _T.RESISTOR,
    _T.RESISTOR_THT_VISHAY: _T.RESISTOR,
    _T.RESISTOR_CHIP_PANASONIC: _T.RESISTOR,
    _T.RESISTOR_CHIP_BOURNS: _T.RESISTOR,
    # Capacitors
    _T.CAPACITOR_CERAMIC_YAGEO: _T.CAPACITOR,
    _T.CAPACITOR_CERAMIC_MURATA: _T.CAPACITOR,
    _T.CAPACITOR_CERAMIC_TDK: _T.CAPACITOR,
    _T.CAPACITOR_CERAMIC_SAMSUNG: _T.CAPACITOR,
    _T.CAPACITOR_CERAMIC_KEMET: _T.CAPACITOR,
    _T.CAPACITOR_TANTALUM_KEMET: _T.CAPACITOR,
    _T.CAPACITOR_TANTALUM_AVX: _T.CAPACITOR,
    _T.CAPACITOR_ELECTROLYTIC_PANASONIC: _T.CAPACITOR,
    _T.CAPACITOR_ELECTROLYTIC_NICHICON: _T.CAPACITOR,
    # Inductors
    _T.INDUCTOR_CHIP_MURATA: _T.INDUCTOR,
    _T.INDUCTOR_CHIP_TDK: _T.INDUCTOR,
    _T.INDUCTOR_CHIP_BOURNS: _T.INDUCTOR,
    _T.INDUCTOR_CHIP_COILCRAFT: _T.INDUCTOR,
    _T.INDUCTOR_THT_BOURNS: _T.INDUCTOR,
    # Discrete semiconductors
    _T.DIODE_VISHAY: _T.DIODE,
    _T.DIODE_ON: _T.DIODE,
    _T.DIODE_ROHM: _T.DIODE,
    _T.TRANSISTOR_VISHAY: _T.TRANSISTOR,
    _T.TRANSISTOR_NXP: _T.TRANSISTOR,
    _T.MOSFET_INFINEON: _T.MOSFET,
    _T.MOSFET_ST: _T.MOSFET,
    _T.MOSFET_VISHAY: _T.MOSFET,
    _T.MOSFET_ONSEMI: _T.MOSFET,
    _T.MOSFET_NEXPERIA: _T.MOSFET,
    _T.MOSFET_ROHM: _T.MOSFET,
    _T.IGBT_INFINEON: _T.IGBT,
    _T.IGBT_ONSEMI: _T.IGBT,
    # LEDs
    _T.LED_STANDARD_VISHAY: _T.LED,
    _T.LED_SMD_VISHAY: _T.LED,
    _T.LED_STANDARD_KINGBRIGHT: _T.LED,
    _T.LED_SMD_KINGBRIGHT: _T.LED,
    _T.LED_STANDARD_WURTH: _T.LED,
    _T.LED_SMD_WURTH: _T.LED,
    _T.LED_HIGHPOWER_CREE: _T.LED,
    _T.LED_HIGHPOWER_OSRAM: _T.LED,
    # Microcontrollers
    _T.MICROCONTROLLER_ST: _T.MICROCONTROLLER,
    _T.MICROCONTROLLER_TI: _T.MICROCONTROLLER,
    _T.MICROCONTROLLER_INFINEON: _T.MICROCONTROLLER,
    _T.MICROCONTROLLER_NXP: _T.MICROCONTROLLER,
    _T.MICROCONTROLLER_MICROCHIP: _T.MICROCONTROLLER,
    _T.MICROCONTROLLER_ATMEL: _T.MICROCONTROLLER,
    _T.MICROCONTROLLER_RENESAS: _T.MICROCONTROLLER,
    _T.MICROCONTROLLER_CYPRESS: _T.MICROCONTROLLER,
    # Op-amps
    _T.OPAMP_TI: _T.OPAMP,
    _T.OPAMP_ST: _T.OPAMP,
    _T.OPAMP_AD: _T.OPAMP,
    _T.OPAMP_INFINEON: _T.OPAMP,
    _T.OPAMP_ON: _T.OPAMP,
    # Voltage regulators
    _T.VOLTAGE_REGULATOR_LINEAR_TI: _T.VOLTAGE_REGULATOR,
    _T.VOLTAGE_REGULATOR_SWITCHING_TI: _T.VOLTAGE_REGULATOR,
    _T.VOLTAGE_REGULATOR_LINEAR_ST: _T.VOLTAGE_REGULATOR,
    _T.VOLTAGE_REGULATOR_SWITCHING_ST: _T.VOLTAGE_REGULATOR,
    _T.VOLTAGE_REGULATOR_LINEAR_INFINEON: _T.VOLTAGE_REGULATOR,
    _T.VOLTAGE_REGULATOR_SWITCHING_INFINEON: _T.VOLTAGE_REGULATOR,
    _T.VOLTAGE_REGULATOR_LINEAR_ON: _T.VOLTAGE_REGULATOR,
    _T.VOLTAGE_REGULATOR_SWITCHING_ON: _T.VOLTAGE_REGULATOR,
    # Timing
    _T.CRYSTAL_EPSON: _T.CRYSTAL,
    _T.CRYSTAL_NDK: _T.CRYSTAL,
    _T.CRYSTAL_ABRACON: _T.CRYSTAL,
    _T.CRYSTAL_IQD: _T.CRYSTAL,
    _T.OSCILLATOR_EPSON: _T.OSCILLATOR,
    _T.OSCILLATOR_NDK: _T.OSCILLATOR,
    _T.OSCILLATOR_ABRACON: _T.OSCILLATOR,
    _T.OSCILLATOR_IQD: _T.OSCILLATOR,
    # Memory
    _T.MEMORY_ST: _T.MEMORY,
    _T.MEMORY_MICROCHIP: _T.MEMORY,
    _T.MEMORY_ATMEL: _T.MEMORY,
    _T.MEMORY_INFINEON: _T.MEMORY,
    _T.MEMORY_NXP: _T.MEMORY,
    _T.MEMORY_FLASH_WINBOND: _T.MEMORY_FLASH,
    _T.MEMORY_EEPROM_WINBOND: _T.MEMORY_EEPROM,
    # Connectors
    _T.CONNECTOR_MOLEX: _T.CONNECTOR,
    _T.CONNECTOR_TE: _T.CONNECTOR,
    _T.CONNECTOR_JST: _T.CONNECTOR,
    _T.CONNECTOR_HIROSE: _T.CONNECTOR,
    _T.CONNECTOR_WURTH: _T.CONNECTOR,
    # Sensors
    _T.TEMPERATURE_SENSOR_TI: _T.TEMPERATURE_SENSOR,
    _T.TEMPERATURE_SENSOR_ST: _T.TEMPERATURE_SENSOR,
    _T.TEMPERATURE_SENSOR_MAXIM: _T.TEMPERATURE_SENSOR,
    # Circuit protection
    _T.FUSE_LITTELFUSE: _T.FUSE,
    _T.FUSE_BUSSMANN: _T.FUSE,
}

_missing = [t.value for t in ComponentType if t not in _BASE_TYPES]
if _missing:
    raise RuntimeError(f"No base type declared for: {', '.join(_missing)}")

# A base must be its own base; chains are not allowed
_chained = [t.value for t, base in _BASE_TYPES.items() if _BASE_TYPES[base] is not base]
if _chained:
    raise RuntimeError(f"Base type mapping is not flat for: {', '.join(_chained)}")

_PASSIVE_BASES = frozenset({
    _T.RESISTOR, _T.CAPACITOR, _T.INDUCTOR, _T.CRYSTAL, _T.FUSE,
})

_SEMICONDUCTOR_BASES = frozenset({
    _T.IC, _T.LOGIC_IC, _T.ANALOG_IC, _T.DIGITAL_IC,
    _T.DIODE, _T.TRANSISTOR, _T.MOSFET, _T.IGBT, _T.LED,
    _T.MICROCONTROLLER, _T.OPAMP, _T.VOLTAGE_REGULATOR, _T.OSCILLATOR,
    _T.MEMORY, _T.MEMORY_FLASH, _T.MEMORY_EEPROM,
    _T.SENSOR, _T.TEMPERATURE_SENSOR,
})


def base_type(component_type: ComponentType) -> ComponentType:
    """Generic base of ``component_type``."""
    return _BASE_TYPES[component_type]


def vendor_types() -> tuple[ComponentType, ...]:
    return tuple(t for t in ComponentType if t.is_vendor_specific)
