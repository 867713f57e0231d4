"""Vendor rule providers ("handlers").

Each handler owns a table of MPN patterns per component type. A pattern
declared for a vendor variant is registered under that variant and under
its base type, both tagged with the handler's id, so a registry query can
tell which vendor's numbering scheme produced a match.

``BUILTIN_HANDLERS`` is an explicit, ordered tuple: the order in which
handlers register is part of the visible configuration.
"""

import re
from dataclasses import dataclass

from .patterns import PatternRegistry
from .types import ComponentType

_T = ComponentType

_NON_ALNUM_PATTERN = re.compile(r"[^A-Za-z0-9]")
_SERIES_PATTERN = re.compile(r"^([A-Z]*)(\d+)")


def clean_mpn(mpn: str) -> str:
    """Uppercase and trim; keeps punctuation that patterns rely on ('PHR-2')."""
    if not isinstance(mpn, str):
        return ""
    return mpn.strip().upper()


def normalize_mpn(mpn: str) -> str:
    """Uppercase with all non-alphanumerics removed: 'bc-547 b' -> 'BC547B'."""
    if not isinstance(mpn, str):
        return ""
    return _NON_ALNUM_PATTERN.sub("", mpn).upper()


@dataclass(frozen=True)
class Handler:
    """A vendor's MPN rule set.

    ``rules`` maps a component type to the patterns that identify it.
    """
    handler_id: str
    manufacturer: str
    rules: tuple[tuple[ComponentType, tuple[str, ...]], ...]

    def register(self, registry: PatternRegistry) -> int:
        """Register every rule; returns the number of new registry entries."""
        added = 0
        for component_type, patterns in self.rules:
            targets = [component_type]
            if component_type.base_type is not component_type:
                targets.append(component_type.base_type)
            for target in targets:
                for pattern in patterns:
                    if registry.register(target, self.handler_id, pattern):
                        added += 1
        return added

    def matches(self, registry: PatternRegistry, mpn: str, component_type: ComponentType) -> bool:
        """Self-check scoped to this handler's own patterns."""
        return registry.matches_for_handler(clean_mpn(mpn), component_type, self.handler_id)

    def supported_types(self) -> frozenset[ComponentType]:
        types = set()
        for component_type, _ in self.rules:
            types.add(component_type)
            types.add(component_type.base_type)
        return frozenset(types)

    def extract_series(self, mpn: str) -> str:
        """Leading letters plus the first digit run: 'IRF540NPBF' -> 'IRF540'.

        An MPN without digits is returned whole; one starting with digits
        yields just the digits ('1N4148' -> '1').
        """
        cleaned = normalize_mpn(mpn)
        match = _SERIES_PATTERN.match(cleaned)
        if not match:
            return cleaned
        return match.group(1) + match.group(2)


# =============================================================================
# BUILT-IN HANDLERS
# =============================================================================

YAGEO = Handler("yageo", "Yageo", (
    (_T.RESISTOR_CHIP_YAGEO, (r"^RC[0-9]{4}.*", r"^RT[0-9]{4}.*", r"^RL[0-9]{4}.*")),
    (_T.RESISTOR_THT_YAGEO, (r"^(?:CFR|MFR)-?[0-9]+.*",)),
    (_T.CAPACITOR_CERAMIC_YAGEO, (r"^CC[0-9]{4}.*",)),
))

VISHAY = Handler("vishay", "Vishay", (
    (_T.RESISTOR_CHIP_VISHAY, (r"^CRCW[0-9]{4}.*", r"^RCG[0-9]{4}.*")),
    (_T.RESISTOR_THT_VISHAY, (r"^(?:CMF|MRS)[0-9]+.*",)),
    (_T.MOSFET_VISHAY, (r"^SI[0-9]{4}[A-Z]*.*", r"^SIR[0-9]{3}.*")),
    (_T.DIODE_VISHAY, (r"^(?:BYV|BYW)[0-9]+.*", r"^VS-[0-9A-Z]+.*")),
    (_T.LED_STANDARD_VISHAY, (r"^TLH[RGYB][0-9]{4}.*",)),
))

INFINEON = Handler("infineon", "Infineon", (
    (_T.MOSFET_INFINEON, (
        r"^IRF[0-9].*", r"^IRL[0-9].*", r"^IRFP[0-9].*", r"^IPP[0-9].*", r"^BSC[0-9].*",
    )),
    (_T.IGBT_INFINEON, (r"^IKP[0-9].*", r"^IKW[0-9].*")),
    (_T.VOLTAGE_REGULATOR_LINEAR_INFINEON, (r"^IFX[0-9].*",)),
    (_T.MICROCONTROLLER_INFINEON, (r"^XMC[0-9].*",)),
))

ST = Handler("st", "STMicroelectronics", (
    (_T.MOSFET_ST, (
        r"^STF[0-9].*", r"^STP[0-9].*", r"^STD[0-9].*", r"^STB[0-9].*",
        r"^VN[0-9].*", r"^VP[0-9].*",
    )),
    (_T.VOLTAGE_REGULATOR_LINEAR_ST, (r"^L78.*", r"^L79.*", r"^MC78.*")),
    (_T.MICROCONTROLLER_ST, (r"^STM32[FLHGWU].*",)),
    (_T.OPAMP_ST, (r"^TSV[0-9].*",)),
    (_T.MEMORY_ST, (r"^M24C[0-9].*", r"^M95[0-9].*")),
))

TI = Handler("ti", "Texas Instruments", (
    (_T.VOLTAGE_REGULATOR_LINEAR_TI, (
        r"^(?:LM|UA)78[0-9]{2}.*", r"^(?:LM|UA)79[0-9]{2}.*", r"^LM317.*",
    )),
    (_T.VOLTAGE_REGULATOR_SWITCHING_TI, (r"^TPS[0-9]{4,5}.*",)),
    (_T.OPAMP_TI, (
        r"^LM358.*", r"^LM324(?![0-9]).*", r"^TL07[0-9].*", r"^TL08[0-9].*", r"^OPA[0-9].*",
    )),
    (_T.MICROCONTROLLER_TI, (r"^MSP430.*",)),
    (_T.TEMPERATURE_SENSOR_TI, (r"^TMP[0-9].*", r"^LM35[A-D].*")),
))

MURATA = Handler("murata", "Murata", (
    (_T.CAPACITOR_CERAMIC_MURATA, (
        r"^GRM[0-9][0-9A-Z]{2}[A-Z0-9]*", r"^GCM[0-9][0-9A-Z]{2}[A-Z0-9]*",
    )),
    (_T.INDUCTOR_CHIP_MURATA, (r"^LQ[MGW][0-9A-Z]{2}[A-Z]{2}[0-9R][0-9A-Z]*",)),
))

WURTH = Handler("wurth", "Wurth Elektronik", (
    (_T.CONNECTOR_WURTH, (r"^61[0-9]{8}[0-9A-Z]*",)),
    (_T.LED_SMD_WURTH, (r"^150[0-9]{6}[A-Z0-9]*",)),
))

JST = Handler("jst", "JST", (
    (_T.CONNECTOR_JST, (r"^PH[RSDL]?-[0-9]+.*", r"^XH[RSDL]?-[0-9]+.*")),
))

# Prefix conventions shared across vendors. Every rule targets a base type.
GENERIC = Handler("generic", "Generic", (
    (_T.DIODE, (r"^(?:1N|BAV|BAS|BAT)[0-9].*",)),
    (_T.TRANSISTOR, (r"^(?:BC|2N|PN|2SC|2SA)[0-9].*",)),
    (_T.MOSFET, (r"^(?:IRF|IRL|FQP|FDS)[0-9].*",)),
    (_T.MICROCONTROLLER, (r"^(?:PIC|STM32|ATMEGA)[0-9].*",)),
    (_T.OPAMP, (r"^(?:LM|TL|NE|UA|AD)[0-9].*",)),
    (_T.LOGIC_IC, (r"^74[A-Z]*[0-9]+.*", r"^CD4[0-9]{3}.*")),
    (_T.LED, (r"^LED.*", r"^(?:WP|LTL)[0-9].*")),
    (_T.CRYSTAL, (r"^(?:HC|Q)[0-9].*",)),
    (_T.RESISTOR, (r"^R[0-9].*",)),
    (_T.CAPACITOR, (r"^C[0-9].*",)),
    (_T.INDUCTOR, (r"^L[0-9].*",)),
))

BUILTIN_HANDLERS: tuple[Handler, ...] = (
    YAGEO,
    VISHAY,
    INFINEON,
    ST,
    TI,
    MURATA,
    WURTH,
    JST,
    GENERIC,
)


def register_handlers(
    registry: PatternRegistry,
    handlers: "tuple[Handler, ...] | list[Handler]" = BUILTIN_HANDLERS,
) -> PatternRegistry:
    """Register ``handlers`` into ``registry`` in the given order."""
    seen: set[str] = set()
    for handler in handlers:
        if handler.handler_id in seen:
            raise ValueError(f"Duplicate handler id: {handler.handler_id}")
        seen.add(handler.handler_id)
        handler.register(registry)
    return registry


def handler_by_id(handler_id: str, handlers: "tuple[Handler, ...]" = BUILTIN_HANDLERS) -> Handler | None:
    for handler in handlers:
        if handler.handler_id == handler_id:
            return handler
    return None
