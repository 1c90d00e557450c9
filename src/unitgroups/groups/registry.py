"""
unitgroups.groups.registry
==========================

The fixed set of quantity groups used by the application.

``init_registry()`` builds every group once and returns a ``QuantityRegistry``
that the host passes to whoever needs it. The identifier -> group mapping is
read-only after construction; the groups themselves stay mutable through
default switching.

Presets
-------
``apply_metric_preset`` / ``apply_imperial_preset`` rewrite the default unit of
the groups listed in ``METRIC_PRESET`` / ``IMPERIAL_PRESET``. Application is
best-effort: a failing entry is logged and reported, the remaining groups are
still updated. Groups are never left with an invalid default.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Tuple

from unitgroups.core.chars import CUBED, DEGREE, DOT, MICRO, PERMILLE, SQUARED, ZWSP
from unitgroups.core.errors import InvalidArgumentError, UnitGroupError
from unitgroups.core.unit import (
    CaliberUnit,
    DegreeUnit,
    FixedPrecisionUnit,
    LinearUnit,
    TemperatureUnit,
    Unit,
)
from unitgroups.groups.group import QuantityGroup
from unitgroups.groups.stability import StabilityGroupView

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Group tables: identifier -> (units in display order, default index)
# ---------------------------------------------------------------------------
_GROUP_TABLE: Dict[str, Tuple[Tuple[Unit, ...], int]] = {
    "NONE": ((LinearUnit(ZWSP, 1),), 0),
    "LENGTH": ((
        LinearUnit("mm", 0.001),
        LinearUnit("cm", 0.01),
        LinearUnit("m", 1),
        LinearUnit("in", 0.0254),
        LinearUnit("ft", 0.3048),
    ), 2),
    "MOTOR_DIMENSIONS": ((
        LinearUnit("mm", 0.001),
        LinearUnit("cm", 0.01),
        LinearUnit("in", 0.0254),
    ), 0),
    "DISTANCE": ((
        LinearUnit("m", 1),
        LinearUnit("km", 1000),
        LinearUnit("ft", 0.3048),
        LinearUnit("yd", 0.9144),
        LinearUnit("mi", 1609.344),
    ), 0),
    "AREA": ((
        LinearUnit("mm" + SQUARED, 0.001 ** 2),
        LinearUnit("cm" + SQUARED, 0.01 ** 2),
        LinearUnit("m" + SQUARED, 1),
        LinearUnit("in" + SQUARED, 0.0254 ** 2),
        LinearUnit("ft" + SQUARED, 0.3048 ** 2),
    ), 1),
    "STABILITY": ((
        LinearUnit("mm", 0.001),
        LinearUnit("cm", 0.01),
        LinearUnit("in", 0.0254),
        CaliberUnit(None),
    ), 3),
    "VELOCITY": ((
        LinearUnit("m/s", 1),
        LinearUnit("km/h", 1 / 3.6),
        LinearUnit("ft/s", 0.3048),
        LinearUnit("mph", 0.44704),
    ), 0),
    "ACCELERATION": ((
        LinearUnit("m/s" + SQUARED, 1),
        LinearUnit("ft/s" + SQUARED, 0.3048),
    ), 0),
    "MASS": ((
        LinearUnit("g", 0.001),
        LinearUnit("kg", 1),
        LinearUnit("oz", 0.0283495231),
        LinearUnit("lb", 0.45359237),
    ), 1),
    "ANGLE": ((
        DegreeUnit(),
        FixedPrecisionUnit("rad", 0.01),
    ), 0),
    "DENSITY_BULK": ((
        LinearUnit("g/cm" + CUBED, 1000),
        LinearUnit("kg/m" + CUBED, 1),
        LinearUnit("oz/in" + CUBED, 1729.99404),
        LinearUnit("lb/ft" + CUBED, 16.0184634),
    ), 0),
    "DENSITY_SURFACE": ((
        LinearUnit("g/cm" + SQUARED, 10),
        LinearUnit("g/m" + SQUARED, 0.001),
        LinearUnit("kg/m" + SQUARED, 1),
        LinearUnit("oz/in" + SQUARED, 43.9418487),
        LinearUnit("oz/ft" + SQUARED, 0.305151727),
        LinearUnit("lb/ft" + SQUARED, 4.88242764),
    ), 1),
    "DENSITY_LINE": ((
        LinearUnit("g/m", 0.001),
        LinearUnit("kg/m", 1),
        LinearUnit("oz/ft", 0.0930102465),
    ), 0),
    "FORCE": ((
        LinearUnit("N", 1),
        LinearUnit("lbf", 4.44822162),
        LinearUnit("kgf", 9.80665),
    ), 0),
    "IMPULSE": ((
        LinearUnit("Ns", 1),
        LinearUnit("lbf" + DOT + "s", 4.44822162),
    ), 0),
    "TIME_STEP": ((
        FixedPrecisionUnit("ms", 1, 0.001),
        FixedPrecisionUnit("s", 0.01),
    ), 1),
    "SHORT_TIME": ((LinearUnit("s", 1),), 0),
    "FLIGHT_TIME": ((
        LinearUnit("s", 1),
        LinearUnit("min", 60),
    ), 0),
    "ROLL": ((
        LinearUnit("rad/s", 1),
        LinearUnit("r/s", 2 * math.pi),
        LinearUnit("rpm", 2 * math.pi / 60),
    ), 1),
    "TEMPERATURE": ((
        FixedPrecisionUnit("K", 1),
        TemperatureUnit(DEGREE + "C", 1, 273.15),
        TemperatureUnit(DEGREE + "F", 5 / 9, 459.67 * 5 / 9),
    ), 1),
    "PRESSURE": ((
        FixedPrecisionUnit("mbar", 1, 1.0e2),
        FixedPrecisionUnit("bar", 0.001, 1.0e5),
        FixedPrecisionUnit("atm", 0.001, 1.01325e5),
        LinearUnit("mmHg", 101325.0 / 760.0),
        LinearUnit("inHg", 3386.389),
        LinearUnit("psi", 6894.75729),
        LinearUnit("Pa", 1),
    ), 0),
    "RELATIVE": ((
        FixedPrecisionUnit(ZWSP, 0.01, 1.0),
        FixedPrecisionUnit("%", 1, 0.01),
        FixedPrecisionUnit(PERMILLE, 1, 0.001),
    ), 1),
    "ROUGHNESS": ((
        LinearUnit(MICRO + "m", 0.000001),
        LinearUnit("mil", 0.0000254),
    ), 0),
    "COEFFICIENT": ((FixedPrecisionUnit(ZWSP, 0.01),), 0),
}

IDENTIFIERS: Tuple[str, ...] = tuple(_GROUP_TABLE)


# ---------------------------------------------------------------------------
# Preset tables: identifier -> default symbol
# ---------------------------------------------------------------------------
METRIC_PRESET: Mapping[str, str] = MappingProxyType({
    "LENGTH": "cm",
    "MOTOR_DIMENSIONS": "mm",
    "DISTANCE": "m",
    "AREA": "cm" + SQUARED,
    "STABILITY": "cal",
    "VELOCITY": "m/s",
    "ACCELERATION": "m/s" + SQUARED,
    "MASS": "g",
    "ANGLE": DEGREE,
    "DENSITY_BULK": "g/cm" + CUBED,
    "DENSITY_SURFACE": "g/m" + SQUARED,
    "DENSITY_LINE": "g/m",
    "FORCE": "N",
    "IMPULSE": "Ns",
    "TIME_STEP": "s",
    "FLIGHT_TIME": "s",
    "ROLL": "r/s",
    "TEMPERATURE": DEGREE + "C",
    "PRESSURE": "mbar",
    "RELATIVE": "%",
    "ROUGHNESS": MICRO + "m",
})

IMPERIAL_PRESET: Mapping[str, str] = MappingProxyType({
    "LENGTH": "in",
    "MOTOR_DIMENSIONS": "in",
    "DISTANCE": "ft",
    "AREA": "in" + SQUARED,
    "STABILITY": "cal",
    "VELOCITY": "ft/s",
    "ACCELERATION": "ft/s" + SQUARED,
    "MASS": "oz",
    "ANGLE": DEGREE,
    "DENSITY_BULK": "oz/in" + CUBED,
    "DENSITY_SURFACE": "oz/ft" + SQUARED,
    "DENSITY_LINE": "oz/ft",
    "FORCE": "N",
    "IMPULSE": "Ns",
    "TIME_STEP": "s",
    "FLIGHT_TIME": "s",
    "ROLL": "r/s",
    "TEMPERATURE": DEGREE + "F",
    "PRESSURE": "mbar",
    "RELATIVE": "%",
    "ROUGHNESS": "mil",
})


@dataclass
class PresetReport:
    """Outcome of a best-effort preset application."""

    applied: List[str] = field(default_factory=list)
    failed: Dict[str, UnitGroupError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class QuantityRegistry:
    """Read-only mapping from identifier to ``QuantityGroup``.

    Build it with ``init_registry()``; constructing one directly from a
    mapping is meant for tests.
    """

    def __init__(self, groups: Mapping[str, QuantityGroup]) -> None:
        self._groups: Mapping[str, QuantityGroup] = MappingProxyType(dict(groups))

    # -------------------------- lookup -------------------------------------
    def get(self, identifier: str) -> QuantityGroup:
        try:
            return self._groups[identifier]
        except KeyError:
            raise InvalidArgumentError(f"unknown quantity group: {identifier!r}") from None

    def __getitem__(self, identifier: str) -> QuantityGroup:
        return self.get(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._groups

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def identifiers(self) -> Tuple[str, ...]:
        return tuple(self._groups)

    def groups(self) -> Mapping[str, QuantityGroup]:
        return self._groups

    # -------------------------- presets ------------------------------------
    def apply_preset(self, preset: Mapping[str, str]) -> PresetReport:
        """Set each listed group's default by symbol, continuing past failures."""
        report = PresetReport()
        for identifier, symbol in preset.items():
            try:
                self.get(identifier).set_default(symbol)
            except UnitGroupError as e:
                log.warning("could not set default of %s to %r: %s", identifier, symbol, e)
                report.failed[identifier] = e
            else:
                report.applied.append(identifier)
        return report

    def apply_metric_preset(self) -> PresetReport:
        return self.apply_preset(METRIC_PRESET)

    def apply_imperial_preset(self) -> PresetReport:
        return self.apply_preset(IMPERIAL_PRESET)

    def snapshot_defaults(self) -> Dict[str, str]:
        """Every group's default unit as its symbol, ready to be persisted."""
        return {ident: g.default_unit().symbol for ident, g in self._groups.items()}

    def restore_defaults(self, defaults: Mapping[str, str]) -> PresetReport:
        """Inverse of ``snapshot_defaults``; unknown entries are reported, not raised."""
        return self.apply_preset(defaults)

    # -------------------------- stability ---------------------------------
    def stability_group_for(self, context: Any) -> StabilityGroupView:
        """A fresh stability view whose caliber unit is bound to ``context``.

        The view holds ``context`` weakly; keep a reference to it for as long as
        the view is in use.
        """
        return StabilityGroupView(self.get("STABILITY"), context)

    def __repr__(self) -> str:
        return f"QuantityRegistry({', '.join(self._groups)})"


def _build_group(identifier: str) -> QuantityGroup:
    units, default = _GROUP_TABLE[identifier]
    return QuantityGroup(units, default, name=identifier)


def init_registry() -> QuantityRegistry:
    """Build every quantity group once. Call at application start-up."""
    registry = QuantityRegistry({ident: _build_group(ident) for ident in IDENTIFIERS})
    log.debug("initialised %d quantity groups", len(registry))
    return registry


__all__ = [
    "QuantityRegistry",
    "PresetReport",
    "init_registry",
    "IDENTIFIERS",
    "METRIC_PRESET",
    "IMPERIAL_PRESET",
]
