"""
unitgroups.core.unit
====================

Single conversion laws between an SI value and a display value.

Every unit is an immutable value object exposing ``symbol``, ``to_display`` and
``to_si``. Formatting, rounding and ``Value`` creation are shared through the
``Unit`` protocol, and each variant overrides only what differs:

- ``LinearUnit``: ``si = display * factor``.
- ``FixedPrecisionUnit``: linear, but ``to_display`` is quantized to a step.
- ``DegreeUnit``: linear degrees, rendered with at most one decimal.
- ``TemperatureUnit``: affine ``si = display * factor + offset``.
- ``CaliberUnit``: linear with a factor read from an external reference at
  conversion time.
"""

from __future__ import annotations

import math
import weakref
from dataclasses import dataclass, field
from math import isfinite
from typing import Any, Optional, Protocol, runtime_checkable

from unitgroups.core.chars import DEGREE
from unitgroups.core.errors import InvalidArgumentError, UnboundContextError
from unitgroups.core.formatting import (
    format_fixed,
    format_short,
    format_significant,
    round_half_away,
    round_significant,
)

CALIBER_SYMBOL = "cal"

# Caliber used when a bound reference reports no usable diameter.
DEFAULT_CALIBER = 0.01


def _check_symbol(symbol: str) -> None:
    if not isinstance(symbol, str) or not symbol:
        raise InvalidArgumentError("unit symbol must be a non-empty string")


def _check_scale(name: str, value: float) -> None:
    if not (isfinite(value) and value != 0):
        raise InvalidArgumentError(f"{name} must be a finite, non-zero number, got {value!r}")


@runtime_checkable
class Unit(Protocol):
    symbol: str

    def to_display(self, si_value: float) -> float: ...
    def to_si(self, display_value: float) -> float: ...

    @property
    def separator(self) -> str:
        """Text placed between number and symbol.

        Single glyph symbols such as ``%`` or ``°`` attach directly to the number.
        """
        s = self.symbol
        return "" if len(s) == 1 and not s.isalnum() else " "

    def format(self, si_value: float) -> str:
        return format_significant(self.to_display(si_value))

    def format_with_symbol(self, si_value: float) -> str:
        return f"{self.format(si_value)}{self.separator}{self.symbol}"

    def round(self, display_value: float) -> float:
        """Snap a display value to the unit's natural step."""
        return round_significant(display_value)

    def to_value(self, si_value: float) -> "Value":
        return Value(float(si_value), self)


@dataclass(frozen=True, slots=True)
class LinearUnit(Unit):
    """Pure multiplicative conversion: ``si = display * factor``."""

    symbol: str
    factor: float = 1.0

    def __post_init__(self) -> None:
        _check_symbol(self.symbol)
        _check_scale("factor", self.factor)

    def to_display(self, si_value: float) -> float:
        return si_value / self.factor

    def to_si(self, display_value: float) -> float:
        return display_value * self.factor


@dataclass(frozen=True, slots=True)
class FixedPrecisionUnit(Unit):
    """Linear unit whose display values are quantized to ``precision``.

    ``to_display`` rounds half away from zero to a multiple of ``precision``
    and ``format`` always prints the matching number of decimals, so a
    ``bar`` unit with precision ``0.001`` renders 101325 Pa as ``"1.013"``.
    ``to_si`` is not quantized.
    """

    symbol: str
    precision: float
    factor: float = 1.0

    def __post_init__(self) -> None:
        _check_symbol(self.symbol)
        _check_scale("precision", self.precision)
        _check_scale("factor", self.factor)
        if self.precision < 0:
            raise InvalidArgumentError("precision must be positive")

    def to_display(self, si_value: float) -> float:
        return round_half_away(si_value / self.factor, self.precision)

    def to_si(self, display_value: float) -> float:
        return display_value * self.factor

    def format(self, si_value: float) -> str:
        return format_fixed(self.to_display(si_value), self.precision)

    def round(self, display_value: float) -> float:
        return round_half_away(display_value, self.precision)


@dataclass(frozen=True, slots=True)
class DegreeUnit(LinearUnit):
    """Angle in degrees; the SI value is in radians."""

    symbol: str = DEGREE
    factor: float = math.pi / 180

    def format(self, si_value: float) -> str:
        return format_short(self.to_display(si_value))

    def round(self, display_value: float) -> float:
        return round_half_away(display_value, 0.1)


@dataclass(frozen=True, slots=True)
class TemperatureUnit(Unit):
    """Affine conversion: ``si = display * factor + offset`` (SI is kelvin)."""

    symbol: str
    factor: float
    offset: float

    def __post_init__(self) -> None:
        _check_symbol(self.symbol)
        _check_scale("factor", self.factor)
        if not isfinite(self.offset):
            raise InvalidArgumentError(f"offset must be finite, got {self.offset!r}")

    def to_display(self, si_value: float) -> float:
        return (si_value - self.offset) / self.factor

    def to_si(self, display_value: float) -> float:
        return display_value * self.factor + self.offset


@runtime_checkable
class CaliberReference(Protocol):
    """Anything that can report the reference body diameter in meters.

    ``reference_diameter`` may be a plain attribute, a property or a
    zero-argument method.
    """

    reference_diameter: Any


@dataclass(frozen=True, slots=True, eq=False, init=False)
class CaliberUnit(Unit):
    """Length expressed in multiples of a design's reference diameter.

    The diameter is read from the bound reference on every conversion, so the
    same unit follows edits made to the design. The reference is held weakly:
    the caller must keep the design alive for as long as the unit is used,
    otherwise conversions raise ``UnboundContextError``.

    A unit built with ``reference=None`` is the context-free placeholder kept
    in the canonical stability group: it converts everything to ``nan`` and
    formats as ``"N/A"``.
    """

    symbol: str
    _ref: Optional["weakref.ref[Any]"] = field(repr=False)

    def __init__(self, reference: Any = None) -> None:
        if reference is None:
            ref = None
        else:
            try:
                ref = weakref.ref(reference)
            except TypeError as e:
                raise InvalidArgumentError(
                    f"caliber reference must support weak references, got {type(reference).__name__}"
                ) from e
        object.__setattr__(self, "symbol", CALIBER_SYMBOL)
        object.__setattr__(self, "_ref", ref)

    @property
    def is_bound(self) -> bool:
        return self._ref is not None

    @property
    def reference(self) -> Any:
        """The bound reference, or ``None`` for the placeholder."""
        if self._ref is None:
            return None
        ref = self._ref()
        if ref is None:
            raise UnboundContextError("caliber reference no longer exists")
        return ref

    def caliber(self) -> float:
        """Current reference diameter in meters (``nan`` when unbound)."""
        ref = self.reference
        if ref is None:
            return math.nan

        diameter = getattr(ref, "reference_diameter", None)
        if callable(diameter):
            diameter = diameter()
        try:
            diameter = float(diameter)
        except (TypeError, ValueError):
            return DEFAULT_CALIBER
        if not isfinite(diameter) or diameter <= 0:
            return DEFAULT_CALIBER
        return diameter

    def to_display(self, si_value: float) -> float:
        return si_value / self.caliber()

    def to_si(self, display_value: float) -> float:
        return display_value * self.caliber()


@dataclass(frozen=True)
class Value:
    """An SI value paired with the unit it should be shown in."""

    si_value: float
    unit: Unit

    @property
    def display(self) -> float:
        return self.unit.to_display(self.si_value)

    def convert(self, unit: Unit) -> "Value":
        return Value(self.si_value, unit)

    def __str__(self) -> str:
        return self.unit.format_with_symbol(self.si_value)


__all__ = [
    "Unit",
    "LinearUnit",
    "FixedPrecisionUnit",
    "DegreeUnit",
    "TemperatureUnit",
    "CaliberUnit",
    "CaliberReference",
    "Value",
    "CALIBER_SYMBOL",
    "DEFAULT_CALIBER",
]
