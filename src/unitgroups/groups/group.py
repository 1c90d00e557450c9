"""
unitgroups.groups.group
=======================

Ordered collections of interchangeable units for one physical quantity.

``BaseQuantityGroup`` holds everything that can be expressed through a handful
of primitives (count, positional access, default index). ``QuantityGroup``
stores its own units; ``unitgroups.groups.stability.StabilityGroupView``
borrows the units of another group.
"""

from __future__ import annotations

import logging
import unicodedata
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from unitgroups.core.errors import InvalidArgumentError, UnitIndexError
from unitgroups.core.unit import Unit, Value
from unitgroups.groups.parser import parse_value

log = logging.getLogger(__name__)


def approximate_key(symbol: str) -> str:
    """Reduce a symbol to its letters and ASCII digits, lower-cased.

    Compatibility normalisation runs first so that ``"m/s²"`` and ``"m/s2"``
    both reduce to ``"ms2"``.
    """
    s = unicodedata.normalize("NFKC", symbol)
    return "".join(ch for ch in s if ch.isalpha() or ch in "0123456789").casefold()


class BaseQuantityGroup(ABC):
    """Operations shared by owned groups and read-only views."""

    name: Optional[str] = None

    # ------------------------- primitives ----------------------------------
    @abstractmethod
    def unit_count(self) -> int: ...

    @abstractmethod
    def unit_at(self, index: int) -> Unit: ...

    @abstractmethod
    def default_unit_index(self) -> int: ...

    @abstractmethod
    def _set_default_index(self, index: int) -> None: ...

    @abstractmethod
    def append(self, unit: Unit) -> None: ...

    @abstractmethod
    def insert(self, index: int, unit: Unit) -> None: ...

    @abstractmethod
    def remove_at(self, index: int) -> None: ...

    # ------------------------- derived API ---------------------------------
    def default_unit(self) -> Unit:
        return self.unit_at(self.default_unit_index())

    def units(self) -> Tuple[Unit, ...]:
        return tuple(self.unit_at(i) for i in range(self.unit_count()))

    def set_default(self, unit: Union[int, str]) -> None:
        """Select the default unit by index or by exact (case-sensitive) symbol."""
        if isinstance(unit, str):
            self._set_default_index(self.index_of_symbol(unit))
            return
        if isinstance(unit, bool) or not isinstance(unit, int):
            raise InvalidArgumentError(f"default unit must be an index or a symbol, got {unit!r}")
        if not 0 <= unit < self.unit_count():
            raise InvalidArgumentError(f"index out of range: {unit}")
        self._set_default_index(unit)

    def index_of_symbol(self, symbol: str) -> int:
        for i in range(self.unit_count()):
            if self.unit_at(i).symbol == symbol:
                return i
        raise InvalidArgumentError(f"unit not found: {symbol!r}")

    def index_of(self, unit: Unit) -> int:
        """Position of ``unit`` (identity first, then equality); ``-1`` if absent."""
        units = self.units()
        for i, u in enumerate(units):
            if u is unit:
                return i
        for i, u in enumerate(units):
            if u == unit:
                return i
        return -1

    def contains(self, unit: Unit) -> bool:
        return self.index_of(unit) >= 0

    def find_approximate(self, query: str) -> Optional[Unit]:
        """Tolerant lookup ignoring case, punctuation and superscripts.

        Meant for tests and scripts: ``find_approximate("m/s2")`` finds ``m/s²``.
        """
        key = approximate_key(query)
        for u in self.units():
            if approximate_key(u.symbol) == key:
                return u
        return None

    def to_display_string(self, si_value: float) -> str:
        return self.default_unit().format(si_value)

    def to_display_string_with_symbol(self, si_value: float) -> str:
        return self.default_unit().format_with_symbol(si_value)

    def to_value(self, si_value: float) -> Value:
        return self.default_unit().to_value(si_value)

    def parse(self, text: str) -> float:
        """Convert user text to an SI value.

        ``"5 mm"`` uses ``mm``; ``"5"`` uses the default unit. The suffix is
        matched case-insensitively against the stored symbols. Raises
        ``NotANumberError`` or ``UnknownUnitError`` (both ``UnitFormatError``).
        """
        return parse_value(text, self.units(), self.default_unit())

    # ------------------------- dunder sugar --------------------------------
    def __len__(self) -> int:
        return self.unit_count()

    def __iter__(self) -> Iterator[Unit]:
        return iter(self.units())

    def __getitem__(self, index: int) -> Unit:
        return self.unit_at(index)

    def __contains__(self, unit: object) -> bool:
        return isinstance(unit, Unit) and self.contains(unit)

    def __repr__(self) -> str:
        symbols = ", ".join(u.symbol for u in self.units())
        label = f"{self.name!r}, " if self.name else ""
        return f"{type(self).__name__}({label}[{symbols}], default={self.default_unit_index()})"


def _check_index(index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int):
        raise UnitIndexError(f"unit index must be an int, got {index!r}")


class QuantityGroup(BaseQuantityGroup):
    """A group that owns its units.

    Structural mutation is allowed but never leaves the group empty, with
    duplicate symbols, or with a default index out of range.
    """

    def __init__(self, units: Iterable[Unit], default: int = 0, *, name: Optional[str] = None) -> None:
        self.name = name
        self._units: List[Unit] = []
        self._default = 0
        for u in units:
            self.append(u)
        if not self._units:
            raise InvalidArgumentError("a quantity group needs at least one unit")
        self.set_default(default)

    # ------------------------- primitives ----------------------------------
    def unit_count(self) -> int:
        return len(self._units)

    def unit_at(self, index: int) -> Unit:
        _check_index(index)
        if not 0 <= index < len(self._units):
            raise UnitIndexError(f"index out of range: {index}")
        return self._units[index]

    def default_unit_index(self) -> int:
        return self._default

    def _set_default_index(self, index: int) -> None:
        self._default = index
        log.debug("default unit of %s set to %r", self.name or "group", self._units[index].symbol)

    # ------------------------- mutation ------------------------------------
    def _check_new(self, unit: Unit) -> None:
        if not isinstance(unit, Unit):
            raise InvalidArgumentError(f"not a unit: {unit!r}")
        if any(u.symbol == unit.symbol for u in self._units):
            raise InvalidArgumentError(f"duplicate unit symbol {unit.symbol!r}")

    def append(self, unit: Unit) -> None:
        self._check_new(unit)
        self._units.append(unit)

    def insert(self, index: int, unit: Unit) -> None:
        _check_index(index)
        if not 0 <= index <= len(self._units):
            raise UnitIndexError(f"insert position out of range: {index}")
        self._check_new(unit)
        self._units.insert(index, unit)
        if index <= self._default:
            self._default += 1

    def remove_at(self, index: int) -> None:
        _check_index(index)
        if not 0 <= index < len(self._units):
            raise UnitIndexError(f"index out of range: {index}")
        if len(self._units) == 1:
            raise InvalidArgumentError("cannot remove the last unit of a group")
        del self._units[index]
        if index < self._default:
            self._default -= 1
        elif index == self._default:
            self._default = 0


__all__ = ["BaseQuantityGroup", "QuantityGroup", "approximate_key"]
