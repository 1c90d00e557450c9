"""
unitgroups.core.errors
======================

Exception taxonomy shared by units, groups and the registry.

Every exception also derives from the closest built-in so callers that only
know about ``ValueError`` / ``IndexError`` / ``TypeError`` keep working.
"""

from __future__ import annotations


class UnitGroupError(Exception):
    """Base class for all errors raised by unitgroups."""


class InvalidArgumentError(UnitGroupError, ValueError):
    """Out-of-range default index, unknown symbol or identifier, bad unit data."""


class UnitIndexError(InvalidArgumentError, IndexError):
    """A unit position outside ``0 <= i < unit_count()``."""


class UnitFormatError(UnitGroupError, ValueError):
    """Text that cannot be turned into an SI value."""


class NotANumberError(UnitFormatError):
    """The numeric part of the input is missing or malformed."""


class UnknownUnitError(UnitFormatError):
    """The unit suffix does not name any unit of the group."""

    def __init__(self, symbol: str, known: "tuple[str, ...]" = ()) -> None:
        self.symbol = symbol
        self.known = known
        msg = f"unknown unit {symbol!r}"
        if known:
            msg += f" (expected one of: {', '.join(known)})"
        super().__init__(msg)


class UnsupportedOperationError(UnitGroupError, TypeError):
    """Structural mutation attempted on a read-only group view."""


class UnboundContextError(UnitGroupError, ReferenceError):
    """A context-bound unit was used after its reference was collected."""


__all__ = [
    "UnitGroupError",
    "InvalidArgumentError",
    "UnitIndexError",
    "UnitFormatError",
    "NotANumberError",
    "UnknownUnitError",
    "UnsupportedOperationError",
    "UnboundContextError",
]
