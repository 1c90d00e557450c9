"""
Scanner for ``"<number> [unit]"`` input such as ``"5 mm"``, ``"-2.5"`` or ``"12in"``.

Grammar::

    text   := ws* number rest
    number := [0-9.,-]+          (greedy; must then pass float(), so any comma fails)
    rest   := any text, stripped; empty means "use the default unit"

The scanner never looks at the group's symbols while reading the number, so
a unit symbol that starts with a digit, ``.``, ``,`` or ``-`` cannot be read
back reliably: the number token swallows its leading characters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Tuple

from unitgroups.core.errors import NotANumberError, UnknownUnitError

if TYPE_CHECKING:
    from unitgroups.core.unit import Unit

NUMBER_CHARS = frozenset("0123456789.,-")


def split_number(text: str) -> Tuple[str, str]:
    """Split ``text`` into its numeric token and the stripped remainder."""
    n = len(text)
    i = 0
    while i < n and text[i].isspace():
        i += 1
    start = i
    while i < n and text[i] in NUMBER_CHARS:
        i += 1
    if i == start:
        raise NotANumberError(f"no number found in {text!r}")
    return text[start:i], text[i:].strip()


def to_float(token: str) -> float:
    """Convert a numeric token with ``float()``.

    Commas are scanned as part of the token but never accepted, so ``"1,000"``
    and ``"1,5"`` are both rejected instead of being guessed at.
    """
    try:
        return float(token)
    except ValueError:
        raise NotANumberError(f"not a number: {token!r}") from None


def match_symbol(suffix: str, units: Iterable["Unit"]) -> Optional["Unit"]:
    """First unit whose symbol equals ``suffix`` ignoring case."""
    folded = suffix.casefold()
    for u in units:
        if u.symbol.casefold() == folded:
            return u
    return None


def parse_value(text: str, units: "Tuple[Unit, ...]", default: "Unit") -> float:
    """Parse ``text`` into an SI value using ``units`` for an explicit suffix."""
    token, suffix = split_number(text)
    value = to_float(token)
    if not suffix:
        return default.to_si(value)

    unit = match_symbol(suffix, units)
    if unit is None:
        raise UnknownUnitError(suffix, tuple(u.symbol for u in units))
    return unit.to_si(value)


__all__ = ["NUMBER_CHARS", "split_number", "to_float", "match_symbol", "parse_value"]
