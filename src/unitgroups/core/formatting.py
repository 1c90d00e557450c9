"""
unitgroups.core.formatting
==========================

Number rendering helpers behind ``Unit.format``.

Three styles are used by the shipped units:

- ``format_significant``: about three significant digits, integers from 100
  upwards and exponent notation above one million. This is the default style.
- ``format_fixed``: a fixed number of decimals derived from a precision step
  (``0.001`` -> three decimals), used by quantized units such as ``bar``.
- ``format_short``: at most one decimal, used for angles in degrees.
"""

from __future__ import annotations

import math

NOT_AVAILABLE = "N/A"

_EXP_THRESHOLD = 1e6
_INT_THRESHOLD = 100.0
_ZERO_THRESHOLD = 0.005


def round_half_away(x: float, step: float = 1.0) -> float:
    """Round ``x`` to a multiple of ``step``; ties go away from zero."""
    if not math.isfinite(x):
        return x
    q = math.floor(abs(x) / step + 0.5)
    value = math.copysign(q * step, x) if q else 0.0
    # trim binary noise so rounding the result again is a fixed point
    return round(value, decimals_for(step))


def round_significant(x: float, digits: int = 3) -> float:
    """Round ``x`` to ``digits`` significant digits (half away from zero)."""
    if x == 0 or not math.isfinite(x):
        return x
    exponent = math.floor(math.log10(abs(x))) - digits + 1
    step = 10.0 ** exponent
    q = math.floor(abs(x) / step + 0.5)
    value = math.copysign(q * step, x)
    return round(value, max(0, -exponent))


def decimals_for(step: float) -> int:
    """Number of decimals needed to show multiples of ``step``."""
    if step >= 1:
        return 0
    return max(0, math.ceil(-math.log10(step) - 1e-9))


def _format_exp(val: float) -> str:
    mantissa, exp = f"{val:.2E}".split("E")
    return f"{mantissa}E{int(exp)}"


def _trim(text: str, keep_one: bool) -> str:
    if "." not in text:
        return text
    text = text.rstrip("0")
    if text.endswith("."):
        text = text + "0" if keep_one else text[:-1]
    return text


def format_significant(val: float) -> str:
    if math.isnan(val):
        return NOT_AVAILABLE
    if math.isinf(val):
        return "-Inf" if val < 0 else "Inf"
    if abs(val) > _EXP_THRESHOLD:
        return _format_exp(val)
    if abs(val) >= _INT_THRESHOLD:
        return str(int(round_half_away(val)))
    if abs(val) <= _ZERO_THRESHOLD:
        return "0"

    sign = math.copysign(1.0, val)
    val = abs(val)
    mul = 1.0
    while val < _INT_THRESHOLD:
        mul *= 10
        val *= 10
    val = sign * round_half_away(val) / mul
    return _trim(f"{val:.3f}", keep_one=True)


def format_fixed(val: float, precision: float) -> str:
    if math.isnan(val):
        return NOT_AVAILABLE
    if math.isinf(val):
        return "-Inf" if val < 0 else "Inf"
    if abs(val) > _EXP_THRESHOLD:
        return _format_exp(val)
    val = round_half_away(val, precision)
    if val == 0:
        val = 0.0  # no "-0.00"
    return f"{val:.{decimals_for(precision)}f}"


def format_short(val: float) -> str:
    if math.isnan(val):
        return NOT_AVAILABLE
    val = round_half_away(val, 0.1)
    if val == 0:
        val = 0.0
    return _trim(f"{val:.1f}", keep_one=False)


__all__ = [
    "NOT_AVAILABLE",
    "round_half_away",
    "round_significant",
    "decimals_for",
    "format_significant",
    "format_fixed",
    "format_short",
]
