import gc
import math
from dataclasses import FrozenInstanceError

import pytest

from unitgroups.core.chars import DEGREE
from unitgroups.core.errors import InvalidArgumentError, UnboundContextError
from unitgroups.core.unit import (
    DEFAULT_CALIBER,
    CaliberUnit,
    DegreeUnit,
    FixedPrecisionUnit,
    LinearUnit,
    TemperatureUnit,
    Unit,
    Value,
)


class Design:
    def __init__(self, reference_diameter):
        self.reference_diameter = reference_diameter


class MethodDesign:
    def __init__(self, d):
        self._d = d

    def reference_diameter(self):
        return self._d


# -------------------------------
# construction & validation
# -------------------------------

def test_linear_unit_valid():
    mm = LinearUnit("mm", 0.001)
    assert mm.symbol == "mm"
    assert mm.factor == 0.001
    assert isinstance(mm, Unit)


@pytest.mark.parametrize("factor", [0.0, float("inf"), float("nan")])
def test_linear_unit_invalid_factor(factor):
    with pytest.raises(InvalidArgumentError):
        LinearUnit("x", factor)


def test_empty_symbol_rejected():
    with pytest.raises(InvalidArgumentError):
        LinearUnit("", 1.0)
    with pytest.raises(ValueError):  # InvalidArgumentError is a ValueError
        FixedPrecisionUnit("", 0.01)


@pytest.mark.parametrize("precision", [0.0, -0.01, float("nan")])
def test_fixed_precision_invalid(precision):
    with pytest.raises(InvalidArgumentError):
        FixedPrecisionUnit("bar", precision, 1e5)


def test_temperature_offset_must_be_finite():
    with pytest.raises(InvalidArgumentError):
        TemperatureUnit("x", 1.0, float("nan"))


def test_units_are_frozen():
    m = LinearUnit("m", 1.0)
    with pytest.raises(FrozenInstanceError):
        m.symbol = "meter"
    with pytest.raises(FrozenInstanceError):
        CaliberUnit(None).symbol = "x"


def test_linear_units_compare_by_value():
    assert LinearUnit("cm", 0.01) == LinearUnit("cm", 0.01)
    assert LinearUnit("cm", 0.01) != LinearUnit("cm", 0.02)
    assert hash(LinearUnit("cm", 0.01)) == hash(LinearUnit("cm", 0.01))


# -------------------------------
# conversion laws
# -------------------------------

@pytest.mark.parametrize("x", [0.0, 1e-6, -3.2, 0.25, 42.0, 1.5e4, -7.7e7])
def test_linear_round_trip(x):
    inch = LinearUnit("in", 0.0254)
    assert inch.to_si(inch.to_display(x)) == pytest.approx(x, rel=1e-12, abs=1e-15)


def test_linear_conversion():
    inch = LinearUnit("in", 0.0254)
    assert inch.to_display(0.0254) == pytest.approx(1.0)
    assert inch.to_si(12) == pytest.approx(0.3048)


def test_fixed_precision_quantizes_display_only():
    bar = FixedPrecisionUnit("bar", 0.001, 1e5)
    assert bar.to_display(101325) == pytest.approx(1.013)
    assert bar.to_si(1.01325) == pytest.approx(101325)


@pytest.mark.parametrize("x", [0.0, 0.0123, -0.0456, 1.0, 12.3456, -99.995])
def test_fixed_precision_rounding_is_idempotent(x):
    ms = FixedPrecisionUnit("ms", 1, 0.001)
    s = FixedPrecisionUnit("s", 0.01)
    for unit in (ms, s):
        d = unit.to_display(x)
        assert unit.round(d) == d


def test_fixed_precision_rounds_half_away_from_zero():
    pct = FixedPrecisionUnit("%", 1, 0.01)
    assert pct.round(2.5) == 3.0
    assert pct.round(-2.5) == -3.0


def test_temperature_affine():
    celsius = TemperatureUnit(DEGREE + "C", 1, 273.15)
    fahrenheit = TemperatureUnit(DEGREE + "F", 5 / 9, 459.67 * 5 / 9)

    assert celsius.to_display(273.15) == pytest.approx(0.0, abs=1e-12)
    assert celsius.to_si(100) == pytest.approx(373.15)
    assert fahrenheit.to_display(273.15) == pytest.approx(32.0)
    assert fahrenheit.to_display(373.15) == pytest.approx(212.0)
    assert fahrenheit.to_si(fahrenheit.to_display(250.0)) == pytest.approx(250.0)


def test_degree_unit():
    deg = DegreeUnit()
    assert deg.symbol == DEGREE
    assert deg.to_display(math.pi) == pytest.approx(180.0)
    assert deg.format_with_symbol(math.pi / 4) == "45" + DEGREE
    assert deg.format(math.radians(12.34)) == "12.3"


# -------------------------------
# formatting
# -------------------------------

def test_format_uses_significant_digits():
    m = LinearUnit("m", 1.0)
    assert m.format(1.5) == "1.5"
    assert m.format(0.0123) == "0.012"
    assert m.format(123.6) == "124"
    assert m.format(0.004) == "0"
    assert m.format(1234567) == "1.23E6"


def test_format_with_symbol_separator():
    assert LinearUnit("m", 1.0).format_with_symbol(2.5) == "2.5 m"
    assert FixedPrecisionUnit("%", 1, 0.01).format_with_symbol(0.5) == "50%"
    assert FixedPrecisionUnit("bar", 0.001, 1e5).format_with_symbol(101325) == "1.013 bar"


def test_value_pairs_si_value_with_unit():
    cm = LinearUnit("cm", 0.01)
    v = cm.to_value(0.025)
    assert isinstance(v, Value)
    assert v.display == pytest.approx(2.5)
    assert str(v) == "2.5 cm"
    assert str(v.convert(LinearUnit("mm", 0.001))) == "25.0 mm"


def test_default_round_is_three_significant_digits():
    assert LinearUnit("m", 1.0).round(1.23456) == pytest.approx(1.23)
    assert DegreeUnit().round(12.34) == pytest.approx(12.3)


# -------------------------------
# caliber
# -------------------------------

def test_caliber_unbound_is_nan_and_not_available():
    cal = CaliberUnit(None)
    assert cal.symbol == "cal"
    assert not cal.is_bound
    assert math.isnan(cal.to_display(0.1))
    assert math.isnan(cal.to_si(2.0))
    assert cal.format(0.1) == "N/A"
    assert cal.format_with_symbol(0.1) == "N/A cal"


def test_caliber_reads_diameter_at_conversion_time():
    design = Design(0.1)
    cal = CaliberUnit(design)
    assert cal.to_display(0.2) == pytest.approx(2.0)

    design.reference_diameter = 0.05
    assert cal.to_display(0.2) == pytest.approx(4.0)
    assert cal.to_si(3.0) == pytest.approx(0.15)


def test_caliber_accepts_method_style_reference():
    design = MethodDesign(0.04)
    cal = CaliberUnit(design)
    assert cal.to_display(0.1) == pytest.approx(2.5)


@pytest.mark.parametrize("diameter", [0.0, -1.0, float("nan"), None, "wide"])
def test_caliber_degenerate_diameter_uses_default(diameter):
    design = Design(diameter)
    cal = CaliberUnit(design)
    assert cal.to_display(DEFAULT_CALIBER * 3) == pytest.approx(3.0)


def test_caliber_units_compare_by_identity():
    design = Design(0.1)
    assert CaliberUnit(design) != CaliberUnit(design)
    cal = CaliberUnit(design)
    assert cal == cal


def test_caliber_does_not_keep_reference_alive():
    design = Design(0.1)
    cal = CaliberUnit(design)
    assert cal.is_bound

    del design
    gc.collect()
    with pytest.raises(UnboundContextError):
        cal.to_display(0.1)
    with pytest.raises(ReferenceError):
        _ = cal.reference


def test_caliber_rejects_reference_without_weakref_support():
    with pytest.raises(InvalidArgumentError):
        CaliberUnit({"reference_diameter": 0.1})


@pytest.mark.regression
def test_caliber_converts_while_caller_holds_reference():
    design = MethodDesign(0.02)
    cal = CaliberUnit(design)
    gc.collect()
    assert cal.reference is design
    assert cal.to_si(5.0) == pytest.approx(0.1)
