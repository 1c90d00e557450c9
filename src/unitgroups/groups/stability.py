"""
unitgroups.groups.stability
===========================

Stability margin in calibers depends on the design being looked at: one
caliber is that design's reference diameter. The canonical STABILITY group
keeps an unbound ``CaliberUnit`` placeholder; ``StabilityGroupView`` shows the
same list with the placeholder replaced by a unit bound to one design.
"""

from __future__ import annotations

from typing import Any

from unitgroups.core.errors import UnsupportedOperationError
from unitgroups.core.unit import CaliberUnit, Unit
from unitgroups.groups.group import BaseQuantityGroup, QuantityGroup


class StabilityGroupView(BaseQuantityGroup):
    """Read-only view of a stability group bound to one design.

    Count, default index and default switching go straight to ``delegate``,
    so every view shares the canonical default. The view cannot be modified
    structurally.
    """

    def __init__(self, delegate: QuantityGroup, context: Any) -> None:
        self._delegate = delegate
        self._caliber = CaliberUnit(context)
        self.name = delegate.name

    @property
    def delegate(self) -> QuantityGroup:
        return self._delegate

    @property
    def caliber_unit(self) -> CaliberUnit:
        return self._caliber

    # ------------------------- delegation ----------------------------------
    def unit_count(self) -> int:
        return self._delegate.unit_count()

    def default_unit_index(self) -> int:
        return self._delegate.default_unit_index()

    def _set_default_index(self, index: int) -> None:
        self._delegate.set_default(index)

    def unit_at(self, index: int) -> Unit:
        u = self._delegate.unit_at(index)
        if isinstance(u, CaliberUnit):
            return self._caliber
        return u

    def index_of(self, unit: Unit) -> int:
        if isinstance(unit, CaliberUnit):
            for i in range(self._delegate.unit_count()):
                if isinstance(self._delegate.unit_at(i), CaliberUnit):
                    return i
        return self._delegate.index_of(unit)

    # ------------------------- read-only -----------------------------------
    def append(self, unit: Unit) -> None:
        raise UnsupportedOperationError("stability group view must not be modified")

    def insert(self, index: int, unit: Unit) -> None:
        raise UnsupportedOperationError("stability group view must not be modified")

    def remove_at(self, index: int) -> None:
        raise UnsupportedOperationError("stability group view must not be modified")


__all__ = ["StabilityGroupView"]
