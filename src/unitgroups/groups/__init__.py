from unitgroups.groups.group import BaseQuantityGroup, QuantityGroup
from unitgroups.groups.registry import (
    IDENTIFIERS,
    IMPERIAL_PRESET,
    METRIC_PRESET,
    PresetReport,
    QuantityRegistry,
    init_registry,
)
from unitgroups.groups.stability import StabilityGroupView

__all__ = [
    "BaseQuantityGroup",
    "QuantityGroup",
    "StabilityGroupView",
    "QuantityRegistry",
    "PresetReport",
    "init_registry",
    "IDENTIFIERS",
    "METRIC_PRESET",
    "IMPERIAL_PRESET",
]
