"""
unitgroups: display units for engineering quantities.

A quantity group (length, mass, pressure, ...) is an ordered list of
interchangeable units with one default. Values are kept in SI internally and
converted, formatted and parsed through the group's units. A registry built
by ``init_registry()`` holds every group and can switch all defaults between
metric and imperial conventions at once.

Public names are imported lazily to keep ``import unitgroups`` cheap.
"""

from importlib import metadata as _metadata
from pathlib import Path as _Path
from typing import Any


__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("unitgroups")
except _metadata.PackageNotFoundError:
    import tomllib
    with open(_Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# public name -> defining module
_LAZY = {
    "init_registry": "unitgroups.groups.registry",
    "QuantityRegistry": "unitgroups.groups.registry",
    "PresetReport": "unitgroups.groups.registry",
    "QuantityGroup": "unitgroups.groups.group",
    "BaseQuantityGroup": "unitgroups.groups.group",
    "StabilityGroupView": "unitgroups.groups.stability",
    "Unit": "unitgroups.core.unit",
    "LinearUnit": "unitgroups.core.unit",
    "FixedPrecisionUnit": "unitgroups.core.unit",
    "DegreeUnit": "unitgroups.core.unit",
    "TemperatureUnit": "unitgroups.core.unit",
    "CaliberUnit": "unitgroups.core.unit",
    "Value": "unitgroups.core.unit",
    "UnitGroupError": "unitgroups.core.errors",
    "InvalidArgumentError": "unitgroups.core.errors",
    "UnitIndexError": "unitgroups.core.errors",
    "UnitFormatError": "unitgroups.core.errors",
    "NotANumberError": "unitgroups.core.errors",
    "UnknownUnitError": "unitgroups.core.errors",
    "UnsupportedOperationError": "unitgroups.core.errors",
    "UnboundContextError": "unitgroups.core.errors",
}

__all__ = ["__version__", "__author__", "__license__", *_LAZY]


def __getattr__(name: str) -> Any:
    """Resolve public names from their defining module on first access."""
    module = _LAZY.get(name)
    if module is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    import importlib
    value = getattr(importlib.import_module(module), name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + list(_LAZY))
