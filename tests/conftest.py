# tests/conftest.py
import pytest

from unitgroups.groups.registry import init_registry


class Design:
    """Stand-in for a design object exposing a reference diameter (m)."""

    def __init__(self, reference_diameter):
        self.reference_diameter = reference_diameter


@pytest.fixture()
def registry():
    """Fresh registry per test so default switches never leak."""
    return init_registry()


@pytest.fixture()
def make_design():
    return Design
