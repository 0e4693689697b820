"""Shared fixtures: a small material set spanning metals and polymers."""
import pytest

from mechhelper.core.units import UnitConversionRegistry, get_default_registry
from mechhelper.models.material import Material


@pytest.fixture(scope="session")
def registry() -> UnitConversionRegistry:
    return get_default_registry()


@pytest.fixture
def steel() -> Material:
    return Material(
        name="AISI 1020 Steel",
        category="Carbon Steel",
        density=7870,
        youngs_modulus=200e9,
        yield_strength=350e6,
        ultimate_tensile_strength=420e6,
        poissons_ratio=0.29,
        thermal_expansion_coefficient=11.7e-6,
    )


@pytest.fixture
def aluminium() -> Material:
    return Material(
        name="Aluminum 6061-T6",
        category="Aluminum Alloy",
        density=2700,
        youngs_modulus=68.9e9,
        yield_strength=276e6,
        ultimate_tensile_strength=310e6,
        poissons_ratio=0.33,
        shear_modulus=26e9,
        thermal_expansion_coefficient=23.6e-6,
    )


@pytest.fixture
def abs_polymer() -> Material:
    """Polymer without a yield strength on record."""
    return Material(
        name="ABS",
        category="Polymer",
        density=1040,
        youngs_modulus=2.3e9,
        ultimate_tensile_strength=40e6,
        poissons_ratio=0.35,
        thermal_expansion_coefficient=90e-6,
    )


@pytest.fixture
def materials(steel, aluminium, abs_polymer) -> list:
    return [steel, aluminium, abs_polymer]
