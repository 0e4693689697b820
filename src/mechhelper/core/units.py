"""Unit conversion between canonical SI values and display units.

Material properties are stored once in canonical SI (kg/m³ for density,
Pa for moduli and strengths).  Every display conversion goes through one
registry built from ``config/unit_tables.yaml`` and uses one direction:

    display = si / factor
    si      = display * factor

``precision`` is the maximum number of decimals shown; trailing zeros are
trimmed, so ``200e9 Pa`` in GPa renders as ``"200"``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..exceptions import ConfigurationError, InvalidInputError
from ..utils import load_unit_tables, read_unit_tables

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


class QuantityClass(str, Enum):
    """Quantity classes that have registered display units."""
    DENSITY = "density"
    MODULUS = "modulus"
    STRENGTH = "strength"
    THERMAL_EXPANSION = "thermal_expansion"
    SPECIFIC_STRENGTH = "specific_strength"
    SPECIFIC_MODULUS = "specific_modulus"
    RATIO = "ratio"


QuantityLike = Union[QuantityClass, str]


@dataclass(frozen=True)
class UnitSpec:
    """One display unit of a quantity class."""
    unit: str         # label shown to the user
    factor: float     # SI units per 1 display unit
    precision: int    # max decimals shown

    def to_display(self, si_value: float) -> float:
        return si_value / self.factor

    def to_si(self, display_value: float) -> float:
        return display_value * self.factor


class UnitSelection(BaseModel):
    """Display units chosen by the user for the selectable quantity classes.

    Passed explicitly into every conversion; there is no ambient "current
    unit".  Classes not listed here use the registry default.
    """
    model_config = ConfigDict(frozen=True)

    density: str = "kg/m³"
    modulus: str = "GPa"
    strength: str = "MPa"

    def unit_for(self, quantity: QuantityClass) -> Optional[str]:
        """Return the selected unit for ``quantity``, or None if not selectable."""
        if quantity == QuantityClass.DENSITY:
            return self.density
        if quantity == QuantityClass.MODULUS:
            return self.modulus
        if quantity == QuantityClass.STRENGTH:
            return self.strength
        return None


def format_display(value: float, precision: int) -> str:
    """Format ``value`` with thousands separators and at most ``precision``
    decimals, trimming trailing zeros down to zero decimals."""
    text = f"{value:,.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _coerce_quantity(quantity: QuantityLike) -> QuantityClass:
    if isinstance(quantity, QuantityClass):
        return quantity
    try:
        return QuantityClass(quantity)
    except ValueError:
        raise ConfigurationError(f"Unknown quantity class: {quantity!r}") from None


def _build_unit_specs(tables: Mapping[str, Any]) -> dict[QuantityClass, dict[str, UnitSpec]]:
    """Validate a raw unit table mapping and turn it into UnitSpec lookups."""
    units: dict[QuantityClass, dict[str, UnitSpec]] = {}

    for key, entries in tables.items():
        try:
            quantity = QuantityClass(key)
        except ValueError:
            raise ConfigurationError(
                f"Unknown quantity class '{key}' in unit table.  "
                f"Known classes: {[q.value for q in QuantityClass]}"
            ) from None

        if not isinstance(entries, list) or not entries:
            raise ConfigurationError(f"Quantity class '{key}' must list at least one unit")

        specs: dict[str, UnitSpec] = {}
        for entry in entries:
            if not isinstance(entry, Mapping) or not {"unit", "factor", "precision"} <= entry.keys():
                raise ConfigurationError(
                    f"Unit entry {entry!r} in '{key}' needs 'unit', 'factor' and 'precision'"
                )
            name = str(entry["unit"])
            try:
                factor = float(entry["factor"])
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"Factor for {key}/{name} is not a number: {entry['factor']!r}"
                ) from None
            precision = entry["precision"]

            if not math.isfinite(factor) or factor <= 0:
                raise ConfigurationError(f"Factor for {key}/{name} must be positive, got {factor}")
            if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
                raise ConfigurationError(
                    f"Precision for {key}/{name} must be a non-negative integer, got {precision!r}"
                )
            if name in specs:
                raise ConfigurationError(f"Duplicate unit '{name}' in quantity class '{key}'")

            specs[name] = UnitSpec(unit=name, factor=factor, precision=precision)

        units[quantity] = specs

    return units


class UnitConversionRegistry:
    """
    Single source of truth for SI <-> display unit conversion.

    The registry is read-only after construction and safe to share between
    concurrent callers.
    """

    def __init__(self, tables: Optional[Mapping[str, Any]] = None):
        if tables is None:
            tables = load_unit_tables()
        self._units = _build_unit_specs(tables)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "UnitConversionRegistry":
        """Build a registry from an alternative unit table file."""
        return cls(read_unit_tables(path))

    # --- Lookup ---

    def _resolve(self, quantity: QuantityLike) -> dict[str, UnitSpec]:
        quantity = _coerce_quantity(quantity)
        if quantity not in self._units:
            raise ConfigurationError(f"No units registered for quantity class '{quantity.value}'")
        return self._units[quantity]

    def quantities(self) -> tuple[QuantityClass, ...]:
        return tuple(self._units)

    def list_units(self, quantity: QuantityLike) -> tuple[str, ...]:
        """Unit names for ``quantity`` in table order (for unit selectors)."""
        return tuple(self._resolve(quantity))

    def default_unit(self, quantity: QuantityLike) -> str:
        return next(iter(self._resolve(quantity)))

    def unit_spec(self, quantity: QuantityLike, unit: str) -> UnitSpec:
        """
        Look up the UnitSpec for ``unit`` within ``quantity``.

        Raises:
            ConfigurationError: if the unit is not registered for the class.
        """
        specs = self._resolve(quantity)
        try:
            return specs[unit]
        except KeyError:
            raise ConfigurationError(
                f"Unit '{unit}' is not registered for quantity class "
                f"'{_coerce_quantity(quantity).value}'.  Available: {list(specs)}"
            ) from None

    # --- Conversion ---

    def to_display(self, si_value: Optional[float], quantity: QuantityLike, unit: str) -> Optional[float]:
        """Numeric display value (``si / factor``); None stays None."""
        spec = self.unit_spec(quantity, unit)
        if si_value is None or not math.isfinite(si_value):
            return None
        return spec.to_display(si_value)

    def convert(self, si_value: Optional[float], quantity: QuantityLike, unit: str) -> str:
        """
        Format an SI value in the requested display unit.

        Missing (None) or non-finite values render as ``"N/A"``.
        """
        spec = self.unit_spec(quantity, unit)
        if si_value is None or not math.isfinite(si_value):
            return NOT_AVAILABLE
        return format_display(spec.to_display(si_value), spec.precision)

    def parse(self, display_value: Union[float, str], quantity: QuantityLike, unit: str) -> float:
        """
        Convert a user-entered display value back to SI (``display * factor``).

        Strings may contain thousands separators.

        Raises:
            InvalidInputError: if the value is not a finite number.
            ConfigurationError: if the unit is not registered.
        """
        spec = self.unit_spec(quantity, unit)

        raw = display_value.strip().replace(",", "") if isinstance(display_value, str) else display_value
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise InvalidInputError(
                f"{display_value!r} is not a number",
                parameter="display_value",
                value=display_value,
            ) from None

        if not math.isfinite(value):
            raise InvalidInputError(
                f"Display value must be finite, got {display_value!r}",
                parameter="display_value",
                value=display_value,
            )
        return spec.to_si(value)

    # --- Selection-aware helpers ---

    def selected_unit(self, quantity: QuantityLike, selection: Optional[UnitSelection]) -> str:
        """Resolve the display unit for ``quantity`` through ``selection``."""
        quantity = _coerce_quantity(quantity)
        unit = selection.unit_for(quantity) if selection is not None else None
        return unit if unit is not None else self.default_unit(quantity)

    def convert_for(
        self,
        si_value: Optional[float],
        quantity: QuantityLike,
        selection: Optional[UnitSelection],
    ) -> str:
        return self.convert(si_value, quantity, self.selected_unit(quantity, selection))

    def to_display_for(
        self,
        si_value: Optional[float],
        quantity: QuantityLike,
        selection: Optional[UnitSelection],
    ) -> Optional[float]:
        return self.to_display(si_value, quantity, self.selected_unit(quantity, selection))


@lru_cache(maxsize=1)
def get_default_registry() -> UnitConversionRegistry:
    """Process-wide registry built from the packaged unit table."""
    registry = UnitConversionRegistry()
    logger.debug("Default unit registry ready: %s", [q.value for q in registry.quantities()])
    return registry
