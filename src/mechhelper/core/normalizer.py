"""
Min-max normalization of material properties for comparison charts.

Turns a partially populated set of materials into 0-100 scores per property
axis, respecting each axis's better direction.  Three passes:

1. Extraction: one value per material and axis (derived axes need both
   inputs and a non-zero density).
2. Extrema: min and max of the defined values over the *whole* set.
3. Scoring: ``t = (v - min) / (max - min) * 100``, inverted to ``100 - t``
   for lower-is-better axes.

Ties (``max == min``) score 100 on higher-is-better axes and 0 otherwise.
Materials without a value on an axis score the neutral 50.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..exceptions import ConfigurationError
from ..models.material import Material
from .units import QuantityClass, UnitConversionRegistry, UnitSelection, get_default_registry

logger = logging.getLogger(__name__)

FULL_SCORE = 100.0
NEUTRAL_SCORE = 50.0


class PropertyAxis(str, Enum):
    """Comparable material quantities; values are the store's property keys."""
    YOUNGS_MODULUS = "youngsModulus"
    ULTIMATE_TENSILE_STRENGTH = "ultimateTensileStrength"
    YIELD_STRENGTH = "yieldStrength"
    DENSITY = "density"
    SPECIFIC_MODULUS = "specificModulus"
    SPECIFIC_STRENGTH = "specificStrength"
    THERMAL_EXPANSION = "thermalExpansionCoefficient"
    SHEAR_MODULUS = "shearModulus"
    POISSONS_RATIO = "poissonsRatio"


@dataclass(frozen=True)
class AxisSpec:
    """How one axis is extracted, labelled, scored and displayed."""
    axis: PropertyAxis
    label: str                 # short radar label
    title: str                 # chart title
    higher_is_better: bool
    quantity: QuantityClass    # display unit class
    extractor: Callable[[Material], Optional[float]] = field(compare=False)

    @property
    def key(self) -> str:
        return self.axis.value


AXIS_SPECS: Dict[PropertyAxis, AxisSpec] = {
    PropertyAxis.YOUNGS_MODULUS: AxisSpec(
        PropertyAxis.YOUNGS_MODULUS, "E Modulus", "Young's Modulus",
        True, QuantityClass.MODULUS, lambda m: m.youngs_modulus,
    ),
    PropertyAxis.ULTIMATE_TENSILE_STRENGTH: AxisSpec(
        PropertyAxis.ULTIMATE_TENSILE_STRENGTH, "UTS", "Ultimate Tensile Strength",
        True, QuantityClass.STRENGTH, lambda m: m.ultimate_tensile_strength,
    ),
    PropertyAxis.YIELD_STRENGTH: AxisSpec(
        PropertyAxis.YIELD_STRENGTH, "Yield Str.", "Yield Strength",
        True, QuantityClass.STRENGTH, lambda m: m.yield_strength,
    ),
    PropertyAxis.DENSITY: AxisSpec(
        PropertyAxis.DENSITY, "Density", "Density",
        False, QuantityClass.DENSITY, lambda m: m.density,
    ),
    PropertyAxis.SPECIFIC_MODULUS: AxisSpec(
        PropertyAxis.SPECIFIC_MODULUS, "Specific Mod.", "Specific Modulus (E/Density)",
        True, QuantityClass.SPECIFIC_MODULUS, lambda m: m.specific_modulus,
    ),
    PropertyAxis.SPECIFIC_STRENGTH: AxisSpec(
        PropertyAxis.SPECIFIC_STRENGTH, "Specific Str.", "Specific Strength (Yield/Density)",
        True, QuantityClass.SPECIFIC_STRENGTH, lambda m: m.specific_strength,
    ),
    PropertyAxis.THERMAL_EXPANSION: AxisSpec(
        PropertyAxis.THERMAL_EXPANSION, "Therm. Exp.", "Thermal Expansion Coefficient",
        False, QuantityClass.THERMAL_EXPANSION, lambda m: m.thermal_expansion_coefficient,
    ),
    PropertyAxis.SHEAR_MODULUS: AxisSpec(
        PropertyAxis.SHEAR_MODULUS, "Shear Mod.", "Shear Modulus",
        True, QuantityClass.MODULUS, lambda m: m.effective_shear_modulus,
    ),
    PropertyAxis.POISSONS_RATIO: AxisSpec(
        PropertyAxis.POISSONS_RATIO, "Poisson", "Poisson's Ratio",
        True, QuantityClass.RATIO, lambda m: m.poissons_ratio,
    ),
}

_missing_axes = set(PropertyAxis) - set(AXIS_SPECS)
if _missing_axes:
    raise ConfigurationError(f"No AxisSpec for: {sorted(a.value for a in _missing_axes)}")

DEFAULT_RADAR_AXES: Tuple[PropertyAxis, ...] = (
    PropertyAxis.YOUNGS_MODULUS,
    PropertyAxis.ULTIMATE_TENSILE_STRENGTH,
    PropertyAxis.YIELD_STRENGTH,
    PropertyAxis.DENSITY,
    PropertyAxis.SPECIFIC_MODULUS,
    PropertyAxis.SPECIFIC_STRENGTH,
    PropertyAxis.THERMAL_EXPANSION,
)

AxisLike = Union[PropertyAxis, AxisSpec, str]


def resolve_axis(axis: AxisLike) -> AxisSpec:
    """AxisSpec for an axis member, its key string, or a custom AxisSpec."""
    if isinstance(axis, AxisSpec):
        return axis
    try:
        return AXIS_SPECS[PropertyAxis(axis)]
    except ValueError:
        raise ConfigurationError(
            f"Unknown property axis {axis!r}.  Known axes: {[a.value for a in PropertyAxis]}"
        ) from None


def format_property_name(axis: AxisLike) -> str:
    """Human-readable chart title for an axis."""
    return resolve_axis(axis).title


@dataclass(frozen=True)
class NormalizationResult:
    """Scores and display values keyed by ``(material_name, axis_key)``."""
    axes: Tuple[AxisSpec, ...]
    material_names: Tuple[str, ...]
    scores: Dict[Tuple[str, str], float]
    raw_values: Dict[Tuple[str, str], Optional[float]]       # SI
    display_values: Dict[Tuple[str, str], Optional[float]]   # selected unit
    display_text: Dict[Tuple[str, str], str]
    units: Dict[str, str]                                     # axis key -> unit label
    extrema: Dict[str, Optional[Tuple[float, float]]]         # axis key -> (min, max), SI

    def score(self, material_name: str, axis: AxisLike) -> float:
        return self.scores[(material_name, resolve_axis(axis).key)]

    def materials_with_data(self, axis: AxisLike) -> Tuple[str, ...]:
        """Materials that have a value on ``axis`` (bar charts skip the rest)."""
        key = resolve_axis(axis).key
        return tuple(
            name for name in self.material_names
            if self.raw_values[(name, key)] is not None
        )

    def radar_series(self) -> List[Dict[str, Union[str, float]]]:
        """One row per axis: ``subject`` label, ``fullMark`` and a score per material."""
        rows = []
        for spec in self.axes:
            row: Dict[str, Union[str, float]] = {"subject": spec.label, "fullMark": FULL_SCORE}
            for name in self.material_names:
                row[name] = self.scores[(name, spec.key)]
            rows.append(row)
        return rows


class PropertyNormalizer:
    """
    Two-pass min-max scorer for comparison views.

    Never raises for data problems: missing values, zero densities and
    single-material sets all produce defined scores.
    """

    def __init__(self, registry: Optional[UnitConversionRegistry] = None):
        self.registry = registry or get_default_registry()

    def normalize(
        self,
        materials: Iterable[Material],
        axes: Sequence[AxisLike] = DEFAULT_RADAR_AXES,
        selection: Optional[UnitSelection] = None,
    ) -> NormalizationResult:
        """
        Score every material on every axis.

        Args:
            materials: Materials to compare, keyed by their unique name
            axes: Axes to score, in display order
            selection: Display units for the raw tooltip values

        Returns:
            NormalizationResult with scores in [0, 100]
        """
        specs = self._unique_axes(axes)
        unique = self._unique_materials(materials)
        names = tuple(m.name for m in unique)

        # Pass 1: extraction (NaN marks "no value")
        values = np.full((len(unique), len(specs)), np.nan)
        for i, material in enumerate(unique):
            for j, spec in enumerate(specs):
                value = spec.extractor(material)
                if value is not None:
                    values[i, j] = value

        # Pass 2: extrema over the full set
        extrema: Dict[str, Optional[Tuple[float, float]]] = {}
        for j, spec in enumerate(specs):
            column = values[:, j]
            defined = column[~np.isnan(column)]
            extrema[spec.key] = (float(defined.min()), float(defined.max())) if defined.size else None

        # Pass 3: scoring
        scores = np.full(values.shape, NEUTRAL_SCORE)
        for j, spec in enumerate(specs):
            bounds = extrema[spec.key]
            if bounds is None:
                continue
            low, high = bounds
            column = values[:, j]
            defined = ~np.isnan(column)
            if high > low:
                t = (column[defined] - low) / (high - low) * FULL_SCORE
                scores[defined, j] = t if spec.higher_is_better else FULL_SCORE - t
            else:
                scores[defined, j] = FULL_SCORE if spec.higher_is_better else 0.0

        result_scores: Dict[Tuple[str, str], float] = {}
        raw_values: Dict[Tuple[str, str], Optional[float]] = {}
        display_values: Dict[Tuple[str, str], Optional[float]] = {}
        display_text: Dict[Tuple[str, str], str] = {}
        units = {
            spec.key: self.registry.selected_unit(spec.quantity, selection)
            for spec in specs
        }

        for i, name in enumerate(names):
            for j, spec in enumerate(specs):
                cell = (name, spec.key)
                raw = None if np.isnan(values[i, j]) else float(values[i, j])
                result_scores[cell] = float(scores[i, j])
                raw_values[cell] = raw
                display_values[cell] = self.registry.to_display(raw, spec.quantity, units[spec.key])
                display_text[cell] = self.registry.convert(raw, spec.quantity, units[spec.key])

        logger.debug("Normalized %d materials on %d axes", len(names), len(specs))

        return NormalizationResult(
            axes=specs,
            material_names=names,
            scores=result_scores,
            raw_values=raw_values,
            display_values=display_values,
            display_text=display_text,
            units=units,
            extrema=extrema,
        )

    @staticmethod
    def _unique_axes(axes: Sequence[AxisLike]) -> Tuple[AxisSpec, ...]:
        specs: Dict[str, AxisSpec] = {}
        for axis in axes:
            spec = resolve_axis(axis)
            specs.setdefault(spec.key, spec)
        return tuple(specs.values())

    @staticmethod
    def _unique_materials(materials: Iterable[Material]) -> List[Material]:
        seen = set()
        unique = []
        for material in materials:
            if material.name in seen:
                logger.warning("Skipping duplicate material '%s' in comparison", material.name)
                continue
            seen.add(material.name)
            unique.append(material)
        return unique


def normalize(
    materials: Iterable[Material],
    axes: Sequence[AxisLike] = DEFAULT_RADAR_AXES,
    selection: Optional[UnitSelection] = None,
    registry: Optional[UnitConversionRegistry] = None,
) -> NormalizationResult:
    """Normalize with ``registry`` (the default unit registry when omitted)."""
    return PropertyNormalizer(registry).normalize(materials, axes, selection)
