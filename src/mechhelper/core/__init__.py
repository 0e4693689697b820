# Core calculation engine
from .units import (
    QuantityClass, UnitSpec, UnitSelection, UnitConversionRegistry,
    get_default_registry, NOT_AVAILABLE
)
from .beam import (
    MaxDeflection, BeamDeflectionResult,
    deflection_at, max_deflection, center_deflection, deflection_curve, solve
)
from .calculator import BeamCalculator
from .normalizer import (
    PropertyAxis, AxisSpec, AXIS_SPECS, DEFAULT_RADAR_AXES,
    NormalizationResult, PropertyNormalizer, normalize, format_property_name
)
