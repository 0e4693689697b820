"""Engineering calculation and comparison core.

- Unit conversion between canonical SI values and display units
- Closed-form deflection of a simply supported beam under a point load
- Min-max normalization of material properties for comparison charts
"""

from .exceptions import MechHelperError, InvalidInputError, ConfigurationError
from .models import (
    Material, calculate_shear_modulus,
    BeamLoadCase, SectionShape, SectionInput, BeamCalculatorInput,
    CalculationStep, BeamCalculatorOutput
)
from .core import (
    QuantityClass, UnitSpec, UnitSelection, UnitConversionRegistry, get_default_registry,
    MaxDeflection, BeamDeflectionResult,
    deflection_at, max_deflection, center_deflection, deflection_curve, solve,
    BeamCalculator,
    PropertyAxis, AxisSpec, DEFAULT_RADAR_AXES, NormalizationResult,
    PropertyNormalizer, normalize, format_property_name
)

__version__ = "0.1.0"
