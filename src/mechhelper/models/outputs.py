"""
Output data models for beam calculator results.
"""

from typing import List, Optional

from pydantic import BaseModel


class CalculationStep(BaseModel):
    """Single calculation step for transparency."""
    step_number: int
    description: str
    formula: str
    substitution: str
    result: float
    unit: str


class BeamCalculatorOutput(BaseModel):
    """Complete beam calculator results (SI)."""
    # Resolved inputs
    youngs_modulus: float  # Pa
    inertia: float  # m⁴
    load_position: float  # m
    material_name: Optional[str] = None

    # Deflection
    max_deflection: float  # m
    max_deflection_location: float  # m
    midspan_deflection: float  # m
    point_deflection: Optional[float] = None  # m at evaluation_position
    span_deflection_ratio: Optional[float] = None  # L / |δmax|

    # Deflected shape for plotting
    curve_x: List[float]  # m
    curve_deflection: List[float]  # m

    steps: List[CalculationStep] = []
    warnings: List[str] = []
