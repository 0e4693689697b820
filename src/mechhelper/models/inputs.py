"""
Input data models for the beam deflection tools using Pydantic for validation.

Field constraints cover the static ranges only.  Bounds that depend on the
span (``load_position <= length``) are checked by the solver, which raises
:class:`~mechhelper.exceptions.InvalidInputError` naming the bound.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .material import Material


class SectionShape(str, Enum):
    """How the second moment of area is supplied."""
    RECTANGLE = "rectangle"  # from base and height
    CIRCLE = "circle"        # from diameter
    DIRECT = "direct"        # I entered directly


class BeamLoadCase(BaseModel):
    """Simply supported beam with one transverse point load (all SI)."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    length: float = Field(..., gt=0, description="Span L in m")
    load: float = Field(..., description="Point load P in N")
    youngs_modulus: float = Field(..., ge=0, description="Young's modulus E in Pa")
    inertia: float = Field(..., ge=0, description="Second moment of area I in m⁴")
    load_position: float = Field(..., ge=0, description="Load position a from left support in m")
    position: Optional[float] = Field(
        None,
        ge=0,
        description="Evaluation position x from left support in m"
    )


class SectionInput(BaseModel):
    """Beam cross-section; only the dimensions for ``shape`` are used."""
    model_config = ConfigDict(allow_inf_nan=False)

    shape: SectionShape = SectionShape.RECTANGLE
    base: Optional[float] = Field(None, gt=0, description="Rectangle base b in m")
    height: Optional[float] = Field(None, gt=0, description="Rectangle height h in m")
    diameter: Optional[float] = Field(None, gt=0, description="Circle diameter d in m")
    inertia: Optional[float] = Field(None, gt=0, description="Direct I in m⁴")


class BeamCalculatorInput(BaseModel):
    """Complete input for the beam deflection calculator.

    Young's modulus comes either from ``youngs_modulus`` or from the
    selected ``material``; an explicit value wins.
    """
    model_config = ConfigDict(allow_inf_nan=False)

    span_length: float = Field(..., gt=0, description="Span L in m")
    load: float = Field(..., description="Point load P in N")
    load_position: Optional[float] = Field(
        None,
        ge=0,
        description="Load position a in m; defaults to mid-span"
    )
    evaluation_position: Optional[float] = Field(
        None,
        ge=0,
        description="Optional point x (m) at which to report deflection"
    )

    youngs_modulus: Optional[float] = Field(None, gt=0, description="Young's modulus E in Pa")
    material: Optional[Material] = None

    section: SectionInput
    num_points: int = Field(
        default=101,
        ge=2,
        le=2001,
        description="Samples in the deflected-shape curve"
    )

    @property
    def resolved_load_position(self) -> float:
        if self.load_position is None:
            return self.span_length / 2
        return self.load_position
