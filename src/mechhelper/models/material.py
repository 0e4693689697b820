"""
Material record model.

Every physical property is optional and stored once in canonical SI:
density in kg/m³, moduli and strengths in Pa, thermal expansion in 1/°C.
Records from the external store use camelCase keys (``youngsModulus``);
both camelCase and snake_case are accepted.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def calculate_shear_modulus(
    youngs_modulus: Optional[float],
    poissons_ratio: Optional[float],
) -> Optional[float]:
    """
    Shear modulus of an isotropic material, G = E / (2(1 + ν)).

    Returns None when either input is missing or ν <= -1 (not computable).
    """
    if youngs_modulus is None or poissons_ratio is None:
        return None
    if poissons_ratio <= -1:
        return None
    return youngs_modulus / (2 * (1 + poissons_ratio))


class Material(BaseModel):
    """Engineering material with optional SI properties."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    name: str = Field(..., description="Unique material name")
    category: str = Field(..., description="Classification tag, e.g. 'Carbon Steel'")
    description: Optional[str] = None

    # Base mechanical properties
    density: Optional[float] = Field(None, description="Density in kg/m³")
    youngs_modulus: Optional[float] = Field(None, description="Young's modulus in Pa")
    yield_strength: Optional[float] = Field(None, description="Yield strength in Pa")
    ultimate_tensile_strength: Optional[float] = Field(None, description="UTS in Pa")
    poissons_ratio: Optional[float] = None
    shear_modulus: Optional[float] = Field(None, description="Shear modulus in Pa")
    thermal_expansion_coefficient: Optional[float] = Field(None, description="CTE in 1/°C")

    # Domain-specific properties
    elongation_at_break: Optional[float] = Field(None, description="Elongation at break in %")
    compressive_strength: Optional[float] = Field(None, description="Compressive strength in Pa")
    flexural_strength: Optional[float] = Field(None, description="Flexural strength in Pa")
    fracture_toughness: Optional[float] = Field(None, description="K_IC in Pa·√m")
    melting_point: Optional[float] = Field(None, description="Melting point in °C")
    hdt: Optional[float] = Field(None, description="Heat deflection temperature in °C")
    max_service_temperature: Optional[float] = Field(None, description="Max service temperature in °C")
    fiber_type: Optional[str] = None
    matrix_type: Optional[str] = None

    @field_validator("name", "category")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def derived_shear_modulus(self) -> Optional[float]:
        """G computed from E and ν, ignoring any supplied shear modulus."""
        return calculate_shear_modulus(self.youngs_modulus, self.poissons_ratio)

    @property
    def effective_shear_modulus(self) -> Optional[float]:
        """Supplied shear modulus, else the value derived from E and ν."""
        if self.shear_modulus is not None:
            return self.shear_modulus
        return self.derived_shear_modulus

    @property
    def specific_strength(self) -> Optional[float]:
        """Yield strength per unit density (N·m/kg)."""
        if self.yield_strength is None or not self.density:
            return None
        return self.yield_strength / self.density

    @property
    def specific_modulus(self) -> Optional[float]:
        """Young's modulus per unit density (N·m/kg)."""
        if self.youngs_modulus is None or not self.density:
            return None
        return self.youngs_modulus / self.density

    def with_derived_shear_modulus(self) -> "Material":
        """Copy with shear modulus filled from E and ν when not supplied."""
        if self.shear_modulus is not None:
            return self
        derived = self.derived_shear_modulus
        if derived is None:
            return self
        return self.model_copy(update={"shear_modulus": derived})
