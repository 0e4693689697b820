"""
Beam deflection calculator.

Coordinates the calculator workflow:
1. Second moment of area from the selected cross-section
2. Young's modulus from direct entry or the selected material
3. Location and magnitude of the maximum deflection
4. Mid-span and optional point deflection
5. Sampled deflected shape for the visualization

All values are SI; the front end converts user-entered units with
:class:`~mechhelper.core.units.UnitConversionRegistry` before calling.
"""

import logging
from typing import List, Tuple

from ..exceptions import InvalidInputError
from ..models.inputs import BeamCalculatorInput, SectionInput, SectionShape
from ..models.outputs import BeamCalculatorOutput, CalculationStep
from ..utils import circular_inertia, rectangular_inertia
from .beam import deflection_at, deflection_curve, max_deflection

logger = logging.getLogger(__name__)


class BeamCalculator:
    """
    Simply supported beam, single point load.

    Limits:
    - Guide value for deflection: L/250
    """

    DEFLECTION_LIMIT_RATIO = 250

    def calculate(self, inputs: BeamCalculatorInput) -> BeamCalculatorOutput:
        """
        Run the calculator.

        Args:
            inputs: BeamCalculatorInput with span, load, stiffness and section

        Returns:
            BeamCalculatorOutput with deflections, curve and calculation steps

        Raises:
            InvalidInputError: missing stiffness or section dimensions, or a
                load/evaluation position outside the valid range.
        """
        steps: List[CalculationStep] = []
        warnings: List[str] = []

        L = inputs.span_length
        P = inputs.load
        a = inputs.resolved_load_position

        # Step 1: Second moment of area
        I, inertia_step = self._resolve_inertia(inputs.section)
        steps.append(inertia_step)

        # Step 2: Young's modulus
        E, source = self._resolve_youngs_modulus(inputs, warnings)
        steps.append(CalculationStep(
            step_number=2,
            description=f"Young's modulus ({source})",
            formula="E",
            substitution=f"E = {E / 1e9:.4g} GPa",
            result=E,
            unit="Pa",
        ))

        # Step 3: Location of maximum deflection
        b = L - a
        peak = max_deflection(L, P, E, I, a)
        if a <= b:
            formula = "x* = √((L² - b²) / 3)"
            substitution = f"x* = √(({L:.4g}² - {b:.4g}²) / 3)"
        else:
            formula = "x* = L - √((L² - a²) / 3)"
            substitution = f"x* = {L:.4g} - √(({L:.4g}² - {a:.4g}²) / 3)"
        steps.append(CalculationStep(
            step_number=3,
            description="Location of maximum deflection",
            formula=formula,
            substitution=substitution,
            result=peak.location,
            unit="m",
        ))

        # Step 4: Maximum deflection
        steps.append(CalculationStep(
            step_number=4,
            description="Maximum deflection",
            formula="δmax = P·b·x*·(L² - b² - x*²) / (6·E·I·L)",
            substitution=f"δmax = {peak.max_deflection * 1000:.4g} mm",
            result=peak.max_deflection,
            unit="m",
        ))

        # Step 5: Mid-span deflection
        midspan = deflection_at(L, P, E, I, a, L / 2)
        steps.append(CalculationStep(
            step_number=5,
            description="Mid-span deflection",
            formula="δ(L/2)",
            substitution=f"δ({L / 2:.4g}) = {midspan * 1000:.4g} mm",
            result=midspan,
            unit="m",
        ))

        point = None
        if inputs.evaluation_position is not None:
            point = deflection_at(L, P, E, I, a, inputs.evaluation_position)

        ratio = None
        if peak.max_deflection != 0:
            ratio = L / abs(peak.max_deflection)
            if ratio < self.DEFLECTION_LIMIT_RATIO:
                warnings.append(
                    f"Deflection L/{ratio:.0f} exceeds the L/{self.DEFLECTION_LIMIT_RATIO} guide value"
                )
        else:
            warnings.append("Zero load or stiffness: deflection is zero")

        x, deflection = deflection_curve(L, P, E, I, a, inputs.num_points)

        logger.debug(
            "Beam L=%.4g m, P=%.4g N, a=%.4g m: δmax=%.4g m at x=%.4g m",
            L, P, a, peak.max_deflection, peak.location,
        )

        return BeamCalculatorOutput(
            youngs_modulus=E,
            inertia=I,
            load_position=a,
            material_name=inputs.material.name if inputs.material else None,
            max_deflection=peak.max_deflection,
            max_deflection_location=peak.location,
            midspan_deflection=midspan,
            point_deflection=point,
            span_deflection_ratio=ratio,
            curve_x=x.tolist(),
            curve_deflection=deflection.tolist(),
            steps=steps,
            warnings=warnings,
        )

    def _resolve_inertia(self, section: SectionInput) -> Tuple[float, CalculationStep]:
        """Second moment of area for the selected section shape."""
        if section.shape == SectionShape.RECTANGLE:
            if section.base is None or section.height is None:
                raise InvalidInputError(
                    "Rectangular section needs base and height",
                    parameter="section",
                    value=section.shape.value,
                )
            I = rectangular_inertia(section.base, section.height)
            formula = "I = b·h³ / 12"
            substitution = f"I = {section.base:.4g} × {section.height:.4g}³ / 12"
        elif section.shape == SectionShape.CIRCLE:
            if section.diameter is None:
                raise InvalidInputError(
                    "Circular section needs a diameter",
                    parameter="section",
                    value=section.shape.value,
                )
            I = circular_inertia(section.diameter)
            formula = "I = π·d⁴ / 64"
            substitution = f"I = π × {section.diameter:.4g}⁴ / 64"
        else:
            if section.inertia is None:
                raise InvalidInputError(
                    "Direct section needs the second moment of area",
                    parameter="section",
                    value=section.shape.value,
                )
            I = section.inertia
            formula = "I (entered)"
            substitution = f"I = {I:.4g}"

        step = CalculationStep(
            step_number=1,
            description="Second moment of area (I)",
            formula=formula,
            substitution=substitution,
            result=I,
            unit="m⁴",
        )
        return I, step

    def _resolve_youngs_modulus(self, inputs: BeamCalculatorInput, warnings: List[str]) -> Tuple[float, str]:
        material = inputs.material

        if inputs.youngs_modulus is not None:
            if material is not None and material.youngs_modulus is not None:
                warnings.append(
                    f"Entered Young's modulus overrides the value for {material.name}"
                )
            return inputs.youngs_modulus, "entered"

        if material is None:
            raise InvalidInputError(
                "Young's modulus is required: enter a value or select a material",
                parameter="youngs_modulus",
            )
        if material.youngs_modulus is None:
            raise InvalidInputError(
                f"Material '{material.name}' has no Young's modulus",
                parameter="material",
                value=material.name,
            )
        return material.youngs_modulus, material.name
