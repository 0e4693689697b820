"""
Closed-form Euler-Bernoulli deflection of a simply supported beam.

One transverse point load P acts at distance ``a`` from the left support of
a beam with span L, Young's modulus E and second moment of area I.  With
``b = L - a`` (Roark, Table 8.1 case 1e):

    0 <= x <= a :  δ(x) = P·b·x / (6·E·I·L) · (L² - b² - x²)
    a <  x <= L :  δ(x) = P·a·(L-x) / (6·E·I·L) · (L² - a² - (L-x)²)

Positive values are deflection in the direction of the load.  All inputs
are SI (m, N, Pa, m⁴); callers convert user-entered values beforehand.

Degenerate beams (E·I·L == 0, or a zero load for the maximum) return a zero
result instead of raising.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..exceptions import InvalidInputError
from ..models.inputs import BeamLoadCase
from ..utils import require_finite


@dataclass(frozen=True)
class MaxDeflection:
    """Global maximum deflection and where it occurs."""
    max_deflection: float  # m
    location: float        # m from left support


@dataclass(frozen=True)
class BeamDeflectionResult:
    """Result of solving one BeamLoadCase."""
    max_deflection: float             # m
    location: float                   # m
    point_deflection: Optional[float]  # m at case.position, if requested
    position: Optional[float]          # m


def _check_within_span(name: str, value: float, length: float) -> None:
    if value < 0:
        raise InvalidInputError(
            f"{name} must be >= 0 (left support), got {value}",
            parameter=name,
            value=value,
        )
    if value > length:
        raise InvalidInputError(
            f"{name} must be <= L = {length} (right support), got {value}",
            parameter=name,
            value=value,
        )


def deflection_at(L: float, P: float, E: float, I: float, a: float, x: float) -> float:
    """
    Deflection at ``x`` for a point load ``P`` at ``a``.

    Args:
        L: Span (m)
        P: Point load (N)
        E: Young's modulus (Pa)
        I: Second moment of area (m⁴)
        a: Load position from the left support (m), 0 <= a <= L
        x: Evaluation position from the left support (m), 0 <= x <= L

    Returns:
        Deflection in m (positive in the load direction).

    Raises:
        InvalidInputError: if ``a`` or ``x`` lies outside ``[0, L]`` or any
            input is not finite.
    """
    require_finite(L=L, P=P, E=E, I=I, a=a, x=x)
    _check_within_span("a", a, L)
    _check_within_span("x", x, L)

    if E * I * L == 0:
        return 0.0

    b = L - a
    denominator = 6 * E * I * L

    if x <= a:
        return (P * b * x) / denominator * (L**2 - b**2 - x**2)
    return (P * a * (L - x)) / denominator * (L**2 - a**2 - (L - x)**2)


def max_deflection(L: float, P: float, E: float, I: float, a: float) -> MaxDeflection:
    """
    Maximum deflection and its location for a point load at ``a``.

    The maximum lies on the longer segment, where the slope is zero:

        a <= b :  x* = sqrt((L² - b²) / 3)
        a >  b :  x* = L - sqrt((L² - a²) / 3)

    Raises:
        InvalidInputError: unless 0 < a < L strictly (load at a support has
            no interior maximum), or if any input is not finite.
    """
    require_finite(L=L, P=P, E=E, I=I, a=a)
    if not 0 < a < L:
        raise InvalidInputError(
            f"Load position a must satisfy 0 < a < L = {L} (not at a support), got {a}",
            parameter="a",
            value=a,
        )

    if P == 0 or E == 0 or I == 0:
        return MaxDeflection(max_deflection=0.0, location=L / 2)

    b = L - a
    if a <= b:
        location = math.sqrt((L**2 - b**2) / 3)
    else:
        location = L - math.sqrt((L**2 - a**2) / 3)

    return MaxDeflection(
        max_deflection=deflection_at(L, P, E, I, a, location),
        location=location,
    )


def center_deflection(L: float, P: float, E: float, I: float) -> float:
    """Mid-span deflection for a centred load, P·L³ / (48·E·I)."""
    return deflection_at(L, P, E, I, L / 2, L / 2)


def deflection_curve(
    L: float,
    P: float,
    E: float,
    I: float,
    a: float,
    num_points: int = 101,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample the deflected shape over the span.

    Returns:
        (x, deflection) arrays of length ``num_points``, x from 0 to L.
    """
    if num_points < 2:
        raise InvalidInputError(
            f"num_points must be at least 2, got {num_points}",
            parameter="num_points",
            value=num_points,
        )
    require_finite(L=L, P=P, E=E, I=I, a=a)
    _check_within_span("a", a, L)

    x = np.linspace(0.0, L, num_points)
    if E * I * L == 0:
        return x, np.zeros_like(x)

    b = L - a
    denominator = 6 * E * I * L
    left = (P * b * x) / denominator * (L**2 - b**2 - x**2)
    right = (P * a * (L - x)) / denominator * (L**2 - a**2 - (L - x)**2)
    return x, np.where(x <= a, left, right)


def solve(case: BeamLoadCase) -> BeamDeflectionResult:
    """Maximum deflection, plus the point value when ``case.position`` is set."""
    peak = max_deflection(
        case.length, case.load, case.youngs_modulus, case.inertia, case.load_position
    )
    point = None
    if case.position is not None:
        point = deflection_at(
            case.length, case.load, case.youngs_modulus, case.inertia,
            case.load_position, case.position,
        )
    return BeamDeflectionResult(
        max_deflection=peak.max_deflection,
        location=peak.location,
        point_deflection=point,
        position=case.position,
    )
