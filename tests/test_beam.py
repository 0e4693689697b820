"""Tests for the simply supported beam deflection solver."""
import math

import numpy as np
import pytest
from pydantic import ValidationError

from mechhelper.core.beam import (
    MaxDeflection,
    center_deflection,
    deflection_at,
    deflection_curve,
    max_deflection,
    solve,
)
from mechhelper.exceptions import InvalidInputError
from mechhelper.models.inputs import BeamLoadCase

# Steel beam, 2 m span, 1 kN load
L = 2.0
P = 1000.0
E = 200e9
I = 8.33e-6


class TestCenterLoad:
    """Centred load against the classic closed form P·L³ / (48·E·I)."""

    def test_midspan_deflection(self):
        expected = P * L**3 / (48 * E * I)
        assert deflection_at(L, P, E, I, L / 2, L / 2) == pytest.approx(expected, rel=1e-12)
        assert expected == pytest.approx(1.0004e-4, rel=1e-3)

    def test_max_at_midspan(self):
        result = max_deflection(L, P, E, I, L / 2)
        assert result.location == pytest.approx(1.0)
        assert result.max_deflection == pytest.approx(P * L**3 / (48 * E * I), rel=1e-12)

    def test_center_deflection_shortcut(self):
        assert center_deflection(L, P, E, I) == pytest.approx(P * L**3 / (48 * E * I), rel=1e-12)


class TestOffCenterLoad:
    """Location of the maximum for an off-centre load."""

    def test_load_left_of_center(self):
        """a = 0.5, b = 1.5: x* = sqrt((4 - 2.25) / 3) ≈ 0.7638 m."""
        result = max_deflection(L, P, E, I, 0.5)
        assert result.location == pytest.approx(math.sqrt(1.75 / 3), rel=1e-12)
        assert result.location == pytest.approx(0.7638, abs=1e-4)
        assert 0 < result.location < L

    def test_load_right_of_center(self):
        result = max_deflection(L, P, E, I, 1.5)
        assert result.location == pytest.approx(L - math.sqrt(1.75 / 3), rel=1e-12)

    def test_mirror_symmetry(self):
        left = max_deflection(L, P, E, I, 0.5)
        right = max_deflection(L, P, E, I, 1.5)
        assert left.max_deflection == pytest.approx(right.max_deflection, rel=1e-12)
        assert left.location == pytest.approx(L - right.location, rel=1e-12)

    @pytest.mark.parametrize("a", [0.1, 0.5, 0.9, 1.0, 1.3, 1.95])
    def test_maximum_dominates_sampled_curve(self, a):
        peak = max_deflection(L, P, E, I, a)
        _, curve = deflection_curve(L, P, E, I, a, num_points=4001)
        assert curve.max() <= peak.max_deflection * (1 + 1e-12)
        assert curve.max() == pytest.approx(peak.max_deflection, rel=1e-5)

    @pytest.mark.parametrize("a", [1e-6, 0.5, 1.0, 1.5, L - 1e-6])
    def test_location_strictly_inside_span(self, a):
        assert 0 < max_deflection(L, P, E, I, a).location < L


class TestDeflectionShape:
    """Continuity, support conditions and sign."""

    @pytest.mark.parametrize("a", [0.3, 1.0, 1.7])
    def test_continuity_at_load(self, a):
        at_load = deflection_at(L, P, E, I, a, a)
        just_right = deflection_at(L, P, E, I, a, a + 1e-9)
        assert at_load == pytest.approx(just_right, rel=1e-6)

    @pytest.mark.parametrize("a", [0.3, 1.0, 1.7])
    def test_branch_formulas_agree_at_load(self, a):
        b = L - a
        left = P * b * a / (6 * E * I * L) * (L**2 - b**2 - a**2)
        right = P * a * (L - a) / (6 * E * I * L) * (L**2 - a**2 - (L - a)**2)
        assert left == pytest.approx(right, rel=1e-12)
        assert deflection_at(L, P, E, I, a, a) == pytest.approx(left, rel=1e-12)

    def test_zero_at_supports(self):
        assert deflection_at(L, P, E, I, 0.7, 0.0) == 0.0
        assert deflection_at(L, P, E, I, 0.7, L) == pytest.approx(0.0, abs=1e-20)

    def test_sign_follows_load(self):
        assert deflection_at(L, -P, E, I, 1.0, 1.0) < 0
        assert max_deflection(L, -P, E, I, 0.5).max_deflection < 0


class TestBoundaryRejection:
    """Positions outside the span raise InvalidInputError."""

    def test_x_beyond_right_support(self):
        with pytest.raises(InvalidInputError) as exc_info:
            deflection_at(L, P, E, I, 1.0, L + 0.001)
        assert exc_info.value.parameter == "x"

    def test_negative_x(self):
        with pytest.raises(InvalidInputError) as exc_info:
            deflection_at(L, P, E, I, 1.0, -0.1)
        assert exc_info.value.parameter == "x"

    def test_load_beyond_span(self):
        with pytest.raises(InvalidInputError) as exc_info:
            deflection_at(L, P, E, I, L + 0.5, 1.0)
        assert exc_info.value.parameter == "a"

    def test_max_with_load_at_left_support(self):
        with pytest.raises(InvalidInputError):
            max_deflection(L, P, E, I, 0)

    def test_max_with_load_at_right_support(self):
        with pytest.raises(InvalidInputError):
            max_deflection(L, P, E, I, L)

    def test_non_finite_input(self):
        with pytest.raises(InvalidInputError) as exc_info:
            deflection_at(L, P, float("nan"), I, 1.0, 1.0)
        assert exc_info.value.parameter == "E"

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            deflection_at(L, P, E, I, 1.0, 3.0)


class TestDegenerateBeams:
    """Zero stiffness, span or load give zero results instead of errors."""

    @pytest.mark.parametrize("e_value,i_value", [(0.0, I), (E, 0.0)])
    def test_zero_stiffness_point(self, e_value, i_value):
        assert deflection_at(L, P, e_value, i_value, 1.0, 0.5) == 0.0

    def test_zero_span(self):
        assert deflection_at(0.0, P, E, I, 0.0, 0.0) == 0.0

    def test_zero_load_max(self):
        assert max_deflection(L, 0.0, E, I, 0.5) == MaxDeflection(max_deflection=0.0, location=L / 2)

    def test_zero_stiffness_max(self):
        assert max_deflection(L, P, 0.0, I, 0.5) == MaxDeflection(max_deflection=0.0, location=1.0)


class TestDeflectionCurve:
    """Sampled deflected shape."""

    def test_shape_and_endpoints(self):
        x, deflection = deflection_curve(L, P, E, I, 0.5, num_points=51)
        assert x.shape == deflection.shape == (51,)
        assert x[0] == 0.0 and x[-1] == pytest.approx(L)
        assert deflection[0] == 0.0
        assert deflection[-1] == pytest.approx(0.0, abs=1e-20)

    def test_matches_point_solver(self):
        x, deflection = deflection_curve(L, P, E, I, 1.2, num_points=21)
        expected = np.array([deflection_at(L, P, E, I, 1.2, xi) for xi in x])
        np.testing.assert_allclose(deflection, expected, rtol=1e-12, atol=1e-20)

    def test_degenerate_is_flat(self):
        _, deflection = deflection_curve(L, P, 0.0, I, 1.0, num_points=5)
        assert not deflection.any()

    def test_too_few_points(self):
        with pytest.raises(InvalidInputError):
            deflection_curve(L, P, E, I, 1.0, num_points=1)


class TestSolveLoadCase:
    """BeamLoadCase convenience wrapper."""

    def test_with_evaluation_point(self):
        case = BeamLoadCase(length=L, load=P, youngs_modulus=E, inertia=I, load_position=0.5, position=1.0)
        result = solve(case)
        assert result.location == pytest.approx(math.sqrt(1.75 / 3))
        assert result.point_deflection == pytest.approx(deflection_at(L, P, E, I, 0.5, 1.0))
        assert result.position == 1.0

    def test_without_evaluation_point(self):
        case = BeamLoadCase(length=L, load=P, youngs_modulus=E, inertia=I, load_position=1.0)
        result = solve(case)
        assert result.point_deflection is None

    def test_position_beyond_span(self):
        case = BeamLoadCase(length=L, load=P, youngs_modulus=E, inertia=I, load_position=1.0, position=2.5)
        with pytest.raises(InvalidInputError):
            solve(case)

    def test_span_must_be_positive(self):
        with pytest.raises(ValidationError):
            BeamLoadCase(length=0, load=P, youngs_modulus=E, inertia=I, load_position=0)
