"""
Property-based tests using Hypothesis.

Values are drawn in both representations, with polar values stored
exactly as a caller might build them: negative modulus and angles
several turns outside [-pi, pi] included.
"""

import math

import pytest
from hypothesis import HealthCheck, assume, given, settings
from hypothesis import strategies as st

from arithmetic import add, divide, multiply, power, subtract
from complex_value import EPSILON, Polar, Rectangular, wrap_angle
from contract import close


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

coords = st.floats(min_value=-2.5, max_value=2.5, allow_nan=False)
angles = st.floats(min_value=-10.0, max_value=10.0, allow_nan=False)

rectangulars = st.builds(Rectangular, coords, coords)
polars = st.builds(Polar, coords, angles)
values = st.one_of(rectangulars, polars)


def nonzero(z) -> bool:
    return z.modulus() >= 1e-3


# ---------------------------------------------------------------------------
# Polar accessors
# ---------------------------------------------------------------------------

class TestPolarAccessors:

    @given(z=polars)
    def test_modulus_non_negative(self, z):
        assert z.modulus() >= 0

    @given(z=polars)
    def test_phase_in_range(self, z):
        assert -math.pi <= z.phase() <= math.pi

    @given(z=polars)
    def test_phase_is_pure(self, z):
        r, theta = z.r, z.theta
        assert z.phase() == z.phase()
        assert (z.r, z.theta) == (r, theta)

    @given(z=polars)
    def test_normalized_pair_is_same_value(self, z):
        assert Polar(z.modulus(), z.phase()) == z

    @given(angle=st.floats(min_value=-1e3, max_value=1e3, allow_nan=False))
    def test_wrap_angle_preserves_direction(self, angle):
        wrapped = wrap_angle(angle)
        assert -math.pi <= wrapped <= math.pi
        assert math.cos(wrapped) == pytest.approx(math.cos(angle), abs=1e-9)
        assert math.sin(wrapped) == pytest.approx(math.sin(angle), abs=1e-9)


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

class TestConversions:

    @given(z=rectangulars)
    def test_rectangular_round_trip(self, z):
        back = z.to_polar().to_rectangular()
        assert back == z

    @given(z=polars)
    def test_polar_round_trip(self, z):
        assume(nonzero(z))
        back = z.to_rectangular().to_polar()
        assert back.modulus() == pytest.approx(z.modulus(), rel=1e-9)
        assert back == z

    @given(z=values)
    def test_complex_agrees_with_components(self, z):
        c = complex(z)
        assert c.real == z.real() and c.imag == z.imag()

    @given(z=values)
    def test_modulus_matches_components(self, z):
        assert z.modulus() == pytest.approx(abs(complex(z)), rel=1e-9, abs=1e-12)


# ---------------------------------------------------------------------------
# Conjugate and inverse
# ---------------------------------------------------------------------------

class TestConjugateInverse:

    @given(z=values)
    def test_conjugate_involution(self, z):
        assert z.conjugate().conjugate() == z

    @given(z=values)
    def test_conjugate_keeps_representation(self, z):
        assert type(z.conjugate()) is type(z)
        assert type(z.inverse()) is type(z)

    @given(z=values)
    def test_conjugate_negates_imag(self, z):
        assert z.conjugate() == Rectangular(z.real(), -z.imag())

    @given(z=values)
    def test_inverse_involution(self, z):
        assume(nonzero(z))
        assert close(z.inverse().inverse(), z)

    @given(z=values)
    def test_inverse_law(self, z):
        assume(nonzero(z))
        assert multiply(z, z.inverse()) == Rectangular(1, 0)


# ---------------------------------------------------------------------------
# Ring identities
# ---------------------------------------------------------------------------

class TestIdentities:

    @given(z=values)
    def test_additive_identity(self, z):
        assert add(z, 0) == z
        assert add(z, Polar(0, 1.0)) == z

    @given(z=values)
    def test_multiplicative_identity(self, z):
        assert multiply(z, 1) == z
        assert multiply(Polar(1, 0), z) == z

    @given(z=values)
    def test_subtract_self(self, z):
        assert subtract(z, z) == Rectangular(0, 0)

    @given(a=values, b=values)
    def test_commutativity(self, a, b):
        assert add(a, b) == add(b, a)
        assert close(multiply(a, b), multiply(b, a))

    @given(a=values, b=values)
    @settings(suppress_health_check=[HealthCheck.filter_too_much])
    def test_divide_then_multiply(self, a, b):
        assume(nonzero(b))
        assert close(multiply(divide(a, b), b), a)

    @given(a=values, b=values, c=values)
    @settings(max_examples=200)
    def test_distributivity(self, a, b, c):
        lhs = multiply(a, add(b, c))
        rhs = add(multiply(a, b), multiply(a, c))
        assert close(lhs, rhs)

    @given(z=values)
    def test_power_two_is_square(self, z):
        assume(nonzero(z))
        assert close(power(z, 2), multiply(z, z))

    @given(z=values)
    def test_equality_within_epsilon(self, z):
        shifted = Rectangular(z.real() + EPSILON / 4, z.imag() - EPSILON / 4)
        assert shifted == z
