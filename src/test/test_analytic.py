"""
Test the analytic machinery: Schottky groups, prime functions and
Green's-function derivatives.
"""

import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from analytic import SchottkyGroup, PrimeFunction, GreensDerivative
from core.domains import INFINITY, UnitDomain, unit_disk, reflect


CENTERS = [-0.4 + 0.2j, 0.35 - 0.3j]
RADII = [0.15, 0.12]
POINTS = np.array([0.1 - 0.4j, -0.55 + 0.45j, 0.6 - 0.15j])


@pytest.fixture
def domain():
    return UnitDomain(centers=CENTERS, radii=RADII)


@pytest.fixture
def group(domain):
    return SchottkyGroup.for_domain(domain)


class TestSchottkyGroup:
    """Test group enumeration and evaluation."""

    @pytest.mark.parametrize("level, size", [(0, 0), (1, 2), (2, 8), (3, 26)])
    def test_size(self, level, size):
        # 2m(2m-1)^(n-1) reduced words of length n, half of them kept
        g = SchottkyGroup(CENTERS, RADII, level)
        assert g.size == size
        assert g.m == 2

    def test_domain_level(self):
        domain = UnitDomain(centers=CENTERS, radii=RADII, truncation_level=2)
        assert SchottkyGroup.for_domain(domain).level == 2
        assert SchottkyGroup.for_domain(domain, level=3).level == 3

    def test_empty_group(self):
        g = SchottkyGroup.for_domain(unit_disk())
        assert g.size == 0
        assert g.apply(POINTS).shape == (0, 3)

    def test_no_inverse_pairs(self, group):
        words = set(group.words)
        for word in group.words:
            assert tuple(-x for x in reversed(word)) not in words

    def test_generator_fixes_hole_circle(self):
        # theta_j^-1 is reflection in circle j followed by reflection in the
        # unit circle, so it acts as 1/conj(w) on circle j
        g = SchottkyGroup(CENTERS, RADII, 1)
        for j, (c, q) in enumerate(zip(CENTERS, RADII), start=1):
            k = g.words.index((-j,))
            w = c + q * np.exp(1j * np.linspace(0, 2 * np.pi, 9))
            np.testing.assert_allclose(g.apply(w)[k], 1 / np.conj(w), rtol=1e-12)

    def test_apply_derivative(self, group):
        h = 1e-6
        fd = (group.apply(POINTS + h) - group.apply(POINTS - h)) / (2 * h)
        np.testing.assert_allclose(group.apply_derivative(POINTS), fd, rtol=1e-6, atol=1e-8)

    def test_negative_level(self):
        with pytest.raises(ValueError):
            SchottkyGroup(CENTERS, RADII, -1)


class TestPrimeFunction:
    """Test the Schottky-Klein prime function."""

    def test_disk_reduces_to_difference(self):
        alpha = 0.3 + 0.2j
        om = PrimeFunction.build(alpha, unit_disk())
        np.testing.assert_allclose(om(POINTS), POINTS - alpha, rtol=1e-14)

    def test_disk_at_infinity(self):
        om = PrimeFunction.build(INFINITY, unit_disk())
        assert om.at_infinity
        np.testing.assert_allclose(om(POINTS), 1.0)

    def test_shape(self, domain):
        om = PrimeFunction.build(0.3 + 0.2j, domain)
        z = POINTS.reshape(3, 1)
        assert om(z).shape == (3, 1)

    def test_with_parameter_shares_group(self, domain):
        om = PrimeFunction.build(0.3 + 0.2j, domain)
        other = om.with_parameter(-0.1j)
        assert other.group is om.group
        assert other.parameter == -0.1j

    def test_antisymmetry(self, group):
        a = 0.3 + 0.2j
        for z in POINTS:
            left = PrimeFunction(a, group)(np.array([z]))[0]
            right = PrimeFunction(z, group)(np.array([a]))[0]
            assert left == pytest.approx(-right, rel=1e-10)

    def test_vanishes_at_parameter(self, group):
        a = 0.3 + 0.2j
        assert PrimeFunction(a, group)(np.array([a]))[0] == 0

    def test_unit_circle_modulus(self, group):
        # |omega(z, a)| = |a| |omega(z, 1/conj(a))| on the unit circle
        a = 0.3 + 0.2j
        z = np.exp(2j * np.pi * np.arange(32) / 32)
        om = PrimeFunction(a, group)
        om_image = om.with_parameter(reflect(a))
        np.testing.assert_allclose(np.abs(om(z)), abs(a) * np.abs(om_image(z)), rtol=1e-10)

    @pytest.mark.parametrize("parameter", [0.3 + 0.2j, 1 / (0.3 - 0.2j), INFINITY])
    def test_derivative(self, group, parameter):
        om = PrimeFunction(parameter, group)
        h = 1e-6
        fd = (om(POINTS + h) - om(POINTS - h)) / (2 * h)
        np.testing.assert_allclose(om.derivative()(POINTS), fd, rtol=1e-6)


class TestGreensDerivative:
    """Test pole derivatives of G0."""

    @staticmethod
    def log_ratio(group, a, z1, z2):
        """log of [omega(z1, a)/omega(z1, 1/conj a)] / [same at z2], free of constants."""
        om = PrimeFunction(a, group)
        om_image = om.with_parameter(reflect(a))
        z = np.array([z1, z2])
        r = om(z) / om_image(z)
        return r[0] / r[1]

    @pytest.mark.parametrize("direction, step", [("x", 1.0), ("y", 1j)])
    def test_parameter_finite_difference(self, group, direction, step):
        a = 0.3 + 0.2j
        h = 1e-6
        z1, z2 = POINTS[0], POINTS[1]

        ratio = self.log_ratio(group, a + h * step, z1, z2) / self.log_ratio(group, a - h * step, z1, z2)
        fd = np.log(ratio) / (2 * h) / (2j * np.pi)

        g = GreensDerivative(a, direction, group)
        vals = g(np.array([z1, z2]))
        assert vals[0] - vals[1] == pytest.approx(fd, rel=1e-5)

    def test_constructors(self, domain):
        gx = GreensDerivative.x_derivative_at(0.3 + 0.2j, domain)
        gy = GreensDerivative.y_derivative_at(0.3 + 0.2j, domain)
        assert gx.direction == "x"
        assert gy.direction == "y"
        assert gx.group.level == domain.truncation_level

    @pytest.mark.parametrize("direction", ["x", "y"])
    def test_z_derivative(self, group, direction):
        g = GreensDerivative(0.3 + 0.2j, direction, group)
        h = 1e-6
        fd = (g(POINTS + h) - g(POINTS - h)) / (2 * h)
        np.testing.assert_allclose(g.derivative()(POINTS), fd, rtol=1e-5)

    @pytest.mark.parametrize("direction", ["x", "y"])
    def test_unit_circle_streamline(self, group, direction):
        # Im G0 vanishes on the unit circle for every pole, so its pole
        # derivatives have constant imaginary part there
        g = GreensDerivative(0.3 + 0.2j, direction, group)
        z = np.exp(2j * np.pi * np.arange(64) / 64)
        assert np.ptp(g(z).imag) < 1e-8

    def test_origin_pole(self, group):
        g = GreensDerivative(0j, "x", group)
        assert np.all(np.isfinite(g(POINTS)))

    def test_only_two_orders(self, group):
        g = GreensDerivative(0.3 + 0.2j, "x", group).derivative()
        assert g.order == 1
        with pytest.raises(ValueError):
            g.derivative()

    def test_unknown_direction(self, group):
        with pytest.raises(ValueError):
            GreensDerivative(0.3 + 0.2j, "z", group)
