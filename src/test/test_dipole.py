"""
Test dipoles.
"""

import warnings

import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.domains import INFINITY, PlaneDomain, UnitDomain, unit_disk
from core.errors import DomainBindingError, InvalidArgumentError, ScaleWarning
from potential import BoundDipole, Dipole, DomainClass


POINTS = np.array([0.1 - 0.4j, -0.55 + 0.45j, 0.6 - 0.15j])
BETA = 0.3 + 0.2j
UNIT_CIRCLE = np.exp(2j * np.pi * np.arange(64) / 64)


def circular_domain():
    return UnitDomain(centers=[-0.4 + 0.2j, 0.35 - 0.3j], radii=[0.15, 0.12])


def bind_quietly(kind, domain):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ScaleWarning)
        return kind.bind(domain)


class TestDescription:
    """Test construction of unbound dipoles."""

    def test_defaults(self):
        dipole = Dipole(BETA, 1.0)
        assert dipole.angle == 0.0
        assert dipole.scale is None

    def test_complex_angle(self):
        with pytest.raises(InvalidArgumentError, match="Angle"):
            Dipole(BETA, 1.0, angle=1j)

    def test_to_dict(self):
        data = Dipole(BETA, 1.0, angle=0.5, scale=2.0).to_dict()
        assert data["kind"] == "Dipole"
        assert data["angle"] == 0.5
        assert data["scale"] == 2.0


class TestPlane:
    """Test dipoles in the entire plane."""

    def test_finite_pole(self):
        chi = 0.7
        bound = Dipole(BETA, 2.0, angle=chi).bind(PlaneDomain())
        expected = 2.0 / (POINTS - BETA) / (2 * np.pi) * np.exp(1j * chi)
        np.testing.assert_allclose(bound(POINTS), expected)
        np.testing.assert_allclose(bound.derivative()(POINTS),
                                   -2.0 / (POINTS - BETA)**2 / (2 * np.pi) * np.exp(1j * chi))

    def test_pole_at_infinity(self):
        chi = 0.7
        bound = Dipole(INFINITY, 2.0, angle=chi).bind(PlaneDomain())
        np.testing.assert_allclose(bound(POINTS), 2.0 * np.exp(-1j * chi) / (2 * np.pi) * POINTS)
        np.testing.assert_allclose(bound.derivative()(POINTS), 2.0 * np.exp(-1j * chi) / (2 * np.pi))


class TestScaleWarning:
    """The missing-scale warning is issued once, at bind time."""

    def test_warns_once(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            bound = Dipole(BETA, 1.0).bind(unit_disk())
            bound(POINTS)
            bound.derivative()(POINTS)
        scale_warnings = [w for w in caught if issubclass(w.category, ScaleWarning)]
        assert len(scale_warnings) == 1
        assert "Scale set to 1" in str(scale_warnings[0].message)
        assert bound.scale == 1.0

    @pytest.mark.parametrize("kind, make_domain", [
        (Dipole(BETA, 1.0, scale=1.0), unit_disk),
        (Dipole(BETA, 1.0), PlaneDomain),
        (Dipole(BETA, 0.0), unit_disk),
    ])
    def test_silent(self, kind, make_domain):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            kind.bind(make_domain())
        assert not [w for w in caught if issubclass(w.category, ScaleWarning)]


class TestDisk:
    """Test dipoles in the unit disk."""

    def test_closed_form(self):
        chi, b = 0.4, 1.5
        bound = Dipole(BETA, 2.0, angle=chi, scale=b).bind(unit_disk())
        expected = 2.0 * b * (np.exp(1j * chi) / (POINTS - BETA)
                              + np.exp(-1j * chi) * POINTS / (1 - np.conj(BETA) * POINTS))
        np.testing.assert_allclose(bound(POINTS), expected)

    def test_centered_pole(self):
        chi = 0.4
        bound = Dipole(0.0, 2.0, angle=chi, scale=1.5).bind(unit_disk())
        expected = 2.0 * 1.5 * (np.exp(-1j * chi) * POINTS + np.exp(1j * chi) / POINTS)
        np.testing.assert_allclose(bound(POINTS), expected)

    def test_unit_circle_streamline(self):
        bound = Dipole(BETA, 2.0, angle=0.4, scale=1.0).bind(unit_disk())
        np.testing.assert_allclose(bound(UNIT_CIRCLE).imag, 0.0, atol=1e-10)

    def test_derivative(self):
        bound = Dipole(BETA, 2.0, angle=0.4, scale=1.0).bind(unit_disk())
        h = 1e-6
        fd = (bound(POINTS + h) - bound(POINTS - h)) / (2 * h)
        np.testing.assert_allclose(bound.derivative()(POINTS), fd, rtol=1e-4)

    def test_zero_strength(self):
        bound = Dipole(BETA, 0.0).bind(unit_disk())
        np.testing.assert_array_equal(bound(POINTS), 0.0)
        np.testing.assert_array_equal(bound.derivative()(POINTS), 0.0)

    def test_outside(self):
        with pytest.raises(DomainBindingError, match="dipole"):
            Dipole(1.1, 1.0, scale=1.0).bind(unit_disk())


class TestCircularDomain:
    """Test dipoles built from Green's-function derivatives."""

    def test_both_handles(self):
        bound = Dipole(BETA, 1.0, angle=0.3, scale=1.0).bind(circular_domain())
        assert isinstance(bound, BoundDipole)
        assert bound.domain_class is DomainClass.MULTIPLY_CONNECTED
        assert bound.greens_x is not None
        assert bound.greens_y is not None
        assert bound.greens_x.group is bound.greens_y.group

    def test_angle_zero_skips_x(self):
        bound = Dipole(BETA, 1.0, angle=0.0, scale=1.0).bind(circular_domain())
        assert bound.greens_x is None
        assert bound.greens_y is not None

    @pytest.mark.parametrize("chi", [np.pi / 2, -np.pi / 2])
    def test_right_angle_skips_y(self, chi):
        bound = Dipole(BETA, 1.0, angle=chi, scale=1.0).bind(circular_domain())
        assert bound.greens_x is not None
        assert bound.greens_y is None

    def test_zero_strength_builds_nothing(self):
        bound = Dipole(BETA, 0.0, angle=0.3).bind(circular_domain())
        assert bound.greens_x is None
        assert bound.greens_y is None
        np.testing.assert_array_equal(bound(POINTS), 0.0)

    def test_greens_combination(self):
        chi, b = 0.3, 2.0
        bound = Dipole(BETA, 1.5, angle=chi, scale=b).bind(circular_domain())
        expected = -4 * np.pi * 1.5 * b * (np.sin(chi) * bound.greens_x(POINTS)
                                          + np.cos(chi) * bound.greens_y(POINTS))
        np.testing.assert_allclose(bound(POINTS), expected)

    @pytest.mark.parametrize("chi", [0.0, 0.3, np.pi / 2])
    def test_unit_circle_streamline(self, chi):
        bound = Dipole(BETA, 1.0, angle=chi, scale=1.0).bind(circular_domain())
        assert np.ptp(bound(UNIT_CIRCLE).imag) < 1e-8

    @pytest.mark.parametrize("chi", [0.0, 0.3, np.pi / 2])
    @pytest.mark.parametrize("j", [1, 2])
    def test_hole_streamlines(self, chi, j):
        domain = circular_domain()
        bound = Dipole(BETA, 1.0, angle=chi, scale=1.0).bind(domain)
        w = bound(domain.boundary_points(j, 64))
        assert np.ptp(w.imag) < 1e-5 * max(1.0, np.max(np.abs(w)))

    @pytest.mark.parametrize("chi", [0.0, 0.3, np.pi / 2])
    def test_derivative(self, chi):
        bound = Dipole(BETA, 1.0, angle=chi, scale=1.0).bind(circular_domain())
        h = 1e-6
        fd = (bound(POINTS + h) - bound(POINTS - h)) / (2 * h)
        np.testing.assert_allclose(bound.derivative()(POINTS), fd, rtol=1e-4)

    def test_warns_in_circular_domain(self):
        with pytest.warns(ScaleWarning):
            Dipole(BETA, 1.0, angle=0.3).bind(circular_domain())

    def test_hole_rejected(self):
        with pytest.raises(DomainBindingError):
            bind_quietly(Dipole(-0.4 + 0.2j, 1.0), circular_domain())
