"""
Dipoles.

A dipole of strength U at b with orientation angle chi and map scale s:

    entire plane        U/(2 pi) e^{i chi}/(z - b)     (U e^{-i chi}/(2 pi) z for b at infinity)
    unit disk           U s (e^{i chi}/(z - b) + e^{-i chi} z/(1 - conj(b) z))
    circular domain     -4 pi U s (sin(chi) dG0/dx + cos(chi) dG0/dy)

At b = 0 the unit disk form reduces to U s (e^{-i chi} z + e^{i chi}/z).

In the circular domain a term whose trigonometric factor vanishes is skipped
and its Green's-function handle is never built.
"""

from __future__ import annotations
import warnings
from dataclasses import dataclass
from typing import ClassVar, Optional
import numpy as np
from numpy.typing import NDArray, ArrayLike

from analytic import GreensDerivative
from core.domains import PotentialDomain, is_infinite
from core.errors import ScaleWarning
from .adapter import DomainClass, greens_derivatives, require_inside, trig_factor_nonzero
from .kinds import (
    BoundContribution,
    DerivativeFunction,
    PointSingularity,
    PotentialKind,
    as_real,
)


@dataclass(frozen=True)
class Dipole(PointSingularity):
    """
    A dipole.

    Attributes:
        location: Pole of the dipole
        strength: Real strength U
        angle: Orientation chi in radians
        scale: Derivative scale of the physical-to-unit map at the pole.
            None means not given; 1 is used and a warning is issued once
            when the dipole is bound to a bounded domain.
    """

    angle: float = 0.0
    scale: Optional[float] = None

    plane_ok: ClassVar[bool] = True

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "angle", as_real(self.angle, "Angle"))
        if self.scale is not None:
            object.__setattr__(self, "scale", as_real(self.scale, "Scale"))

    def _bind(self, domain: PotentialDomain, domain_class: DomainClass) -> BoundDipole:
        return BoundDipole.create(self, domain, domain_class, self.location)


class BoundDipole(BoundContribution):
    """Dipole bound to a domain (also the bounded form of a uniform flow)."""

    def __init__(self, kind: PotentialKind, domain: PotentialDomain,
                 domain_class: DomainClass, location: complex,
                 greens_x: Optional[GreensDerivative] = None,
                 greens_y: Optional[GreensDerivative] = None):
        super().__init__(kind, domain, domain_class)
        self._location = location
        self._greens_x = greens_x
        self._greens_y = greens_y

    @classmethod
    def create(cls, kind: PotentialKind, domain: PotentialDomain,
               domain_class: DomainClass, location: complex) -> BoundDipole:
        """
        Validate the pole and build the Green's handles the dipole needs.

        ``kind`` supplies strength, angle and scale.
        """
        if domain_class is DomainClass.ENTIRE:
            return cls(kind, domain, domain_class, location)

        require_inside(domain, location,
                       "The dipole must be located inside the bounded circle domain.")

        if kind.strength == 0:
            return cls(kind, domain, domain_class, location)

        if kind.scale is None:
            warnings.warn(
                f"A scale for {kind.kind_name} should be specified if there is a map "
                "to a physical domain, since the potential may otherwise be "
                "inaccurate. Scale set to 1 by default.",
                ScaleWarning,
                stacklevel=4,
            )

        if domain_class is DomainClass.SIMPLY_CONNECTED:
            return cls(kind, domain, domain_class, location)

        gx, gy = greens_derivatives(
            domain, location,
            need_x=trig_factor_nonzero(kind.angle),
            need_y=trig_factor_nonzero(kind.angle + np.pi / 2),
        )
        return cls(kind, domain, domain_class, location, gx, gy)

    @property
    def location(self) -> complex:
        return self._location

    @property
    def scale(self) -> float:
        return 1.0 if self.kind.scale is None else self.kind.scale

    @property
    def greens_x(self) -> Optional[GreensDerivative]:
        return self._greens_x

    @property
    def greens_y(self) -> Optional[GreensDerivative]:
        return self._greens_y

    def evaluate(self, z: ArrayLike) -> NDArray[np.complex128]:
        z = np.asarray(z, dtype=np.complex128)
        U = self.kind.strength
        chi = self.kind.angle
        beta = self._location

        with np.errstate(divide="ignore", invalid="ignore"):
            if self.domain_class is DomainClass.ENTIRE:
                if not is_infinite(beta):
                    return U / (z - beta) / (2 * np.pi) * np.exp(1j * chi)
                return U * np.exp(-1j * chi) / (2 * np.pi) * z

            val = np.zeros(z.shape, dtype=np.complex128)
            if U == 0:
                return val

            b = self.scale
            if self.domain_class is DomainClass.SIMPLY_CONNECTED:
                return U * b * (np.exp(1j * chi) / (z - beta)
                                + np.exp(-1j * chi) * z / (1 - np.conj(beta) * z))

            if self._greens_x is not None:
                # "Horizontal" component.
                val = val - 4 * np.pi * U * b * np.sin(chi) * self._greens_x(z)
            if self._greens_y is not None:
                # "Vertical" component.
                val = val - 4 * np.pi * U * b * np.cos(chi) * self._greens_y(z)
            return val

    def derivative(self) -> DerivativeFunction:
        U = self.kind.strength
        chi = self.kind.angle
        beta = self._location
        b = self.scale

        if self.domain_class is DomainClass.ENTIRE:
            if not is_infinite(beta):
                def dw(z):
                    return -U / (z - beta)**2 / (2 * np.pi) * np.exp(1j * chi)
            else:
                def dw(z):
                    return np.full(z.shape, U * np.exp(-1j * chi) / (2 * np.pi))

        elif U == 0:
            def dw(z):
                return np.zeros(z.shape, dtype=np.complex128)

        elif self.domain_class is DomainClass.SIMPLY_CONNECTED:
            cb = np.conj(beta)

            def dw(z):
                return U * b * (-np.exp(1j * chi) / (z - beta)**2
                                + np.exp(-1j * chi) / (1 - cb * z)**2)

        else:
            dgx = self._greens_x.derivative() if self._greens_x is not None else None
            dgy = self._greens_y.derivative() if self._greens_y is not None else None

            def dw(z):
                v = np.zeros(z.shape, dtype=np.complex128)
                if dgx is not None:
                    v = v - 4 * np.pi * U * b * np.sin(chi) * dgx(z)
                if dgy is not None:
                    v = v - 4 * np.pi * U * b * np.cos(chi) * dgy(z)
                return v

        def deval(z: ArrayLike) -> NDArray[np.complex128]:
            z = np.asarray(z, dtype=np.complex128)
            with np.errstate(divide="ignore", invalid="ignore"):
                return dw(z)

        return deval
