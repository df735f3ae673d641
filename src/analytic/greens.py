"""
Parameter derivatives of the Green's function with respect to the unit circle.

    G0(z, a) = 1/(2 pi i) log( omega(z, a) / (|a| omega(z, 1/conj(a))) )

Moving the pole a = x + iy gives the two directional derivatives

    dG0/dx = (A + B) / (2 pi i),     dG0/dy = (A - B) / (2 pi)

with A = d/da log omega(z, a) and B = -d/d(conj a) log omega(z, 1/conj(a)).
Both are computed from the Schottky group products in closed form. Terms that
do not depend on z are dropped, so the handles are exact up to an additive
constant and their z-derivatives are exact.
"""

from __future__ import annotations
from typing import Optional, Tuple
import numpy as np
from numpy.typing import NDArray, ArrayLike

from .schottky import SchottkyGroup


DIRECTIONS = ("x", "y")


class GreensDerivative:
    """
    Directional derivative of G0(., a) with respect to the pole a.

    Attributes:
        parameter: Pole location a (finite, inside the domain)
        direction: "x" or "y"
        order: 0 for the derivative handle itself, 1 for its z-derivative
    """

    def __init__(self, parameter: complex, direction: str, group: SchottkyGroup,
                 order: int = 0):
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction '{direction}', expected one of {DIRECTIONS}")
        if order not in (0, 1):
            raise ValueError(f"Only orders 0 and 1 are available, got {order}")

        self.parameter = complex(parameter)
        self.direction = direction
        self.group = group
        self.order = order

        a = np.array([self.parameter])
        self._theta_a = group.apply(a)[:, 0]
        self._dtheta_a = group.apply_derivative(a)[:, 0]

    @classmethod
    def x_derivative_at(cls, point: complex, domain,
                        group: Optional[SchottkyGroup] = None) -> GreensDerivative:
        """dG0/dx at the pole ``point`` of a UnitDomain."""
        return cls(point, "x", group or SchottkyGroup.for_domain(domain))

    @classmethod
    def y_derivative_at(cls, point: complex, domain,
                        group: Optional[SchottkyGroup] = None) -> GreensDerivative:
        """dG0/dy at the pole ``point`` of a UnitDomain."""
        return cls(point, "y", group or SchottkyGroup.for_domain(domain))

    def derivative(self) -> GreensDerivative:
        """Handle evaluating the z-derivative of this one."""
        if self.order == 1:
            raise ValueError("Second z-derivatives are not available")
        return GreensDerivative(self.parameter, self.direction, self.group, order=1)

    def _parts(self, z: NDArray[np.complex128]) -> Tuple[NDArray, NDArray]:
        """The A and B sums (or their z-derivatives) at flat points z."""
        g = self.group
        a = self.parameter
        s = np.conj(a)
        tz = g.apply(z)
        dtz = g.apply_derivative(z)
        ta = self._theta_a[:, None]
        dta = self._dtheta_a[:, None]
        # theta(1/s) written without dividing by s, so a = 0 is allowed
        num = (g.a + g.b * s)[:, None]
        den = (g.c + g.d * s)[:, None]

        if self.order == 0:
            A = -1.0 / (z - a) + np.sum(-1.0 / (tz - a) + dta / (ta - z), axis=0)
            B = z / (1.0 - s * z) + np.sum(
                tz / (1.0 - s * tz) + 1.0 / (den * (num - z * den)), axis=0)
        else:
            A = 1.0 / (z - a)**2 + np.sum(dtz / (tz - a)**2 + dta / (ta - z)**2, axis=0)
            B = 1.0 / (1.0 - s * z)**2 + np.sum(
                dtz / (1.0 - s * tz)**2 + 1.0 / (num - z * den)**2, axis=0)
        return A, B

    def evaluate(self, z: ArrayLike) -> NDArray[np.complex128]:
        z = np.asarray(z, dtype=np.complex128)
        with np.errstate(divide="ignore", invalid="ignore"):
            A, B = self._parts(z.ravel())
            if self.direction == "x":
                val = (A + B) / (2j * np.pi)
            else:
                val = (A - B) / (2 * np.pi)
        return val.reshape(z.shape)

    __call__ = evaluate

    def __repr__(self) -> str:
        prime = "'" if self.order else ""
        return f"GreensDerivative{prime}(d/d{self.direction} at {self.parameter})"
