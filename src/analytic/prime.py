"""
Schottky-Klein prime function of a bounded circular domain.

Uses the classical product over the Schottky group (one element of each
inverse pair, excluding the identity):

    omega(z, a) = (z - a) * prod_theta (theta(z) - a)(theta(a) - z)
                                       / ((theta(z) - z)(theta(a) - a))

The product is truncated at the group's word length, so the result is exact
for the simply connected disk (empty product, omega = z - a) and converges
geometrically in the level otherwise.

A parameter at infinity is supported through the normalized limit
omega(z, a) / (-a) as a -> infinity, which is defined up to a multiplicative
constant. Every potential built on it is therefore defined up to an additive
constant, which does not affect velocities.
"""

from __future__ import annotations
from typing import Optional
import numpy as np
from numpy.typing import NDArray, ArrayLike

from .schottky import SchottkyGroup


class PrimeFunction:
    """
    Prime function omega(., parameter) as an evaluable handle.

    Usage:
        om = PrimeFunction.build(alpha, domain)
        om_image = om.with_parameter(1/np.conj(alpha))   # shares the group
        values = om(z)
        d_om = om.derivative()
    """

    def __init__(self, parameter: complex, group: SchottkyGroup):
        self.parameter = complex(parameter)
        self.group = group

        if not self.at_infinity:
            a = np.array([self.parameter])
            self._theta_a = group.apply(a)[:, 0]
            self._dtheta_a = group.apply_derivative(a)[:, 0]
        else:
            # theta(inf) = a/c, undefined for elements fixing infinity
            finite = np.abs(group.c) > 0
            self._fixes_infinity = ~finite
            self._theta_inf = np.zeros(group.size, dtype=np.complex128)
            self._theta_inf[finite] = group.a[finite] / group.c[finite]

    @classmethod
    def build(cls, parameter: complex, domain, level: Optional[int] = None) -> PrimeFunction:
        """Prime function of a UnitDomain with the given parameter point."""
        return cls(parameter, SchottkyGroup.for_domain(domain, level))

    def with_parameter(self, parameter: complex) -> PrimeFunction:
        """Prime function of the same domain for another parameter point."""
        return PrimeFunction(parameter, self.group)

    @property
    def at_infinity(self) -> bool:
        return bool(np.isinf(self.parameter))

    def evaluate(self, z: ArrayLike) -> NDArray[np.complex128]:
        z = np.asarray(z, dtype=np.complex128)
        flat = z.ravel()
        tz = self.group.apply(flat)

        with np.errstate(divide="ignore", invalid="ignore"):
            if self.at_infinity:
                num = np.ones_like(tz)
                live = ~self._fixes_infinity
                num[live] = self._theta_inf[live, None] - flat
                val = np.prod(num / (tz - flat), axis=0)
            else:
                a = self.parameter
                ta = self._theta_a[:, None]
                factors = (tz - a) * (ta - flat) / ((tz - flat) * (ta - a))
                val = (flat - a) * np.prod(factors, axis=0)

        return val.reshape(z.shape)

    __call__ = evaluate

    def log_derivative(self, z: ArrayLike) -> NDArray[np.complex128]:
        """omega'(z)/omega(z), summed factor by factor."""
        z = np.asarray(z, dtype=np.complex128)
        flat = z.ravel()
        tz = self.group.apply(flat)
        dtz = self.group.apply_derivative(flat)

        with np.errstate(divide="ignore", invalid="ignore"):
            terms = -(dtz - 1.0) / (tz - flat)
            if self.at_infinity:
                live = ~self._fixes_infinity
                terms[live] -= 1.0 / (self._theta_inf[live, None] - flat)
                val = np.sum(terms, axis=0)
            else:
                a = self.parameter
                terms += dtz / (tz - a) - 1.0 / (self._theta_a[:, None] - flat)
                val = 1.0 / (flat - a) + np.sum(terms, axis=0)

        return val.reshape(z.shape)

    def derivative(self) -> PrimeDerivative:
        """Handle evaluating d omega/dz."""
        return PrimeDerivative(self)

    def __repr__(self) -> str:
        return f"PrimeFunction(parameter={self.parameter}, {self.group!r})"


class PrimeDerivative:
    """First derivative of a prime function with respect to z."""

    def __init__(self, prime: PrimeFunction):
        self.prime = prime

    def evaluate(self, z: ArrayLike) -> NDArray[np.complex128]:
        with np.errstate(invalid="ignore"):
            return self.prime.evaluate(z) * self.prime.log_derivative(z)

    __call__ = evaluate

    def __repr__(self) -> str:
        return f"PrimeDerivative({self.prime!r})"
