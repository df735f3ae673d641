"""
Point vortices.

A vortex of circulation G at a:

    entire plane        G/(2 pi i) log(z - a)
    unit disk           G/(2 pi i) log((z - a) / (|a| (z - 1/conj a)))
    circular domain     G/(2 pi i) log(w(z, a) / (|a| w(z, 1/conj a)))

The bounded forms are G times the Green's function G0 with respect to the
unit circle, which keeps the unit circle a streamline.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple
import numpy as np
from numpy.typing import NDArray, ArrayLike

from analytic import PrimeFunction
from core.domains import PotentialDomain, is_infinite, reflect
from core.errors import InvalidArgumentError
from .adapter import DomainClass, prime_pair, require_inside
from .kinds import BoundContribution, DerivativeFunction, PointSingularity


@dataclass(frozen=True)
class PointVortex(PointSingularity):
    """
    A point vortex.

    Attributes:
        location: Vortex center (finite)
        strength: Circulation, positive counter-clockwise
    """

    plane_ok: ClassVar[bool] = True

    def __post_init__(self):
        super().__post_init__()
        if is_infinite(self.location):
            raise InvalidArgumentError("A point vortex must have a finite location.")

    def _bind(self, domain: PotentialDomain, domain_class: DomainClass) -> BoundPointVortex:
        if domain_class is DomainClass.ENTIRE:
            return BoundPointVortex(self, domain, domain_class)

        require_inside(domain, self.location,
                       "The vortex must be located inside the bounded circle domain.")
        primes = None
        if domain_class is DomainClass.MULTIPLY_CONNECTED:
            primes = prime_pair(domain, self.location)
        return BoundPointVortex(self, domain, domain_class, primes)


class BoundPointVortex(BoundContribution):
    """Point vortex bound to a domain."""

    def __init__(self, kind: PointVortex, domain: PotentialDomain,
                 domain_class: DomainClass,
                 primes: Optional[Tuple[PrimeFunction, PrimeFunction]] = None):
        super().__init__(kind, domain, domain_class)
        if domain_class is DomainClass.MULTIPLY_CONNECTED and primes is None:
            raise ValueError("Multiply connected vortices need their prime functions")
        self._primes = primes
        # |a| normalization; the pole at the origin pairs with omega(., inf)
        self._modulus = abs(kind.location) if kind.location != 0 else 1.0

    @property
    def prime_functions(self) -> Optional[Tuple[PrimeFunction, PrimeFunction]]:
        return self._primes

    def evaluate(self, z: ArrayLike) -> NDArray[np.complex128]:
        z = np.asarray(z, dtype=np.complex128)
        a = self.kind.location

        with np.errstate(divide="ignore", invalid="ignore"):
            if self.domain_class is DomainClass.ENTIRE:
                val = np.log(z - a)
            elif self.domain_class is DomainClass.SIMPLY_CONNECTED:
                if a == 0:
                    val = np.log(z)
                else:
                    val = np.log((z - a) / (abs(a) * (z - reflect(a))))
            else:
                om = self._primes
                val = np.log(om[0](z) / (self._modulus * om[1](z)))

        return self.kind.strength * val / (2j * np.pi)

    def derivative(self) -> DerivativeFunction:
        gamma = self.kind.strength / (2j * np.pi)
        a = self.kind.location

        if self.domain_class is DomainClass.ENTIRE or (
                self.domain_class is DomainClass.SIMPLY_CONNECTED and a == 0):
            def singular(z):
                return 1.0 / (z - a)
        elif self.domain_class is DomainClass.SIMPLY_CONNECTED:
            ia = reflect(a)

            def singular(z):
                return 1.0 / (z - a) - 1.0 / (z - ia)
        else:
            om = self._primes
            dom = tuple(w.derivative() for w in om)

            def singular(z):
                return dom[0](z) / om[0](z) - dom[1](z) / om[1](z)

        def deval(z: ArrayLike) -> NDArray[np.complex128]:
            z = np.asarray(z, dtype=np.complex128)
            with np.errstate(divide="ignore", invalid="ignore"):
                return gamma * singular(z)

        return deval
