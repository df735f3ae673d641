"""
Sources, sinks and source/sink pairs.

Potential of a pair with strength k, source at a and sink at b:

    entire plane        k/(2 pi) (log(z - a) - log(z - b))
    unit disk           k/(2 pi) log((z - a)(z - 1/conj a) / ((z - b)(z - 1/conj b)))
    circular domain     k/(2 pi) log(w1 w2 / (w3 w4))

with w1..w4 the prime functions at a, 1/conj a, b, 1/conj b. The complex
velocity is always built from the logarithmic derivatives of the factors,
never by differentiating the logarithm of the product.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple
import numpy as np
from numpy.typing import NDArray, ArrayLike

from analytic import PrimeFunction
from core.domains import INFINITY, PotentialDomain, is_infinite, reflect
from core.errors import DomainBindingError, InvalidArgumentError
from .adapter import DomainClass, prime_quartet, require_inside
from .kinds import BoundContribution, DerivativeFunction, PointSingularity, as_point


@dataclass(frozen=True)
class SourceSinkPair(PointSingularity):
    """
    A point source and a point sink of equal and opposite strength.

    The source sits at ``location`` and the sink at ``opposite``; a negative
    strength swaps the roles. Without an opposite point the pair is a lone
    source (or sink), which is only meaningful in the entire plane.

    Attributes:
        location: Source point
        strength: Real strength of the pair
        opposite: Sink point (None for a lone source)
    """

    opposite: Optional[complex] = None

    plane_ok: ClassVar[bool] = True

    def __post_init__(self):
        super().__post_init__()
        if self.opposite is not None:
            object.__setattr__(
                self, "opposite", as_point(self.opposite, "Sink location (opposite)"))
        if is_infinite(self.location) and (self.opposite is None or is_infinite(self.opposite)):
            raise InvalidArgumentError("At least one point of the pair must be finite.")

    def _bind(self, domain: PotentialDomain, domain_class: DomainClass) -> BoundSourceSinkPair:
        return BoundSourceSinkPair.create(self, domain, domain_class, self.location, self.opposite)


@dataclass(frozen=True)
class Source(PointSingularity):
    """
    A point source balanced by a sink at the domain's image of infinity.

    The opposite point is taken from ``domain.inf_image``, the image of the
    point at infinity under a map from an unbounded physical domain. Binding
    fails if the domain declares none.
    """

    def _bind(self, domain: PotentialDomain, domain_class: DomainClass) -> BoundSourceSinkPair:
        if domain.inf_image is None:
            raise DomainBindingError("No image of infinity from the physical domain specified.")
        return BoundSourceSinkPair.create(self, domain, domain_class, self.location, domain.inf_image)


class BoundSourceSinkPair(BoundContribution):
    """Source/sink pair bound to a domain."""

    def __init__(self, kind: PointSingularity, domain: PotentialDomain,
                 domain_class: DomainClass, alpha: complex, beta: complex,
                 primes: Optional[Tuple[PrimeFunction, ...]] = None):
        super().__init__(kind, domain, domain_class)
        if domain_class is DomainClass.MULTIPLY_CONNECTED and primes is None:
            raise ValueError("Multiply connected pairs need their prime functions")
        self._alpha = alpha
        self._beta = beta
        self._primes = primes

    @classmethod
    def create(cls, kind: PointSingularity, domain: PotentialDomain,
               domain_class: DomainClass, alpha: complex,
               beta: Optional[complex]) -> BoundSourceSinkPair:
        """Validate the points against the domain and build the bound pair."""
        if domain_class is DomainClass.ENTIRE:
            return cls(kind, domain, domain_class, alpha, INFINITY if beta is None else beta)

        require_inside(domain, alpha, "The source point must be in the bounded unit domain.")
        require_inside(domain, beta, "The sink point must be in the bounded unit domain.")

        primes = None
        if domain_class is DomainClass.MULTIPLY_CONNECTED:
            primes = prime_quartet(domain, alpha, beta)
        return cls(kind, domain, domain_class, alpha, beta, primes)

    @property
    def source(self) -> complex:
        return self._alpha

    @property
    def sink(self) -> complex:
        return self._beta

    @property
    def prime_functions(self) -> Optional[Tuple[PrimeFunction, ...]]:
        return self._primes

    def evaluate(self, z: ArrayLike) -> NDArray[np.complex128]:
        z = np.asarray(z, dtype=np.complex128)
        a, b = self._alpha, self._beta

        with np.errstate(divide="ignore", invalid="ignore"):
            if self.domain_class is DomainClass.ENTIRE:
                if not is_infinite(a):
                    val = np.log(z - a)
                    if not is_infinite(b):
                        val = val - np.log(z - b)
                else:
                    val = -np.log(z - b)
            elif self.domain_class is DomainClass.SIMPLY_CONNECTED:
                if a == 0:
                    val = np.log(z / (z - b) / (z - reflect(b)))
                elif b == 0:
                    val = np.log((z - a) * (z - reflect(a)) / z)
                else:
                    val = np.log((z - a) * (z - reflect(a)) / (z - b) / (z - reflect(b)))
            else:
                om = self._primes
                val = np.log(om[0](z) * om[1](z) / om[2](z) / om[3](z))

        return self.kind.strength * val / (2 * np.pi)

    def derivative(self) -> DerivativeFunction:
        kappa = self.kind.strength / (2 * np.pi)
        a, b = self._alpha, self._beta

        if self.domain_class is DomainClass.ENTIRE:
            if not is_infinite(a):
                if not is_infinite(b):
                    def singular(z):
                        return 1.0 / (z - a) - 1.0 / (z - b)
                else:
                    def singular(z):
                        return 1.0 / (z - a)
            else:
                def singular(z):
                    return -1.0 / (z - b)

        elif self.domain_class is DomainClass.SIMPLY_CONNECTED:
            if a == 0:
                ib = reflect(b)

                def singular(z):
                    return 1.0 / z - 1.0 / (z - b) - 1.0 / (z - ib)
            elif b == 0:
                ia = reflect(a)

                def singular(z):
                    return 1.0 / (z - a) + 1.0 / (z - ia) - 1.0 / z
            else:
                ia, ib = reflect(a), reflect(b)

                def singular(z):
                    return (1.0 / (z - a) + 1.0 / (z - ia)
                            - 1.0 / (z - b) - 1.0 / (z - ib))

        else:
            om = self._primes
            dom = tuple(w.derivative() for w in om)

            def singular(z):
                return (dom[0](z) / om[0](z) + dom[1](z) / om[1](z)
                        - dom[2](z) / om[2](z) - dom[3](z) / om[3](z))

        def deval(z: ArrayLike) -> NDArray[np.complex128]:
            z = np.asarray(z, dtype=np.complex128)
            with np.errstate(divide="ignore", invalid="ignore"):
                return kappa * singular(z)

        return deval
