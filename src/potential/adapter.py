"""
Domain adapter shared by all contributions.

Decides which formula branch a contribution uses on a given domain and builds
the auxiliary analytic machinery of that branch (prime-function quartets or
Green's-function derivative handles for multiply connected domains).
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import Optional, Tuple
import numpy as np

from analytic import GreensDerivative, PrimeFunction, SchottkyGroup
from core.domains import PotentialDomain, UnitDomain, reflect
from core.errors import DomainBindingError, InvalidArgumentError

logger = logging.getLogger(__name__)


class DomainClass(str, Enum):
    """Connectivity class of a domain."""
    ENTIRE = "entire"
    SIMPLY_CONNECTED = "simply_connected"
    MULTIPLY_CONNECTED = "multiply_connected"


def check_domain(domain) -> PotentialDomain:
    """Reject anything that is not a PotentialDomain."""
    if not isinstance(domain, PotentialDomain):
        raise InvalidArgumentError(
            f"Expected a 'PotentialDomain' object, received a '{type(domain).__name__}' instead."
        )
    return domain


def classify(domain: PotentialDomain) -> DomainClass:
    """Connectivity class of a domain, resolved once at bind time."""
    m = check_domain(domain).connectivity
    if m is None:
        return DomainClass.ENTIRE
    if m == 0:
        return DomainClass.SIMPLY_CONNECTED
    return DomainClass.MULTIPLY_CONNECTED


def require_inside(domain: PotentialDomain, point: Optional[complex], message: str) -> complex:
    """Return ``point`` if it lies in the domain, else raise DomainBindingError."""
    if point is None or not domain.is_inside(point):
        raise DomainBindingError(message)
    return point


def prime_quartet(domain: UnitDomain, alpha: complex,
                  beta: complex) -> Tuple[PrimeFunction, PrimeFunction, PrimeFunction, PrimeFunction]:
    """
    Prime functions at a point pair and their reflections.

    Returns:
        (omega(., alpha), omega(., 1/conj(alpha)), omega(., beta),
        omega(., 1/conj(beta))), all sharing one Schottky group.
    """
    om = PrimeFunction.build(alpha, domain)
    quartet = (
        om,
        om.with_parameter(reflect(alpha)),
        om.with_parameter(beta),
        om.with_parameter(reflect(beta)),
    )
    logger.debug("Built prime-function quartet at %s, %s (%r)", alpha, beta, om.group)
    return quartet


def prime_pair(domain: UnitDomain, alpha: complex) -> Tuple[PrimeFunction, PrimeFunction]:
    """Prime functions omega(., alpha) and omega(., 1/conj(alpha))."""
    om = PrimeFunction.build(alpha, domain)
    logger.debug("Built prime-function pair at %s (%r)", alpha, om.group)
    return om, om.with_parameter(reflect(alpha))


def greens_derivatives(domain: UnitDomain, beta: complex, need_x: bool,
                       need_y: bool) -> Tuple[Optional[GreensDerivative], Optional[GreensDerivative]]:
    """
    Green's-function pole derivatives at ``beta``.

    Only the requested handles are constructed; the other is returned as None.
    """
    if not (need_x or need_y):
        return None, None
    group = SchottkyGroup.for_domain(domain)
    gx = GreensDerivative.x_derivative_at(beta, domain, group) if need_x else None
    gy = GreensDerivative.y_derivative_at(beta, domain, group) if need_y else None
    logger.debug("Built Green's derivatives at %s (x=%s, y=%s)", beta, need_x, need_y)
    return gx, gy


def trig_factor_nonzero(angle: float) -> bool:
    """
    True unless ``angle`` is within eps(pi) of a multiple of pi.

    Decides whether sin(angle) contributes; pass ``angle + pi/2`` for cos.
    """
    r = np.mod(angle, np.pi)
    return bool(min(r, np.pi - r) > np.spacing(np.pi))
