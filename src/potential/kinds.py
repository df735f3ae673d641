"""
Potential kinds: unbound descriptions and their bound counterparts.

A contribution is described first (location, strength and kind-specific
parameters, validated on construction) and then bound to a domain:

    pair = SourceSinkPair(0.2 + 0.1j, strength=1.0, opposite=-0.3j)
    bound = pair.bind(domain)
    values = bound.evaluate(z)

Descriptions are immutable and have no evaluation methods, so nothing can be
evaluated before it is bound. Bound contributions keep the domain class and
all auxiliary analytic state fixed from construction on.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Callable, ClassVar, Dict
import numpy as np
from numpy.typing import NDArray, ArrayLike

from core.domains import PotentialDomain
from core.errors import InvalidArgumentError
from .adapter import DomainClass, classify

logger = logging.getLogger(__name__)

DerivativeFunction = Callable[[ArrayLike], NDArray[np.complex128]]


def as_point(value: Any, what: str = "Location") -> complex:
    """A single (possibly infinite) complex point, or InvalidArgumentError."""
    arr = np.asarray(value)
    if arr.size != 1 or not np.issubdtype(arr.dtype, np.number):
        raise InvalidArgumentError(f"{what} must be a single point.")
    return complex(arr.item())


def as_real(value: Any, what: str = "Strength") -> float:
    """A real scalar, or InvalidArgumentError (complex values are rejected)."""
    arr = np.asarray(value)
    if arr.size != 1 or not np.issubdtype(arr.dtype, np.number):
        raise InvalidArgumentError(f"{what} must be a real scalar.")
    item = arr.item()
    if np.imag(item) != 0:
        raise InvalidArgumentError(f"{what} must be a real scalar.")
    return float(np.real(item))


class PotentialKind(ABC):
    """
    Base class for contributions to a complex potential.

    Subclasses are frozen dataclasses. ``plane_ok`` declares whether the kind
    makes sense in the entire plane.
    """

    plane_ok: ClassVar[bool] = False

    @property
    def kind_name(self) -> str:
        return self.__class__.__name__

    def bind(self, domain: PotentialDomain) -> BoundContribution:
        """
        Validate the contribution against ``domain`` and build its bound form.

        Raises:
            InvalidArgumentError: ``domain`` is not a domain, or the kind is
                not admissible in the entire plane
            DomainBindingError: placement or domain metadata is invalid
        """
        domain_class = classify(domain)
        if domain_class is DomainClass.ENTIRE and not self.plane_ok:
            raise InvalidArgumentError(
                f'Potential contribution "{self.kind_name}" makes no sense in the entire plane.'
            )
        bound = self._bind(domain, domain_class)
        logger.debug("Bound %s (%s) on %s domain", self.kind_name, domain_class.value,
                     domain.connectivity_text)
        return bound

    @abstractmethod
    def _bind(self, domain: PotentialDomain, domain_class: DomainClass) -> BoundContribution:
        """Kind-specific binding for a validated domain class."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary of the description, including its kind."""
        data = {"kind": self.kind_name}
        for f in fields(self):
            data[f.name] = getattr(self, f.name)
        return data


@dataclass(frozen=True)
class PointSingularity(PotentialKind):
    """
    A contribution located at a single point.

    Attributes:
        location: Position of the singularity (complex)
        strength: Real strength
    """

    location: complex
    strength: float

    def __post_init__(self):
        object.__setattr__(self, "location", as_point(self.location))
        object.__setattr__(self, "strength", as_real(self.strength))


class BoundContribution(ABC):
    """
    A contribution bound to a domain.

    Evaluation never fails for domain-validity reasons; evaluating exactly at
    a singular point gives IEEE inf/NaN.
    """

    def __init__(self, kind: PotentialKind, domain: PotentialDomain,
                 domain_class: DomainClass):
        self._kind = kind
        self._domain = domain
        self._domain_class = domain_class

    @property
    def kind(self) -> PotentialKind:
        """The unbound description this contribution was built from."""
        return self._kind

    @property
    def domain(self) -> PotentialDomain:
        return self._domain

    @property
    def domain_class(self) -> DomainClass:
        return self._domain_class

    @abstractmethod
    def evaluate(self, z: ArrayLike) -> NDArray[np.complex128]:
        """Potential values at points of the unit domain."""
        pass

    @abstractmethod
    def derivative(self) -> DerivativeFunction:
        """Function evaluating dW/dz, composed once and reusable."""
        pass

    def __call__(self, z: ArrayLike) -> NDArray[np.complex128]:
        return self.evaluate(z)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._kind!r}, {self._domain_class.value})"
