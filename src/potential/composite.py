"""
Complex potential assembled from contributions.

    W = Potential(domain, SourceSinkPair(0.3j, 1.0, opposite=-0.4),
                  PointVortex(0.2, 2.0))
    values = W(z)
    dW = W.diff()
    velocity = np.conj(dW(z))

The potential is the plain sum of its contributions, evaluated in the order
they were given.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple, Union
import numpy as np
from numpy.typing import NDArray, ArrayLike

from core.domains import PlaneDomain, PotentialDomain
from core.errors import InvalidArgumentError
from .kinds import BoundContribution, DerivativeFunction
from .source import Source, SourceSinkPair
from .dipole import Dipole
from .vortex import PointVortex
from .uniform import UniformFlow


Contribution = Union[SourceSinkPair, Source, Dipole, PointVortex, UniformFlow]

CONTRIBUTION_TYPES = (SourceSinkPair, Source, Dipole, PointVortex, UniformFlow)


def _shaped(val: NDArray[np.complex128]) -> Union[NDArray[np.complex128], np.complex128]:
    """Scalars in, scalars out."""
    return val[()] if val.ndim == 0 else val


class Potential:
    """
    Complex potential on a domain.

    Contributions are bound to the domain here, in the order given. With no
    arguments the potential lives on the entire plane and has no
    contributions; evaluating a potential without contributions gives NaN.

    Args:
        domain: A PotentialDomain
        *contributions: Unbound contribution descriptions

    Raises:
        InvalidArgumentError: wrong argument types, or a kind that makes no
            sense in the entire plane
        DomainBindingError: a contribution could not be placed in the domain
    """

    def __init__(self, domain: Optional[PotentialDomain] = None, *contributions: Contribution):
        if domain is None and not contributions:
            domain = PlaneDomain()

        if not isinstance(domain, PotentialDomain):
            raise InvalidArgumentError(
                "First argument must be a 'PotentialDomain' object.")

        bound: List[BoundContribution] = []
        for i, kind in enumerate(contributions):
            if not isinstance(kind, CONTRIBUTION_TYPES):
                raise InvalidArgumentError(
                    f'Expected a potential contribution as argument in position {i + 2}.\n'
                    f'Received a "{type(kind).__name__}" instead.'
                )
            bound.append(kind.bind(domain))

        self._domain = domain
        self._contributions: Tuple[BoundContribution, ...] = tuple(bound)

    @property
    def domain(self) -> PotentialDomain:
        return self._domain

    @property
    def unit_domain(self) -> PotentialDomain:
        """Domain the contributions live in (same object, points are mapped into it)."""
        return self._domain

    @property
    def contributions(self) -> Tuple[BoundContribution, ...]:
        """Bound contributions in evaluation order."""
        return self._contributions

    @property
    def kinds(self) -> Tuple[Contribution, ...]:
        """Unbound descriptions in evaluation order."""
        return tuple(c.kind for c in self._contributions)

    def evaluate(self, z: ArrayLike) -> Union[NDArray[np.complex128], np.complex128]:
        """
        Evaluate the potential.

        Args:
            z: Points of the physical domain (any shape)

        Returns:
            Complex values of z's shape
        """
        z = np.asarray(z, dtype=np.complex128)
        if not self._contributions:
            return _shaped(np.full(z.shape, complex(np.nan, np.nan), dtype=np.complex128))

        zeta = self._domain.map_to_unit(z)
        val = np.zeros(z.shape, dtype=np.complex128)
        for contribution in self._contributions:
            val = val + contribution.evaluate(zeta)
        return _shaped(val)

    __call__ = evaluate

    def diff(self) -> PotentialDerivative:
        """First order derivative of the potential."""
        return PotentialDerivative(self._domain, self._contributions)

    def describe(self) -> str:
        """Summary of the domain and the contribution kinds."""
        lines = [f"potential is a complex potential on {self._domain.connectivity_text} domain"]
        if self._contributions:
            lines.append("")
            lines.append("  contributions to the potential are of kind")
            for c in self._contributions:
                lines.append(f"    {c.kind.kind_name}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        names = [c.kind.kind_name for c in self._contributions]
        return f"Potential({self._domain!r}, {names})"


class PotentialDerivative:
    """
    dW/dzeta of a Potential.

    The derivative functions of all contributions are composed once, when the
    object is created, and summed pointwise on every call.
    """

    def __init__(self, domain: PotentialDomain, contributions: Sequence[BoundContribution]):
        self._domain = domain
        self._functions: Tuple[DerivativeFunction, ...] = tuple(
            c.derivative() for c in contributions)

    @property
    def domain(self) -> PotentialDomain:
        return self._domain

    def evaluate(self, z: ArrayLike) -> Union[NDArray[np.complex128], np.complex128]:
        z = np.asarray(z, dtype=np.complex128)
        if not self._functions:
            return _shaped(np.full(z.shape, complex(np.nan, np.nan), dtype=np.complex128))

        zeta = self._domain.map_to_unit(z)
        val = np.zeros(z.shape, dtype=np.complex128)
        for f in self._functions:
            val = val + f(zeta)
        return _shaped(val)

    __call__ = evaluate

    def velocity(self, z: ArrayLike) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Velocity components (u, v) from u - iv = dW/dz."""
        dw = np.asarray(self.evaluate(z))
        return dw.real, -dw.imag

    def __repr__(self) -> str:
        return f"PotentialDerivative({self._domain!r}, terms={len(self._functions)})"
