"""
Uniform flow.

In the entire plane the potential is U s e^{-i chi} z. On a bounded domain
mapped from an unbounded physical domain, uniform flow at infinity becomes a
dipole at the image of infinity, so the bound form is a dipole there.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Optional
import numpy as np
from numpy.typing import NDArray, ArrayLike

from core.domains import PotentialDomain
from core.errors import DomainBindingError
from .adapter import DomainClass
from .dipole import BoundDipole
from .kinds import BoundContribution, DerivativeFunction, PotentialKind, as_real


@dataclass(frozen=True)
class UniformFlow(PotentialKind):
    """
    Uniform flow of speed ``strength`` at angle ``angle``.

    Attributes:
        strength: Flow speed U (real)
        angle: Flow direction chi in radians
        scale: Map scale; None means not given (1 is used)
    """

    strength: float
    angle: float = 0.0
    scale: Optional[float] = None

    plane_ok: ClassVar[bool] = True

    def __post_init__(self):
        object.__setattr__(self, "strength", as_real(self.strength))
        object.__setattr__(self, "angle", as_real(self.angle, "Angle"))
        if self.scale is not None:
            object.__setattr__(self, "scale", as_real(self.scale, "Scale"))

    def _bind(self, domain: PotentialDomain, domain_class: DomainClass) -> BoundContribution:
        if domain_class is DomainClass.ENTIRE:
            return BoundUniformFlow(self, domain, domain_class)

        if domain.inf_image is None:
            raise DomainBindingError("No image of infinity from the physical domain specified.")
        return BoundDipole.create(self, domain, domain_class, domain.inf_image)


class BoundUniformFlow(BoundContribution):
    """Uniform flow in the entire plane."""

    @property
    def coefficient(self) -> complex:
        """U s e^{-i chi}, the constant complex velocity."""
        kind = self.kind
        b = 1.0 if kind.scale is None else kind.scale
        return kind.strength * b * np.exp(-1j * kind.angle)

    def evaluate(self, z: ArrayLike) -> NDArray[np.complex128]:
        z = np.asarray(z, dtype=np.complex128)
        return self.coefficient * z

    def derivative(self) -> DerivativeFunction:
        c = self.coefficient

        def deval(z: ArrayLike) -> NDArray[np.complex128]:
            z = np.asarray(z, dtype=np.complex128)
            return np.full(z.shape, c, dtype=np.complex128)

        return deval
