"""
Potential domains: the entire plane and bounded circular domains.

A bounded circular domain is the unit disk with zero or more non-overlapping
circular holes. The number of holes ``m`` is the connectivity class used by the
potential contributions: ``m = 0`` is the simply connected unit disk, ``m >= 1``
is multiply connected.

Points are plain Python/numpy complex numbers. The point at infinity is
represented by ``INFINITY`` (any complex value with an infinite component is
treated as infinite).
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Union
import numpy as np
from numpy.typing import NDArray, ArrayLike

from ..errors import InvalidArgumentError


INFINITY = complex(np.inf, 0.0)

ComplexMap = Callable[[NDArray[np.complex128]], NDArray[np.complex128]]


def is_infinite(point: complex) -> bool:
    """True if ``point`` is the point at infinity."""
    return bool(np.isinf(point))


def reflect(point: complex) -> complex:
    """
    Reflection of a point in the unit circle, ``1/conj(point)``.

    The origin and the point at infinity are exchanged.
    """
    if is_infinite(point):
        return 0j
    if point == 0:
        return INFINITY
    return 1.0 / np.conj(complex(point))


def _boolean_result(mask: NDArray[np.bool_]) -> Union[bool, NDArray[np.bool_]]:
    if mask.ndim == 0:
        return bool(mask)
    return mask


class PotentialDomain(ABC):
    """
    Base class for domains a potential can live on.

    Subclasses answer membership queries and expose the connectivity count
    and the optional image of infinity used by some contributions.
    """

    @property
    @abstractmethod
    def connectivity(self) -> Optional[int]:
        """Number of holes ``m``, or None for the entire plane."""
        pass

    @property
    def inf_image(self) -> Optional[complex]:
        """Image of the point at infinity from a physical domain, if declared."""
        return None

    @abstractmethod
    def is_inside(self, z: ArrayLike) -> Union[bool, NDArray[np.bool_]]:
        """Strict interior membership test (elementwise for arrays)."""
        pass

    def map_to_unit(self, z: ArrayLike) -> NDArray[np.complex128]:
        """Map physical points to the domain the contributions live on."""
        return np.asarray(z, dtype=np.complex128)

    @property
    def connectivity_text(self) -> str:
        """Human readable connectivity ("an entire", "a 3-connected", ...)."""
        m = self.connectivity
        if m is None:
            return "an entire"
        if m == 0:
            return "a simply connected"
        return f"a {m + 1}-connected"


@dataclass(frozen=True)
class PlaneDomain(PotentialDomain):
    """The entire complex plane (every point, including infinity, is inside)."""

    @property
    def connectivity(self) -> Optional[int]:
        return None

    def is_inside(self, z: ArrayLike) -> Union[bool, NDArray[np.bool_]]:
        z = np.asarray(z, dtype=np.complex128)
        return _boolean_result(np.ones(z.shape, dtype=bool))

    def __repr__(self) -> str:
        return "PlaneDomain()"


@dataclass
class UnitDomain(PotentialDomain):
    """
    Unit disk with circular holes.

    Attributes:
        centers: Hole centers (complex), length m
        radii: Hole radii, length m
        inf_image: Image of infinity under a map from an unbounded physical
            domain (optional, must lie inside the domain)
        truncation_level: Word length at which the Schottky group products
            of the multiply connected machinery are truncated
        to_unit: Optional conformal map from the physical domain to this
            domain. Only used, never constructed, here.
    """

    centers: Sequence[complex] = ()
    radii: Sequence[float] = ()
    inf_image: Optional[complex] = None
    truncation_level: int = 5
    to_unit: Optional[ComplexMap] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        """Validate and normalize the hole geometry."""
        centers = np.asarray(self.centers, dtype=np.complex128).ravel()
        radii = np.asarray(self.radii, dtype=np.float64).ravel()

        if centers.shape != radii.shape:
            raise InvalidArgumentError(
                f"Need one radius per center, got {centers.size} centers "
                f"and {radii.size} radii"
            )
        if self.truncation_level < 1:
            raise InvalidArgumentError("truncation_level must be at least 1")
        if np.any(radii <= 0):
            raise InvalidArgumentError("Hole radii must be positive")
        if np.any(np.abs(centers) + radii >= 1.0):
            raise InvalidArgumentError("Holes must lie strictly inside the unit circle")

        for i in range(centers.size):
            for j in range(i + 1, centers.size):
                if abs(centers[i] - centers[j]) <= radii[i] + radii[j]:
                    raise InvalidArgumentError(f"Holes {i + 1} and {j + 1} overlap")

        self.centers = tuple(complex(c) for c in centers)
        self.radii = tuple(float(q) for q in radii)

        if self.inf_image is not None:
            if np.size(self.inf_image) != 1:
                raise InvalidArgumentError("inf_image must be a single point")
            self.inf_image = complex(np.asarray(self.inf_image).item())
            if not self.is_inside(self.inf_image):
                raise InvalidArgumentError("inf_image must be inside the domain")

    @property
    def connectivity(self) -> Optional[int]:
        return len(self.centers)

    @property
    def m(self) -> int:
        return len(self.centers)

    def is_inside(self, z: ArrayLike) -> Union[bool, NDArray[np.bool_]]:
        z = np.asarray(z, dtype=np.complex128)
        with np.errstate(invalid="ignore"):
            mask = np.isfinite(z) & (np.abs(z) < 1.0)
            for c, q in zip(self.centers, self.radii):
                mask &= np.abs(z - c) > q
        return _boolean_result(mask)

    def map_to_unit(self, z: ArrayLike) -> NDArray[np.complex128]:
        z = np.asarray(z, dtype=np.complex128)
        if self.to_unit is None:
            return z
        return np.asarray(self.to_unit(z), dtype=np.complex128)

    # -------------------------------------------------------------------------
    # Boundary queries
    # -------------------------------------------------------------------------

    def on_boundary(self, z: ArrayLike, tol: float = 1e-10) -> NDArray[np.int64]:
        """
        Boundary index for each point.

        Returns:
            Integer array of z's shape: -1 off the boundary, 0 on the unit
            circle, j on the circle of hole j (1-based).
        """
        z = np.asarray(z, dtype=np.complex128)
        index = np.full(z.shape, -1, dtype=np.int64)
        index[np.abs(np.abs(z) - 1.0) < tol] = 0
        for j, (c, q) in enumerate(zip(self.centers, self.radii), start=1):
            index[np.abs(np.abs(z - c) - q) < tol] = j
        return index

    def boundary_points(self, j: int, n: int = 128) -> NDArray[np.complex128]:
        """n equispaced points on boundary circle j (0 is the unit circle)."""
        if j < 0 or j > self.m:
            raise IndexError(f"Boundary {j} out of range [0, {self.m}]")
        t = np.exp(2j * np.pi * np.arange(n) / n)
        if j == 0:
            return t
        return self.centers[j - 1] + self.radii[j - 1] * t

    def __repr__(self) -> str:
        return (
            f"UnitDomain(m={self.m}, centers={list(self.centers)}, "
            f"radii={list(self.radii)}, inf_image={self.inf_image})"
        )


def unit_disk(inf_image: Optional[complex] = None,
              to_unit: Optional[ComplexMap] = None) -> UnitDomain:
    """The simply connected unit disk."""
    return UnitDomain(inf_image=inf_image, to_unit=to_unit)


def boundary_part(domain: UnitDomain,
                  f0: Callable[[NDArray], NDArray],
                  f1: Callable[[NDArray], NDArray]) -> Callable[[ArrayLike], NDArray]:
    """
    Piecewise boundary function.

    Args:
        domain: Bounded circular domain
        f0: Applied to points on the unit circle
        f1: Applied to points on the hole boundaries

    Returns:
        Callable evaluating f0/f1 on the matching boundary points and NaN
        everywhere else.
    """
    if not isinstance(domain, UnitDomain):
        raise InvalidArgumentError("First argument must be a 'UnitDomain' object.")
    if not (callable(f0) and callable(f1)):
        raise InvalidArgumentError("Expected a pair of callables following the domain.")

    def evaluate(z: ArrayLike) -> NDArray:
        z = np.asarray(z, dtype=np.complex128)
        val = np.full(z.shape, complex(np.nan, np.nan), dtype=np.complex128)
        onj = domain.on_boundary(z)
        outer = onj == 0
        val[outer] = f0(z[outer])
        inner = onj > 0
        val[inner] = f1(z[inner])
        return val

    return evaluate

