"""
Schottky group of a bounded circular domain.

For a unit disk with holes of centers delta_j and radii q_j the generators are

    theta_j(z) = delta_j + q_j**2 z / (1 - conj(delta_j) z)

i.e. reflection in the unit circle followed by reflection in circle j.
The group is enumerated as reduced words in the generators and their inverses
up to a truncation level. Only one element of each {theta, theta^-1} pair is
kept, which is all the product formula for the prime function needs.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple
import numpy as np
from numpy.typing import NDArray, ArrayLike


DEFAULT_LEVEL = 5

Word = Tuple[int, ...]


def _generator(center: complex, radius: float) -> NDArray[np.complex128]:
    """SL(2) matrix of theta_j (the raw matrix has determinant q_j**2)."""
    m = np.array([
        [radius**2 - abs(center)**2, center],
        [-np.conj(center), 1.0],
    ], dtype=np.complex128)
    return m / radius


def _inverse(m: NDArray[np.complex128]) -> NDArray[np.complex128]:
    """Inverse of an SL(2) matrix."""
    return np.array([[m[1, 1], -m[0, 1]], [-m[1, 0], m[0, 0]]], dtype=np.complex128)


def _inverse_word(word: Word) -> Word:
    return tuple(-letter for letter in reversed(word))


class SchottkyGroup:
    """
    Truncated Schottky group of a circular domain.

    Letters j and -j stand for theta_j and its inverse. Words are reduced
    (no letter followed by its inverse) and at most ``level`` letters long.

    Attributes:
        centers: Hole centers
        radii: Hole radii
        level: Maximum word length
        words: Representative words, one per inverse pair
    """

    def __init__(self, centers: Sequence[complex], radii: Sequence[float],
                 level: int = DEFAULT_LEVEL):
        if level < 0:
            raise ValueError(f"Truncation level must be non-negative, got {level}")

        self.centers = tuple(complex(c) for c in centers)
        self.radii = tuple(float(q) for q in radii)
        self.level = int(level)

        generators: Dict[int, NDArray[np.complex128]] = {}
        for j, (c, q) in enumerate(zip(self.centers, self.radii), start=1):
            generators[j] = _generator(c, q)
            generators[-j] = _inverse(generators[j])

        words: List[Word] = []
        matrices: List[NDArray[np.complex128]] = []

        frontier = [((letter,), generators[letter]) for letter in sorted(generators)]
        for _ in range(self.level):
            next_frontier = []
            for word, mat in frontier:
                if word < _inverse_word(word):
                    words.append(word)
                    matrices.append(mat)
                if len(word) == self.level:
                    continue
                for letter in sorted(generators):
                    if letter == -word[-1]:
                        continue
                    next_frontier.append((word + (letter,), mat @ generators[letter]))
            frontier = next_frontier

        self.words = tuple(words)
        if matrices:
            stacked = np.stack(matrices)
        else:
            stacked = np.zeros((0, 2, 2), dtype=np.complex128)

        self.a = stacked[:, 0, 0]
        self.b = stacked[:, 0, 1]
        self.c = stacked[:, 1, 0]
        self.d = stacked[:, 1, 1]

    @classmethod
    def for_domain(cls, domain, level: Optional[int] = None) -> SchottkyGroup:
        """Group of a UnitDomain (uses the domain's truncation level by default)."""
        if level is None:
            level = getattr(domain, "truncation_level", DEFAULT_LEVEL)
        return cls(domain.centers, domain.radii, level)

    @property
    def size(self) -> int:
        """Number of representative elements."""
        return len(self.words)

    @property
    def m(self) -> int:
        return len(self.centers)

    def apply(self, z: ArrayLike) -> NDArray[np.complex128]:
        """
        Apply every representative element to every point.

        Args:
            z: Points, shape (N,)

        Returns:
            Array of shape (K, N) with theta_k(z_n)
        """
        z = np.asarray(z, dtype=np.complex128)
        return (self.a[:, None] * z + self.b[:, None]) / (self.c[:, None] * z + self.d[:, None])

    def apply_derivative(self, z: ArrayLike) -> NDArray[np.complex128]:
        """theta_k'(z_n) = 1/(c z + d)**2 for the SL(2) representatives, shape (K, N)."""
        z = np.asarray(z, dtype=np.complex128)
        return 1.0 / (self.c[:, None] * z + self.d[:, None])**2

    def __repr__(self) -> str:
        return f"SchottkyGroup(m={self.m}, level={self.level}, size={self.size})"
