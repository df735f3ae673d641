"""
Field data containers for sampled potentials.

A potential sampled on a Cartesian grid gives scalar fields (velocity
potential, stream function) and a vector field (velocity). Grid points outside
the domain hold NaN.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Any, Tuple, List
import numpy as np
from numpy.typing import NDArray


@dataclass
class ScalarField:
    """
    A sampled real field (e.g. velocity potential, stream function).

    Attributes:
        data: 2D array of values (ny, nx)
        name: Field name
        XX: X-coordinate meshgrid
        YY: Y-coordinate meshgrid
    """
    data: NDArray
    name: str
    XX: Optional[NDArray] = None
    YY: Optional[NDArray] = None

    @property
    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    @property
    def min(self) -> float:
        return float(np.nanmin(self.data))

    @property
    def max(self) -> float:
        return float(np.nanmax(self.data))

    @property
    def defined(self) -> NDArray[np.bool_]:
        """Mask of grid points inside the domain."""
        return np.isfinite(self.data)

    def __repr__(self) -> str:
        if not self.defined.any():
            return f"ScalarField({self.name}, shape={self.shape}, undefined)"
        return f"ScalarField({self.name}, shape={self.shape}, range=[{self.min:.4g}, {self.max:.4g}])"


@dataclass
class VectorField:
    """
    A sampled planar vector field (velocity).

    Attributes:
        u: X-component (ny, nx)
        v: Y-component (ny, nx)
        name: Field name
        XX: X-coordinate meshgrid
        YY: Y-coordinate meshgrid
    """
    u: NDArray
    v: NDArray
    name: str
    XX: Optional[NDArray] = None
    YY: Optional[NDArray] = None

    @property
    def shape(self) -> Tuple[int, int]:
        return self.u.shape

    @property
    def magnitude(self) -> NDArray:
        """|V| = sqrt(u² + v²)."""
        return np.hypot(self.u, self.v)

    @property
    def complex(self) -> NDArray[np.complex128]:
        """u + iv, the conjugate of dW/dz."""
        return self.u + 1j * self.v

    def __repr__(self) -> str:
        return f"VectorField({self.name}, shape={self.shape})"


@dataclass
class FieldData:
    """
    Named fields sampled on one grid.

    Usage:
        fields = sample_potential(W, (-2, 2), (-1, 1), (81, 41))
        psi = fields["stream_function"]   # ScalarField
        vel = fields.velocity             # VectorField
        print(fields.available)
    """

    XX: NDArray
    YY: NDArray
    _scalars: Dict[str, ScalarField] = field(default_factory=dict)
    _vectors: Dict[str, VectorField] = field(default_factory=dict)
    _metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.XX.shape

    @property
    def resolution(self) -> Tuple[int, int]:
        ny, nx = self.XX.shape
        return (nx, ny)

    @property
    def points(self) -> NDArray[np.complex128]:
        """Grid points as complex numbers."""
        return self.XX + 1j * self.YY

    def add_scalar(self, name: str, data: NDArray) -> ScalarField:
        sf = ScalarField(data=data, name=name, XX=self.XX, YY=self.YY)
        self._scalars[name] = sf
        return sf

    def add_vector(self, name: str, u: NDArray, v: NDArray) -> VectorField:
        vf = VectorField(u=u, v=v, name=name, XX=self.XX, YY=self.YY)
        self._vectors[name] = vf
        return vf

    def __getitem__(self, name: str) -> ScalarField | VectorField:
        """Get any field by name."""
        if name in self._scalars:
            return self._scalars[name]
        if name in self._vectors:
            return self._vectors[name]
        raise KeyError(f"Field '{name}' not found. Available: {self.available}")

    def __getattr__(self, name: str) -> ScalarField | VectorField:
        """Allow attribute-style access: fields.velocity"""
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"No field named '{name}'")

    def __contains__(self, name: str) -> bool:
        return name in self._scalars or name in self._vectors

    @property
    def available(self) -> List[str]:
        """All field names."""
        return list(self._scalars.keys()) + list(self._vectors.keys())

    def set_metadata(self, key: str, value: Any):
        self._metadata[key] = value

    def get_metadata(self, key: str, default: Any = None) -> Any:
        return self._metadata.get(key, default)

    def __repr__(self) -> str:
        return f"FieldData({self.available})"
