"""
Post-processing module.

Samples complex potentials on Cartesian grids.

Key classes:
- FieldData: Container for sampled fields
- ScalarField, VectorField: Single sampled fields
- sample_potential: velocity potential, stream function and velocity of a Potential
"""

from .fields import FieldData, ScalarField, VectorField
from .sampling import sample_potential

__all__ = [
    # Field containers
    "FieldData",
    "ScalarField",
    "VectorField",
    # Sampling
    "sample_potential",
]
