"""
Complex potentials built from elementary singularities.

Key classes:
- Potential: sum of contributions bound to one domain
- PotentialDerivative: its first derivative
- SourceSinkPair, Source, Dipole, PointVortex, UniformFlow: contribution kinds
- DomainClass: entire plane, simply or multiply connected
"""

from .adapter import DomainClass, classify
from .kinds import PotentialKind, PointSingularity, BoundContribution
from .source import SourceSinkPair, Source, BoundSourceSinkPair
from .dipole import Dipole, BoundDipole
from .vortex import PointVortex, BoundPointVortex
from .uniform import UniformFlow, BoundUniformFlow
from .composite import Potential, PotentialDerivative, Contribution, CONTRIBUTION_TYPES

__all__ = [
    # Domain classes
    "DomainClass",
    "classify",
    # Base classes
    "PotentialKind",
    "PointSingularity",
    "BoundContribution",
    # Contribution kinds
    "SourceSinkPair",
    "Source",
    "Dipole",
    "PointVortex",
    "UniformFlow",
    "Contribution",
    "CONTRIBUTION_TYPES",
    # Bound forms
    "BoundSourceSinkPair",
    "BoundDipole",
    "BoundPointVortex",
    "BoundUniformFlow",
    # Composite
    "Potential",
    "PotentialDerivative",
]
