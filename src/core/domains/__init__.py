"""Plane and bounded circular domains."""

from .domain import (
    INFINITY,
    PotentialDomain,
    PlaneDomain,
    UnitDomain,
    unit_disk,
    boundary_part,
    is_infinite,
    reflect,
)

__all__ = [
    "INFINITY",
    "PotentialDomain",
    "PlaneDomain",
    "UnitDomain",
    "unit_disk",
    "boundary_part",
    "is_infinite",
    "reflect",
]
