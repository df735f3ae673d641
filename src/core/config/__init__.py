"""Configuration schemas for validation."""

from .schemas import (
    DomainType,
    ContributionKind,
    DomainConfig,
    ContributionConfig,
    SamplingConfig,
    PotentialConfig,
    to_complex,
)

__all__ = [
    "DomainType",
    "ContributionKind",
    "DomainConfig",
    "ContributionConfig",
    "SamplingConfig",
    "PotentialConfig",
    "to_complex",
]
