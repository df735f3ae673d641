"""Domains, configuration, case loading and error kinds."""

from .errors import (
    PotentialError,
    InvalidArgumentError,
    DomainBindingError,
    ScaleWarning,
)

__all__ = [
    "PotentialError",
    "InvalidArgumentError",
    "DomainBindingError",
    "ScaleWarning",
]
