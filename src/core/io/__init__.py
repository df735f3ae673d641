"""IO utilities: potential case loader."""

from .case_loader import PotentialLoader

__all__ = [
    "PotentialLoader",
]
