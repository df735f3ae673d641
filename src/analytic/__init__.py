"""
Analytic building blocks for multiply connected circular domains.

Key classes:
- SchottkyGroup: truncated group of Mobius maps generated by the hole circles
- PrimeFunction: Schottky-Klein prime function handle
- GreensDerivative: pole derivatives of the Green's function G0
"""

from .schottky import SchottkyGroup, DEFAULT_LEVEL
from .prime import PrimeFunction, PrimeDerivative
from .greens import GreensDerivative

__all__ = [
    "SchottkyGroup",
    "DEFAULT_LEVEL",
    "PrimeFunction",
    "PrimeDerivative",
    "GreensDerivative",
]
