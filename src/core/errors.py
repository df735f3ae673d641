"""
Error kinds raised by the potential toolkit.

Construction problems are reported as InvalidArgumentError (a ValueError),
placement problems found while binding a contribution to a domain as
DomainBindingError (a RuntimeError). Both are raised at the point of
violation; evaluation of a bound contribution never raises them.
"""


class PotentialError(Exception):
    """Base class for toolkit errors."""


class InvalidArgumentError(PotentialError, ValueError):
    """Malformed constructor input or an object of the wrong type."""


class DomainBindingError(PotentialError, RuntimeError):
    """A contribution could not be bound to a domain."""


class ScaleWarning(UserWarning):
    """A dipole was bound without a physical-map scale factor."""
