# freefall/core/exceptions.py
"""
Error taxonomy for the freefall package.

Exports:
    - FreefallError: Base class for every error raised by the package.
    - InvalidDomain: An input lies outside the region where the physics is defined.
    - LowConfidenceWarning: A numerical search stopped before reaching its tolerance.
"""

__all__ = [
    "FreefallError",
    "InvalidDomain",
    "LowConfidenceWarning",
]


class FreefallError(Exception):
    """Base class for freefall errors."""


class InvalidDomain(FreefallError, ValueError):
    """
    Raised when an input is outside the physically valid domain, e.g. a radial
    coordinate inside the Schwarzschild radius or a fall whose peak is not
    above its end point.
    """


class LowConfidenceWarning(RuntimeWarning):
    """
    Emitted when a bisection exhausts its iteration budget before the bracket
    shrinks below tolerance. The returned value is a best estimate only, and
    error can compound through chained inversions.
    """
