"""
Exception hierarchy for the eigen/SVD playground.

Everything raised by the package inherits from PlaygroundError. The
surfaces never let these reach the user as a crash: an unstable matrix is
shown as a status message and the picture degrades instead.
"""

from __future__ import annotations

from typing import Any, Sequence


class PlaygroundError(Exception):
    """Base exception for all playground errors."""
    pass


class ConfigError(PlaygroundError):
    """
    A configuration value is out of range.

    Attributes:
        field: Name of the offending setting
        value: The rejected value
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class ValidationError(PlaygroundError):
    """Caller passed an argument the model cannot use."""
    pass


class DimensionError(ValidationError):
    """A matrix or vector does not have the expected 2D shape."""
    pass


class NumericalError(PlaygroundError):
    """Numerical computation produced or received a non-finite result."""
    pass


class SingularBasisError(NumericalError):
    """
    The two selected eigenvectors are linearly dependent.

    Rebuilding A from such a pair divides by the pair determinant, which
    is (numerically) zero.

    Attributes:
        determinant: The pair determinant u1*v2 - u2*v1
        indices: The selected sample indices
    """

    def __init__(
        self,
        message: str,
        determinant: float | None = None,
        indices: Sequence[int] | None = None,
    ):
        super().__init__(message)
        self.determinant = determinant
        self.indices = tuple(indices) if indices is not None else None
