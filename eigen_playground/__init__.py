"""
Eigen/SVD playground: drag points on a ring and watch a 2x2 matrix, its
eigenvectors and its singular value decomposition change together.
"""

from eigen_playground.config import PlaygroundConfig
from eigen_playground.exceptions import (
    ConfigError,
    DimensionError,
    NumericalError,
    PlaygroundError,
    SingularBasisError,
    ValidationError,
)
from eigen_playground.model import Phase, TransformModel
from eigen_playground.svd import Decomposition, decompose

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Decomposition",
    "DimensionError",
    "NumericalError",
    "Phase",
    "PlaygroundConfig",
    "PlaygroundError",
    "SingularBasisError",
    "TransformModel",
    "ValidationError",
    "decompose",
]
