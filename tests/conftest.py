"""
pytest configuration and shared fixtures.
"""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from eigen_playground.config import PlaygroundConfig
from eigen_playground.model import TransformModel


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def model():
    """Fresh model with the default configuration (reject policy)."""
    return TransformModel()


@pytest.fixture
def propagating_model():
    """Model that accepts parallel eigenvectors and lets A blow up."""
    return TransformModel(PlaygroundConfig(singular_policy="propagate"))


@pytest.fixture
def eigen_model(model):
    """V[0] = (50, 0) and V[4] = (0, 50) selected, eigenvalues (2, 3), ticked."""
    model.select_basis_vector(0)
    model.select_basis_vector(4)
    model.set_eigenvalue(0, 2.0)
    model.set_eigenvalue(1, 3.0)
    model.tick()
    return model
