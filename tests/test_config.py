"""
Tests for PlaygroundConfig validation and the exception hierarchy.
"""

import pytest

from eigen_playground.config import BASES, HIT_RADIUS, N_SAMPLES, NORM, PlaygroundConfig
from eigen_playground.exceptions import (
    ConfigError,
    DimensionError,
    NumericalError,
    PlaygroundError,
    SingularBasisError,
    ValidationError,
)


class TestConfig:

    def test_defaults(self):
        config = PlaygroundConfig().validate()
        assert config.norm == NORM == 50.0
        assert config.n_samples == N_SAMPLES == 16
        assert config.bases == BASES == (0, 12)
        assert config.hit_radius == HIT_RADIUS == 5.0
        assert config.singular_policy == "reject"

    def test_frozen(self):
        config = PlaygroundConfig()
        with pytest.raises(AttributeError):
            config.norm = 10.0

    @pytest.mark.parametrize("kwargs,field", [
        (dict(norm=-1.0), "norm"),
        (dict(n_samples=1), "n_samples"),
        (dict(bases=(3, 3)), "bases"),
        (dict(bases=(0, 16)), "bases"),
        (dict(hit_radius=0.0), "hit_radius"),
        (dict(singular_tol=-1e-3), "singular_tol"),
        (dict(singular_policy="clamp"), "singular_policy"),
    ])
    def test_invalid_values(self, kwargs, field):
        with pytest.raises(ConfigError) as excinfo:
            PlaygroundConfig(**kwargs).validate()
        assert excinfo.value.field == field

    def test_custom_ring_size(self):
        config = PlaygroundConfig(n_samples=8, bases=(0, 6)).validate()
        assert config.bases == (0, 6)


class TestExceptions:

    @pytest.mark.parametrize("exc", [
        ConfigError, ValidationError, DimensionError, NumericalError, SingularBasisError,
    ])
    def test_all_are_playground_errors(self, exc):
        with pytest.raises(PlaygroundError):
            raise exc("boom")

    def test_dimension_error_is_validation_error(self):
        assert issubclass(DimensionError, ValidationError)

    def test_singular_basis_error_attributes(self):
        e = SingularBasisError("dependent", determinant=0.0, indices=[2, 10])
        assert e.determinant == 0.0
        assert e.indices == (2, 10)
        assert str(e) == "dependent"

    def test_singular_basis_error_defaults(self):
        e = SingularBasisError("dependent")
        assert e.determinant is None
        assert e.indices is None

    def test_config_error_attributes(self):
        e = ConfigError("bad", field="norm", value=-1)
        assert (e.field, e.value) == ("norm", -1)
