"""
Tests for TransformModel: sample ring, selection, eigen rebuild, basis
columns, decomposition snapshots and reset.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from eigen_playground.config import PlaygroundConfig
from eigen_playground.exceptions import (
    ConfigError,
    SingularBasisError,
    ValidationError,
)
from eigen_playground.model import BASIS, EIGEN, Phase, TransformModel, sample_ring


class TestInitialState:

    def test_sixteen_samples_on_ring(self, model):
        assert model.samples.shape == (16, 2)
        assert_allclose(np.hypot(model.samples[:, 0], model.samples[:, 1]), 50.0)

    def test_sample_positions(self, model):
        assert_allclose(model.samples[0], [50.0, 0.0], atol=1e-12)
        assert_allclose(model.samples[4], [0.0, 50.0], atol=1e-12)
        assert_allclose(model.samples[8], [-50.0, 0.0], atol=1e-12)
        assert_allclose(model.samples[12], [0.0, -50.0], atol=1e-12)

    def test_samples_read_only(self, model):
        with pytest.raises(ValueError):
            model.samples[0, 0] = 1.0

    def test_identity_and_defaults(self, model):
        assert_allclose(model.A, np.eye(2))
        assert model.selection == []
        assert model.eigenvalues == [1.0, 1.0]
        assert model.locked == [False, False]
        assert model.drag_target is None
        assert model.phase is Phase.EMPTY
        assert not model.unstable

    def test_initial_decomposition(self, model):
        assert_allclose(model.decomposition.s, [1.0, 1.0])

    def test_bad_config_rejected(self):
        with pytest.raises(ConfigError):
            TransformModel(PlaygroundConfig(norm=0.0))

    def test_sample_ring_helper(self):
        ring = sample_ring(2.0, 4)
        assert_allclose(ring, [[2, 0], [0, 2], [-2, 0], [0, -2]], atol=1e-12)


class TestSelection:

    def test_grows_to_two(self, model):
        assert model.select_basis_vector(3)
        assert model.phase is Phase.ONE_SELECTED
        assert model.select_basis_vector(5)
        assert model.selection == [3, 5]
        assert model.phase is Phase.TWO_SELECTED

    def test_third_is_ignored(self, model):
        model.select_basis_vector(1)
        model.select_basis_vector(2)
        assert not model.select_basis_vector(3)
        assert model.selection == [1, 2]

    def test_duplicate_is_ignored(self, model):
        model.select_basis_vector(1)
        assert not model.select_basis_vector(1)
        assert model.selection == [1]

    def test_out_of_range(self, model):
        with pytest.raises(ValidationError):
            model.select_basis_vector(16)
        with pytest.raises(ValidationError):
            model.select_basis_vector(-1)

    def test_parallel_rejected_by_default(self, model, caplog):
        model.select_basis_vector(0)
        with caplog.at_level("WARNING", logger="eigen_playground.model"):
            assert not model.select_basis_vector(8)
        assert model.selection == [0]
        assert "parallel" in caplog.text

    def test_parallel_accepted_when_propagating(self, propagating_model):
        propagating_model.select_basis_vector(0)
        assert propagating_model.select_basis_vector(8)
        assert propagating_model.selection == [0, 8]

    def test_singular_pair_detection(self, model):
        assert model.is_singular_pair(0, 8)
        assert model.is_singular_pair(4, 12)
        assert not model.is_singular_pair(0, 1)
        assert model.pair_determinant(0, 4) == pytest.approx(2500.0)


class TestEigenRebuild:

    def test_needs_two_selected(self, model):
        model.select_basis_vector(0)
        assert not model.recompute_from_eigen_data()
        assert_allclose(model.A, np.eye(2))

    def test_axes_give_diagonal(self, eigen_model):
        assert_allclose(eigen_model.A, [[2.0, 0.0], [0.0, 3.0]], atol=1e-12)

    @pytest.mark.parametrize("l1,l2", [(0.5, -1.0), (1.0, 1.0), (-2.0, 0.0)])
    def test_axes_any_eigenvalues(self, model, l1, l2):
        model.select_basis_vector(0)
        model.select_basis_vector(4)
        model.set_eigenvalue(0, l1)
        model.set_eigenvalue(1, l2)
        model.recompute_from_eigen_data()
        assert_allclose(model.A, np.diag([l1, l2]), atol=1e-12)

    def test_selected_vectors_are_eigenvectors(self, model):
        model.select_basis_vector(2)
        model.select_basis_vector(7)
        model.set_eigenvalue(0, 1.5)
        model.set_eigenvalue(1, -0.5)
        model.recompute_from_eigen_data()
        u, v = model.samples[2], model.samples[7]
        assert_allclose(model.A @ u, 1.5 * u, atol=1e-9)
        assert_allclose(model.A @ v, -0.5 * v, atol=1e-9)

    def test_order_of_selection_matters(self, model):
        model.select_basis_vector(4)
        model.select_basis_vector(0)
        model.set_eigenvalue(0, 2.0)
        model.set_eigenvalue(1, 3.0)
        model.recompute_from_eigen_data()
        assert_allclose(model.A, [[3.0, 0.0], [0.0, 2.0]], atol=1e-12)

    def test_singular_pair_raises_under_reject(self, model):
        model.selection = [0, 8]
        with pytest.raises(SingularBasisError) as excinfo:
            model.recompute_from_eigen_data()
        assert excinfo.value.indices == (0, 8)
        assert abs(excinfo.value.determinant) < 1e-9

    def test_singular_pair_flags_unstable_under_propagate(self, propagating_model):
        m = propagating_model
        m.select_basis_vector(0)
        m.select_basis_vector(8)
        m.tick()
        assert m.unstable
        assert m.transformed.shape == (16, 2)

    def test_non_finite_matrix_keeps_old_snapshot(self, model):
        before = model.decomposition
        model.A = np.array([[np.nan, 0.0], [0.0, 1.0]])
        assert not model.recompute_decomposition()
        assert model.decomposition is before
        assert model.unstable


class TestBasisComponent:

    def test_column_zero(self, model):
        model.set_basis_component(0, 50.0, 0.0)
        assert_allclose(model.A[:, 0], [1.0, 0.0])

    def test_column_one_is_sign_flipped(self, model):
        model.set_basis_component(1, 25.0, -100.0)
        assert_allclose(model.A[:, 1], [-0.5, 2.0])
        assert_allclose(model.A[:, 0], [1.0, 0.0])

    def test_updates_decomposition(self, model):
        model.set_basis_component(0, 100.0, 0.0)
        assert_allclose(model.decomposition.s, [2.0, 1.0])

    def test_dragged_handle_lands_under_pointer(self, model):
        model.set_basis_component(1, 30.0, 40.0)
        model.tick()
        assert_allclose(model.basis_handles()[1], [30.0, 40.0], atol=1e-9)

    def test_bad_slot(self, model):
        with pytest.raises(ValidationError):
            model.set_basis_component(2, 1.0, 1.0)
        with pytest.raises(ValidationError):
            model.set_eigenvalue(-1, 1.0)


class TestTransformedSet:

    def test_identity_leaves_ring(self, model):
        model.recompute_transformed_set()
        assert_allclose(model.transformed, model.samples)

    def test_matches_matrix_product(self, model, rng):
        model.A = rng.normal(size=(2, 2))
        model.recompute_transformed_set()
        for n in range(16):
            assert_allclose(model.transformed[n], model.A @ model.samples[n])

    def test_tick_updates_everything(self, eigen_model):
        assert_allclose(eigen_model.transformed[4], [0.0, 150.0], atol=1e-9)
        assert_allclose(eigen_model.decomposition.s, [3.0, 2.0])

    def test_singular_handles_on_ellipse_axes(self, eigen_model):
        handles = eigen_model.singular_handles()
        assert_allclose(np.abs(handles), [[0.0, 150.0], [100.0, 0.0]], atol=1e-9)

    def test_eigen_handles(self, eigen_model):
        assert_allclose(eigen_model.eigen_handles(), [[100.0, 0.0], [0.0, 150.0]], atol=1e-9)


class TestReset:

    def _mess_up(self, m):
        m.set_basis_component(0, 10.0, 70.0)
        m.select_basis_vector(3)
        m.select_basis_vector(6)
        m.set_eigenvalue(0, -2.0)
        m.locked = [True, False]
        m.drag_target = EIGEN
        m.tick()

    def _assert_clean(self, m):
        assert_allclose(m.A, np.eye(2))
        assert m.selection == []
        assert m.eigenvalues == [1.0, 1.0]
        assert m.locked == [False, False]
        assert m.drag_target is None
        assert m.phase is Phase.EMPTY
        assert not m.unstable
        assert_allclose(m.decomposition.s, [1.0, 1.0])
        assert_allclose(m.transformed, m.samples)

    def test_reset_after_use(self, model):
        self._mess_up(model)
        model.reset()
        self._assert_clean(model)

    def test_reset_recovers_from_parallel_pair(self, propagating_model):
        m = propagating_model
        m.select_basis_vector(0)
        m.select_basis_vector(8)
        m.tick()
        m.reset()
        self._assert_clean(m)
        m.tick()
        self._assert_clean(m)

    def test_reset_recovers_from_nan(self, model):
        model.A = np.full((2, 2), np.nan)
        model.reset()
        self._assert_clean(model)

    def test_select_again_after_reset(self, eigen_model):
        eigen_model.reset()
        assert eigen_model.select_basis_vector(0)
        assert eigen_model.select_basis_vector(4)


def test_basis_constant_kinds():
    assert {EIGEN, BASIS} == {"eigen", "basis"}
