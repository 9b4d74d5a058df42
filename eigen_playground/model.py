"""
TransformModel: the state behind one playground session.

The model owns the 2x2 matrix A, the fixed ring of sample vectors, the
user's eigenvector selection with its eigenvalues, the drag locks and the
latest SVD snapshot. Surfaces call tick() once per frame and forward pointer
events in model space (offsets from the centre of the ring).

State machine:
    EMPTY -> ONE_SELECTED -> TWO_SELECTED, back to EMPTY only via reset().
    While TWO_SELECTED, a press on a transformed eigenvector locks it in
    "eigen" mode, a press on a transformed basis vector locks it in "basis"
    mode, and a release clears every lock.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional, Tuple

import numpy as np

from eigen_playground.config import PlaygroundConfig
from eigen_playground.exceptions import SingularBasisError, ValidationError
from eigen_playground.svd import Decomposition, decompose

logger = logging.getLogger(__name__)

EIGEN = "eigen"
BASIS = "basis"


class Phase(enum.Enum):
    EMPTY = 0
    ONE_SELECTED = 1
    TWO_SELECTED = 2


def sample_ring(norm: float, n: int) -> np.ndarray:
    """n points on a circle of radius norm, starting on +x, counter-clockwise."""
    angles = np.arange(n) * 2.0 * np.pi / n
    return norm * np.column_stack([np.cos(angles), np.sin(angles)])


class TransformModel:
    """
    State of one playground session.

    Attributes:
        A: Current 2x2 matrix, identity after construction and reset()
        samples: Read-only (n, 2) ring of sample vectors V[n]
        transformed: (n, 2) images A @ V[n], refreshed by tick()
        selection: Up to two sample indices acting as eigenvectors
        eigenvalues: One eigenvalue per selection slot
        locked: Per-slot drag flags; drag_target says which kind is held
        decomposition: Latest SVD snapshot of A, replaced whole
    """

    def __init__(
        self,
        config: Optional[PlaygroundConfig] = None,
        decomposer: Callable[..., Decomposition] = decompose,
    ) -> None:
        self.config = (config or PlaygroundConfig()).validate()
        self._decompose = decomposer

        samples = sample_ring(self.config.norm, self.config.n_samples)
        samples.setflags(write=False)
        self.samples: np.ndarray = samples

        self.A: np.ndarray = np.eye(2)
        self.transformed: np.ndarray = samples.copy()
        self.selection: List[int] = []
        self.eigenvalues: List[float] = [1.0, 1.0]
        self.locked: List[bool] = [False, False]
        self.drag_target: Optional[str] = None
        self.decomposition: Decomposition = self._decompose(self.A)

    def __repr__(self) -> str:
        return (f"TransformModel(phase={self.phase.name}, selection={self.selection}, "
                f"eigenvalues={self.eigenvalues}, A={self.A.tolist()})")

    # ---------- Read-only views ----------

    @property
    def norm(self) -> float:
        return self.config.norm

    @property
    def bases(self) -> Tuple[int, int]:
        return self.config.bases

    @property
    def phase(self) -> Phase:
        return Phase(len(self.selection))

    @property
    def unstable(self) -> bool:
        """True when A is non-finite or was built from a dependent pair."""
        if not np.all(np.isfinite(self.A)):
            return True
        if len(self.selection) == 2:
            return self.is_singular_pair(*self.selection)
        return False

    def pair_determinant(self, i: int, j: int) -> float:
        (u1, u2), (v1, v2) = self.samples[i], self.samples[j]
        return float(u1 * v2 - u2 * v1)

    def is_singular_pair(self, i: int, j: int) -> bool:
        """Whether V[i] and V[j] are parallel, relative to their lengths."""
        scale = np.linalg.norm(self.samples[i]) * np.linalg.norm(self.samples[j])
        return abs(self.pair_determinant(i, j)) <= self.config.singular_tol * scale

    def basis_handles(self) -> np.ndarray:
        return self.transformed[list(self.bases)]

    def eigen_handles(self) -> np.ndarray:
        return self.transformed[self.selection].reshape(-1, 2)

    def singular_handles(self) -> np.ndarray:
        """
        Tips of the two semi-axes of the image ellipse, NORM * s_i * u_i.

        Row i is the image of the i-th right singular vector (scaled by
        NORM), so it always lies on the transformed ring.
        """
        d = self.decomposition
        return (d.U * d.s).T * self.norm

    def sample_at(self, x: float, y: float) -> Optional[int]:
        """Index of the first sample within hit_radius of (x, y)."""
        dist = np.hypot(self.samples[:, 0] - x, self.samples[:, 1] - y)
        hits = np.flatnonzero(dist <= self.config.hit_radius)
        return int(hits[0]) if hits.size else None

    def handle_at(self, x: float, y: float) -> Optional[Tuple[str, int]]:
        """
        The draggable handle under (x, y) as (kind, slot), or None.

        Eigenvector handles exist only once two are selected and take
        precedence over the basis handles.
        """
        r = self.config.hit_radius
        if len(self.selection) == 2:
            for slot, (hx, hy) in enumerate(self.eigen_handles()):
                if np.hypot(hx - x, hy - y) <= r:
                    return EIGEN, slot
        for slot, (hx, hy) in enumerate(self.basis_handles()):
            if np.hypot(hx - x, hy - y) <= r:
                return BASIS, slot
        return None

    # ---------- Mutations ----------

    def select_basis_vector(self, index: int) -> bool:
        """
        Append a sample index to the eigenvector selection.

        A third vector or an index already selected is ignored. With the
        "reject" policy a second vector parallel to the first is ignored as
        well. Returns True if the selection grew.
        """
        index = int(index)
        if not 0 <= index < len(self.samples):
            raise ValidationError(f"sample index {index} outside 0..{len(self.samples) - 1}")
        if len(self.selection) >= 2 or index in self.selection:
            return False

        if self.selection and self.is_singular_pair(self.selection[0], index):
            if self.config.singular_policy == "reject":
                logger.warning("Refusing eigenvector %d: parallel to %d",
                               index, self.selection[0])
                return False
            logger.warning("Eigenvectors %d and %d are parallel; A will be unstable",
                           self.selection[0], index)

        self.selection.append(index)
        logger.debug("Selected eigenvector %d -> %s", index, self.selection)
        return True

    def set_eigenvalue(self, slot: int, value: float) -> None:
        self._check_slot(slot)
        self.eigenvalues[slot] = float(value)

    def set_basis_component(self, slot: int, dx: float, dy: float) -> None:
        """
        Column `slot` of A becomes (dx, dy) / NORM * (-1)**slot.

        V[BASES[1]] points along -y, hence the sign flip for slot 1.
        """
        self._check_slot(slot)
        sign = (-1) ** slot
        self.A[0, slot] = dx / self.norm * sign
        self.A[1, slot] = dy / self.norm * sign
        self.recompute_decomposition()

    def recompute_from_eigen_data(self) -> bool:
        """
        Rebuild A so that A u = l1 u and A v = l2 v for the selected u, v.

        Does nothing unless exactly two vectors are selected. Returns True
        when A was rebuilt.
        """
        if len(self.selection) != 2:
            return False

        i, j = self.selection
        if self.is_singular_pair(i, j) and self.config.singular_policy == "reject":
            raise SingularBasisError(
                f"eigenvectors {i} and {j} are linearly dependent",
                determinant=self.pair_determinant(i, j),
                indices=self.selection,
            )

        u1, u2 = self.samples[i]
        v1, v2 = self.samples[j]
        l1, l2 = self.eigenvalues
        d = u1 * v2 - u2 * v1

        # "propagate" keeps whatever inf/NaN a zero determinant produces
        with np.errstate(divide="ignore", invalid="ignore"):
            self.A = np.array([
                [(v2 * l1 * u1 - u2 * l2 * v1) / d, (u1 * l2 * v1 - v1 * l1 * u1) / d],
                [(v2 * l1 * u2 - u2 * l2 * v2) / d, (u1 * l2 * v2 - v1 * l1 * u2) / d],
            ], dtype=float)
        return True

    def recompute_transformed_set(self) -> None:
        with np.errstate(invalid="ignore", over="ignore"):
            self.transformed = self.samples @ self.A.T

    def recompute_decomposition(self) -> bool:
        """
        Replace the SVD snapshot from the current A.

        The previous snapshot is kept when A is not finite. Returns True if
        the snapshot was replaced.
        """
        if not np.all(np.isfinite(self.A)):
            logger.debug("Skipping SVD of non-finite A: %s", self.A.tolist())
            return False
        # keep the singular vectors continuous with the previous frame
        self.decomposition = self._decompose(self.A, self.decomposition)
        return True

    def reset(self) -> None:
        self.A = np.eye(2)
        self.selection = []
        self.eigenvalues = [1.0, 1.0]
        self.release_locks()
        self.decomposition = self._decompose(self.A)
        self.recompute_transformed_set()
        logger.debug("Model reset")

    def tick(self) -> None:
        """Per-frame update: eigen rebuild (if two selected), SVD, images."""
        if self.recompute_from_eigen_data():
            self.recompute_decomposition()
        self.recompute_transformed_set()

    # ---------- Pointer input (model space) ----------

    def on_pointer_down(self, x: float, y: float) -> bool:
        """
        Handle a press at (x, y). Returns True if it selected or grabbed
        something.
        """
        handled = False
        if len(self.selection) < 2:
            index = self.sample_at(x, y)
            if index is not None:
                handled = self.select_basis_vector(index)

        hit = self.handle_at(x, y)
        if hit is not None:
            kind, slot = hit
            # one handle at a time
            self.release_locks()
            self.drag_target = kind
            self.locked[slot] = True
            logger.debug("Grabbed %s handle %d", kind, slot)
            handled = True
        return handled

    def on_pointer_drag(self, x: float, y: float) -> None:
        if self.drag_target is None:
            return
        for slot, held in enumerate(self.locked):
            if not held:
                continue
            if self.drag_target == EIGEN:
                direction = self.samples[self.selection[slot]]
                self.set_eigenvalue(slot, (x * direction[0] + y * direction[1]) / self.norm ** 2)
            else:
                self.set_basis_component(slot, x, y)

    def on_pointer_up(self) -> None:
        self.release_locks()

    def release_locks(self) -> None:
        self.locked = [False, False]
        self.drag_target = None

    @staticmethod
    def _check_slot(slot: int) -> None:
        if slot not in (0, 1):
            raise ValidationError(f"slot must be 0 or 1, got {slot}")
