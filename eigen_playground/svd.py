"""
SVD of the 2x2 transformation matrix.

decompose() is what the model calls on every change of A. The rotational
helpers below turn the same factorisation into a rotate / stretch / rotate
path for the animation export.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from eigen_playground.exceptions import DimensionError, NumericalError


@dataclass(frozen=True)
class Decomposition:
    U: np.ndarray      # (2, 2) left singular vectors as columns
    s: np.ndarray      # (2,) singular values, descending
    Vt: np.ndarray     # (2, 2) right singular vectors as rows
    det: float         # det(U), +1 or -1

    def reconstruct(self) -> np.ndarray:
        """U diag(s) Vt."""
        return (self.U * self.s) @ self.Vt


def _as_matrix(A) -> np.ndarray:
    A = np.asarray(A, dtype=float)
    if A.shape != (2, 2):
        raise DimensionError(f"expected a 2x2 matrix, got shape {A.shape}")
    return A


def _flip(U, Vt, i):
    U[:, i] = -U[:, i]
    Vt[i, :] = -Vt[i, :]


def decompose(A, reference: Optional[Decomposition] = None) -> Decomposition:
    """
    Singular value decomposition A = U diag(s) V^T of a 2x2 matrix.

    Singular values come back in numpy's order (descending), so s[0] is
    always the major axis of the image ellipse. det is the determinant of
    U only; the surfaces use it as an orientation flag.

    Each singular pair (u_i, v_i) is only defined up to a common sign. With
    no reference, the largest-magnitude entry of every v_i is made positive,
    so a rotating A gives a rotating U. With a reference (the previous
    frame's snapshot), every u_i is turned to agree with the reference u_i
    instead, so U moves continuously while A is dragged.
    """
    A = _as_matrix(A)
    if not np.all(np.isfinite(A)):
        raise NumericalError("cannot decompose a matrix with inf/NaN entries")

    U, s, Vt = np.linalg.svd(A)
    U, Vt = np.array(U), np.array(Vt)
    for i in range(2):
        if reference is not None:
            if np.dot(reference.U[:, i], U[:, i]) < 0:
                _flip(U, Vt, i)
        elif Vt[i, np.argmax(np.abs(Vt[i]))] < 0:
            _flip(U, Vt, i)

    for arr in (U, s, Vt):
        arr.setflags(write=False)
    return Decomposition(U=U, s=s, Vt=Vt, det=float(np.linalg.det(U)))


# ---------- Rotational SVD (animation path) ----------

def rotation_matrix(theta):
    """
    2D rotation matrix for angle theta (radians).
    """
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s],
                     [s,  c]])


def angle_from_rot(R):
    """
    Extract rotation angle from a 2x2 rotation matrix R.
    Assumes det(R) ~ 1.
    """
    return np.arctan2(R[1, 0], R[0, 0])


def make_rotational_svd(A):
    """
    Rework A = U Σ V^T so that U and V are both proper rotations.

    A reflection, if A has one, ends up as a negative second entry of the
    diagonal Sigma_signed.

    Returns:
        U_rot, Sigma_signed, V_rot
    """
    d = decompose(A)
    U_rot = np.array(d.U)
    V_rot = np.array(d.Vt).T
    Sigma_signed = np.diag(d.s)

    R_ref = np.diag([1.0, -1.0])  # reflection across x-axis
    detU = np.linalg.det(U_rot)
    detV = np.linalg.det(V_rot)

    if detU < 0 and detV < 0:
        # R_ref Σ R_ref = Σ, so Σ is untouched.
        U_rot = U_rot @ R_ref
        V_rot = V_rot @ R_ref
    elif detU < 0:
        U_rot = U_rot @ R_ref
        Sigma_signed = R_ref @ Sigma_signed
    elif detV < 0:
        V_rot = V_rot @ R_ref
        Sigma_signed = Sigma_signed @ R_ref

    return U_rot, Sigma_signed, V_rot


def svd_path_transform(t, U_rot, Sigma_signed, V_rot):
    """
    Matrix M(t) along the SVD path, acting on column vectors (x' = M x).

    0 <= t <= 1 : rotate from I to V^T
    1 <= t <= 2 : stretch from I to Sigma_signed (after V^T)
    2 <= t <= 3 : rotate from I to U (after Sigma_signed V^T)

    M(3) equals A.
    """
    t = float(np.clip(t, 0.0, 3.0))
    theta_V = angle_from_rot(V_rot)
    theta_U = angle_from_rot(U_rot)
    s1, s2 = Sigma_signed[0, 0], Sigma_signed[1, 1]

    if t <= 1.0:
        return rotation_matrix(-t * theta_V)

    Rvt = rotation_matrix(-theta_V)
    if t <= 2.0:
        alpha = t - 1.0
        S_t = np.diag([1.0 + alpha * (s1 - 1.0),
                       1.0 + alpha * (s2 - 1.0)])
        return S_t @ Rvt

    alpha = t - 2.0
    return rotation_matrix(alpha * theta_U) @ Sigma_signed @ Rvt
