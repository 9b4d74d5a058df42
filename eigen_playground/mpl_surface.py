"""
Matplotlib front end: an interactive window plus two GIF exports.

The window draws the model on a black canvas, forwards mouse events in
data coordinates (which already are model space, the ring is centred on the
origin, y pointing down) and runs tick() from a FuncAnimation timer.
"""

from __future__ import annotations

import logging

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation, PillowWriter
from matplotlib.widgets import Button

from eigen_playground.config import BLUE_ORANGE, GREEN, RED, SELECTED
from eigen_playground.exceptions import ValidationError
from eigen_playground.model import TransformModel
from eigen_playground.surfaces import eigen_line_segments, status_message
from eigen_playground.svd import make_rotational_svd, svd_path_transform

logger = logging.getLogger(__name__)

FOREGROUND = "#bbbbbb"
SMALL, LARGE = 15.0, 60.0


# ---------- Drawing ----------

def _finite_rows(points):
    return points[np.all(np.isfinite(points), axis=1)]


def _style_axes(ax, limit):
    ax.set_facecolor("black")
    ax.set_xlim(-limit, limit)
    # model y grows downwards, as on a pixel canvas
    ax.set_ylim(limit, -limit)
    ax.set_aspect("equal", "box")
    ax.set_xticks([])
    ax.set_yticks([])


def draw_frame(ax, model: TransformModel, limit=None):
    """
    Draw one frame of the playground on an existing Axes.
    Used by the interactive window and the Streamlit snapshot.
    """
    ax.clear()
    limit = limit or 4.0 * model.norm
    n = len(model.samples)
    b0, b1 = model.bases

    # Singular axes of the image ellipse
    if np.all(np.isfinite(model.A)):
        for i, (sx, sy) in enumerate(model.singular_handles()):
            ax.plot([-sx, sx], [-sy, sy], color=BLUE_ORANGE[i], linewidth=1.0)
            ax.scatter([sx], [sy], s=LARGE, color=BLUE_ORANGE[i], zorder=3)

    # Lines through the selected eigenvectors
    for seg in eigen_line_segments(model):
        ax.plot(seg[:, 0], seg[:, 1], color="grey", linewidth=1.0)

    # Input ring
    in_colors = ["grey"] * n
    in_colors[b0], in_colors[b1] = RED, GREEN
    ax.scatter(model.samples[:, 0], model.samples[:, 1],
               s=SMALL, c=in_colors, zorder=2)

    # Output ring
    out_colors = ["white"] * n
    sizes = np.full(n, SMALL)
    for idx in model.selection:
        out_colors[idx] = SELECTED
        sizes[idx] = LARGE
    out_colors[b0], out_colors[b1] = RED, GREEN
    sizes[b0] = sizes[b1] = LARGE

    mask = np.all(np.isfinite(model.transformed), axis=1)
    if mask.any():
        ax.scatter(model.transformed[mask, 0], model.transformed[mask, 1],
                   s=sizes[mask], c=[c for c, keep in zip(out_colors, mask) if keep],
                   zorder=4)

    ax.text(0.03, 0.95, status_message(model), transform=ax.transAxes,
            color=FOREGROUND, fontsize="medium", va="top")
    _style_axes(ax, limit)


def draw_path_frame(ax, model: TransformModel, M, t, limit=None):
    """Draw the ring moved by an intermediate matrix M of the SVD path."""
    ax.clear()
    limit = limit or 4.0 * model.norm
    moved = _finite_rows(model.samples @ np.asarray(M).T)
    ax.scatter(model.samples[:, 0], model.samples[:, 1], s=SMALL, color="grey")
    ax.scatter(moved[:, 0], moved[:, 1], s=SMALL, color="white")
    for i, color in zip(model.bases, (RED, GREEN)):
        x, y = np.asarray(M) @ model.samples[i]
        ax.scatter([x], [y], s=LARGE, color=color, zorder=3)

    if t <= 1.0:
        stage = "rotate by Vᵀ"
    elif t <= 2.0:
        stage = "stretch by Σ̃"
    else:
        stage = "rotate by U"
    ax.text(0.03, 0.95, f"t = {t:.2f}  ({stage})", transform=ax.transAxes,
            color=FOREGROUND, va="top")
    _style_axes(ax, limit)


# ---------- Animation generator (GIF) ----------

def create_svd_path_gif(filename, model: TransformModel, n_frames=90, fps=30, limit=None):
    """
    Save a GIF of the ring moving from I to the model's A along the
    rotation-stretch-rotation path. Uses PillowWriter (no ffmpeg needed).
    """
    U_rot, Sigma_signed, V_rot = make_rotational_svd(model.A)

    fig, ax = plt.subplots(figsize=(5, 5))
    fig.patch.set_facecolor("black")
    writer = PillowWriter(fps=fps)

    with writer.saving(fig, filename, dpi=100):
        for i in range(n_frames):
            t = 3.0 * i / (n_frames - 1)
            M = svd_path_transform(t, U_rot, Sigma_signed, V_rot)
            draw_path_frame(ax, model, M, t, limit=limit)
            writer.grab_frame()

    plt.close(fig)
    logger.info("Wrote %d frames to %s", n_frames, filename)
    return filename


def create_eigen_sweep_gif(filename, model: TransformModel, slot=0, start=-2.0, stop=2.0,
                           n_frames=60, fps=20, limit=None):
    """
    Save a GIF of eigenvalue `slot` swept linearly from `start` to `stop`
    while the other eigenvalue stays fixed.

    The frames are drawn from a scratch copy, `model` is left untouched.
    Needs two selected eigenvectors.
    """
    if len(model.selection) != 2:
        raise ValidationError("an eigenvalue sweep needs two selected eigenvectors")
    if n_frames < 2:
        raise ValidationError(f"n_frames must be at least 2, got {n_frames}")
    TransformModel._check_slot(slot)

    scratch = TransformModel(model.config)
    for idx in model.selection:
        scratch.select_basis_vector(idx)
    scratch.eigenvalues = list(model.eigenvalues)

    fig, ax = plt.subplots(figsize=(5, 5))
    fig.patch.set_facecolor("black")
    writer = PillowWriter(fps=fps)

    with writer.saving(fig, filename, dpi=100):
        for value in np.linspace(start, stop, n_frames):
            scratch.set_eigenvalue(slot, value)
            scratch.tick()
            draw_frame(ax, scratch, limit=limit)
            ax.set_title(f"λ{slot + 1} = {value:.2f}", color=FOREGROUND)
            writer.grab_frame()

    plt.close(fig)
    logger.info("Wrote %d sweep frames of λ%d to %s", n_frames, slot + 1, filename)
    return filename


# ---------- Interactive window ----------

class PlaygroundWindow:
    """Matplotlib figure that is both the render surface and the input source."""

    def __init__(self, model: TransformModel, interval_ms: int = 33, limit=None) -> None:
        self.model = model
        self.interval_ms = interval_ms
        self.limit = limit
        self.anim = None
        self._cids = []

        self.fig, self.ax = plt.subplots(figsize=(7, 7))
        self.fig.patch.set_facecolor("black")
        plt.subplots_adjust(bottom=0.1)

        self.ax_reset = self.fig.add_axes([0.02, 0.02, 0.12, 0.05])
        self.btn_reset = Button(self.ax_reset, "Reset", color="black", hovercolor="#333333")
        self.btn_reset.label.set_color(FOREGROUND)
        self.btn_reset.on_clicked(self._on_reset)

        self.draw(model)

    # RenderSurface
    def draw(self, model: TransformModel) -> None:
        draw_frame(self.ax, model, self.limit)

    # InputSource
    def connect(self, model: TransformModel) -> None:
        self.disconnect()
        self.model = model
        canvas = self.fig.canvas
        self._cids = [
            canvas.mpl_connect("button_press_event", self._on_press),
            canvas.mpl_connect("motion_notify_event", self._on_motion),
            canvas.mpl_connect("button_release_event", self._on_release),
        ]

    def disconnect(self) -> None:
        for cid in self._cids:
            self.fig.canvas.mpl_disconnect(cid)
        self._cids = []

    def _on_press(self, event):
        if event.inaxes is not self.ax or event.xdata is None:
            return
        self.model.on_pointer_down(event.xdata, event.ydata)

    def _on_motion(self, event):
        if self.model.drag_target is None:
            return
        if event.inaxes is not self.ax or event.xdata is None:
            return
        self.model.on_pointer_drag(event.xdata, event.ydata)

    def _on_release(self, event):
        self.model.on_pointer_up()

    def _on_reset(self, event):
        self.model.reset()
        logger.info("Reset from button")

    def _frame(self, _i):
        self.model.tick()
        self.draw(self.model)

    def start(self):
        self.connect(self.model)
        self.anim = FuncAnimation(self.fig, self._frame, interval=self.interval_ms,
                                  cache_frame_data=False)
        return self.anim

    def show(self):
        self.start()
        plt.show()
