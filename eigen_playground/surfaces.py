"""
Seams between the model and whatever draws it.

The model never imports a graphics library. A surface draws a model each
frame and an input source forwards pointer events to it; both are plain
structural protocols so any binding (matplotlib, plotly, a browser canvas)
can implement them.
"""

from __future__ import annotations

from typing import Protocol, Tuple, runtime_checkable

import numpy as np

from eigen_playground.config import EIGEN_LINE_SCALE
from eigen_playground.model import Phase, TransformModel


@runtime_checkable
class RenderSurface(Protocol):

    def draw(self, model: TransformModel) -> None:
        """Draw the current model state. Called once per frame after tick()."""
        ...


@runtime_checkable
class InputSource(Protocol):

    def connect(self, model: TransformModel) -> None:
        """Start forwarding pointer events to model."""
        ...

    def disconnect(self) -> None:
        ...


def screen_to_model(px: float, py: float, cx: float, cy: float,
                    flip_y: bool = False) -> Tuple[float, float]:
    """
    Pixel position -> offset from the ring centre (cx, cy).

    Use flip_y=True for surfaces whose y axis grows upwards on screen but
    downwards in pixel space and that want model +y to point up.
    """
    x = px - cx
    y = py - cy
    return (x, -y) if flip_y else (x, y)


def status_message(model: TransformModel) -> str:
    if model.unstable:
        return "Selected eigenvectors are parallel, press Reset"
    if model.phase is Phase.TWO_SELECTED:
        return "Drag 'em around"
    return "Select two eigenvectors"


def eigen_line_segments(model: TransformModel, scale: float = EIGEN_LINE_SCALE) -> np.ndarray:
    """(k, 2, 2) segments through the origin along each selected sample."""
    if not model.selection:
        return np.empty((0, 2, 2))
    v = model.samples[model.selection]
    return np.stack([-scale * v, scale * v], axis=1)
