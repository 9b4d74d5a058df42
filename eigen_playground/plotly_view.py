"""
Plotly figure of the playground for the Streamlit page.

Plotly cannot stream drag events back through streamlit_plotly_events, so
the page only uses clicks: each click becomes a press + release in model
space, which is enough to pick the two eigenvectors.
"""

from __future__ import annotations

import logging

import numpy as np
import plotly.graph_objects as go

from eigen_playground.config import BLUE_ORANGE, GREEN, RED, SELECTED
from eigen_playground.model import TransformModel
from eigen_playground.surfaces import eigen_line_segments, status_message

logger = logging.getLogger(__name__)


def make_playground_figure(model: TransformModel, limit=None, height=600) -> go.Figure:
    limit = limit or 4.0 * model.norm
    n = len(model.samples)
    b0, b1 = model.bases

    in_colors = ["grey"] * n
    in_colors[b0], in_colors[b1] = RED, GREEN

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=model.samples[:, 0], y=model.samples[:, 1],
        mode="markers",
        name="Sample vectors",
        marker=dict(size=9, color=in_colors),
        customdata=np.arange(n),
        hovertemplate="V[%{customdata}] = (%{x:.1f}, %{y:.1f})<extra></extra>",
    ))

    out_colors = ["white"] * n
    out_sizes = [7] * n
    for idx in model.selection:
        out_colors[idx] = SELECTED
        out_sizes[idx] = 13
    out_colors[b0], out_colors[b1] = RED, GREEN
    out_sizes[b0] = out_sizes[b1] = 13

    mask = np.all(np.isfinite(model.transformed), axis=1)
    fig.add_trace(go.Scatter(
        x=model.transformed[mask, 0], y=model.transformed[mask, 1],
        mode="markers",
        name="A · V",
        marker=dict(size=[s for s, keep in zip(out_sizes, mask) if keep],
                    color=[c for c, keep in zip(out_colors, mask) if keep],
                    line=dict(width=1, color="black")),
        hoverinfo="skip",
    ))

    for k, seg in enumerate(eigen_line_segments(model)):
        fig.add_trace(go.Scatter(
            x=seg[:, 0], y=seg[:, 1], mode="lines",
            line=dict(color="grey", width=1),
            name=f"eigenvector {k + 1} (λ={model.eigenvalues[k]:.2f})",
            hoverinfo="skip",
        ))

    if np.all(np.isfinite(model.A)):
        for i, (sx, sy) in enumerate(model.singular_handles()):
            fig.add_trace(go.Scatter(
                x=[-sx, sx], y=[-sy, sy], mode="lines+markers",
                line=dict(color=BLUE_ORANGE[i], width=2),
                marker=dict(size=[0, 11], color=BLUE_ORANGE[i]),
                name=f"σ{i + 1} u{i + 1} (σ={model.decomposition.s[i]:.2f})",
                hoverinfo="skip",
            ))

    fig.update_layout(
        title=status_message(model),
        xaxis=dict(range=[-limit, limit], zeroline=False, showgrid=False),
        yaxis=dict(range=[limit, -limit], zeroline=False, showgrid=False,
                   scaleanchor="x", scaleratio=1),
        plot_bgcolor="black",
        height=height,
        margin=dict(l=10, r=10, t=50, b=10),
        legend=dict(orientation="h"),
    )
    return fig


def apply_click_events(model: TransformModel, events) -> int:
    """
    Feed plotly click events to the model as press/release pairs.

    Returns the number of clicks that selected or grabbed something.
    """
    handled = 0
    for e in events or []:
        if not isinstance(e, dict) or "x" not in e or "y" not in e:
            continue
        try:
            x, y = float(e["x"]), float(e["y"])
        except (TypeError, ValueError):
            logger.debug("Ignoring click event with bad coordinates: %r", e)
            continue
        if model.on_pointer_down(x, y):
            handled += 1
        model.on_pointer_up()
    return handled
