# -*- coding: utf-8 -*-
"""
Created on Sat Oct 17 14:20:31 2026

@author: eigen_playground maintainers

Streamlit page for the eigen/SVD playground.
"""
# In the web UI:
# Click two points on the ring to pick the eigenvectors.
# Move the eigenvalue sliders, or edit the basis columns directly.
# Scroll to the bottom and click Generate GIF animation.

import os

import numpy as np
import streamlit as st
from streamlit_plotly_events import plotly_events

from eigen_playground.config import BASES, N_SAMPLES, NORM, SINGULAR_POLICIES, PlaygroundConfig
from eigen_playground.exceptions import PlaygroundError
from eigen_playground.model import Phase, TransformModel
from eigen_playground.plotly_view import apply_click_events, make_playground_figure
from eigen_playground.surfaces import status_message

GIF_PATH = "svd_path_animation.gif"
SWEEP_PATH = "eigen_sweep_animation.gif"


def get_model(config):
    """One TransformModel per browser session, rebuilt when the config changes."""
    model = st.session_state.get("playground_model")
    if model is None or model.config != config:
        model = TransformModel(config)
        st.session_state.playground_model = model
        st.session_state.events_key = 0
    return model


def matrix_latex(name, M):
    return (
        r"""
        %s =
        \begin{bmatrix}
        %.3f & %.3f \\
        %.3f & %.3f
        \end{bmatrix}
        """ % (name, M[0, 0], M[0, 1], M[1, 0], M[1, 1])
    )


def main():
    st.set_page_config(page_title="Eigenvectors & SVD Playground", layout="wide")

    st.title("Eigenvectors & SVD Playground")

    st.write(
        """
        The ring holds **16 vectors** of length 50. Click two of them to make them the
        **eigenvectors** of a 2×2 matrix $A$, then choose the two **eigenvalues**.
        The white points show $A\\,v$ for every vector on the ring; the blue and orange
        axes are $\\sigma_1 u_1$ and $\\sigma_2 u_2$ from the SVD $A = U \\Sigma V^T$.
        """
    )

    # Sidebar: configuration
    st.sidebar.header("Settings")
    policy = st.sidebar.radio(
        "Parallel eigenvectors",
        SINGULAR_POLICIES,
        help="'reject' ignores a second eigenvector parallel to the first; "
             "'propagate' accepts it and lets A blow up.",
    )
    config = PlaygroundConfig(norm=NORM, n_samples=N_SAMPLES, bases=BASES,
                              singular_policy=policy)
    model = get_model(config)

    if st.sidebar.button("Reset"):
        model.reset()
        st.session_state.events_key += 1

    # Sidebar: eigenvalues (only meaningful with two eigenvectors)
    st.sidebar.markdown("---")
    st.sidebar.header("Eigenvalues")
    two_selected = model.phase is Phase.TWO_SELECTED
    for slot in (0, 1):
        value = st.sidebar.slider(
            f"λ{slot + 1}", -3.0, 3.0, float(np.clip(model.eigenvalues[slot], -3.0, 3.0)), 0.05,
            disabled=not two_selected,
            key=f"lambda_{slot}_{st.session_state.events_key}",
        )
        if two_selected:
            model.set_eigenvalue(slot, value)

    # Sidebar: basis columns (drag substitute for the red/green handles)
    st.sidebar.markdown("---")
    st.sidebar.header("Basis images")
    st.sidebar.caption("Ignored while two eigenvectors are selected: A is rebuilt from them.")
    for slot, label in enumerate(("red (column 1)", "green (column 2)")):
        c1, c2 = st.sidebar.columns(2)
        sign = (-1) ** slot
        x0 = float(model.A[0, slot] * NORM * sign)
        y0 = float(model.A[1, slot] * NORM * sign)
        with c1:
            x = st.number_input(f"{label} x", value=x0, step=5.0,
                                key=f"basis_{slot}_x_{st.session_state.events_key}")
        with c2:
            y = st.number_input(f"{label} y", value=y0, step=5.0,
                                key=f"basis_{slot}_y_{st.session_state.events_key}")
        if not two_selected and (x, y) != (x0, y0):
            model.set_basis_component(slot, x, y)

    model.tick()

    col1, col2 = st.columns([3, 2])

    with col1:
        st.subheader("Visualization (click the grey points)")
        fig = make_playground_figure(model)
        events = plotly_events(
            fig,
            click_event=True,
            select_event=False,
            hover_event=False,
            override_height=650,
            key=f"playground_events_{st.session_state.events_key}",
        )
        if apply_click_events(model, events):
            # new key drops the stale click so it is not replayed next run
            st.session_state.events_key += 1
            st.rerun()
        st.caption(status_message(model))

    with col2:
        st.subheader("Transformation matrix A")
        if model.unstable:
            st.error("The two eigenvectors are parallel, so A is undefined. Press Reset.")
        elif np.all(np.isfinite(model.A)):
            st.latex(matrix_latex("A", model.A))

        st.subheader("Selection")
        if model.selection:
            for slot, idx in enumerate(model.selection):
                v = model.samples[idx]
                st.markdown(
                    f"- eigenvector {slot + 1}: V[{idx}] = ({v[0]:.1f}, {v[1]:.1f}), "
                    f"λ{slot + 1} = {model.eigenvalues[slot]:.2f}"
                )
        else:
            st.write("No eigenvectors selected yet.")

        st.subheader("SVD of A")
        d = model.decomposition
        st.latex(
            r"""
            \Sigma =
            \begin{bmatrix}
            %.3f & 0 \\
            0 & %.3f
            \end{bmatrix}
            """ % (d.s[0], d.s[1])
        )
        st.latex(matrix_latex("U", d.U))
        st.latex(matrix_latex("V^T", d.Vt))
        st.latex(r"\det U = %+.0f" % d.det)
        st.caption("Singular values are listed largest first; σ₁ is drawn in blue, σ₂ in orange.")

    st.markdown("---")

    # ---------- GIF generation section ----------
    st.markdown("## GIF animation from the SVD path")

    if st.button("Generate GIF animation (svd_path_animation.gif)"):
        from eigen_playground.mpl_surface import create_svd_path_gif

        with st.spinner("Generating GIF animation (this may take a bit)..."):
            try:
                create_svd_path_gif(GIF_PATH, model)
                st.success(f"Animation saved as {GIF_PATH}")
            except PlaygroundError as e:
                st.error(f"Failed to create animation. Error: {e}")

    if st.button("Generate eigenvalue sweep (eigen_sweep_animation.gif)", disabled=not two_selected):
        from eigen_playground.mpl_surface import create_eigen_sweep_gif

        with st.spinner("Sweeping λ1 from -2 to 2..."):
            try:
                create_eigen_sweep_gif(SWEEP_PATH, model)
                st.success(f"Animation saved as {SWEEP_PATH}")
            except PlaygroundError as e:
                st.error(f"Failed to create animation. Error: {e}")

    c1, c2, c3 = st.columns([1, 2, 1])
    with c2:
        for path in (GIF_PATH, SWEEP_PATH):
            if os.path.exists(path):
                st.image(path)


if __name__ == "__main__":
    main()
