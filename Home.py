# -*- coding: utf-8 -*-
"""
Created on Sat Oct 17 14:05:12 2026

@author: eigen_playground maintainers
"""
# Home page for the Eigenvectors & SVD Playground

import io

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import streamlit as st

from eigen_playground.model import TransformModel
from eigen_playground.mpl_surface import draw_frame


st.set_page_config(
    page_title="Eigenvectors & SVD Playground",
    layout="wide"
)

st.title("Eigenvectors & SVD Playground")

st.write(
    """
    Pick two vectors on a ring, give them eigenvalues, and see the 2×2 matrix that has
    exactly those eigenvectors, together with its singular value decomposition.

    - **Eigen Playground**: click two eigenvectors, move the eigenvalue sliders, watch
      $A$, $U$, $\\Sigma$ and $V^T$ update, and export the rotate–stretch–rotate path as a GIF.
    - **Desktop version**: run `python -m eigen_playground` to drag the eigenvectors and the
      red/green basis vectors with the mouse.
    """
)

# ----------------------------
# Caching helper
# ----------------------------
@st.cache_data(show_spinner=False)
def render_preview_png(i: int, j: int, l1: float, l2: float) -> bytes:
    """
    Render one playground frame with samples i, j as eigenvectors.
    Cached across Streamlit reruns; the arguments are the cache key.
    """
    model = TransformModel()
    model.select_basis_vector(i)
    model.select_basis_vector(j)
    model.set_eigenvalue(0, l1)
    model.set_eigenvalue(1, l2)
    model.tick()

    fig, ax = plt.subplots(figsize=(5, 5))
    fig.patch.set_facecolor("black")
    draw_frame(ax, model)
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=100, facecolor=fig.get_facecolor())
    plt.close(fig)
    return buf.getvalue()


col1, col2 = st.columns(2)

with col1:
    st.subheader("Eigen Playground")
    st.write(
        """
        Vectors along an eigenvector only get longer or shorter. Every other vector
        turns. The SVD axes show the directions of largest and smallest stretch.
        """
    )
    if st.button("Go to Eigen Playground"):
        st.switch_page("pages/1_Eigen_Playground.py")

with col2:
    st.markdown("##### Example: eigenvectors V[2], V[7] with λ = 2.0, 0.5")
    st.image(render_preview_png(2, 7, 2.0, 0.5))
