"""
Layout and numerical settings for the eigen/SVD playground.

The module constants are what the surfaces use for colours and layout.
PlaygroundConfig bundles the values a TransformModel actually depends on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from eigen_playground.exceptions import ConfigError

# ---------- Colours ----------

RED = "#fb8072"
GREEN = "#b3de69"
BLUE_ORANGE = ("#80b1d3", "#fdb462")
SELECTED = "#b5df6c"

# ---------- Geometry ----------

NORM = 50.0            # radius of the sample circle, in model units
N_SAMPLES = 16
BASES = (0, 12)        # V[0] = +x, V[12] = -y
HIT_RADIUS = 5.0
EIGEN_LINE_SCALE = 10.0

SINGULAR_TOL = 1e-9
SINGULAR_POLICIES = ("reject", "propagate")


@dataclass(frozen=True)
class PlaygroundConfig:
    norm: float = NORM
    n_samples: int = N_SAMPLES
    bases: Tuple[int, int] = BASES
    hit_radius: float = HIT_RADIUS
    singular_tol: float = SINGULAR_TOL
    singular_policy: str = "reject"

    def validate(self) -> "PlaygroundConfig":
        """Raise ConfigError on the first bad value, return self otherwise."""
        if not self.norm > 0:
            raise ConfigError(f"norm must be positive, got {self.norm}",
                              field="norm", value=self.norm)
        if self.n_samples < 2:
            raise ConfigError(f"n_samples must be at least 2, got {self.n_samples}",
                              field="n_samples", value=self.n_samples)
        if len(self.bases) != 2 or self.bases[0] == self.bases[1]:
            raise ConfigError(f"bases must be two distinct indices, got {self.bases}",
                              field="bases", value=self.bases)
        for b in self.bases:
            if not 0 <= b < self.n_samples:
                raise ConfigError(
                    f"basis index {b} outside 0..{self.n_samples - 1}",
                    field="bases", value=self.bases,
                )
        if self.hit_radius <= 0:
            raise ConfigError(f"hit_radius must be positive, got {self.hit_radius}",
                              field="hit_radius", value=self.hit_radius)
        if self.singular_tol < 0:
            raise ConfigError(f"singular_tol must be >= 0, got {self.singular_tol}",
                              field="singular_tol", value=self.singular_tol)
        if self.singular_policy not in SINGULAR_POLICIES:
            raise ConfigError(
                f"singular_policy must be one of {SINGULAR_POLICIES}, "
                f"got {self.singular_policy!r}",
                field="singular_policy", value=self.singular_policy,
            )
        return self
