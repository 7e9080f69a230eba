from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from .util import RngLike, as_points, as_rng

if TYPE_CHECKING:
    from .data import DataScalings


@dataclass(eq=False)
class FourierModel:
    """Fourier features model f(x) = sum_k beta_k exp(i omega_k . x).

    beta has shape (K,) and is complex; omega has shape (K, d). The pair is
    index aligned and K never changes during training: frequencies are
    replaced in place, never added or removed.
    """

    beta: np.ndarray
    omega: np.ndarray

    def __post_init__(self) -> None:
        self.beta = np.array(self.beta, dtype=complex).reshape(-1)
        omega = np.array(self.omega, dtype=float)
        if omega.ndim == 1:
            omega = omega.reshape(-1, 1)
        if omega.ndim != 2:
            raise ValueError(f"omega must be 1D or 2D, got shape {omega.shape}.")
        self.omega = omega
        if self.beta.shape[0] != self.omega.shape[0]:
            raise ValueError(
                f"beta has {self.beta.shape[0]} entries but omega has "
                f"{self.omega.shape[0]} frequencies."
            )
        if self.beta.shape[0] == 0:
            raise ValueError("A FourierModel needs at least one feature.")

    @staticmethod
    def random(
        n_features: int, dim: int, rng: RngLike = None, scale: float = 1.0
    ) -> "FourierModel":
        """Standard complex normal amplitudes, N(0, scale^2 I) frequencies."""
        if n_features < 1 or dim < 1:
            raise ValueError("n_features and dim must be positive.")
        rng = as_rng(rng)
        beta = (
            rng.normal(size=n_features) + 1j * rng.normal(size=n_features)
        ) / np.sqrt(2.0)
        omega = float(scale) * rng.normal(size=(n_features, dim))
        return FourierModel(beta=beta, omega=omega)

    @property
    def n_features(self) -> int:
        return int(self.beta.shape[0])

    @property
    def dim(self) -> int:
        return int(self.omega.shape[1])

    # ---- evaluation ----
    def eval(self, x: Any, scalings: Optional["DataScalings"] = None) -> np.ndarray:
        """Evaluate the model on the rows of x, shape (M, d) -> (M,).

        If scalings are given, x is taken in original units and the result is
        returned in original units (the model was trained on scaled data).
        """
        pts = as_points(x, self.dim)
        if scalings is not None:
            pts = (pts - scalings.mu_x) / np.sqrt(scalings.sigma2_x)
        vals = np.exp(1j * (pts @ self.omega.T)) @ self.beta
        if scalings is not None:
            vals = scalings.mu_y + np.sqrt(scalings.sigma2_y) * vals
        return vals

    def __call__(self, x: Any, scalings: Optional["DataScalings"] = None) -> complex:
        """Evaluate the model at a single point of shape (d,)."""
        pt = np.asarray(x, dtype=float).reshape(-1)
        if pt.shape[0] != self.dim:
            raise ValueError(
                f"Point has dimension {pt.shape[0]}, model expects {self.dim}."
            )
        return complex(self.eval(pt[None, :], scalings)[0])

    def copy(self) -> "FourierModel":
        return FourierModel(beta=self.beta.copy(), omega=self.omega.copy())

    def __repr__(self) -> str:
        return f"FourierModel(n_features={self.n_features}, dim={self.dim})"
