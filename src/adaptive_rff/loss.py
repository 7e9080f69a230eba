from __future__ import annotations

from typing import Any

import numpy as np


def mse_loss(model: Any, x: Any, y: Any) -> float:
    """Mean squared error (1/N) sum_j |f(x_j) - y_j|^2."""
    y = np.asarray(y, dtype=complex).reshape(-1)
    resid = np.asarray(model.eval(x), dtype=complex) - y
    return float(np.mean(np.abs(resid) ** 2))


def optimal_gamma(d: int) -> int:
    """Optimal Metropolis exponent gamma = 3d - 2 for inputs in R^d.

    Remark 1 of Kammonen et al., "Adaptive random Fourier features with
    Metropolis sampling" (2020).
    """
    d = int(d)
    if d < 1:
        raise ValueError(f"Dimension must be positive, got {d}.")
    return 3 * d - 2
