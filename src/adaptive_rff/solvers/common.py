from __future__ import annotations

from typing import Protocol

import numpy as np


class AmplitudeSolver(Protocol):
    """Solver protocol: amplitudes for one design matrix.

    S is the (N, K) design matrix, y the (N,) targets and omega the (K, d)
    frequencies that built S. Solvers that do not regularize by frequency
    simply ignore omega.
    """

    def __call__(self, S: np.ndarray, y: np.ndarray, omega: np.ndarray) -> np.ndarray: ...


def _check_system(S: np.ndarray, y: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    S = np.asarray(S, dtype=complex)
    y = np.asarray(y, dtype=complex).reshape(-1)
    if S.ndim != 2 or S.shape[0] != y.shape[0]:
        raise ValueError(
            f"Design matrix shape {S.shape} does not match {y.shape[0]} targets."
        )
    return S, y
