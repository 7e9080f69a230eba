from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import scipy.linalg

from .common import _check_system


def solve_normal_svd(S: np.ndarray, y: np.ndarray, lam: float = 1e-8) -> np.ndarray:
    """Ridge solution via the thin SVD of S.

    With S = U diag(s) V^H this is beta = V diag(s / (s^2 + N lam)) U^H y,
    the same minimizer as solve_normal without forming S^H S. With lam == 0 a
    numerically rank deficient S raises numpy.linalg.LinAlgError.
    """
    S, y = _check_system(S, y)
    n = S.shape[0]
    U, s, Vh = scipy.linalg.svd(S, full_matrices=False)
    lam = float(lam)
    if lam == 0.0 and s.size:
        tol = max(S.shape) * np.finfo(float).eps * float(s[0])
        if float(s[-1]) <= tol:
            raise np.linalg.LinAlgError("Singular design matrix in SVD solve.")
    denom = s**2 + n * lam
    return Vh.conj().T @ ((s / denom) * (U.conj().T @ y))


@dataclass(frozen=True)
class SVDSolver:
    lam: float = 1e-8
    name = "svd"

    def __call__(self, S: np.ndarray, y: np.ndarray, omega: np.ndarray) -> np.ndarray:
        return solve_normal_svd(S, y, lam=self.lam)
