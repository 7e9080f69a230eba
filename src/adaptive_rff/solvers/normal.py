from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import scipy.linalg

from .common import _check_system


def solve_normal(S: np.ndarray, y: np.ndarray, lam: float = 1e-8) -> np.ndarray:
    """Solve the regularized normal equations (S^H S + N lam I) beta = S^H y.

    Uses a Cholesky solve; a singular or indefinite system raises
    numpy.linalg.LinAlgError.
    """
    S, y = _check_system(S, y)
    n, k = S.shape
    A = S.conj().T @ S + n * float(lam) * np.eye(k)
    b = S.conj().T @ y
    return scipy.linalg.solve(A, b, assume_a="pos")


@dataclass(frozen=True)
class NormalEquationsSolver:
    lam: float = 1e-8
    name = "normal"

    def __call__(self, S: np.ndarray, y: np.ndarray, omega: np.ndarray) -> np.ndarray:
        return solve_normal(S, y, lam=self.lam)
