from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import scipy.linalg

from .common import _check_system


def solve_sobolev(
    S: np.ndarray, y: np.ndarray, omega: np.ndarray, lam: float = 1e-8
) -> np.ndarray:
    """Minimize |S beta - y|^2 + N lam sum_k (1 + |omega_k|^2) |beta_k|^2.

    Sobolev-type penalty from Kiessling, Strom & Tempone (2021): high
    frequencies pay more for their amplitude.
    """
    S, y = _check_system(S, y)
    omega = np.asarray(omega, dtype=float)
    if omega.ndim == 1:
        omega = omega.reshape(-1, 1)
    n, k = S.shape
    if omega.shape[0] != k:
        raise ValueError(f"omega has {omega.shape[0]} rows, design matrix has {k} columns.")

    weights = 1.0 + np.sum(omega**2, axis=1)
    A = S.conj().T @ S + n * float(lam) * np.diag(weights)
    b = S.conj().T @ y
    return scipy.linalg.solve(A, b, assume_a="pos")


@dataclass(frozen=True)
class SobolevSolver:
    lam: float = 1e-8
    name = "sobolev"

    def __call__(self, S: np.ndarray, y: np.ndarray, omega: np.ndarray) -> np.ndarray:
        return solve_sobolev(S, y, omega, lam=self.lam)
