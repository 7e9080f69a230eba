from __future__ import annotations

import math
from typing import Optional
from warnings import warn

import numpy as np

from .util import is_positive_definite


def proposal_factor(sigma: np.ndarray) -> np.ndarray:
    """Lower Cholesky factor of the proposal covariance.

    A sigma that does not factor is first passed through
    regularize_covariance with a tiny floor.
    """
    sigma = np.asarray(sigma, dtype=float)
    try:
        return np.linalg.cholesky(sigma)
    except np.linalg.LinAlgError:
        return np.linalg.cholesky(regularize_covariance(sigma, 1e-12))


def propose(
    omega: np.ndarray, sigma: np.ndarray, step_size: float, rng: np.random.Generator
) -> np.ndarray:
    """Gaussian random-walk proposal omega'_k = omega_k + step_size * xi_k.

    Each xi_k ~ N(0, sigma) independently, with sigma shared by all K rows.
    Returns a new (K, d) array; omega itself is not modified.
    """
    omega = np.asarray(omega, dtype=float)
    L = proposal_factor(sigma)
    xi = rng.standard_normal(size=omega.shape) @ L.T
    return omega + float(step_size) * xi


def regularize_covariance(cov: np.ndarray, floor: float) -> np.ndarray:
    """Symmetrize cov and push it to be positive definite.

    Adds floor * I; if that is still not enough for a Cholesky factorization,
    eigenvalues are clipped from below.
    """
    cov = np.asarray(cov, dtype=float)
    cov = 0.5 * (cov + cov.T)
    out = cov + floor * np.eye(cov.shape[0])
    if is_positive_definite(out):
        return out

    w, v = np.linalg.eigh(cov)
    min_eig = max(floor, 1e-12 * max(1.0, float(np.max(np.abs(w)))))
    warn(
        "Adapted proposal covariance was not positive definite; clipping "
        f"eigenvalues at {min_eig:.3g}.",
        RuntimeWarning,
        stacklevel=3,
    )
    out = (v * np.clip(w, min_eig, None)) @ v.T
    return 0.5 * (out + out.T)


def shrink_covariance(
    cov: np.ndarray,
    reference: np.ndarray,
    shrinkage: float = 0.1,
    max_growth: float = 1.0,
) -> np.ndarray:
    """Blend cov with reference, then cap its trace.

    The result is (1 - shrinkage) * cov + shrinkage * reference, rescaled
    when its trace exceeds max_growth * trace(reference). Every eigenvalue
    is therefore bounded by max_growth * trace(reference).
    """
    cov = np.asarray(cov, dtype=float)
    reference = np.asarray(reference, dtype=float)
    out = (1.0 - shrinkage) * cov + shrinkage * reference

    limit = max_growth * float(np.trace(reference))
    total = float(np.trace(out))
    if math.isfinite(limit) and total > limit:
        out = out * (limit / total)
    return out


class CovarianceAdapter:
    """Running mean/covariance of accepted frequencies.

    Batches are merged with the parallel (Chan et al.) form of Welford's
    update, so memory stays O(d^2) however long the run is.

    With a reference matrix (the initial proposal covariance), the estimate
    is shrunk toward it and its trace is capped at max_growth times the
    reference trace, so repeated adaptation cannot inflate the proposal.
    """

    def __init__(
        self,
        dim: int,
        floor: float = 1e-8,
        reference: Optional[np.ndarray] = None,
        shrinkage: float = 0.0,
        max_growth: float = math.inf,
    ) -> None:
        self.dim = int(dim)
        self.floor = float(floor)
        self.reference = None if reference is None else np.array(reference, dtype=float)
        self.shrinkage = float(shrinkage)
        self.max_growth = float(max_growth)
        self.count = 0
        self.mean = np.zeros(self.dim)
        self.m2 = np.zeros((self.dim, self.dim))

    def update(self, samples: np.ndarray) -> None:
        """Fold a (n, d) batch of samples into the running statistics."""
        samples = np.asarray(samples, dtype=float).reshape(-1, self.dim)
        n_b = samples.shape[0]
        if n_b == 0:
            return
        mean_b = samples.mean(axis=0)
        centered = samples - mean_b
        m2_b = centered.T @ centered

        n_a = self.count
        n = n_a + n_b
        delta = mean_b - self.mean
        self.mean = self.mean + delta * (n_b / n)
        self.m2 = self.m2 + m2_b + np.outer(delta, delta) * (n_a * n_b / n)
        self.count = n

    def covariance(self) -> Optional[np.ndarray]:
        """Regularized empirical covariance, or None with fewer than 2 samples."""
        if self.count < 2:
            return None
        cov = self.m2 / (self.count - 1)
        if self.reference is not None:
            cov = shrink_covariance(cov, self.reference, self.shrinkage, self.max_growth)
        return regularize_covariance(cov, self.floor)

    def adapt(self, sigma: np.ndarray, samples: np.ndarray) -> np.ndarray:
        """Update with samples and overwrite sigma in place with the estimate."""
        self.update(samples)
        cov = self.covariance()
        if cov is not None:
            sigma[...] = cov
        return sigma
