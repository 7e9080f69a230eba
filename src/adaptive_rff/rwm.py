"""Random walk Metropolis step over frequencies, with linear solves for amplitudes."""

from __future__ import annotations

from typing import Any

import numpy as np

from .data import DataSet
from .model import FourierModel
from .options import TrainingOptions
from .proposal import propose


def design_matrix(x: np.ndarray, omega: np.ndarray) -> np.ndarray:
    """S[j, k] = exp(i omega_k . x_j), shape (N, K)."""
    return np.exp(1j * (np.asarray(x, dtype=float) @ np.asarray(omega, dtype=float).T))


def metropolis_accept(
    beta: np.ndarray,
    beta_new: np.ndarray,
    omega_new: np.ndarray,
    gamma: float,
    max_norm: float,
    rng: np.random.Generator,
) -> np.ndarray:
    """Independent accept/reject mask for each of the K proposals.

    Proposal k is accepted with probability min(1, (|beta_new_k| / |beta_k|)^gamma).
    A zero current amplitude gives an infinite ratio and the proposal is
    accepted. Proposals whose norm exceeds max_norm are always rejected.
    """
    cur = np.abs(beta)
    new = np.abs(beta_new)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        ratio = np.where(cur > 0.0, new / np.where(cur > 0.0, cur, 1.0), np.inf)
        prob = ratio**gamma
    u = rng.uniform(size=cur.shape[0])
    accept = u < prob
    if np.isfinite(max_norm):
        accept &= np.linalg.norm(omega_new, axis=1) <= max_norm
    return accept


def _solve(
    options: TrainingOptions,
    S: np.ndarray,
    y: np.ndarray,
    omega: np.ndarray,
    epoch: Any,
    step: int,
) -> np.ndarray:
    """Call the amplitude solver, attaching epoch/step to any failure."""
    try:
        beta = options.amplitude_solver(S, y, omega)
    except np.linalg.LinAlgError as e:
        raise np.linalg.LinAlgError(
            f"Amplitude solve failed at epoch {epoch}, step {step}: {e}"
        ) from e

    beta = np.asarray(beta, dtype=complex).reshape(-1)
    if beta.shape[0] != omega.shape[0]:
        raise ValueError(
            f"Amplitude solver returned {beta.shape[0]} amplitudes for "
            f"{omega.shape[0]} frequencies (epoch {epoch}, step {step})."
        )
    if not np.all(np.isfinite(beta)):
        raise FloatingPointError(
            f"Amplitude solver returned non-finite amplitudes at epoch {epoch}, step {step}."
        )
    return beta


def rwm_step(
    model: FourierModel,
    data: DataSet,
    sigma: np.ndarray,
    options: TrainingOptions,
    rng: np.random.Generator,
    epoch: Any = None,
) -> float:
    """Run one epoch of RWM on model (in place) and return its acceptance rate.

    1. solve beta for the current omega,
    2. inner_steps times: propose omega', solve beta', accept/reject each k,
    3. re-solve beta for the final omega so the model is self-consistent.

    The acceptance rate is the mean over inner steps of the accepted fraction.
    Solver steps are numbered 0 (initial solve), 1..inner_steps, and
    inner_steps + 1 (final solve) in error messages.
    """
    x, y = data.x, data.y

    S = design_matrix(x, model.omega)
    model.beta[:] = _solve(options, S, y, model.omega, epoch, 0)

    fractions = np.empty(options.inner_steps)
    for step in range(1, options.inner_steps + 1):
        omega_new = propose(model.omega, sigma, options.step_size, rng)
        S_new = design_matrix(x, omega_new)
        beta_new = _solve(options, S_new, y, omega_new, epoch, step)

        accept = metropolis_accept(
            model.beta,
            beta_new,
            omega_new,
            options.metropolis_exponent,
            options.max_frequency_norm,
            rng,
        )
        model.beta[accept] = beta_new[accept]
        model.omega[accept] = omega_new[accept]
        fractions[step - 1] = np.mean(accept)

    S = design_matrix(x, model.omega)
    model.beta[:] = _solve(options, S, y, model.omega, epoch, options.inner_steps + 1)

    return float(np.mean(fractions))
