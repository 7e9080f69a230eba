from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable

from .loss import mse_loss
from .solvers import NormalEquationsSolver, get_solver


@dataclass(frozen=True)
class TrainingOptions:
    """Immutable training configuration, validated on construction.

    amplitude_solver may be a callable (S, y, omega) -> beta or a registered
    solver name ("normal", "svd", "sobolev").

    The adapted proposal covariance is shrunk toward the initial sigma by
    covariance_shrinkage, and its trace is capped at max_covariance_growth
    times the initial trace (inf disables the cap).
    """

    epochs: int
    inner_steps: int
    step_size: float
    burn_in: int = 0
    metropolis_exponent: float = 1.0
    max_frequency_norm: float = math.inf
    adapt_covariance: bool = True
    amplitude_solver: Any = field(default_factory=NormalEquationsSolver)
    loss: Callable[..., float] = mse_loss
    covariance_floor: float = 1e-8
    covariance_shrinkage: float = 0.1
    max_covariance_growth: float = 1.0

    def __post_init__(self) -> None:
        for name in ("epochs", "inner_steps"):
            v = getattr(self, name)
            if isinstance(v, bool) or int(v) != v or v < 1:
                raise ValueError(f"{name} must be a positive integer, got {v!r}.")
            object.__setattr__(self, name, int(v))

        if isinstance(self.burn_in, bool) or int(self.burn_in) != self.burn_in or self.burn_in < 0:
            raise ValueError(f"burn_in must be a non-negative integer, got {self.burn_in!r}.")
        object.__setattr__(self, "burn_in", int(self.burn_in))

        for name in ("step_size", "metropolis_exponent"):
            v = float(getattr(self, name))
            if not (math.isfinite(v) and v > 0.0):
                raise ValueError(f"{name} must be a finite positive number, got {v!r}.")
            object.__setattr__(self, name, v)

        max_norm = float(self.max_frequency_norm)
        if math.isnan(max_norm) or max_norm <= 0.0:
            raise ValueError(f"max_frequency_norm must be positive, got {max_norm!r}.")
        object.__setattr__(self, "max_frequency_norm", max_norm)

        floor = float(self.covariance_floor)
        if not (math.isfinite(floor) and floor >= 0.0):
            raise ValueError(f"covariance_floor must be non-negative, got {floor!r}.")
        object.__setattr__(self, "covariance_floor", floor)

        shrinkage = float(self.covariance_shrinkage)
        if not 0.0 <= shrinkage <= 1.0:
            raise ValueError(f"covariance_shrinkage must lie in [0, 1], got {shrinkage!r}.")
        object.__setattr__(self, "covariance_shrinkage", shrinkage)

        growth = float(self.max_covariance_growth)
        if math.isnan(growth) or growth <= 0.0:
            raise ValueError(f"max_covariance_growth must be positive, got {growth!r}.")
        object.__setattr__(self, "max_covariance_growth", growth)

        object.__setattr__(self, "adapt_covariance", bool(self.adapt_covariance))

        if isinstance(self.amplitude_solver, str):
            object.__setattr__(self, "amplitude_solver", get_solver(self.amplitude_solver))
        if not callable(self.amplitude_solver):
            raise TypeError("amplitude_solver must be callable as (S, y, omega) -> beta.")
        if not callable(self.loss):
            raise TypeError("loss must be callable as (model, x, y) -> float.")
