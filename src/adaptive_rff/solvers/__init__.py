"""Amplitude solvers + registry."""

from __future__ import annotations

from typing import Any, Callable, Dict

from .common import AmplitudeSolver
from .normal import NormalEquationsSolver, solve_normal
from .sobolev import SobolevSolver, solve_sobolev
from .svd import SVDSolver, solve_normal_svd

_SOLVERS: Dict[str, Callable[..., AmplitudeSolver]] = {
    "normal": NormalEquationsSolver,
    "svd": SVDSolver,
    "sobolev": SobolevSolver,
}


def get_solver(name: str, **kwargs: Any) -> AmplitudeSolver:
    """Return a solver instance by name; kwargs (e.g. lam) go to its constructor."""
    try:
        factory = _SOLVERS[name]
    except KeyError as e:
        raise ValueError(
            f"Unknown solver {name!r}. Available: {tuple(_SOLVERS.keys())}"
        ) from e
    return factory(**kwargs)


AVAILABLE_SOLVERS = tuple(_SOLVERS.keys())

__all__ = [
    "AVAILABLE_SOLVERS",
    "AmplitudeSolver",
    "NormalEquationsSolver",
    "SVDSolver",
    "SobolevSolver",
    "get_solver",
    "solve_normal",
    "solve_normal_svd",
    "solve_sobolev",
]
