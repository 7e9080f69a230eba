from __future__ import annotations

from typing import Any, Optional, Union
from warnings import warn

import numpy as np

RngLike = Union[np.random.Generator, int, None]


def as_rng(rng: RngLike) -> np.random.Generator:
    """Return a Generator; ints and None are passed to default_rng."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def as_points(x: Any, dim: Optional[int] = None) -> np.ndarray:
    """Coerce x into a float array of shape (N, d).

    A 1D array is read as N scalar points (d = 1).
    """
    arr = np.asarray(x, dtype=float)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise ValueError(f"x must be 1D or 2D, got shape {arr.shape}.")
    if dim is not None and arr.shape[1] != dim:
        raise ValueError(f"x has dimension {arr.shape[1]}, expected {dim}.")
    return arr


def is_positive_definite(mat: np.ndarray) -> bool:
    try:
        np.linalg.cholesky(mat)
    except np.linalg.LinAlgError:
        return False
    return True


def _warn_or_raise(strict: bool, message: str) -> None:
    """Warn or raise based on strict mode."""
    if strict:
        raise ValueError(message)
    warn(message, UserWarning, stacklevel=3)
