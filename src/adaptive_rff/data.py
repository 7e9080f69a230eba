from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, Sequence, Union

import numpy as np

from .util import _warn_or_raise, as_points


@dataclass(frozen=True, eq=False)
class DataSet:
    """Training pairs (x_j, y_j): x of shape (N, d), y complex of shape (N,).

    Arrays are copied and marked read-only. A 1D x is read as N scalar
    inputs (d = 1).
    """

    x: np.ndarray
    y: np.ndarray

    def __post_init__(self) -> None:
        x = np.array(as_points(self.x), dtype=float)
        y = np.array(self.y, dtype=complex).reshape(-1)
        if x.shape[0] == 0:
            raise ValueError("DataSet must contain at least one sample.")
        if x.shape[0] != y.shape[0]:
            raise ValueError(
                f"x has {x.shape[0]} samples but y has {y.shape[0]}."
            )
        x.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    @property
    def size(self) -> int:
        return int(self.x.shape[0])

    @property
    def dim(self) -> int:
        return int(self.x.shape[1])

    def __len__(self) -> int:
        return self.size

    def subset(self, indices: Any) -> "DataSet":
        idx = np.asarray(indices, dtype=int)
        return DataSet(x=self.x[idx], y=self.y[idx])


# ---- scalings ----------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class DataScalings:
    """Means and variances used to center and scale a DataSet."""

    mu_x: np.ndarray  # (d,)
    sigma2_x: np.ndarray  # (d,)
    mu_y: complex
    sigma2_y: float


def get_scalings(data: DataSet) -> DataScalings:
    """Per-coordinate means/variances of x and mean/variance of complex y.

    Variances use the unbiased (ddof=1) estimator; the variance of y is the
    mean of |y - mu_y|^2.
    """
    if data.size < 2:
        raise ValueError("At least two samples are needed to estimate scalings.")

    mu_x = np.mean(data.x, axis=0)
    sigma2_x = np.var(data.x, axis=0, ddof=1)
    mu_y = complex(np.mean(data.y))
    sigma2_y = float(np.sum(np.abs(data.y - mu_y) ** 2) / (data.size - 1))

    if np.any(sigma2_x <= 0.0) or sigma2_y <= 0.0:
        raise ValueError("Cannot scale data with zero variance in x or y.")
    return DataScalings(mu_x=mu_x, sigma2_x=sigma2_x, mu_y=mu_y, sigma2_y=sigma2_y)


def scale_data(data: DataSet, scalings: DataScalings) -> DataSet:
    """Return a copy of data centered and scaled to unit variance."""
    x = (data.x - scalings.mu_x) / np.sqrt(scalings.sigma2_x)
    y = (data.y - scalings.mu_y) / np.sqrt(scalings.sigma2_y)
    return DataSet(x=x, y=y)


def rescale_data(data: DataSet, scalings: DataScalings) -> DataSet:
    """Inverse of scale_data: map a scaled DataSet back to original units."""
    x = data.x * np.sqrt(scalings.sigma2_x) + scalings.mu_x
    y = data.y * np.sqrt(scalings.sigma2_y) + scalings.mu_y
    return DataSet(x=x, y=y)


# ---- providers ---------------------------------------------------------------


class DataProvider(Protocol):
    """Produces the DataSet used at a given (1-based) epoch."""

    dim: int

    def __call__(self, epoch: int, rng: np.random.Generator) -> DataSet: ...


class FixedData:
    """The same DataSet every epoch."""

    def __init__(self, data: DataSet) -> None:
        self.data = data
        self.dim = data.dim

    def __call__(self, epoch: int, rng: np.random.Generator) -> DataSet:
        return self.data


class CyclicData:
    """Round-robin over a list of DataSets: epoch i uses datasets[(i-1) % M].

    The datasets are presumed to be of equal size. Unequal sizes warn (or
    raise when strict=True).
    """

    def __init__(self, datasets: Sequence[DataSet], strict: bool = False) -> None:
        datasets = list(datasets)
        if not datasets:
            raise ValueError("CyclicData requires at least one DataSet.")
        for d in datasets:
            if not isinstance(d, DataSet):
                raise TypeError(f"Expected DataSet entries, got {type(d).__name__}.")
        dims = {d.dim for d in datasets}
        if len(dims) != 1:
            raise ValueError(f"All datasets must share one input dimension, got {sorted(dims)}.")
        sizes = sorted({d.size for d in datasets})
        if len(sizes) != 1:
            _warn_or_raise(
                strict,
                f"Cycled datasets have unequal sizes {sizes}; epochs will not "
                "carry equal effort.",
            )
        self.datasets: List[DataSet] = datasets
        self.dim = datasets[0].dim

    def __call__(self, epoch: int, rng: np.random.Generator) -> DataSet:
        return self.datasets[(epoch - 1) % len(self.datasets)]


class MinibatchData:
    """A fresh random subset of batch_size samples every epoch.

    Indices are drawn without replacement and sorted, so a batch never
    repeats a sample and batch_size == N yields the full dataset.
    """

    def __init__(self, data: DataSet, batch_size: int) -> None:
        batch_size = int(batch_size)
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}.")
        if batch_size > data.size:
            raise ValueError(
                f"batch_size {batch_size} exceeds the number of samples {data.size}."
            )
        self.data = data
        self.batch_size = batch_size
        self.dim = data.dim

    def __call__(self, epoch: int, rng: np.random.Generator) -> DataSet:
        idx = rng.choice(self.data.size, size=self.batch_size, replace=False)
        return self.data.subset(np.sort(idx))


def make_provider(
    data: Union[DataSet, Sequence[DataSet]],
    batch_size: Optional[int] = None,
    strict: bool = False,
) -> DataProvider:
    """Pick the feeding mode from the arguments.

    - DataSet                 -> FixedData
    - DataSet + batch_size    -> MinibatchData
    - list/tuple of DataSet   -> CyclicData
    """
    if isinstance(data, DataSet):
        if batch_size is None:
            return FixedData(data)
        return MinibatchData(data, batch_size)

    if isinstance(data, (list, tuple)):
        if batch_size is not None:
            raise TypeError("batch_size is only supported with a single DataSet.")
        return CyclicData(data, strict=strict)

    raise TypeError(
        f"data must be a DataSet or a list of DataSets, got {type(data).__name__}."
    )
