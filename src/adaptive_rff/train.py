from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence, Union

import numpy as np
from tqdm import trange

from .data import DataSet, make_provider
from .model import FourierModel
from .options import TrainingOptions
from .proposal import CovarianceAdapter
from .rwm import rwm_step
from .util import RngLike, as_rng, is_positive_definite

TrainingData = Union[DataSet, Sequence[DataSet]]


class TrainingHistory(NamedTuple):
    """Result of train_rwm; unpacks as (sigma, acceptance_rate, loss)."""

    sigma: np.ndarray
    acceptance_rate: np.ndarray
    loss: np.ndarray


class TrajectoryHistory(NamedTuple):
    """Result of train_rwm_trajectory; trajectory[i] is the model after epoch i+1."""

    trajectory: List[FourierModel]
    sigma: np.ndarray
    acceptance_rate: np.ndarray
    loss: np.ndarray


def train_rwm(
    model: FourierModel,
    data: TrainingData,
    sigma: np.ndarray,
    options: TrainingOptions,
    *,
    batch_size: Optional[int] = None,
    rng: RngLike = None,
    show_progress: bool = False,
    record_loss: bool = True,
    strict: bool = False,
) -> TrainingHistory:
    """Train model in place with adaptive random walk Metropolis.

    Parameters
    ----------
    model : FourierModel
        Mutated in place: omega is resampled, beta re-solved every epoch.
    data : DataSet or list of DataSet
        A single DataSet is used every epoch, or subsampled to batch_size
        each epoch if batch_size is given. A list is cycled through.
    sigma : ndarray, shape (d, d)
        Symmetric positive definite proposal covariance. Overwritten in
        place after burn-in when options.adapt_covariance is set, never
        touched otherwise. Adapted values are shrunk toward the initial
        sigma and their trace is capped (see TrainingOptions).
    options : TrainingOptions
    rng : Generator, int or None
        Source of all random draws. Equal seeds give identical runs.
    show_progress : bool
        Display a tqdm progress bar.
    record_loss : bool
        Evaluate options.loss on each epoch's data. If False the returned
        loss array is empty.
    strict : bool
        Raise instead of warn when cycled datasets differ in size.

    Returns
    -------
    TrainingHistory
        (sigma, acceptance_rate, loss), with one rate and one loss per epoch.
    """
    sigma_out, acc, loss, _ = _train(
        model,
        data,
        sigma,
        options,
        batch_size=batch_size,
        rng=rng,
        show_progress=show_progress,
        record_loss=record_loss,
        strict=strict,
        record_trajectory=False,
    )
    return TrainingHistory(sigma=sigma_out, acceptance_rate=acc, loss=loss)


def train_rwm_trajectory(
    model0: FourierModel,
    data: TrainingData,
    sigma0: np.ndarray,
    options: TrainingOptions,
    *,
    batch_size: Optional[int] = None,
    rng: RngLike = None,
    show_progress: bool = False,
    record_loss: bool = True,
    strict: bool = False,
) -> TrajectoryHistory:
    """Like train_rwm, but leaves model0 and sigma0 untouched and returns a
    deep snapshot of the model after every epoch."""
    model = model0.copy()
    sigma = np.array(sigma0, dtype=float)
    sigma_out, acc, loss, trajectory = _train(
        model,
        data,
        sigma,
        options,
        batch_size=batch_size,
        rng=rng,
        show_progress=show_progress,
        record_loss=record_loss,
        strict=strict,
        record_trajectory=True,
    )
    return TrajectoryHistory(
        trajectory=trajectory, sigma=sigma_out, acceptance_rate=acc, loss=loss
    )


def _validate_inputs(
    model: FourierModel, dim: int, sigma: np.ndarray, options: TrainingOptions
) -> None:
    if not isinstance(model, FourierModel):
        raise TypeError(f"model must be a FourierModel, got {type(model).__name__}.")
    if model.dim != dim:
        raise ValueError(f"Model dimension {model.dim} does not match data dimension {dim}.")
    if not isinstance(sigma, np.ndarray) or sigma.dtype.kind != "f":
        raise TypeError("sigma must be a float ndarray (it is updated in place).")
    if sigma.shape != (dim, dim):
        raise ValueError(f"sigma must have shape {(dim, dim)}, got {sigma.shape}.")
    if not np.all(np.isfinite(sigma)) or not np.allclose(sigma, sigma.T):
        raise ValueError("sigma must be a finite symmetric matrix.")
    if not is_positive_definite(sigma):
        raise ValueError("sigma must be positive definite.")
    if np.isfinite(options.max_frequency_norm):
        norms = np.linalg.norm(model.omega, axis=1)
        if np.any(norms > options.max_frequency_norm):
            raise ValueError(
                f"Initial frequencies exceed max_frequency_norm={options.max_frequency_norm} "
                f"(largest norm {float(np.max(norms)):.4g})."
            )


def _train(
    model: FourierModel,
    data: TrainingData,
    sigma: np.ndarray,
    options: TrainingOptions,
    *,
    batch_size: Optional[int],
    rng: RngLike,
    show_progress: bool,
    record_loss: bool,
    strict: bool,
    record_trajectory: bool,
):
    """Shared training loop. Mutates model and sigma in place."""
    if not isinstance(options, TrainingOptions):
        raise TypeError("options must be a TrainingOptions instance.")
    provider = make_provider(data, batch_size=batch_size, strict=strict)
    _validate_inputs(model, provider.dim, sigma, options)
    rng = as_rng(rng)

    adapter = (
        CovarianceAdapter(
            model.dim,
            floor=options.covariance_floor,
            reference=sigma.copy(),
            shrinkage=options.covariance_shrinkage,
            max_growth=options.max_covariance_growth,
        )
        if options.adapt_covariance
        else None
    )

    acceptance = np.empty(options.epochs)
    losses: List[float] = []
    trajectory: List[FourierModel] = []

    epochs = trange(
        1, options.epochs + 1, desc="ARFF", disable=not show_progress, leave=False
    )
    for epoch in epochs:
        batch = provider(epoch, rng)
        acceptance[epoch - 1] = rwm_step(model, batch, sigma, options, rng, epoch=epoch)

        # Post burn-in, the chain states after this epoch's moves feed the
        # covariance estimate.
        if adapter is not None and epoch > options.burn_in:
            adapter.adapt(sigma, model.omega)

        if record_loss:
            losses.append(float(options.loss(model, batch.x, batch.y)))
        if record_trajectory:
            trajectory.append(model.copy())

        if show_progress:
            postfix = {"acc": f"{acceptance[epoch - 1]:.3f}"}
            if record_loss:
                postfix["loss"] = f"{losses[-1]:.3e}"
            epochs.set_postfix(postfix)

    return sigma, acceptance, np.asarray(losses, dtype=float), trajectory
