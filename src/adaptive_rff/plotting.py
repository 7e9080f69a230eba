from __future__ import annotations

from typing import Any, Mapping, Optional, Tuple

import numpy as np


def plot_history(
    history: Any,
    *,
    ax: Optional[Any] = None,
    loss_kwargs: Optional[Mapping[str, Any]] = None,
    acceptance_kwargs: Optional[Mapping[str, Any]] = None,
) -> Tuple[Any, Any]:
    """Plot training loss (log scale) and acceptance rate per epoch.

    Parameters
    ----------
    history : TrainingHistory or TrajectoryHistory
        Anything with .loss and .acceptance_rate arrays.
    ax : matplotlib.axes.Axes, optional
        Axes for the loss curve. The acceptance rate goes on a twin axis.
        If None, a new figure/axes is created.
    loss_kwargs, acceptance_kwargs : dict, optional
        Styling kwargs for the two line plots.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    loss = np.asarray(history.loss, dtype=float)
    acc = np.asarray(history.acceptance_rate, dtype=float)

    lk = {"color": "C0", "label": "loss"}
    lk.update(dict(loss_kwargs or {}))
    if loss.size:
        ax.plot(np.arange(1, loss.size + 1), loss, **lk)
        ax.set_yscale("log")
    ax.set_xlabel("epoch")
    ax.set_ylabel("loss")

    ak = {"color": "C1", "alpha": 0.7, "label": "acceptance rate"}
    ak.update(dict(acceptance_kwargs or {}))
    ax2 = ax.twinx()
    ax2.plot(np.arange(1, acc.size + 1), acc, **ak)
    ax2.set_ylim(0.0, 1.0)
    ax2.set_ylabel("acceptance rate")

    return fig, ax


def plot_spectrum(
    model: Any,
    *,
    ax: Optional[Any] = None,
    bins: int = 50,
    coordinate: int = 0,
    hist_kwargs: Optional[Mapping[str, Any]] = None,
) -> Tuple[Any, Any]:
    """Histogram of one frequency coordinate, weighted by |beta_k|."""
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure

    omega = np.asarray(model.omega, dtype=float)[:, coordinate]
    weights = np.abs(np.asarray(model.beta))
    hk = {"density": True, "alpha": 0.8}
    hk.update(dict(hist_kwargs or {}))
    ax.hist(omega, bins=bins, weights=weights, **hk)
    ax.set_xlabel(f"omega[{coordinate}]")
    ax.set_ylabel("|beta| weighted density")
    return fig, ax
