import math

import numpy as np
import pytest

from adaptive_rff import (
    FourierModel,
    SobolevSolver,
    TrainingOptions,
    mse_loss,
    optimal_gamma,
)


def test_defaults():
    opts = TrainingOptions(epochs=10, inner_steps=2, step_size=0.5)
    assert opts.burn_in == 0
    assert opts.metropolis_exponent == 1.0
    assert opts.max_frequency_norm == math.inf
    assert opts.adapt_covariance is True
    assert opts.covariance_shrinkage == 0.1
    assert opts.max_covariance_growth == 1.0
    assert opts.loss is mse_loss
    assert callable(opts.amplitude_solver)


def test_options_are_frozen():
    opts = TrainingOptions(epochs=10, inner_steps=2, step_size=0.5)
    with pytest.raises(AttributeError):
        opts.epochs = 3


def test_solver_name_is_resolved():
    opts = TrainingOptions(epochs=1, inner_steps=1, step_size=1.0, amplitude_solver="sobolev")
    assert isinstance(opts.amplitude_solver, SobolevSolver)


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"epochs": 0}, "epochs"),
        ({"epochs": 2.5}, "epochs"),
        ({"inner_steps": -1}, "inner_steps"),
        ({"step_size": 0.0}, "step_size"),
        ({"step_size": -1.0}, "step_size"),
        ({"metropolis_exponent": 0.0}, "metropolis_exponent"),
        ({"burn_in": -2}, "burn_in"),
        ({"max_frequency_norm": 0.0}, "max_frequency_norm"),
        ({"covariance_floor": -1e-3}, "covariance_floor"),
        ({"covariance_shrinkage": 1.5}, "covariance_shrinkage"),
        ({"covariance_shrinkage": float("nan")}, "covariance_shrinkage"),
        ({"max_covariance_growth": 0.0}, "max_covariance_growth"),
        ({"amplitude_solver": "cholesky"}, "Unknown solver"),
    ],
)
def test_invalid_configuration_raises(kwargs, match):
    base = dict(epochs=5, inner_steps=2, step_size=1.0)
    base.update(kwargs)
    with pytest.raises(ValueError, match=match):
        TrainingOptions(**base)


def test_non_callable_hooks_raise():
    with pytest.raises(TypeError, match="amplitude_solver"):
        TrainingOptions(epochs=1, inner_steps=1, step_size=1.0, amplitude_solver=3)
    with pytest.raises(TypeError, match="loss"):
        TrainingOptions(epochs=1, inner_steps=1, step_size=1.0, loss="mse")


def test_mse_loss():
    model = FourierModel([1.0], [0.0])  # constant 1
    x = np.linspace(0.0, 1.0, 4)
    assert mse_loss(model, x, np.ones(4)) == 0.0
    assert mse_loss(model, x, np.full(4, 1.0 + 2.0j)) == pytest.approx(4.0)


def test_optimal_gamma():
    assert optimal_gamma(1) == 1
    assert optimal_gamma(3) == 7
    with pytest.raises(ValueError):
        optimal_gamma(0)
