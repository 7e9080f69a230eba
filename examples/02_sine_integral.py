# Si(x / a) exp(-x^2 / 2) with a = 1e-3: a sharp transition near x = 0.
import numpy as np
import matplotlib.pyplot as plt
from scipy.special import sici

from adaptive_rff import (
    DataSet,
    FourierModel,
    TrainingOptions,
    optimal_gamma,
    solve_normal,
    train_rwm,
)
from adaptive_rff.plotting import plot_history, plot_spectrum

a = 1e-3


def f(x):
    return sici(x / a)[0] * np.exp(-0.5 * x**2)


rng = np.random.default_rng(100)
n_x, d = 500, 1
x = 0.1 * rng.uniform(size=(n_x, d))
data = DataSet(x, f(x[:, 0]))

K = 2**6
model0 = FourierModel.random(K, d, rng=200)

lam = 1e-8
opts = TrainingOptions(
    epochs=300,
    inner_steps=10,
    step_size=10.0,
    burn_in=30,
    metropolis_exponent=optimal_gamma(d),
    adapt_covariance=True,
    # Any (S, y, omega) -> beta callable works as a solver.
    amplitude_solver=lambda S, y, omega: solve_normal(S, y, lam=lam),
)

model = model0.copy()
hist = train_rwm(model, data, np.ones((1, 1)), opts, rng=1000, show_progress=True)
print(f"loss: first {hist.loss[0]:.3e}, last {hist.loss[-1]:.3e}")

xx = np.linspace(0.0, 0.1, 500)
fig, axes = plt.subplots(1, 3, figsize=(14, 4))
plot_history(hist, ax=axes[0])
axes[1].scatter(x[:, 0], data.y.real, s=4, label="data")
axes[1].plot(xx, model.eval(xx).real, "C1", label="learned")
axes[1].legend()
plot_spectrum(model, ax=axes[2])
plt.show()
