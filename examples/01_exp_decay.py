import numpy as np
import matplotlib.pyplot as plt

from adaptive_rff import DataSet, FourierModel, TrainingOptions, get_solver, train_rwm
from adaptive_rff.plotting import plot_history

rng = np.random.default_rng(0)
x = rng.uniform(0.0, 1.0, size=50)
data = DataSet(x, np.exp(-x))

model = FourierModel.random(8, 1, rng=rng)
opts = TrainingOptions(
    epochs=200,
    inner_steps=5,
    step_size=1.0,
    burn_in=20,
    metropolis_exponent=1.0,
    adapt_covariance=True,
    amplitude_solver=get_solver("normal", lam=1e-6),
)

hist = train_rwm(model, data, np.eye(1), opts, rng=rng)
print(f"final loss {hist.loss[-1]:.3e}, mean acceptance {hist.acceptance_rate.mean():.3f}")
print("adapted proposal covariance:", hist.sigma)

xg = np.linspace(0.0, 1.0, 200)
fig, (ax0, ax1) = plt.subplots(1, 2, figsize=(10, 4))
plot_history(hist, ax=ax0)
ax1.plot(x, np.exp(-x), "k.", label="data")
ax1.plot(xg, model.eval(xg).real, label="ARFF fit")
ax1.legend()
plt.show()
