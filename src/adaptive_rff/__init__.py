"""adaptive_rff public API."""
from .data import (
    CyclicData,
    DataScalings,
    DataSet,
    FixedData,
    MinibatchData,
    get_scalings,
    make_provider,
    rescale_data,
    scale_data,
)
from .loss import mse_loss, optimal_gamma
from .model import FourierModel
from .options import TrainingOptions
from .proposal import CovarianceAdapter, propose
from .rwm import design_matrix, metropolis_accept, rwm_step
from .solvers import (
    NormalEquationsSolver,
    SobolevSolver,
    SVDSolver,
    get_solver,
    solve_normal,
    solve_normal_svd,
    solve_sobolev,
)
from .train import TrainingHistory, TrajectoryHistory, train_rwm, train_rwm_trajectory

__all__ = [
    "CovarianceAdapter",
    "CyclicData",
    "DataScalings",
    "DataSet",
    "FixedData",
    "FourierModel",
    "MinibatchData",
    "NormalEquationsSolver",
    "SVDSolver",
    "SobolevSolver",
    "TrainingHistory",
    "TrainingOptions",
    "TrajectoryHistory",
    "design_matrix",
    "get_scalings",
    "get_solver",
    "make_provider",
    "metropolis_accept",
    "mse_loss",
    "optimal_gamma",
    "propose",
    "rescale_data",
    "rwm_step",
    "scale_data",
    "solve_normal",
    "solve_normal_svd",
    "solve_sobolev",
    "train_rwm",
    "train_rwm_trajectory",
]
