"""Online statistic implementations.

- Scalar input: Mean, Variance, Extrema, Moments, OrderStats, Sum, Diff
- Stochastic approximation: StochasticLoss, QuantileSGD, QuantileISGD, QuantileMM
- Vector input: CovMatrix, MV
"""

from .scalar import Mean, Variance, Extrema, Moments, OrderStats, Sum, Diff
from .quantile import (
    Loss,
    QuantileLoss,
    L1DistLoss,
    L2DistLoss,
    StochasticLoss,
    QuantileSGD,
    QuantileISGD,
    QuantileMM,
)
from .multivariate import CovMatrix, MV

__all__ = [
    "Mean",
    "Variance",
    "Extrema",
    "Moments",
    "OrderStats",
    "Sum",
    "Diff",
    "Loss",
    "QuantileLoss",
    "L1DistLoss",
    "L2DistLoss",
    "StochasticLoss",
    "QuantileSGD",
    "QuantileISGD",
    "QuantileMM",
    "CovMatrix",
    "MV",
]
