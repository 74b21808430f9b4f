"""
streamstats: Online Statistics and Parameter Estimates for Data Streams

Compute summary statistics and distribution parameter estimates one
observation at a time, without storing the stream. Accumulators of the
same kind can be merged, so partial results built on separate workers
combine into one.

Key Features:
- Six weight policies: equal (running statistics), exponential,
  bounded exponential, two learning-rate schedules, user weights
- Numerically stable smoothing of scalars, vectors and rank-1 matrix updates
- Mean, variance, extrema, moments, order statistics, covariance matrix
- Three streaming quantile estimators (SGD, implicit SGD, MM)
- Beta, Gamma, Normal, LogNormal, Cauchy, Categorical, Multinomial and
  multivariate Normal fitters, exportable to scipy.stats

Basic Example:
    >>> import streamstats as ss
    >>>
    >>> o = ss.Variance()
    >>> for y in [1.0, 2.0, 3.0, 4.0]:
    ...     o.absorb(y)
    >>> o.value()          # sample variance, n - 1 denominator
    1.6666666666666667
    >>>
    >>> # Exponentially weighted statistics
    >>> ewma = ss.Mean(weight=ss.ExponentialWeight(lookback=20))
    >>>
    >>> # Streaming quartiles
    >>> q = ss.QuantileMM((0.25, 0.5, 0.75)).fit(data)

Merge Example:
    >>> a = ss.Variance().fit(chunk_1)
    >>> b = ss.Variance().fit(chunk_2)
    >>> a.merge(b)         # same as fitting chunk_1 then chunk_2

References:
    Welford, B.P. (1962). Note on a Method for Calculating Corrected Sums of
    Squares and Products. Technometrics.
    Chan, T.F., Golub, G.H. & LeVeque, R.J. (1979). Updating Formulae and a
    Pairwise Algorithm for Computing Sample Variances.
    Hunter, D.R. & Lange, K. (2000). Quantile Regression via an MM Algorithm.
"""

import logging

__version__ = "0.1.0"

# Weight policies
from .weights import (
    Weight,
    EqualWeight,
    ExponentialWeight,
    BoundedExponentialWeight,
    LearningRate,
    LearningRate2,
    UserWeight,
)

# Core
from .core import OnlineStat, smooth, smooth_vec, smooth_rank1
from .exceptions import (
    StreamStatsError,
    InvalidParameterError,
    ShapeMismatchError,
    IncompatibleConfigError,
)

# Statistics
from .stats import (
    Mean,
    Variance,
    Extrema,
    Moments,
    OrderStats,
    Sum,
    Diff,
    QuantileLoss,
    L1DistLoss,
    L2DistLoss,
    StochasticLoss,
    QuantileSGD,
    QuantileISGD,
    QuantileMM,
    CovMatrix,
    MV,
)

# Distribution fitters
from .fitters import (
    FitBeta,
    FitGamma,
    FitNormal,
    FitLogNormal,
    FitCauchy,
    FitCategorical,
    FitMultinomial,
    FitMvNormal,
    BetaParameters,
    GammaParameters,
    NormalParameters,
    LogNormalParameters,
    CauchyParameters,
    CategoricalParameters,
    MultinomialParameters,
    MvNormalParameters,
)

from .series import Series
from .registry import StatRegistry, WeightRegistry

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version info
    "__version__",
    # Weight policies
    "Weight",
    "EqualWeight",
    "ExponentialWeight",
    "BoundedExponentialWeight",
    "LearningRate",
    "LearningRate2",
    "UserWeight",
    # Core
    "OnlineStat",
    "smooth",
    "smooth_vec",
    "smooth_rank1",
    # Errors
    "StreamStatsError",
    "InvalidParameterError",
    "ShapeMismatchError",
    "IncompatibleConfigError",
    # Statistics
    "Mean",
    "Variance",
    "Extrema",
    "Moments",
    "OrderStats",
    "Sum",
    "Diff",
    "QuantileLoss",
    "L1DistLoss",
    "L2DistLoss",
    "StochasticLoss",
    "QuantileSGD",
    "QuantileISGD",
    "QuantileMM",
    "CovMatrix",
    "MV",
    # Fitters
    "FitBeta",
    "FitGamma",
    "FitNormal",
    "FitLogNormal",
    "FitCauchy",
    "FitCategorical",
    "FitMultinomial",
    "FitMvNormal",
    "BetaParameters",
    "GammaParameters",
    "NormalParameters",
    "LogNormalParameters",
    "CauchyParameters",
    "CategoricalParameters",
    "MultinomialParameters",
    "MvNormalParameters",
    # Driver and registries
    "Series",
    "StatRegistry",
    "WeightRegistry",
]
