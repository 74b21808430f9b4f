"""Online distribution fitters and the parameters they report."""

from .parameters import (
    FittedParameters,
    BetaParameters,
    GammaParameters,
    NormalParameters,
    LogNormalParameters,
    CauchyParameters,
    CategoricalParameters,
    MultinomialParameters,
    MvNormalParameters,
)
from .distributions import (
    FitBeta,
    FitGamma,
    FitNormal,
    FitLogNormal,
    FitCauchy,
    FitCategorical,
    FitMultinomial,
    FitMvNormal,
)

__all__ = [
    "FittedParameters",
    "BetaParameters",
    "GammaParameters",
    "NormalParameters",
    "LogNormalParameters",
    "CauchyParameters",
    "CategoricalParameters",
    "MultinomialParameters",
    "MvNormalParameters",
    "FitBeta",
    "FitGamma",
    "FitNormal",
    "FitLogNormal",
    "FitCauchy",
    "FitCategorical",
    "FitMultinomial",
    "FitMvNormal",
]
