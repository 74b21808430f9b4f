"""
Online parameter estimates for standard distribution families.

Each fitter owns one inner accumulator, delegates absorb and merge to it,
and derives its parameters from the inner value on demand. Until enough
observations are in (two for the moment-based fits) a documented default
is returned instead of raising.
"""

import logging
import math
from typing import Any, Hashable

import numpy as np

from ..core.stat import OnlineStat
from ..stats.multivariate import CovMatrix, MV
from ..stats.quantile import QuantileMM
from ..stats.scalar import Mean, Variance
from ..weights import LearningRate, Weight
from .parameters import (
    BetaParameters,
    CategoricalParameters,
    CauchyParameters,
    GammaParameters,
    LogNormalParameters,
    MultinomialParameters,
    MvNormalParameters,
    NormalParameters,
)

logger = logging.getLogger(__name__)


class _VarianceFit(OnlineStat):
    """Fitter whose parameters are a closed form of a running mean and variance."""

    def __init__(self, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.var = Variance(self.weight)

    def share_weight(self, weight: Weight) -> None:
        super().share_weight(weight)
        self.var.share_weight(weight)

    def _update(self, y: float, gamma: float) -> None:
        self.var.update(y, gamma)

    def _merge(self, other: "_VarianceFit", gamma: float) -> None:
        self.var.blend(other.var, gamma)

    def _ready(self) -> bool:
        if self.var.nobs > 1:
            return True
        logger.debug("%s has %d observation(s), returning defaults", type(self).__name__, self.var.nobs)
        return False


class FitBeta(_VarianceFit):
    """
    Beta distribution by the method of moments.

    With mean m and variance v:
        alpha = m * (m * (1 - m) / v - 1)
        beta  = (1 - m) * (m * (1 - m) / v - 1)

    Default: (1.0, 1.0) before two observations or while v is zero.

    Example:
        >>> y = np.random.default_rng(0).beta(3, 5, 10_000)
        >>> FitBeta().fit(y).value().to_scipy().mean()
    """

    def value(self) -> BetaParameters:
        if self._ready():
            m = self.var.mean()
            v = self.var.var()
            if v > 0:
                k = m * (1.0 - m) / v - 1.0
                return BetaParameters(alpha=m * k, beta=(1.0 - m) * k)
        return BetaParameters(alpha=1.0, beta=1.0)


class FitGamma(_VarianceFit):
    """
    Gamma distribution by the method of moments.

    scale = v / m, shape = m / scale.

    Default: (1.0, 1.0) before two observations or while m or v is zero.
    """

    def value(self) -> GammaParameters:
        if self._ready():
            m = self.var.mean()
            v = self.var.var()
            if m != 0 and v > 0:
                scale = v / m
                return GammaParameters(shape=m / scale, scale=scale)
        return GammaParameters(shape=1.0, scale=1.0)


class FitNormal(_VarianceFit):
    """
    Normal distribution (mean and unbiased standard deviation).

    Default: (0.0, 1.0) before two observations.
    """

    def value(self) -> NormalParameters:
        if self._ready():
            return NormalParameters(mu=self.var.mean(), sigma=self.var.std())
        return NormalParameters(mu=0.0, sigma=1.0)


class FitLogNormal(_VarianceFit):
    """
    LogNormal distribution: a normal fit of log(y).

    Observations must be positive. Default: (0.0, 1.0) before two
    observations.
    """

    def _coerce(self, y: Any) -> float:
        y = float(y)
        if y <= 0:
            raise ValueError(f"LogNormal observations must be positive, got {y}")
        return y

    def _update(self, y: float, gamma: float) -> None:
        self.var.update(math.log(y), gamma)

    def value(self) -> LogNormalParameters:
        if self._ready():
            return LogNormalParameters(mu=self.var.mean(), sigma=self.var.std())
        return LogNormalParameters(mu=0.0, sigma=1.0)


class FitCauchy(OnlineStat):
    """
    Cauchy distribution from online quartiles.

    location = median, scale = (Q3 - Q1) / 2, with the quartiles tracked by
    a ``QuantileMM`` estimator. Default: (0.0, 1.0) before two observations.
    """

    default_weight = LearningRate

    def __init__(self, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.q = QuantileMM((0.25, 0.5, 0.75), weight=self.weight)

    def share_weight(self, weight: Weight) -> None:
        super().share_weight(weight)
        self.q.share_weight(weight)

    def _update(self, y: float, gamma: float) -> None:
        self.q.update(y, gamma)

    def _merge(self, other: "FitCauchy", gamma: float) -> None:
        self.q.blend(other.q, gamma)

    def value(self) -> CauchyParameters:
        if self.nobs > 1:
            q1, q2, q3 = self.q.value()
            return CauchyParameters(loc=float(q2), scale=0.5 * float(q3 - q1))
        logger.debug("FitCauchy has %d observation(s), returning defaults", self.nobs)
        return CauchyParameters(loc=0.0, scale=1.0)


class FitCategorical(OnlineStat):
    """
    Categorical distribution over arbitrary hashable labels.

    Keeps a frequency table; the weight coefficient is ignored. Merging
    takes the union of the two label sets and adds their counts.

    Example:
        >>> o = FitCategorical().fit(["small", "large", "small", "medium"])
        >>> o.value().as_dict()
        {'small': 0.5, 'large': 0.25, 'medium': 0.25}
    """

    input_kind = "any"

    def __init__(self, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.counts: dict[Hashable, int] = {}

    def _coerce(self, y: Any) -> Hashable:
        return y

    def _update(self, y: Hashable, gamma: float) -> None:
        self.counts[y] = self.counts.get(y, 0) + 1

    def _merge(self, other: "FitCategorical", gamma: float) -> None:
        for key, count in other.counts.items():
            self.counts[key] = self.counts.get(key, 0) + count

    def keys(self) -> tuple:
        return tuple(self.counts)

    def value(self) -> CategoricalParameters:
        total = sum(self.counts.values())
        if total == 0:
            return CategoricalParameters(categories=(), probabilities=np.zeros(0))
        probs = np.array(list(self.counts.values()), dtype=np.float64) / total
        return CategoricalParameters(categories=tuple(self.counts), probabilities=probs)


class FitMultinomial(OnlineStat):
    """
    Multinomial distribution from vectors of category counts.

    p is the normalised mean count vector and n the mean number of trials
    per observation, rounded. Default: (1, uniform p) before any
    observation or while every count is zero.

    Args:
        p: Number of categories
        weight: Weight policy (default ``EqualWeight()``)
    """

    input_kind = "vector"

    def __init__(self, p: int, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.mvmean = MV(p, Mean, weight=self.weight)

    def __len__(self) -> int:
        return len(self.mvmean)

    def share_weight(self, weight: Weight) -> None:
        super().share_weight(weight)
        self.mvmean.share_weight(weight)

    def _coerce(self, y: Any) -> Any:
        return self.mvmean._coerce(y)

    def _update(self, y: Any, gamma: float) -> None:
        self.mvmean.update(y, gamma)

    def _check_compatible(self, other: "FitMultinomial") -> None:
        self.mvmean._check_peer(other.mvmean)

    def _merge(self, other: "FitMultinomial", gamma: float) -> None:
        self.mvmean.blend(other.mvmean, gamma)

    def value(self) -> MultinomialParameters:
        m = self.mvmean.value()
        total = float(m.sum())
        if self.nobs > 0 and total > 0:
            return MultinomialParameters(n=max(int(round(total)), 1), p=m / total)
        return MultinomialParameters(n=1, p=np.full(len(self), 1.0 / len(self)))


class FitMvNormal(OnlineStat):
    """
    Multivariate normal distribution (mean vector and covariance matrix).

    Default: zero mean and identity covariance while the estimated
    covariance is not positive definite.

    Args:
        p: Dimension
        weight: Weight policy (default ``EqualWeight()``)
    """

    input_kind = "vector"

    def __init__(self, p: int, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.cov = CovMatrix(p, weight=self.weight)

    def __len__(self) -> int:
        return len(self.cov)

    def share_weight(self, weight: Weight) -> None:
        super().share_weight(weight)
        self.cov.share_weight(weight)

    def _coerce(self, y: Any) -> Any:
        return self.cov._coerce(y)

    def _update(self, y: Any, gamma: float) -> None:
        self.cov.update(y, gamma)

    def _check_compatible(self, other: "FitMvNormal") -> None:
        self.cov._check_peer(other.cov)

    def _merge(self, other: "FitMvNormal", gamma: float) -> None:
        self.cov.blend(other.cov, gamma)

    def value(self) -> MvNormalParameters:
        c = self.cov.value()
        try:
            np.linalg.cholesky(c)
        except np.linalg.LinAlgError:
            p = len(self)
            if self.nobs > p:
                logger.warning(
                    "FitMvNormal covariance is not positive definite after %d observations, "
                    "returning defaults", self.nobs,
                )
            return MvNormalParameters(mean=np.zeros(p), cov=np.eye(p))
        return MvNormalParameters(mean=self.cov.mean(), cov=c)
