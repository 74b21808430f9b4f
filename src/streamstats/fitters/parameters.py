"""Parameter dataclasses reported by the distribution fitters."""

from dataclasses import dataclass, fields
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray
from scipy import stats


@dataclass(frozen=True)
class FittedParameters:
    """
    Base class for fitted parameters.

    Instances unpack like tuples, in field order:

        >>> alpha, beta = FitBeta().fit(y).value()
    """

    def __iter__(self) -> Iterator[Any]:
        return iter(tuple(getattr(self, f.name) for f in fields(self)))

    def to_scipy(self) -> Any:
        """Frozen ``scipy.stats`` distribution with these parameters."""
        raise NotImplementedError


@dataclass(frozen=True)
class BetaParameters(FittedParameters):
    """Beta(alpha, beta)."""

    alpha: float
    beta: float

    def to_scipy(self) -> Any:
        return stats.beta(self.alpha, self.beta)


@dataclass(frozen=True)
class GammaParameters(FittedParameters):
    """Gamma with shape and scale (mean = shape * scale)."""

    shape: float
    scale: float

    def to_scipy(self) -> Any:
        return stats.gamma(self.shape, scale=self.scale)


@dataclass(frozen=True)
class NormalParameters(FittedParameters):
    """Normal(mu, sigma)."""

    mu: float
    sigma: float

    def to_scipy(self) -> Any:
        return stats.norm(loc=self.mu, scale=self.sigma)


@dataclass(frozen=True)
class LogNormalParameters(FittedParameters):
    """
    LogNormal: log(X) ~ Normal(mu, sigma).

    scipy parameterises this as lognorm(s=sigma, scale=exp(mu)).
    """

    mu: float
    sigma: float

    def to_scipy(self) -> Any:
        return stats.lognorm(s=self.sigma, scale=np.exp(self.mu))


@dataclass(frozen=True)
class CauchyParameters(FittedParameters):
    """Cauchy with location (median) and scale (half the interquartile range)."""

    loc: float
    scale: float

    def to_scipy(self) -> Any:
        return stats.cauchy(loc=self.loc, scale=self.scale)


@dataclass(frozen=True, eq=False)
class CategoricalParameters(FittedParameters):
    """
    Category labels with their probabilities, in first-seen order.

    ``to_scipy`` returns a discrete distribution over category indices.
    """

    categories: tuple
    probabilities: NDArray[np.float64]

    def as_dict(self) -> dict:
        return dict(zip(self.categories, self.probabilities.tolist()))

    def to_scipy(self) -> Any:
        if not self.categories:
            raise ValueError("no categories observed")
        return stats.rv_discrete(values=(np.arange(len(self.categories)), self.probabilities))


@dataclass(frozen=True, eq=False)
class MultinomialParameters(FittedParameters):
    """Multinomial(n, p)."""

    n: int
    p: NDArray[np.float64]

    def to_scipy(self) -> Any:
        return stats.multinomial(self.n, self.p)


@dataclass(frozen=True, eq=False)
class MvNormalParameters(FittedParameters):
    """Multivariate normal with mean vector and covariance matrix."""

    mean: NDArray[np.float64]
    cov: NDArray[np.float64]

    def to_scipy(self) -> Any:
        return stats.multivariate_normal(mean=self.mean, cov=self.cov)
