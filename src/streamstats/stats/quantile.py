"""
Stochastic-approximation estimators: quantiles and loss minimisers.

All estimators here default to a ``LearningRate`` policy; its coefficient
is used as the step size. Several quantile levels tracked by one estimator
evolve independently but share the policy's update counter.

References:
    Hunter, D.R. & Lange, K. (2000). Quantile Regression via an MM Algorithm.
    Toulis, P. & Airoldi, E.M. (2017). Asymptotic and finite-sample properties
    of estimators based on stochastic gradients. (implicit SGD)
"""

from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np
from numpy.typing import NDArray

from ..core.smoothing import smooth, smooth_vec
from ..core.stat import OnlineStat
from ..exceptions import IncompatibleConfigError, InvalidParameterError
from ..weights import LearningRate, Weight

DEFAULT_TAU = (0.25, 0.5, 0.75)


class Loss(Protocol):
    """A loss of an estimate ``v`` against an observation ``y``."""

    def deriv(self, y: float, v: float) -> float:
        """(Sub)derivative of the loss with respect to ``v``."""
        ...


@dataclass(frozen=True)
class QuantileLoss:
    """
    Pinball loss at level tau; its minimiser is the tau-quantile.

    Subgradient in the estimate: 1{y < v} - tau.
    """

    tau: float

    def __post_init__(self) -> None:
        if not 0.0 < self.tau < 1.0:
            raise InvalidParameterError(f"tau must be in (0, 1), got {self.tau}")

    def deriv(self, y: float, v: float) -> float:
        return float(y < v) - self.tau


@dataclass(frozen=True)
class L1DistLoss:
    """Absolute loss |v - y|; its minimiser is the median."""

    def deriv(self, y: float, v: float) -> float:
        return float(np.sign(v - y))


@dataclass(frozen=True)
class L2DistLoss:
    """Squared loss (v - y)^2; its minimiser is the mean."""

    def deriv(self, y: float, v: float) -> float:
        return 2.0 * (v - y)


def _as_tau(tau: Sequence[float]) -> NDArray[np.float64]:
    tau = np.asarray(tau, dtype=np.float64).ravel()
    if tau.size == 0:
        raise InvalidParameterError("at least one quantile level is required")
    if np.any((tau <= 0.0) | (tau >= 1.0)):
        raise InvalidParameterError(f"quantile levels must be in (0, 1), got {tau.tolist()}")
    return tau


class StochasticLoss(OnlineStat):
    """
    Minimise a loss over a single value by stochastic gradient descent.

    Update: v <- v - gamma * loss.deriv(y, v)

    Example:
        >>> o1 = StochasticLoss(QuantileLoss(0.7))  # approx. 0.7 quantile
        >>> o2 = StochasticLoss(L2DistLoss())       # approx. mean
        >>> o3 = StochasticLoss(L1DistLoss())       # approx. median
    """

    default_weight = LearningRate

    def __init__(self, loss: Loss, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.loss = loss
        self.v = 0.0

    def _update(self, y: float, gamma: float) -> None:
        self.v -= gamma * self.loss.deriv(y, self.v)

    def _check_compatible(self, other: "StochasticLoss") -> None:
        if other.loss != self.loss:
            raise IncompatibleConfigError(f"losses differ: {self.loss} vs {other.loss}")

    def _merge(self, other: "StochasticLoss", gamma: float) -> None:
        self.v = smooth(self.v, other.v, gamma)

    def value(self) -> float:
        return self.v


class _QuantileBase(OnlineStat):
    default_weight = LearningRate

    def __init__(self, tau: Sequence[float] = DEFAULT_TAU, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.tau = _as_tau(tau)
        self.q = np.zeros_like(self.tau)

    def _check_compatible(self, other: "_QuantileBase") -> None:
        if not np.array_equal(self.tau, other.tau):
            raise IncompatibleConfigError(
                f"objects track different quantiles: {self.tau.tolist()} vs {other.tau.tolist()}"
            )

    def value(self) -> NDArray[np.float64]:
        """Current estimates, one per quantile level."""
        return self.q.copy()


class QuantileSGD(_QuantileBase):
    """
    Approximate quantiles by stochastic (sub)gradient descent on the pinball loss.

    Update per level: q <- q - gamma * (1{y < q} - tau)

    Args:
        tau: Quantile levels in (0, 1)
        weight: Step-size policy (default ``LearningRate()``)

    Example:
        >>> o = QuantileSGD((0.1, 0.5, 0.9), weight=LearningRate(0.7))
        >>> o.fit(np.random.default_rng(0).standard_normal(10_000)).value()
    """

    def _update(self, y: float, gamma: float) -> None:
        self.q -= gamma * ((y < self.q) - self.tau)

    def _merge(self, other: "QuantileSGD", gamma: float) -> None:
        smooth_vec(self.q, other.q, gamma)


class QuantileISGD(_QuantileBase):
    """
    Approximate quantiles by implicit stochastic gradient descent.

    The implicit update q_new = q - gamma * grad(q_new) is solved
    approximately with ``K`` damped fixed-point iterations; iteration ``k``
    blends toward the candidate with coefficient min(1, c / k). Costs ``K``
    times a plain SGD step per observation, with a steadier path when the
    step size is large.

    Args:
        tau: Quantile levels in (0, 1)
        K: Number of inner iterations, at least 1
        step_constant: The ``c`` in the c / k damping, positive. With the
            clamp at 1, any c >= K (c = 10 with the default K = 10 included)
            leaves every iteration undamped, so each inner step jumps to the
            candidate; the default c = 1 damps from the second iteration on.
        weight: Step-size policy (default ``LearningRate()``)
    """

    def __init__(
        self,
        tau: Sequence[float] = DEFAULT_TAU,
        K: int = 10,
        step_constant: float = 1.0,
        weight: Weight | None = None,
    ) -> None:
        if K < 1:
            raise InvalidParameterError(f"K must be at least 1, got {K}")
        if step_constant <= 0:
            raise InvalidParameterError(f"step_constant must be positive, got {step_constant}")
        super().__init__(tau, weight)
        self.K = K
        self.step_constant = float(step_constant)

    def _update(self, y: float, gamma: float) -> None:
        x = self.q.copy()
        for k in range(1, self.K + 1):
            candidate = self.q - gamma * ((y < x) - self.tau)
            smooth_vec(x, candidate, min(1.0, self.step_constant / k))
        self.q = x

    def _check_compatible(self, other: "QuantileISGD") -> None:
        super()._check_compatible(other)
        if (other.K, other.step_constant) != (self.K, self.step_constant):
            raise IncompatibleConfigError("inner iteration settings differ")

    def _merge(self, other: "QuantileISGD", gamma: float) -> None:
        smooth_vec(self.q, other.q, gamma)


class QuantileMM(_QuantileBase):
    """
    Approximate quantiles by an online majorize-minimize (MM) algorithm.

    The pinball loss is majorised by a quadratic whose weights are
    w = 1 / (|y - q| + eps). Smoothed sums s = E[w y], t = E[w] and
    o = E[1] give the closed-form minimiser

        q = (s + o * (2 * tau - 1)) / t

    ``eps`` keeps the weight finite when an observation equals the estimate.

    Args:
        tau: Quantile levels in (0, 1)
        eps: Small positive constant
        weight: Step-size policy (default ``LearningRate()``)
    """

    def __init__(
        self,
        tau: Sequence[float] = DEFAULT_TAU,
        eps: float = 1e-8,
        weight: Weight | None = None,
    ) -> None:
        if eps <= 0:
            raise InvalidParameterError(f"eps must be positive, got {eps}")
        super().__init__(tau, weight)
        self.eps = float(eps)
        self.s = np.zeros_like(self.tau)
        self.t = np.zeros_like(self.tau)
        self.o = 0.0

    def _update(self, y: float, gamma: float) -> None:
        self.o = smooth(self.o, 1.0, gamma)
        w = 1.0 / (np.abs(y - self.q) + self.eps)
        smooth_vec(self.s, w * y, gamma)
        smooth_vec(self.t, w, gamma)
        self.q = (self.s + self.o * (2.0 * self.tau - 1.0)) / self.t

    def _merge(self, other: "QuantileMM", gamma: float) -> None:
        smooth_vec(self.q, other.q, gamma)
        smooth_vec(self.s, other.s, gamma)
        smooth_vec(self.t, other.t, gamma)
        self.o = smooth(self.o, other.o, gamma)
