"""Statistics of a scalar stream."""

import math

import numpy as np
from numpy.typing import NDArray

from ..core.smoothing import smooth, smooth_vec
from ..core.stat import OnlineStat
from ..exceptions import IncompatibleConfigError, InvalidParameterError
from ..weights import EqualWeight, Weight


class Mean(OnlineStat):
    """
    Univariate mean.

    Example:
        >>> Mean().fit([1.0, 2.0, 3.0, 4.0]).value()
        2.5
    """

    def __init__(self, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.mu = 0.0

    def _update(self, y: float, gamma: float) -> None:
        self.mu = smooth(self.mu, y, gamma)

    def _merge(self, other: "Mean", gamma: float) -> None:
        self.mu = smooth(self.mu, other.mu, gamma)

    def value(self) -> float:
        return self.mu

    def mean(self) -> float:
        return self.mu


class Variance(OnlineStat):
    """
    Univariate variance.

    Keeps the mean and the biased (population) variance. The update is the
    weighted analogue of Welford's algorithm:

        mu_new = smooth(mu, y, gamma)
        s2_new = smooth(s2, (y - mu_new) * (y - mu), gamma)

    which holds for any weight policy, not only equal weights. The reported
    value applies the policy's bias correction, n / (n - 1) under equal
    weights; the stored ``sigma2`` stays biased so merges remain exact.

    Merging uses the parallel-variance formula, which adds the spread
    between the two means:

        s2 = smooth(s2_1, s2_2, gamma) + gamma * (1 - gamma) * (mu_2 - mu_1)^2

    Before two observations the value is 0.0.
    """

    def __init__(self, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.mu = 0.0
        self.sigma2 = 0.0

    def _update(self, y: float, gamma: float) -> None:
        mu_prev = self.mu
        self.mu = smooth(self.mu, y, gamma)
        self.sigma2 = smooth(self.sigma2, (y - self.mu) * (y - mu_prev), gamma)

    def _merge(self, other: "Variance", gamma: float) -> None:
        delta = other.mu - self.mu
        self.sigma2 = smooth(self.sigma2, other.sigma2, gamma) + delta**2 * gamma * (1.0 - gamma)
        self.mu = smooth(self.mu, other.mu, gamma)

    def value(self) -> float:
        return self.sigma2 * self.unbias

    def mean(self) -> float:
        return self.mu

    def var(self) -> float:
        return self.value()

    def std(self) -> float:
        return math.sqrt(self.value())


class Extrema(OnlineStat):
    """
    Minimum and maximum.

    The weight coefficient is ignored. Before any observation the value is
    (inf, -inf).
    """

    def __init__(self, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.min = math.inf
        self.max = -math.inf

    def _update(self, y: float, gamma: float) -> None:
        if y < self.min:
            self.min = y
        if y > self.max:
            self.max = y

    def _merge(self, other: "Extrema", gamma: float) -> None:
        self.min = min(self.min, other.min)
        self.max = max(self.max, other.max)

    def value(self) -> tuple[float, float]:
        """Return (min, max)."""
        return self.min, self.max

    def extrema(self) -> tuple[float, float]:
        return self.value()


class Moments(OnlineStat):
    """
    First four non-central moments E[y], E[y^2], E[y^3], E[y^4].

    ``skewness`` and ``kurtosis`` (excess) are derived from the population
    central moments, so under equal weights they agree with
    ``scipy.stats.skew`` and ``scipy.stats.kurtosis`` with default
    arguments. Both return 0.0 while the variance is zero.
    """

    def __init__(self, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.m = np.zeros(4)

    def _update(self, y: float, gamma: float) -> None:
        y2 = y * y
        smooth_vec(self.m, (y, y2, y2 * y, y2 * y2), gamma)

    def _merge(self, other: "Moments", gamma: float) -> None:
        smooth_vec(self.m, other.m, gamma)

    def value(self) -> NDArray[np.float64]:
        return self.m.copy()

    def mean(self) -> float:
        return float(self.m[0])

    def _central2(self) -> float:
        return max(float(self.m[1] - self.m[0] ** 2), 0.0)

    def var(self) -> float:
        return self._central2() * self.unbias

    def std(self) -> float:
        return math.sqrt(self.var())

    def skewness(self) -> float:
        m1, m2, m3, _ = self.m
        v = self._central2()
        if v == 0.0:
            return 0.0
        return float((m3 - 3.0 * m1 * m2 + 2.0 * m1**3) / v**1.5)

    def kurtosis(self) -> float:
        m1, m2, m3, m4 = self.m
        v = self._central2()
        if v == 0.0:
            return 0.0
        return float((m4 - 4.0 * m1 * m3 + 6.0 * m1**2 * m2 - 3.0 * m1**4) / v**2 - 3.0)


class OrderStats(OnlineStat):
    """
    Average order statistics over batches of size ``b``.

    Observations are buffered until ``b`` of them are in; the batch is then
    sorted and the running order-statistic vector is smoothed toward it.
    The unit of weighting is the batch: the coefficient comes from
    ``batch_weight`` (default equal weights, i.e. 1 / batches seen), and
    the per-observation coefficient is ignored.

    Args:
        b: Batch size, at least 1
        weight: Observation-level weight policy (counts observations only)
        batch_weight: Weight policy over batches

    Example:
        >>> o = OrderStats(5).fit(np.arange(10.0))
        >>> o.value()
        array([2.5, 3.5, 4.5, 5.5, 6.5])
    """

    def __init__(
        self,
        b: int,
        weight: Weight | None = None,
        batch_weight: Weight | None = None,
    ) -> None:
        if b < 1:
            raise InvalidParameterError(f"batch size must be at least 1, got {b}")
        super().__init__(weight)
        self.batch_weight = batch_weight if batch_weight is not None else EqualWeight()
        self.order = np.zeros(b)
        self.buffer = np.zeros(b)
        self.i = 0

    @property
    def nreps(self) -> int:
        """Number of complete batches folded in."""
        return self.batch_weight.nobs

    def _push(self, y: float) -> None:
        self.buffer[self.i] = y
        self.i += 1
        if self.i == len(self.buffer):
            self.buffer.sort()
            smooth_vec(self.order, self.buffer, self.batch_weight.advance(1))
            self.i = 0

    def _update(self, y: float, gamma: float) -> None:
        self._push(y)

    def _check_compatible(self, other: "OrderStats") -> None:
        if len(other.order) != len(self.order):
            raise IncompatibleConfigError(
                f"batch sizes differ: {len(self.order)} vs {len(other.order)}"
            )

    def _merge(self, other: "OrderStats", gamma: float) -> None:
        if other.nreps > 0:
            smooth_vec(self.order, other.order, self.batch_weight.advance(other.nreps))
        # The peer's partial batch continues filling ours.
        for y in other.buffer[: other.i]:
            self._push(float(y))

    def value(self) -> NDArray[np.float64]:
        return self.order.copy()


class Sum(OnlineStat):
    """Running total. The weight coefficient is ignored."""

    def __init__(self, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.sum = 0.0

    def _update(self, y: float, gamma: float) -> None:
        self.sum += y

    def _merge(self, other: "Sum", gamma: float) -> None:
        self.sum += other.sum

    def value(self) -> float:
        return self.sum


class Diff(OnlineStat):
    """
    Last value and last difference of the stream.

    Merging treats ``other`` as the continuation of this stream and adopts
    its last value and difference.
    """

    def __init__(self, weight: Weight | None = None) -> None:
        super().__init__(weight)
        self.diff = 0.0
        self.last = 0.0

    def _update(self, y: float, gamma: float) -> None:
        self.diff = y - self.last
        self.last = y

    def _merge(self, other: "Diff", gamma: float) -> None:
        self.diff = other.diff
        self.last = other.last

    def value(self) -> float:
        return self.diff
