"""Statistics of a vector stream."""

from typing import Any, Callable

import numpy as np
from numpy.typing import NDArray

from ..core.smoothing import smooth_rank1, smooth_vec
from ..core.stat import OnlineStat, as_vector
from ..exceptions import IncompatibleConfigError, InvalidParameterError, ShapeMismatchError
from ..weights import Weight


def _check_dim(p: int) -> int:
    if p < 1:
        raise InvalidParameterError(f"dimension must be at least 1, got {p}")
    return int(p)


class CovMatrix(OnlineStat):
    """
    Covariance matrix of ``p`` variables.

    Keeps the mean vector b = E[x] and the raw second-moment matrix
    A = E[x x'], each smoothed per observation (A by a rank-1 update). The
    covariance is (A - b b') times the bias correction, symmetrised.
    Merging smooths both raw moments; the mean-shift term is implicit in A.

    Args:
        p: Number of variables
        weight: Weight policy (default ``EqualWeight()``)

    Example:
        >>> x = np.random.default_rng(1).standard_normal((1000, 3))
        >>> o = CovMatrix(3).fit(x)
        >>> o.cor().diagonal()
        array([1., 1., 1.])
    """

    input_kind = "vector"

    def __init__(self, p: int, weight: Weight | None = None) -> None:
        p = _check_dim(p)
        super().__init__(weight)
        self.A = np.zeros((p, p))
        self.b = np.zeros(p)

    def __len__(self) -> int:
        return len(self.b)

    def _coerce(self, y: Any) -> NDArray[np.float64]:
        return as_vector(y, len(self.b))

    def _update(self, y: NDArray[np.float64], gamma: float) -> None:
        smooth_vec(self.b, y, gamma)
        smooth_rank1(self.A, y, gamma)

    def _check_compatible(self, other: "CovMatrix") -> None:
        if len(other) != len(self):
            raise ShapeMismatchError(f"dimensions differ: {len(self)} vs {len(other)}")

    def _merge(self, other: "CovMatrix", gamma: float) -> None:
        smooth_vec(self.A, other.A, gamma)
        smooth_vec(self.b, other.b, gamma)

    def value(self) -> NDArray[np.float64]:
        c = self.A - np.outer(self.b, self.b)
        c = 0.5 * (c + c.T)
        return c * self.unbias

    def mean(self) -> NDArray[np.float64]:
        return self.b.copy()

    def cov(self) -> NDArray[np.float64]:
        return self.value()

    def var(self) -> NDArray[np.float64]:
        return np.diag(self.value()).copy()

    def std(self) -> NDArray[np.float64]:
        return np.sqrt(self.var())

    def cor(self) -> NDArray[np.float64]:
        """
        Correlation matrix.

        Variables with zero variance get a correlation of 0 with every
        other variable; the diagonal is always exactly 1.
        """
        c = self.value()
        d = np.sqrt(np.clip(np.diag(c), 0.0, None))
        with np.errstate(divide="ignore"):
            inv = np.where(d > 0, 1.0 / d, 0.0)
        r = c * np.outer(inv, inv)
        np.fill_diagonal(r, 1.0)
        return r


class MV(OnlineStat):
    """
    ``p`` independent copies of a scalar statistic, one per vector element.

    Every element shares one coefficient per observation.

    Args:
        p: Vector length
        factory: Zero-argument callable building one scalar stat
        weight: Weight policy (default ``EqualWeight()``)

    Example:
        >>> o = MV(2, Variance).fit([[1.0, 10.0], [3.0, 30.0]])
        >>> o.value()
        array([  2., 200.])
    """

    input_kind = "vector"

    def __init__(
        self,
        p: int,
        factory: Callable[[], OnlineStat],
        weight: Weight | None = None,
    ) -> None:
        p = _check_dim(p)
        super().__init__(weight)
        self.stats = [factory() for _ in range(p)]
        for s in self.stats:
            if s.input_kind != "scalar":
                raise InvalidParameterError(
                    f"MV needs scalar statistics, got {type(s).__name__}"
                )
            s.weight = self.weight

    def share_weight(self, weight: Weight) -> None:
        super().share_weight(weight)
        for s in self.stats:
            s.share_weight(weight)

    def __len__(self) -> int:
        return len(self.stats)

    def _coerce(self, y: Any) -> NDArray[np.float64]:
        return as_vector(y, len(self.stats))

    def _update(self, y: NDArray[np.float64], gamma: float) -> None:
        for s, yi in zip(self.stats, y):
            s.update(yi, gamma)

    def _check_compatible(self, other: "MV") -> None:
        if len(other) != len(self):
            raise ShapeMismatchError(f"dimensions differ: {len(self)} vs {len(other)}")
        if type(other.stats[0]) is not type(self.stats[0]):
            raise IncompatibleConfigError(
                f"element statistics differ: {type(self.stats[0]).__name__} "
                f"vs {type(other.stats[0]).__name__}"
            )

    def _merge(self, other: "MV", gamma: float) -> None:
        for s, o in zip(self.stats, other.stats):
            s.blend(o, gamma)

    def value(self) -> Any:
        """Element values as an array when they are scalars, else a list."""
        values = [s.value() for s in self.stats]
        if all(np.isscalar(v) for v in values):
            return np.array(values, dtype=np.float64)
        return values
