"""Accumulator contract shared by every online statistic."""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterator, Literal

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from ..exceptions import ShapeMismatchError
from ..weights import EqualWeight, Weight

logger = logging.getLogger(__name__)

InputKind = Literal["scalar", "vector", "any"]


def iter_observations(data: Any, kind: InputKind = "scalar") -> Iterator[Any]:
    """
    Yield single observations from a batch of data.

    Args:
        data: Batch of observations. Scalars streams may be a number, list,
            numpy array or ``pd.Series``; vector streams a 2-D array, a list of
            vectors or a ``pd.DataFrame`` (one row per observation); "any"
            streams an arbitrary iterable.
        kind: Input kind of the consuming statistic

    Yields:
        ``float`` for scalar streams, 1-D float arrays for vector streams,
        the raw items otherwise.
    """
    if isinstance(data, (pd.Series, pd.DataFrame)):
        data = data.to_numpy()

    if kind == "scalar":
        for y in np.ravel(np.asarray(data, dtype=np.float64)):
            yield float(y)
    elif kind == "vector":
        arr = np.asarray(data, dtype=np.float64)
        if arr.ndim > 2:
            raise ShapeMismatchError(f"vector observations must be 1-D or 2-D, got {arr.ndim}-D")
        yield from np.atleast_2d(arr)
    else:
        yield from data


def as_vector(x: Any, p: int) -> NDArray[np.float64]:
    """Coerce one vector observation to a float array of length ``p``."""
    x = np.asarray(x, dtype=np.float64)
    if x.shape != (p,):
        raise ShapeMismatchError(f"expected a vector of length {p}, got shape {x.shape}")
    return x


def merge_coefficient(
    weight: Weight,
    other_weight: Weight,
    n_other: int,
    gamma: "float | Weight | None" = None,
) -> float:
    """
    Resolve the coefficient for merging a peer with ``n_other`` observations.

    The receiving policy always ends up counting the peer's observations.

    Args:
        weight: Policy of the receiving side
        other_weight: Policy of the peer
        n_other: Peer's observation count, at least 1
        gamma: None to ask ``weight`` for ``merge_gamma``, another
            policy to ask instead, or a fixed coefficient

    Returns:
        Coefficient applied to the peer's statistics
    """
    if gamma is None:
        return weight.merge_gamma(other_weight, n_other)
    weight.merge(other_weight)
    if isinstance(gamma, Weight):
        return gamma.advance(n_other)
    return float(gamma)


class OnlineStat(ABC):
    """
    Abstract base class for online statistics.

    An online statistic keeps fixed-size sufficient statistics that are
    folded forward one observation at a time and can report a current
    value at any point. Two accumulators of the same kind can be merged
    into one representing the union of their observations.

    The update rule is split in two layers:

    - ``update(y, gamma)`` / ``blend(other, gamma)`` are pure functions of
      the prior state, the input and the coefficient. They never touch the
      weight policy, so a driver sharing one policy across several stats
      can call them directly.
    - ``absorb(y)`` / ``merge(other)`` ask this stat's own weight policy
      for the coefficient and then delegate to the kernels above.

    Subclasses implement ``_update``, ``_merge`` and ``value``.

    Example:
        >>> o = Variance().fit([1.0, 2.0, 3.0, 4.0])
        >>> o.value()
        1.6666666666666667
    """

    input_kind: ClassVar[InputKind] = "scalar"
    default_weight: ClassVar[type] = EqualWeight

    def __init__(self, weight: Weight | None = None) -> None:
        self.weight = weight if weight is not None else self.default_weight()
        self.nobs = 0

    # ------------------------------------------------------------------ feed

    def absorb(self, y: Any) -> "OnlineStat":
        """
        Fold one observation into the statistic.

        Args:
            y: A scalar, or a vector for vector-input statistics

        Returns:
            Self (for method chaining)
        """
        y = self._coerce(y)
        gamma = self.weight.advance(1)
        self._update(y, gamma)
        self.nobs += 1
        return self

    def update(self, y: Any, gamma: float) -> None:
        """
        Fold one observation in with an externally supplied coefficient.

        Args:
            y: Observation
            gamma: Blend coefficient in (0, 1]
        """
        y = self._coerce(y)
        self._update(y, gamma)
        self.nobs += 1

    def fit(self, data: Any) -> "OnlineStat":
        """
        Absorb every observation of a batch, in order.

        Args:
            data: Iterable, numpy array or pandas object (see ``iter_observations``)

        Returns:
            Self (for method chaining)
        """
        for y in iter_observations(data, self.input_kind):
            self.absorb(y)
        return self

    # ----------------------------------------------------------------- merge

    def merge(
        self,
        other: "OnlineStat",
        gamma: "float | Weight | None" = None,
    ) -> "OnlineStat":
        """
        Merge a peer accumulator into this one.

        Args:
            other: Accumulator of the same type, left unchanged
            gamma: Blend coefficient for ``other``. If None, this stat's
                weight policy folds in ``other.weight`` and supplies it; under
                equal weighting that is other.nobs / (self.nobs + other.nobs).
                A weight policy passed here is asked for ``advance(other.nobs)``
                instead.

        Returns:
            Self (for method chaining)

        Raises:
            TypeError: If ``other`` is a different statistic
            ShapeMismatchError: If the dimensions differ
            IncompatibleConfigError: If the structural parameters differ
        """
        self._check_peer(other)
        if other.nobs == 0:
            return self
        gamma = merge_coefficient(self.weight, other.weight, other.nobs, gamma)
        logger.debug(
            "Merging %s: nobs %d + %d, gamma=%.6g",
            type(self).__name__, self.nobs, other.nobs, gamma,
        )
        self.blend(other, gamma)
        return self

    def blend(self, other: "OnlineStat", gamma: float) -> None:
        """
        Merge kernel: combine sufficient statistics with a given coefficient.

        Args:
            other: Accumulator of the same type
            gamma: Coefficient applied to ``other``'s statistics
        """
        self._check_peer(other)
        if other.nobs == 0:
            return
        self._merge(other, gamma)
        self.nobs += other.nobs

    def _check_peer(self, other: "OnlineStat") -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"cannot merge {type(other).__name__} into {type(self).__name__}"
            )
        self._check_compatible(other)

    def _check_compatible(self, other: "OnlineStat") -> None:
        """Raise if ``other`` has a different shape or configuration."""

    def share_weight(self, weight: Weight) -> None:
        """Make this stat, and any stat nested in it, report against ``weight``."""
        self.weight = weight

    # ----------------------------------------------------------------- value

    def count(self) -> int:
        """Number of observations absorbed, including merged peers."""
        return self.nobs

    @property
    def unbias(self) -> float:
        """Bias-correction factor for this stat's observation count."""
        return self.weight.bias_correction(self.nobs)

    @abstractmethod
    def value(self) -> Any:
        """Current reportable value. Never mutates the sufficient statistics."""
        ...

    # ------------------------------------------------------------- internals

    def _coerce(self, y: Any) -> Any:
        return float(y)

    @abstractmethod
    def _update(self, y: Any, gamma: float) -> None:
        ...

    @abstractmethod
    def _merge(self, other: Any, gamma: float) -> None:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nobs={self.nobs})"
