"""Driving several statistics from one stream with a shared weight policy."""

import logging
from typing import Any, Iterator

from .core.stat import OnlineStat, iter_observations, merge_coefficient
from .exceptions import IncompatibleConfigError, InvalidParameterError
from .weights import Weight

logger = logging.getLogger(__name__)


class Series:
    """
    A group of statistics fed from the same stream.

    One weight policy is shared by every member: each observation advances
    it once and the resulting coefficient is handed to every statistic. All
    members must take the same kind of input (scalar, vector or any).

    Args:
        *stats: Statistics to feed
        weight: Shared weight policy. Defaults to a fresh instance of the
            first statistic's default policy.

    Example:
        >>> s = Series(Mean(), Variance(), Extrema())
        >>> s.fit([1.0, 2.0, 3.0, 4.0]).value()
        (2.5, 1.6666666666666667, (1.0, 4.0))
    """

    def __init__(self, *stats: OnlineStat, weight: Weight | None = None) -> None:
        if not stats:
            raise InvalidParameterError("a Series needs at least one statistic")
        kinds = {s.input_kind for s in stats}
        if len(kinds) > 1:
            raise IncompatibleConfigError(f"statistics take different inputs: {sorted(kinds)}")
        self.stats = list(stats)
        self.input_kind = kinds.pop()
        self.weight = weight if weight is not None else stats[0].default_weight()
        for s in self.stats:
            s.share_weight(self.weight)

    @property
    def nobs(self) -> int:
        return self.weight.nobs

    def count(self) -> int:
        return self.nobs

    def absorb(self, y: Any) -> "Series":
        """Fold one observation into every member."""
        ys = [s._coerce(y) for s in self.stats]
        gamma = self.weight.advance(1)
        for s, yi in zip(self.stats, ys):
            s._update(yi, gamma)
            s.nobs += 1
        return self

    def fit(self, data: Any) -> "Series":
        """
        Absorb every observation of a batch, in order.

        Args:
            data: Iterable, numpy array or pandas object

        Returns:
            Self (for method chaining)
        """
        n0 = self.nobs
        for y in iter_observations(data, self.input_kind):
            self.absorb(y)
        logger.debug("Series fit %d observation(s), nobs=%d", self.nobs - n0, self.nobs)
        return self

    def merge(self, other: "Series", gamma: "float | Weight | None" = None) -> "Series":
        """
        Merge a peer series member by member.

        Args:
            other: Series holding the same statistic types in the same order
            gamma: Blend coefficient for ``other``; if None the shared policy
                folds in ``other.weight`` and supplies it; a weight
                policy passed here is asked instead

        Returns:
            Self (for method chaining)
        """
        if len(other.stats) != len(self.stats):
            raise IncompatibleConfigError(
                f"series hold {len(self.stats)} and {len(other.stats)} statistics"
            )
        for s, o in zip(self.stats, other.stats):
            s._check_peer(o)
        if other.nobs == 0:
            return self
        gamma = merge_coefficient(self.weight, other.weight, other.nobs, gamma)
        logger.debug("Merging Series: nobs %d + %d, gamma=%.6g", self.nobs, other.nobs, gamma)
        for s, o in zip(self.stats, other.stats):
            s.blend(o, gamma)
        return self

    def value(self) -> tuple:
        """Values of all members, in order."""
        return tuple(s.value() for s in self.stats)

    def __len__(self) -> int:
        return len(self.stats)

    def __iter__(self) -> Iterator[OnlineStat]:
        return iter(self.stats)

    def __getitem__(self, i: int) -> OnlineStat:
        return self.stats[i]

    def __repr__(self) -> str:
        names = ", ".join(type(s).__name__ for s in self.stats)
        return f"Series({names}; nobs={self.nobs}, weight={self.weight!r})"
