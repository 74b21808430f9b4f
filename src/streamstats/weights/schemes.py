"""
Weight policy implementations.

All policies follow the convention:
- ``advance(n_new)`` mutates the observation count and returns a coefficient in (0, 1]
- ``advance_silent(n_new)`` mutates the count only
- Only the equal-weight policy applies a bias correction
"""

from dataclasses import dataclass, field

from ..exceptions import IncompatibleConfigError, InvalidParameterError
from .base import Weight


def _check_n_new(n_new: int) -> None:
    if n_new < 1:
        raise ValueError(f"n_new must be at least 1, got {n_new}")


def _decay_from(lam: float, lookback: int | None) -> float:
    if lookback is not None:
        if lookback < 1:
            raise InvalidParameterError(f"lookback must be at least 1, got {lookback}")
        lam = 2.0 / (lookback + 1)
    if not 0.0 <= lam <= 1.0:
        raise InvalidParameterError(f"decay must be in [0, 1], got {lam}")
    return float(lam)


@dataclass
class EqualWeight:
    """
    Equal weights: every observation counts the same.

    Formula: gamma = n_new / nobs

    Produces true running statistics. The k-th single-observation
    coefficient is exactly 1/k.

    Example:
        >>> w = EqualWeight()
        >>> [w.advance() for _ in range(4)]
        [1.0, 0.5, 0.3333333333333333, 0.25]
    """

    nobs: int = field(default=0, init=False)

    def advance(self, n_new: int = 1) -> float:
        """Return n_new / nobs after counting the new observations."""
        _check_n_new(n_new)
        self.nobs += n_new
        return n_new / self.nobs

    def advance_silent(self, n_new: int = 1) -> None:
        self.nobs += n_new

    def merge_gamma(self, other: "Weight", n_new: int) -> float:
        """Count a peer's n_new observations and return their share of the total."""
        return self.advance(n_new)

    def bias_correction(self, n: int) -> float:
        """n / (n - 1) once more than one observation is in, else 1.0."""
        return n / (n - 1) if n > 1 else 1.0

    def merge(self, other: "EqualWeight") -> None:
        self.nobs += other.nobs

    def reset(self) -> None:
        self.nobs = 0


@dataclass
class ExponentialWeight:
    """
    Exponential weights: the coefficient is held constant.

    Formula: gamma = lam, or lam = 2 / (lookback + 1)

    Recent observations dominate; memory is effectively bounded by
    the lookback.

    Args:
        lam: Constant coefficient in [0, 1]
        lookback: If given, overrides lam with 2 / (lookback + 1)

    Example:
        >>> w = ExponentialWeight(lookback=19)
        >>> w.lam
        0.1
    """

    lam: float = 1.0
    lookback: int | None = None
    nobs: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.lam = _decay_from(self.lam, self.lookback)

    def advance(self, n_new: int = 1) -> float:
        """Count the new observations and return the constant lam."""
        _check_n_new(n_new)
        self.nobs += n_new
        return self.lam

    def advance_silent(self, n_new: int = 1) -> None:
        self.nobs += n_new

    def merge_gamma(self, other: "Weight", n_new: int) -> float:
        return self.advance(n_new)

    def bias_correction(self, n: int) -> float:
        return 1.0

    def merge(self, other: "ExponentialWeight") -> None:
        self.nobs += other.nobs

    def reset(self) -> None:
        self.nobs = 0


@dataclass
class BoundedExponentialWeight:
    """
    Equal weights until the coefficient would drop below lam, then hold at lam.

    Formula: gamma = max(n_new / nobs, lam)

    A warm-up-then-hold policy: behaves like running statistics for the
    first observations and like an exponential moving average afterwards.

    Args:
        lam: Coefficient floor in [0, 1]
        lookback: If given, overrides lam with 2 / (lookback + 1)
    """

    lam: float = 1.0
    lookback: int | None = None
    nobs: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.lam = _decay_from(self.lam, self.lookback)

    def advance(self, n_new: int = 1) -> float:
        _check_n_new(n_new)
        self.nobs += n_new
        return max(n_new / self.nobs, self.lam)

    def advance_silent(self, n_new: int = 1) -> None:
        self.nobs += n_new

    def merge_gamma(self, other: "Weight", n_new: int) -> float:
        return self.advance(n_new)

    def bias_correction(self, n: int) -> float:
        return 1.0

    def merge(self, other: "BoundedExponentialWeight") -> None:
        self.nobs += other.nobs

    def reset(self) -> None:
        self.nobs = 0


@dataclass
class LearningRate:
    """
    Decaying learning rate for stochastic approximation.

    Formula: gamma_t = max(minstep, t ^ -r)

    ``t`` counts updates (calls to ``advance``), not observations, so a
    batched update of many observations moves the rate by one step.

    Args:
        r: Decay exponent, must be positive. Robbins-Monro convergence
            needs 0.5 < r <= 1.
        minstep: Floor on the coefficient, in [0, 1]

    Example:
        >>> w = LearningRate(r=0.5, minstep=0.4)
        >>> [round(w.advance(), 3) for _ in range(8)]
        [1.0, 0.707, 0.577, 0.5, 0.447, 0.408, 0.4, 0.4]
    """

    r: float = 0.6
    minstep: float = 0.0
    nobs: int = field(default=0, init=False)
    nups: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.r <= 0:
            raise InvalidParameterError(f"r must be positive, got {self.r}")
        if not 0.0 <= self.minstep <= 1.0:
            raise InvalidParameterError(f"minstep must be in [0, 1], got {self.minstep}")

    def advance(self, n_new: int = 1) -> float:
        _check_n_new(n_new)
        self.nobs += n_new
        self.nups += 1
        return max(self.minstep, self.nups ** -self.r)

    def advance_silent(self, n_new: int = 1) -> None:
        self.nobs += n_new
        self.nups += 1

    def merge_gamma(self, other: "Weight", n_new: int) -> float:
        return self.advance(n_new)

    def bias_correction(self, n: int) -> float:
        return 1.0

    def merge(self, other: "LearningRate") -> None:
        self.nobs += other.nobs
        self.nups += other.nups

    def reset(self) -> None:
        self.nobs = 0
        self.nups = 0


@dataclass
class LearningRate2:
    """
    Rational learning rate (Bottou, "Stochastic Gradient Descent Tricks").

    Formula: gamma_t = max(minstep, gamma / (1 + gamma * c * t))

    Args:
        gamma: Initial rate scale, must be positive
        c: Decay speed, must be positive
        minstep: Floor on the coefficient, in [0, 1]
    """

    gamma: float = 1.0
    c: float = 1.0
    minstep: float = 0.0
    nobs: int = field(default=0, init=False)
    nups: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.gamma <= 0:
            raise InvalidParameterError(f"gamma must be positive, got {self.gamma}")
        if self.c <= 0:
            raise InvalidParameterError(f"c must be positive, got {self.c}")
        if not 0.0 <= self.minstep <= 1.0:
            raise InvalidParameterError(f"minstep must be in [0, 1], got {self.minstep}")
        # The first coefficient is the largest one.
        if self.gamma / (1.0 + self.gamma * self.c) > 1.0:
            raise InvalidParameterError(
                f"gamma={self.gamma}, c={self.c} give a first coefficient above 1"
            )

    def advance(self, n_new: int = 1) -> float:
        _check_n_new(n_new)
        self.nobs += n_new
        self.nups += 1
        return max(self.minstep, self.gamma / (1.0 + self.gamma * self.c * self.nups))

    def advance_silent(self, n_new: int = 1) -> None:
        self.nobs += n_new
        self.nups += 1

    def merge_gamma(self, other: "Weight", n_new: int) -> float:
        return self.advance(n_new)

    def bias_correction(self, n: int) -> float:
        return 1.0

    def merge(self, other: "LearningRate2") -> None:
        self.nobs += other.nobs
        self.nups += other.nups

    def reset(self) -> None:
        self.nobs = 0
        self.nups = 0


@dataclass
class UserWeight:
    """
    Caller-supplied weights.

    Formula: gamma = w / sum(w)

    The caller sets the weight of the next observation with
    ``set_weight`` before the accumulator calls ``advance``.

    Args:
        w: Weight of the next observation, must be positive

    Example:
        >>> w = UserWeight()
        >>> w.set_weight(3.0); w.advance()
        1.0
        >>> w.set_weight(1.0); w.advance()
        0.25
    """

    w: float = 1.0
    denom: float = field(default=0.0, init=False)
    nobs: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.set_weight(self.w)

    def set_weight(self, w: float) -> None:
        """Set the weight applied to the next observation."""
        if w <= 0:
            raise InvalidParameterError(f"user weight must be positive, got {w}")
        self.w = float(w)

    def advance(self, n_new: int = 1) -> float:
        _check_n_new(n_new)
        self.nobs += n_new
        self.denom += self.w
        return self.w / self.denom

    def advance_silent(self, n_new: int = 1) -> None:
        self.nobs += n_new
        self.denom += self.w

    def merge_gamma(self, other: "Weight", n_new: int) -> float:
        """
        Fold in a peer's weight total and return its share, other.denom / denom.
        """
        _check_n_new(n_new)
        self.merge(other)
        return other.denom / self.denom

    def bias_correction(self, n: int) -> float:
        return 1.0

    def merge(self, other: "Weight") -> None:
        if not isinstance(other, UserWeight):
            raise IncompatibleConfigError(
                f"cannot fold {type(other).__name__} counters into UserWeight"
            )
        self.nobs += other.nobs
        self.denom += other.denom

    def reset(self) -> None:
        self.nobs = 0
        self.denom = 0.0
