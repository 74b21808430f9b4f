"""Base protocol for weight policies."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Weight(Protocol):
    """
    Protocol for weight policies used by online statistics.

    A weight policy turns "number of new observations" into the blend
    coefficient ``gamma`` of the next smoothing step
    ``new = (1 - gamma) * old + gamma * observation``.

    Convention:
        - ``nobs`` counts observations seen, never decremented except by ``reset``
        - Every coefficient returned by ``advance`` lies in (0, 1]
        - The first coefficient of a fresh equal-weight policy is 1 (full overwrite)
    """

    nobs: int

    def advance(self, n_new: int = 1) -> float:
        """
        Register ``n_new`` observations and return the next blend coefficient.

        Args:
            n_new: Number of new observations folded in by the next update

        Returns:
            Coefficient in (0, 1]
        """
        ...

    def advance_silent(self, n_new: int = 1) -> None:
        """Register ``n_new`` observations without producing a coefficient."""
        ...

    def bias_correction(self, n: int) -> float:
        """
        Factor turning a biased second moment into an unbiased one.

        Args:
            n: Number of observations behind the second moment

        Returns:
            ``n / (n - 1)`` for equal weighting once ``n > 1``, otherwise 1.0
        """
        ...

    def merge_gamma(self, other: "Weight", n_new: int) -> float:
        """
        Fold in a peer policy holding ``n_new`` observations and return the
        coefficient for blending the peer's statistics.

        Count-based policies return ``advance(n_new)``; ``UserWeight``
        returns the peer's share of the summed user weights.
        """
        ...

    def merge(self, other: "Weight") -> None:
        """Fold the counters of a peer policy into this one."""
        ...

    def reset(self) -> None:
        """Return the policy to its freshly constructed state."""
        ...
