"""Exception types raised by streamstats.

All errors derive from ``ValueError`` so code that guards accumulator calls
with a plain ``except ValueError`` keeps working.
"""


class StreamStatsError(Exception):
    """Base class for all streamstats errors."""


class InvalidParameterError(StreamStatsError, ValueError):
    """
    A weight policy or statistic was constructed with invalid parameters.

    Examples: exponential decay outside [0, 1], a non-positive vector length,
    quantile levels outside (0, 1).
    """


class ShapeMismatchError(StreamStatsError, ValueError):
    """An observation or peer accumulator has the wrong vector/matrix dimension."""


class IncompatibleConfigError(StreamStatsError, ValueError):
    """Two accumulators track different structural parameters and cannot be merged."""
