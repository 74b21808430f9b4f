"""Core abstractions for streamstats."""

from .smoothing import smooth, smooth_vec, smooth_rank1
from .stat import OnlineStat, iter_observations, as_vector, merge_coefficient

__all__ = [
    "smooth",
    "smooth_vec",
    "smooth_rank1",
    "OnlineStat",
    "iter_observations",
    "as_vector",
    "merge_coefficient",
]
