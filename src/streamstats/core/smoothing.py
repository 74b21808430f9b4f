"""
Smoothing primitives shared by every accumulator.

Each primitive forms the convex combination

    new = (1 - gamma) * old + gamma * observation

Written in this form rather than ``old + gamma * (observation - old)`` so that
``gamma = 1`` replaces the old value exactly, which is what happens on the
very first observation under equal weighting. For small ``gamma`` both terms
stay well scaled and nothing cancels.

The vector and matrix variants update their first argument in place and
return it, so fixed-shape buffers are never reallocated.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray


def smooth(old: float, new: float, gamma: float) -> float:
    """
    Blend a scalar accumulator toward a new value.

    Args:
        old: Current accumulator value
        new: Incoming value
        gamma: Blend coefficient in [0, 1]

    Returns:
        (1 - gamma) * old + gamma * new
    """
    return (1.0 - gamma) * old + gamma * new


def smooth_vec(
    old: NDArray[np.float64],
    new: ArrayLike,
    gamma: float,
) -> NDArray[np.float64]:
    """
    Elementwise ``smooth`` of an array, in place.

    Args:
        old: Accumulator array, overwritten with the result
        new: Incoming values, broadcastable to ``old``
        gamma: Blend coefficient in [0, 1]

    Returns:
        ``old``, updated
    """
    old *= 1.0 - gamma
    old += gamma * np.asarray(new, dtype=np.float64)
    return old


def smooth_rank1(
    A: NDArray[np.float64],
    x: ArrayLike,
    gamma: float,
) -> NDArray[np.float64]:
    """
    Symmetric rank-1 smoothing of a square matrix, in place.

    Formula: A <- (1 - gamma) * A + gamma * x x'

    Smoothing every outer product of the stream this way yields the
    running raw second-moment matrix E[X X'].

    Args:
        A: Symmetric (d, d) accumulator, overwritten with the result
        x: Incoming length-d vector
        gamma: Blend coefficient in [0, 1]

    Returns:
        ``A``, updated (still exactly symmetric)
    """
    x = np.asarray(x, dtype=np.float64)
    A *= 1.0 - gamma
    A += gamma * np.outer(x, x)
    return A
