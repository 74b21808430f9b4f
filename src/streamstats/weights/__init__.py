"""
Weight policies for online statistics.

All policies:
- Turn a count of new observations into a blend coefficient in (0, 1]
- Track the total number of observations in ``nobs``
- Can be merged and reset
"""

from .base import Weight
from .schemes import (
    EqualWeight,
    ExponentialWeight,
    BoundedExponentialWeight,
    LearningRate,
    LearningRate2,
    UserWeight,
)

__all__ = [
    "Weight",
    "EqualWeight",
    "ExponentialWeight",
    "BoundedExponentialWeight",
    "LearningRate",
    "LearningRate2",
    "UserWeight",
]
