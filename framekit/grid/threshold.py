"""
Adaptive gutter threshold derived from the profile itself.
"""
from typing import Optional

import numpy as np

from ..core.interfaces import ThresholdConfig


class AdaptiveThresholder:
    """
    Turns a profile into a gutter/content cutoff without a global magic number.

    The low percentile estimates "truly uniform" variance and resists the
    (usually far larger) population of high-variance content positions.
    Works for gutters of any solid colour and any grain level.
    """

    def __init__(self, config: Optional[ThresholdConfig] = None):
        self.config = config or ThresholdConfig()

    def percentile_value(self, profile: np.ndarray) -> float:
        """Value at the configured percentile of the sorted profile."""
        values = np.sort(np.asarray(profile, dtype=np.float64))
        if values.size == 0:
            raise ValueError("Cannot threshold an empty profile")
        index = int(np.floor(values.size * self.config.percentile / 100.0))
        return float(values[min(index, values.size - 1)])

    def threshold(self, profile: np.ndarray) -> float:
        """clamp(p * multiplier, lower_bound, upper_bound)."""
        base = self.percentile_value(profile) * self.config.multiplier
        return float(min(max(base, self.config.lower_bound), self.config.upper_bound))
