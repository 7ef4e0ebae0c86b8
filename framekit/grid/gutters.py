"""
Gutter detection: contiguous low-variance runs along one axis.
"""
import math
from typing import List, Optional

import numpy as np

from ..core.interfaces import GridDetectionConfig, GutterRegion


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def min_gutter_width(
    extent: int,
    expected_count: int,
    config: Optional[GridDetectionConfig] = None
) -> int:
    """
    Axis-adaptive minimum gutter width.

    max(floor, round(expected cell extent * ratio)), so thin borders in small
    images and thick borders in large ones both qualify.
    """
    config = config or GridDetectionConfig()
    cell_extent = extent / max(expected_count, 1)
    return max(config.min_gutter_floor, round_half_up(cell_extent * config.min_gutter_ratio))


class GutterDetector:
    """Scans a profile for runs below threshold of at least min_width positions."""

    def detect(self, profile: np.ndarray, threshold: float, min_width: int) -> List[GutterRegion]:
        """
        Find all gutter regions, edge margins included.

        Args:
            profile: Per-position variance values
            threshold: Positions strictly below this are gutter candidates
            min_width: Minimum run length to report

        Returns:
            Regions sorted by start, non-overlapping
        """
        regions: List[GutterRegion] = []
        run_start: Optional[int] = None

        for position, value in enumerate(profile):
            if value < threshold:
                if run_start is None:
                    run_start = position
                continue
            if run_start is not None:
                self._close(regions, run_start, position - 1, min_width)
                run_start = None

        if run_start is not None:
            self._close(regions, run_start, len(profile) - 1, min_width)

        return regions

    @staticmethod
    def _close(regions: List[GutterRegion], start: int, end: int, min_width: int) -> None:
        if end - start + 1 >= min_width:
            regions.append(GutterRegion(start=start, end=end))
