"""
Per-position uniformity profiles along one image axis.

A true divider band is uniform across its whole perpendicular extent, so
each position is measured at many evenly spaced perpendicular lines rather
than along a single scanline.
"""
from typing import Optional

import cv2
import numpy as np

from ..core.interfaces import Axis, GridDetectionConfig


def sample_fractions(config: Optional[GridDetectionConfig] = None) -> np.ndarray:
    """Perpendicular sample positions as fractions of the extent (10%..90% by default)."""
    config = config or GridDetectionConfig()
    count = int(round((config.sample_stop - config.sample_start) / config.sample_step)) + 1
    return np.linspace(config.sample_start, config.sample_stop, max(count, 1))


def _validate(gray: np.ndarray) -> None:
    if gray.ndim != 2:
        raise ValueError(f"Expected a 2D grayscale sample, got shape {gray.shape}")
    if gray.shape[0] == 0 or gray.shape[1] == 0:
        raise ValueError("Cannot profile an empty image")


class VarianceProfiler:
    """
    Computes population variance of perpendicular samples at every position.

    With dense=True every perpendicular line between the first and last
    sample fraction is used instead of the evenly spaced samples. Sparse
    samples can all miss a thin gutter running the other way, which leaves
    an axis of same-coloured cells looking uniform.
    """

    def __init__(self, config: Optional[GridDetectionConfig] = None, dense: bool = False):
        self.config = config or GridDetectionConfig()
        self.fractions = sample_fractions(self.config)
        self.dense = dense

    def _perpendicular_indices(self, extent: int) -> np.ndarray:
        if self.dense:
            first = int(np.floor(self.config.sample_start * extent))
            last = int(np.floor(self.config.sample_stop * extent))
            indices = np.arange(first, max(first, last) + 1)
        else:
            indices = np.floor(self.fractions * extent).astype(int)
        return np.clip(indices, 0, extent - 1)

    def profile(self, gray: np.ndarray, axis: Axis) -> np.ndarray:
        """
        Compute the variance profile of a grayscale sample.

        Args:
            gray: 2D uint8 array (height x width)
            axis: Axis.COLUMNS profiles every x, Axis.ROWS every y

        Returns:
            float64 array with one variance value per position on the axis
        """
        _validate(gray)
        height, width = gray.shape
        data = gray.astype(np.float64)

        if axis is Axis.COLUMNS:
            samples = data[self._perpendicular_indices(height), :]
            return samples.var(axis=0)

        samples = data[:, self._perpendicular_indices(width)]
        return samples.var(axis=1)


class ProjectionProfiler:
    """
    Edge-projection profile: mean absolute Sobel gradient across the full
    perpendicular extent. Solid gutters project to near zero.
    """

    def profile(self, gray: np.ndarray, axis: Axis) -> np.ndarray:
        _validate(gray)
        data = gray.astype(np.float32)

        if axis is Axis.COLUMNS:
            grad = np.abs(cv2.Sobel(data, cv2.CV_32F, 1, 0, ksize=3))
            return grad.mean(axis=0).astype(np.float64)

        grad = np.abs(cv2.Sobel(data, cv2.CV_32F, 0, 1, ksize=3))
        return grad.mean(axis=1).astype(np.float64)
