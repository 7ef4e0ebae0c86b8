"""
Interchangeable grid detection strategies.

Follows Strategy Pattern - variance-based (sparse and dense), edge-projection
and pure-math equal division share one interface; AutoGridStrategy chains
them, moving on whenever a result is degraded or its confidence drops below
the configured minimum.
"""
from typing import Dict, List, Optional, Type
import logging

import numpy as np

from ..core.interfaces import (
    Axis,
    AxisTrace,
    CellBoundary,
    GridDetectionConfig,
    GridInfo,
    GridTrace,
    IGridDetectionStrategy,
    ThresholdConfig,
)
from .gutters import GutterDetector, min_gutter_width
from .resolver import GridResolver
from .threshold import AdaptiveThresholder
from .variance import ProjectionProfiler, VarianceProfiler

logger = logging.getLogger(__name__)


def _validate_shape(gray: np.ndarray, rows: int, cols: int) -> None:
    if rows < 1 or cols < 1:
        raise ValueError(f"Grid must have at least one row and column, got {rows}x{cols}")
    if gray.ndim != 2:
        raise ValueError(f"Expected a 2D grayscale sample, got shape {gray.shape}")
    height, width = gray.shape
    if width < cols or height < rows:
        raise ValueError(f"Image {width}x{height} too small for a {rows}x{cols} grid")


class ProfileGridStrategy(IGridDetectionStrategy):
    """
    Shared pipeline for profile-based detection:
    profile -> adaptive threshold -> gutter runs -> resolver.
    """

    name = "profile"

    def __init__(self, config: Optional[GridDetectionConfig] = None):
        self.config = config or GridDetectionConfig()
        self.detector = GutterDetector()
        self.resolver = GridResolver(self.config)

    def _profile(self, gray: np.ndarray, axis: Axis) -> np.ndarray:
        raise NotImplementedError

    def _threshold_config(self) -> ThresholdConfig:
        return self.config.threshold

    def _scan_axis(self, gray: np.ndarray, axis: Axis, expected: int) -> AxisTrace:
        height, width = gray.shape
        extent = width if axis is Axis.COLUMNS else height

        profile = self._profile(gray, axis)
        thresholder = AdaptiveThresholder(self._threshold_config())
        trace = AxisTrace(axis=axis, extent=extent, expected=expected)
        trace.threshold = thresholder.threshold(profile)
        trace.min_gutter_width = min_gutter_width(extent, expected, self.config)
        trace.regions = self.detector.detect(profile, trace.threshold, trace.min_gutter_width)
        return trace

    def detect(self, gray: np.ndarray, rows: int, cols: int) -> GridInfo:
        _validate_shape(gray, rows, cols)
        height, width = gray.shape

        column_trace = self._scan_axis(gray, Axis.COLUMNS, cols)
        row_trace = self._scan_axis(gray, Axis.ROWS, rows)

        grid = self.resolver.resolve(
            column_trace.regions,
            row_trace.regions,
            width,
            height,
            rows,
            cols,
            strategy=self.name,
            column_trace=column_trace,
            row_trace=row_trace,
        )
        logger.debug(
            f"[{self.name}] thresholds x={column_trace.threshold:.1f} y={row_trace.threshold:.1f}, "
            f"regions x={len(column_trace.regions)} y={len(row_trace.regions)}, "
            f"confidence={grid.trace.confidence:.2f}"
        )
        return grid


class VarianceGridStrategy(ProfileGridStrategy):
    """Finds dividers as bands that are uniform across their full perpendicular extent."""

    name = "variance"

    def __init__(self, config: Optional[GridDetectionConfig] = None):
        super().__init__(config)
        self.profiler = VarianceProfiler(self.config)

    def _profile(self, gray: np.ndarray, axis: Axis) -> np.ndarray:
        return self.profiler.profile(gray, axis)


class DenseVarianceGridStrategy(VarianceGridStrategy):
    """Variance detection over every perpendicular line; catches thin gutters between same-coloured cells."""

    name = "dense"

    def __init__(self, config: Optional[GridDetectionConfig] = None):
        super().__init__(config)
        self.profiler = VarianceProfiler(self.config, dense=True)


class ProjectionGridStrategy(ProfileGridStrategy):
    """Finds dividers as bands with near-zero edge energy (Sobel projection)."""

    name = "projection"

    def __init__(self, config: Optional[GridDetectionConfig] = None):
        super().__init__(config)
        self.profiler = ProjectionProfiler()

    def _profile(self, gray: np.ndarray, axis: Axis) -> np.ndarray:
        return self.profiler.profile(gray, axis)

    def _threshold_config(self) -> ThresholdConfig:
        return self.config.projection_threshold


class EqualDivisionStrategy(IGridDetectionStrategy):
    """Pure-math split into equal cells, optionally trimming `padding` px per edge."""

    name = "simple"

    def __init__(self, config: Optional[GridDetectionConfig] = None):
        self.config = config or GridDetectionConfig()

    def detect(self, gray: np.ndarray, rows: int, cols: int) -> GridInfo:
        _validate_shape(gray, rows, cols)
        height, width = gray.shape
        cell_width = width // cols
        cell_height = height // rows

        padding = max(0, self.config.padding)
        padding = min(padding, (min(cell_width, cell_height) - 1) // 2)

        cells = [
            CellBoundary(
                x=col * cell_width + padding,
                y=row * cell_height + padding,
                width=cell_width - 2 * padding,
                height=cell_height - 2 * padding,
            )
            for row in range(rows)
            for col in range(cols)
        ]
        return GridInfo(
            rows=rows,
            cols=cols,
            cells=cells,
            strategy=self.name,
            trace=GridTrace(notes=["equal division"]),
        )


class AutoGridStrategy(IGridDetectionStrategy):
    """
    Tries each strategy in order and keeps the first confident, complete result.

    A result with missing dividers moves on to the next strategy. When no
    strategy finds every divider, the most confident degraded result is kept
    if it clears the minimum, otherwise the sheet is divided equally.
    """

    name = "auto"

    def __init__(
        self,
        config: Optional[GridDetectionConfig] = None,
        strategies: Optional[List[IGridDetectionStrategy]] = None
    ):
        self.config = config or GridDetectionConfig()
        self.strategies = strategies or [
            VarianceGridStrategy(self.config),
            DenseVarianceGridStrategy(self.config),
            ProjectionGridStrategy(self.config),
        ]
        self.fallback = EqualDivisionStrategy(self.config)

    def detect(self, gray: np.ndarray, rows: int, cols: int) -> GridInfo:
        notes: List[str] = []
        degraded: List[GridInfo] = []
        for strategy in self.strategies:
            grid = strategy.detect(gray, rows, cols)
            confidence = grid.trace.confidence if grid.trace else 0.0
            if confidence < self.config.min_confidence:
                message = f"{strategy.name} confidence {confidence:.2f} below {self.config.min_confidence:.2f}"
            elif grid.degraded:
                message = f"{strategy.name} result degraded at confidence {confidence:.2f}"
                degraded.append(grid)
            else:
                grid.trace.notes = notes + grid.trace.notes
                return grid
            logger.warning(f"Grid detection degraded: {message}")
            notes.append(message)

        if degraded:
            grid = max(degraded, key=lambda candidate: candidate.trace.confidence)
            grid.trace.notes = notes + grid.trace.notes
            logger.info(f"Keeping degraded {grid.strategy} result for {rows}x{cols} grid")
            return grid

        grid = self.fallback.detect(gray, rows, cols)
        grid.degraded = True
        grid.trace.notes = notes + grid.trace.notes
        logger.info(f"Falling back to equal division for {rows}x{cols} grid")
        return grid


STRATEGIES: Dict[str, Type[IGridDetectionStrategy]] = {
    "auto": AutoGridStrategy,
    "variance": VarianceGridStrategy,
    "dense": DenseVarianceGridStrategy,
    "projection": ProjectionGridStrategy,
    "simple": EqualDivisionStrategy,
}


def get_strategy(name: str, config: Optional[GridDetectionConfig] = None) -> IGridDetectionStrategy:
    """Instantiate a detection strategy by name."""
    try:
        strategy_cls = STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown grid detection method '{name}'. Choose from: {', '.join(STRATEGIES)}"
        )
    return strategy_cls(config)
