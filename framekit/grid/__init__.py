"""
Contact sheet grid detection for framekit.
Profiles pixel uniformity along each axis, finds gutters and resolves cells.
"""
from .variance import VarianceProfiler, ProjectionProfiler, sample_fractions
from .threshold import AdaptiveThresholder
from .gutters import GutterDetector, min_gutter_width
from .resolver import GridResolver
from .strategies import (
    VarianceGridStrategy,
    DenseVarianceGridStrategy,
    ProjectionGridStrategy,
    EqualDivisionStrategy,
    AutoGridStrategy,
    get_strategy,
)

__all__ = [
    # Profiling
    "VarianceProfiler",
    "ProjectionProfiler",
    "sample_fractions",

    # Thresholding and gutters
    "AdaptiveThresholder",
    "GutterDetector",
    "min_gutter_width",

    # Resolution
    "GridResolver",

    # Strategies
    "VarianceGridStrategy",
    "DenseVarianceGridStrategy",
    "ProjectionGridStrategy",
    "EqualDivisionStrategy",
    "AutoGridStrategy",
    "get_strategy",
]
