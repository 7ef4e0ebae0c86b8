"""
Eased temporal resampling for framekit.
Easing curves, per-segment timestamp mapping and multi-segment planning.
"""
from .easing import (
    Easing,
    CubicBezier,
    EasingError,
    EASINGS,
    bezier,
    get_easing,
    list_easings,
    parse_easing,
)
from .mapper import TimestampMapper, TimestampPlan, frame_count
from .planner import (
    MultiSegmentTimestampPlanner,
    GlobalTimestampPlan,
    GlobalFrame,
    SegmentSource,
)

__all__ = [
    # Easing
    "Easing",
    "CubicBezier",
    "EasingError",
    "EASINGS",
    "bezier",
    "get_easing",
    "list_easings",
    "parse_easing",

    # Mapping
    "TimestampMapper",
    "TimestampPlan",
    "frame_count",

    # Planning
    "MultiSegmentTimestampPlanner",
    "GlobalTimestampPlan",
    "GlobalFrame",
    "SegmentSource",
]
