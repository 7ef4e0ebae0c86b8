"""
FrameKit - Contact sheet splitting and eased video re-timing.

Two engines:
- Adaptive grid decomposition: finds the gutters of a contact sheet from
  per-axis pixel variance and cuts it into same-size frames.
- Eased temporal resampling: maps output frames onto source timestamps
  through an easing curve and stitches speed-ramped clips with ffmpeg.

Example usage:
    from framekit import ContactSheetSplitter

    splitter = ContactSheetSplitter(method="auto")
    result = splitter.split(Path("sheet.png"), rows=2, cols=3, output_dir=Path("frames"))
    print(f"Wrote {len(result.frame_paths)} frames of {result.dimensions.width}x{result.dimensions.height}")

    # Timestamp planning
    from framekit import TimestampMapper

    plan = TimestampMapper().map("dramatic-swoop", source_duration=5.0, output_duration=1.5, fps=60)
    print(f"{len(plan)} frames, first {plan[0]:.3f}s")

    # Stitching
    from framekit.video import stitch_videos

    result = await stitch_videos([Path("a.mp4"), Path("b.mp4")], Path("final.mp4"))
"""

from .splitter import ContactSheetSplitter, SplitResult, split_contact_sheet
from .core.interfaces import (
    Axis,
    GutterRegion,
    CellBoundary,
    GridInfo,
    NormalizedDimensions,
    VideoDimensions,
    VideoMetadata,
    ThresholdConfig,
    GridDetectionConfig,
    NormalizeConfig,
    AspectResizeConfig,
    RetimeConfig,
    EncodeConfig,
)
from .grid import (
    VarianceProfiler,
    AdaptiveThresholder,
    GutterDetector,
    GridResolver,
    VarianceGridStrategy,
    ProjectionGridStrategy,
    EqualDivisionStrategy,
    AutoGridStrategy,
    get_strategy,
)
from .image import ImageProcessor, FrameCropper, CellNormalizer, AspectRatioResizer
from .timing import (
    Easing,
    CubicBezier,
    EasingError,
    get_easing,
    list_easings,
    parse_easing,
    TimestampMapper,
    TimestampPlan,
    MultiSegmentTimestampPlanner,
    GlobalTimestampPlan,
    SegmentSource,
)
from .video import (
    VideoInfo,
    FrameExtractor,
    VideoEncoder,
    EasedStitcher,
    EasedRetimer,
    stitch_videos,
    retime_video,
)

__version__ = "1.0.0"

__all__ = [
    # Main facade
    "ContactSheetSplitter",
    "SplitResult",
    "split_contact_sheet",

    # Core types - Grid
    "Axis",
    "GutterRegion",
    "CellBoundary",
    "GridInfo",
    "NormalizedDimensions",
    "ThresholdConfig",
    "GridDetectionConfig",
    "NormalizeConfig",
    "AspectResizeConfig",

    # Core types - Video
    "VideoDimensions",
    "VideoMetadata",
    "RetimeConfig",
    "EncodeConfig",

    # Grid detection
    "VarianceProfiler",
    "AdaptiveThresholder",
    "GutterDetector",
    "GridResolver",
    "VarianceGridStrategy",
    "ProjectionGridStrategy",
    "EqualDivisionStrategy",
    "AutoGridStrategy",
    "get_strategy",

    # Image processing
    "ImageProcessor",
    "FrameCropper",
    "CellNormalizer",
    "AspectRatioResizer",

    # Timing
    "Easing",
    "CubicBezier",
    "EasingError",
    "get_easing",
    "list_easings",
    "parse_easing",
    "TimestampMapper",
    "TimestampPlan",
    "MultiSegmentTimestampPlanner",
    "GlobalTimestampPlan",
    "SegmentSource",

    # Video processing
    "VideoInfo",
    "FrameExtractor",
    "VideoEncoder",
    "EasedStitcher",
    "EasedRetimer",
    "stitch_videos",
    "retime_video",
]
