"""
Core module - Interfaces, protocols, and data types for framekit.
"""
from .interfaces import (
    # Enums
    Axis,

    # Data classes - Grid
    GutterRegion,
    CellBoundary,
    AxisTrace,
    GridTrace,
    GridInfo,
    NormalizedDimensions,

    # Data classes - Video
    VideoDimensions,
    VideoMetadata,

    # Configuration
    ThresholdConfig,
    GridDetectionConfig,
    NormalizeConfig,
    AspectResizeConfig,
    RetimeConfig,
    EncodeConfig,

    # Abstract interfaces
    IGridDetectionStrategy,
    IRasterCollaborator,
    IVideoInfoProvider,
    IFrameExtractor,
    IVideoEncoder,
)

__all__ = [
    # Enums
    "Axis",

    # Data classes - Grid
    "GutterRegion",
    "CellBoundary",
    "AxisTrace",
    "GridTrace",
    "GridInfo",
    "NormalizedDimensions",

    # Data classes - Video
    "VideoDimensions",
    "VideoMetadata",

    # Configuration
    "ThresholdConfig",
    "GridDetectionConfig",
    "NormalizeConfig",
    "AspectResizeConfig",
    "RetimeConfig",
    "EncodeConfig",

    # Abstract interfaces
    "IGridDetectionStrategy",
    "IRasterCollaborator",
    "IVideoInfoProvider",
    "IFrameExtractor",
    "IVideoEncoder",
]
