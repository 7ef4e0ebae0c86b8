"""
Video processing module for framekit.
Provides probing, frame extraction, encoding and eased re-timing.
"""
from .info import VideoInfo, ProbeError, parse_rate
from .extractor import FrameExtractor, FrameExtractionError
from .encoder import VideoEncoder, EncodingError
from .retime import (
    EasedStitcher,
    EasedRetimer,
    StitchResult,
    stitch_videos,
    retime_video,
)

__all__ = [
    # Video info
    "VideoInfo",
    "ProbeError",
    "parse_rate",

    # Extraction and encoding
    "FrameExtractor",
    "FrameExtractionError",
    "VideoEncoder",
    "EncodingError",

    # Re-timing
    "EasedStitcher",
    "EasedRetimer",
    "StitchResult",
    "stitch_videos",
    "retime_video",
]
