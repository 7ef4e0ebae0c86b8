"""
Abstract interfaces following Interface Segregation Principle (SOLID).
Defines contracts and value types for all framekit components.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


class Axis(Enum):
    """Image axis along which a profile is computed."""
    COLUMNS = "columns"  # x positions, finds vertical dividers
    ROWS = "rows"        # y positions, finds horizontal dividers


@dataclass(frozen=True)
class GutterRegion:
    """A contiguous low-variance band along one axis (inclusive pixel range)."""
    start: int
    end: int
    synthetic: bool = False

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Gutter end {self.end} precedes start {self.start}")

    @property
    def width(self) -> int:
        return self.end - self.start + 1

    @property
    def center(self) -> float:
        return (self.start + self.end) / 2


@dataclass(frozen=True)
class CellBoundary:
    """Pixel rectangle of one grid cell."""
    x: int
    y: int
    width: int
    height: int

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom) as expected by PIL crop."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass
class AxisTrace:
    """Diagnostics for one axis of a grid detection pass."""
    axis: Axis
    extent: int
    expected: int
    threshold: float = 0.0
    min_gutter_width: int = 0
    regions: List[GutterRegion] = field(default_factory=list)
    content_start: int = 0
    content_end: int = 0
    dividers: List[GutterRegion] = field(default_factory=list)
    margin: int = 0
    shortfall: int = 0
    excess: int = 0

    @property
    def detected_dividers(self) -> int:
        return sum(1 for d in self.dividers if not d.synthetic)

    @property
    def degraded(self) -> bool:
        return self.shortfall > 0


@dataclass
class GridTrace:
    """Structured diagnostics returned alongside a resolved grid."""
    columns: Optional[AxisTrace] = None
    rows: Optional[AxisTrace] = None
    confidence: float = 1.0
    notes: List[str] = field(default_factory=list)


@dataclass
class GridInfo:
    """Resolved decomposition of one contact sheet."""
    rows: int
    cols: int
    cells: List[CellBoundary]
    strategy: str = "variance"
    degraded: bool = False
    trace: Optional[GridTrace] = None

    def __post_init__(self):
        if len(self.cells) != self.rows * self.cols:
            raise ValueError(
                f"Grid {self.rows}x{self.cols} needs {self.rows * self.cols} cells, "
                f"got {len(self.cells)}"
            )

    def cell(self, row: int, col: int) -> CellBoundary:
        return self.cells[row * self.cols + col]


@dataclass(frozen=True)
class NormalizedDimensions:
    """Common size every cropped cell is letterboxed into."""
    width: int
    height: int


@dataclass
class VideoDimensions:
    """Represents video dimensions with display and rotation info."""
    width: int
    height: int
    display_width: int = 0
    display_height: int = 0
    rotation: int = 0

    def __post_init__(self):
        if self.display_width == 0:
            self.display_width = self.width
        if self.display_height == 0:
            self.display_height = self.height


@dataclass
class VideoMetadata:
    """Video metadata needed for re-timing."""
    path: Path
    duration: float
    dimensions: VideoDimensions
    codec: str
    fps: float


@dataclass
class ThresholdConfig:
    """
    Adaptive threshold tuning.

    Empirical defaults; recalibrate against a broader image corpus before
    relying on them for new sources.
    """
    percentile: float = 1.0
    multiplier: float = 10.0
    lower_bound: float = 50.0
    upper_bound: float = 300.0


@dataclass
class GridDetectionConfig:
    """Configuration for contact sheet grid detection."""
    sample_start: float = 0.10
    sample_stop: float = 0.90
    sample_step: float = 0.05
    threshold: ThresholdConfig = field(default_factory=ThresholdConfig)
    projection_threshold: ThresholdConfig = field(
        default_factory=lambda: ThresholdConfig(lower_bound=2.0, upper_bound=20.0)
    )
    min_gutter_floor: int = 3
    min_gutter_ratio: float = 0.01
    edge_fraction: float = 0.05
    spacing_tolerance: float = 0.70
    margin_floor: int = 3
    margin_ratio: float = 0.15
    min_confidence: float = 0.6
    padding: int = 0


@dataclass
class NormalizeConfig:
    """Configuration for cell normalization."""
    fill_color: Tuple[int, int, int] = (0, 0, 0)
    output_format: str = "png"
    filename_prefix: str = "frame-"


@dataclass
class AspectResizeConfig:
    """Configuration for resizing a frame folder to an aspect ratio."""
    aspect_ratio: str = "9:16"
    mode: str = "crop"
    fill_color: Tuple[int, int, int] = (0, 0, 0)
    max_workers: Optional[int] = None


@dataclass
class RetimeConfig:
    """Configuration for eased re-timing."""
    easing: str = "dramatic-swoop"
    output_duration: float = 1.5
    fps: float = 60.0
    end_guard: float = 0.001
    max_parallel: Optional[int] = None


@dataclass
class EncodeConfig:
    """Configuration for encoding an ordered frame sequence."""
    codec: str = "libx264"
    preset: str = "fast"
    crf: int = 18
    pix_fmt: str = "yuv420p"
    bitrate: Optional[str] = None
    frame_format: str = "png"


class IGridDetectionStrategy(ABC):
    """Interface for contact sheet grid detection strategies."""

    name: str = "base"

    @abstractmethod
    def detect(self, gray, rows: int, cols: int) -> GridInfo:
        """Resolve an expected rows x cols grid from a grayscale sample."""
        pass


class IRasterCollaborator(ABC):
    """Interface for raster decode/crop/resize operations."""

    @abstractmethod
    def open(self, image_path: Path):
        """Decode an image into memory."""
        pass

    @abstractmethod
    def crop(self, image, cell: CellBoundary):
        """Return the pixels inside one cell rectangle."""
        pass

    @abstractmethod
    def letterbox(self, image, size: Tuple[int, int], fill: Tuple[int, int, int]):
        """Fit image inside size preserving aspect, padding with fill."""
        pass

    @abstractmethod
    def save(self, image, output_path: Path) -> Path:
        """Encode image to output_path, format chosen by suffix."""
        pass


class IVideoInfoProvider(ABC):
    """Interface for video information extraction."""

    @abstractmethod
    async def load(self) -> None:
        """Load video metadata asynchronously."""
        pass

    @property
    @abstractmethod
    def duration(self) -> float:
        """Video duration in seconds."""
        pass

    @property
    @abstractmethod
    def dimensions(self) -> VideoDimensions:
        """Video dimensions."""
        pass

    @property
    @abstractmethod
    def fps(self) -> float:
        """Frames per second."""
        pass


class IFrameExtractor(ABC):
    """Interface for single-frame extraction from a video."""

    @abstractmethod
    async def extract_frame(self, video_path: Path, output_path: Path, timestamp: float) -> Path:
        """Decode the frame at timestamp into output_path."""
        pass


class IVideoEncoder(ABC):
    """Interface for encoding an ordered frame sequence."""

    @abstractmethod
    async def encode(self, frames_dir: Path, pattern: str, fps: float, output_path: Path) -> Path:
        """Encode numbered frames in frames_dir into one video."""
        pass
