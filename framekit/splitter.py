"""
ContactSheetSplitter - Main facade for decomposing contact sheets.
Orchestrates grid detection, cropping, normalization and saving.
Follows Facade Pattern for simplified API.
"""
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass
import logging

from .core.interfaces import (
    GridDetectionConfig,
    GridInfo,
    IGridDetectionStrategy,
    NormalizeConfig,
    NormalizedDimensions,
)
from .grid.strategies import get_strategy
from .image.processor import ImageProcessor
from .image.cropper import FrameCropper, CellNormalizer

logger = logging.getLogger(__name__)


@dataclass
class SplitResult:
    """Outcome of one contact sheet decomposition."""
    grid: GridInfo
    dimensions: NormalizedDimensions
    frame_paths: List[Path]


class ContactSheetSplitter:
    """
    Splits a contact sheet into its cells.

    Example:
        splitter = ContactSheetSplitter()
        result = splitter.split(Path("sheet.png"), rows=2, cols=3, output_dir=Path("frames"))
        print(result.frame_paths)   # frame-1.png .. frame-6.png
    """

    def __init__(
        self,
        method: str = "auto",
        config: Optional[GridDetectionConfig] = None,
        normalize_config: Optional[NormalizeConfig] = None,
        strategy: Optional[IGridDetectionStrategy] = None
    ):
        self.config = config or GridDetectionConfig()
        self.strategy = strategy or get_strategy(method, self.config)
        self.processor = ImageProcessor()
        self.cropper = FrameCropper(self.processor)
        self.normalizer = CellNormalizer(self.processor, normalize_config)

    def detect(self, image_path: Path, rows: int, cols: int) -> GridInfo:
        """Resolve the grid without cropping."""
        gray = self.processor.load_grayscale(Path(image_path))
        return self.strategy.detect(gray, rows, cols)

    def split(self, image_path: Path, rows: int, cols: int, output_dir: Path) -> SplitResult:
        """
        Detect, crop, normalize and save every cell.

        Args:
            image_path: Contact sheet image
            rows: Expected grid rows
            cols: Expected grid columns
            output_dir: Folder for frame-1..frame-N

        Returns:
            SplitResult with grid, common dimensions and written paths
        """
        image = self.processor.open(Path(image_path))
        grid = self.strategy.detect(self.processor.load_grayscale(image), rows, cols)

        if grid.degraded:
            notes = "; ".join(grid.trace.notes) if grid.trace else ""
            logger.warning(f"Degraded grid for {Path(image_path).name}: {notes}")

        cells = self.normalizer.normalize(self.cropper.crop(image, grid))
        dimensions = self.normalizer.target_dimensions(cells)
        paths = self.normalizer.save(cells, Path(output_dir))

        logger.info(
            f"Split {Path(image_path).name} into {len(paths)} frames "
            f"({dimensions.width}x{dimensions.height}, strategy={grid.strategy})"
        )
        return SplitResult(grid=grid, dimensions=dimensions, frame_paths=paths)


def split_contact_sheet(
    image_path: Path,
    rows: int,
    cols: int,
    output_dir: Path,
    method: str = "auto",
    padding: int = 0
) -> SplitResult:
    """
    Convenience function to split a contact sheet.

    Args:
        image_path: Contact sheet image
        rows: Expected grid rows
        cols: Expected grid columns
        output_dir: Output folder
        method: auto, variance, projection or simple
        padding: Edge trim for the simple method

    Returns:
        SplitResult
    """
    config = GridDetectionConfig(padding=padding)
    return ContactSheetSplitter(method, config).split(image_path, rows, cols, output_dir)
