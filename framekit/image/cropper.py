"""
Cell extraction and size normalization.
Follows Single Responsibility - cropping and normalizing are separate steps.
"""
from pathlib import Path
from typing import List, Optional, Union
from PIL import Image
import logging

from ..core.interfaces import (
    GridInfo,
    IRasterCollaborator,
    NormalizeConfig,
    NormalizedDimensions,
)
from .processor import ImageProcessor

logger = logging.getLogger(__name__)


class FrameCropper:
    """Extracts every cell of a resolved grid through the raster collaborator."""

    def __init__(self, raster: Optional[IRasterCollaborator] = None):
        self.raster = raster or ImageProcessor()

    def crop(self, source: Union[Path, Image.Image], grid: GridInfo) -> List[Image.Image]:
        """
        Crop all cells in row-major order.

        Args:
            source: Contact sheet path or decoded image
            grid: Resolved grid

        Returns:
            One image per cell, same order as grid.cells
        """
        image = source if isinstance(source, Image.Image) else self.raster.open(source)
        cells = [self.raster.crop(image, cell) for cell in grid.cells]
        logger.debug(f"Cropped {len(cells)} cells from {grid.rows}x{grid.cols} grid")
        return cells


class CellNormalizer:
    """
    Brings cropped cells to one common size.

    Detection jitter can leave cells a few pixels apart; those are
    letterboxed into (max width, max height). Cells already at that size
    are returned untouched, so normalizing twice is a no-op.
    """

    def __init__(
        self,
        raster: Optional[IRasterCollaborator] = None,
        config: Optional[NormalizeConfig] = None
    ):
        self.raster = raster or ImageProcessor()
        self.config = config or NormalizeConfig()

    @staticmethod
    def target_dimensions(cells: List[Image.Image]) -> NormalizedDimensions:
        if not cells:
            raise ValueError("No cells to normalize")
        return NormalizedDimensions(
            width=max(cell.width for cell in cells),
            height=max(cell.height for cell in cells),
        )

    def normalize(self, cells: List[Image.Image]) -> List[Image.Image]:
        dims = self.target_dimensions(cells)
        size = (dims.width, dims.height)

        normalized = []
        resized = 0
        for cell in cells:
            if cell.size == size:
                normalized.append(cell)
                continue
            normalized.append(self.raster.letterbox(cell, size, self.config.fill_color))
            resized += 1

        if resized:
            logger.info(f"Normalized {resized}/{len(cells)} cells to {dims.width}x{dims.height}")
        return normalized

    def save(self, cells: List[Image.Image], output_dir: Path) -> List[Path]:
        """Write cells as <prefix>1.<ext> .. <prefix>N.<ext>."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        paths = []
        for index, cell in enumerate(cells, start=1):
            path = output_dir / f"{self.config.filename_prefix}{index}.{self.config.output_format}"
            self.raster.save(cell, path)
            paths.append(path)
        return paths
