"""
Batch aspect-ratio resizing for extracted frames.
Follows Single Responsibility and uses parallel processing.
"""
from pathlib import Path
from typing import List, Optional, Tuple
from concurrent.futures import ProcessPoolExecutor, as_completed
from multiprocessing import cpu_count
from natsort import natsorted
import time
import logging

from ..core.interfaces import AspectResizeConfig
from .processor import ImageProcessor, parse_aspect_ratio

logger = logging.getLogger(__name__)


def _resize_single_frame(args: Tuple[Path, Path, Tuple[int, int], str, Tuple[int, int, int]]) -> str:
    """Worker function for parallel processing (must be top-level for pickling)."""
    image_path, output_path, ratio, mode, fill = args
    processor = ImageProcessor()

    try:
        img = processor.open(image_path)
        reshaped = processor.fit_aspect(img, ratio, mode, fill)
        processor.save(reshaped, output_path)
        return f"OK:{image_path.name}"
    except Exception as e:
        return f"ERROR:{image_path.name}:{e}"


class AspectRatioResizer:
    """
    Reshapes every frame in a folder to one aspect ratio (9:16, 16:9, 1:1, ...).
    Uses parallel processing for performance.
    """

    def __init__(self, config: Optional[AspectResizeConfig] = None):
        self.config = config or AspectResizeConfig()

    def resize_folder(
        self,
        input_dir: Path,
        output_dir: Optional[Path] = None,
        aspect_ratio: Optional[str] = None
    ) -> List[Path]:
        """
        Resize all frames in input_dir.

        Args:
            input_dir: Folder with frames
            output_dir: Destination (defaults to overwriting in place)
            aspect_ratio: Ratio override, e.g. '9:16'

        Returns:
            Output paths in natural sort order
        """
        input_dir = Path(input_dir)
        if not input_dir.is_dir():
            raise FileNotFoundError(f"Frames directory not found: {input_dir}")

        output_dir = Path(output_dir) if output_dir else input_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        ratio = parse_aspect_ratio(aspect_ratio or self.config.aspect_ratio)
        if self.config.mode not in ("crop", "pad"):
            raise ValueError(f"Unknown aspect mode '{self.config.mode}', expected 'crop' or 'pad'")

        frames = self._get_frames(input_dir)
        if not frames:
            raise ValueError(f"No frames found in {input_dir}")

        start_time = time.time()
        args = [
            (frame, output_dir / frame.name, ratio, self.config.mode, self.config.fill_color)
            for frame in frames
        ]
        errors = self._process_parallel(args, len(frames))
        if errors:
            raise RuntimeError(f"{errors} of {len(frames)} frames failed to resize")

        elapsed = time.time() - start_time
        logger.info(f"Resized {len(frames)} frames to {ratio[0]}:{ratio[1]} in {elapsed:.2f}s")
        return [output_dir / frame.name for frame in frames]

    def _get_frames(self, folder: Path) -> List[Path]:
        """Get all valid frames from folder."""
        frames = [f for f in folder.iterdir() if ImageProcessor.is_valid_image(f)]
        return natsorted(frames)

    def _process_parallel(self, args: List, total: int) -> int:
        """Process frames in parallel, returning the error count."""
        max_workers = self.config.max_workers or max(1, min(cpu_count() - 1, total))
        processed = 0
        errors = 0

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            futures = {executor.submit(_resize_single_frame, arg): arg[0] for arg in args}

            for future in as_completed(futures):
                try:
                    result = future.result()
                except Exception as e:
                    result = f"ERROR:worker:{e}"

                processed += 1
                if result.startswith("ERROR"):
                    errors += 1
                    logger.error(result)
                else:
                    logger.debug(f"Progress: {processed}/{total} {result}")

        return errors
