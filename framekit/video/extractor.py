"""
Frame extraction from source videos using ffmpeg.
Extractions are independent, so they run concurrently under a semaphore.
"""
import asyncio
import os
from pathlib import Path
from typing import List, Optional
import logging

from ..core.interfaces import IFrameExtractor

logger = logging.getLogger(__name__)


class FrameExtractionError(RuntimeError):
    """ffmpeg could not decode a requested frame."""


class FrameExtractor(IFrameExtractor):
    """Extracts single frames with ffmpeg. Single Responsibility."""

    def __init__(self, max_parallel: Optional[int] = None):
        self.max_parallel = max_parallel or os.cpu_count() or 1
        self._semaphore: Optional[asyncio.Semaphore] = None

    @property
    def semaphore(self) -> asyncio.Semaphore:
        # Created lazily so it binds to the running event loop.
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.max_parallel)
        return self._semaphore

    def build_command(self, video_path: Path, output_path: Path, timestamp: float) -> List[str]:
        return [
            "ffmpeg", "-y",
            "-ss", f"{timestamp:.6f}",
            "-i", str(video_path),
            "-frames:v", "1",
            str(output_path)
        ]

    async def extract_frame(self, video_path: Path, output_path: Path, timestamp: float) -> Path:
        """
        Extract a single frame from video asynchronously.

        Args:
            video_path: Source video path
            output_path: Output frame path
            timestamp: Time in seconds

        Returns:
            output_path

        Raises:
            FrameExtractionError: if ffmpeg fails or writes nothing
        """
        async with self.semaphore:
            try:
                process = await asyncio.create_subprocess_exec(
                    *self.build_command(video_path, output_path, timestamp),
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE
                )
            except FileNotFoundError:
                raise FrameExtractionError("ffmpeg not found. Ensure ffmpeg is installed and in PATH.")
            _, stderr = await process.communicate()

        if process.returncode != 0:
            raise FrameExtractionError(
                f"Frame extraction at {timestamp:.3f}s from {Path(video_path).name} failed: "
                f"{stderr.decode().strip()}"
            )
        if not Path(output_path).exists():
            raise FrameExtractionError(
                f"ffmpeg produced no frame at {timestamp:.3f}s from {Path(video_path).name}"
            )

        logger.debug(f"Extracted frame at {timestamp:.3f}s -> {Path(output_path).name}")
        return Path(output_path)
