"""
Encodes an ordered frame sequence into one video with ffmpeg.
"""
import asyncio
from pathlib import Path
from typing import List, Optional
import logging

from ..core.interfaces import EncodeConfig, IVideoEncoder

logger = logging.getLogger(__name__)


class EncodingError(RuntimeError):
    """ffmpeg failed to encode the frame sequence."""


class VideoEncoder(IVideoEncoder):
    """Sequential consumer of numbered frames. Single Responsibility."""

    def __init__(self, config: Optional[EncodeConfig] = None):
        self.config = config or EncodeConfig()

    def build_command(self, frames_dir: Path, pattern: str, fps: float, output_path: Path) -> List[str]:
        cmd = [
            "ffmpeg", "-y",
            "-framerate", f"{fps:g}",
            "-start_number", "0",
            "-i", str(Path(frames_dir) / pattern),
            "-c:v", self.config.codec,
            "-preset", self.config.preset,
            "-pix_fmt", self.config.pix_fmt,
        ]
        if self.config.bitrate:
            cmd += ["-b:v", self.config.bitrate]
        else:
            cmd += ["-crf", str(self.config.crf)]
        cmd += ["-r", f"{fps:g}", "-an", str(output_path)]
        return cmd

    async def encode(self, frames_dir: Path, pattern: str, fps: float, output_path: Path) -> Path:
        """
        Encode frames_dir/pattern (ffmpeg printf pattern, e.g. frame_%06d.png).

        Returns:
            output_path

        Raises:
            EncodingError: if ffmpeg is missing or exits non-zero
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            process = await asyncio.create_subprocess_exec(
                *self.build_command(frames_dir, pattern, fps, output_path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except FileNotFoundError:
            raise EncodingError("ffmpeg not found. Ensure ffmpeg is installed and in PATH.")
        _, stderr = await process.communicate()

        if process.returncode != 0:
            raise EncodingError(f"Encoding {output_path.name} failed: {stderr.decode().strip()}")

        logger.info(f"Encoded {output_path} at {fps:g} fps")
        return output_path
