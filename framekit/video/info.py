"""
Clip probing with ffprobe.
Follows Single Responsibility Principle - reads only what re-timing needs:
duration, frame rate and display geometry of the first video stream.
"""
import asyncio
import json
from pathlib import Path
from typing import List, Optional
import logging

from ..core.interfaces import IVideoInfoProvider, VideoDimensions, VideoMetadata

logger = logging.getLogger(__name__)

PROBE_ARGS = ["-v", "quiet", "-print_format", "json", "-show_format", "-show_streams"]


class ProbeError(RuntimeError):
    """ffprobe is missing or could not read the file."""


def parse_rate(rate: str) -> float:
    """Parse an ffprobe rational such as '30000/1001' into frames per second."""
    if not rate or rate == "0/0":
        return 0.0
    try:
        if "/" not in rate:
            return float(rate)
        num, den = map(int, rate.split("/"))
        return num / den if den != 0 else 0.0
    except (ValueError, ZeroDivisionError):
        return 0.0


def _display_rotation(stream: dict) -> int:
    """Clockwise display rotation from the display matrix, else the legacy rotate tag."""
    for entry in stream.get("side_data_list") or []:
        if isinstance(entry, dict) and "rotation" in entry:
            try:
                return (-int(entry["rotation"])) % 360
            except (ValueError, TypeError):
                break
    try:
        return int((stream.get("tags") or {}).get("rotate", 0) or 0) % 360
    except (ValueError, TypeError):
        return 0


class VideoInfo(IVideoInfoProvider):
    """
    Probed description of one source clip.

    Example:
        info = VideoInfo(Path("clip.mp4"))
        await info.load()
        print(info.duration, info.fps)
    """

    def __init__(self, input_path: Path):
        self.input_path = Path(input_path)
        self._format: dict = {}
        self._video: dict = {}
        self._loaded = False

    def command(self) -> List[str]:
        return ["ffprobe", *PROBE_ARGS, str(self.input_path)]

    async def load(self) -> None:
        """Run ffprobe once; later calls are no-ops."""
        if self._loaded:
            return

        self._validate_input()

        try:
            process = await asyncio.create_subprocess_exec(
                *self.command(),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except FileNotFoundError:
            raise ProbeError("ffprobe not found. Ensure ffprobe is installed and in PATH.")

        stdout, stderr = await process.communicate()
        if process.returncode != 0:
            reason = stderr.decode().strip() or "file may be corrupted or not a valid video"
            raise ProbeError(
                f"ffprobe failed for '{self.input_path.name}' (exit code {process.returncode}): {reason}"
            )
        self._parse_output(stdout.decode().strip())
        logger.debug(f"Probed {self.input_path.name}: {self.duration:.3f}s at {self.fps:g} fps")

    def _validate_input(self) -> None:
        if not self.input_path.exists():
            raise FileNotFoundError(f"Video file does not exist: {self.input_path}")
        if not self.input_path.is_file():
            raise ValueError(f"Path is not a file: {self.input_path}")

    def _parse_output(self, output: str) -> None:
        """Keep the container section and the first video stream of ffprobe's JSON."""
        if not output:
            raise ValueError(f"ffprobe returned empty output for '{self.input_path.name}'")

        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse ffprobe output for '{self.input_path.name}': {e}")

        if "format" not in data:
            raise ValueError("Invalid ffprobe output: 'format' key not found")

        streams = [s for s in data.get("streams", []) if s.get("codec_type") == "video"]
        if not streams:
            raise ValueError(f"No video stream found in '{self.input_path.name}'")

        self._format = data["format"]
        self._video = streams[0]
        self._loaded = True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            raise RuntimeError("VideoInfo not loaded. Call load() first.")

    @property
    def duration(self) -> float:
        """Seconds, from the container or else the video stream."""
        self._ensure_loaded()
        return float(self._format.get("duration") or self._video.get("duration") or 0)

    @property
    def codec(self) -> str:
        self._ensure_loaded()
        return self._video.get("codec_name", "unknown")

    @property
    def fps(self) -> float:
        """avg_frame_rate when it disagrees with r_frame_rate (variable frame rate), else r_frame_rate."""
        self._ensure_loaded()
        nominal = parse_rate(self._video.get("r_frame_rate", ""))
        average = parse_rate(self._video.get("avg_frame_rate", ""))
        return round(average if abs(average - nominal) > 0.01 else nominal, 2)

    @property
    def rotation(self) -> int:
        self._ensure_loaded()
        return _display_rotation(self._video)

    @property
    def dimensions(self) -> VideoDimensions:
        """Coded size plus display size after rotation."""
        self._ensure_loaded()
        width = int(self._video.get("width", 0))
        height = int(self._video.get("height", 0))
        rotation = self.rotation
        if rotation in (90, 270):
            return VideoDimensions(width, height, display_width=height, display_height=width, rotation=rotation)
        return VideoDimensions(width, height, rotation=rotation)

    @property
    def metadata(self) -> VideoMetadata:
        return VideoMetadata(
            path=self.input_path,
            duration=self.duration,
            dimensions=self.dimensions,
            codec=self.codec,
            fps=self.fps,
        )
