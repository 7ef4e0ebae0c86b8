"""
Eased re-timing and stitching of video clips.
Follows Facade Pattern - orchestrates probing, planning, frame extraction and encoding.
"""
import asyncio
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence
import logging

from ..core.interfaces import (
    EncodeConfig,
    IFrameExtractor,
    IVideoEncoder,
    IVideoInfoProvider,
    RetimeConfig,
)
from ..timing.easing import Easing, parse_easing
from ..timing.mapper import frame_count
from ..timing.planner import GlobalTimestampPlan, MultiSegmentTimestampPlanner, SegmentSource
from .encoder import VideoEncoder
from .extractor import FrameExtractor
from .info import VideoInfo

logger = logging.getLogger(__name__)

FRAME_STEM = "frame_"
INDEX_DIGITS = 6


@dataclass
class StitchResult:
    """Output of a re-timing run."""
    output_path: Path
    plan: GlobalTimestampPlan
    easing: str

    @property
    def frame_count(self) -> int:
        return self.plan.total_frames

    @property
    def duration(self) -> float:
        return self.plan.output_duration


class EasedStitcher:
    """
    Concatenates clips, each speed-ramped to the same output duration so
    cuts land on the slow ends of the easing curve.

    Example:
        stitcher = EasedStitcher(RetimeConfig(easing="dramatic-swoop", output_duration=1.5, fps=60))
        result = await stitcher.stitch([Path("clip1.mp4"), Path("clip2.mp4")], Path("final.mp4"))
    """

    min_clips = 2

    def __init__(
        self,
        config: Optional[RetimeConfig] = None,
        encode_config: Optional[EncodeConfig] = None,
        extractor: Optional[IFrameExtractor] = None,
        encoder: Optional[IVideoEncoder] = None,
        info_factory: Callable[[Path], IVideoInfoProvider] = VideoInfo
    ):
        self.config = config or RetimeConfig()
        self.encode_config = encode_config or EncodeConfig()
        self.planner = MultiSegmentTimestampPlanner(config=self.config)
        self.extractor = extractor or FrameExtractor(self.config.max_parallel)
        self.encoder = encoder or VideoEncoder(self.encode_config)
        self.info_factory = info_factory

    @property
    def frame_pattern(self) -> str:
        """Python format pattern for extracted frames, filled with the global index."""
        return f"{FRAME_STEM}{{index:0{INDEX_DIGITS}d}}.{self.encode_config.frame_format}"

    @property
    def ffmpeg_pattern(self) -> str:
        """The same file names as an ffmpeg image-sequence pattern."""
        return f"{FRAME_STEM}%0{INDEX_DIGITS}d.{self.encode_config.frame_format}"

    def _validate_clips(self, clips: Sequence[Path]) -> List[Path]:
        clips = [Path(clip) for clip in clips]
        if len(clips) < self.min_clips:
            raise ValueError(f"Need at least {self.min_clips} clip(s), got {len(clips)}")
        for clip in clips:
            if not clip.is_file():
                raise FileNotFoundError(f"Video file does not exist: {clip}")
        return clips

    async def probe(self, clips: Sequence[Path]) -> List[SegmentSource]:
        """Read each clip's duration concurrently."""
        infos = [self.info_factory(clip) for clip in clips]
        await asyncio.gather(*(info.load() for info in infos))
        return [
            SegmentSource(segment_id=f"clip-{k + 1}", duration=info.duration)
            for k, info in enumerate(infos)
        ]

    def plan(self, sources: Sequence[SegmentSource], easing: Easing) -> GlobalTimestampPlan:
        return self.planner.plan(sources, easing, self.config.output_duration, self.config.fps)

    async def extract_frames(
        self,
        plan: GlobalTimestampPlan,
        sources: Dict[str, Path],
        frames_dir: Path
    ) -> List[Path]:
        """
        Extract every frame of a plan, named by global index.

        On the first failure the outstanding extractions are cancelled and
        the error propagates; the caller discards the partial frame set.

        Args:
            plan: Global timestamp plan
            sources: segment_id -> source video path
            frames_dir: Destination folder

        Returns:
            Frame paths ordered by global index
        """
        frames_dir = Path(frames_dir)
        missing = {frame.segment_id for frame in plan} - set(sources)
        if missing:
            raise ValueError(f"No source video for segment(s): {', '.join(sorted(missing))}")

        tasks = [
            asyncio.ensure_future(self.extractor.extract_frame(
                sources[frame.segment_id],
                frames_dir / self.frame_pattern.format(index=frame.index),
                frame.source_time,
            ))
            for frame in plan
        ]

        try:
            paths = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.info(f"Extracted {len(paths)} frames")
        return list(paths)

    async def stitch(self, clips: Sequence[Path], output_path: Path) -> StitchResult:
        """
        Re-time and concatenate clips into output_path.

        Args:
            clips: Source clips in playback order
            output_path: Encoded result

        Returns:
            StitchResult with the plan that was rendered
        """
        easing = parse_easing(self.config.easing)
        if frame_count(self.config.output_duration, self.config.fps) == 0:
            raise ValueError(
                f"Output duration {self.config.output_duration}s at {self.config.fps} fps yields no frames"
            )
        clips = self._validate_clips(clips)

        sources = await self.probe(clips)
        plan = self.plan(sources, easing)

        clip_paths = {source.segment_id: clip for source, clip in zip(sources, clips)}
        logger.info(
            f"Re-timing {len(clips)} clip(s) with {easing.name}: "
            f"{plan.total_frames} frames at {self.config.fps:g} fps"
        )

        with tempfile.TemporaryDirectory(prefix="framekit_frames_") as temp_dir:
            frames_dir = Path(temp_dir)
            await self.extract_frames(plan, clip_paths, frames_dir)
            await self.encoder.encode(frames_dir, self.ffmpeg_pattern, self.config.fps, Path(output_path))

        return StitchResult(output_path=Path(output_path), plan=plan, easing=easing.name)


class EasedRetimer(EasedStitcher):
    """Speed-ramps a single clip to a new duration."""

    min_clips = 1

    async def retime(self, video_path: Path, output_path: Optional[Path] = None) -> StitchResult:
        video_path = Path(video_path)
        output = output_path or video_path.with_name(f"{video_path.stem}_retimed.mp4")
        return await self.stitch([video_path], output)


async def stitch_videos(
    clips: Sequence[Path],
    output_path: Path,
    easing: str = "dramatic-swoop",
    clip_duration: float = 1.5,
    fps: float = 60.0
) -> StitchResult:
    """
    Convenience function to stitch clips with an eased speed curve.

    Args:
        clips: Source clips in order
        output_path: Output video
        easing: Easing name or Bezier 'a,b,c,d'
        clip_duration: Output seconds per clip
        fps: Output frame rate

    Returns:
        StitchResult
    """
    config = RetimeConfig(easing=easing, output_duration=clip_duration, fps=fps)
    return await EasedStitcher(config).stitch(clips, output_path)


async def retime_video(
    video_path: Path,
    easing: str,
    output_duration: float,
    fps: float,
    output_path: Optional[Path] = None
) -> StitchResult:
    """Convenience function to re-time one clip."""
    config = RetimeConfig(easing=easing, output_duration=output_duration, fps=fps)
    return await EasedRetimer(config).retime(video_path, output_path)
