"""
Multi-segment timestamp planning for concatenated, speed-ramped clips.
"""
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, Union
import logging

from ..core.interfaces import RetimeConfig
from .easing import Easing, parse_easing
from .mapper import TimestampMapper, TimestampPlan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SegmentSource:
    """One source clip handed to the planner."""
    segment_id: str
    duration: float


@dataclass(frozen=True)
class GlobalFrame:
    """One output frame of the stitched video and where it comes from."""
    index: int
    segment_index: int
    segment_id: str
    local_index: int
    source_time: float


@dataclass(frozen=True)
class GlobalTimestampPlan:
    """All output frames across segments, in global index order."""
    frames: Tuple[GlobalFrame, ...]
    segment_plans: Tuple[TimestampPlan, ...]
    fps: float

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self) -> Iterator[GlobalFrame]:
        return iter(self.frames)

    @property
    def total_frames(self) -> int:
        return len(self.frames)

    @property
    def output_duration(self) -> float:
        return self.total_frames / self.fps

    def frames_for_segment(self, segment_index: int) -> List[GlobalFrame]:
        return [frame for frame in self.frames if frame.segment_index == segment_index]


class MultiSegmentTimestampPlanner:
    """
    Runs TimestampMapper per segment and lays the local frames end to end
    on a single gapless global frame index.
    """

    def __init__(
        self,
        mapper: Optional[TimestampMapper] = None,
        config: Optional[RetimeConfig] = None
    ):
        self.config = config or RetimeConfig()
        self.mapper = mapper or TimestampMapper(self.config)

    def plan(
        self,
        segments: Sequence[Union[SegmentSource, float]],
        easing: Union[Easing, str],
        output_duration: float,
        fps: float,
    ) -> GlobalTimestampPlan:
        """
        Plan every output frame of the concatenated video.

        Args:
            segments: SegmentSource values (bare durations get ids 'segment-<k>')
            easing: Easing applied to each segment
            output_duration: Output duration per segment
            fps: Output frame rate

        Returns:
            GlobalTimestampPlan with indices 0..total-1
        """
        if not segments:
            raise ValueError("At least one segment is required")
        if isinstance(easing, str):
            easing = parse_easing(easing)

        sources = [
            segment if isinstance(segment, SegmentSource)
            else SegmentSource(segment_id=f"segment-{k}", duration=float(segment))
            for k, segment in enumerate(segments)
        ]

        frames: List[GlobalFrame] = []
        plans: List[TimestampPlan] = []
        cumulative = 0

        for segment_index, source in enumerate(sources):
            local = self.mapper.map(easing, source.duration, output_duration, fps)
            plans.append(local)
            for local_index, source_time in enumerate(local):
                frames.append(GlobalFrame(
                    index=cumulative + local_index,
                    segment_index=segment_index,
                    segment_id=source.segment_id,
                    local_index=local_index,
                    source_time=source_time,
                ))
            cumulative += len(local)
            logger.debug(
                f"Segment {segment_index} ({source.segment_id}): {len(local)} frames "
                f"from {source.duration:.3f}s source"
            )

        return GlobalTimestampPlan(frames=tuple(frames), segment_plans=tuple(plans), fps=float(fps))
