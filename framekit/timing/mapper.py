"""
Eased timestamp mapping: which source instant each output frame samples.
"""
import math
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from ..core.interfaces import RetimeConfig
from .easing import Easing, parse_easing

# Absorbs float representation error in duration * fps (e.g. 0.29 * 100).
_FRAME_COUNT_EPSILON = 1e-9


def _require_positive(value: float, label: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number, got {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise ValueError(f"{label} must be a positive finite number, got {value!r}")
    return number


def frame_count(output_duration: float, fps: float) -> int:
    """N = floor(output_duration * fps)."""
    output_duration = _require_positive(output_duration, "Output duration")
    fps = _require_positive(fps, "Frame rate")
    return int(math.floor(output_duration * fps + _FRAME_COUNT_EPSILON))


@dataclass(frozen=True)
class TimestampPlan:
    """Ordered source times (seconds), one per output frame."""
    timestamps: Tuple[float, ...]
    source_duration: float
    output_duration: float
    fps: float
    easing: str

    def __len__(self) -> int:
        return len(self.timestamps)

    def __iter__(self) -> Iterator[float]:
        return iter(self.timestamps)

    def __getitem__(self, index: int) -> float:
        return self.timestamps[index]


class TimestampMapper:
    """
    Maps output frames to source instants through an easing curve.

    For N = floor(D_out * fps) output frames, frame i samples
    easing(i / (N - 1)) * D_src, clamped into [0, D_src - end_guard].
    A linear curve with D_src == D_out degenerates to the natural frame
    times i / fps.
    """

    def __init__(self, config: Optional[RetimeConfig] = None):
        self.config = config or RetimeConfig()

    def map(
        self,
        easing: Union[Easing, str],
        source_duration: float,
        output_duration: float,
        fps: float,
    ) -> TimestampPlan:
        """
        Compute the timestamp plan for one segment.

        Args:
            easing: Easing value or name/Bezier text
            source_duration: Source clip length in seconds
            output_duration: Desired output length in seconds
            fps: Output frame rate

        Returns:
            TimestampPlan with exactly floor(output_duration * fps) entries

        Raises:
            ValueError: non-positive or non-finite durations/fps, bad easing
        """
        if isinstance(easing, str):
            easing = parse_easing(easing)
        source_duration = _require_positive(source_duration, "Source duration")
        output_duration = _require_positive(output_duration, "Output duration")
        fps = _require_positive(fps, "Frame rate")

        count = frame_count(output_duration, fps)
        upper = max(source_duration - self.config.end_guard, 0.0)

        if easing.identity and math.isclose(source_duration, output_duration, rel_tol=0.0, abs_tol=1e-9):
            raw = (i / fps for i in range(count))
        else:
            raw = (easing(self._progress(i, count)) * source_duration for i in range(count))

        timestamps = tuple(min(max(value, 0.0), upper) for value in raw)

        return TimestampPlan(
            timestamps=timestamps,
            source_duration=source_duration,
            output_duration=output_duration,
            fps=fps,
            easing=easing.name,
        )

    @staticmethod
    def _progress(index: int, count: int) -> float:
        if count <= 1:
            return 0.0
        return index / (count - 1)
