"""
Example: Eased Re-timing with FrameKit

This example demonstrates how to:
- Preview a timestamp plan without touching any video
- Stitch clips with the dramatic-swoop speed curve
- Use a custom Bezier curve for a single clip

Requires ffmpeg and ffprobe in PATH for the stitching steps.
"""
import asyncio
from pathlib import Path
from framekit import (
    EasedRetimer,
    MultiSegmentTimestampPlanner,
    RetimeConfig,
    list_easings,
)
from framekit.video import stitch_videos


def preview_plan(durations):
    """Show where each output frame samples its source clip."""
    planner = MultiSegmentTimestampPlanner()
    plan = planner.plan(durations, "dramatic-swoop", output_duration=1.5, fps=60)

    print(f"{plan.total_frames} frames, {plan.output_duration:.2f}s total")
    for segment_index, local in enumerate(plan.segment_plans):
        print(
            f"  segment {segment_index}: first={local[0]:.3f}s "
            f"middle={local[len(local) // 2]:.3f}s last={local[-1]:.3f}s"
        )


async def stitch(clips, output: Path):
    """Concatenate clips, each ramped to 1.5s at 60 fps."""
    result = await stitch_videos(clips, output, easing="dramatic-swoop", clip_duration=1.5, fps=60)
    print(f"Stitched {result.frame_count} frames into {result.output_path}")


async def retime_with_bezier(clip: Path):
    """Ramp one clip with a CSS-style curve."""
    config = RetimeConfig(easing="cubic-bezier(0.7, 0, 0.3, 1)", output_duration=2.0, fps=30)
    result = await EasedRetimer(config).retime(clip)
    print(f"Re-timed clip: {result.output_path}")


async def main():
    """Main example entry point."""
    import sys

    print(f"Available easings: {', '.join(list_easings())}")
    preview_plan([4.0, 6.5, 3.2])

    if len(sys.argv) < 3:
        print("Usage: python eased_stitch.py <clip1> <clip2> [...]")
        return

    clips = [Path(arg) for arg in sys.argv[1:]]
    await stitch(clips, clips[0].with_name("final.mp4"))
    await retime_with_bezier(clips[0])


if __name__ == "__main__":
    asyncio.run(main())
