"""
Command line interface for contact sheet splitting and eased re-timing.

Exit status: 0 on success, 2 on input errors (missing file, bad easing,
non-positive duration or fps), 1 when ffmpeg/ffprobe or I/O fails.
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from PIL import ImageColor

from .core.interfaces import AspectResizeConfig, GridDetectionConfig, NormalizeConfig, RetimeConfig
from .grid.strategies import STRATEGIES
from .image.resizer import AspectRatioResizer
from .splitter import ContactSheetSplitter
from .timing.easing import parse_bezier, parse_easing
from .timing.planner import MultiSegmentTimestampPlanner, SegmentSource
from .video.retime import EasedRetimer, EasedStitcher

logger = logging.getLogger("framekit")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _parse_color(value: str) -> tuple:
    try:
        return ImageColor.getrgb(value)[:3]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid colour '{value}'")


def cmd_grid(args: argparse.Namespace) -> int:
    image_path = Path(args.image)
    if not image_path.is_file():
        raise FileNotFoundError(f"Image not found: {image_path}")

    splitter = ContactSheetSplitter(
        method=args.method,
        config=GridDetectionConfig(padding=args.padding),
        normalize_config=NormalizeConfig(fill_color=args.fill),
    )
    result = splitter.split(image_path, args.rows, args.cols, Path(args.output_dir))

    for cell, path in zip(result.grid.cells, result.frame_paths):
        print(f"{path}\t{cell.x},{cell.y},{cell.width}x{cell.height}")
    if result.grid.degraded:
        logger.warning("Grid detection was degraded; check the frames before using them")
    return EXIT_OK


def cmd_retime(args: argparse.Namespace) -> int:
    easing = parse_easing(args.easing)
    config = RetimeConfig(easing=args.easing, output_duration=args.duration, fps=args.fps)

    output = Path(args.output) if args.output else None
    result = asyncio.run(EasedRetimer(config).retime(Path(args.video), output))
    print(result.output_path)
    logger.info(f"{result.frame_count} frames, {result.duration:.2f}s, easing {easing.name}")
    return EXIT_OK


def cmd_stitch(args: argparse.Namespace) -> int:
    easing_text = args.bezier if args.bezier else args.easing
    easing = parse_bezier(args.bezier) if args.bezier else parse_easing(args.easing)

    config = RetimeConfig(easing=easing_text, output_duration=args.clip_duration, fps=args.fps)
    result = asyncio.run(EasedStitcher(config).stitch([Path(c) for c in args.clips], Path(args.output)))
    print(result.output_path)
    logger.info(
        f"Final {result.duration:.1f}s video from {len(args.clips)} clips with {easing.name}"
    )
    return EXIT_OK


def cmd_plan(args: argparse.Namespace) -> int:
    planner = MultiSegmentTimestampPlanner()
    segments = [
        SegmentSource(segment_id=f"segment-{k}", duration=duration)
        for k, duration in enumerate(args.source_durations)
    ]
    plan = planner.plan(segments, args.easing, args.duration, args.fps)

    payload = {
        "easing": plan.segment_plans[0].easing,
        "fps": plan.fps,
        "total_frames": plan.total_frames,
        "frames": [
            {
                "index": frame.index,
                "segment": frame.segment_id,
                "local_index": frame.local_index,
                "source_time": round(frame.source_time, 6),
            }
            for frame in plan
        ],
    }
    print(json.dumps(payload, indent=2))
    return EXIT_OK


def cmd_resize(args: argparse.Namespace) -> int:
    resizer = AspectRatioResizer(AspectResizeConfig(aspect_ratio=args.aspect_ratio, mode=args.mode))
    output_dir = Path(args.output_dir) if args.output_dir else None
    paths = resizer.resize_folder(Path(args.frames_dir), output_dir)
    for path in paths:
        print(path)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="framekit",
        description="Split contact sheets into frames and speed-ramp video clips.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    grid = subparsers.add_parser("grid", help="Split a contact sheet into frame-1..frame-N")
    grid.add_argument("image", help="Contact sheet image")
    grid.add_argument("rows", type=int, help="Expected grid rows")
    grid.add_argument("cols", type=int, help="Expected grid columns")
    grid.add_argument("output_dir", help="Folder for the extracted frames")
    grid.add_argument("--method", choices=sorted(STRATEGIES), default="auto")
    grid.add_argument("--padding", type=int, default=0, help="Edge trim for the simple method")
    grid.add_argument("--fill", type=_parse_color, default=(0, 0, 0), help="Letterbox colour")
    grid.set_defaults(func=cmd_grid)

    retime = subparsers.add_parser("retime", help="Speed-ramp one clip with an easing curve")
    retime.add_argument("video", help="Source video")
    retime.add_argument("easing", help="Easing name or Bezier 'a,b,c,d'")
    retime.add_argument("duration", type=float, help="Output duration in seconds")
    retime.add_argument("fps", type=float, help="Output frame rate")
    retime.add_argument("--output", help="Output video path")
    retime.set_defaults(func=cmd_retime)

    stitch = subparsers.add_parser("stitch", help="Speed-ramp and concatenate clips")
    stitch.add_argument("clips", nargs="+", help="Source clips in order")
    stitch.add_argument("--output", required=True, help="Output video path")
    curve = stitch.add_mutually_exclusive_group()
    curve.add_argument("--easing", default="dramatic-swoop", help="Easing name")
    curve.add_argument("--bezier", help="Custom curve as 'p1x,p1y,p2x,p2y'")
    stitch.add_argument("--clip-duration", type=float, default=1.5, help="Output seconds per clip")
    stitch.add_argument("--fps", type=float, default=60.0, help="Output frame rate")
    stitch.set_defaults(func=cmd_stitch)

    plan = subparsers.add_parser("plan", help="Print the timestamp plan as JSON")
    plan.add_argument("easing", help="Easing name or Bezier 'a,b,c,d'")
    plan.add_argument("duration", type=float, help="Output duration per segment")
    plan.add_argument("fps", type=float, help="Output frame rate")
    plan.add_argument("source_durations", type=float, nargs="+", help="Source duration of each segment")
    plan.set_defaults(func=cmd_plan)

    resize = subparsers.add_parser("resize", help="Reshape all frames in a folder to an aspect ratio")
    resize.add_argument("frames_dir", help="Folder of frames")
    resize.add_argument("--aspect-ratio", default="9:16", help="Target ratio W:H")
    resize.add_argument("--mode", choices=("crop", "pad"), default="crop")
    resize.add_argument("--output-dir", help="Destination (defaults to in place)")
    resize.set_defaults(func=cmd_resize)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return args.func(args)
    except (ValueError, FileNotFoundError) as exc:
        logger.error(str(exc))
        return EXIT_USAGE
    except (RuntimeError, OSError) as exc:
        logger.error(str(exc))
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
