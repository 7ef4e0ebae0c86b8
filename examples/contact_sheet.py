"""
Example: Contact Sheet Splitting with FrameKit

This example demonstrates how to:
- Split a contact sheet into same-size frames using the facade
- Inspect the detection trace when a grid comes back degraded
- Reshape the extracted frames to a vertical aspect ratio
"""
from pathlib import Path
from framekit import (
    AspectRatioResizer,
    AspectResizeConfig,
    ContactSheetSplitter,
    GridDetectionConfig,
    ImageProcessor,
    VarianceGridStrategy,
)


def split_sheet(sheet: Path, rows: int, cols: int, output_dir: Path):
    """Split a contact sheet using automatic strategy selection."""
    splitter = ContactSheetSplitter(method="auto")
    result = splitter.split(sheet, rows, cols, output_dir)

    print(f"Strategy: {result.grid.strategy}")
    print(f"Frame size: {result.dimensions.width}x{result.dimensions.height}")
    for path in result.frame_paths:
        print(f"  {path}")

    return result


def inspect_detection(sheet: Path, rows: int, cols: int):
    """Run variance detection directly and print its diagnostics."""
    config = GridDetectionConfig(min_confidence=0.8)
    gray = ImageProcessor().load_grayscale(sheet)
    grid = VarianceGridStrategy(config).detect(gray, rows, cols)

    trace = grid.trace
    print(f"Confidence: {trace.confidence:.2f} (degraded={grid.degraded})")
    for axis in (trace.columns, trace.rows):
        print(
            f"  {axis.axis.value}: threshold={axis.threshold:.1f} "
            f"min_width={axis.min_gutter_width} regions={len(axis.regions)} "
            f"detected={axis.detected_dividers}/{axis.expected - 1}"
        )
    for note in trace.notes:
        print(f"  note: {note}")


def make_vertical(frames_dir: Path):
    """Crop every extracted frame to 9:16 in place."""
    resizer = AspectRatioResizer(AspectResizeConfig(aspect_ratio="9:16", mode="crop"))
    paths = resizer.resize_folder(frames_dir)
    print(f"Resized {len(paths)} frames to 9:16")


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 4:
        print("Usage: python contact_sheet.py <sheet> <rows> <cols> [output_dir]")
        sys.exit(1)

    sheet = Path(sys.argv[1])
    if not sheet.exists():
        print(f"Image not found: {sheet}")
        sys.exit(1)

    rows, cols = int(sys.argv[2]), int(sys.argv[3])
    output_dir = Path(sys.argv[4]) if len(sys.argv) > 4 else sheet.with_suffix("")

    inspect_detection(sheet, rows, cols)
    split_sheet(sheet, rows, cols, output_dir)
    make_vertical(output_dir)
