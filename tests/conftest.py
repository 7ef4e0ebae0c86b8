"""
Pytest configuration and fixtures for FrameKit tests.
"""
import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image
import numpy as np

# Synthetic contact sheet layout: 2 rows x 3 cols of 380x370 noise cells,
# separated and surrounded by 20px white gutters.
SHEET_ROWS = 2
SHEET_COLS = 3
CELL_WIDTH = 380
CELL_HEIGHT = 370
GUTTER = 20
SHEET_WIDTH = GUTTER + SHEET_COLS * (CELL_WIDTH + GUTTER)    # 1220
SHEET_HEIGHT = GUTTER + SHEET_ROWS * (CELL_HEIGHT + GUTTER)  # 800


def make_sheet(
    rows: int = SHEET_ROWS,
    cols: int = SHEET_COLS,
    cell_width: int = CELL_WIDTH,
    cell_height: int = CELL_HEIGHT,
    gutter: int = GUTTER,
    gutter_value: int = 255,
    seed: int = 7,
) -> np.ndarray:
    """Grayscale sheet with uniform gutters and random-noise cells."""
    rng = np.random.default_rng(seed)
    width = gutter + cols * (cell_width + gutter)
    height = gutter + rows * (cell_height + gutter)
    sheet = np.full((height, width), gutter_value, dtype=np.uint8)

    for row in range(rows):
        for col in range(cols):
            x = gutter + col * (cell_width + gutter)
            y = gutter + row * (cell_height + gutter)
            sheet[y:y + cell_height, x:x + cell_width] = rng.integers(
                0, 256, size=(cell_height, cell_width), dtype=np.uint8
            )
    return sheet


def _cell_spans(extent: int, count: int, gutter: int) -> list:
    """(start, stop) of each cell when count cells share extent with internal gutters only."""
    cell = (extent - (count - 1) * gutter) / count
    cuts = [int(np.floor(k * cell + (k - 1) * gutter + 0.5)) for k in range(1, count)]
    starts = [0] + [cut + gutter for cut in cuts]
    stops = cuts + [extent]
    return list(zip(starts, stops))


def make_solid_sheet(
    rows: int,
    cols: int,
    width: int = 1200,
    height: int = 800,
    gutter: int = 20,
    gutter_value: int = 255,
    cell_values=None,
) -> np.ndarray:
    """Grayscale sheet of solid cells split by internal gutters, no outer margin."""
    sheet = np.full((height, width), gutter_value, dtype=np.uint8)
    values = list(cell_values) if cell_values is not None else [100] * (rows * cols)

    for row, (top, bottom) in enumerate(_cell_spans(height, rows, gutter)):
        for col, (left, right) in enumerate(_cell_spans(width, cols, gutter)):
            sheet[top:bottom, left:right] = values[row * cols + col]
    return sheet


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp(prefix="framekit_test_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sheet_array() -> np.ndarray:
    """2x3 grayscale contact sheet as an array."""
    return make_sheet()


@pytest.fixture
def sheet_image(temp_dir, sheet_array) -> Path:
    """2x3 contact sheet saved as PNG."""
    image_path = temp_dir / "sheet.png"
    Image.fromarray(sheet_array).convert("RGB").save(image_path, "PNG")
    return image_path


@pytest.fixture
def frames_dir(temp_dir) -> Path:
    """Folder of landscape frames named out of lexical order."""
    folder = temp_dir / "frames"
    folder.mkdir()
    for index in (1, 2, 10):
        img = Image.new("RGB", (320, 180), color="blue")
        img.save(folder / f"frame-{index}.png", "PNG")
    return folder


@pytest.fixture
def empty_dir(temp_dir) -> Path:
    """Create an empty directory."""
    empty = temp_dir / "empty"
    empty.mkdir()
    return empty


@pytest.fixture
def video_files(temp_dir):
    """Placeholder clip files (content is never decoded in unit tests)."""
    paths = []
    for name in ("clip1.mp4", "clip2.mp4"):
        path = temp_dir / name
        path.write_bytes(b"\x00")
        paths.append(path)
    return paths
