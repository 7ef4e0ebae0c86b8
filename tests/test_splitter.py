"""
Tests for the ContactSheetSplitter facade.
"""
import pytest
from PIL import Image

from framekit import ContactSheetSplitter, split_contact_sheet
from framekit.core.interfaces import GridDetectionConfig, NormalizedDimensions
from framekit.grid import EqualDivisionStrategy


class TestContactSheetSplitter:
    """Tests for ContactSheetSplitter class."""

    def test_detect(self, sheet_image):
        grid = ContactSheetSplitter(method="variance").detect(sheet_image, 2, 3)
        assert len(grid.cells) == 6
        assert grid.degraded is False

    def test_split_writes_numbered_frames(self, sheet_image, temp_dir):
        output_dir = temp_dir / "frames"

        result = ContactSheetSplitter().split(sheet_image, 2, 3, output_dir)

        assert [p.name for p in result.frame_paths] == [f"frame-{i}.png" for i in range(1, 7)]
        assert result.dimensions == NormalizedDimensions(374, 364)
        assert result.grid.strategy == "variance"
        for path in result.frame_paths:
            with Image.open(path) as img:
                assert img.size == (374, 364)

    def test_custom_strategy(self, sheet_image, temp_dir):
        splitter = ContactSheetSplitter(strategy=EqualDivisionStrategy(GridDetectionConfig(padding=3)))

        result = splitter.split(sheet_image, 2, 3, temp_dir / "out")

        assert result.grid.strategy == "simple"
        assert result.dimensions == NormalizedDimensions(400, 394)

    def test_unknown_method_raises(self):
        with pytest.raises(ValueError, match="Unknown grid detection method"):
            ContactSheetSplitter(method="guess")

    def test_missing_image_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            ContactSheetSplitter().split(temp_dir / "missing.png", 2, 3, temp_dir)


class TestSplitContactSheet:
    """Tests for the convenience function."""

    def test_simple_method(self, sheet_image, temp_dir):
        result = split_contact_sheet(sheet_image, 2, 3, temp_dir / "simple", method="simple")
        assert len(result.frame_paths) == 6
        assert result.dimensions == NormalizedDimensions(406, 400)
