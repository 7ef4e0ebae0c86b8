"""
Tests for core interfaces and data types.
"""
import pytest
from pathlib import Path
from framekit.core.interfaces import (
    Axis,
    AxisTrace,
    CellBoundary,
    GridDetectionConfig,
    GridInfo,
    GutterRegion,
    IFrameExtractor,
    IRasterCollaborator,
    RetimeConfig,
    EncodeConfig,
    ThresholdConfig,
    VideoDimensions,
    VideoMetadata,
)


class TestGutterRegion:
    """Tests for GutterRegion dataclass."""

    def test_width_is_inclusive(self):
        region = GutterRegion(start=10, end=29)
        assert region.width == 20

    def test_center(self):
        region = GutterRegion(start=10, end=30)
        assert region.center == 20

    def test_single_pixel_region(self):
        region = GutterRegion(start=5, end=5, synthetic=True)
        assert region.width == 1
        assert region.synthetic is True

    def test_inverted_range_raises(self):
        with pytest.raises(ValueError, match="precedes"):
            GutterRegion(start=10, end=9)


class TestCellBoundary:
    """Tests for CellBoundary dataclass."""

    def test_box(self):
        cell = CellBoundary(x=10, y=20, width=100, height=50)
        assert cell.box == (10, 20, 110, 70)

    def test_area(self):
        cell = CellBoundary(x=0, y=0, width=100, height=50)
        assert cell.area == 5000


class TestGridInfo:
    """Tests for GridInfo dataclass."""

    def _cells(self, count):
        return [CellBoundary(x=i * 10, y=0, width=10, height=10) for i in range(count)]

    def test_cell_count_must_match_shape(self):
        with pytest.raises(ValueError, match="needs 6 cells"):
            GridInfo(rows=2, cols=3, cells=self._cells(5))

    def test_cell_lookup_is_row_major(self):
        cells = self._cells(6)
        grid = GridInfo(rows=2, cols=3, cells=cells)
        assert grid.cell(0, 2) is cells[2]
        assert grid.cell(1, 0) is cells[3]

    def test_defaults(self):
        grid = GridInfo(rows=1, cols=1, cells=self._cells(1))
        assert grid.strategy == "variance"
        assert grid.degraded is False
        assert grid.trace is None


class TestAxisTrace:
    """Tests for AxisTrace diagnostics."""

    def test_detected_dividers_ignores_synthetic(self):
        trace = AxisTrace(axis=Axis.COLUMNS, extent=100, expected=3)
        trace.dividers = [GutterRegion(30, 35), GutterRegion(66, 66, synthetic=True)]
        assert trace.detected_dividers == 1

    def test_degraded_on_shortfall(self):
        trace = AxisTrace(axis=Axis.ROWS, extent=100, expected=2)
        assert trace.degraded is False
        trace.shortfall = 1
        assert trace.degraded is True


class TestVideoDimensions:
    """Tests for VideoDimensions dataclass."""

    def test_creation_with_defaults(self):
        dims = VideoDimensions(width=1920, height=1080)
        assert dims.display_width == 1920
        assert dims.display_height == 1080
        assert dims.rotation == 0

    def test_creation_with_rotation(self):
        dims = VideoDimensions(
            width=1920,
            height=1080,
            display_width=1080,
            display_height=1920,
            rotation=90
        )
        assert dims.display_width == 1080
        assert dims.display_height == 1920


class TestVideoMetadata:
    """Tests for VideoMetadata dataclass."""

    def test_creation(self):
        metadata = VideoMetadata(
            path=Path("/clips/a.mp4"),
            duration=4.5,
            dimensions=VideoDimensions(1280, 720),
            codec="h264",
            fps=30.0,
        )
        assert metadata.duration == 4.5
        assert metadata.dimensions.width == 1280


class TestConfigs:
    """Tests for configuration defaults."""

    def test_threshold_defaults(self):
        config = ThresholdConfig()
        assert config.percentile == 1.0
        assert config.multiplier == 10.0
        assert config.lower_bound == 50.0
        assert config.upper_bound == 300.0

    def test_grid_detection_defaults(self):
        config = GridDetectionConfig()
        assert config.sample_start == 0.10
        assert config.sample_stop == 0.90
        assert config.min_gutter_floor == 3
        assert config.edge_fraction == 0.05
        assert config.padding == 0

    def test_grid_configs_do_not_share_thresholds(self):
        first = GridDetectionConfig()
        second = GridDetectionConfig()
        first.threshold.lower_bound = 1.0
        assert second.threshold.lower_bound == 50.0

    def test_retime_defaults(self):
        config = RetimeConfig()
        assert config.easing == "dramatic-swoop"
        assert config.output_duration == 1.5
        assert config.fps == 60.0

    def test_encode_defaults(self):
        config = EncodeConfig()
        assert config.codec == "libx264"
        assert config.crf == 18
        assert config.bitrate is None
        assert config.frame_format == "png"


class TestInterfaces:
    """Tests for the collaborator ABCs."""

    def test_raster_collaborator_must_implement_save(self):
        class NoSave(IRasterCollaborator):
            def open(self, image_path):
                return None

            def crop(self, image, cell):
                return image

            def letterbox(self, image, size, fill):
                return image

        with pytest.raises(TypeError):
            NoSave()

    def test_frame_extractor_needs_only_extract_frame(self):
        class SingleFrame(IFrameExtractor):
            async def extract_frame(self, video_path, output_path, timestamp):
                return output_path

        assert isinstance(SingleFrame(), IFrameExtractor)
