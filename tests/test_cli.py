"""
Tests for the framekit command line interface.
"""
import json
import pytest
from unittest.mock import Mock, patch, AsyncMock

from framekit.cli import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_stitch_defaults(self):
        args = build_parser().parse_args(["stitch", "a.mp4", "b.mp4", "--output", "out.mp4"])
        assert args.easing == "dramatic-swoop"
        assert args.clip_duration == 1.5
        assert args.fps == 60.0

    def test_easing_and_bezier_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([
                "stitch", "a.mp4", "b.mp4", "--output", "o.mp4",
                "--easing", "linear", "--bezier", "0,0,1,1",
            ])

    def test_grid_fill_colour(self):
        args = build_parser().parse_args(["grid", "s.png", "2", "3", "out", "--fill", "#ff0000"])
        assert args.fill == (255, 0, 0)

    def test_unknown_method_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["grid", "s.png", "2", "3", "out", "--method", "guess"])


class TestPlanCommand:
    """Tests for the plan subcommand."""

    def test_prints_json_plan(self, capsys):
        assert main(["plan", "linear", "0.5", "20", "2.0", "3.0"]) == EXIT_OK

        payload = json.loads(capsys.readouterr().out)
        assert payload["total_frames"] == 20
        assert payload["easing"] == "linear"
        assert payload["frames"][10]["segment"] == "segment-1"
        assert payload["frames"][10]["local_index"] == 0

    def test_unknown_easing(self):
        assert main(["plan", "wobble", "1.0", "30", "2.0"]) == EXIT_USAGE

    def test_non_positive_duration(self):
        assert main(["plan", "linear", "0", "30", "2.0"]) == EXIT_USAGE


class TestGridCommand:
    """Tests for the grid subcommand."""

    def test_splits_sheet(self, sheet_image, temp_dir, capsys):
        output_dir = temp_dir / "frames"

        assert main(["grid", str(sheet_image), "2", "3", str(output_dir)]) == EXIT_OK

        assert sorted(p.name for p in output_dir.iterdir()) == sorted(f"frame-{i}.png" for i in range(1, 7))
        assert len(capsys.readouterr().out.strip().splitlines()) == 6

    def test_missing_image(self, temp_dir):
        assert main(["grid", str(temp_dir / "missing.png"), "2", "3", str(temp_dir)]) == EXIT_USAGE

    def test_zero_rows(self, sheet_image, temp_dir):
        assert main(["grid", str(sheet_image), "0", "3", str(temp_dir)]) == EXIT_USAGE


class TestVideoCommands:
    """Input validation of retime and stitch (ffmpeg is never reached)."""

    def test_retime_missing_video(self, temp_dir):
        assert main(["retime", str(temp_dir / "gone.mp4"), "linear", "1.5", "60"]) == EXIT_USAGE

    def test_retime_bad_fps(self, video_files):
        assert main(["retime", str(video_files[0]), "linear", "1.5", "0"]) == EXIT_USAGE

    def test_stitch_needs_two_clips(self, video_files, temp_dir):
        assert main(["stitch", str(video_files[0]), "--output", str(temp_dir / "o.mp4")]) == EXIT_USAGE

    def test_stitch_bad_bezier(self, video_files, temp_dir):
        args = ["stitch", *map(str, video_files), "--output", str(temp_dir / "o.mp4"), "--bezier", "1,2,3"]
        assert main(args) == EXIT_USAGE

    def test_ffprobe_failure_is_a_tool_failure(self, video_files):
        process = Mock()
        process.returncode = 1
        process.communicate = AsyncMock(return_value=(b"", b"moov atom not found"))

        with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=process)):
            assert main(["retime", str(video_files[0]), "linear", "1.5", "60"]) == EXIT_FAILURE

    def test_missing_ffprobe_is_a_tool_failure(self, video_files):
        with patch("asyncio.create_subprocess_exec", AsyncMock(side_effect=FileNotFoundError())):
            assert main(["retime", str(video_files[0]), "linear", "1.5", "60"]) == EXIT_FAILURE


class TestResizeCommand:
    """Tests for the resize subcommand."""

    def test_resizes_folder(self, frames_dir, temp_dir):
        output_dir = temp_dir / "square"
        assert main(["resize", str(frames_dir), "--aspect-ratio", "1:1", "--output-dir", str(output_dir)]) == EXIT_OK
        assert len(list(output_dir.iterdir())) == 3

    def test_missing_folder(self, temp_dir):
        assert main(["resize", str(temp_dir / "none")]) == EXIT_USAGE
