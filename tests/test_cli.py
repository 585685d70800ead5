"""
Integration tests for the command-line entry point.

This module tests:
- Tool discovery and configuration errors (exit 1)
- Usage output when flags are given without a URL
- Flag-driven runs and the interactive fallback
"""

import pytest
from unittest.mock import MagicMock, patch

from tuber import cli
from tuber.models.schemas import Artifact, ArtifactRequest, OutputTarget
from tuber.ui.selector import Selection


URL = "https://www.youtube.com/watch?v=abc"


@pytest.fixture
def ytdlp_found():
    with patch("tuber.cli.is_ytdlp_available", return_value=True):
        yield


@pytest.fixture
def use_runner():
    """Swap SubprocessRunner for a given fake runner."""
    patches = []

    def _use(runner):
        p = patch("tuber.cli.SubprocessRunner", return_value=runner)
        p.start()
        patches.append(p)
        return runner

    yield _use
    for p in patches:
        p.stop()


class TestConfigurationErrors:
    """Test missing tools are reported before any work."""

    def test_missing_ytdlp(self, capsys, fake_runner, use_runner):
        use_runner(fake_runner)
        with patch("tuber.cli.is_ytdlp_available", return_value=False):
            assert cli.main(["-a", URL]) == 1

        err = capsys.readouterr().err
        assert "not found in PATH" in err
        assert "https://github.com/yt-dlp/yt-dlp" in err
        assert fake_runner.calls == []

    def test_summary_without_summarizer(self, capsys, ytdlp_found, make_runner, use_runner):
        runner = use_runner(make_runner(summarizer=False))

        assert cli.main(["--sum", URL]) == 1

        assert "requires" in capsys.readouterr().err
        assert runner.calls == []


class TestFlagMode:
    """Test non-interactive runs."""

    def test_flags_without_url_prints_usage(self, capsys, ytdlp_found, fake_runner, use_runner):
        use_runner(fake_runner)

        assert cli.main(["-v", "-s"]) == 1

        out = capsys.readouterr().out
        assert out.startswith("Usage: tuber [flags] <url>")
        assert fake_runner.calls == []

    def test_audio_and_subtitles(self, capsys, ytdlp_found, fake_runner, use_runner, tmp_path):
        use_runner(fake_runner)

        assert cli.main(["-s", "-a", "-o", str(tmp_path), URL]) == 0

        assert fake_runner.fetched == [Artifact.AUDIO, Artifact.SUBTITLES]
        assert (tmp_path / "Test Video Title.txt").exists()
        err = capsys.readouterr().err
        assert "Downloading Audio + Subtitles from:" in err
        assert "Done!" in err

    def test_summary_goes_through_runner(self, ytdlp_found, fake_runner, use_runner, tmp_path):
        use_runner(fake_runner)

        assert cli.main(["--sum", "-p", "Key points", "-o", str(tmp_path), URL]) == 0

        assert fake_runner.summaries[0][1] == "Key points"

    def test_step_failure_exit_code(self, capsys, ytdlp_found, make_runner, tool_error, use_runner, tmp_path):
        runner = use_runner(make_runner(fail={Artifact.VIDEO: tool_error()}))

        assert cli.main(["-v", "-a", "-o", str(tmp_path), URL]) == 1

        assert runner.fetched == [Artifact.VIDEO]
        assert "Error: video download failed" in capsys.readouterr().err

    def test_unexpected_runner_error_exit_code(self, capsys, ytdlp_found, make_runner, use_runner, tmp_path):
        """Test a non-tool error from the runner is reported, not raised."""
        use_runner(make_runner(fail={Artifact.VIDEO: RuntimeError("exec blew up")}))

        assert cli.main(["-v", "-o", str(tmp_path), URL]) == 1

        assert "Error: video download failed: exec blew up" in capsys.readouterr().err

    def test_flag_mode_does_not_list_files(self, capsys, ytdlp_found, fake_runner, use_runner, tmp_path):
        """Test no paths are listed when yt-dlp names the files from the title."""
        use_runner(fake_runner)

        assert cli.main(["-a", "-o", str(tmp_path), URL]) == 0

        assert ".mp3" not in capsys.readouterr().err

    def test_dotenv_loaded_at_startup(self, ytdlp_found, fake_runner, use_runner):
        use_runner(fake_runner)
        with patch("tuber.cli.load_dotenv") as mock_load:
            cli.main(["-v", "-s"])
        mock_load.assert_called_once_with()


class TestInteractiveMode:
    """Test the selector fallback when no selection flag is given."""

    def test_quit_exits_zero(self, ytdlp_found, fake_runner, use_runner):
        use_runner(fake_runner)
        selector = MagicMock()
        selector.run.return_value = None

        with patch("tuber.cli.InteractiveSelector", return_value=selector):
            assert cli.main([URL]) == 0

        selector.run.assert_called_once_with(URL)
        assert fake_runner.fetched == []

    def test_selection_is_downloaded(self, ytdlp_found, fake_runner, use_runner, tmp_path):
        use_runner(fake_runner)
        selector = MagicMock()
        selector.run.return_value = Selection(
            URL,
            ArtifactRequest(video=True),
            OutputTarget(directory=str(tmp_path), stem="picked"),
        )

        with patch("tuber.cli.InteractiveSelector", return_value=selector):
            assert cli.main([]) == 0

        artifact, url, pattern = fake_runner.calls[0]
        assert artifact is Artifact.VIDEO
        assert url == URL
        assert pattern.endswith("picked.%(ext)s")

    def test_written_files_listed(self, capsys, ytdlp_found, fake_runner, use_runner, tmp_path):
        use_runner(fake_runner)
        selector = MagicMock()
        selector.run.return_value = Selection(
            URL,
            ArtifactRequest(video=True, subtitles=True),
            OutputTarget(directory=str(tmp_path), stem="picked"),
        )

        with patch("tuber.cli.InteractiveSelector", return_value=selector):
            assert cli.main([]) == 0

        err = capsys.readouterr().err
        assert str(tmp_path / "picked.mp4") in err
        assert str(tmp_path / "picked.txt") in err


class TestParser:
    """Test flag parsing."""

    def test_flags(self):
        args = cli.build_parser().parse_args(["-v", "-a", "-s", "--sum", "-p", "x", "-o", "d", URL])
        assert (args.video, args.audio, args.subtitles, args.summary) == (True, True, True, True)
        assert args.prompt == "x"
        assert args.output_dir == "d"
        assert args.url == URL

    def test_combined_short_flags(self):
        args = cli.build_parser().parse_args(["-as", URL])
        assert args.audio and args.subtitles and not args.video
