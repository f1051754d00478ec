"""Unit tests for GitHub Actions workflow command helpers."""

from pathlib import Path

from pytest import CaptureFixture

from github_release_action.utils.actions import emit_error, emit_warning, escape_command_data, write_step_outputs


def test_escape_command_data() -> None:
    """Test that newlines and percent signs are escaped."""
    assert escape_command_data("50%\r\ndone") == "50%25%0D%0Adone"


def test_emit_annotations(capsys: CaptureFixture[str]) -> None:
    """Test that warnings and errors are printed as workflow commands."""
    emit_warning("File not found: a.txt")
    emit_error("line one\nline two")
    out = capsys.readouterr().out.splitlines()
    assert out == ["::warning::File not found: a.txt", "::error::line one%0Aline two"]


def test_write_step_outputs(tmp_path: Path) -> None:
    """Test that single-line values use name=value and multi-line values a heredoc."""
    output = tmp_path / "output"
    output.write_text("existing=1\n")

    write_step_outputs(output, {"release-id": "42", "changelog": "- a\n- b"})

    lines = output.read_text().splitlines()
    assert lines[0] == "existing=1"
    assert lines[1] == "release-id=42"
    name, delimiter = lines[2].split("<<")
    assert name == "changelog"
    assert lines[3:5] == ["- a", "- b"]
    assert lines[5] == delimiter
