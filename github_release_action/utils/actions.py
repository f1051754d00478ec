"""Helpers for GitHub Actions workflow commands and step outputs."""

import uuid
from pathlib import Path

import typer


def escape_command_data(value: str) -> str:
    """Escape a message for use in a workflow command."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def emit_warning(message: str) -> None:
    """Emit a warning annotation on the workflow run."""
    typer.echo(f"::warning::{escape_command_data(message)}")


def emit_error(message: str) -> None:
    """Emit an error annotation on the workflow run."""
    typer.echo(f"::error::{escape_command_data(message)}")


def _make_delimiter(value: str) -> str:
    delimiter = f"GITHUB_OUTPUT_{uuid.uuid4().hex}"
    while delimiter in value:
        delimiter = f"GITHUB_OUTPUT_{uuid.uuid4().hex}"
    return delimiter


def write_step_outputs(output_path: Path | str, outputs: dict[str, str]) -> None:
    """Append step outputs to the ``GITHUB_OUTPUT`` file.

    Multi-line values are written with the heredoc delimiter syntax.
    """
    with Path(output_path).open("a", encoding="utf-8") as fh:
        for name, value in outputs.items():
            if "\n" in value:
                delimiter = _make_delimiter(value)
                fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                fh.write(f"{name}={value}\n")
