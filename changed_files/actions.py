"""Workflow commands understood by the GitHub Actions runner.

Diagnostics are plain lines on stdout; ``::debug::``/``::warning::``/``::error::``
prefixes let the runner classify them. Step outputs are appended to the file
named by ``GITHUB_OUTPUT``.
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path

import typer


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def info(message: str) -> None:
    typer.echo(message)


def debug(message: str) -> None:
    typer.echo(f"::debug::{escape_data(message)}")


def warning(message: str) -> None:
    typer.secho(f"::warning::{escape_data(message)}", fg=typer.colors.YELLOW)


def error(message: str) -> None:
    typer.secho(f"::error::{escape_data(message)}", fg=typer.colors.RED)


def set_failed(message: str) -> None:
    error(message)


def set_output(name: str, value: str, output_file: str | None = None) -> None:
    path = output_file if output_file is not None else os.getenv("GITHUB_OUTPUT")
    if not path:
        # Local runs have no output file; the values still land in the log.
        typer.echo(f"{name}={value}")
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Output delimiter collision for '{name}'")
    with Path(path).open("a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
