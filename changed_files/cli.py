from __future__ import annotations

from pathlib import Path
import os

import typer

from changed_files import __version__, actions, diff
from changed_files.config import load_context, load_env_file, load_inputs
from changed_files.errors import ChangedFilesError
from changed_files.events import parse_event, resolve
from changed_files.github_api import GitHubClient

app = typer.Typer(help="get-changed-files: list the files changed by a pull request, push or manual dispatch")


@app.callback()
def main() -> None:
    """get-changed-files command group."""


@app.command()
def run(
    token: str | None = typer.Option(None, envvar="INPUT_TOKEN", help="GitHub token used for the compare API"),
    output_format: str = typer.Option(
        "space-delimited", "--format", envvar="INPUT_FORMAT", help="Output format: space-delimited|csv|json"
    ),
    extensions: str = typer.Option(
        "", envvar="INPUT_EXTENSIONS", help="Space-separated extensions to keep, e.g. '.py .md' (default: all)"
    ),
) -> None:
    # Local runs can keep GITHUB_TOKEN and the GITHUB_* context in a .env file.
    load_env_file(Path.cwd() / ".env")

    try:
        inputs = load_inputs(token or os.getenv("GITHUB_TOKEN"), output_format, extensions)
        context = load_context()
        actions.debug(f"Payload keys: {','.join(context.payload.keys())}")

        event = parse_event(context.event_name, context.payload, context.sha)
        commits = resolve(event, cwd=context.workspace)
        actions.info(f"Base commit: {commits.base}")
        actions.info(f"Head commit: {commits.head}")

        client = GitHubClient(
            token=inputs.token,
            owner=context.owner,
            repo=context.repo,
            api_url=context.api_url,
            timeout_seconds=context.timeout_seconds,
        )
        outputs = diff.run(client, context.event_name, commits, inputs.output_format, inputs.extensions)
    except ChangedFilesError as exc:
        actions.set_failed(str(exc))
        raise typer.Exit(code=1)

    for name, value in outputs.items():
        actions.set_output(name, value)


@app.command()
def version() -> None:
    typer.echo(__version__)


if __name__ == "__main__":
    app()
