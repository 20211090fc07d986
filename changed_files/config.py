from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping
import json
import os

from changed_files.diff import parse_extensions
from changed_files.errors import ConfigurationError
from changed_files.github_api import DEFAULT_API_URL
from changed_files.models import OutputFormat


@dataclass(frozen=True)
class ActionInputs:
    token: str
    output_format: OutputFormat
    extensions: frozenset[str] = frozenset()


@dataclass(frozen=True)
class WorkflowContext:
    event_name: str
    payload: dict[str, Any]
    sha: str | None
    owner: str
    repo: str
    api_url: str = DEFAULT_API_URL
    workspace: Path | None = None
    timeout_seconds: int = 30


def parse_env_text(text: str) -> dict[str, str]:
    """Parse ``.env`` text: ``KEY=VALUE`` or ``export KEY=VALUE``, one per line."""
    values: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("export "):
            line = line[len("export ") :].lstrip()
        name, sep, value = line.partition("=")
        name = name.strip()
        if not sep or not name or name.startswith("#"):
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]
        values[name] = value
    return values


def load_env_file(path: Path) -> None:
    if not path.is_file():
        return
    for name, value in parse_env_text(path.read_text(encoding="utf-8", errors="ignore")).items():
        os.environ.setdefault(name, value)


def load_inputs(token: str | None, output_format: str | None, extensions: str | None) -> ActionInputs:
    token = (token or "").strip()
    if not token:
        raise ConfigurationError("Input required and not supplied: token")
    return ActionInputs(
        token=token,
        output_format=OutputFormat.parse(output_format),
        extensions=parse_extensions(extensions),
    )


def load_payload(event_path: str | None) -> dict[str, Any]:
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigurationError(f"Invalid event payload in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Event payload in {path} must be a JSON object")
    return data


def _split_repository(repository: str) -> tuple[str, str]:
    owner, sep, repo = repository.partition("/")
    if not sep or not owner or not repo:
        raise ConfigurationError(f"Repository must look like 'owner/repo', got '{repository}'")
    return owner, repo


def load_context(environ: Mapping[str, str] | None = None) -> WorkflowContext:
    env = os.environ if environ is None else environ
    payload = load_payload(env.get("GITHUB_EVENT_PATH"))

    repository = (env.get("GITHUB_REPOSITORY") or "").strip()
    if not repository:
        repository = str((payload.get("repository") or {}).get("full_name") or "")
    if not repository:
        raise ConfigurationError("GITHUB_REPOSITORY is not set and the event payload names no repository")
    owner, repo = _split_repository(repository)

    workspace = (env.get("GITHUB_WORKSPACE") or "").strip()
    timeout_raw = (env.get("CHANGED_FILES_TIMEOUT_SECONDS") or "30").strip()
    try:
        timeout_seconds = int(timeout_raw)
    except ValueError as exc:
        raise ConfigurationError(f"CHANGED_FILES_TIMEOUT_SECONDS must be an integer, got '{timeout_raw}'") from exc

    return WorkflowContext(
        event_name=(env.get("GITHUB_EVENT_NAME") or "").strip(),
        payload=payload,
        sha=(env.get("GITHUB_SHA") or "").strip() or None,
        owner=owner,
        repo=repo,
        api_url=(env.get("GITHUB_API_URL") or "").strip() or DEFAULT_API_URL,
        workspace=Path(workspace) if workspace else None,
        timeout_seconds=timeout_seconds,
    )
