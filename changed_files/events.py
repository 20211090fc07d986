from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from changed_files import actions
from changed_files.errors import ConfigurationError, UnsupportedEventError
from changed_files.git import diff_name_only, diff_name_status, resolve_parent_branch
from changed_files.models import (
    EVENT_NAMES,
    CommitRange,
    Event,
    PullRequestEvent,
    PushEvent,
    WorkflowDispatchEvent,
)


GIT_STATUS_NAMES = {"A": "added", "M": "modified", "D": "removed", "R": "renamed"}


def _require(value: Any, field_name: str, event_name: str) -> str:
    if not value or not isinstance(value, str):
        raise ConfigurationError(f"The {event_name} event payload is missing required field '{field_name}'.")
    return value


def parse_event(event_name: str, payload: dict[str, Any], sha: str | None = None) -> Event:
    """Build the typed event for ``event_name`` from the raw webhook payload."""
    if event_name not in EVENT_NAMES:
        raise UnsupportedEventError(
            f"This action only supports {', '.join(EVENT_NAMES)} events, got '{event_name or 'unknown'}'."
        )

    if event_name == "push":
        return PushEvent(
            before=_require(payload.get("before"), "before", event_name),
            after=_require(payload.get("after"), "after", event_name),
        )

    if event_name == "pull_request":
        pr = payload.get("pull_request") or {}
        return PullRequestEvent(
            base_sha=_require((pr.get("base") or {}).get("sha"), "pull_request.base.sha", event_name),
            head_sha=_require((pr.get("head") or {}).get("sha"), "pull_request.head.sha", event_name),
        )

    return WorkflowDispatchEvent(sha=_require(sha, "GITHUB_SHA", event_name))


def _log_local_diff(base: str, head: str, cwd: Path | None) -> None:
    statuses = diff_name_status(base, head, cwd=cwd)
    names = diff_name_only(base, head, cwd=cwd)
    files = [
        {"name": name, "status": GIT_STATUS_NAMES.get(statuses[idx][0], "") if idx < len(statuses) else ""}
        for idx, name in enumerate(names)
    ]
    actions.debug(f"Files: {json.dumps(files)}")


def resolve(event: Event, cwd: Path | None = None) -> CommitRange:
    """Return the base/head pair to compare for ``event``.

    Push and pull request events carry both commits in their payload. A manual
    dispatch only knows the current commit, so the base is the first of
    develop/main/master found among the local branches.
    """
    actions.info(f"Handling {event.name} event")
    actions.debug(f"Event: {event!r}")

    if isinstance(event, PushEvent):
        return CommitRange(base=event.before, head=event.after)

    if isinstance(event, PullRequestEvent):
        return CommitRange(base=event.base_sha, head=event.head_sha)

    if isinstance(event, WorkflowDispatchEvent):
        head = event.sha
        base = resolve_parent_branch(cwd)
        actions.debug(f"Parent branch: {base}")
        _log_local_diff(base, head, cwd)
        return CommitRange(base=base, head=head)

    raise UnsupportedEventError(f"Unhandled event type: {type(event).__name__}")
