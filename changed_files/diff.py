"""Classify the files of a commit comparison into status groups."""

from __future__ import annotations

import json
import os.path
from typing import Iterable, Protocol

from changed_files import actions
from changed_files.errors import DataShapeError, UpstreamAPIError
from changed_files.formatters import LOG_LABELS, build_outputs
from changed_files.models import FILE_STATUSES, ChangedFile, CommitRange, Comparison, FileGroups, OutputFormat


class CompareClient(Protocol):
    def compare(self, base: str, head: str) -> Comparison: ...


def parse_extensions(raw: str | None) -> frozenset[str]:
    return frozenset(token for token in (raw or "").split() if token)


def file_extension(filename: str) -> str:
    return os.path.splitext(filename)[1]


def filter_files(files: Iterable[ChangedFile], extensions: frozenset[str]) -> list[ChangedFile]:
    if not extensions:
        return list(files)
    return [f for f in files if file_extension(f.filename) in extensions]


def classify_files(files: Iterable[ChangedFile]) -> FileGroups:
    groups = FileGroups()
    for f in files:
        if f.status not in FILE_STATUSES:
            raise DataShapeError(
                f"One of your files includes an unsupported file status '{f.status}', "
                "expected 'added', 'modified', 'removed', or 'renamed'."
            )
        groups.all.append(f.filename)
        getattr(groups, f.status).append(f.filename)
        if f.status != "removed":
            groups.added_modified.append(f.filename)
    return groups


def check_comparison(comparison: Comparison, event_name: str) -> None:
    if comparison.http_status != 200:
        raise UpstreamAPIError(
            f"The GitHub API for comparing the base and head commits for this {event_name} event "
            f"returned {comparison.http_status}, expected 200."
        )
    if comparison.status != "ahead":
        raise UpstreamAPIError(
            f"The head commit for this {event_name} event is not ahead of the base commit "
            f"(comparison status: {comparison.status or 'unknown'})."
        )


def run(
    client: CompareClient,
    event_name: str,
    commits: CommitRange,
    output_format: OutputFormat,
    extensions: frozenset[str],
) -> dict[str, str]:
    """Compare ``commits`` and render every output value, failing on the first problem."""
    comparison = client.compare(commits.base, commits.head)
    check_comparison(comparison, event_name)

    files = filter_files(comparison.files, extensions)
    actions.info(f"Files: {json.dumps([f.to_dict() for f in files])}")

    groups = classify_files(files)
    outputs = build_outputs(groups, output_format)

    for name, label in LOG_LABELS.items():
        actions.info(f"{label}: {outputs[name]}")
    return outputs
