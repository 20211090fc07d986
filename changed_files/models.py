from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Union

from changed_files.errors import ConfigurationError


EVENT_NAMES = ("pull_request", "push", "workflow_dispatch")

FILE_STATUSES = ("added", "modified", "removed", "renamed")

OUTPUT_NAMES = ("all", "added", "modified", "removed", "renamed", "added_modified")


class OutputFormat(str, Enum):
    SPACE_DELIMITED = "space-delimited"
    CSV = "csv"
    JSON = "json"

    @classmethod
    def parse(cls, value: str | None) -> "OutputFormat":
        raw = (value or "").strip() or cls.SPACE_DELIMITED.value
        try:
            return cls(raw)
        except ValueError as exc:
            allowed = ", ".join(f"'{f.value}'" for f in cls)
            raise ConfigurationError(f"Format must be one of {allowed}, got '{raw}'.") from exc


@dataclass(frozen=True)
class PushEvent:
    before: str
    after: str

    name = "push"


@dataclass(frozen=True)
class PullRequestEvent:
    base_sha: str
    head_sha: str

    name = "pull_request"


@dataclass(frozen=True)
class WorkflowDispatchEvent:
    sha: str

    name = "workflow_dispatch"


Event = Union[PushEvent, PullRequestEvent, WorkflowDispatchEvent]


@dataclass(frozen=True)
class CommitRange:
    base: str
    head: str


@dataclass(frozen=True)
class ChangedFile:
    filename: str
    status: str
    previous_filename: str | None = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "ChangedFile":
        return cls(
            filename=str(raw.get("filename", "")),
            status=str(raw.get("status", "")),
            previous_filename=raw.get("previous_filename"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Comparison:
    http_status: int
    status: str | None
    files: list[ChangedFile] = field(default_factory=list)


@dataclass
class FileGroups:
    all: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)
    added_modified: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, list[str]]:
        return {name: getattr(self, name) for name in OUTPUT_NAMES}
