from __future__ import annotations

from pathlib import Path
import shutil
import subprocess

from changed_files.errors import GitError, ParentBranchNotFoundError


PARENT_BRANCHES = frozenset({"develop", "main", "master"})


def git(args: list[str], cwd: Path | None = None) -> str:
    executable = shutil.which("git")
    if executable is None:
        raise GitError("git is not installed or not available in PATH")

    try:
        proc = subprocess.run(
            [executable, *args],
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise GitError("git is not installed or not available in PATH") from exc

    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()
        raise GitError(
            f"git {' '.join(args)} exited with {proc.returncode}. {stderr or 'Check git history and ref availability.'}"
        )

    return proc.stdout or ""


def parse_branch_listing(listing: str) -> list[str]:
    """Turn ``git branch`` output into branch names, keeping listing order."""
    names: list[str] = []
    for raw in listing.splitlines():
        line = raw.rstrip()
        if not line.strip():
            continue
        # First two columns hold the current (*) / other worktree (+) marker.
        name = line[2:].strip() if line[:1] in ("*", "+", " ") else line.strip()
        if not name or name.startswith("("):
            continue
        names.append(name)
    return names


def find_parent_branch(branches: list[str]) -> str | None:
    for name in branches:
        if name in PARENT_BRANCHES:
            return name
    return None


def list_branches(cwd: Path | None = None) -> list[str]:
    return parse_branch_listing(git(["-P", "branch"], cwd=cwd))


def resolve_parent_branch(cwd: Path | None = None) -> str:
    branches = list_branches(cwd)
    parent = find_parent_branch(branches)
    if parent is None:
        raise ParentBranchNotFoundError(
            f"No parent branch found. Expected one of {', '.join(sorted(PARENT_BRANCHES))} among local branches: {branches or 'none'}"
        )
    return parent


def diff_name_status(base: str, head: str, cwd: Path | None = None) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for line in git(["-P", "diff", "--name-status", base, head], cwd=cwd).splitlines():
        if not line.strip():
            continue
        parts = line.split("\t")
        # Renames and copies carry a score (R100) and two paths; keep the new one.
        out.append((parts[0].strip()[:1], parts[-1]))
    return out


def diff_name_only(base: str, head: str, cwd: Path | None = None) -> list[str]:
    return [line for line in git(["-P", "diff", "--name-only", base, head], cwd=cwd).splitlines() if line.strip()]
