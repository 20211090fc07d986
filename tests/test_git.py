from unittest.mock import patch

import pytest

from changed_files.errors import GitError, ParentBranchNotFoundError
from changed_files.git import (
    diff_name_status,
    find_parent_branch,
    git,
    parse_branch_listing,
    resolve_parent_branch,
)


class _Proc:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


@patch("changed_files.git.shutil.which", return_value="/usr/bin/git")
@patch("changed_files.git.subprocess.run")
def test_git_returns_stdout(mock_run, _which):
    mock_run.return_value = _Proc(returncode=0, stdout="a.py\nb/c.tf\n")
    assert git(["diff", "--name-only"]) == "a.py\nb/c.tf\n"
    assert mock_run.call_args.args[0] == ["/usr/bin/git", "diff", "--name-only"]


@patch("changed_files.git.shutil.which", return_value="/usr/bin/git")
@patch("changed_files.git.subprocess.run")
def test_git_nonzero_exit_raises(mock_run, _which):
    mock_run.return_value = _Proc(returncode=128, stderr="bad revision")
    with pytest.raises(GitError, match="bad revision"):
        git(["diff", "origin/does-not-exist"])


def test_git_missing_executable():
    with patch("changed_files.git.shutil.which", return_value=None):
        with pytest.raises(GitError):
            git(["branch"])


def test_parse_branch_listing_strips_markers_and_detached_head():
    listing = "* (HEAD detached at 1a2b3c4)\n  develop\n+ worktree-branch\n  feature/main-fix\n"
    assert parse_branch_listing(listing) == ["develop", "worktree-branch", "feature/main-fix"]


def test_find_parent_branch_uses_listing_order_not_priority():
    assert find_parent_branch(["master", "develop"]) == "master"
    assert find_parent_branch(["feature/x", "main", "develop"]) == "main"


def test_find_parent_branch_requires_exact_name():
    assert find_parent_branch(["feature/main-fix", "main-old", "mainline"]) is None


@patch("changed_files.git.shutil.which", return_value="/usr/bin/git")
@patch("changed_files.git.subprocess.run")
def test_resolve_parent_branch_skips_substring_matches(mock_run, _which):
    mock_run.return_value = _Proc(stdout="  feature/main-fix\n* main\n")
    assert resolve_parent_branch() == "main"


@patch("changed_files.git.shutil.which", return_value="/usr/bin/git")
@patch("changed_files.git.subprocess.run")
def test_resolve_parent_branch_none_found(mock_run, _which):
    mock_run.return_value = _Proc(stdout="* feature/a\n  release\n")
    with pytest.raises(ParentBranchNotFoundError, match="No parent branch found"):
        resolve_parent_branch()


@patch("changed_files.git.shutil.which", return_value="/usr/bin/git")
@patch("changed_files.git.subprocess.run")
def test_diff_name_status_keeps_new_path_for_renames(mock_run, _which):
    mock_run.return_value = _Proc(stdout="M\tsrc/a.py\nR100\told.md\tnew.md\n\n")
    assert diff_name_status("main", "abc") == [("M", "src/a.py"), ("R", "new.md")]
