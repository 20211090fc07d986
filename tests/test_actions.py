from pathlib import Path

import pytest

from changed_files import actions


def test_set_output_appends_heredoc(tmp_path: Path):
    out = tmp_path / "github_output"
    actions.set_output("all", "a.py b.py", output_file=str(out))
    actions.set_output("json", '["x\\ny"]', output_file=str(out))

    lines = out.read_text().splitlines()
    assert lines[0].startswith("all<<ghadelimiter_")
    assert lines[1] == "a.py b.py"
    assert lines[2] == lines[0].split("<<", 1)[1]
    assert lines[3].startswith("json<<")


def test_set_output_without_file_echoes(monkeypatch, capsys):
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    actions.set_output("removed", "")
    assert capsys.readouterr().out == "removed=\n"


def test_debug_escapes_newlines(capsys):
    actions.debug("line1\nline2 100%")
    assert capsys.readouterr().out == "::debug::line1%0Aline2 100%25\n"


@pytest.mark.parametrize("fn,prefix", [(actions.set_failed, "::error::"), (actions.warning, "::warning::")])
def test_annotations(fn, prefix, capsys):
    fn("something broke")
    assert capsys.readouterr().out.strip() == f"{prefix}something broke"
