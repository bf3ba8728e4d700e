from __future__ import annotations

"""
Unit tests for the CLI controller (in-process).
"""

import errno
import json
import os

import pytest

from dirscope.interface.cli import app


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Use default configuration and leave the root logger untouched."""
    monkeypatch.setattr(app, "load_config", lambda path=None: app.get_default_config())
    monkeypatch.setattr(app, "configure_logging", lambda cfg, force=False: None)


def test_tree_command_prints_report(flat_tree, capsys):
    assert app.main(["tree", str(flat_tree)]) == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == f"Directory tree: {flat_tree} (mode: full)"
    assert out[-1] == "└── 📄 b.md"


def test_tree_json_output(flat_tree, capsys):
    assert app.main(["tree", str(flat_tree), "--mode", "folders", "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["mode"] == "folders"
    assert data["lines"] == ["📁 root", "└── 📁 sub"]


def test_stats_json_output(flat_tree, capsys):
    assert app.main(["stats", str(flat_tree), "--json"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert (data["file_count"], data["directory_count"], data["total_bytes"]) == (2, 1, 2058)


def test_missing_path_returns_exit_code_two(tmp_path, capsys):
    assert app.main(["tree", str(tmp_path / "missing")]) == 2
    assert "does not exist" in capsys.readouterr().err


def test_info_on_directory_returns_failure(flat_tree, capsys):
    assert app.main(["info", str(flat_tree / "sub")]) == 1
    assert "is a directory" in capsys.readouterr().err


def test_dump_config(flat_tree, capsys):
    assert app.main(["tree", str(flat_tree), "--ext", "PY", "--dump-config"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["extensions"] == [".py"]
    assert data["root_path"] == str(flat_tree)


def test_ls_on_unreadable_directory_returns_failure(flat_tree, monkeypatch, capsys):
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.path.basename(str(path)) == "root":
            raise PermissionError(errno.EACCES, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    assert app.main(["ls", str(flat_tree), "--use-defaults"]) == 1
    assert "Cannot access" in capsys.readouterr().err


def test_info_on_unreadable_file_returns_failure(flat_tree, monkeypatch, capsys):
    target = str(flat_tree / "a.txt")
    real_stat = os.stat

    def fake_stat(path, *args, **kwargs):
        if str(path) == target:
            raise PermissionError(errno.EACCES, "Permission denied", target)
        return real_stat(path, *args, **kwargs)

    monkeypatch.setattr(os, "stat", fake_stat)

    assert app.main(["info", target]) == 1
    assert "Cannot access" in capsys.readouterr().err
