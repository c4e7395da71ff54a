"""
Tests for the command-line interface.
"""

import json

import pytest

from ..cli import main


def test_new_prints_seed_and_modules(capsys):
    main(["new", "--seed", "ABC123"])
    out = capsys.readouterr().out
    assert "Seed: ABC123" in out
    assert "Timer: 300s" in out
    assert out.count("_0") >= 1


def test_new_json_snapshot(capsys):
    main(["new", "--seed", "ABC123", "--mode", "full", "--difficulty", "expert", "--json"])
    snapshot = json.loads(capsys.readouterr().out)
    assert snapshot["seed"] == "ABC123"
    assert snapshot["status"] == "intro"
    assert len(snapshot["modules"]) == 5


def test_solve_lists_every_module(capsys):
    main(["solve", "ABC123", "--mode", "full", "--difficulty", "expert"])
    out = capsys.readouterr().out
    assert out.startswith("Seed: ABC123 (full/expert)")
    assert sum(1 for line in out.splitlines() if line.endswith(":") and "_" in line) == 5


def test_no_command_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
