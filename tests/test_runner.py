from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from jiu.config import Recipe
from jiu.errors import ExecutionError
from jiu.resolver import ResolvedCommand
from jiu.runner import run_command
from jiu.template import Literal


def _resolved(argv: list[str], cwd: Path) -> ResolvedCommand:
    recipe = Recipe(names=("r",), arguments=(), command=tuple(Literal(a) for a in argv))
    return ResolvedCommand(program_and_args=tuple(argv), working_directory=cwd, recipe=recipe)


def test_run_command_returns_exit_code(tmp_path: Path) -> None:
    code = run_command(_resolved([sys.executable, "-c", "raise SystemExit(7)"], tmp_path))
    assert code == 7


def test_run_command_uses_working_directory(tmp_path: Path) -> None:
    run_command(_resolved([sys.executable, "-c", "open('marker', 'w').close()"], tmp_path))
    assert (tmp_path / "marker").exists()


def test_run_command_maps_signal_termination_to_one(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _fake_run(argv: list[str], **_: object) -> subprocess.CompletedProcess[str]:
        return subprocess.CompletedProcess(argv, -9)

    monkeypatch.setattr("jiu.runner.subprocess.run", _fake_run)
    assert run_command(_resolved(["anything"], tmp_path)) == 1


def test_run_command_reports_missing_program(tmp_path: Path) -> None:
    with pytest.raises(ExecutionError) as exc:
        run_command(_resolved(["jiu-test-program-that-does-not-exist"], tmp_path))
    assert exc.value.code == "program_not_found"
    assert exc.value.hint is not None


def test_run_command_reports_missing_working_directory(tmp_path: Path) -> None:
    with pytest.raises(ExecutionError) as exc:
        run_command(_resolved([sys.executable, "-c", "pass"], tmp_path / "gone"))
    assert exc.value.code == "missing_working_directory"


def test_run_command_returns_130_when_interrupted(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def _interrupted(argv: list[str], **_: object) -> subprocess.CompletedProcess[str]:
        raise KeyboardInterrupt

    monkeypatch.setattr("jiu.runner.subprocess.run", _interrupted)
    assert run_command(_resolved(["anything"], tmp_path)) == 130
