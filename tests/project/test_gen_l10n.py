"""Tests for the gen-l10n runner."""

from __future__ import annotations

import subprocess
from pathlib import Path

from l10n_extract.project.gen_l10n import GeneratorRunner


def test_runner_invokes_flutter_in_project_root(tmp_path: Path) -> None:
    calls = []

    def runner(args, cwd, timeout=None):
        calls.append((list(args), Path(cwd), timeout))
        return subprocess.CompletedProcess(args, 0, stdout="Generated\n", stderr="")

    outcome = GeneratorRunner(runner=runner, timeout=30).run(tmp_path)

    assert calls == [(["flutter", "gen-l10n"], tmp_path, 30)]
    assert outcome.ok is True
    assert outcome.returncode == 0
    assert outcome.stdout == "Generated\n"


def test_runner_reports_non_zero_exit(tmp_path: Path) -> None:
    def runner(args, cwd, timeout=None):
        return subprocess.CompletedProcess(args, 1, stdout="", stderr="bad arb\n")

    outcome = GeneratorRunner(runner=runner).run(tmp_path)

    assert outcome.ok is False
    assert outcome.returncode == 1
    assert outcome.stderr == "bad arb\n"


def test_runner_tolerates_missing_flutter(tmp_path: Path) -> None:
    def runner(args, cwd, timeout=None):
        raise FileNotFoundError(2, "No such file or directory", "flutter")

    outcome = GeneratorRunner(runner=runner).run(tmp_path)

    assert outcome.ok is False
    assert outcome.returncode is None
    assert outcome.error is not None
    assert "flutter executable not found" in outcome.error


def test_runner_tolerates_timeouts(tmp_path: Path) -> None:
    def runner(args, cwd, timeout=None):
        raise subprocess.TimeoutExpired(args, timeout)

    outcome = GeneratorRunner(runner=runner, timeout=5).run(tmp_path)

    assert outcome.ok is False
    assert outcome.error == "timed out after 5s"
