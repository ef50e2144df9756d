from __future__ import annotations

from pathlib import Path

import pytest

from robocourse import deploy
from robocourse.config import DeployConfig


class _RecordingRunner:
    def __init__(self, codes: dict[str, int] | None = None) -> None:
        self.codes = codes or {}
        self.calls: list[list[str]] = []

    def __call__(self, cmd: list[str], cwd: Path | None) -> int:
        self.calls.append(cmd)
        return self.codes.get(cmd[1], 0)


def test_commands_in_order() -> None:
    assert deploy.deploy_commands(DeployConfig()) == [
        ["git", "status"],
        ["git", "add", "."],
        ["git", "commit", "-m", "Update build files"],
        ["git", "push", "origin", "main"],
    ]


def test_failed_commit_does_not_stop_push(capsys: pytest.CaptureFixture[str]) -> None:
    runner = _RecordingRunner(codes={"commit": 1})

    codes = deploy.run_deploy(DeployConfig(), runner=runner)

    assert codes == [0, 0, 1, 0]
    assert runner.calls[-1] == ["git", "push", "origin", "main"]
    assert "$ git push origin main" in capsys.readouterr().out


def test_dry_run_runs_nothing() -> None:
    runner = _RecordingRunner()

    codes = deploy.run_deploy(DeployConfig(), dry_run=True, runner=runner)

    assert runner.calls == []
    assert codes == [0, 0, 0, 0]


def test_main_prints_banner_and_exits_zero(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("DEPLOY_SITE_URL", raising=False)

    code = deploy.main(["--dry-run", "--branch", "gh-pages", "--site-url", "https://example.org/"])

    out = capsys.readouterr().out
    assert code == 0
    assert "$ git push origin gh-pages" in out
    assert "Deploy completed!" in out
    assert "https://example.org/" in out


def test_main_reports_completion_even_when_git_fails(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(deploy, "_run", lambda cmd, cwd: 128)

    code = deploy.main([])

    assert code == 0
    assert "Deploy completed!" in capsys.readouterr().out


def test_missing_git_binary_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    def _raise(*_args: object, **_kwargs: object) -> None:
        raise FileNotFoundError("git")

    monkeypatch.setattr(deploy.subprocess, "run", _raise)

    assert deploy._run(["git", "status"], None) == 127
