from __future__ import annotations

from pathlib import Path

import pytest

from quickly import cli
from quickly.colors import BASIC_PALETTE, RESET


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> list[Path]:
    repos = []
    for name in ("alpha", "beta", "gamma"):
        repo = tmp_path / name
        repo.mkdir()
        repos.append(repo)
    config = tmp_path / "quicklyrc"
    config.write_text("\n".join(str(repo) for repo in repos) + "\n", encoding="utf-8")
    monkeypatch.setenv("QUICKLY_CONFIG", str(config))
    monkeypatch.setenv("QUICKLY_SHELL", "sh")
    monkeypatch.delenv("QUICKLY_WORKERS", raising=False)
    monkeypatch.delenv("QUICKLY_PALETTE", raising=False)
    return repos


def test_parser_extracts_branch_filter() -> None:
    args = cli.build_parser().parse_args(["--if-branch", "feat", "git", "pull", "--rebase"])

    assert args.branch_filter == "feat"
    assert args.command == ["git", "pull", "--rebase"]


def test_parser_passes_command_flags_through() -> None:
    args = cli.build_parser().parse_args(["ls", "-la", "-b", "x"])

    assert args.branch_filter is None
    assert args.command == ["ls", "-la", "-b", "x"]


def test_missing_command_exits_with_usage(capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 1
    assert "Usage: quickly" in capsys.readouterr().err


def test_runs_command_in_every_directory(workspace, capsys) -> None:
    cli.main(["-j", "2", "echo", "hello"])

    out = capsys.readouterr().out
    for index, repo in enumerate(workspace):
        assert f"{BASIC_PALETTE[index]}[{repo.name}]{RESET} hello\n" in out


def test_failure_sets_exit_code(workspace, capsys) -> None:
    (workspace[1] / "fail").write_text("", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["test ! -f fail"])

    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert f"[{workspace[1].name}]{RESET} exit status 1" in out


def test_creates_missing_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    config = tmp_path / "fresh-rc"
    monkeypatch.setenv("QUICKLY_CONFIG", str(config))
    monkeypatch.setenv("QUICKLY_SHELL", "sh")
    monkeypatch.chdir(tmp_path)

    cli.main(["echo", "hi"])

    captured = capsys.readouterr()
    assert "Created new config file" in captured.err
    assert config.read_text(encoding="utf-8").strip() == str(tmp_path)
    assert f"[{tmp_path.name}]{RESET} hi" in captured.out


def test_unreadable_config_reports_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    config = tmp_path / "rc-dir"
    config.mkdir()
    monkeypatch.setenv("QUICKLY_CONFIG", str(config))

    exit_code = cli.run(cli.build_parser().parse_args(["echo", "hi"]))

    assert exit_code == 1
    assert "Error reading config" in capsys.readouterr().err
