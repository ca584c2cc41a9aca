"""Tests for the command-line interface."""

import os

import pytest
from click.testing import CliRunner

from storage_sync.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def test_run_distcp_copies_tree(runner, source_tree, tmp_path):
    target = tmp_path / "dst"

    result = runner.invoke(cli, ["run", "--src", str(source_tree), "--trg", str(target), "--mode", "distcp"])

    assert result.exit_code == 0, result.output
    assert (target / "a.txt").read_text() == "x"
    assert (target / "dir" / "b.txt").read_text() == "y"


def test_run_sync_once(runner, source_tree, tmp_path):
    target = tmp_path / "dst"
    target.mkdir()
    (target / "a.txt").write_text("kept")
    mtime = os.stat(source_tree / "a.txt").st_mtime_ns + 10**9
    os.utime(target / "a.txt", ns=(mtime, mtime))

    result = runner.invoke(cli, ["run", "--src", str(source_tree), "--trg", str(target)])

    assert result.exit_code == 0, result.output
    assert (target / "a.txt").read_text() == "kept"
    assert (target / "dir" / "b.txt").read_text() == "y"


def test_run_requires_source(runner, tmp_path):
    result = runner.invoke(cli, ["run", "--trg", str(tmp_path)])

    assert result.exit_code == 1


def test_run_requires_target_for_fs(runner, source_tree):
    result = runner.invoke(cli, ["run", "--src", str(source_tree)])

    assert result.exit_code == 1
    assert "target is required" in result.output


def test_minio_without_credentials_fails(runner, source_tree, monkeypatch):
    for name in ("MINIO_ENDPOINT", "MINIO_ACCESS_KEY", "MINIO_SECRET_KEY", "MINIO_USE_SSL"):
        monkeypatch.delenv(name, raising=False)

    result = runner.invoke(cli, ["check", "--backend", "minio", "--src", str(source_tree), "--bucket", "b"])

    assert result.exit_code == 1
    assert "MINIO_ENDPOINT" in result.output


def test_run_reports_copy_errors(runner, tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "broken.txt").symlink_to(tmp_path / "missing")

    result = runner.invoke(cli, ["run", "--src", str(src), "--trg", str(tmp_path / "dst"), "--mode", "distcp"])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_init_then_run_from_config(runner, source_tree, tmp_path):
    config = tmp_path / "sync.yaml"

    result = runner.invoke(cli, ["init", "--config", str(config)])
    assert result.exit_code == 0, result.output
    assert config.exists()

    target = tmp_path / "dst"
    result = runner.invoke(cli, [
        "run", "--config", str(config),
        "--backend", "fs", "--src", str(source_tree), "--trg", str(target), "--interval", "0",
    ])

    assert result.exit_code == 0, result.output
    assert (target / "a.txt").read_text() == "x"
