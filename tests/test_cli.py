"""Smoke tests for the click command group."""

from __future__ import annotations

import logging

import pytest
from click.testing import CliRunner

from habitual.cli import cli
from habitual.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("HABITUAL_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HABITUAL_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.delenv("HABITUAL_TIMEZONE", raising=False)
    yield CliRunner()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_init_db(runner, tmp_path):
    result = runner.invoke(cli, ["init-db"])

    assert result.exit_code == 0, result.output
    assert "Database ready" in result.output
    assert (tmp_path / "cli.db").exists()


def test_create_user_then_duplicate(runner):
    first = runner.invoke(cli, ["create-user", "ada"])
    second = runner.invoke(cli, ["create-user", "ada"])

    assert first.exit_code == 0, first.output
    assert "Created user 1 (ada)" in first.output
    assert second.exit_code == 1
    assert "Username already exists" in second.output


def test_recompute_streak_for_new_user(runner):
    runner.invoke(cli, ["create-user", "ada"])

    result = runner.invoke(cli, ["recompute-streak", "1"])

    assert result.exit_code == 0, result.output
    assert "Overall streak: 0 (longest 0)" in result.output


def test_complete_unknown_habit(runner):
    runner.invoke(cli, ["create-user", "ada"])

    result = runner.invoke(cli, ["complete", "99", "--user", "1"])

    assert result.exit_code == 1
    assert "Habit not found" in result.output


def test_stats_uses_configured_heatmap_window(runner, monkeypatch):
    monkeypatch.setenv("HABITUAL_HEATMAP_DAYS", "14")
    runner.invoke(cli, ["create-user", "ada"])

    result = runner.invoke(cli, ["stats", "1"])

    assert result.exit_code == 0, result.output
    assert "Active habits: 0" in result.output
    assert "Overall streak: 0 (longest 0)" in result.output
    assert "Active days in last 14: 0" in result.output


def test_stats_unknown_user(runner):
    result = runner.invoke(cli, ["stats", "7"])

    assert result.exit_code == 1
    assert "User not found" in result.output
