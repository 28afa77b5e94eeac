"""Tests for the command line entry point."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

import sync
from stars_sync import __version__
from stars_sync.config import Config
from stars_sync.sync_engine import SyncResult


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def no_dotenv():
    with patch("sync.load_dotenv"), patch("stars_sync.config.load_dotenv"):
        yield


def test_version(runner):
    result = runner.invoke(sync.cli, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_missing_configuration_exits_without_syncing(runner, monkeypatch):
    monkeypatch.delenv("GH_USER_TOKEN", raising=False)

    with patch("sync.SyncEngine") as engine:
        result = runner.invoke(sync.cli, [])

    assert result.exit_code == 1
    assert "Configuration error" in result.output
    engine.assert_not_called()


def test_runs_sync_by_default(runner, config):
    with patch("sync.Config.from_env", return_value=config), patch("sync.SyncEngine") as engine:
        engine.return_value.sync.return_value = SyncResult()
        result = runner.invoke(sync.cli, [])

    assert result.exit_code == 0
    engine.assert_called_once_with(config)
    engine.return_value.sync.assert_called_once_with()


def test_fetch_error_exits_non_zero(runner, config):
    with patch.object(Config, "from_env", return_value=config), patch("sync.SyncEngine") as engine:
        engine.return_value.sync.side_effect = RuntimeError("GitHub unavailable")
        result = runner.invoke(sync.cli, ["sync"])

    assert result.exit_code == 1
    assert "GitHub unavailable" in result.output


def test_interrupt_exits_130(runner, config):
    with patch.object(Config, "from_env", return_value=config), patch("sync.SyncEngine") as engine:
        engine.return_value.sync.side_effect = KeyboardInterrupt
        result = runner.invoke(sync.cli, ["sync"])

    assert result.exit_code == 130
