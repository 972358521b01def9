"""Tests for the command line entry points."""

from unittest.mock import patch

from click.testing import CliRunner

from feedback_service.cli import cli
from feedback_service.database.cli import DEFAULT_ALEMBIC_INI, main


def test_default_alembic_config_is_project_root():
    assert DEFAULT_ALEMBIC_INI.name == "alembic.ini"
    assert DEFAULT_ALEMBIC_INI.exists()


def test_missing_alembic_config_from_env_is_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("FEEDBACK_ALEMBIC_INI", str(tmp_path / "missing.ini"))

    runner = CliRunner()
    with patch("feedback_service.database.cli.command") as command:
        result = runner.invoke(main, ["upgrade"])

    assert result.exit_code != 0
    command.upgrade.assert_not_called()


def test_failed_migration_exits_with_error():
    runner = CliRunner()
    with patch("feedback_service.database.cli.command") as command:
        command.upgrade.side_effect = RuntimeError("connection refused")
        result = runner.invoke(main, ["upgrade"])

    assert result.exit_code == 1


def test_upgrade_runs_alembic():
    runner = CliRunner()
    with patch("feedback_service.database.cli.command") as command:
        result = runner.invoke(main, ["upgrade", "head"])

    assert result.exit_code == 0
    command.upgrade.assert_called_once()
    assert command.upgrade.call_args.args[1] == "head"


def test_downgrade_defaults_to_previous_revision():
    runner = CliRunner()
    with patch("feedback_service.database.cli.command") as command:
        result = runner.invoke(main, ["downgrade"])

    assert result.exit_code == 0
    assert command.downgrade.call_args.args[1] == "-1"


def test_serve_starts_uvicorn_factory():
    runner = CliRunner()
    with patch("feedback_service.cli.uvicorn.run") as run:
        result = runner.invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    run.assert_called_once()
    assert run.call_args.args[0] == "feedback_service.api.app:create_app"
    assert run.call_args.kwargs["factory"] is True
    assert run.call_args.kwargs["port"] == 9000
