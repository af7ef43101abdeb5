"""Tests for logging configuration."""

import io
import logging

import pytest

import gstprep.logging_setup as logging_setup


@pytest.fixture
def fresh_logging(isolated_logging):
    """The package logger, unconfigured and without handlers."""
    assert isolated_logging.handlers == []
    assert not logging_setup._CONFIGURED
    return isolated_logging


def test_get_logger_is_silent_until_configured(fresh_logging):
    logging_setup.get_logger("gstprep.test")
    assert any(isinstance(h, logging.NullHandler) for h in fresh_logging.handlers)


def test_configure_logging_writes_to_stream(fresh_logging):
    stream = io.StringIO()
    logging_setup.configure_logging("info", fmt="%(levelname)s %(message)s", stream=stream)

    logging_setup.get_logger("gstprep.test").info("Read %d transactions", 3)

    assert stream.getvalue() == "INFO Read 3 transactions\n"
    assert not any(isinstance(h, logging.NullHandler) for h in fresh_logging.handlers)


def test_configure_logging_only_once(fresh_logging):
    logging_setup.configure_logging("DEBUG", stream=io.StringIO())
    logging_setup.configure_logging("ERROR", stream=io.StringIO())

    assert fresh_logging.level == logging.DEBUG
    assert len(fresh_logging.handlers) == 1


def test_level_from_environment(fresh_logging, monkeypatch):
    monkeypatch.setenv("GSTPREP_LOG_LEVEL", "error")
    logging_setup.configure_logging(stream=io.StringIO())
    assert fresh_logging.level == logging.ERROR


def test_invalid_level_falls_back_to_warning(fresh_logging, monkeypatch):
    monkeypatch.delenv("GSTPREP_LOG_LEVEL", raising=False)
    logging_setup.configure_logging("LOUD", stream=io.StringIO())
    assert fresh_logging.level == logging.WARNING


def test_cli_run_configures_package_logger(cli_runner, temp_db):
    from gstprep.cli.main import cli

    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--log-level", "DEBUG", "profile", "list"]
    )

    assert result.exit_code == 0
    assert logging_setup._CONFIGURED
    assert logging.getLogger("gstprep").level == logging.DEBUG


def test_next_test_starts_unconfigured(fresh_logging):
    assert fresh_logging.level == logging.NOTSET
    assert fresh_logging.propagate
