"""Tests for the command line interface."""

import json
import logging
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from welcome_mailer.cli import main
from welcome_mailer.providers.mock import MockEmailProvider


@pytest.fixture
def runner(monkeypatch):
    monkeypatch.setenv("EMAIL_PROVIDER", "mock")
    monkeypatch.setenv("FROM_EMAIL", "sender@example.com")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield CliRunner()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class TestCli:
    """Tests for CLI commands."""

    def test_preview(self, runner):
        result = runner.invoke(main, ["preview", "--nome", "Ana", "--format", "text"])

        assert result.exit_code == 0
        assert "Subject: Bem-vindo(a) ao DevTogheter" in result.output
        assert "Olá, Ana!" in result.output
        assert "<html" not in result.output

    def test_send_test_success(self, runner):
        result = runner.invoke(
            main, ["send-test", "--nome", "Ana", "--email", "ana@example.com", "--provider", "mock"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == 200
        assert data["sucesso"] is True

    def test_send_test_rejected(self, runner):
        result = runner.invoke(
            main, ["send-test", "--nome", "A", "--email", "ana@example.com", "--provider", "mock"]
        )

        assert result.exit_code == 1
        assert json.loads(result.output)["status"] == 400

    def test_templates(self, runner):
        result = runner.invoke(main, ["templates"])

        assert result.exit_code == 0
        assert "* welcome" in result.output

    def test_missing_api_key(self, runner, monkeypatch):
        monkeypatch.delenv("RESEND_API_KEY", raising=False)
        result = runner.invoke(
            main, ["send-test", "--nome", "Ana", "--email", "ana@example.com", "--provider", "resend"]
        )

        assert result.exit_code == 1
        assert "RESEND_API_KEY" in result.output

    @patch("welcome_mailer.cli.logger")
    @patch("flask.Flask.run")
    def test_serve_checks_provider(self, run, logger, runner):
        with patch.object(MockEmailProvider, "validate_connection", return_value=False):
            result = runner.invoke(main, ["serve", "--host", "127.0.0.1", "--port", "5050", "--no-debug"])

        assert result.exit_code == 0
        logger.warning.assert_called_once()
        run.assert_called_once_with(host="127.0.0.1", port=5050, debug=False)

    @patch("welcome_mailer.cli.logger")
    @patch("flask.Flask.run")
    def test_serve_without_check(self, run, logger, runner):
        with patch.object(MockEmailProvider, "validate_connection") as validate:
            result = runner.invoke(main, ["serve", "--no-check"])

        assert result.exit_code == 0
        validate.assert_not_called()
        run.assert_called_once()
