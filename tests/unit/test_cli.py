"""Unit tests for the gitops-e2e command line."""

import json
from unittest.mock import MagicMock, patch

import pytest
import yaml
from click.testing import CliRunner

from gitops_e2e.config import ENV_VARS, load_config
from gitops_e2e.errors import CleanStateError
from gitops_e2e.main import cli


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("namespace: gitops\n")
    return path


class TestReset:
    """Tests for `gitops-e2e reset`."""

    def test_reset_success(self, runner, config_file):
        with patch("gitops_e2e.main.FixtureServices") as mock_services:
            result = runner.invoke(cli, ["-c", str(config_file), "reset"])

        assert result.exit_code == 0
        services = mock_services.from_config.return_value
        services.environment.ensure_clean_state.assert_called_once_with()
        assert mock_services.from_config.call_args[0][0].namespace == "gitops"

    def test_reset_failure(self, runner, config_file):
        with patch("gitops_e2e.main.FixtureServices") as mock_services:
            environment = MagicMock()
            environment.ensure_clean_state.side_effect = CleanStateError(
                "Failed to recreate deployment namespace: forbidden"
            )
            mock_services.from_config.return_value.environment = environment

            result = runner.invoke(cli, ["-c", str(config_file), "reset"])

        assert result.exit_code == 1

    def test_reset_invalid_config(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("settle_seconds: later\n")

        result = runner.invoke(cli, ["-c", str(path), "reset"])

        assert result.exit_code == 1


class TestConfigCommands:
    """Tests for `gitops-e2e config ...`."""

    def test_show(self, runner, config_file):
        result = runner.invoke(cli, ["-c", str(config_file), "config", "show"])

        assert result.exit_code == 0
        assert "gitops-e2e Configuration" in result.output
        assert "namespace: gitops  (config file)" in result.output

    def test_show_json(self, runner, config_file):
        result = runner.invoke(cli, ["-c", str(config_file), "--json", "config", "show"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["values"]["namespace"] == "gitops"
        assert data["sources"]["namespace"] == "config file"
        assert data["sources"]["cli_binary"] == "default"

    def test_set_and_unset(self, runner, config_file):
        result = runner.invoke(cli, ["-c", str(config_file), "config", "set", "settle_seconds", "2.5"])
        assert result.exit_code == 0
        assert load_config(config_file).settle_seconds == 2.5

        result = runner.invoke(cli, ["-c", str(config_file), "config", "unset", "namespace"])
        assert result.exit_code == 0
        assert "Unset namespace" in result.output
        assert "namespace" not in yaml.safe_load(config_file.read_text())

    def test_set_unknown_key(self, runner, config_file):
        result = runner.invoke(cli, ["-c", str(config_file), "config", "set", "bogus", "1"])

        assert result.exit_code == 1
        assert "Valid keys" in result.output

    @pytest.mark.parametrize("raw", ["0123", "yes", "null", "1e3"])
    def test_set_keeps_string_values_verbatim(self, runner, config_file, raw):
        result = runner.invoke(cli, ["-c", str(config_file), "config", "set", "password", raw])

        assert result.exit_code == 0
        assert yaml.safe_load(config_file.read_text())["password"] == raw
        assert load_config(config_file).password == raw


class TestLoggingOptions:
    """Tests for how the group options configure logging."""

    def test_verbosity_and_json(self, runner, config_file):
        with patch("gitops_e2e.main.configure_logging") as mock_configure:
            result = runner.invoke(cli, ["-c", str(config_file), "-vv", "--json", "config", "show"])

        assert result.exit_code == 0
        mock_configure.assert_called_once_with("debug", json_output=True)

    def test_default_is_quiet_console(self, runner, config_file):
        with patch("gitops_e2e.main.configure_logging") as mock_configure:
            runner.invoke(cli, ["-c", str(config_file), "config", "show"])

        mock_configure.assert_called_once_with("warning", json_output=False)
