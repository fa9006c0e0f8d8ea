"""Unit tests for fixture configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from gitops_e2e.config import (
    DEFAULT_DEST_SERVER,
    ENV_VARS,
    FixtureConfig,
    config_keys,
    load_config,
    save_config,
    unset_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of these tests."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)


class TestFixtureConfig:
    """Tests for FixtureConfig defaults."""

    def test_default_values(self):
        config = FixtureConfig()

        assert config.namespace == "argocd"
        assert config.dest_server == DEFAULT_DEST_SERVER
        assert config.settle_seconds == 1.0
        assert config.kubeconfig is None
        assert config.get_source("namespace") == "default"

    def test_to_dict_stringifies_paths(self):
        data = FixtureConfig().to_dict()

        assert data["work_dir"] == "/tmp/argo-e2e"
        assert set(data) == set(config_keys())
        assert "_sources" not in data


class TestLoadConfig:
    """Tests for load_config() precedence."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")

        assert config == FixtureConfig(_sources=config._sources)
        assert config.get_source("settle_seconds") == "default"

    def test_file_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("namespace: gitops\nsettle_seconds: 3\nwork_dir: /var/tmp/e2e\n")

        config = load_config(path)

        assert config.namespace == "gitops"
        assert config.settle_seconds == 3.0
        assert config.work_dir == Path("/var/tmp/e2e")
        assert config.get_source("namespace") == "config file"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("namespace: gitops\n")
        monkeypatch.setenv("GITOPS_E2E_NAMESPACE", "from-env")
        monkeypatch.setenv("KUBECONFIG", "/tmp/kube.conf")

        config = load_config(path)

        assert config.namespace == "from-env"
        assert config.kubeconfig == "/tmp/kube.conf"
        assert config.get_source("namespace") == "environment"

    def test_default_path(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("cli_binary: /opt/bin/argocd\n")

        with patch("gitops_e2e.config.get_config_path", return_value=path):
            config = load_config()

        assert config.cli_binary == "/opt/bin/argocd"

    def test_invalid_settle_seconds(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GITOPS_E2E_SETTLE_SECONDS", "soon")

        with pytest.raises(ValueError):
            load_config(tmp_path / "missing.yaml")


class TestSaveConfig:
    """Tests for save_config() and unset_config()."""

    def test_save_and_unset(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"

        save_config("namespace", "gitops", path)
        save_config("settle_seconds", 2.0, path)
        assert yaml.safe_load(path.read_text()) == {"namespace": "gitops", "settle_seconds": 2.0}

        assert unset_config("namespace", path) is True
        assert unset_config("namespace", path) is False
        assert yaml.safe_load(path.read_text()) == {"settle_seconds": 2.0}

    def test_save_unknown_key(self, tmp_path):
        with pytest.raises(KeyError):
            save_config("nonsense", 1, tmp_path / "config.yaml")

    def test_unset_without_file(self, tmp_path):
        assert unset_config("namespace", tmp_path / "config.yaml") is False
