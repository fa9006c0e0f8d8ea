"""Fixture configuration management.

Handles persistent fixture configuration stored in ~/.gitops-e2e/config.yaml.
Supports environment variable overrides; an explicit file path (CLI flag or
pytest option) replaces the default file location.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .shared.paths import DEFAULT_WORK_DIR, E2E_HOME

# Default values
DEFAULT_NAMESPACE = "argocd"
DEFAULT_DEPLOYMENT_NAMESPACE = "argocd-e2e"
DEFAULT_DEST_SERVER = "https://kubernetes.default.svc"
DEFAULT_CLI_BINARY = "argocd"
DEFAULT_SETTLE_SECONDS = 1.0
DEFAULT_HTTPS_REPO_URL = "https://localhost:9443/argo-e2e/testdata.git"
DEFAULT_HTTPS_CLIENT_CERT_REPO_URL = "https://localhost:9444/argo-e2e/testdata.git"
DEFAULT_SSH_REPO_URL = "ssh://root@localhost:2222/tmp/argo-e2e/testdata.git"
DEFAULT_HELM_REPO_URL = "https://localhost:9444/argo-e2e/testdata.git/helm-repo"
DEFAULT_USERNAME = "argo-cd"
DEFAULT_PASSWORD = "password"

# Environment variable mappings
ENV_VARS = {
    "namespace": "GITOPS_E2E_NAMESPACE",
    "deployment_namespace": "GITOPS_E2E_DEPLOYMENT_NAMESPACE",
    "dest_server": "GITOPS_E2E_DEST_SERVER",
    "cli_binary": "GITOPS_E2E_CLI",
    "kubeconfig": "KUBECONFIG",
    "settle_seconds": "GITOPS_E2E_SETTLE_SECONDS",
    "work_dir": "GITOPS_E2E_WORK_DIR",
    "testdata_dir": "GITOPS_E2E_TESTDATA",
    "https_repo_url": "GITOPS_E2E_HTTPS_REPO",
    "https_client_cert_repo_url": "GITOPS_E2E_HTTPS_CLIENT_CERT_REPO",
    "ssh_repo_url": "GITOPS_E2E_SSH_REPO",
    "helm_repo_url": "GITOPS_E2E_HELM_REPO",
    "username": "GITOPS_E2E_USERNAME",
    "password": "GITOPS_E2E_PASSWORD",
    "certs_dir": "GITOPS_E2E_CERTS_DIR",
}


@dataclass
class FixtureConfig:
    """Fixture configuration."""

    namespace: str = DEFAULT_NAMESPACE
    deployment_namespace: str = DEFAULT_DEPLOYMENT_NAMESPACE
    dest_server: str = DEFAULT_DEST_SERVER
    cli_binary: str = DEFAULT_CLI_BINARY
    kubeconfig: str | None = None
    settle_seconds: float = DEFAULT_SETTLE_SECONDS
    work_dir: Path = DEFAULT_WORK_DIR
    testdata_dir: Path = Path("testdata")
    https_repo_url: str = DEFAULT_HTTPS_REPO_URL
    https_client_cert_repo_url: str = DEFAULT_HTTPS_CLIENT_CERT_REPO_URL
    ssh_repo_url: str = DEFAULT_SSH_REPO_URL
    helm_repo_url: str = DEFAULT_HELM_REPO_URL
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    certs_dir: Path = Path("testdata") / "certs"

    # Track where each value came from
    _sources: dict[str, str] = field(default_factory=dict)

    def get_source(self, key: str) -> str:
        """Get the source of a config value."""
        return self._sources.get(key, "default")

    def to_dict(self) -> dict[str, Any]:
        """Public values as plain YAML/JSON friendly types."""
        data: dict[str, Any] = {}
        for key in config_keys():
            value = getattr(self, key)
            data[key] = str(value) if isinstance(value, Path) else value
        return data


def config_keys() -> list[str]:
    """Names of the user-settable config keys."""
    return [f.name for f in fields(FixtureConfig) if not f.name.startswith("_")]


def _coerce(key: str, value: Any) -> Any:
    """Convert a raw file/env value to the type of the field."""
    if key == "settle_seconds":
        return float(value)
    if key in ("work_dir", "testdata_dir", "certs_dir"):
        return Path(str(value)).expanduser()
    if key == "kubeconfig":
        return str(value) if value else None
    return str(value)


def get_config_path() -> Path:
    """Get the fixture config file path.

    Returns:
        Path to ~/.gitops-e2e/config.yaml
    """
    return E2E_HOME / "config.yaml"


def load_config(path: str | Path | None = None) -> FixtureConfig:
    """Load fixture configuration.

    Precedence (highest to lowest):
    1. Environment variables
    2. Config file (path, or ~/.gitops-e2e/config.yaml)
    3. Defaults

    Args:
        path: Optional explicit config file

    Returns:
        FixtureConfig with values and sources

    Raises:
        ValueError: If a value cannot be converted (e.g. a non-numeric
            settle_seconds)
    """
    config = FixtureConfig()
    sources: dict[str, str] = {key: "default" for key in config_keys()}

    config_path = Path(path) if path else get_config_path()
    if config_path.exists():
        with open(config_path) as f:
            file_config = yaml.safe_load(f) or {}

        for key in config_keys():
            if key in file_config:
                setattr(config, key, _coerce(key, file_config[key]))
                sources[key] = "config file"

    for key, env_var in ENV_VARS.items():
        if os.environ.get(env_var):
            setattr(config, key, _coerce(key, os.environ[env_var]))
            sources[key] = "environment"

    config._sources = sources
    return config


def save_config(key: str, value: Any, path: str | Path | None = None) -> None:
    """Save a config value to the config file.

    Args:
        key: Config key (see config_keys())
        value: Value to save
        path: Optional explicit config file

    Raises:
        KeyError: If key is not a config key
    """
    if key not in config_keys():
        raise KeyError(key)

    config_path = Path(path) if path else get_config_path()

    existing: dict[str, Any] = {}
    if config_path.exists():
        with open(config_path) as f:
            existing = yaml.safe_load(f) or {}

    existing[key] = value

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(existing, f, default_flow_style=False)


def unset_config(key: str, path: str | Path | None = None) -> bool:
    """Remove a config value from the config file.

    Args:
        key: Config key to remove
        path: Optional explicit config file

    Returns:
        True if key was removed, False if not found
    """
    config_path = Path(path) if path else get_config_path()
    if not config_path.exists():
        return False

    with open(config_path) as f:
        existing = yaml.safe_load(f) or {}

    if key not in existing:
        return False

    del existing[key]

    with open(config_path, "w") as f:
        yaml.dump(existing, f, default_flow_style=False)

    return True
