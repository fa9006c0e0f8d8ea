"""Shared test fixtures for gitops-e2e tests.

This module provides recording fakes for every fixture service:
- CallLog: one ordered log shared by all fakes, so tests can check call order
- Recording*: in-memory stand-ins for the live kubectl/CLI services
- services / config / sleeps: ready-made wiring for given()
"""

from dataclasses import dataclass, field
from typing import Any

import pytest

from gitops_e2e.config import FixtureConfig
from gitops_e2e.errors import CommandError
from gitops_e2e.fixture.services import FixtureServices

# =============================================================================
# Call recording
# =============================================================================


@dataclass
class CallLog:
    """Ordered record of every fake service call."""

    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def record(self, *call: Any) -> None:
        self.calls.append(call)

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def of(self, name: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]


class RecordingEnvironment:
    def __init__(self, log: CallLog, error: Exception | None = None):
        self.log = log
        self.error = error

    def ensure_clean_state(self) -> None:
        self.log.record("ensure_clean_state")
        if self.error:
            raise self.error


class RecordingCerts:
    def __init__(self, log: CallLog):
        self.log = log

    def add_custom_ca_cert(self) -> None:
        self.log.record("add_custom_ca_cert")

    def add_custom_ssh_known_hosts_keys(self) -> None:
        self.log.record("add_custom_ssh_known_hosts_keys")


class RecordingRepos:
    def __init__(self, log: CallLog):
        self.log = log

    def add_https_repo(self, insecure: bool, with_creds: bool) -> None:
        self.log.record("add_https_repo", insecure, with_creds)

    def add_https_repo_client_cert(self, insecure: bool) -> None:
        self.log.record("add_https_repo_client_cert", insecure)

    def add_ssh_repo(self, insecure: bool, with_creds: bool) -> None:
        self.log.record("add_ssh_repo", insecure, with_creds)

    def add_helm_repo(self, name: str) -> None:
        self.log.record("add_helm_repo", name)

    def add_https_credentials_user_pass(self) -> None:
        self.log.record("add_https_credentials_user_pass")

    def add_https_credentials_tls_client_cert(self) -> None:
        self.log.record("add_https_credentials_tls_client_cert")

    def add_ssh_credentials(self) -> None:
        self.log.record("add_ssh_credentials")


class RecordingStores:
    """Project registry, settings store and plugin registry in one."""

    def __init__(self, log: CallLog):
        self.log = log
        self.projects: dict[str, Any] = {}
        self.overrides: dict[str, Any] | None = None
        self.resource_filter: Any = None
        self.plugins: dict[str, Any] = {}

    def set_project_spec(self, project: str, spec: Any) -> None:
        self.log.record("set_project_spec", project, spec)
        self.projects[project] = spec

    def set_resource_overrides(self, overrides: dict[str, Any]) -> None:
        self.log.record("set_resource_overrides", overrides)
        self.overrides = overrides

    def set_resource_filter(self, resource_filter: Any) -> None:
        self.log.record("set_resource_filter", resource_filter)
        self.resource_filter = resource_filter

    def register_plugin(self, plugin: Any) -> None:
        self.log.record("register_plugin", plugin)
        self.plugins[plugin.name] = plugin


class RecordingCli:
    def __init__(self, log: CallLog, output: str = "ok", error: Exception | None = None):
        self.log = log
        self.output = output
        self.error = error

    def run(self, *args: str) -> str:
        self.log.record("cli", *args)
        if self.error:
            raise self.error
        return self.output


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def call_log() -> CallLog:
    """Fixture providing the shared call log."""
    return CallLog()


@pytest.fixture
def stores(call_log: CallLog) -> RecordingStores:
    return RecordingStores(call_log)


@pytest.fixture
def services(call_log: CallLog, stores: RecordingStores) -> FixtureServices:
    """Fixture services that record instead of touching a cluster."""
    return FixtureServices(
        environment=RecordingEnvironment(call_log),
        certs=RecordingCerts(call_log),
        repos=RecordingRepos(call_log),
        projects=stores,
        settings=stores,
        plugins=stores,
        cli=RecordingCli(call_log),
    )


@pytest.fixture
def config(tmp_path) -> FixtureConfig:
    """Fixture configuration pointing at a scratch work dir."""
    return FixtureConfig(
        work_dir=tmp_path / "work",
        testdata_dir=tmp_path / "testdata",
        certs_dir=tmp_path / "certs",
    )


@pytest.fixture
def sleeps() -> list[float]:
    """Durations passed to the fake sleep, in order."""
    return []


@pytest.fixture
def fake_sleep(sleeps: list[float]):
    return sleeps.append


@pytest.fixture
def failed_command() -> CommandError:
    """A CommandError as raised by a failing kubectl call."""
    return CommandError(["kubectl", "get", "applications"], 1, "connection refused")
