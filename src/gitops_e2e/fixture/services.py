"""The bundle of fixture services a test context is wired to."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import FixtureConfig
from .certs import CertFixtures
from .commands import CliAdapter, CommandRunner
from .interfaces import (
    AppCli,
    CertificateStore,
    EnvironmentReset,
    PluginRegistry,
    ProjectRegistry,
    RepositoryRegistry,
    SettingsStore,
)
from .kube import KubeEnvironment, KubeProjectRegistry, KubeSettingsStore
from .repos import RepoFixtures


@dataclass
class FixtureServices:
    """Collaborators injected into a test context."""

    environment: EnvironmentReset
    certs: CertificateStore
    repos: RepositoryRegistry
    projects: ProjectRegistry
    settings: SettingsStore
    plugins: PluginRegistry
    cli: AppCli

    @classmethod
    def from_config(cls, config: FixtureConfig) -> FixtureServices:
        """Build the live services that talk to a real cluster.

        Args:
            config: Fixture configuration.

        Returns:
            FixtureServices backed by kubectl, git and the system CLI.
        """
        runner = CommandRunner(
            kubeconfig=config.kubeconfig,
            cli_binary=config.cli_binary,
            namespace=config.namespace,
        )
        settings = KubeSettingsStore(runner)
        return cls(
            environment=KubeEnvironment(runner, config),
            certs=CertFixtures(runner, config.certs_dir),
            repos=RepoFixtures(runner, config),
            projects=KubeProjectRegistry(runner),
            settings=settings,
            plugins=settings,
            cli=CliAdapter(runner),
        )
