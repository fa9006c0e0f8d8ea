"""Fixture services for end-to-end tests.

This package provides the services a test context drives:
1. Environment reset before every test
2. TLS/SSH trust and repository credentials
3. AppProject specs, controller settings and config management plugins
"""

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
from .naming import dns_friendly, generate_name
from .repos import RepoFixtures, repo_url
from .services import FixtureServices
from .types import (
    ApplicationDestination,
    ConfigManagementPlugin,
    FilteredResource,
    GroupKind,
    PluginCommand,
    ProjectSpec,
    RepoURLType,
    ResourceOverride,
    ResourcesFilter,
)

__all__ = [
    # Protocols
    "AppCli",
    "CertificateStore",
    "EnvironmentReset",
    "PluginRegistry",
    "ProjectRegistry",
    "RepositoryRegistry",
    "SettingsStore",
    # Live services
    "CliAdapter",
    "CommandRunner",
    "CertFixtures",
    "RepoFixtures",
    "KubeEnvironment",
    "KubeProjectRegistry",
    "KubeSettingsStore",
    "FixtureServices",
    # Helpers
    "dns_friendly",
    "generate_name",
    "repo_url",
    # Types
    "ApplicationDestination",
    "ConfigManagementPlugin",
    "FilteredResource",
    "GroupKind",
    "PluginCommand",
    "ProjectSpec",
    "RepoURLType",
    "ResourceOverride",
    "ResourcesFilter",
]
