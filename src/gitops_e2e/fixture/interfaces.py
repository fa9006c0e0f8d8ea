"""Protocols for the services a test context drives.

The stores behind these protocols are process-wide and last-write-wins; none
of them expose locking. Ordering across tests relies on the environment reset
performed by ``given()``.

Implementations need no inheritance:

    class RecordingCerts:
        def add_custom_ca_cert(self) -> None: ...
        def add_custom_ssh_known_hosts_keys(self) -> None: ...

    assert isinstance(RecordingCerts(), CertificateStore)
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .types import ConfigManagementPlugin, ProjectSpec, ResourceOverride, ResourcesFilter


@runtime_checkable
class EnvironmentReset(Protocol):
    """Brings the system under test back to a clean baseline."""

    def ensure_clean_state(self) -> None:
        """Reset shared state; raise if a clean baseline cannot be reached."""
        ...


@runtime_checkable
class CertificateStore(Protocol):
    """Process-wide TLS and SSH trust stores. Additions are idempotent."""

    def add_custom_ca_cert(self) -> None: ...

    def add_custom_ssh_known_hosts_keys(self) -> None: ...


@runtime_checkable
class RepositoryRegistry(Protocol):
    """Repositories and credential templates known to the control plane."""

    def add_https_repo(self, insecure: bool, with_creds: bool) -> None: ...

    def add_https_repo_client_cert(self, insecure: bool) -> None: ...

    def add_ssh_repo(self, insecure: bool, with_creds: bool) -> None: ...

    def add_helm_repo(self, name: str) -> None: ...

    def add_https_credentials_user_pass(self) -> None: ...

    def add_https_credentials_tls_client_cert(self) -> None: ...

    def add_ssh_credentials(self) -> None: ...


@runtime_checkable
class ProjectRegistry(Protocol):
    """AppProject store, keyed by project name."""

    def set_project_spec(self, project: str, spec: "ProjectSpec") -> None:
        """Overwrite the spec of a project."""
        ...


@runtime_checkable
class SettingsStore(Protocol):
    """Global (not per-project) controller settings."""

    def set_resource_overrides(self, overrides: "dict[str, ResourceOverride]") -> None: ...

    def set_resource_filter(self, resource_filter: "ResourcesFilter") -> None: ...


@runtime_checkable
class PluginRegistry(Protocol):
    """Config management plugins, registered by name."""

    def register_plugin(self, plugin: "ConfigManagementPlugin") -> None: ...


@runtime_checkable
class AppCli(Protocol):
    """The system's own command line, used by the when phase."""

    def run(self, *args: str) -> str:
        """Run a CLI command and return its stdout."""
        ...
