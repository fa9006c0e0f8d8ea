"""The "given" part of given/when/then for application tests.

A test starts with ``given()``, which resets the environment and returns a
Context. Setters record parameters or install fixtures immediately and return
the same Context, so preconditions read as one chain:

    given("test_sync_https").https_repo_url_added(with_creds=True) \\
        .repo_url_type(RepoURLType.HTTPS).path("guestbook").when().create()

``when()`` hands the Context to Actions. Values are not checked here; Actions
validates the whole Context before its first command.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from ..config import FixtureConfig, load_config
from ..errors import ValidationResult
from ..fixture.naming import generate_name
from ..fixture.services import FixtureServices
from ..fixture.types import (
    ConfigManagementPlugin,
    ProjectSpec,
    RepoURLType,
    ResourceOverride,
    ResourcesFilter,
)
from ..shared.logging import bind_test_context, get_logger
from .actions import Actions

logger = get_logger(__name__)

DEFAULT_PROJECT = "default"
DEFAULT_TIMEOUT = 10


@dataclass(frozen=True)
class ContextSnapshot:
    """Read-only view of everything a Context has accumulated."""

    name: str
    project: str
    path: str
    chart: str
    revision: str
    repo_url_type: RepoURLType
    local_path: str
    dest_server: str
    env: str
    parameters: tuple[str, ...]
    jsonnet_tla_str: tuple[str, ...]
    jsonnet_tla_code: tuple[str, ...]
    name_prefix: str
    name_suffix: str
    resource: str
    prune: bool
    async_: bool
    force: bool
    timeout: int
    config_management_plugin: str


def given(
    test_name: str | None = None,
    services: FixtureServices | None = None,
    config: FixtureConfig | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Context:
    """Reset the environment and start a new test context.

    Args:
        test_name: Name of the running test; seeds the generated app name.
        services: Fixture services (default: live services from config).
        config: Fixture configuration (default: load_config()).
        sleep: Blocking sleep used for the settling delay in when().

    Returns:
        A Context with default values.

    Raises:
        CleanStateError: If the environment cannot be reset. Nothing else runs.
    """
    config = config or load_config()
    services = services or FixtureServices.from_config(config)
    name = generate_name(test_name)
    bind_test_context(app=name)
    services.environment.ensure_clean_state()
    return Context(services, config, name=name, sleep=sleep)


class Context:
    """Accumulates the preconditions of one application test.

    Owned by a single test and not safe to share between threads.
    """

    def __init__(
        self,
        services: FixtureServices,
        config: FixtureConfig,
        name: str,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.services = services
        self.config = config
        self._sleep = sleep

        self._name = name
        self._project = DEFAULT_PROJECT
        self._path = ""
        self._chart = ""
        self._revision = ""
        self._repo_url_type = RepoURLType.FILE
        self._local_path = ""
        self._dest_server = config.dest_server
        self._env = ""
        self._parameters: list[str] = []
        self._jsonnet_tla_str: list[str] = []
        self._jsonnet_tla_code: list[str] = []
        self._name_prefix = ""
        self._name_suffix = ""
        # group:kind:name
        self._resource = ""
        self._prune = True
        self._async = False
        self._force = False
        # seconds
        self._timeout = DEFAULT_TIMEOUT
        self._config_management_plugin = ""

    def __repr__(self) -> str:
        return f"Context(name={self._name!r}, project={self._project!r})"

    # -- trust -------------------------------------------------------------

    def custom_ca_cert_added(self) -> Context:
        self.services.certs.add_custom_ca_cert()
        return self

    def custom_ssh_known_hosts_added(self) -> Context:
        self.services.certs.add_custom_ssh_known_hosts_keys()
        return self

    # -- repositories and credentials -------------------------------------

    def https_repo_url_added(self, with_creds: bool) -> Context:
        self.services.repos.add_https_repo(False, with_creds)
        return self

    def https_insecure_repo_url_added(self, with_creds: bool) -> Context:
        self.services.repos.add_https_repo(True, with_creds)
        return self

    def https_repo_url_with_client_cert_added(self) -> Context:
        self.services.repos.add_https_repo_client_cert(False)
        return self

    def https_insecure_repo_url_with_client_cert_added(self) -> Context:
        self.services.repos.add_https_repo_client_cert(True)
        return self

    def ssh_repo_url_added(self, with_creds: bool) -> Context:
        self.services.repos.add_ssh_repo(False, with_creds)
        return self

    def ssh_insecure_repo_url_added(self, with_creds: bool) -> Context:
        self.services.repos.add_ssh_repo(True, with_creds)
        return self

    def helm_repo_added(self, name: str) -> Context:
        self.services.repos.add_helm_repo(name)
        return self

    def https_credentials_user_pass_added(self) -> Context:
        self.services.repos.add_https_credentials_user_pass()
        return self

    def https_credentials_tls_client_cert_added(self) -> Context:
        self.services.repos.add_https_credentials_tls_client_cert()
        return self

    def ssh_credentials_added(self) -> Context:
        self.services.repos.add_ssh_credentials()
        return self

    # -- projects and settings ---------------------------------------------

    def project_spec(self, spec: ProjectSpec) -> Context:
        """Overwrite the spec of the context's current project."""
        self.services.projects.set_project_spec(self._project, spec)
        return self

    def resource_overrides(self, overrides: dict[str, ResourceOverride]) -> Context:
        self.services.settings.set_resource_overrides(overrides)
        return self

    def resource_filter(self, resource_filter: ResourcesFilter) -> Context:
        self.services.settings.set_resource_filter(resource_filter)
        return self

    def config_management_plugin(self, plugin: ConfigManagementPlugin) -> Context:
        """Register a plugin and force this test's app to use it."""
        self.services.plugins.register_plugin(plugin)
        self._config_management_plugin = plugin.name
        return self

    # -- plain parameters --------------------------------------------------

    def repo_url_type(self, url_type: RepoURLType) -> Context:
        self._repo_url_type = url_type
        return self

    def name(self, name: str) -> Context:
        self._name = name
        return self

    def path(self, path: str) -> Context:
        self._path = path
        return self

    def chart(self, chart: str) -> Context:
        self._chart = chart
        return self

    def revision(self, revision: str) -> Context:
        self._revision = revision
        return self

    def timeout(self, timeout: int) -> Context:
        self._timeout = timeout
        return self

    def dest_server(self, dest_server: str) -> Context:
        self._dest_server = dest_server
        return self

    def env(self, env: str) -> Context:
        self._env = env
        return self

    def parameter(self, parameter: str) -> Context:
        self._parameters.append(parameter)
        return self

    def jsonnet_tla_str_parameter(self, parameter: str) -> Context:
        self._jsonnet_tla_str.append(parameter)
        return self

    def jsonnet_tla_code_parameter(self, parameter: str) -> Context:
        self._jsonnet_tla_code.append(parameter)
        return self

    def selected_resource(self, resource: str) -> Context:
        self._resource = resource
        return self

    def name_prefix(self, name_prefix: str) -> Context:
        self._name_prefix = name_prefix
        return self

    def name_suffix(self, name_suffix: str) -> Context:
        self._name_suffix = name_suffix
        return self

    def prune(self, prune: bool) -> Context:
        self._prune = prune
        return self

    def async_(self, async_: bool) -> Context:
        self._async = async_
        return self

    def local_path(self, local_path: str) -> Context:
        self._local_path = local_path
        return self

    def project(self, project: str) -> Context:
        self._project = project
        return self

    def force(self) -> Context:
        self._force = True
        return self

    # -- escape hatch and handoff ------------------------------------------

    def and_(self, block: Callable[[], object]) -> Context:
        """Run an arbitrary precondition now."""
        block()
        return self

    def when(self) -> Actions:
        """Hand off to the when phase.

        Pauses for the configured settle interval first so settings written
        by the setters above have propagated. This is a fixed delay, not a
        readiness check.
        """
        logger.debug("settling", seconds=self.config.settle_seconds, app=self._name)
        self._sleep(self.config.settle_seconds)
        return Actions(self)

    # -- reading -----------------------------------------------------------

    def snapshot(self) -> ContextSnapshot:
        return ContextSnapshot(
            name=self._name,
            project=self._project,
            path=self._path,
            chart=self._chart,
            revision=self._revision,
            repo_url_type=self._repo_url_type,
            local_path=self._local_path,
            dest_server=self._dest_server,
            env=self._env,
            parameters=tuple(self._parameters),
            jsonnet_tla_str=tuple(self._jsonnet_tla_str),
            jsonnet_tla_code=tuple(self._jsonnet_tla_code),
            name_prefix=self._name_prefix,
            name_suffix=self._name_suffix,
            resource=self._resource,
            prune=self._prune,
            async_=self._async,
            force=self._force,
            timeout=self._timeout,
            config_management_plugin=self._config_management_plugin,
        )

    def validate(self) -> ValidationResult:
        """Check every field and report all problems at once.

        Returns:
            ValidationResult; ``ok`` is True when nothing is wrong.
        """
        result = ValidationResult()

        if not self._name:
            result.add("name", "must not be empty")
        if isinstance(self._timeout, bool) or not isinstance(self._timeout, int):
            result.add("timeout", f"must be an integer number of seconds, got {self._timeout!r}")
        elif self._timeout <= 0:
            result.add("timeout", f"must be positive, got {self._timeout}")
        if not isinstance(self._repo_url_type, RepoURLType):
            result.add("repo_url_type", f"unknown repository type {self._repo_url_type!r}")

        for field_name, values in (
            ("parameters", self._parameters),
            ("jsonnet_tla_str", self._jsonnet_tla_str),
            ("jsonnet_tla_code", self._jsonnet_tla_code),
        ):
            for value in values:
                if "=" not in value:
                    result.add(field_name, f"expected KEY=VALUE, got {value!r}")

        if self._resource and len(self._resource.split(":")) != 3:
            result.add("resource", f"expected group:kind:name, got {self._resource!r}")

        if self._chart:
            if self._path:
                result.add("chart", "chart and path are mutually exclusive")
            if self._repo_url_type != RepoURLType.HELM:
                result.add("chart", "charts need a helm repository")

        return result
