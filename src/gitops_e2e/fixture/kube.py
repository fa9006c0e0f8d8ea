"""kubectl-backed environment reset, project registry and settings store.

All writes are JSON or merge patches against the control plane namespace:
AppProjects for project specs, the ``argocd-cm`` ConfigMap for settings and
plugins, labelled Secrets for repositories.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any

import yaml

from ..config import FixtureConfig
from ..errors import CleanStateError, FixtureError
from ..shared.logging import get_logger
from ..shared.paths import repo_directory
from .commands import CommandRunner
from .types import (
    ConfigManagementPlugin,
    FilteredResource,
    ProjectSpec,
    ResourceOverride,
    ResourcesFilter,
)

logger = get_logger(__name__)

SETTINGS_CONFIGMAP = "argocd-cm"
DEFAULT_PROJECT = "default"
SECRET_TYPE_LABEL = "argocd.argoproj.io/secret-type"
REPO_SECRET_TYPES = ("repository", "repo-creds")

# argocd-cm data keys
RESOURCE_CUSTOMIZATIONS_KEY = "resource.customizations"
RESOURCE_EXCLUSIONS_KEY = "resource.exclusions"
RESOURCE_INCLUSIONS_KEY = "resource.inclusions"
PLUGINS_KEY = "configManagementPlugins"


def _json_patch(op: str, path: str, value: Any) -> str:
    return json.dumps([{"op": op, "path": path, "value": value}])


def _filter_yaml(resources: list[FilteredResource]) -> str | None:
    # null in a merge patch deletes the key
    if not resources:
        return None
    return yaml.safe_dump([r.to_dict() for r in resources], default_flow_style=False)


class KubeProjectRegistry:
    """Write AppProject specs with kubectl."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def set_project_spec(self, project: str, spec: ProjectSpec) -> None:
        self.runner.kubectl(
            "patch",
            "appproject",
            project,
            "--type",
            "json",
            "-p",
            _json_patch("replace", "/spec", spec.to_dict()),
        )
        logger.info("project_spec_set", project=project)


class KubeSettingsStore:
    """Write controller settings and plugins into argocd-cm."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def _merge_data(self, data: dict[str, str | None]) -> None:
        self.runner.kubectl(
            "patch",
            "configmap",
            SETTINGS_CONFIGMAP,
            "--type",
            "merge",
            "-p",
            json.dumps({"data": data}),
        )

    def set_resource_overrides(self, overrides: dict[str, ResourceOverride]) -> None:
        customizations = {key: override.to_dict() for key, override in overrides.items()}
        value = yaml.safe_dump(customizations, default_flow_style=False) if overrides else None
        self._merge_data({RESOURCE_CUSTOMIZATIONS_KEY: value})
        logger.info("resource_overrides_set", keys=sorted(overrides))

    def set_resource_filter(self, resource_filter: ResourcesFilter) -> None:
        self._merge_data(
            {
                RESOURCE_EXCLUSIONS_KEY: _filter_yaml(resource_filter.resource_exclusions),
                RESOURCE_INCLUSIONS_KEY: _filter_yaml(resource_filter.resource_inclusions),
            }
        )
        logger.info(
            "resource_filter_set",
            exclusions=len(resource_filter.resource_exclusions),
            inclusions=len(resource_filter.resource_inclusions),
        )

    def register_plugin(self, plugin: ConfigManagementPlugin) -> None:
        # Replaces the whole plugin list; the last registration wins.
        value = yaml.safe_dump([plugin.to_dict()], default_flow_style=False)
        self._merge_data({PLUGINS_KEY: value})
        logger.info("plugin_registered", plugin=plugin.name)


class KubeEnvironment:
    """Reset the cluster, control plane settings and local test repo."""

    def __init__(self, runner: CommandRunner, config: FixtureConfig):
        self.runner = runner
        self.config = config

    def ensure_clean_state(self) -> None:
        """Reset shared state left behind by previous tests.

        Raises:
            CleanStateError: If any step fails. The failing step is named in the
                message and the underlying error is chained.
        """
        steps = [
            ("delete applications", self._delete_applications),
            ("reset projects", self._reset_projects),
            ("reset settings", self._reset_settings),
            ("delete repository secrets", self._delete_repo_secrets),
            ("recreate deployment namespace", self._recreate_deployment_namespace),
            ("reset test repository", self._reset_test_repo),
        ]
        for description, step in steps:
            try:
                step()
            except (FixtureError, OSError) as e:
                raise CleanStateError(f"Failed to {description}: {e}") from e
        logger.info("clean_state", deployment_namespace=self.config.deployment_namespace)

    def _names(self, kind: str) -> list[str]:
        output = self.runner.kubectl(
            "get", kind, "-o", "jsonpath={.items[*].metadata.name}"
        )
        return output.split()

    def _delete_applications(self) -> None:
        for name in self._names("applications"):
            # finalizers would block deletion once the namespace is gone
            self.runner.kubectl(
                "patch",
                "application",
                name,
                "--type",
                "merge",
                "-p",
                json.dumps({"metadata": {"finalizers": None}}),
            )
        self.runner.kubectl("delete", "applications", "--all", "--wait=true")

    def _reset_projects(self) -> None:
        for name in self._names("appprojects"):
            if name != DEFAULT_PROJECT:
                self.runner.kubectl("delete", "appproject", name)
        KubeProjectRegistry(self.runner).set_project_spec(DEFAULT_PROJECT, ProjectSpec())

    def _reset_settings(self) -> None:
        self.runner.kubectl(
            "patch",
            "configmap",
            SETTINGS_CONFIGMAP,
            "--type",
            "json",
            "-p",
            _json_patch("add", "/data", {}),
        )

    def _delete_repo_secrets(self) -> None:
        for secret_type in REPO_SECRET_TYPES:
            self.runner.kubectl(
                "delete", "secrets", "-l", f"{SECRET_TYPE_LABEL}={secret_type}"
            )

    def _recreate_deployment_namespace(self) -> None:
        namespace = self.config.deployment_namespace
        self.runner.kubectl(
            "delete", "namespace", namespace, "--ignore-not-found", "--wait=true",
            namespaced=False,
        )
        self.runner.kubectl("create", "namespace", namespace, namespaced=False)

    def _reset_test_repo(self) -> None:
        repo_dir: Path = repo_directory(self.config.work_dir)
        if repo_dir.exists():
            shutil.rmtree(repo_dir)
        shutil.copytree(self.config.testdata_dir, repo_dir)

        self.runner.git("init", cwd=repo_dir)
        self.runner.git("add", ".", cwd=repo_dir)
        self.runner.git(
            "-c",
            "user.name=gitops-e2e",
            "-c",
            "user.email=gitops-e2e@example.com",
            "commit",
            "-q",
            "-m",
            "initial commit",
            cwd=repo_dir,
        )
