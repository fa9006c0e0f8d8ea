"""Value types written into the system under test by fixtures.

Each type renders itself with ``to_dict()`` into the camelCase document shape
stored by the control plane (AppProject specs, argocd-cm entries).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RepoURLType(Enum):
    """Kind of repository an application is sourced from."""

    FILE = "file"
    HTTPS = "https"
    SSH = "ssh"
    HELM = "helm"


@dataclass
class ApplicationDestination:
    """Cluster/namespace pair a project may deploy to."""

    server: str = "*"
    namespace: str = "*"

    def to_dict(self) -> dict[str, Any]:
        return {"server": self.server, "namespace": self.namespace}


@dataclass
class GroupKind:
    """API group and kind, used for resource allow/deny lists."""

    group: str = "*"
    kind: str = "*"

    def to_dict(self) -> dict[str, Any]:
        return {"group": self.group, "kind": self.kind}


@dataclass
class ProjectSpec:
    """Spec of an AppProject."""

    source_repos: list[str] = field(default_factory=lambda: ["*"])
    destinations: list[ApplicationDestination] = field(
        default_factory=lambda: [ApplicationDestination()]
    )
    cluster_resource_whitelist: list[GroupKind] = field(default_factory=lambda: [GroupKind()])
    namespace_resource_blacklist: list[GroupKind] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "sourceRepos": list(self.source_repos),
            "destinations": [d.to_dict() for d in self.destinations],
            "clusterResourceWhitelist": [g.to_dict() for g in self.cluster_resource_whitelist],
        }
        if self.namespace_resource_blacklist:
            data["namespaceResourceBlacklist"] = [
                g.to_dict() for g in self.namespace_resource_blacklist
            ]
        if self.description:
            data["description"] = self.description
        return data


@dataclass
class ResourceOverride:
    """Per group/kind customisation of health checks, diffing and actions."""

    health_lua: str = ""
    actions: str = ""
    ignore_differences: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.health_lua:
            data["health.lua"] = self.health_lua
        if self.actions:
            data["actions"] = self.actions
        if self.ignore_differences:
            data["ignoreDifferences"] = self.ignore_differences
        return data


@dataclass
class FilteredResource:
    """One entry of a resource inclusion/exclusion list."""

    api_groups: list[str] = field(default_factory=list)
    kinds: list[str] = field(default_factory=list)
    clusters: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiGroups": list(self.api_groups),
            "kinds": list(self.kinds),
            "clusters": list(self.clusters),
        }


@dataclass
class ResourcesFilter:
    """Resources the controller watches (inclusions) or ignores (exclusions)."""

    resource_exclusions: list[FilteredResource] = field(default_factory=list)
    resource_inclusions: list[FilteredResource] = field(default_factory=list)


@dataclass
class PluginCommand:
    """Command run by a config management plugin."""

    command: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"command": list(self.command)}
        if self.args:
            data["args"] = list(self.args)
        return data


@dataclass
class ConfigManagementPlugin:
    """Custom manifest generator registered with the repo server."""

    name: str
    generate: PluginCommand
    init: PluginCommand | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.init is not None:
            data["init"] = self.init.to_dict()
        data["generate"] = self.generate.to_dict()
        return data
