"""Shared fixtures for live scenario tests.

These tests drive a real control plane through kubectl and the application
CLI. They are skipped when the cluster named by the fixture configuration
is not reachable.
"""

from __future__ import annotations

import pytest

from gitops_e2e.errors import FixtureError
from gitops_e2e.fixture import CommandRunner


@pytest.fixture(scope="module")
def live_cluster(e2e_config):
    """Skip the module unless kubectl can reach the control plane namespace."""
    runner = CommandRunner(
        kubeconfig=e2e_config.kubeconfig,
        cli_binary=e2e_config.cli_binary,
        namespace=e2e_config.namespace,
    )
    try:
        runner.kubectl("get", "configmap", "argocd-cm", "-o", "name")
    except FixtureError as e:
        pytest.skip(f"Control plane not reachable: {e}")
    if not e2e_config.testdata_dir.is_dir():
        pytest.skip(f"Test data not found at {e2e_config.testdata_dir}")
    return e2e_config
