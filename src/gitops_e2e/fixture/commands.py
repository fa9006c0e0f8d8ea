"""Subprocess wrappers for kubectl, the system CLI and git."""

from __future__ import annotations

import subprocess
from pathlib import Path

from ..errors import CommandError, FixtureError
from ..shared.logging import get_logger

logger = get_logger(__name__)


class CommandRunner:
    """Run external commands, failing loudly on non-zero exit."""

    def __init__(
        self,
        kubeconfig: str | None = None,
        cli_binary: str = "argocd",
        namespace: str = "argocd",
    ):
        """Initialize runner.

        Args:
            kubeconfig: Path to kubeconfig file.
            cli_binary: Name or path of the system CLI.
            namespace: Namespace the control plane runs in.
        """
        self.kubeconfig = kubeconfig
        self.cli_binary = cli_binary
        self.namespace = namespace

    def _kubectl_cmd(self) -> list[str]:
        """Build base kubectl command."""
        cmd = ["kubectl"]
        if self.kubeconfig:
            cmd.extend(["--kubeconfig", self.kubeconfig])
        return cmd

    def run(self, cmd: list[str], cwd: Path | None = None) -> str:
        """Run a command and return its stdout.

        Args:
            cmd: Command and arguments.
            cwd: Working directory.

        Returns:
            Captured stdout.

        Raises:
            CommandError: If the command exits non-zero.
            FixtureError: If the executable is not installed.
        """
        logger.debug("run_command", command=cmd, cwd=str(cwd) if cwd else None)
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, cwd=cwd)
        except FileNotFoundError as e:
            raise FixtureError(f"{cmd[0]} not found. Is it installed?") from e

        if result.returncode != 0:
            raise CommandError(cmd, result.returncode, result.stderr or "")
        return result.stdout or ""

    def kubectl(self, *args: str, namespaced: bool = True) -> str:
        """Run kubectl, scoped to the control plane namespace by default."""
        cmd = self._kubectl_cmd()
        if namespaced:
            cmd.extend(["-n", self.namespace])
        cmd.extend(args)
        return self.run(cmd)

    def cli(self, *args: str) -> str:
        """Run the system CLI."""
        return self.run([self.cli_binary, *args])

    def git(self, *args: str, cwd: Path) -> str:
        """Run git inside a working tree."""
        return self.run(["git", *args], cwd=cwd)


class CliAdapter:
    """Expose the system CLI of a CommandRunner as an AppCli."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def run(self, *args: str) -> str:
        return self.runner.cli(*args)
