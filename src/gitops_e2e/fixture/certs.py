"""TLS and SSH trust fixtures."""

from __future__ import annotations

from pathlib import Path

from ..shared.logging import get_logger
from .commands import CommandRunner

logger = get_logger(__name__)

SERVER_CERT_FILE = "argocd-test-server.crt"
KNOWN_HOSTS_FILE = "ssh_known_hosts"

# Hosts the test repo servers are reachable on
TLS_HOSTS = ("localhost", "127.0.0.1")


class CertFixtures:
    """Install the test CA and SSH host keys through the system CLI."""

    def __init__(self, runner: CommandRunner, certs_dir: Path):
        """Initialize cert fixtures.

        Args:
            runner: Command runner for the system CLI.
            certs_dir: Directory holding the test certificates and known hosts.
        """
        self.runner = runner
        self.certs_dir = certs_dir

    def add_custom_ca_cert(self) -> None:
        cert = self.certs_dir / SERVER_CERT_FILE
        for host in TLS_HOSTS:
            self.runner.cli("cert", "add-tls", host, "--from", str(cert))
        logger.info("custom_ca_cert_added", cert=str(cert))

    def add_custom_ssh_known_hosts_keys(self) -> None:
        known_hosts = self.certs_dir / KNOWN_HOSTS_FILE
        self.runner.cli("cert", "add-ssh", "--batch", "--from", str(known_hosts))
        logger.info("ssh_known_hosts_added", known_hosts=str(known_hosts))
