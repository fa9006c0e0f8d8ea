"""Repository and credential fixtures.

Repositories and credential templates are written through the system CLI
(`repo add` / `repocreds add`). Writes are keyed by URL; adding the same URL
again replaces the earlier entry.
"""

from __future__ import annotations

from ..config import FixtureConfig
from ..shared.logging import get_logger
from ..shared.paths import repo_directory
from .commands import CommandRunner
from .types import RepoURLType

logger = get_logger(__name__)

SSH_PRIVATE_KEY_FILE = "id_rsa"
CLIENT_CERT_FILE = "argocd-test-client.crt"
CLIENT_KEY_FILE = "argocd-test-client.key"


def repo_url(config: FixtureConfig, url_type: RepoURLType) -> str:
    """Get the URL test applications use for a repository kind.

    Args:
        config: Fixture configuration.
        url_type: Repository kind.

    Returns:
        Repository URL.
    """
    if url_type == RepoURLType.HTTPS:
        return config.https_repo_url
    if url_type == RepoURLType.SSH:
        return config.ssh_repo_url
    if url_type == RepoURLType.HELM:
        return config.helm_repo_url
    return f"file://{repo_directory(config.work_dir)}"


class RepoFixtures:
    """Register repositories and credentials with the control plane."""

    def __init__(self, runner: CommandRunner, config: FixtureConfig):
        self.runner = runner
        self.config = config

    def _user_pass(self) -> list[str]:
        return ["--username", self.config.username, "--password", self.config.password]

    def _client_cert(self) -> list[str]:
        certs = self.config.certs_dir
        return [
            "--tls-client-cert-path",
            str(certs / CLIENT_CERT_FILE),
            "--tls-client-cert-key-path",
            str(certs / CLIENT_KEY_FILE),
        ]

    def _ssh_key(self) -> list[str]:
        return ["--ssh-private-key-path", str(self.config.certs_dir / SSH_PRIVATE_KEY_FILE)]

    def add_https_repo(self, insecure: bool, with_creds: bool) -> None:
        args = ["repo", "add", self.config.https_repo_url]
        if with_creds:
            args.extend(self._user_pass())
        if insecure:
            args.append("--insecure-skip-server-verification")
        self.runner.cli(*args)
        logger.info("repo_added", url_type="https", insecure=insecure, with_creds=with_creds)

    def add_https_repo_client_cert(self, insecure: bool) -> None:
        args = ["repo", "add", self.config.https_client_cert_repo_url]
        args.extend(self._user_pass())
        args.extend(self._client_cert())
        if insecure:
            args.append("--insecure-skip-server-verification")
        self.runner.cli(*args)
        logger.info("repo_added", url_type="https", insecure=insecure, client_cert=True)

    def add_ssh_repo(self, insecure: bool, with_creds: bool) -> None:
        args = ["repo", "add", self.config.ssh_repo_url]
        if with_creds:
            args.extend(self._ssh_key())
        if insecure:
            args.append("--insecure-ignore-host-key")
        self.runner.cli(*args)
        logger.info("repo_added", url_type="ssh", insecure=insecure, with_creds=with_creds)

    def add_helm_repo(self, name: str) -> None:
        args = ["repo", "add", self.config.helm_repo_url, "--type", "helm", "--name", name]
        args.extend(self._user_pass())
        args.extend(self._client_cert())
        self.runner.cli(*args)
        logger.info("repo_added", url_type="helm", name=name)

    def add_https_credentials_user_pass(self) -> None:
        self.runner.cli("repocreds", "add", self.config.https_repo_url, *self._user_pass())
        logger.info("credentials_added", kind="https", auth="user_pass")

    def add_https_credentials_tls_client_cert(self) -> None:
        self.runner.cli(
            "repocreds",
            "add",
            self.config.https_client_cert_repo_url,
            *self._user_pass(),
            *self._client_cert(),
        )
        logger.info("credentials_added", kind="https", auth="tls_client_cert")

    def add_ssh_credentials(self) -> None:
        self.runner.cli("repocreds", "add", self.config.ssh_repo_url, *self._ssh_key())
        logger.info("credentials_added", kind="ssh", auth="private_key")
