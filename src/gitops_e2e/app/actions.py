"""The "when" part of given/when/then for application tests.

Actions reads the finished Context and turns it into CLI calls against the
system under test. A failing CLI call is recorded in ``last_error`` instead of
raised so that the assertion phase can inspect it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import FixtureError, InvalidContextError
from ..fixture.repos import repo_url
from ..shared.logging import get_logger

if TYPE_CHECKING:
    from .context import Context, ContextSnapshot

logger = get_logger(__name__)


class Actions:
    """Acts on the application described by a Context."""

    def __init__(self, context: Context):
        self._context = context
        self.last_output: str = ""
        self.last_error: FixtureError | None = None
        self._validated = False

    @property
    def context(self) -> Context:
        return self._context

    @property
    def snapshot(self) -> ContextSnapshot:
        return self._context.snapshot()

    def _require_valid(self) -> ContextSnapshot:
        if not self._validated:
            result = self._context.validate()
            if not result.ok:
                raise InvalidContextError(result)
            self._validated = True
        return self._context.snapshot()

    def _run_cli(self, args: list[str]) -> None:
        logger.info("cli_action", args=args)
        try:
            self.last_output = self._context.services.cli.run(*args)
            self.last_error = None
        except FixtureError as e:
            self.last_output = ""
            self.last_error = e
            logger.info("cli_action_failed", args=args, error=e.message)

    def create_args(self, *extra: str) -> list[str]:
        """Build the `app create` command for the context.

        Raises:
            InvalidContextError: If the context has invalid fields.
        """
        snap = self._require_valid()
        config = self._context.config

        args = [
            "app",
            "create",
            snap.name,
            "--repo",
            repo_url(config, snap.repo_url_type),
            "--dest-server",
            snap.dest_server,
            "--dest-namespace",
            config.deployment_namespace,
        ]
        if snap.path:
            args.extend(["--path", snap.path])
        if snap.chart:
            args.extend(["--helm-chart", snap.chart])
        if snap.env:
            args.extend(["--env", snap.env])
        if snap.revision:
            args.extend(["--revision", snap.revision])
        if snap.project:
            args.extend(["--project", snap.project])
        for parameter in snap.parameters:
            args.extend(["--parameter", parameter])
        for parameter in snap.jsonnet_tla_str:
            args.extend(["--jsonnet-tla-str", parameter])
        for parameter in snap.jsonnet_tla_code:
            args.extend(["--jsonnet-tla-code", parameter])
        if snap.name_prefix:
            args.extend(["--nameprefix", snap.name_prefix])
        if snap.name_suffix:
            args.extend(["--namesuffix", snap.name_suffix])
        if snap.config_management_plugin:
            args.extend(["--config-management-plugin", snap.config_management_plugin])
        args.extend(extra)
        return args

    def sync_args(self, *extra: str) -> list[str]:
        """Build the `app sync` command for the context.

        Raises:
            InvalidContextError: If the context has invalid fields.
        """
        snap = self._require_valid()

        args = ["app", "sync", snap.name, "--timeout", str(snap.timeout)]
        if snap.async_:
            args.append("--async")
        if snap.prune:
            args.append("--prune")
        if snap.resource:
            args.extend(["--resource", snap.resource])
        if snap.local_path:
            args.extend(["--local", snap.local_path])
        if snap.force:
            args.append("--force")
        args.extend(extra)
        return args

    def create(self, *extra: str) -> Actions:
        self._run_cli(self.create_args(*extra))
        return self

    def sync(self, *extra: str) -> Actions:
        self._run_cli(self.sync_args(*extra))
        return self

    def delete(self, cascade: bool) -> Actions:
        snap = self._require_valid()
        self._run_cli(["app", "delete", snap.name, f"--cascade={str(cascade).lower()}"])
        return self
