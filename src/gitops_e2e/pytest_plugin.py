"""pytest integration for gitops-e2e.

Provides a ``given`` fixture that starts a test context named after the
running test:

    def test_sync_guestbook(given):
        given().path("guestbook").when().create().sync()
"""

from collections.abc import Callable

import pytest

from .app.context import Context
from .app.context import given as start_context
from .config import FixtureConfig, load_config
from .fixture.services import FixtureServices
from .shared.logging import configure_logging
from .shared.paths import ensure_dirs, get_log_file


def pytest_addoption(parser):
    """Add gitops-e2e command-line options."""
    group = parser.getgroup("gitops-e2e")
    group.addoption(
        "--e2e-config",
        action="store",
        default=None,
        help="Path to the gitops-e2e config file (default: ~/.gitops-e2e/config.yaml)",
    )
    group.addoption(
        "--e2e-log-level",
        action="store",
        default=None,
        help="Log fixture activity at this level to ~/.gitops-e2e/fixtures.log",
    )
    group.addoption(
        "--e2e-log-json",
        action="store_true",
        default=False,
        help="Write the fixture log as JSON lines",
    )


def pytest_configure(config):
    """Send fixture logs to a file when --e2e-log-level is given.

    Logging is left alone otherwise; the plugin loads in every session
    where the package is installed.
    """
    level = config.getoption("--e2e-log-level")
    if not level:
        return
    ensure_dirs()
    configure_logging(
        level,
        log_file=get_log_file(),
        json_output=config.getoption("--e2e-log-json"),
    )


@pytest.fixture(scope="session")
def e2e_config(pytestconfig) -> FixtureConfig:
    """Fixture configuration, loaded once per session."""
    return load_config(pytestconfig.getoption("--e2e-config"))


@pytest.fixture(scope="session")
def e2e_services(e2e_config: FixtureConfig) -> FixtureServices:
    """Live fixture services for the configured cluster."""
    return FixtureServices.from_config(e2e_config)


@pytest.fixture
def given(
    request, e2e_config: FixtureConfig, e2e_services: FixtureServices
) -> Callable[[], Context]:
    """Factory that resets the environment and returns a new Context."""

    def _given() -> Context:
        return start_context(
            test_name=request.node.name,
            services=e2e_services,
            config=e2e_config,
        )

    return _given
