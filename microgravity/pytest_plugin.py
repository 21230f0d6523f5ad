"""
pytest integration.

Bootstraps the sandbox once per test session so tests can use ``t`` /
``Titan`` directly. Opt in with ``--microgravity`` or, in the ini file:

    [pytest]
    microgravity = true

Verbosity follows the DEBUG / TITAN_DEBUG environment flags.
"""

from pathlib import Path

import pytest

from microgravity.config import load_settings
from microgravity.core.bootstrap import BootstrapOptions, bootstrap_sync
from microgravity.core.namespace import Namespace, get_namespace


def pytest_addoption(parser):
    group = parser.getgroup("microgravity")
    group.addoption(
        "--microgravity",
        action="store_true",
        default=False,
        help="Bootstrap the TitanPL sandbox before the session",
    )
    group.addoption(
        "--microgravity-root",
        default=None,
        help="Project directory to scan (default: rootdir settings)",
    )
    parser.addini(
        "microgravity",
        type="bool",
        default=False,
        help="Bootstrap the TitanPL sandbox before the session",
    )


def is_enabled(config) -> bool:
    return bool(config.getoption("microgravity") or config.getini("microgravity"))


def bootstrap_options(config) -> BootstrapOptions:
    """Build bootstrap options from settings files, env flags and CLI options."""
    settings = load_settings(Path(str(config.rootpath)))
    root = config.getoption("microgravity_root")
    return BootstrapOptions(
        root_dir=Path(root).absolute() if root else settings.root_dir,
        verbose=settings.verbose,
    )


def pytest_sessionstart(session):
    if is_enabled(session.config):
        bootstrap_sync(bootstrap_options(session.config))


@pytest.fixture
def titan() -> Namespace:
    """The published sandbox namespace."""
    namespace = get_namespace()
    if namespace is None:
        pytest.skip("TitanPL sandbox not bootstrapped (use --microgravity)")
    return namespace
