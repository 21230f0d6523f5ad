"""
Sandbox Bootstrap.

This module wires discovery, ordering and activation together.

Example:
    import asyncio
    from microgravity import bootstrap, BootstrapOptions

    asyncio.run(bootstrap(BootstrapOptions(verbose=True)))
    t.core.add(1.0, 2.0)
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from microgravity.core.bootlog import BootLog
from microgravity.core.namespace import (
    Namespace,
    get_namespace,
    has_entry,
    publish,
)
from microgravity.extension.activation import activate_extension
from microgravity.extension.graph import sort_by_dependencies
from microgravity.extension.runner import ImportRunner, ModuleRunner
from microgravity.extension.scanner import DiscoveredExtension, discover_extensions
from microgravity.native.binding import CtypesBindingService, NativeBindingService


@dataclass
class BootstrapOptions:
    """
    Bootstrap configuration.

    Attributes:
        root_dir: Directory to scan (default: current working directory)
        verbose: Print discovery and activation messages
        logger: Message sink used when verbose
    """

    root_dir: Path = field(default_factory=Path.cwd)
    verbose: bool = False
    logger: Callable[[str], None] = print


async def bootstrap(
    options: BootstrapOptions | None = None,
    *,
    binder: NativeBindingService | None = None,
    runner: ModuleRunner | None = None,
) -> Namespace:
    """
    Initialize the TitanPL sandbox.

    Creates a fresh namespace, publishes it as ``t`` and ``Titan``, then
    activates every discovered extension, dependencies first. Extensions that
    fail are reported and skipped.

    Args:
        options: Bootstrap options
        binder: Native binding service (default: ctypes)
        runner: Entry module runner (default: import)

    Returns:
        The published namespace
    """
    options = options or BootstrapOptions()
    binder = binder or CtypesBindingService()
    runner = runner or ImportRunner()
    log = BootLog(options.verbose, options.logger)

    namespace = Namespace()
    publish(namespace)

    extensions = discover_extensions(Path(options.root_dir), log)
    if not extensions:
        log("No TitanPL extensions found")
        return namespace

    local_count = sum(1 for ext in extensions if ext.is_local)
    log(
        f"Found {len(extensions)} extension(s): "
        f"{local_count} local, {len(extensions) - local_count} dependencies"
    )

    def report_cycle(path: list[str]) -> None:
        log(f"Dependency cycle: {' -> '.join(path)}")

    for extension in sort_by_dependencies(extensions, on_cycle=report_cycle):
        await activate_extension(
            extension, namespace, binder=binder, runner=runner, log=log
        )

    log("Ready!")
    return namespace


def bootstrap_sync(
    options: BootstrapOptions | None = None,
    *,
    binder: NativeBindingService | None = None,
    runner: ModuleRunner | None = None,
) -> Namespace:
    """Run bootstrap() to completion from synchronous code."""
    return asyncio.run(bootstrap(options, binder=binder, runner=runner))


def get_loaded_extensions(root_dir: Path | None = None) -> list[DiscoveredExtension]:
    """
    Get list of discovered extensions (for debugging).

    Runs discovery only: nothing is ordered, activated or logged.
    """
    return discover_extensions(Path(root_dir or Path.cwd()), BootLog.silent())


def has_extension(name: str) -> bool:
    """Check if a specific extension is available in the published namespace."""
    namespace = get_namespace()
    return namespace is not None and has_entry(namespace, name)
