"""
Extension Discovery.

This module finds TitanPL extensions for a project.

Discovery order:
1. The project itself (if it has titan.json), registered as local
2. Every package under node_modules with a titan.json, including scoped
   (@org/pkg) and nested node_modules installs

The first extension registered under a name wins, so the local project
always shadows a dependency of the same name.
"""

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from microgravity.extension.manifest import ExtensionDescriptor, read_manifest

PACKAGE_STORE = "node_modules"
SCOPE_MARKER = "@"


@dataclass(frozen=True)
class DiscoveredExtension:
    """
    An extension found on disk.

    Attributes:
        name: Extension name
        path: Absolute extension directory
        descriptor: Parsed titan.json
        is_local: True only for the project being scanned
    """

    name: str
    path: Path
    descriptor: ExtensionDescriptor
    is_local: bool = False


def _noop(message: str) -> None:
    pass


def discover_extensions(
    root_dir: Path, log: Callable[[str], None] | None = None
) -> list[DiscoveredExtension]:
    """
    Discover all extensions for a project.

    Args:
        root_dir: Project directory
        log: Message sink for progress and warnings

    Returns:
        Extensions in discovery order
    """
    log = log or _noop
    root_dir = Path(root_dir).absolute()
    found: dict[str, DiscoveredExtension] = {}

    descriptor = read_manifest(root_dir, log)
    if descriptor is not None:
        found[descriptor.name] = DiscoveredExtension(
            name=descriptor.name,
            path=root_dir,
            descriptor=descriptor,
            is_local=True,
        )
        log(f"Found local extension: {descriptor.name}")

    package_store = root_dir / PACKAGE_STORE
    if package_store.is_dir():
        _scan_package_store(package_store, found, set(), log)

    return list(found.values())


def _scan_package_store(
    directory: Path,
    found: dict[str, DiscoveredExtension],
    visited: set[str],
    log: Callable[[str], None],
) -> None:
    try:
        real = os.path.realpath(directory)
        if real in visited:
            return
        visited.add(real)
        entries = sorted(os.listdir(directory))
    except OSError:
        return

    for entry in entries:
        # Hidden entries, .bin included
        if entry.startswith("."):
            continue

        full_path = directory / entry
        try:
            if not full_path.is_dir():
                continue
        except OSError:
            continue

        if entry.startswith(SCOPE_MARKER):
            _scan_package_store(full_path, found, visited, log)
            continue

        try:
            descriptor = read_manifest(full_path, log)
        except OSError:
            descriptor = None

        if descriptor is not None and descriptor.name not in found:
            found[descriptor.name] = DiscoveredExtension(
                name=descriptor.name,
                path=full_path,
                descriptor=descriptor,
                is_local=False,
            )
            log(f"Found extension: {descriptor.name}")

        nested = full_path / PACKAGE_STORE
        try:
            has_nested = nested.is_dir()
        except OSError:
            has_nested = False
        if has_nested:
            _scan_package_store(nested, found, visited, log)
