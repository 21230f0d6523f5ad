"""Shared fixtures for MicroGravity tests."""

import json
import sys
from pathlib import Path

import pytest

from microgravity.core.namespace import unpublish


def write_extension(
    directory: Path,
    manifest: dict | None = None,
    package: dict | None = None,
    files: dict[str, str] | None = None,
) -> Path:
    """
    Create an extension directory on disk.

    Args:
        directory: Extension directory (created if missing)
        manifest: titan.json content, omitted when None
        package: package.json content, omitted when None
        files: Extra files, relative path -> text

    Returns:
        The directory
    """
    directory.mkdir(parents=True, exist_ok=True)
    if manifest is not None:
        (directory / "titan.json").write_text(json.dumps(manifest), encoding="utf-8")
    if package is not None:
        (directory / "package.json").write_text(json.dumps(package), encoding="utf-8")
    for rel_path, content in (files or {}).items():
        target = directory / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def make_extension():
    return write_extension


@pytest.fixture(autouse=True)
def clean_host():
    """Drop the published namespace and extension modules after each test."""
    yield
    unpublish()
    for module_name in [m for m in sys.modules if m.startswith("microgravity_ext_")]:
        del sys.modules[module_name]
