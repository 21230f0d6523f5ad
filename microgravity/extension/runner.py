"""
Initialization Module Runner.

This module executes an extension's entry module.

Key features:
- importlib integration for loading a file as a module
- Optional ``setup(namespace)`` hook, awaited when it returns an awaitable
- Clean sys.modules on failure
- Runner protocol so hosts can plug their own execution strategy
"""

import hashlib
import importlib.util
import inspect
import re
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Protocol

from microgravity.extension.scanner import DiscoveredExtension

SETUP_HOOK = "setup"


class LoaderError(Exception):
    """Base exception for loader-related errors."""

    pass


class ModuleRunner(Protocol):
    """Runs an initialization unit, completing once."""

    async def run(
        self, path: Path, extension: DiscoveredExtension, namespace: Any
    ) -> None:
        ...


def module_name_for(extension_name: str) -> str:
    """
    Private sys.modules name for an extension's entry module.

    The digest keeps names that differ only in punctuation apart
    (``titan-core`` and ``titan_core``).
    """
    digest = hashlib.sha1(extension_name.encode("utf-8")).hexdigest()[:8]
    safe_name = re.sub(r"\W", "_", extension_name)
    return f"microgravity_ext_{safe_name}_{digest}"


class ImportRunner:
    """Default runner: import the file, then await its setup hook."""

    def __init__(self) -> None:
        self.modules: dict[str, ModuleType] = {}

    async def run(
        self, path: Path, extension: DiscoveredExtension, namespace: Any
    ) -> None:
        """
        Execute an entry module.

        Args:
            path: Entry module path
            extension: Extension the module belongs to
            namespace: Shared namespace passed to setup()

        Raises:
            LoaderError: If loading or setup fails
        """
        module_name = module_name_for(extension.name)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise LoaderError(f"Failed to create module spec for {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module

        try:
            spec.loader.exec_module(module)

            setup = getattr(module, SETUP_HOOK, None)
            if callable(setup):
                result = setup(namespace)
                if inspect.isawaitable(result):
                    await result
        except (Exception, SystemExit) as e:
            sys.modules.pop(module_name, None)
            raise LoaderError(f"Failed to load module {path}: {e}") from e

        self.modules[extension.name] = module
