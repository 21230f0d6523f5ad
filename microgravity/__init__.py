"""
MicroGravity - TitanPL test sandbox.

Executes real TitanPL extensions without mocking. Extensions are discovered
from the current project (if it has titan.json) and from any package in
node_modules with a titan.json, ordered by their package.json dependencies,
and activated into the shared ``t`` / ``Titan`` namespace.
"""

__version__ = "0.1.0"

from microgravity.core.bootstrap import (
    BootstrapOptions,
    bootstrap,
    bootstrap_sync,
    get_loaded_extensions,
    has_extension,
)
from microgravity.core.namespace import Namespace, get_namespace
from microgravity.extension.manifest import ExtensionDescriptor
from microgravity.extension.scanner import DiscoveredExtension

__all__ = [
    "__version__",
    "BootstrapOptions",
    "DiscoveredExtension",
    "ExtensionDescriptor",
    "Namespace",
    "bootstrap",
    "bootstrap_sync",
    "get_loaded_extensions",
    "get_namespace",
    "has_extension",
]
