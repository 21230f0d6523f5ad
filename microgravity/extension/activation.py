"""
Extension Activation.

This module activates one discovered extension into the shared namespace.

Activation steps:
1. Create the extension's namespace entry
2. Load the native library and bind declared functions
3. Bind serialization hooks
4. Run the entry module

Every failure is reported as a warning and only skips the failing piece;
activation never raises for a single extension.
"""

from pathlib import Path
from typing import Any

from microgravity.core.bootlog import BootLog
from microgravity.core.namespace import Namespace, ensure_bag
from microgravity.extension.manifest import NativeBinding
from microgravity.extension.runner import ModuleRunner
from microgravity.extension.scanner import DiscoveredExtension
from microgravity.native import serialization
from microgravity.native.binding import (
    NativeBindingService,
    NativeLibrary,
    retain,
)
from microgravity.native.types import translate_signature


def resolve_library_path(library_path: str, extension_dir: Path) -> Path:
    """Resolve a binding library path against its extension directory."""
    path = Path(library_path)
    if path.is_absolute():
        return path
    return Path(extension_dir) / path


def bind_functions(
    library: NativeLibrary, native: NativeBinding, entry: Any, log: BootLog
) -> None:
    """
    Bind every declared native function onto an extension's entry.

    A function that cannot be bound is reported and left out.
    """
    for fn_name, definition in native.functions.items():
        parameters, result = translate_signature(
            definition.parameters, definition.result
        )
        try:
            function = library.bind(definition.symbol, result, parameters)
            setattr(entry, fn_name, function)
        except Exception as e:
            log.warning(f"Failed to load native function {fn_name}: {e}")


def bind_serialization_hooks(native: NativeBinding, entry: Any) -> None:
    for hook in native.serialization_hooks:
        setattr(entry, hook, serialization.HOOKS[hook])


def load_native(
    extension: DiscoveredExtension,
    entry: Any,
    binder: NativeBindingService,
    log: BootLog,
) -> None:
    native = extension.descriptor.native
    if native is None:
        return

    library_path = resolve_library_path(native.path, extension.path)
    if not library_path.exists():
        log.warning(f"DLL not found: {library_path}")
        return

    try:
        library = binder.load(library_path)
    except Exception as e:
        log.warning(f"Failed to load DLL {library_path}: {e}")
        return

    retain(library)
    bind_functions(library, native, entry, log)
    try:
        bind_serialization_hooks(native, entry)
    except Exception as e:
        log.warning(f"Failed to bind serialization hooks for {extension.name}: {e}")
    log(f"Loaded native: {library_path}")


async def run_entry_module(
    extension: DiscoveredExtension,
    namespace: Namespace,
    runner: ModuleRunner,
    log: BootLog,
) -> None:
    main_path = Path(extension.path) / extension.descriptor.entry_module
    if not main_path.exists():
        return

    try:
        await runner.run(main_path, extension, namespace)
    except (Exception, SystemExit) as e:
        log.warning(f"Failed to load module {main_path}: {e}")
        return

    log(f"Loaded module: {main_path}")


async def activate_extension(
    extension: DiscoveredExtension,
    namespace: Namespace,
    *,
    binder: NativeBindingService,
    runner: ModuleRunner,
    log: BootLog,
) -> None:
    """
    Activate one extension.

    Args:
        extension: Extension to activate
        namespace: Shared namespace
        binder: Native binding service
        runner: Entry module runner
        log: Message sink
    """
    label = " (local)" if extension.is_local else ""
    log(f"Loading: {extension.name}{label}")

    try:
        entry = ensure_bag(namespace, extension.name)
    except Exception as e:
        log.warning(f"Failed to create namespace entry {extension.name}: {e}")
        return

    load_native(extension, entry, binder, log)
    await run_entry_module(extension, namespace, runner, log)
