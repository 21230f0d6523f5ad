"""
Extension Manifest System.

This module provides manifest parsing and validation for TitanPL extensions.

Key features:
- Parsing and shape validation of titan.json
- Native binding declarations (functions and serialization hooks)
- Dependency names from package.json (runtime, peer and dev)
- Lenient reader that reports malformed manifests as warnings
"""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

MANIFEST_FILENAME = "titan.json"
PACKAGE_FILENAME = "package.json"
DEFAULT_MAIN = "index.py"

SERIALIZATION_HOOKS = ("serialize", "deserialize")
DEPENDENCY_SECTIONS = ("dependencies", "peerDependencies", "devDependencies")


class ManifestError(Exception):
    """Base exception for manifest-related errors."""

    pass


class ValidationError(ManifestError):
    """Raised when manifest validation fails."""

    pass


@dataclass(frozen=True)
class NativeFunctionDef:
    """
    Declaration of a single native function.

    Attributes:
        symbol: Exported symbol name in the binding library
        parameters: Ordered parameter type names
        result: Return type name
    """

    symbol: str
    parameters: tuple[str, ...]
    result: str


@dataclass(frozen=True)
class NativeBinding:
    """
    Native binding declaration of an extension.

    Attributes:
        path: Binding library location (absolute, or relative to the extension)
        functions: Exported name -> function declaration
        serialization_hooks: Subset of SERIALIZATION_HOOKS to bind
    """

    path: str
    functions: dict[str, NativeFunctionDef] = field(default_factory=dict)
    serialization_hooks: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtensionDescriptor:
    """
    Represents a parsed titan.json.

    Attributes:
        name: Extension name (unique identifier)
        main: Initialization module path, None when not declared
        description: Extension description
        version: Extension version
        native: Native binding declaration, if any
        raw_data: Raw manifest data
    """

    name: str
    main: str | None = None
    description: str = ""
    version: str = ""
    native: NativeBinding | None = None
    raw_data: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def entry_module(self) -> str:
        return self.main or DEFAULT_MAIN


def _first_key(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _parse_function(fn_name: str, data: Any) -> NativeFunctionDef:
    if not isinstance(data, dict):
        raise ValidationError(f"Native function '{fn_name}' must be an object")

    symbol = data.get("symbol")
    if not isinstance(symbol, str) or not symbol:
        raise ValidationError(f"Native function '{fn_name}' is missing 'symbol'")

    parameters = data.get("parameters", [])
    if not isinstance(parameters, list) or not all(
        isinstance(p, str) for p in parameters
    ):
        raise ValidationError(
            f"Native function '{fn_name}': 'parameters' must be a list of type names"
        )

    result = data.get("result", "void")
    if not isinstance(result, str):
        raise ValidationError(f"Native function '{fn_name}': 'result' must be a string")

    return NativeFunctionDef(symbol=symbol, parameters=tuple(parameters), result=result)


def _parse_native(data: Any) -> NativeBinding:
    if not isinstance(data, dict):
        raise ValidationError("'native' field must be an object")

    path = _first_key(data, "path", "location")
    if not isinstance(path, str) or not path:
        raise ValidationError("'native.path' must be a non-empty string")

    raw_functions = data.get("functions") or {}
    if not isinstance(raw_functions, dict):
        raise ValidationError("'native.functions' must be an object")
    functions = {
        fn_name: _parse_function(fn_name, fn_data)
        for fn_name, fn_data in raw_functions.items()
    }

    raw_hooks = _first_key(data, "v8_functions", "serialization") or {}
    if not isinstance(raw_hooks, dict):
        raise ValidationError("'native.v8_functions' must be an object")
    hooks = tuple(hook for hook in SERIALIZATION_HOOKS if hook in raw_hooks)

    return NativeBinding(path=path, functions=functions, serialization_hooks=hooks)


def validate_manifest(data: Any) -> ExtensionDescriptor:
    """
    Validate decoded manifest data and build a descriptor.

    Args:
        data: Decoded titan.json content

    Returns:
        ExtensionDescriptor

    Raises:
        ValidationError: If the manifest shape is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Manifest must be a JSON object")

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Missing required field: name")

    main = _first_key(data, "main", "entryModule")
    if main is not None and not isinstance(main, str):
        raise ValidationError(f"Invalid main entry point: {main!r}")

    for text_field in ("description", "version"):
        if text_field in data and not isinstance(data[text_field], str):
            raise ValidationError(f"'{text_field}' field must be a string")

    raw_native = _first_key(data, "native", "nativeBinding")
    native = _parse_native(raw_native) if raw_native is not None else None

    return ExtensionDescriptor(
        name=name,
        main=main or None,
        description=data.get("description", ""),
        version=data.get("version", ""),
        native=native,
        raw_data=data,
    )


def parse_manifest(manifest_path: Path) -> ExtensionDescriptor:
    """
    Parse a titan.json file.

    Args:
        manifest_path: Path to titan.json

    Returns:
        ExtensionDescriptor

    Raises:
        ManifestError: If file cannot be read or parsed
        ValidationError: If manifest is invalid
    """
    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest file not found: {manifest_path}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Failed to parse manifest JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Failed to read manifest file: {e}") from e

    return validate_manifest(data)


def read_manifest(
    directory: Path, log: Callable[[str], None] | None = None
) -> ExtensionDescriptor | None:
    """
    Read the extension descriptor of a directory, if it has one.

    A missing titan.json is the normal "not an extension" outcome. A broken
    one is reported through ``log`` and treated the same way.

    Args:
        directory: Candidate extension directory
        log: Warning sink

    Returns:
        ExtensionDescriptor, or None
    """
    manifest_path = Path(directory) / MANIFEST_FILENAME
    if not manifest_path.is_file():
        return None

    try:
        return parse_manifest(manifest_path)
    except ManifestError as e:
        if log is not None:
            log(f"Warning: Invalid {MANIFEST_FILENAME} in {directory}: {e}")
        return None


def read_package_dependencies(directory: Path) -> list[str]:
    """
    Read dependency names declared in a package.json.

    Runtime, peer and development dependencies are merged in that order.
    A missing or unreadable file yields no dependencies.

    Args:
        directory: Extension directory

    Returns:
        Dependency names, first declaration position kept
    """
    package_path = Path(directory) / PACKAGE_FILENAME
    try:
        with open(package_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return []

    if not isinstance(data, dict):
        return []

    names: dict[str, None] = {}
    for section in DEPENDENCY_SECTIONS:
        deps = data.get(section)
        if isinstance(deps, dict):
            names.update(dict.fromkeys(deps))
    return list(names)
