"""
Tests for the Manifest System.

This test suite covers:
1. titan.json parsing (valid/invalid cases)
2. Native binding declarations
3. Lenient reading with warnings
4. package.json dependency names
"""

import json
import tempfile
from pathlib import Path

import pytest

from microgravity.extension.manifest import (
    DEFAULT_MAIN,
    ManifestError,
    ValidationError,
    parse_manifest,
    read_manifest,
    read_package_dependencies,
)


def _write(directory: Path, filename: str, data) -> Path:
    path = directory / filename
    with open(path, "w") as f:
        if isinstance(data, str):
            f.write(data)
        else:
            json.dump(data, f)
    return path


class TestManifestParsing:
    """Test titan.json parsing and validation."""

    def test_parse_full_manifest(self):
        """Should parse every declared field."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(
                Path(tmpdir),
                "titan.json",
                {
                    "name": "@titanpl/core",
                    "main": "lib/index.py",
                    "description": "Core extension",
                    "version": "1.2.0",
                    "native": {
                        "path": "native/core.so",
                        "functions": {
                            "add": {
                                "symbol": "core_add",
                                "parameters": ["f64", "f64"],
                                "result": "f64",
                            }
                        },
                        "v8_functions": {
                            "serialize": {"symbol": "core_serialize"},
                            "deserialize": {"symbol": "core_deserialize"},
                        },
                    },
                },
            )

            descriptor = parse_manifest(path)

            assert descriptor.name == "@titanpl/core"
            assert descriptor.main == "lib/index.py"
            assert descriptor.entry_module == "lib/index.py"
            assert descriptor.version == "1.2.0"
            assert descriptor.native.path == "native/core.so"
            add = descriptor.native.functions["add"]
            assert add.symbol == "core_add"
            assert add.parameters == ("f64", "f64")
            assert add.result == "f64"
            assert descriptor.native.serialization_hooks == ("serialize", "deserialize")

    def test_parse_minimal_manifest(self):
        """Should parse manifest with only a name."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(Path(tmpdir), "titan.json", {"name": "minimal"})

            descriptor = parse_manifest(path)

            assert descriptor.name == "minimal"
            assert descriptor.main is None
            assert descriptor.entry_module == DEFAULT_MAIN
            assert descriptor.native is None
            assert descriptor.description == ""

    def test_parse_alias_keys(self):
        """Should accept entryModule / nativeBinding / location aliases."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(
                Path(tmpdir),
                "titan.json",
                {
                    "name": "aliased",
                    "entryModule": "init.py",
                    "nativeBinding": {
                        "location": "lib.so",
                        "functions": {},
                        "serialization": {"serialize": {}},
                    },
                },
            )

            descriptor = parse_manifest(path)

            assert descriptor.main == "init.py"
            assert descriptor.native.path == "lib.so"
            assert descriptor.native.serialization_hooks == ("serialize",)

    def test_function_defaults(self):
        """Should default parameters to none and result to void."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(
                Path(tmpdir),
                "titan.json",
                {
                    "name": "ext",
                    "native": {"path": "x.so", "functions": {"tick": {"symbol": "tick"}}},
                },
            )

            tick = parse_manifest(path).native.functions["tick"]

            assert tick.parameters == ()
            assert tick.result == "void"

    def test_descriptor_is_immutable(self):
        """Should not allow mutation of a parsed descriptor."""
        with tempfile.TemporaryDirectory() as tmpdir:
            descriptor = parse_manifest(_write(Path(tmpdir), "titan.json", {"name": "x"}))

            with pytest.raises(AttributeError):
                descriptor.name = "y"

    def test_parse_missing_name(self):
        """Should reject manifest without a name."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(Path(tmpdir), "titan.json", {"main": "index.py"})

            with pytest.raises(ValidationError, match="Missing required field: name"):
                parse_manifest(path)

    def test_parse_empty_name(self):
        """Should reject an empty name."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(Path(tmpdir), "titan.json", {"name": "  "})

            with pytest.raises(ValidationError):
                parse_manifest(path)

    def test_parse_non_object(self):
        """Should reject a manifest that is not a JSON object."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(Path(tmpdir), "titan.json", ["name"])

            with pytest.raises(ValidationError, match="JSON object"):
                parse_manifest(path)

    def test_parse_invalid_native_function(self):
        """Should reject functions without a symbol."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(
                Path(tmpdir),
                "titan.json",
                {"name": "ext", "native": {"path": "x.so", "functions": {"f": {}}}},
            )

            with pytest.raises(ValidationError, match="missing 'symbol'"):
                parse_manifest(path)

    def test_parse_native_without_path(self):
        """Should reject a native block without a library path."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(Path(tmpdir), "titan.json", {"name": "ext", "native": {}})

            with pytest.raises(ValidationError, match="native.path"):
                parse_manifest(path)

    def test_parse_invalid_json(self):
        """Should raise error for invalid JSON."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(Path(tmpdir), "titan.json", "{ invalid json }")

            with pytest.raises(ManifestError, match="Failed to parse manifest JSON"):
                parse_manifest(path)

    def test_parse_manifest_file_not_found(self):
        """Should raise error for non-existent manifest file."""
        with pytest.raises(ManifestError, match="Manifest file not found"):
            parse_manifest(Path("/nonexistent/titan.json"))


class TestReadManifest:
    """Test lenient manifest reading."""

    def test_absent_manifest_is_silent(self):
        """Should return None without a warning when titan.json is absent."""
        messages = []
        with tempfile.TemporaryDirectory() as tmpdir:
            assert read_manifest(Path(tmpdir), messages.append) is None
        assert messages == []

    def test_malformed_manifest_warns(self):
        """Should return None and warn when titan.json is broken."""
        messages = []
        with tempfile.TemporaryDirectory() as tmpdir:
            _write(Path(tmpdir), "titan.json", "not json")
            assert read_manifest(Path(tmpdir), messages.append) is None
        assert len(messages) == 1
        assert messages[0].startswith("Warning: Invalid titan.json")

    def test_missing_name_warns(self):
        """Should treat a nameless manifest as not found."""
        messages = []
        with tempfile.TemporaryDirectory() as tmpdir:
            _write(Path(tmpdir), "titan.json", {"version": "1.0.0"})
            assert read_manifest(Path(tmpdir), messages.append) is None
        assert "name" in messages[0]

    def test_valid_manifest(self):
        """Should return the descriptor."""
        with tempfile.TemporaryDirectory() as tmpdir:
            _write(Path(tmpdir), "titan.json", {"name": "ok"})
            assert read_manifest(Path(tmpdir)).name == "ok"


class TestPackageDependencies:
    """Test package.json dependency extraction."""

    def test_merges_all_sections(self):
        """Should merge runtime, peer and dev dependencies in order."""
        with tempfile.TemporaryDirectory() as tmpdir:
            _write(
                Path(tmpdir),
                "package.json",
                {
                    "dependencies": {"b": "^1.0.0", "a": "^1.0.0"},
                    "peerDependencies": {"c": "*", "a": "*"},
                    "devDependencies": {"d": "*"},
                },
            )

            assert read_package_dependencies(Path(tmpdir)) == ["b", "a", "c", "d"]

    def test_missing_package_json(self):
        """Should return no dependencies without package.json."""
        with tempfile.TemporaryDirectory() as tmpdir:
            assert read_package_dependencies(Path(tmpdir)) == []

    def test_malformed_package_json(self):
        """Should ignore an unreadable package.json."""
        with tempfile.TemporaryDirectory() as tmpdir:
            _write(Path(tmpdir), "package.json", "{")
            assert read_package_dependencies(Path(tmpdir)) == []

    def test_ignores_non_object_sections(self):
        """Should skip sections that are not objects."""
        with tempfile.TemporaryDirectory() as tmpdir:
            _write(
                Path(tmpdir),
                "package.json",
                {"dependencies": ["x"], "devDependencies": {"y": "*"}},
            )
            assert read_package_dependencies(Path(tmpdir)) == ["y"]
