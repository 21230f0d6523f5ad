"""
microgravity CLI - Inspect and bootstrap a TitanPL project.

Usage:
    microgravity -Q [root]             List discovered extensions
    microgravity -B [root]             Bootstrap and list activated namespaces
    microgravity --init-config [root]  Write a default microgravity.toml
"""

import argparse
import sys
from pathlib import Path

from microgravity.config import ConfigError, load_settings, write_default_settings
from microgravity.core.bootstrap import (
    BootstrapOptions,
    bootstrap_sync,
    get_loaded_extensions,
)
from microgravity.core.namespace import Bag, extension_names


class CLIError(Exception):
    """Base exception for CLI errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with flag-style commands."""
    parser = argparse.ArgumentParser(
        prog="microgravity",
        description="MicroGravity - TitanPL test sandbox",
        add_help=False,
    )

    ops = parser.add_mutually_exclusive_group()
    ops.add_argument(
        "-Q", "--query", action="store_true", help="List discovered extensions"
    )
    ops.add_argument(
        "-B", "--bootstrap", action="store_true", help="Bootstrap the sandbox"
    )
    ops.add_argument(
        "--init-config", action="store_true", help="Write microgravity.toml"
    )
    ops.add_argument("-h", "--help", action="store_true", help="Show help")

    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("root", nargs="?", help="Project directory (default: cwd)")

    return parser


def print_help():
    """Print help message."""
    help_text = """
microgravity - TitanPL test sandbox

Usage:
    microgravity -Q [root]             List discovered extensions
    microgravity -B [root]             Bootstrap and list activated namespaces
    microgravity --init-config [root]  Write a default microgravity.toml

Options:
    -v, --verbose                      Verbose output
    -h, --help                         Show this help
"""
    print(help_text.strip())


def _resolve_root(args: argparse.Namespace) -> Path:
    directory = Path(args.root) if args.root else Path.cwd()
    if not directory.is_dir():
        raise CLIError(f"Not a directory: {directory}")
    return directory


def query_command(args: argparse.Namespace) -> int:
    settings = load_settings(_resolve_root(args))
    extensions = get_loaded_extensions(settings.root_dir)

    if not extensions:
        print("No TitanPL extensions found")
        return 0

    for ext in extensions:
        label = " (local)" if ext.is_local else ""
        print(f"{ext.name}{label}  {ext.path}")
    return 0


def bootstrap_command(args: argparse.Namespace) -> int:
    settings = load_settings(_resolve_root(args))
    namespace = bootstrap_sync(
        BootstrapOptions(
            root_dir=settings.root_dir,
            verbose=args.verbose or settings.verbose,
        )
    )

    for name in extension_names(namespace):
        value = namespace[name]
        entries = ", ".join(sorted(value)) if isinstance(value, Bag) else repr(value)
        print(f"{name}: {entries or '-'}")
    return 0


def init_config_command(args: argparse.Namespace) -> int:
    file_path = write_default_settings(_resolve_root(args))
    print(f"Wrote {file_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the microgravity CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        if args.query:
            return query_command(args)
        if args.bootstrap:
            return bootstrap_command(args)
        if args.init_config:
            return init_config_command(args)

        print_help()
        return 0

    except (CLIError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
