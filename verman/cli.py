"""Command-line interface for verman."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from . import __version__
from .config import VermanConfig
from .errors import VerificationMismatchError, VermanError
from .manager import REMOVE_ALL, VersionManager
from .utils import console, print_shell_setup, setup_logging

logger = logging.getLogger(__name__)

Handler = Callable[[argparse.Namespace, VersionManager], int]


def get_versions(args: argparse.Namespace, manager: VersionManager) -> int:
    """Download the requested versions if not found locally."""
    manager.get(args.versions)
    return 0


def set_version(args: argparse.Namespace, manager: VersionManager) -> int:
    """Download if needed and activate a version."""
    manager.set(args.version)
    return 0


def list_versions(_args: argparse.Namespace, manager: VersionManager) -> int:
    """List installed versions."""
    output = "\n".join(manager.list())
    if output:
        print(output)
    return 0


def remove_version(args: argparse.Namespace, manager: VersionManager) -> int:
    """Remove a version, the active override, or everything."""
    if args.target == REMOVE_ALL and not args.yes and not _confirm_remove_all():
        console.print("[yellow]Cancelled[/yellow]")
        return 0
    manager.remove(args.target)
    return 0


def show_current(_args: argparse.Namespace, manager: VersionManager) -> int:
    """Print the active version."""
    current = manager.current()
    if current is None:
        console.print("[yellow]No Spin version is active[/yellow]")
        return 1
    print(current)
    return 0


def show_version(_args: argparse.Namespace, _manager: VersionManager) -> int:
    console.print(f"[yellow]verman[/] [bold]v{__version__}[/]")
    return 0


def _confirm_remove_all() -> bool:
    answer = console.input(
        'Are you sure you want to delete all Spin versions?\nType "y", "yes", or any other key to cancel: ',
    )
    return answer.strip().lower() in ("y", "yes")


def build_commands() -> dict[str, Handler]:
    """Map each subcommand name to its handler."""
    return {
        "get": get_versions,
        "set": set_version,
        "ls": list_versions,
        "rm": remove_version,
        "current": show_current,
        "version": show_version,
    }


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="verman",
        description="verman - Manage different versions of the Spin CLI",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument("--root-dir", type=str, help="Directory holding downloaded versions")
    parser.add_argument("--config-file", type=str, help="Path to configuration file")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    get_parser = subparsers.add_parser(
        "get",
        help="Download the binary for the requested versions if not found locally",
        description='Multiple versions can be downloaded at once: "verman get 2.1.0 2.2.0".',
    )
    get_parser.add_argument("versions", nargs="+", help="Versions to download")

    set_parser = subparsers.add_parser(
        "set",
        help="Set Spin to the requested version, downloading it if needed",
    )
    set_parser.add_argument("version", help="Version to activate")

    subparsers.add_parser("ls", help="List all Spin versions downloaded locally")

    rm_parser = subparsers.add_parser(
        "rm",
        help="Remove a Spin version from the local directory",
        description=(
            "Remove VERSION, 'current' to drop the active override while keeping "
            "every download, or 'all' to remove everything."
        ),
    )
    rm_parser.add_argument("target", metavar="VERSION|current|all")
    rm_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Do not ask for confirmation when removing all versions",
    )

    subparsers.add_parser("current", help="Show the active Spin version")
    subparsers.add_parser("version", help="Print version information")
    return parser


def _load_config(args: argparse.Namespace) -> VermanConfig:
    config = VermanConfig.load_from_file(args.config_file)
    # Override root directory if specified
    if args.root_dir:
        config.root_dir = Path(args.root_dir).expanduser().absolute()
    return config


def run(
    argv: Sequence[str] | None = None,
    commands: dict[str, Handler] | None = None,
) -> int:
    """Parse ``argv``, dispatch to the matching command and return the exit status."""
    commands = commands if commands is not None else build_commands()
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    handler = commands.get(args.command) if args.command else None
    if handler is None:
        parser.print_help()
        return 0 if args.command is None else 2

    try:
        manager = VersionManager(_load_config(args))
        return handler(args, manager)
    except VerificationMismatchError as e:
        console.print(f"❌ [bold red]Error: {e!s}[/bold red]", soft_wrap=True)
        print_shell_setup(e.active_dir)
        return 1
    except (VermanError, OSError) as e:
        console.print(f"❌ [bold red]Error: {e!s}[/bold red]", soft_wrap=True)
        logger.debug("Traceback", exc_info=True)
        return 1


def main() -> None:
    """Main function to parse arguments and execute commands."""
    sys.exit(run())


if __name__ == "__main__":
    main()
