"""CLI entry point for rbxlayout.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the appropriate submodules or runs specific tasks.
"""

import subprocess
import sys

from dotenv import load_dotenv

from rbxlayout.config import (
    EnvVar,
    get_environment,
    get_environment_info,
    list_environment_variables,
)
from rbxlayout.core import get_logger, setup_logging
from rbxlayout.core.log import parse_level
from rbxlayout.exporter.cli import handle_export_command

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Env Command
# =============================================================================


def cmd_env(argv: list[str]) -> int:
    """Show configuration variables and their resolved values.

    Usage:
        python . env            # All variables
        python . env export     # Only one category
    """
    category = argv[0] if argv else None
    variables = list_environment_variables(category)
    if not variables:
        logger.error(f"Unknown category: {category}")
        return 1

    print("rbxlayout configuration")
    print("=" * 40)
    for var in variables:
        info = get_environment_info(var)
        value = get_environment(var)
        print(f"  {info.name} = {value!r}  [{info.category}]")
        print(f"      {info.description}")
    return 0


# =============================================================================
# Dev Commands
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments and test tier options.

    Usage:
        python . dev test                # Run all tests
        python . dev test --unit         # Run only unit tests (no I/O)
        python . dev test --integration  # Run tests touching files or stdio
        python . dev test -k "export"    # Run tests matching pattern

    Test Tiers:
        unit        - Fast tests with no I/O
        integration - Tests requiring the file system or CLI plumbing
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


def handle_dev_command(argv: list[str]) -> int:
    """Handle development workflow commands.

    Usage:
        python . dev test [args]       # Run pytest
    """
    if not argv:
        print("Development workflow commands")
        print("\nUsage: python . dev {command} [args]")
        print("\nCommands:")
        print("  test       Run pytest with tier options")
        print("\nExamples:")
        print("  python . dev test --unit           # Fast unit tests")
        print("  python . dev test --integration    # CLI and file tests")
        return 1

    subcommand = argv[0]
    subargs = argv[1:]

    dev_commands = {
        "test": lambda: cmd_test(subargs),
    }

    if subcommand in dev_commands:
        return dev_commands[subcommand]()

    logger.error(f"Unknown dev command: {subcommand}")
    return handle_dev_command([])


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . {command} [args]")
    print("\n=== Export ===")
    print("  export     Export a layout JSON file as a Roblox Luau script")
    print("\n=== Configuration ===")
    print("  env        Show configuration variables")
    print("\n=== Development ===")
    print("  dev        Development workflows (test)")
    print("\nExamples:")
    print("  python . export layout.json                 # Script to stdout")
    print("  python . export layout.json -o ui/          # ui/Generated_UI.lua")
    print("  python . export layout.json --safe-text     # Robust text quoting")
    print("  python . export layout.json --strict        # Fail on warnings")
    print("  python . env export                         # Export settings")
    print("  python . dev test --unit                    # Run unit tests")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "export": lambda: handle_export_command(rest_args),
        "env": lambda: cmd_env(rest_args),
        "dev": lambda: handle_dev_command(rest_args),
    }

    if command in commands:
        setup_logging(level=parse_level(get_environment(EnvVar.RBXLAYOUT_LOG_LEVEL)))
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
