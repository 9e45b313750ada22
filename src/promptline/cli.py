"""
Command-line interface for inspecting how promptline sees the terminal.
"""

from __future__ import annotations

import argparse
import sys

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from promptline.config import DEFAULT_CONFIG_PATH, Settings
from promptline.errors import ConfigError
from promptline.logging import setup_logging
from promptline.tui import environment
from promptline.tui.keybindings import Action
from promptline.tui.reader import KeyDecoder

console = Console()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="promptline terminal diagnostics",
        prog="promptline",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help=f"Settings file (default: {DEFAULT_CONFIG_PATH} if present)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("env", help="Show detected terminal capabilities")

    config_parser = subparsers.add_parser("config", help="Show effective settings")
    config_parser.add_argument(
        "--yaml",
        action="store_true",
        help="Print settings as YAML",
    )

    subparsers.add_parser("keys", help="Echo decoded keys until Escape or Ctrl-C")

    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging("DEBUG")
    else:
        setup_logging("WARNING")

    try:
        settings = Settings.load(args.config)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    if args.command == "env":
        cmd_env(settings)
    elif args.command == "config":
        cmd_config(settings, as_yaml=args.yaml)
    elif args.command == "keys":
        cmd_keys(settings)
    else:
        parser.print_help()


def _yes_no(flag: bool) -> str:
    return "[green]yes[/green]" if flag else "[dim]no[/dim]"


def cmd_env(settings: Settings) -> None:
    """Print what was detected about stdin/stdout and the environment."""
    table = Table(title="Terminal")
    table.add_column("Check", style="cyan")
    table.add_column("Result")

    table.add_row("stdin is a TTY", _yes_no(environment.is_tty(sys.stdin)))
    table.add_row("stdout is a TTY", _yes_no(environment.is_tty(sys.stdout)))
    table.add_row("CI environment", _yes_no(environment.is_ci()))
    table.add_row("Dumb terminal", _yes_no(environment.is_dumb_terminal()))
    table.add_row("Windows", _yes_no(environment.is_windows()))
    table.add_row("Size", f"{environment.columns()}x{environment.rows()}")
    table.add_row("Colors", _yes_no(settings.use_color()))
    table.add_row("Unicode glyphs", _yes_no(settings.use_unicode()))
    table.add_row("CI mode active", _yes_no(settings.ci_active()))

    console.print(table)


def cmd_config(settings: Settings, as_yaml: bool = False) -> None:
    """Print the effective settings and the merged alias table."""
    if as_yaml:
        console.print(yaml.safe_dump(settings.to_dict(), sort_keys=False), end="")
        return

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for name, value in settings.to_dict().items():
        if name != "aliases":
            table.add_row(name, str(value))
    console.print(table)

    aliases = Table(title="Key aliases")
    aliases.add_column("Key", style="cyan")
    aliases.add_column("Action")
    for key, action in sorted(settings.keybindings.aliases.items(), key=lambda kv: kv[1].value):
        aliases.add_row(repr(key) if not key.isprintable() else key, action.value)
    console.print(aliases)


def cmd_keys(settings: Settings) -> None:
    """Read keys and show how they decode and resolve."""
    if not environment.is_tty(sys.stdin):
        console.print("[yellow]stdin is not a terminal[/yellow]")
        sys.exit(1)

    decoder = KeyDecoder(sys.stdin, escape_timeout=settings.escape_timeout)
    keybindings = settings.keybindings
    console.print("[dim]Press keys; Escape or Ctrl-C quits.[/dim]")
    while True:
        try:
            key = decoder.read()
        except EOFError:
            break
        action = keybindings.resolve(key)
        console.print(
            f"{key.name:<14} raw={key.raw!r:<14} "
            f"action={action.value if action else '-'}",
            markup=False,
            highlight=False,
        )
        if action is Action.CANCEL:
            break


if __name__ == "__main__":
    main()
