"""Config commands for managing vcs settings.

Provides set, get, and list operations for the settings stored in
``~/.vcs/config.toml``.
"""

import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from vcs.cli._console import get_console
from vcs.config.settings import (
    VALID_KEYS,
    SettingSource,
    get_setting_value,
    list_settings,
    resolve_key,
    set_setting_value,
)
from vcs.exceptions import SettingsError

_SOURCE_STYLES: dict[SettingSource, str] = {
    SettingSource.ENV: "yellow",
    SettingSource.FILE: "green",
    SettingSource.DEFAULT: "dim",
}


def _resolve_key_or_exit(key: str) -> str:
    internal_key = resolve_key(key)
    if internal_key is None:
        console = get_console()
        console.print(f"[red]Unknown config key: '{escape(key)}'[/red]")
        console.print(f"[dim]Valid keys: {', '.join(VALID_KEYS)}[/dim]")
        raise typer.Exit(code=1)
    return internal_key


def do_config_set(key: str, value: str) -> None:
    """Set a setting value.

    Args:
        key: The CLI key name (e.g. "git-timeout").
        value: The value to store.

    Raises:
        typer.Exit: If the key is unknown or the value invalid.
    """
    console = get_console()
    internal_key = _resolve_key_or_exit(key)

    try:
        set_setting_value(internal_key, value)
    except SettingsError as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Set '{escape(key)}' = '{escape(value)}'[/green]")


def do_config_get(key: str) -> None:
    """Get a setting value and display it with its source.

    Args:
        key: The CLI key name (e.g. "git-timeout").
    """
    console = get_console()
    internal_key = _resolve_key_or_exit(key)

    try:
        entry = get_setting_value(internal_key)
    except SettingsError as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(f"[bold]{escape(key)}[/bold] = {escape(entry.value)}  [dim](source: {entry.source})[/dim]")


def do_config_list() -> None:
    """List all setting values with their sources."""
    console = get_console()

    try:
        entries = list_settings()
    except SettingsError as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    table = Table(title="vcs configuration", box=box.ROUNDED, show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Source")

    for entry in entries:
        style = _SOURCE_STYLES[entry.source]
        table.add_row(escape(entry.cli_key), escape(entry.value), f"[{style}]{entry.source}[/{style}]")

    console.print(table)
