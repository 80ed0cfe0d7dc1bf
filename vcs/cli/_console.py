import logging

from rich.console import Console

from vcs.config.settings import get_log_level
from vcs.exceptions import SettingsError

_console: Console | None = None

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def get_console() -> Console:
    """Return the shared Rich console instance for CLI output."""
    global _console  # noqa: PLW0603
    if _console is None:
        _console = Console(stderr=True)
    return _console


def configure_logging(verbose: bool = False) -> None:
    """Configure the root logger for a CLI run.

    ``--verbose`` forces DEBUG; otherwise the ``log-level`` setting applies. An
    invalid setting falls back to WARNING and is reported on the console.
    """
    if verbose:
        level = "DEBUG"
    else:
        try:
            level = get_log_level()
        except SettingsError as exc:
            get_console().print(f"[yellow]{exc.message}, using WARNING[/yellow]")
            level = "WARNING"
    logging.basicConfig(level=level, format=_LOG_FORMAT, force=True)
