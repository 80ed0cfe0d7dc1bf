"""vcs CLI.

Resolves versions of remote git repositories from semver constraints and
manages the vcs settings.
"""

from typing import Annotated

import typer

from vcs.cli._console import configure_logging
from vcs.cli.commands.config_cmd import do_config_get, do_config_list, do_config_set
from vcs.cli.commands.resolve_cmd import do_refs, do_resolve

app = typer.Typer(
    name="vcs",
    no_args_is_help=True,
    help="vcs CLI: resolve tags and branches of remote git repositories.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before any command runs."""
    configure_logging(verbose=verbose)


# ── Top-level commands ───────────────────────────────────────────────


@app.command("resolve", help="Resolve the best tag or branch of a repository for the given constraints")
def resolve_cmd(
    uri: Annotated[
        str,
        typer.Argument(help="Repository URI (e.g. 'https://github.com/org/repo')"),
    ],
    constraints: Annotated[
        list[str] | None,
        typer.Option("--constraint", "-c", help="Version constraint, repeatable (e.g. '>=1.0.0 <2.0.0')"),
    ] = None,
    branch: Annotated[
        str | None,
        typer.Option("--branch", "-b", help="Branch the version must point to"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Seconds allowed for listing remote references"),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the resolved version as JSON"),
    ] = False,
) -> None:
    """Resolve a version."""
    do_resolve(uri=uri, constraints=constraints, branch=branch, timeout=timeout, as_json=as_json)


@app.command("refs", help="List semver tags and branches of a repository in resolution order")
def refs_cmd(
    uri: Annotated[
        str,
        typer.Argument(help="Repository URI (e.g. 'https://github.com/org/repo')"),
    ],
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Seconds allowed for listing remote references"),
    ] = None,
) -> None:
    """List candidate versions."""
    do_refs(uri=uri, timeout=timeout)


# ── Config subcommand group ──────────────────────────────────────────
config_app = typer.Typer(
    name="config",
    no_args_is_help=True,
    help="Manage vcs settings.",
)
app.add_typer(config_app, name="config")


@config_app.command("set", help="Set a configuration value")
def config_set_cmd(
    key: Annotated[
        str,
        typer.Argument(help="Configuration key (e.g. 'git-timeout', 'git-binary', 'log-level')"),
    ],
    value: Annotated[
        str,
        typer.Argument(help="Value to set"),
    ],
) -> None:
    """Set a setting value."""
    do_config_set(key=key, value=value)


@config_app.command("get", help="Get a configuration value")
def config_get_cmd(
    key: Annotated[
        str,
        typer.Argument(help="Configuration key (e.g. 'git-timeout', 'git-binary', 'log-level')"),
    ],
) -> None:
    """Get a setting value and its source."""
    do_config_get(key=key)


@config_app.command("list", help="List all configuration values")
def config_list_cmd() -> None:
    """List all setting values with their sources."""
    do_config_list()
