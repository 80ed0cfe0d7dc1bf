"""Resolve and refs commands.

``resolve`` selects the best version of a remote repository for a set of
constraints; ``refs`` shows every candidate in resolution order.
"""

import json

import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from vcs.cli._console import get_console
from vcs.config.settings import load_provider_overrides
from vcs.exceptions import ConstraintError, ListRemoteError, ResolutionError, SettingsError, UnknownProviderError
from vcs.providers import provider_from_url
from vcs.resolver.criteria import Criteria
from vcs.resolver.resolver import Resolver
from vcs.resolver.version import Version


def build_criteria(constraints: list[str] | None, branch: str | None) -> list[Criteria]:
    """Build one Criteria per constraint, plus one for the branch if given.

    With neither, the result is a single wildcard criteria matching any tag.
    """
    criteria = [Criteria(constraint=constraint) for constraint in constraints or []]
    if branch:
        criteria.append(Criteria(branch=branch))
    if not criteria:
        criteria.append(Criteria(constraint="*"))
    return criteria


def _describe_provider(uri: str) -> str | None:
    try:
        return str(provider_from_url(uri, load_provider_overrides()))
    except (UnknownProviderError, SettingsError):
        return None


def _version_to_dict(uri: str, version: Version) -> dict[str, str]:
    data = version.model_dump(exclude_defaults=True)
    data["uri"] = uri
    data["ref"] = version.git_ref()
    provider = _describe_provider(uri)
    if provider is not None:
        data["provider"] = provider
    return data


def do_resolve(
    uri: str,
    constraints: list[str] | None = None,
    branch: str | None = None,
    timeout: float | None = None,
    as_json: bool = False,
    resolver: Resolver | None = None,
) -> Version:
    """Resolve a version of a remote repository and print it.

    Args:
        uri: Repository URI.
        constraints: Version range constraints, all of which must hold.
        branch: Branch to pin the resolution to.
        timeout: Seconds allowed for listing the remote references.
        as_json: Print the result as JSON on stdout instead of a summary.
        resolver: Resolver to use (a fresh one by default).

    Returns:
        The resolved version.

    Raises:
        typer.Exit: If the criteria or the settings are invalid, or nothing can be resolved.
    """
    console = get_console()
    resolver = resolver or Resolver()
    criteria = build_criteria(constraints, branch)

    try:
        version = resolver.resolve(uri, *criteria, timeout=timeout)
    except ConstraintError as exc:
        console.print(f"[red]Invalid constraint: {escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc
    except (ListRemoteError, ResolutionError, SettingsError) as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(_version_to_dict(uri, version), indent=2))
        return version

    console.print(f"[green]Resolved[/green] [bold]{escape(str(version))}[/bold]")
    console.print(f"  ref: {escape(version.git_ref())}")
    provider = _describe_provider(uri)
    if provider is not None:
        console.print(f"  [dim]provider: {provider}[/dim]")
    return version


def do_refs(uri: str, timeout: float | None = None, resolver: Resolver | None = None) -> None:
    """List candidate versions of a remote repository in resolution order.

    Raises:
        typer.Exit: If the settings are invalid or the remote references cannot be listed.
    """
    console = get_console()
    resolver = resolver or Resolver()

    try:
        versions = resolver.versions(uri, timeout=timeout)
    except (ListRemoteError, SettingsError) as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    if not versions:
        console.print(f"[dim]No semver tags or branches found in '{escape(uri)}'.[/dim]")
        return

    table = Table(title=f"Versions of {escape(uri)}", box=box.ROUNDED, show_header=True)
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Commit", style="dim")

    for version in versions:
        name = version.tag or version.branch
        table.add_row(str(version.kind), escape(name), version.commit)

    console.print(table)
