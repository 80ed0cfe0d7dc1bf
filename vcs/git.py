"""Remote reference listing through the git CLI.

The git binary must be installed; which one, and how long a listing may take,
come from the settings (see :mod:`vcs.config.settings`).
"""

import logging
import os
import subprocess  # noqa: S404
from typing import NamedTuple, Protocol

from vcs.config.settings import get_git_binary, get_git_timeout
from vcs.exceptions import ListRemoteError

logger = logging.getLogger(__name__)


class RemoteRef(NamedTuple):
    """One line of ``git ls-remote`` output."""

    commit: str
    ref: str


class RemoteLister(Protocol):
    """Anything able to enumerate the references of a remote repository."""

    def __call__(self, uri: str, timeout: float | None = None) -> list[RemoteRef]: ...


def git_command(*args: str) -> list[str]:
    """Build a git command line using the configured git binary."""
    return [get_git_binary(), *args]


def git_environ() -> dict[str, str]:
    """Return the current environment with ``LC_ALL=C`` forced, so git output stays parseable."""
    env = dict(os.environ)
    env["LC_ALL"] = "C"
    return env


def parse_ls_remote_output(output: str) -> list[RemoteRef]:
    """Parse ``git ls-remote`` output into ``(commit, ref)`` pairs.

    Blank lines and lines that do not hold exactly two fields are skipped.
    """
    refs: list[RemoteRef] = []
    for line in output.splitlines():
        fields = line.split()
        if not fields:
            continue
        if len(fields) != 2:
            logger.debug("Skipping malformed ls-remote line: %r", line)
            continue
        refs.append(RemoteRef(commit=fields[0], ref=fields[1]))
    return refs


def list_remote(uri: str, timeout: float | None = None) -> list[RemoteRef]:
    """List every reference of a remote repository, as ``git ls-remote`` reports them.

    Args:
        uri: The remote repository URL (or local path).
        timeout: Seconds before the listing is abandoned. Defaults to the
            ``git-timeout`` setting.

    Returns:
        The ``(commit, ref)`` pairs, in the order git printed them.

    Raises:
        ListRemoteError: If git is missing, fails, or times out.
    """
    effective_timeout = timeout if timeout is not None else get_git_timeout()
    try:
        result = subprocess.run(  # noqa: S603
            git_command("ls-remote", uri),
            capture_output=True,
            text=True,
            check=True,
            timeout=effective_timeout,
            env=git_environ(),
        )
    except FileNotFoundError as exc:
        msg = "git is not installed or not found on PATH"
        raise ListRemoteError(msg) from exc
    except subprocess.CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        msg = f"Failed to list remote references of '{uri}': {stderr}"
        raise ListRemoteError(msg) from exc
    except subprocess.TimeoutExpired as exc:
        msg = f"Timed out after {effective_timeout:g}s listing remote references of '{uri}'"
        raise ListRemoteError(msg) from exc

    refs = parse_ls_remote_output(result.stdout)
    logger.debug("Listed %d references from '%s'", len(refs), uri)
    return refs
