"""Hosting provider detection for repository URLs."""

from enum import unique

from pydantic import BaseModel, ConfigDict

from vcs._compat import StrEnum
from vcs.exceptions import UnknownProviderError


@unique
class Provider(StrEnum):
    GITHUB = "github"
    GITLAB = "gitlab"


class ProviderOverride(BaseModel):
    """Forces every URL starting with ``url_base`` onto ``provider``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url_base: str
    provider: Provider


def provider_from_url(url: str, overrides: list[ProviderOverride] | None = None) -> Provider:
    """Determine the hosting provider of a repository URL.

    Overrides are checked first, in order. Otherwise well-known host names
    decide: ``github.com`` is GitHub, ``gitlab.com`` and any ``gitlab.*`` host
    are GitLab.

    Args:
        url: The repository URL.
        overrides: Explicit URL prefix to provider mappings.

    Returns:
        The detected provider.

    Raises:
        UnknownProviderError: If the URL matches no override and no known host.
    """
    for override in overrides or []:
        if url.startswith(override.url_base):
            return override.provider

    if "github.com" in url:
        return Provider.GITHUB
    if "gitlab.com" in url or "gitlab." in url:
        return Provider.GITLAB

    msg = f"Unknown VCS provider for URL: {url}"
    raise UnknownProviderError(msg)
