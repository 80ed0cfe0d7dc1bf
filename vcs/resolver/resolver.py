"""Resolve versions of a remote repository from a set of criteria.

Candidates are the semver tags and the branches of the repository, as reported
by a reference listing (``git ls-remote`` by default). Among them the newest tag
satisfying every criteria wins; branches are only considered after all tags.
"""

import functools
import logging
import threading
from collections.abc import Iterable

from vcs.exceptions import (
    ConflictingBranchError,
    ConflictingPrereleaseError,
    NoCriteriaError,
    UnableToSatisfyError,
)
from vcs.git import RemoteLister, RemoteRef, list_remote
from vcs.resolver.criteria import Criteria
from vcs.resolver.version import Version

logger = logging.getLogger(__name__)


def _compare_versions(left: Version, right: Version) -> int:
    """Order tags newest first, then everything else by branch name."""
    if left.semver is not None and right.semver is not None:
        if left.semver > right.semver:
            return -1
        if left.semver < right.semver:
            return 1
        return 0

    if left.semver is not None:
        return -1
    if right.semver is not None:
        return 1

    # Both are branches: sort by name only for predictability.
    if left.branch < right.branch:
        return -1
    if left.branch > right.branch:
        return 1
    return 0


def sort_versions(versions: Iterable[Version]) -> list[Version]:
    """Sort versions in resolution order.

    Tags come first, newest semantic version first. Branches follow, sorted by
    name. The sort is stable, so equal versions keep their listing order.
    """
    return sorted(versions, key=functools.cmp_to_key(_compare_versions))


def versions_from_refs(refs: Iterable[RemoteRef]) -> list[Version]:
    """Turn a reference listing into candidate versions, dropping refs that cannot be candidates."""
    versions: list[Version] = []
    for commit, ref in refs:
        version = Version.from_ref(commit, ref)
        if version is None:
            logger.debug("Ignoring ref '%s' (%s)", ref, commit)
            continue
        versions.append(version)
    return versions


class Resolver:
    """Resolves versions of remote repositories based on criteria.

    The versions of a URI are fetched once and cached for the lifetime of the
    resolver. A single lock covers checking the cache, fetching and storing, so
    concurrent resolutions never fetch the same URI twice; fetches of different
    URIs are serialized as well.
    """

    def __init__(self, lister: RemoteLister = list_remote) -> None:
        self._lister = lister
        self._versions: dict[str, tuple[Version, ...]] = {}
        self._versions_lock = threading.Lock()

    def versions(self, uri: str, timeout: float | None = None) -> tuple[Version, ...]:
        """Return the candidate versions of a URI in resolution order, fetching them if necessary.

        Args:
            uri: The repository URI.
            timeout: Forwarded to the reference lister when a fetch is needed.

        Raises:
            ListRemoteError: If listing the remote references fails. Nothing is cached then.
        """
        with self._versions_lock:
            cached = self._versions.get(uri)
            if cached is not None:
                logger.debug("Using %d cached versions for '%s'", len(cached), uri)
                return cached

            refs = self._lister(uri, timeout=timeout)
            versions = tuple(sort_versions(versions_from_refs(refs)))
            self._versions[uri] = versions
            logger.debug("Fetched %d versions (%d refs) for '%s'", len(versions), len(refs), uri)
            return versions

    def resolve(self, uri: str, *criteria: Criteria, timeout: float | None = None) -> Version:
        """Return the latest version of ``uri`` satisfying every criteria.

        Args:
            uri: The repository URI.
            *criteria: At least one criteria; a version must satisfy all of them.
            timeout: Forwarded to the reference lister when a fetch is needed.

        Returns:
            The best matching version.

        Raises:
            NoCriteriaError: If no criteria were provided.
            ConflictingBranchError: If criteria pin different branches.
            ConflictingPrereleaseError: If criteria ask for different pre-release tracks.
            UnsupportedConstraintError: If a constraint uses ``||`` or ``&&``.
            InvalidConstraintError: If a constraint does not parse.
            ListRemoteError: If listing the remote references fails.
            UnableToSatisfyError: If no version satisfies every criteria.
        """
        if not criteria:
            msg = "No criteria provided"
            raise NoCriteriaError(msg)

        # Conflicts are detected before fetching anything.
        prerelease = ""
        branch = ""
        for criterion in criteria:
            if criterion.branch:
                if branch and branch != criterion.branch:
                    msg = f"Unable to satisfy multiple branch constraints ({branch}, {criterion.branch})"
                    raise ConflictingBranchError(msg)
                branch = criterion.branch

            criterion.parse()

            if criterion.range is not None and criterion.prerelease:
                if prerelease and prerelease != criterion.prerelease:
                    msg = f"Unable to satisfy multiple pre-release constraints ({prerelease}, {criterion.prerelease})"
                    raise ConflictingPrereleaseError(msg)
                prerelease = criterion.prerelease

        for version in self.versions(uri, timeout=timeout):
            if all(criterion.check(version, prerelease, branch) for criterion in criteria):
                logger.debug("Resolved '%s' to %s", uri, version)
                return version

        criteria_strs = tuple(str(criterion) for criterion in criteria)
        msg = f"No versions of '{uri}' found that satisfy criteria: {', '.join(criteria_strs)}"
        raise UnableToSatisfyError(msg, uri=uri, criteria=criteria_strs)
