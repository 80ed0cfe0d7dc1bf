# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false
"""A single version discovered in (or injected into) a git repository."""

from enum import unique
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr
from semantic_version import Version as SemVer  # type: ignore[import-untyped]

from vcs._compat import StrEnum
from vcs.resolver.semver import parse_version_tag, prerelease_track

TAG_REF_PREFIX = "refs/tags/"
BRANCH_REF_PREFIX = "refs/heads/"
DEREFERENCED_TAG_SUFFIX = "^{}"

# Returned by Version.git_ref() for virtual versions, which have no git counterpart.
INVALID_GIT_REF = "NOT_A_VALID_GIT_VERSION"


@unique
class VersionKind(StrEnum):
    VIRTUAL = "virtual"
    TAG = "tag"
    BRANCH = "branch"
    COMMIT = "commit"


class Version(BaseModel):
    """A version found in a git repository.

    Versions are only discovered when a tag or branch points to a commit;
    bare commits are never discovered automatically, they can only be built
    by hand. Tags must be valid semantic versions to ever be discovered.

    Equality only considers ``commit``, ``tag`` and ``branch``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    commit: str = ""
    tag: str = ""
    branch: str = ""

    # Marks a version that does not relate to anything in a git repository,
    # e.g. one injected for testing. Never set by the resolver.
    virtual: str = ""

    _semver: SemVer | None = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        if self.tag:
            self._semver = parse_version_tag(self.tag)

    @classmethod
    def from_ref(cls, commit: str, ref: str) -> "Version | None":
        """Interpret one ``(commit, ref)`` pair of a remote listing.

        Returns:
            A tag version for ``refs/tags/<semver>``, a branch version for
            ``refs/heads/<name>``, or None for dereferenced annotated tags
            (``^{}``), non-semver tags and any other kind of ref.
        """
        if ref.startswith(TAG_REF_PREFIX):
            if ref.endswith(DEREFERENCED_TAG_SUFFIX):
                return None
            version = cls(commit=commit, tag=ref.removeprefix(TAG_REF_PREFIX))
            if version.semver is None:
                return None
            return version
        if ref.startswith(BRANCH_REF_PREFIX):
            return cls(commit=commit, branch=ref.removeprefix(BRANCH_REF_PREFIX))
        return None

    @property
    def semver(self) -> SemVer | None:
        """The parsed tag, present only when ``tag`` is a valid semantic version."""
        return self._semver

    @property
    def prerelease(self) -> str:
        """Pre-release track of the tag (``beta`` for ``v1.0.0-beta.2``), empty otherwise."""
        if self._semver is None:
            return ""
        return prerelease_track(self._semver)

    @property
    def kind(self) -> VersionKind:
        if self.virtual:
            return VersionKind.VIRTUAL
        if self.tag:
            return VersionKind.TAG
        if self.branch:
            return VersionKind.BRANCH
        return VersionKind.COMMIT

    def git_ref(self) -> str:
        """Return a git reference that can be used to check out this version.

        Virtual versions cannot be checked out and yield :data:`INVALID_GIT_REF`.
        """
        match self.kind:
            case VersionKind.VIRTUAL:
                return INVALID_GIT_REF
            case VersionKind.TAG:
                return TAG_REF_PREFIX + self.tag
            case VersionKind.BRANCH:
                return BRANCH_REF_PREFIX + self.branch
            case VersionKind.COMMIT:
                return self.commit

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.commit == other.commit and self.tag == other.tag and self.branch == other.branch

    def __hash__(self) -> int:
        return hash((self.commit, self.tag, self.branch))

    def __str__(self) -> str:
        match self.kind:
            case VersionKind.VIRTUAL:
                return f"virtual (source: {self.virtual})"
            case VersionKind.TAG:
                return f"tag {self.tag} ({self.commit})"
            case VersionKind.BRANCH:
                return f"branch {self.branch} ({self.commit})"
            case VersionKind.COMMIT:
                return self.commit
