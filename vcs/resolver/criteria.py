"""Constraints a version must satisfy to be selected."""

import re
import threading
from enum import unique

from pydantic import BaseModel, ConfigDict, PrivateAttr

from vcs._compat import StrEnum
from vcs.exceptions import ConstraintError, ConstraintInvariantError, InvalidConstraintError, UnsupportedConstraintError
from vcs.resolver.semver import SemVerError, VersionRange, constraint_prerelease_track
from vcs.resolver.version import Version

# Leading characters that are neither digits nor "v". Stripping them turns a
# constraint such as ">=1.2-beta" into something shaped like a version.
_CONSTRAINT_PREFIX = re.compile(r"^[^v\d]+")

_UNSUPPORTED_COMBINATORS = ("||", "&&")


@unique
class ParseState(StrEnum):
    UNPARSED = "unparsed"
    PARSED = "parsed"
    FAILED = "failed"


class Criteria(BaseModel):
    """A constraint that a version must satisfy to be selected.

    Either ``constraint``, a semantic versioning range such as ``>=1.0.0 <2.0.0``,
    or ``branch``, the branch the version must point to, or both. A matching
    branch always wins over the range.

    The constraint is parsed once, on first use or through :meth:`parse`, and
    the fields never change afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    constraint: str = ""
    branch: str = ""

    _state: ParseState = PrivateAttr(default=ParseState.UNPARSED)
    _error: ConstraintError | None = PrivateAttr(default=None)
    _range: VersionRange | None = PrivateAttr(default=None)
    _prerelease: str = PrivateAttr(default="")
    _widened: dict[str, VersionRange] = PrivateAttr(default_factory=dict)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def parse(self) -> None:
        """Parse the constraint. Only the first call does any work.

        Raises:
            UnsupportedConstraintError: If the constraint uses ``||`` or ``&&``.
            InvalidConstraintError: If the constraint is not a valid range. A failed
                parse raises the same error again on every later call.
        """
        with self._lock:
            if self._state == ParseState.UNPARSED:
                try:
                    self._range, self._prerelease = self._parse_constraint()
                except ConstraintError as exc:
                    self._error = exc
                    self._state = ParseState.FAILED
                else:
                    self._state = ParseState.PARSED

            if self._error is not None:
                raise self._error

    def _parse_constraint(self) -> tuple[VersionRange | None, str]:
        if not self.constraint:
            return None, ""

        if any(combinator in self.constraint for combinator in _UNSUPPORTED_COMBINATORS):
            msg = f"Complex constraints are not supported: '{self.constraint}' (use one Criteria per condition instead)"
            raise UnsupportedConstraintError(msg)

        # A constraint written against a pre-release (e.g. "^1.2.0-beta") selects that track.
        track = constraint_prerelease_track(_CONSTRAINT_PREFIX.sub("", self.constraint))

        try:
            version_range = VersionRange.parse(self.constraint)
        except SemVerError as exc:
            msg = f"Invalid version constraint '{self.constraint}': {exc}"
            raise InvalidConstraintError(msg) from exc
        return version_range, track

    @property
    def state(self) -> ParseState:
        return self._state

    @property
    def range(self) -> VersionRange | None:
        """The parsed range, parsing the constraint first if needed."""
        self.parse()
        return self._range

    @property
    def prerelease(self) -> str:
        """The pre-release track this constraint was written against, if any."""
        self.parse()
        return self._prerelease

    def range_for(self, prerelease: str) -> VersionRange | None:
        """Return the range to evaluate when resolving on a pre-release track.

        A range that excludes pre-releases is widened by appending the track to
        its last version (``>=1.0.0 <2.0.0`` becomes ``>=1.0.0 <2.0.0-beta``). The widened range is
        derived and memoised per track; ``constraint`` itself is never rewritten.

        Raises:
            ConstraintInvariantError: If the widened expression does not parse.
        """
        version_range = self.range
        if version_range is None or not prerelease or version_range.allows_prerelease:
            return version_range

        with self._lock:
            widened = self._widened.get(prerelease)
            if widened is None:
                expression = version_range.widened_expression(prerelease)
                try:
                    widened = VersionRange.parse(expression)
                except SemVerError as exc:
                    # Unreachable while the original constraint parsed: a bug, not bad input.
                    msg = f"Failed to parse widened constraint '{expression}': {exc}"
                    raise ConstraintInvariantError(msg) from exc
                self._widened[prerelease] = widened
        return widened

    def check(self, version: Version, prerelease: str = "", branch: str = "") -> bool:
        """Return True if the version satisfies this criteria.

        Args:
            version: The candidate version.
            prerelease: The pre-release track the whole resolution accepts, if any.
                Ranges that exclude pre-releases are evaluated widened to this track.
            branch: The branch the whole resolution is pinned to, if any. A criteria
                without a branch of its own cannot be compared with a branch-pinned
                resolution and is then satisfied.
        """
        if self.branch and version.branch == self.branch:
            return True

        if branch and not self.branch:
            return True

        version_range = self.range
        if version_range is None or version.semver is None:
            return False

        # Pre-release tracks must match exactly, for this criteria and the version alike.
        if self.prerelease and self.prerelease != prerelease:
            return False
        if prerelease and version.prerelease and version.prerelease != prerelease:
            return False

        effective_range = self.range_for(prerelease)
        if effective_range is None:
            return False
        return effective_range.match(version.semver)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Criteria):
            return NotImplemented
        return self.constraint == other.constraint and self.branch == other.branch

    def __hash__(self) -> int:
        return hash((self.constraint, self.branch))

    def __str__(self) -> str:
        if self.branch:
            return f"branch {self.branch}"
        return self.constraint
