# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false, reportUnknownParameterType=false, reportUnknownArgumentType=false
"""Thin typed layer over semantic_version for tag parsing and range matching.

Version parsing is delegated to ``semantic_version.Version`` and range
matching to ``semantic_version.SimpleSpec``. Range expressions are
comparator sets in the style common to git-based package
managers::

    >=1.0.0 <2.0.0      comparators joined by spaces (or commas) must all hold
    ^1.2.3  ~1.2  1.x   caret, tilde and wildcard shorthands
    1.0.0 - 2.0.0       hyphen range, both ends inclusive
    *                   any version

A range only admits pre-release versions when one of its comparators was
written with a pre-release (``>=1.0.0-beta``). Admitted pre-releases compare by
semver precedence, except that ``<2.0.0`` also excludes ``2.0.0-alpha``.
Each comparator is rewritten into SimpleSpec blocks before matching
(``~1.2-beta`` becomes ``>=1.2.0-beta,<1.3.0``).

Note: semantic_version has no type stubs, so Pyright unknown-type checks are
disabled at file level for this wrapper module.
"""

import re
from typing import NamedTuple

from semantic_version import SimpleSpec, Version  # type: ignore[import-untyped]

from vcs._compat import Self


class SemVerError(Exception):
    """Raised for semver parse failures."""


def parse_version(version_str: str) -> Version:
    """Parse a version string into a semantic_version.Version.

    Strips a leading 'v' prefix if present (common in git tags like v1.2.3).

    Args:
        version_str: The version string to parse (e.g. "1.2.3" or "v1.2.3").

    Returns:
        The parsed Version object.

    Raises:
        SemVerError: If the version string is not valid semver.
    """
    cleaned = version_str.removeprefix("v")
    try:
        return Version(cleaned)
    except ValueError as exc:
        msg = f"Invalid semver version: {version_str!r}"
        raise SemVerError(msg) from exc


def parse_version_tag(tag: str) -> Version | None:
    """Parse a git tag into a Version, returning None if not a valid semver tag.

    Handles tags like "v1.2.3" and "1.2.3", and gracefully ignores non-semver
    tags like "release-20240101", "latest" or "1.0".
    """
    try:
        return parse_version(tag)
    except SemVerError:
        return None


def prerelease_track(version: Version) -> str:
    """Return the pre-release track of a version: ``beta`` for ``1.2.0-beta.3``, ``""`` for a release."""
    if not version.prerelease:
        return ""
    return str(version.prerelease[0])


def parse_constraint(constraint_str: str) -> SimpleSpec:
    """Parse a constraint string into a semantic_version.SimpleSpec.

    Args:
        constraint_str: A comma-separated SimpleSpec expression (e.g. ">=1.0.0,<2.0.0").

    Returns:
        The parsed SimpleSpec object.

    Raises:
        SemVerError: If the constraint string is not valid.
    """
    try:
        return SimpleSpec(constraint_str)
    except ValueError as exc:
        msg = f"Invalid semver constraint: {constraint_str!r}"
        raise SemVerError(msg) from exc


def constraint_prerelease_track(text: str) -> str:
    """Return the pre-release track of a single, possibly partial, version.

    ``1.2.0-beta.2`` and ``1.2-beta`` both give ``beta``. Anything that is not
    one version written with a pre-release gives ``""``.
    """
    match = _PARTIAL_VERSION.match(text)
    if match is None or not match.group("prerelease"):
        return ""
    return match.group("prerelease").split(".")[0]


# ── Range parsing ───────────────────────────────────────────────────

# Operators accepted in ranges, longest first, mapped to their SimpleSpec spelling.
_OPERATORS = {
    "!=": "!=",
    "==": "==",
    ">=": ">=",
    "=>": ">=",
    "<=": "<=",
    "=<": "<=",
    "~>": "~",
    "=": "==",
    ">": ">",
    "<": "<",
    "~": "~",
    "^": "^",
}

_PARTIAL_VERSION = re.compile(
    r"^v?(?P<major>\d+|[xX*])(?:\.(?P<minor>\d+|[xX*]))?(?:\.(?P<patch>\d+|[xX*]))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

_SPACED_OPERATOR = re.compile(r"(!=|==|>=|=>|<=|=<|~>|[=<>~^])\s+")
_SEPARATORS = re.compile(r"[\s,]+")

_HYPHEN = "-"

# Matches nothing: natural pre-release policy keeps 0.0.0-x out of "<0.0.0" too.
_NOTHING = "<0.0.0"
_ANYTHING = ">=0.0.0"


class _Comparator(NamedTuple):
    """One ``<operator><version>`` token. ``None`` components are wildcards."""

    operator: str
    major: int | None
    minor: int | None
    patch: int | None
    prerelease: str

    @property
    def is_full(self) -> bool:
        return self.patch is not None

    def release(self) -> str:
        """The version without its wildcards (``1.2`` for ``1.2.x``), the way SimpleSpec writes partials."""
        return ".".join(str(part) for part in (self.major, self.minor, self.patch) if part is not None)

    def floor(self) -> str:
        """The lowest version covered: wildcards zero-filled, pre-release kept."""
        text = f"{self.major or 0}.{self.minor or 0}.{self.patch or 0}"
        return f"{text}-{self.prerelease}" if self.prerelease else text


def _split_operator(token: str) -> tuple[str, str]:
    for written, operator in _OPERATORS.items():
        if token.startswith(written):
            return operator, token[len(written) :]
    return "", token


def _parse_comparator(token: str) -> _Comparator:
    operator, text = _split_operator(token)
    if not text:
        msg = f"operator '{token}' without a version"
        raise SemVerError(msg)
    match = _PARTIAL_VERSION.match(text)
    if match is None:
        msg = f"invalid version {text!r}"
        raise SemVerError(msg)

    components: list[int | None] = []
    for name in ("major", "minor", "patch"):
        raw = match.group(name)
        # Everything after the first wildcard is a wildcard too: 1.x.3 is 1.x.
        if raw is None or raw in ("x", "X", "*") or (components and components[-1] is None):
            components.append(None)
        else:
            components.append(int(raw))
    return _Comparator(operator, components[0], components[1], components[2], match.group("prerelease") or "")


def _caret_ceiling(comparator: _Comparator) -> str:
    major = comparator.major or 0
    if major > 0 or comparator.minor is None:
        return f"{major + 1}.0.0"
    if comparator.minor > 0 or comparator.patch is None:
        return f"0.{comparator.minor + 1}.0"
    return f"0.0.{comparator.patch + 1}"


def _tilde_ceiling(comparator: _Comparator) -> str:
    major = comparator.major or 0
    if comparator.minor is None:
        return f"{major + 1}.0.0"
    return f"{major}.{comparator.minor + 1}.0"


def _comparator_blocks(comparator: _Comparator) -> list[str]:
    """Translate one comparator into SimpleSpec blocks that must all hold.

    SimpleSpec handles plain and partial releases itself. Pre-release targets
    and zero-major caret partials get explicit bounds, because SimpleSpec
    rejects partial pre-releases and caps ``^1.0.0-beta`` at ``1.0.0``.
    """
    operator, floor = comparator.operator, comparator.floor()
    if comparator.major is None:
        return [_NOTHING] if operator in ("!=", ">", "<") else [f">={floor}"]

    if operator == "^" and (comparator.prerelease or (comparator.major == 0 and not comparator.is_full)):
        return [f">={floor}", f"<{_caret_ceiling(comparator)}"]
    if operator == "~" and comparator.prerelease:
        return [f">={floor}", f"<{_tilde_ceiling(comparator)}"]
    if not comparator.prerelease:
        return [f"{operator}{comparator.release()}"]

    if operator in ("", "==") and not comparator.is_full:
        return [f">={floor}", f"<{_tilde_ceiling(comparator)}"]
    if not operator:
        # A bare pre-release is the pre-release line of its patch. SimpleSpec reads
        # "<1.2.0-" as below 1.2.0 with its pre-releases included.
        return [f">={floor}", f"<{comparator.release()}-"]
    return [f"{operator}{floor}"]


def _hyphen_blocks(start: _Comparator, end: _Comparator) -> list[str]:
    if start.operator or end.operator:
        msg = "hyphen range bounds take no operator"
        raise SemVerError(msg)
    blocks: list[str] = []
    if start.major is not None:
        blocks.append(f">={start.floor()}")
    if end.major is not None:
        blocks.append(f"<={end.floor() if end.prerelease else end.release()}")
    return blocks or [_ANYTHING]


class VersionRange:
    """A parsed range expression, matched by a ``semantic_version.SimpleSpec``.

    Use :meth:`parse` to build one. Instances are immutable and safe to share
    between threads.
    """

    __slots__ = ("_allows_prerelease", "_expression", "_spec", "_tokens")

    def __init__(self, expression: str, tokens: tuple[str, ...], spec: SimpleSpec, allows_prerelease: bool) -> None:
        self._expression = expression
        self._tokens = tokens
        self._spec = spec
        self._allows_prerelease = allows_prerelease

    @classmethod
    def parse(cls, expression: str) -> Self:
        """Parse a range expression.

        Raises:
            SemVerError: If the expression is not a valid range.
        """
        tokens = [token for token in _SEPARATORS.split(_SPACED_OPERATOR.sub(r"\1", expression.strip())) if token]
        if not tokens:
            tokens = ["*"]

        blocks: list[str] = []
        allows_prerelease = False
        index = 0
        try:
            while index < len(tokens):
                if index + 2 < len(tokens) and tokens[index + 1] == _HYPHEN:
                    comparators = (_parse_comparator(tokens[index]), _parse_comparator(tokens[index + 2]))
                    blocks.extend(_hyphen_blocks(*comparators))
                    index += 3
                else:
                    comparators = (_parse_comparator(tokens[index]),)
                    blocks.extend(_comparator_blocks(comparators[0]))
                    index += 1
                allows_prerelease = allows_prerelease or any(comparator.prerelease for comparator in comparators)
            spec = parse_constraint(",".join(blocks))
        except SemVerError as exc:
            msg = f"Invalid semver constraint: {expression!r} ({exc})"
            raise SemVerError(msg) from exc
        return cls(expression, tuple(tokens), spec, allows_prerelease)

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def allows_prerelease(self) -> bool:
        """Whether any comparator was written with a pre-release."""
        return self._allows_prerelease

    def widened_expression(self, prerelease: str) -> str:
        """Return the expression with ``-<prerelease>`` appended to its last version.

        Separators are normalised first, so ``">= 1.0.0, "`` widened to ``beta``
        is ``">=1.0.0-beta"``. Build metadata on the last version is dropped.
        """
        *head, last = self._tokens
        return " ".join([*head, f"{last.split('+', 1)[0]}-{prerelease}"])

    def match(self, version: Version) -> bool:
        """Return True if the version lies in the range.

        Pre-release versions only match ranges that allow them.
        """
        if version.prerelease and not self._allows_prerelease:
            return False
        return bool(self._spec.match(version))

    def __str__(self) -> str:
        return self._expression

    def __repr__(self) -> str:
        return f"VersionRange({self._expression!r})"
