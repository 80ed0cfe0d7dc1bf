import pytest
from semantic_version import Version  # type: ignore[import-untyped]

from vcs.resolver.semver import (
    SemVerError,
    VersionRange,
    constraint_prerelease_track,
    parse_constraint,
    parse_version,
    parse_version_tag,
    prerelease_track,
)


class TestSemver:
    """Tests for the vcs.resolver.semver module."""

    # --- parse_version ---

    @pytest.mark.parametrize(
        ("version_str", "expected_str"),
        [
            ("1.2.3", "1.2.3"),
            ("v1.2.3", "1.2.3"),
            ("0.0.1", "0.0.1"),
            ("10.20.30", "10.20.30"),
            ("v1.2.0-beta.1", "1.2.0-beta.1"),
        ],
    )
    def test_parse_version(self, version_str: str, expected_str: str):
        result = parse_version(version_str)
        assert str(result) == expected_str

    @pytest.mark.parametrize("invalid", ["not-a-version", "", "1.0", "abc", "v"])
    def test_parse_version_invalid(self, invalid: str):
        with pytest.raises(SemVerError, match="Invalid semver"):
            parse_version(invalid)

    # --- parse_version_tag ---

    @pytest.mark.parametrize(
        ("tag", "expected_str"),
        [
            ("1.2.3", "1.2.3"),
            ("v1.2.3", "1.2.3"),
        ],
    )
    def test_parse_version_tag_valid(self, tag: str, expected_str: str):
        result = parse_version_tag(tag)
        assert result is not None
        assert str(result) == expected_str

    @pytest.mark.parametrize("tag", ["release-20240101", "latest", "", "not-a-version", "1.0"])
    def test_parse_version_tag_non_semver(self, tag: str):
        assert parse_version_tag(tag) is None

    # --- prerelease_track ---

    @pytest.mark.parametrize(
        ("version_str", "expected"),
        [
            ("1.2.0", ""),
            ("1.2.0-beta", "beta"),
            ("1.2.0-beta.3", "beta"),
            ("1.2.0-rc.1.2", "rc"),
        ],
    )
    def test_prerelease_track(self, version_str: str, expected: str):
        assert prerelease_track(Version(version_str)) == expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1.2.0-beta.2", "beta"),
            ("v2.0.0-rc.1", "rc"),
            ("1.2-beta", "beta"),
            ("1-alpha.1", "alpha"),
            ("1.x-beta", "beta"),
            ("1.2.0", ""),
            ("1.0.0 <2.0.0-beta", ""),
            ("garbage", ""),
        ],
    )
    def test_constraint_prerelease_track(self, text: str, expected: str):
        assert constraint_prerelease_track(text) == expected

    # --- parse_constraint ---

    def test_parse_constraint(self):
        spec = parse_constraint(">=1.0.0,<2.0.0")
        assert spec.match(Version("1.5.0"))
        assert not spec.match(Version("2.0.0"))

    @pytest.mark.parametrize("invalid", ["", ">=1.0.0 <2.0.0", "1.x", "^1.2-beta"])
    def test_parse_constraint_invalid(self, invalid: str):
        with pytest.raises(SemVerError, match="Invalid semver constraint"):
            parse_constraint(invalid)


class TestVersionRange:
    """Tests for VersionRange parsing and matching."""

    @pytest.mark.parametrize(
        ("expression", "version_str", "expected"),
        [
            # comparator sets (space or comma separated)
            (">=1.0.0 <2.0.0", "1.0.0", True),
            (">=1.0.0 <2.0.0", "1.9.9", True),
            (">=1.0.0 <2.0.0", "2.0.0", False),
            (">=1.0.0, <2.0.0", "1.5.0", True),
            (">= 1.0.0", "1.0.0", True),
            (">1.0.0", "1.0.0", False),
            ("<=1.0.0", "1.0.0", True),
            ("!=1.0.0", "1.0.0", False),
            ("!=1.0.0", "1.0.1", True),
            ("=1.0.0", "1.0.0", True),
            ("1.0.0", "1.0.1", False),
            ("v1.0.0", "1.0.0", True),
            # wildcards and partial versions
            ("*", "0.0.1", True),
            ("*", "99.0.0", True),
            ("", "1.0.0", True),
            (" , ", "2.0.0", True),
            ("1.x", "1.9.0", True),
            ("1.x", "2.0.0", False),
            ("1.2", "1.2.7", True),
            ("1.2", "1.3.0", False),
            (">1.2", "1.2.9", False),
            (">1.2", "1.3.0", True),
            ("<=1.2", "1.2.9", True),
            ("<=1.2", "1.3.0", False),
            ("!=1.2.x", "1.2.5", False),
            ("!=1.2.x", "1.3.0", True),
            # tilde
            ("~1.2.3", "1.2.9", True),
            ("~1.2.3", "1.3.0", False),
            ("~1", "1.9.0", True),
            ("~>1.2", "1.2.0", True),
            # caret
            ("^1.2.3", "1.9.0", True),
            ("^1.2.3", "1.2.2", False),
            ("^1.2.3", "2.0.0", False),
            ("^0.2.3", "0.2.9", True),
            ("^0.2.3", "0.3.0", False),
            ("^0.0.3", "0.0.3", True),
            ("^0.0.3", "0.0.4", False),
            ("^0", "0.9.0", True),
            ("^0", "1.0.0", False),
            # hyphen ranges
            ("1.0.0 - 2.0.0", "2.0.0", True),
            ("1.0.0 - 2.0.0", "2.0.1", False),
            ("1.0.0 - 2", "2.9.0", True),
            ("1.0.0 - 2", "3.0.0", False),
        ],
    )
    def test_match(self, expression: str, version_str: str, expected: bool):
        assert VersionRange.parse(expression).match(Version(version_str)) == expected

    @pytest.mark.parametrize(
        ("expression", "version_str"),
        [
            (">=1.0.0", "1.5.0-alpha.1"),
            ("*", "2.0.0-beta"),
            ("^1.0.0", "1.1.0-rc.1"),
        ],
    )
    def test_release_ranges_exclude_prereleases(self, expression: str, version_str: str):
        version_range = VersionRange.parse(expression)
        assert not version_range.allows_prerelease
        assert not version_range.match(Version(version_str))

    @pytest.mark.parametrize(
        ("expression", "version_str", "expected"),
        [
            (">=1.0.0-alpha", "1.5.0-alpha.1", True),
            (">=1.0.0-alpha", "1.5.0", True),
            ("*-alpha", "2.0.0-alpha.3", True),
            ("^1.0.0-beta", "1.4.0-beta.2", True),
            ("^1.0.0-beta", "2.0.0-beta", False),
            (">=1.0.0 <2.0.0-alpha", "1.5.0-alpha.1", True),
            (">=1.0.0 <2.0.0-alpha", "2.0.0-alpha.1", False),
            # a bare pre-release names the pre-release line of its patch
            ("1.2.0-alpha", "1.2.0-alpha", True),
            ("1.2.0-alpha", "1.2.0-alpha.1", True),
            ("1.2.0-alpha", "1.2.0", False),
            ("1.2.0-alpha", "1.1.0", False),
            ("=1.2.0-alpha", "1.2.0-alpha.1", False),
            # partial versions written with a pre-release
            ("~1.2-beta", "1.2.0-beta.1", True),
            ("~1.2-beta", "1.2.9-beta", True),
            ("~1.2-beta", "1.3.0-beta", False),
            ("^1.2-beta", "1.9.0", True),
            ("^1.2-beta", "2.0.0-alpha", False),
            ("1.x-beta", "1.4.0-beta.1", True),
            ("1.x-beta", "2.0.0-beta", False),
            (">=1.2-rc", "1.2.0-rc.1", True),
            ("~1.0.0-beta", "1.0.5-beta.1", True),
            ("^0.0.3-beta", "0.0.3-beta.2", True),
            ("^0.0.3-beta", "0.0.4-beta", False),
        ],
    )
    def test_prerelease_ranges(self, expression: str, version_str: str, expected: bool):
        version_range = VersionRange.parse(expression)
        assert version_range.allows_prerelease
        assert version_range.match(Version(version_str)) == expected

    def test_upper_bound_of_caret_excludes_next_major_prereleases(self):
        """^1.2.0-beta stops before any 2.0.0 pre-release."""
        assert not VersionRange.parse("^1.2.0-beta").match(Version("2.0.0-alpha"))

    @pytest.mark.parametrize("invalid", [">>>1.0.0", "not_valid", ">=", "1.2.3.4", ">=1.0.0 <abc", "1.0.0 -", "=01.0.0-", "1.0.0 - >=2.0.0", "<=1.2.3-01"])
    def test_parse_invalid(self, invalid: str):
        with pytest.raises(SemVerError):
            VersionRange.parse(invalid)

    def test_str_and_repr_keep_expression(self):
        version_range = VersionRange.parse(">=1.0.0 <2.0.0")
        assert str(version_range) == ">=1.0.0 <2.0.0"
        assert version_range.expression == ">=1.0.0 <2.0.0"
        assert repr(version_range) == "VersionRange('>=1.0.0 <2.0.0')"

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            (">=1.0.0", ">=1.0.0-beta"),
            (">=1.0.0 ", ">=1.0.0-beta"),
            ("~1.0.0,", "~1.0.0-beta"),
            (">= 1.0.0", ">=1.0.0-beta"),
            (">=1.0.0, <2.0.0", ">=1.0.0 <2.0.0-beta"),
            ("1.0.0 - 2.0.0", "1.0.0 - 2.0.0-beta"),
            ("^1.2", "^1.2-beta"),
            ("*", "*-beta"),
            ("==1.0.0+build.5", "==1.0.0-beta"),
        ],
    )
    def test_widened_expression(self, expression: str, expected: str):
        widened = VersionRange.parse(expression).widened_expression("beta")
        assert widened == expected
        assert VersionRange.parse(widened).allows_prerelease

    def test_widened_range_admits_its_track(self):
        widened = VersionRange.parse(VersionRange.parse("~1.0.0, ").widened_expression("beta"))
        assert widened.match(Version("1.0.5-beta.1"))
        assert not widened.match(Version("1.1.0-beta.1"))
