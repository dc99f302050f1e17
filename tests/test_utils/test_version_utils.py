from __future__ import annotations

import pytest

from semresolver.exceptions import InvalidRangeError, InvalidVersionError
from semresolver.utils.version_utils import (
    is_lower,
    max_satisfying,
    parse_range,
    parse_version,
    satisfies,
    sort_versions,
)


@pytest.mark.unit
class TestParsing:
    """Tests for parse_version and parse_range."""

    def test_parse_version(self) -> None:
        """Strict semver strings parse."""
        version = parse_version("1.10.3")

        assert (version.major, version.minor, version.patch) == (1, 10, 3)

    def test_parse_version_is_memoized(self) -> None:
        """The same string yields the same parsed object."""
        assert parse_version("0.1.0") is parse_version("0.1.0")

    @pytest.mark.parametrize("value", ["1.0", "latest", "", "1.0.0.0"])
    def test_invalid_version(self, value: str) -> None:
        """Non-semver strings raise InvalidVersionError."""
        with pytest.raises(InvalidVersionError) as exc_info:
            parse_version(value)

        assert exc_info.value.message == f"Invalid version: {value}"

    def test_invalid_range(self) -> None:
        """Garbage ranges raise InvalidRangeError."""
        with pytest.raises(InvalidRangeError) as exc_info:
            parse_range("^^1")

        assert exc_info.value.range == "^^1"


@pytest.mark.unit
class TestSortVersions:
    """Tests for sort_versions."""

    def test_semver_precedence_not_text(self) -> None:
        """Numeric components sort numerically."""
        assert sort_versions(["0.9.0", "0.10.0", "0.2.0"]) == ["0.10.0", "0.9.0", "0.2.0"]

    def test_ascending(self) -> None:
        """``descending=False`` reverses the order."""
        assert sort_versions(["1.0.0", "0.1.1", "0.1.0"], descending=False) == [
            "0.1.0",
            "0.1.1",
            "1.0.0",
        ]

    def test_prerelease_below_release(self) -> None:
        """Pre-releases have lower precedence than their release."""
        assert sort_versions(["1.0.0-alpha", "1.0.0"]) == ["1.0.0", "1.0.0-alpha"]

    def test_duplicates_removed(self) -> None:
        """Repeated entries appear once."""
        assert sort_versions(["0.1.0", "0.1.0"]) == ["0.1.0"]

    def test_empty(self) -> None:
        """Empty input gives an empty list."""
        assert sort_versions([]) == []


@pytest.mark.unit
class TestSatisfies:
    """Tests for satisfies with npm-style ranges."""

    @pytest.mark.parametrize(
        "version, expression, expected",
        [
            ("0.1.1", "^0.1.0", True),
            ("0.2.0", "^0.1.0", False),
            ("0.1.0", "0.1.0", True),
            ("0.1.1", "0.1.0", False),
            ("0.1.0", "<0.1.1", True),
            ("0.1.1", "<0.1.1", False),
            ("1.2.9", "~1.2.0", True),
            ("1.3.0", "~1.2.0", False),
            ("1.5.0", ">=1.0.0 <2.0.0", True),
            ("7.0.0", "*", True),
        ],
    )
    def test_satisfies(self, version: str, expression: str, expected: bool) -> None:
        """Ranges follow npm semantics."""
        assert satisfies(version, expression) is expected


@pytest.mark.unit
class TestMaxSatisfying:
    """Tests for max_satisfying."""

    def test_first_match_of_descending_list(self) -> None:
        """The greatest matching candidate is returned."""
        versions = sort_versions(["0.1.0", "0.1.1", "0.2.0"])

        assert max_satisfying(versions, "^0.1.0") == "0.1.1"

    def test_no_match(self) -> None:
        """None is returned when nothing matches."""
        assert max_satisfying(["0.1.0"], "^0.2.0") is None

    def test_backtracked_range(self) -> None:
        """``<version`` excludes the version itself."""
        assert max_satisfying(["0.1.1", "0.1.0"], "<0.1.1") == "0.1.0"


@pytest.mark.unit
class TestIsLower:
    """Tests for is_lower."""

    def test_multi_digit(self) -> None:
        """0.9.0 precedes 0.10.0."""
        assert is_lower("0.9.0", "0.10.0")
        assert not is_lower("0.10.0", "0.9.0")

    def test_equal_is_not_lower(self) -> None:
        """Equal versions are not lower than each other."""
        assert not is_lower("0.1.0", "0.1.0")
