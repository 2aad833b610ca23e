"""Unit tests for npm range helpers."""

import pytest
from semantic_version import Version

from spfx_doctor.domain.semver import min_version, normalize_range, parse_version, satisfies


@pytest.mark.parametrize(
    ("entry", "expected"),
    [
        ("1.21.0", "1.21.0"),
        ("^1.21.0", "1.21.0"),
        ("~3.9", "3.9.0"),
        ("15", "15.0.0"),
        (">=1.12.1 <1.14.0", "1.12.1"),
        ("1.0.0-beta.1", "1.0.0-beta.1"),
        ("<2.0.0", "0.0.0"),
        ("<= 1.21.0", "0.0.0"),
    ],
)
def test_min_version(entry: str, expected: str) -> None:
    assert min_version(entry) == Version(expected)


def test_upper_bound_only_entry_does_not_satisfy_a_lower_bound() -> None:
    assert not satisfies(min_version("<2.0.0"), ">=1.0.0")
    assert not satisfies(min_version("<=1.21.0"), "1.21.0")


@pytest.mark.parametrize("entry", ["", "latest", "file:../lib", "workspace:*", "https://example.com/x.tgz"])
def test_min_version_of_non_semver_entries(entry: str) -> None:
    assert min_version(entry) is None


def test_normalize_range_glues_operators() -> None:
    assert normalize_range(">=22.14.0 < 23.0.0") == ">=22.14.0 <23.0.0"


class TestSatisfies:
    def test_exact(self) -> None:
        assert satisfies(Version("1.21.0"), "1.21.0")
        assert not satisfies(Version("1.20.0"), "1.21.0")

    def test_range_with_spaced_operator(self) -> None:
        assert satisfies(Version("22.14.0"), ">=22.14.0 < 23.0.0")
        assert not satisfies(Version("23.0.0"), ">=22.14.0 < 23.0.0")

    def test_partial_version_is_a_range(self) -> None:
        assert satisfies(Version("15.6.2"), "15")
        assert satisfies(Version("0.14.0"), "0.14")

    def test_tilde(self) -> None:
        assert satisfies(Version("1.15.2"), "~1.15.2")
        assert not satisfies(Version("1.16.0"), "~1.15.2")


def test_parse_version() -> None:
    assert parse_version("1.21.0") == Version("1.21.0")
    assert parse_version("not a version") is None
