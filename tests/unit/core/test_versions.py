"""Tests for semantic version parsing and precedence."""

import pytest

from start_assets.core.versions import SemVer, is_newer, parse_version


def test_leading_v_is_optional() -> None:
    assert is_newer("v1.2.0", "1.1.9")
    assert is_newer("1.10.0", "v1.9.0")


def test_equal_is_not_newer() -> None:
    assert not is_newer("v1.0.0", "1.0.0")


def test_unparseable_is_never_newer() -> None:
    assert not is_newer("latest", "v1.0.0")
    assert not is_newer("v2.0.0", "")
    assert not is_newer("v2.0.0", "not-a-version")


def test_shorthand_fills_missing_components() -> None:
    assert parse_version("v1") == SemVer(1, 0, 0)
    assert parse_version("v1.2") == SemVer(1, 2, 0)


def test_build_metadata_is_ignored_for_ordering() -> None:
    assert not is_newer("v1.0.0+build.2", "v1.0.0+build.1")
    assert not is_newer("v1.0.0+build.1", "v1.0.0+build.2")
    assert parse_version("1.0.0+build.2") == parse_version("1.0.0")


def test_build_metadata_is_kept() -> None:
    parsed = parse_version("1.0.0+exp.sha.5114f85")

    assert parsed is not None
    assert parsed.build == ("exp", "sha", "5114f85")


def test_release_follows_prerelease() -> None:
    assert is_newer("v1.0.0", "v1.0.0-rc.1")
    assert not is_newer("v1.0.0-rc.1", "v1.0.0")


def test_alphanumeric_prerelease_identifiers() -> None:
    assert is_newer("v1.0.0-alpha.beta", "v1.0.0-alpha.1")
    assert is_newer("1.0.0-x.7", "1.0.0-x.6")


def test_prerelease_precedence_chain() -> None:
    chain = [
        "1.0.0-alpha",
        "1.0.0-alpha.1",
        "1.0.0-alpha.beta",
        "1.0.0-beta",
        "1.0.0-beta.2",
        "1.0.0-beta.11",
        "1.0.0-rc.1",
        "1.0.0",
    ]

    for lower, higher in zip(chain, chain[1:]):
        assert is_newer(higher, lower), (higher, lower)


def test_numeric_components_compare_numerically() -> None:
    assert is_newer("v0.10.0", "v0.9.9")
    assert is_newer("v2.0.0", "v1.99.99")


@pytest.mark.parametrize(
    "value",
    ["", "1.2.3.4", "01.2.3", "1.2.3-01", "1.2.3-", "1.2.3+", "v", "1.2.x"],
)
def test_invalid_versions(value: str) -> None:
    assert parse_version(value) is None
