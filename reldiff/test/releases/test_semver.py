from __future__ import annotations

import random

import pytest

from reldiff.releases.semver import SemVer, parse_version


def test_parse_plain_and_v_prefixed() -> None:
    assert parse_version("1.2.3") == SemVer(1, 2, 3)
    assert parse_version("v1.2.3") == SemVer(1, 2, 3)
    assert parse_version("V0.0.1") == SemVer(0, 0, 1)


def test_parse_short_versions_pad_with_zero() -> None:
    assert parse_version("v2") == SemVer(2, 0, 0)
    assert parse_version("v2.1") == SemVer(2, 1, 0)


def test_parse_prerelease_and_build() -> None:
    parsed = parse_version("v1.0.0-rc.1+build.5")
    assert parsed == SemVer(1, 0, 0, prerelease=("rc", 1), build="build.5")
    assert parsed is not None and parsed.precedence() < SemVer(1, 0, 0).precedence()


def test_numeric_prerelease_is_not_taken_as_prefix() -> None:
    assert parse_version("v1.0.0-1.2") == SemVer(1, 0, 0, prerelease=(1, 2))


def test_parse_prefixed_tags() -> None:
    assert parse_version("controller-0.30.0") == SemVer(0, 30, 0, prefix="controller-")
    assert parse_version("cli/v1.4.0") == SemVer(1, 4, 0, prefix="cli/")
    assert parse_version("my-app-2.0.0-beta") == SemVer(2, 0, 0, prerelease=("beta",), prefix="my-app-")


@pytest.mark.parametrize("tag", ["latest", "nightly", "v1.x", "", "release", "1.2.3.4.5", "v1.0.0-"])
def test_rejects_non_versions(tag: str) -> None:
    assert parse_version(tag) is None


def test_only_ascii_digits_are_version_numbers() -> None:
    assert parse_version("v\u0661.\u0660.\u0660") is None
    assert parse_version("v1.\uff12.0") is None


def test_prerelease_precedence_chain() -> None:
    # Example chain from the semantic versioning 2.0.0 document.
    chain = [
        "1.0.0-alpha",
        "1.0.0-alpha.1",
        "1.0.0-alpha.beta",
        "1.0.0-beta",
        "1.0.0-beta.2",
        "1.0.0-beta.11",
        "1.0.0-rc.1",
        "1.0.0",
        "1.0.1",
        "1.1.0",
        "2.0.0",
    ]
    versions = [parse_version(t) for t in chain]
    assert all(v is not None for v in versions)
    for lower, higher in zip(versions, versions[1:]):
        assert lower is not None and higher is not None
        assert lower.precedence() < higher.precedence()


def test_build_metadata_and_prefix_ignored_for_precedence() -> None:
    a = parse_version("v1.0.0+one")
    b = parse_version("pkg-1.0.0+two")
    assert a is not None and b is not None
    assert a.precedence() == b.precedence()


def test_numeric_components_compare_numerically() -> None:
    a = parse_version("v1.10.0")
    b = parse_version("v1.9.0")
    assert a is not None and b is not None
    assert a.precedence() > b.precedence()


def test_shuffled_sort_is_stable_by_precedence() -> None:
    tags = ["v0.1.0", "v0.2.0-rc.1", "v0.2.0", "v0.10.0", "v1.0.0-alpha", "v1.0.0"]
    shuffled = tags[:]
    random.Random(7).shuffle(shuffled)
    keyed = sorted(shuffled, key=lambda t: parse_version(t).precedence())  # type: ignore[union-attr]
    assert keyed == tags
