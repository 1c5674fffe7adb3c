from __future__ import annotations

import itertools

import pytest

from reldiff.core.result import Err, Ok
from reldiff.releases.distance import find_position, release_distance
from reldiff.releases.model import RawRelease, ReleaseNote
from reldiff.releases.sequence import ResolvedReleases, build_sequence

TAGS = ("v1.0.0", "v1.1.0", "v1.2.0", "v2.0.0", "v2.1.0")


@pytest.fixture
def resolved() -> ResolvedReleases:
    result = build_sequence([RawRelease(t, body=f"notes {t}") for t in reversed(TAGS)])
    assert isinstance(result, Ok)
    return result.value


class TestFindPosition:
    def test_oldest_entry_is_index_zero(self, resolved: ResolvedReleases) -> None:
        assert find_position(resolved.sequence, "v1.0.0") == 0

    def test_newest_entry(self, resolved: ResolvedReleases) -> None:
        assert find_position(resolved.sequence, "v2.1.0") == 4

    def test_absent_is_none(self, resolved: ResolvedReleases) -> None:
        assert find_position(resolved.sequence, "v9.9.9") is None

    def test_exact_tag_match_not_version_match(self, resolved: ResolvedReleases) -> None:
        assert find_position(resolved.sequence, "1.0.0") is None


class TestReleaseDistance:
    def test_distance_skips_over_middle_release(self) -> None:
        seq = build_sequence(
            [RawRelease("v2.0.0", "two"), RawRelease("v1.1.0", "one-one"), RawRelease("v1.0.0", "one")]
        )
        assert isinstance(seq, Ok)

        result = release_distance(seq.value.sequence, "v1.0.0", "v2.0.0", seq.value.notes)

        assert isinstance(result, Ok)
        assert result.value.distance == 2
        assert result.value.notes == (ReleaseNote("v1.1.0", "one-one"),)

    def test_same_tag_is_zero(self, resolved: ResolvedReleases) -> None:
        for tag in TAGS:
            result = release_distance(resolved.sequence, tag, tag, resolved.notes)
            assert isinstance(result, Ok)
            assert result.value.distance == 0
            assert result.value.notes == ()

    def test_adjacent_has_no_notes(self, resolved: ResolvedReleases) -> None:
        result = release_distance(resolved.sequence, "v1.1.0", "v1.2.0", resolved.notes)
        assert isinstance(result, Ok)
        assert result.value.distance == 1
        assert result.value.notes == ()

    def test_oldest_to_newest_has_no_off_by_one(self, resolved: ResolvedReleases) -> None:
        result = release_distance(resolved.sequence, "v1.0.0", "v2.1.0", resolved.notes)
        assert isinstance(result, Ok)
        assert result.value.distance == len(TAGS) - 1

    def test_notes_are_newest_first(self, resolved: ResolvedReleases) -> None:
        result = release_distance(resolved.sequence, "v2.1.0", "v1.0.0", resolved.notes)
        assert isinstance(result, Ok)
        assert [n.tag for n in result.value.notes] == ["v2.0.0", "v1.2.0", "v1.1.0"]
        assert result.value.notes[0].body == "notes v2.0.0"

    def test_symmetric_and_notes_cardinality(self, resolved: ResolvedReleases) -> None:
        for a, b in itertools.product(TAGS, repeat=2):
            forward = release_distance(resolved.sequence, a, b, resolved.notes)
            backward = release_distance(resolved.sequence, b, a, resolved.notes)
            assert isinstance(forward, Ok) and isinstance(backward, Ok)
            assert forward.value.distance == backward.value.distance
            assert forward.value.distance == abs(TAGS.index(a) - TAGS.index(b))
            assert len(forward.value.notes) == max(forward.value.distance - 1, 0)
            assert forward.value.notes == backward.value.notes

    def test_result_keeps_requested_order(self, resolved: ResolvedReleases) -> None:
        result = release_distance(resolved.sequence, "v2.0.0", "v1.0.0", resolved.notes)
        assert isinstance(result, Ok)
        assert result.value.primary_tag == "v2.0.0"
        assert result.value.secondary_tag == "v1.0.0"

    def test_absent_tag_is_not_found(self, resolved: ResolvedReleases) -> None:
        result = release_distance(resolved.sequence, "v0.1.0", "v2.1.0", resolved.notes, repo="o/r")
        assert isinstance(result, Err)
        assert result.error.kind == "not_found"
        assert result.error.tags == ("v0.1.0",)
        assert result.error.repo == "o/r"

    def test_both_absent_are_named(self, resolved: ResolvedReleases) -> None:
        result = release_distance(resolved.sequence, "v0.1.0", "v9.0.0", resolved.notes)
        assert isinstance(result, Err)
        assert result.error.tags == ("v0.1.0", "v9.0.0")

    def test_same_absent_tag_is_not_found_not_zero(self, resolved: ResolvedReleases) -> None:
        result = release_distance(resolved.sequence, "v0.1.0", "v0.1.0", resolved.notes)
        assert isinstance(result, Err)
        assert result.error.tags == ("v0.1.0",)
