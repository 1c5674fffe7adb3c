from __future__ import annotations

import re

from reldiff.core.result import Err, Ok
from reldiff.releases.filters import compile_tag_pattern, filter_releases
from reldiff.releases.model import RawRelease

RELEASES = (
    RawRelease("controller-0.31.0"),
    RawRelease("v1.2.0"),
    RawRelease("controller-0.30.0"),
    RawRelease("controller-0.32.0-rc.1", prerelease=True),
    RawRelease("v1.3.0", draft=True),
)


def _tags(releases: tuple[RawRelease, ...]) -> list[str]:
    return [r.tag_name for r in releases]


class TestCompileTagPattern:
    def test_empty_pattern_is_none(self) -> None:
        assert compile_tag_pattern("") == Ok(None)

    def test_valid_pattern(self) -> None:
        result = compile_tag_pattern("^controller-.*$")
        assert isinstance(result, Ok)
        assert result.value is not None
        assert result.value.pattern == "^controller-.*$"

    def test_invalid_pattern_fails_fast(self) -> None:
        result = compile_tag_pattern("controller-(")
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_filter"
        assert "controller-(" in result.error.message


class TestFilterReleases:
    def test_no_predicates_keeps_everything(self) -> None:
        kept = filter_releases(RELEASES, None, exclude_prereleases=False, exclude_drafts=False)
        assert kept == RELEASES

    def test_pattern_is_partial_match(self) -> None:
        kept = filter_releases(
            RELEASES, re.compile("0\\.3"), exclude_prereleases=False, exclude_drafts=False
        )
        assert _tags(kept) == ["controller-0.31.0", "controller-0.30.0", "controller-0.32.0-rc.1"]

    def test_anchored_pattern_and_prereleases_excluded(self) -> None:
        kept = filter_releases(
            RELEASES,
            re.compile("^controller-.*$"),
            exclude_prereleases=True,
            exclude_drafts=True,
        )
        assert _tags(kept) == ["controller-0.31.0", "controller-0.30.0"]

    def test_exclude_drafts_only(self) -> None:
        kept = filter_releases(RELEASES, None, exclude_prereleases=False, exclude_drafts=True)
        assert "v1.3.0" not in _tags(kept)
        assert "controller-0.32.0-rc.1" in _tags(kept)

    def test_exclude_prereleases_only(self) -> None:
        kept = filter_releases(RELEASES, None, exclude_prereleases=True, exclude_drafts=False)
        assert _tags(kept) == ["controller-0.31.0", "v1.2.0", "controller-0.30.0", "v1.3.0"]

    def test_idempotent(self) -> None:
        pattern = re.compile("^v")
        once = filter_releases(RELEASES, pattern, exclude_prereleases=True, exclude_drafts=True)
        twice = filter_releases(once, pattern, exclude_prereleases=True, exclude_drafts=True)
        assert once == twice == (RawRelease("v1.2.0"),)
