from __future__ import annotations

import re
from collections.abc import Iterable

from reldiff.core.result import Err, Ok, Result
from reldiff.releases.errors import CompareError
from reldiff.releases.model import RawRelease


def compile_tag_pattern(pattern: str) -> Result[re.Pattern[str] | None, CompareError]:
    """Compile a tag filter; an empty pattern means "keep everything".

    Malformed patterns fail fast instead of silently matching nothing.
    """
    if not pattern:
        return Ok(None)
    try:
        return Ok(re.compile(pattern))
    except re.error as e:
        return Err(
            CompareError(
                kind="invalid_filter",
                message=f"invalid tag filter {pattern!r}: {e}",
                hint="filters are Python regular expressions matched anywhere in the tag",
            )
        )


def filter_releases(
    releases: Iterable[RawRelease],
    tag_pattern: re.Pattern[str] | None,
    *,
    exclude_prereleases: bool,
    exclude_drafts: bool,
) -> tuple[RawRelease, ...]:
    """Keep releases passing every predicate, preserving input order.

    The pattern is searched, not fully matched: anchor it to require a full match.
    """
    kept: list[RawRelease] = []
    for release in releases:
        if tag_pattern is not None and tag_pattern.search(release.tag_name) is None:
            continue
        if exclude_prereleases and release.prerelease:
            continue
        if exclude_drafts and release.draft:
            continue
        kept.append(release)
    return tuple(kept)
