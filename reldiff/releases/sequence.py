from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType

from reldiff.core.result import Err, Ok, Result
from reldiff.releases.errors import CompareError
from reldiff.releases.model import ParsedVersion, RawRelease, ReleaseNoteIndex, VersionSequence
from reldiff.releases.semver import parse_version


@dataclass(frozen=True, slots=True)
class ResolvedReleases:
    """Ascending version sequence plus the note body of every tag in it."""

    sequence: VersionSequence
    notes: ReleaseNoteIndex

    @property
    def newest(self) -> ParsedVersion:
        return self.sequence[-1]

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(v.tag for v in self.sequence)


def build_sequence(
    releases: Sequence[RawRelease], *, repo: str | None = None
) -> Result[ResolvedReleases, CompareError]:
    """Parse every tag and sort ascending by version precedence.

    All unparsable tags are reported together; nothing is returned unless
    every tag parses. Equal precedence (e.g. differing build metadata) is
    broken by tag so the order is total. A tag listed more than once (a
    release published while pages were being read) is kept at its first
    occurrence.
    """
    if not releases:
        return Err(
            CompareError(
                kind="empty_set",
                message="no releases left to compare",
                repo=repo,
                hint="check the tag filter and pre-release/draft flags",
            )
        )

    parsed: list[ParsedVersion] = []
    bad_tags: list[str] = []
    notes: dict[str, str] = {}
    seen: set[str] = set()
    for release in releases:
        if release.tag_name in seen:
            continue
        seen.add(release.tag_name)
        version = parse_version(release.tag_name)
        if version is None:
            bad_tags.append(release.tag_name)
            continue
        parsed.append(ParsedVersion(tag=release.tag_name, version=version))
        notes[release.tag_name] = release.body

    if bad_tags:
        listed = ", ".join(repr(t) for t in bad_tags)
        return Err(
            CompareError(
                kind="version_parse",
                message=f"{len(bad_tags)} tag(s) are not versions: {listed}",
                repo=repo,
                tags=tuple(bad_tags),
                hint="use a tag filter to exclude them",
            )
        )

    if not parsed:
        return Err(CompareError(kind="empty_set", message="no versions were parsed", repo=repo))

    parsed.sort(key=lambda v: (v.version.precedence(), v.tag))
    return Ok(ResolvedReleases(sequence=tuple(parsed), notes=MappingProxyType(notes)))
