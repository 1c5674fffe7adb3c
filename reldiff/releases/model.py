from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from reldiff.releases.semver import SemVer


@dataclass(frozen=True, slots=True)
class RawRelease:
    """A release as listed by the API. Immutable once received."""

    tag_name: str
    body: str = ""
    prerelease: bool = False
    draft: bool = False


@dataclass(frozen=True, slots=True)
class RateInfo:
    """Rate-limit snapshot from the last API response.

    Passed through to callers untouched; None fields mean the header was absent.
    """

    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None

    def __str__(self) -> str:
        if self.limit is None and self.remaining is None:
            return "rate limit: unknown"
        return f"rate limit: {self.remaining}/{self.limit} remaining (reset {self.reset})"


@dataclass(frozen=True, slots=True)
class ParsedVersion:
    tag: str
    version: SemVer


type VersionSequence = tuple[ParsedVersion, ...]
type ReleaseNoteIndex = Mapping[str, str]


@dataclass(frozen=True, slots=True)
class CompareOptions:
    """Optional knobs for a comparison.

    An empty secondary_tag means "compare with the newest release"; an empty
    filter_pattern keeps every tag.
    """

    secondary_tag: str = ""
    filter_pattern: str = ""
    include_prereleases: bool = False
    include_drafts: bool = False
    verify_release: bool = False


@dataclass(frozen=True, slots=True)
class ComparisonRequest:
    owner: str
    repo: str
    primary_tag: str
    options: CompareOptions = field(default_factory=CompareOptions)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True, slots=True)
class ReleaseNote:
    tag: str
    body: str


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    """Distance between two releases and the notes of releases in between.

    notes are ordered newest to oldest and exclude both compared releases.
    """

    primary_tag: str
    secondary_tag: str
    distance: int
    notes: tuple[ReleaseNote, ...] = ()


@dataclass(frozen=True, slots=True)
class CompareOutcome:
    result: ComparisonResult
    rate: RateInfo
