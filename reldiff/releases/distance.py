from __future__ import annotations

from reldiff.core.result import Err, Ok, Result
from reldiff.releases.errors import CompareError
from reldiff.releases.model import ComparisonResult, ReleaseNote, ReleaseNoteIndex, VersionSequence


def find_position(sequence: VersionSequence, tag: str) -> int | None:
    """Index of tag in the sequence by exact tag match, or None when absent."""
    for index, entry in enumerate(sequence):
        if entry.tag == tag:
            return index
    return None


def release_distance(
    sequence: VersionSequence,
    tag_a: str,
    tag_b: str,
    notes: ReleaseNoteIndex,
    *,
    repo: str | None = None,
) -> Result[ComparisonResult, CompareError]:
    """Count the releases separating tag_a and tag_b.

    Notes cover every release strictly between the two, newest first.
    A tag missing from the sequence is an error, never "position 0".
    """
    index_a = find_position(sequence, tag_a)
    index_b = find_position(sequence, tag_b)

    if index_a is None or index_b is None:
        # dict.fromkeys dedupes while keeping order (tag_a == tag_b, both absent)
        missing = tuple(
            dict.fromkeys(tag for tag, i in ((tag_a, index_a), (tag_b, index_b)) if i is None)
        )
        listed = ", ".join(repr(t) for t in missing)
        return Err(
            CompareError(
                kind="not_found",
                message=f"not among the compared releases: {listed}",
                repo=repo,
                tags=missing,
                hint="the tag may be filtered out, a pre-release or a draft",
            )
        )

    if index_a == index_b:
        return Ok(ComparisonResult(primary_tag=tag_a, secondary_tag=tag_b, distance=0))

    low, high = sorted((index_a, index_b))
    between = tuple(
        ReleaseNote(tag=sequence[i].tag, body=notes.get(sequence[i].tag, ""))
        for i in range(high - 1, low, -1)
    )
    return Ok(
        ComparisonResult(
            primary_tag=tag_a,
            secondary_tag=tag_b,
            distance=high - low,
            notes=between,
        )
    )
