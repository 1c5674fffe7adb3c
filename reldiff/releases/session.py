from __future__ import annotations

from dataclasses import dataclass
from threading import Event

from reldiff.core.result import Err, Ok, Result
from reldiff.output.console import ConsoleProtocol, Style
from reldiff.releases.distance import release_distance
from reldiff.releases.errors import CompareError
from reldiff.releases.fetch import fetch_all_releases
from reldiff.releases.filters import compile_tag_pattern, filter_releases
from reldiff.releases.model import (
    CompareOptions,
    CompareOutcome,
    ComparisonRequest,
    ComparisonResult,
    RateInfo,
)
from reldiff.releases.sequence import ResolvedReleases, build_sequence
from reldiff.transport.github import ReleaseTransport


def _validate(request: ComparisonRequest) -> Result[None, CompareError]:
    missing = [
        name
        for name, value in (
            ("owner", request.owner),
            ("repo", request.repo),
            ("release", request.primary_tag),
        )
        if not value.strip()
    ]
    if missing:
        return Err(
            CompareError(
                kind="validation",
                message=f"missing required field(s): {', '.join(missing)}",
            )
        )
    return Ok(None)


def _verify_release(
    transport: ReleaseTransport, request: ComparisonRequest, tag: str
) -> Result[None, CompareError]:
    result = transport.get_release_by_tag(request.owner, request.repo, tag)
    if isinstance(result, Err):
        return Err(
            CompareError(
                kind="transport",
                message=f"failed to look up release {tag!r} on {request.full_name}",
                repo=request.full_name,
                tags=(tag,),
                hint=str(result.error),
            )
        )
    if result.value is None:
        return Err(
            CompareError(
                kind="not_a_release",
                message=f"{tag!r} is not a release on {request.full_name}",
                repo=request.full_name,
                tags=(tag,),
            )
        )
    return Ok(None)


@dataclass(frozen=True, slots=True)
class ComparisonSession:
    """Resolved release set for one comparison request.

    Built once by open(); compare() is a pure function of the held state and
    may be called any number of times.
    """

    request: ComparisonRequest
    secondary_tag: str
    releases: ResolvedReleases
    rate: RateInfo

    @classmethod
    def open(
        cls,
        transport: ReleaseTransport,
        owner: str,
        repo: str,
        primary_tag: str,
        options: CompareOptions | None = None,
        *,
        cancel: Event | None = None,
        console: ConsoleProtocol | None = None,
    ) -> Result[ComparisonSession, CompareError]:
        request = ComparisonRequest(
            owner=owner,
            repo=repo,
            primary_tag=primary_tag,
            options=options or CompareOptions(),
        )
        valid = _validate(request)
        if isinstance(valid, Err):
            return valid

        opts = request.options
        pattern = compile_tag_pattern(opts.filter_pattern)
        if isinstance(pattern, Err):
            return pattern

        fetched = fetch_all_releases(transport, owner, repo, cancel=cancel, console=console)
        if isinstance(fetched, Err):
            return fetched

        kept = filter_releases(
            fetched.value.releases,
            pattern.value,
            exclude_prereleases=not opts.include_prereleases,
            exclude_drafts=not opts.include_drafts,
        )
        if console is not None:
            dropped = len(fetched.value.releases) - len(kept)
            console.print(
                f"{request.full_name}: {len(kept)} release(s) kept, {dropped} filtered out",
                Style.DIM,
            )

        if opts.verify_release:
            for tag in dict.fromkeys(t for t in (primary_tag, opts.secondary_tag) if t):
                verified = _verify_release(transport, request, tag)
                if isinstance(verified, Err):
                    return verified

        resolved = build_sequence(kept, repo=request.full_name)
        if isinstance(resolved, Err):
            return resolved

        return Ok(
            cls(
                request=request,
                secondary_tag=opts.secondary_tag or resolved.value.newest.tag,
                releases=resolved.value,
                rate=fetched.value.rate,
            )
        )

    @property
    def primary_tag(self) -> str:
        return self.request.primary_tag

    def compare(self) -> Result[ComparisonResult, CompareError]:
        return release_distance(
            self.releases.sequence,
            self.primary_tag,
            self.secondary_tag,
            self.releases.notes,
            repo=self.request.full_name,
        )


def compare_releases(
    transport: ReleaseTransport,
    owner: str,
    repo: str,
    primary_tag: str,
    options: CompareOptions | None = None,
    *,
    cancel: Event | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[CompareOutcome, CompareError]:
    """Open a session and compare in one call.

    Returns the distance, the notes in between and the rate-limit snapshot,
    or the typed failure; never a partial result.
    """
    session = ComparisonSession.open(
        transport, owner, repo, primary_tag, options, cancel=cancel, console=console
    )
    if isinstance(session, Err):
        return session

    result = session.value.compare()
    if isinstance(result, Err):
        return result
    return Ok(CompareOutcome(result=result.value, rate=session.value.rate))
