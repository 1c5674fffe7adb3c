from __future__ import annotations

from dataclasses import dataclass
from threading import Event

from reldiff.core.result import Err, Ok, Result
from reldiff.output.console import ConsoleProtocol, Style
from reldiff.releases.errors import CompareError
from reldiff.releases.model import RateInfo, RawRelease
from reldiff.transport.github import ReleaseTransport

PAGE_SIZE = 100


@dataclass(frozen=True, slots=True)
class FetchedReleases:
    """Every release of a repository, in API order (newest first on GitHub)."""

    releases: tuple[RawRelease, ...]
    pages: int
    rate: RateInfo


def fetch_all_releases(
    transport: ReleaseTransport,
    owner: str,
    repo: str,
    *,
    per_page: int = PAGE_SIZE,
    cancel: Event | None = None,
    console: ConsoleProtocol | None = None,
) -> Result[FetchedReleases, CompareError]:
    """Fetch every page of releases, in order, until the transport reports no next page.

    The first failing page (or a cancellation) fails the whole fetch; releases
    from earlier pages are discarded, never returned as a partial success.
    """
    full_name = f"{owner}/{repo}"
    releases: list[RawRelease] = []
    rate = RateInfo()
    page = 1

    while True:
        if cancel is not None and cancel.is_set():
            return Err(
                CompareError(
                    kind="transport",
                    message=f"release fetch cancelled for {full_name} before page {page}",
                    repo=full_name,
                )
            )

        if console is not None:
            console.print(f"fetch releases {full_name} page {page}", Style.DIM)

        result = transport.list_releases(owner, repo, page, per_page)
        if isinstance(result, Err):
            return Err(
                CompareError(
                    kind="transport",
                    message=f"failed to list releases of {full_name} (page {page})",
                    repo=full_name,
                    hint=str(result.error),
                )
            )

        releases.extend(result.value.releases)
        rate = result.value.rate
        if not result.value.has_next_page:
            break
        page += 1

    return Ok(FetchedReleases(releases=tuple(releases), pages=page, rate=rate))
