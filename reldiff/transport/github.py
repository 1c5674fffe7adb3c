"""Release listing transport.

ReleaseTransport is the only collaborator the comparison core talks to:
one paged listing call and one lookup-by-tag call. GitHubReleaseTransport
implements it over an HttpClient; FakeReleaseTransport serves releases from
memory for tests.
"""

from __future__ import annotations

import re
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from urllib.parse import quote

from reldiff.core.result import Err, Ok, Result
from reldiff.core.structured import as_obj_list, as_str_dict, get_bool, get_text
from reldiff.releases.model import RateInfo, RawRelease
from reldiff.transport.http import HttpClient, HttpError, JsonResponse

__all__ = [
    "FakeReleaseTransport",
    "GitHubReleaseTransport",
    "ReleasePage",
    "ReleaseTransport",
    "parse_rate_info",
    "parse_release",
]

DEFAULT_RETRY_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 1.0

_NEXT_LINK_RE = re.compile(r'<[^>]+>\s*;\s*rel="?next"?')
_TRANSIENT_STATUSES = frozenset({0, 429, 500, 502, 503, 504})


@dataclass(frozen=True, slots=True)
class ReleasePage:
    releases: tuple[RawRelease, ...]
    has_next_page: bool
    rate: RateInfo


@runtime_checkable
class ReleaseTransport(Protocol):
    """Paged release listing plus lookup by tag."""

    def list_releases(
        self, owner: str, repo: str, page: int, per_page: int
    ) -> Result[ReleasePage, HttpError]: ...

    def get_release_by_tag(
        self, owner: str, repo: str, tag: str
    ) -> Result[RawRelease | None, HttpError]:
        """Return Ok(None) when no release carries this tag."""
        ...


def parse_release(obj: object) -> RawRelease | None:
    """Build a RawRelease from an API release object; None if it has no tag."""
    data = as_str_dict(obj)
    if data is None:
        return None
    # The tag is an exact-match key; keep it byte for byte.
    tag = get_text(data, "tag_name") or None
    if tag is None:
        return None
    return RawRelease(
        tag_name=tag,
        body=get_text(data, "body"),
        prerelease=bool(get_bool(data, "prerelease")),
        draft=bool(get_bool(data, "draft")),
    )


def _header_int(response: JsonResponse, name: str) -> int | None:
    value = response.header(name)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_rate_info(response: JsonResponse) -> RateInfo:
    return RateInfo(
        limit=_header_int(response, "x-ratelimit-limit"),
        remaining=_header_int(response, "x-ratelimit-remaining"),
        reset=_header_int(response, "x-ratelimit-reset"),
    )


def _has_next_page(response: JsonResponse) -> bool:
    link = response.header("link")
    if not link:
        return False
    return any(_NEXT_LINK_RE.search(part) for part in link.split(","))


class GitHubReleaseTransport:
    """ReleaseTransport backed by the GitHub REST API.

    Holds only immutable configuration, so one instance may serve concurrent
    comparisons. Transient failures (network errors, 429, 5xx) are retried
    with a linear backoff; anything else is returned at once.
    """

    def __init__(
        self,
        http: HttpClient,
        *,
        api_url: str = "https://api.github.com",
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        retry_delay: float = RETRY_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._http = http
        self._api_url = api_url.rstrip("/")
        self._retry_attempts = max(1, retry_attempts)
        self._retry_delay = retry_delay
        self._sleep = sleep

    def _repo_url(self, owner: str, repo: str) -> str:
        return f"{self._api_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    def _get(self, url: str) -> Result[JsonResponse, HttpError]:
        for attempt in range(self._retry_attempts):
            result = self._http.get_json(url)
            if isinstance(result, Ok):
                return result
            if attempt < self._retry_attempts - 1 and result.error.status in _TRANSIENT_STATUSES:
                self._sleep(self._retry_delay * (attempt + 1))
                continue
            return result
        raise AssertionError("unreachable: retry loop always returns")

    def list_releases(
        self, owner: str, repo: str, page: int, per_page: int
    ) -> Result[ReleasePage, HttpError]:
        url = f"{self._repo_url(owner, repo)}/releases?per_page={per_page}&page={page}"
        result = self._get(url)
        if isinstance(result, Err):
            return result

        response = result.value
        if response.status != 200:
            return Err(
                HttpError(
                    url=url,
                    status=response.status,
                    message=f"expected status 200, got {response.status}",
                )
            )

        items = as_obj_list(response.data)
        if items is None:
            return Err(HttpError(url=url, status=response.status, message="Expected JSON array"))

        releases: list[RawRelease] = []
        for item in items:
            release = parse_release(item)
            if release is None:
                return Err(
                    HttpError(url=url, status=response.status, message="Release without tag_name")
                )
            releases.append(release)

        return Ok(
            ReleasePage(
                releases=tuple(releases),
                has_next_page=_has_next_page(response),
                rate=parse_rate_info(response),
            )
        )

    def get_release_by_tag(
        self, owner: str, repo: str, tag: str
    ) -> Result[RawRelease | None, HttpError]:
        url = f"{self._repo_url(owner, repo)}/releases/tags/{quote(tag, safe='')}"
        result = self._get(url)
        if isinstance(result, Err):
            if result.error.status == 404:
                return Ok(None)
            return result

        release = parse_release(result.value.data)
        if release is None:
            return Err(
                HttpError(url=url, status=result.value.status, message="Release without tag_name")
            )
        return Ok(release)


class FakeReleaseTransport:
    """In-memory ReleaseTransport for tests.

    Serves `releases` in the given order, `per_page` at a time regardless of
    the page size requested, and records every page request.

    Usage:
        transport = FakeReleaseTransport([RawRelease("v1.0.0")])
        transport.fail_on_page(2, HttpError(url="fake", status=500, message="boom"))
    """

    def __init__(
        self,
        releases: Sequence[RawRelease] = (),
        *,
        per_page: int | None = None,
        rate: RateInfo | None = None,
    ) -> None:
        self._releases = tuple(releases)
        self._per_page = per_page
        self._rate = rate or RateInfo(limit=5000, remaining=4999, reset=0)
        self._failures: dict[int, HttpError] = {}
        self._lookup_error: HttpError | None = None
        self.page_requests: list[tuple[str, str, int, int]] = []
        self.tag_lookups: list[tuple[str, str, str]] = []

    def fail_on_page(self, page: int, error: HttpError) -> None:
        self._failures[page] = error

    def fail_lookups(self, error: HttpError) -> None:
        self._lookup_error = error

    def list_releases(
        self, owner: str, repo: str, page: int, per_page: int
    ) -> Result[ReleasePage, HttpError]:
        self.page_requests.append((owner, repo, page, per_page))
        if page in self._failures:
            return Err(self._failures[page])

        size = self._per_page or per_page
        start = (page - 1) * size
        chunk = self._releases[start : start + size]
        return Ok(
            ReleasePage(
                releases=chunk,
                has_next_page=start + size < len(self._releases),
                rate=self._rate,
            )
        )

    def get_release_by_tag(
        self, owner: str, repo: str, tag: str
    ) -> Result[RawRelease | None, HttpError]:
        self.tag_lookups.append((owner, repo, tag))
        if self._lookup_error is not None:
            return Err(self._lookup_error)
        for release in self._releases:
            if release.tag_name == tag:
                return Ok(release)
        return Ok(None)
