"""HTTP client abstraction for the release API.

This module provides:
- HttpClient: Protocol for JSON GET requests (injectable for tests)
- RealHttpClient: Real implementation using urllib
- MockHttpClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from reldiff import __version__
from reldiff.core.result import Err, Ok, Result

__all__ = [
    "HttpClient",
    "HttpError",
    "JsonResponse",
    "MockHttpClient",
    "RealHttpClient",
]


@dataclass(frozen=True, slots=True)
class HttpError:
    """HTTP error details.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 for network errors)
        message: Human-readable error message
    """

    url: str
    status: int
    message: str

    def __str__(self) -> str:
        if self.status:
            return f"HTTP {self.status}: {self.message} ({self.url})"
        return f"{self.message} ({self.url})"


def _empty_headers() -> dict[str, str]:
    return {}


@dataclass(frozen=True, slots=True)
class JsonResponse:
    """Decoded JSON response.

    Attributes:
        status: HTTP status code
        data: Parsed JSON document (object, array, ...)
        headers: Response headers with lower-cased names
    """

    status: int
    data: object
    headers: Mapping[str, str] = field(default_factory=_empty_headers)

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP operations.

    This abstraction allows injecting mock clients for testing,
    avoiding real network calls in unit tests.
    """

    def get_json(self, url: str) -> Result[JsonResponse, HttpError]:
        """Fetch URL and parse the body as JSON.

        Args:
            url: URL to fetch

        Returns:
            Ok with JsonResponse, or Err with HttpError
        """
        ...


class RealHttpClient:
    """Real HTTP client using urllib.

    Sends GitHub REST API headers, an optional bearer token, and honours a
    per-request timeout.
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        user_agent: str = f"reldiff/{__version__}",
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._token = token
        # Use system certificates
        self._ssl_context = ssl.create_default_context()

    def _headers(self) -> dict[str, str]:
        headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def get_json(self, url: str) -> Result[JsonResponse, HttpError]:
        try:
            req = urllib.request.Request(url, headers=self._headers())
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                status = int(response.status)
                headers = {k.lower(): v for k, v in response.headers.items()}
                raw = response.read()
        except urllib.error.HTTPError as e:
            return Err(HttpError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(HttpError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(HttpError(url=url, status=0, message="Request timed out"))
        except ValueError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))
        except OSError as e:
            return Err(HttpError(url=url, status=0, message=str(e)))

        try:
            data: object = json.loads(raw.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(HttpError(url=url, status=status, message=f"JSON parse error: {e}"))
        return Ok(JsonResponse(status=status, data=data, headers=headers))


class MockHttpClient:
    """Mock HTTP client for testing.

    Usage:
        client = MockHttpClient()
        client.set_json("https://api.example.com/releases", [{"tag_name": "v1"}])
        result = client.get_json("https://api.example.com/releases")
    """

    def __init__(self) -> None:
        self._responses: dict[str, list[JsonResponse | HttpError]] = {}
        self.calls: list[str] = []

    def set_json(
        self,
        url: str,
        data: object,
        *,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Set the JSON response for URL (replaces queued responses)."""
        normalized = {k.lower(): v for k, v in (headers or {}).items()}
        self._responses[url] = [JsonResponse(status=status, data=data, headers=normalized)]

    def set_error(self, url: str, error: HttpError) -> None:
        self._responses[url] = [error]

    def queue(self, url: str, response: JsonResponse | HttpError) -> None:
        """Append a response; queued responses are served in order, the last one repeats."""
        self._responses.setdefault(url, []).append(response)

    def get_json(self, url: str) -> Result[JsonResponse, HttpError]:
        self.calls.append(url)

        queued = self._responses.get(url)
        if not queued:
            return Err(HttpError(url=url, status=404, message="Not Found (mock)"))

        response = queued.pop(0) if len(queued) > 1 else queued[0]
        if isinstance(response, HttpError):
            return Err(response)
        return Ok(response)
