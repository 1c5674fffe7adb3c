"""Release API transport: HTTP client and release listing adapters."""

from .github import FakeReleaseTransport, GitHubReleaseTransport, ReleasePage, ReleaseTransport
from .http import HttpClient, HttpError, JsonResponse, MockHttpClient, RealHttpClient

__all__ = [
    "FakeReleaseTransport",
    "GitHubReleaseTransport",
    "HttpClient",
    "HttpError",
    "JsonResponse",
    "MockHttpClient",
    "RealHttpClient",
    "ReleasePage",
    "ReleaseTransport",
]
