"""GitHub REST API access for release assets."""

from rau.github.api import (
    ApiError,
    ApiSettings,
    GitHubReleaseClient,
    InvalidResponseError,
    ReleaseClient,
    UnexpectedStatusError,
)
from rau.github.http import (
    HttpClient,
    HttpError,
    HttpResponse,
    MockHttpClient,
    RealHttpClient,
)

__all__ = [
    # API
    "ApiError",
    "ApiSettings",
    "GitHubReleaseClient",
    "InvalidResponseError",
    "ReleaseClient",
    "UnexpectedStatusError",
    # HTTP
    "HttpClient",
    "HttpError",
    "HttpResponse",
    "MockHttpClient",
    "RealHttpClient",
]
