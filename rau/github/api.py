"""Minimal GitHub release assets API.

Only the three endpoints the uploader needs:
- get a release: https://docs.github.com/en/rest/releases/releases#get-a-release
- upload a release asset: https://docs.github.com/en/rest/releases/assets#upload-a-release-asset
- delete a release asset: https://docs.github.com/en/rest/releases/assets#delete-a-release-asset

All functions take an HttpClient so tests never hit the network.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from rau.assets.model import Release, ReleaseRef, RemoteAsset
from rau.assets.upload_url import strip_url_template
from rau.core.config import DEFAULT_API_URL
from rau.core.result import Err, Ok, Result
from rau.core.structured import as_obj_list, as_str_dict, get_id, get_str
from rau.github.http import Body, HttpClient, HttpError, HttpResponse

__all__ = [
    "API_VERSION",
    "ApiError",
    "ApiSettings",
    "GitHubReleaseClient",
    "InvalidResponseError",
    "ReleaseClient",
    "UnexpectedStatusError",
]

API_VERSION = "2022-11-28"


@dataclass(frozen=True, slots=True)
class UnexpectedStatusError:
    """The API answered with a status other than the one the call expects."""

    url: str
    status: int
    body: str

    @property
    def message(self) -> str:
        return f"unexpected status code: {self.status}\n{self.body}"


@dataclass(frozen=True, slots=True)
class InvalidResponseError:
    url: str
    reason: str

    @property
    def message(self) -> str:
        return f"invalid response from {self.url}: {self.reason}"


ApiError = UnexpectedStatusError | InvalidResponseError | HttpError


@dataclass(frozen=True, slots=True)
class ApiSettings:
    token: str
    api_url: str = DEFAULT_API_URL

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }


class ReleaseClient(Protocol):
    """Release operations the upload service depends on."""

    async def get_release(self, ref: ReleaseRef) -> Result[Release, ApiError]: ...

    async def upload_asset(
        self,
        upload_url: str,
        *,
        name: str,
        content_type: str,
        content_length: int,
        content: Body,
        label: str | None = None,
    ) -> Result[str, ApiError]:
        """Upload one asset and return its browser download URL."""
        ...

    async def delete_asset(self, url: str) -> Result[None, ApiError]: ...


def _expect(
    result: Result[HttpResponse, HttpError], url: str, status: int
) -> Result[HttpResponse, ApiError]:
    if isinstance(result, Err):
        return result
    response = result.value
    if response.status != status:
        return Err(UnexpectedStatusError(url=url, status=response.status, body=response.text))
    return Ok(response)


def _json_object(response: HttpResponse, url: str) -> Result[dict[str, object], ApiError]:
    try:
        data = as_str_dict(response.json())
    except ValueError as e:
        return Err(InvalidResponseError(url=url, reason=f"JSON parse error: {e}"))
    if data is None:
        return Err(InvalidResponseError(url=url, reason="expected a JSON object"))
    return Ok(data)


def _parse_asset(obj: object) -> RemoteAsset | None:
    data = as_str_dict(obj)
    if data is None:
        return None
    url = get_str(data, "url")
    asset_id = get_id(data, "id")
    name = get_str(data, "name")
    if url is None or asset_id is None or name is None:
        return None
    return RemoteAsset(url=url, id=asset_id, name=name)


class GitHubReleaseClient:
    """ReleaseClient talking to the GitHub REST API."""

    def __init__(self, http: HttpClient, settings: ApiSettings) -> None:
        self.http = http
        self.settings = settings

    def release_url(self, ref: ReleaseRef) -> str:
        base = self.settings.api_url.rstrip("/")
        return f"{base}/repos/{ref.owner}/{ref.repo}/releases/{ref.release_id}"

    async def get_release(self, ref: ReleaseRef) -> Result[Release, ApiError]:
        url = self.release_url(ref)
        result = _expect(
            await self.http.request("GET", url, headers=self.settings.headers()), url, 200
        )
        if isinstance(result, Err):
            return result

        data = _json_object(result.value, url)
        if isinstance(data, Err):
            return data

        raw_assets = as_obj_list(data.value.get("assets", []))
        if raw_assets is None:
            return Err(InvalidResponseError(url=url, reason="'assets' is not a list"))

        assets: list[RemoteAsset] = []
        for raw in raw_assets:
            asset = _parse_asset(raw)
            if asset is None:
                return Err(InvalidResponseError(url=url, reason=f"malformed asset: {raw!r}"))
            assets.append(asset)

        return Ok(
            Release(upload_url=get_str(data.value, "upload_url") or "", assets=tuple(assets))
        )

    async def upload_asset(
        self,
        upload_url: str,
        *,
        name: str,
        content_type: str,
        content_length: int,
        content: Body,
        label: str | None = None,
    ) -> Result[str, ApiError]:
        url = strip_url_template(upload_url)
        params = {"name": name}
        if label:
            params["label"] = label
        headers = self.settings.headers()
        headers["Content-Type"] = content_type
        headers["Content-Length"] = str(content_length)

        result = _expect(
            await self.http.request(
                "POST", url, headers=headers, params=params, content=content
            ),
            url,
            201,
        )
        if isinstance(result, Err):
            return result

        data = _json_object(result.value, url)
        if isinstance(data, Err):
            return data
        download_url = get_str(data.value, "browser_download_url")
        if download_url is None:
            return Err(InvalidResponseError(url=url, reason="missing browser_download_url"))
        return Ok(download_url)

    async def delete_asset(self, url: str) -> Result[None, ApiError]:
        result = _expect(
            await self.http.request("DELETE", url, headers=self.settings.headers()), url, 204
        )
        if isinstance(result, Err):
            return result
        return Ok(None)
