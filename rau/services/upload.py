"""Upload service: validate, delete collisions, upload, collect URLs.

Ordering:
- an explicit asset name for several files fails before any request
- nothing is deleted or uploaded unless the whole batch validates
- all deletions finish before the first upload starts
- uploads run concurrently; results keep file-discovery order
"""

from __future__ import annotations

import asyncio
import mimetypes
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from pathlib import Path

from rau.assets.discovery import expand_asset_paths
from rau.assets.errors import FileError, ValidationError
from rau.assets.model import LocalFile, RemoteAsset, UploadedAsset
from rau.assets.reconcile import check_shared_name, local_files, reconcile
from rau.assets.upload_url import parse_upload_url
from rau.core.config import UploadConfig
from rau.core.result import Err, Ok, Result
from rau.core.tasks import gather_results
from rau.github.api import ReleaseClient
from rau.output.console import ConsoleProtocol
from rau.services.upload_errors import UploadError

__all__ = [
    "AssetUploadService",
    "UploadOutputs",
    "content_type_for",
    "file_chunks",
]

DEFAULT_CONTENT_TYPE = "application/octet-stream"
CHUNK_SIZE = 1024 * 1024

Discover = Callable[[str], list[Path]]


@dataclass(frozen=True, slots=True)
class UploadOutputs:
    assets: tuple[UploadedAsset, ...]

    @property
    def browser_download_urls(self) -> list[str]:
        return [a.browser_download_url for a in self.assets]

    @property
    def browser_download_url(self) -> str:
        """All download URLs, newline-joined (the action output format)."""
        return "\n".join(self.browser_download_urls)


def content_type_for(path: Path, explicit: str | None = None) -> str:
    if explicit:
        return explicit
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or DEFAULT_CONTENT_TYPE


async def file_chunks(path: Path, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Stream a file without blocking the event loop."""
    f = await asyncio.to_thread(path.open, "rb")
    try:
        while chunk := await asyncio.to_thread(f.read, chunk_size):
            yield chunk
    finally:
        f.close()


class AssetUploadService:
    """Uploads a batch of files to one release."""

    def __init__(
        self,
        client: ReleaseClient,
        console: ConsoleProtocol,
        *,
        discover: Discover = expand_asset_paths,
    ) -> None:
        self.client = client
        self.console = console
        self.discover = discover

    async def run(self, config: UploadConfig) -> Result[UploadOutputs, UploadError]:
        paths = await asyncio.to_thread(self.discover, config.asset_path)
        if not paths:
            self.console.warning(f"no files matched: {config.asset_path}")

        shared = check_shared_name(len(paths), config.asset_name)
        if isinstance(shared, Err):
            self._report(shared.error)
            return shared

        ref = parse_upload_url(config.upload_url)
        if isinstance(ref, Err):
            return ref

        release = await self.client.get_release(ref.value)
        if isinstance(release, Err):
            return release

        files = local_files(paths, config.asset_name)
        plan = reconcile(
            files,
            release.value.assets,
            overwrite=config.overwrite,
            asset_name=config.asset_name,
        )
        if isinstance(plan, Err):
            self._report(plan.error)
            return plan

        if plan.value:
            deleted = await gather_results(self._delete(asset) for asset in plan.value)
            if isinstance(deleted, Err):
                return deleted

        upload_url = release.value.upload_url or config.upload_url
        uploaded = await gather_results(
            self._upload(file, upload_url, config) for file in files
        )
        if isinstance(uploaded, Err):
            return uploaded
        return Ok(UploadOutputs(assets=tuple(uploaded.value)))

    def _report(self, error: ValidationError) -> None:
        for problem in error.problems:
            self.console.error(f"validation error: {problem.message}")

    async def _delete(self, asset: RemoteAsset) -> Result[None, UploadError]:
        self.console.info(f"deleting asset {asset.name} before uploading")
        return await self.client.delete_asset(asset.url)

    async def _upload(
        self, file: LocalFile, upload_url: str, config: UploadConfig
    ) -> Result[UploadedAsset, UploadError]:
        content_type = content_type_for(file.path, config.asset_content_type)
        try:
            stat = await asyncio.to_thread(file.path.stat)
        except OSError as e:
            return Err(FileError(path=file.path, reason=e.strerror or str(e)))

        self.console.info(f"uploading {file.path} as {file.name}: size: {stat.st_size}")
        result = await self.client.upload_asset(
            upload_url,
            name=file.name,
            label=config.asset_label,
            content_type=content_type,
            content_length=stat.st_size,
            content=file_chunks(file.path),
        )
        if isinstance(result, Err):
            return result

        self.console.debug(f"{file.name}: {result.value}")
        return Ok(UploadedAsset(path=file.path, name=file.name, browser_download_url=result.value))
