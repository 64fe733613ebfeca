from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ReleaseRef:
    """Coordinates of a release, as encoded in its upload URL."""

    owner: str
    repo: str
    release_id: str


@dataclass(frozen=True, slots=True)
class RemoteAsset:
    """An asset already attached to the release when the run started."""

    url: str  # API URL of the asset; DELETE target
    id: str
    name: str  # already canonicalized by GitHub


@dataclass(frozen=True, slots=True)
class Release:
    upload_url: str
    assets: tuple[RemoteAsset, ...]


@dataclass(frozen=True, slots=True)
class LocalFile:
    """A file to upload and the canonical name it will be published under."""

    path: Path
    name: str


@dataclass(frozen=True, slots=True)
class UploadedAsset:
    path: Path
    name: str
    browser_download_url: str


def _no_files() -> list[LocalFile]:
    return []


@dataclass(slots=True)
class ReconciliationEntry:
    """Everything that targets one canonical name.

    `asset` is set whenever the name exists in the release snapshot, even if
    no local file targets it.
    """

    name: str
    asset: RemoteAsset | None = None
    files: list[LocalFile] = field(default_factory=_no_files)
