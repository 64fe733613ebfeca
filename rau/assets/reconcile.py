"""Decide what a batch of uploads will collide with.

Given the files to upload and a snapshot of the release's assets, reconcile()
reports every naming conflict at once, or returns the existing assets that
must be deleted before uploading. It does no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from rau.assets.errors import ValidationError, ValidationProblem
from rau.assets.model import LocalFile, ReconciliationEntry, RemoteAsset
from rau.assets.names import canonical_name
from rau.core.result import Err, Ok, Result

__all__ = ["check_shared_name", "local_files", "reconcile"]


def local_files(paths: Iterable[Path], asset_name: str | None = None) -> list[LocalFile]:
    """Pair each path with the canonical name it will be published under."""
    return [LocalFile(path=p, name=canonical_name(asset_name or p.name)) for p in paths]


def check_shared_name(
    file_count: int, asset_name: str | None
) -> Result[None, ValidationError]:
    """Reject an explicit asset name for a batch of more than one file.

    Needs no release snapshot, so callers can run it before fetching one.
    """
    if file_count > 1 and asset_name:
        return Err(ValidationError(problems=(ValidationProblem("shared_name", asset_name),)))
    return Ok(None)


def reconcile(
    files: Sequence[LocalFile],
    assets: Iterable[RemoteAsset],
    *,
    overwrite: bool,
    asset_name: str | None = None,
) -> Result[list[RemoteAsset], ValidationError]:
    """Validate a batch against the release snapshot.

    Args:
        files: Files to upload, in discovery order
        assets: Assets already attached to the release
        overwrite: Resolve collisions with existing assets by deleting them
        asset_name: Explicit published name; only valid for a single file

    Returns:
        Ok with the assets to delete before uploading (possibly empty), or
        Err with every problem found
    """
    shared = check_shared_name(len(files), asset_name)
    if isinstance(shared, Err):
        return shared

    entries: dict[str, ReconciliationEntry] = {}
    for asset in assets:
        entries[asset.name] = ReconciliationEntry(name=asset.name, asset=asset)

    touched: list[ReconciliationEntry] = []
    for file in files:
        entry = entries.get(file.name)
        if entry is None:
            entry = entries[file.name] = ReconciliationEntry(name=file.name)
        if not entry.files:
            touched.append(entry)
        entry.files.append(file)

    problems: list[ValidationProblem] = []
    for entry in touched:
        if len(entry.files) > 1:
            paths = tuple(f.path for f in entry.files)
            problems.append(ValidationProblem("duplicated", entry.name, paths))

    to_delete: list[RemoteAsset] = []
    for entry in touched:
        if len(entry.files) == 1 and entry.asset is not None:
            to_delete.append(entry.asset)

    if not overwrite:
        for asset in to_delete:
            path = entries[asset.name].files[0].path
            problems.append(ValidationProblem("already_exists", asset.name, (path,)))

    if problems:
        return Err(ValidationError(problems=tuple(problems)))
    return Ok(to_delete)
