"""Asset naming, discovery and collision checks (no network I/O)."""

from rau.assets.discovery import expand_asset_paths
from rau.assets.errors import FileError, ParseError, ValidationError, ValidationProblem
from rau.assets.model import LocalFile, Release, ReleaseRef, RemoteAsset, UploadedAsset
from rau.assets.names import canonical_name
from rau.assets.reconcile import check_shared_name, local_files, reconcile
from rau.assets.upload_url import parse_upload_url, strip_url_template

__all__ = [
    "FileError",
    "LocalFile",
    "ParseError",
    "Release",
    "ReleaseRef",
    "RemoteAsset",
    "UploadedAsset",
    "ValidationError",
    "ValidationProblem",
    "canonical_name",
    "check_shared_name",
    "expand_asset_paths",
    "local_files",
    "parse_upload_url",
    "reconcile",
    "strip_url_template",
]
