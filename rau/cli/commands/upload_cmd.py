from __future__ import annotations

import json

import typer

from rau.cli.commands._helpers import run_upload
from rau.cli.context import build_context
from rau.core.config import DEFAULT_API_URL, UploadConfig


def upload(
    upload_url: str = typer.Option(
        ..., "--upload-url", help="Release upload URL, e.g. .../releases/42/assets{?name,label}"
    ),
    asset_path: str = typer.Option(
        ..., "--asset-path", help="Glob of files to upload (newline-separated, !excludes)"
    ),
    asset_name: str | None = typer.Option(
        None, "--asset-name", help="Published name (single file only)"
    ),
    asset_content_type: str | None = typer.Option(
        None, "--asset-content-type", help="Content-Type (default: guessed from extension)"
    ),
    asset_label: str | None = typer.Option(None, "--asset-label", help="Asset label"),
    overwrite: bool = typer.Option(
        False, "--overwrite", help="Replace existing assets with the same name"
    ),
    token: str = typer.Option(..., "--token", envvar="GITHUB_TOKEN", help="GitHub token"),
    api_url: str = typer.Option(
        DEFAULT_API_URL, "--api-url", envvar="GITHUB_API_URL", help="GitHub API base URL"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print download URLs as a JSON list"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
) -> None:
    """Upload files as release assets and print their download URLs."""
    ctx = build_context(verbose=verbose)
    config = UploadConfig(
        github_token=token,
        upload_url=upload_url,
        asset_path=asset_path,
        asset_name=asset_name,
        asset_content_type=asset_content_type,
        asset_label=asset_label,
        overwrite=overwrite,
        api_url=api_url.rstrip("/"),
    )

    outputs = run_upload(config, ctx)

    if as_json:
        typer.echo(json.dumps(outputs.browser_download_urls))
        return
    for url in outputs.browser_download_urls:
        typer.echo(url)
