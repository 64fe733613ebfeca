"""Shared helpers for CLI commands."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, NoReturn

import typer

from rau.core.result import Err, Result
from rau.github.api import ApiSettings, GitHubReleaseClient
from rau.github.http import HttpClient, RealHttpClient
from rau.output.errors import print_upload_error, upload_error_exit_code
from rau.services.upload import AssetUploadService, UploadOutputs

if TYPE_CHECKING:
    from rau.cli.context import CLIContext
    from rau.core.config import ConfigError, UploadConfig
    from rau.services.upload_errors import UploadError


def build_http_client() -> HttpClient:
    return RealHttpClient()


async def _upload(config: UploadConfig, ctx: CLIContext) -> Result[UploadOutputs, UploadError]:
    http = build_http_client()
    try:
        client = GitHubReleaseClient(
            http, ApiSettings(token=config.github_token, api_url=config.api_url)
        )
        return await AssetUploadService(client, ctx.console).run(config)
    finally:
        await http.aclose()


def run_upload(config: UploadConfig, ctx: CLIContext) -> UploadOutputs:
    """Run one upload to completion, exiting with the mapped code on failure."""
    result = asyncio.run(_upload(config, ctx))
    if isinstance(result, Err):
        exit_on_error(result.error, ctx)
    return result.value


def exit_on_error(error: UploadError | ConfigError, ctx: CLIContext) -> NoReturn:
    print_upload_error(error, ctx.console)
    raise typer.Exit(code=upload_error_exit_code(error))
