from __future__ import annotations

import os
from pathlib import Path

import typer

from rau.cli.commands._helpers import exit_on_error, run_upload
from rau.cli.context import build_context
from rau.core.config import config_from_action_env
from rau.core.result import Err
from rau.output.actions import write_action_output


def action() -> None:
    """Run as a GitHub Action: read INPUT_* variables, write $GITHUB_OUTPUT."""
    env = dict(os.environ)
    ctx = build_context(verbose=env.get("RUNNER_DEBUG") == "1")

    config = config_from_action_env(env)
    if isinstance(config, Err):
        exit_on_error(config.error, ctx)

    outputs = run_upload(config.value, ctx)

    output_file = env.get("GITHUB_OUTPUT")
    if output_file:
        write_action_output(Path(output_file), "browser_download_url", outputs.browser_download_url)
    else:
        ctx.console.warning("GITHUB_OUTPUT is not set; printing outputs instead")
        typer.echo(outputs.browser_download_url)
