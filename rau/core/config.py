"""Typed upload configuration.

Configuration is resolved once at startup (from CLI options or from the
GitHub Actions environment) and passed down explicitly. Nothing below the
CLI layer reads environment variables.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .result import Err, Ok, Result

__all__ = [
    "DEFAULT_API_URL",
    "ConfigError",
    "UploadConfig",
    "config_from_action_env",
    "parse_bool_input",
    "resolve_api_url",
]

DEFAULT_API_URL = "https://api.github.com"

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when inputs are missing or malformed."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class UploadConfig:
    """Everything one upload run needs.

    Attributes:
        github_token: Token sent in the Authorization header
        upload_url: Release upload URL template (from the release payload)
        asset_path: Glob pattern(s), newline-separated
        asset_name: Explicit published name (single-file batches only)
        asset_content_type: Explicit Content-Type for every file
        asset_label: Optional label attached to every uploaded asset
        overwrite: Delete colliding remote assets instead of failing
        api_url: GitHub REST API base URL
    """

    github_token: str
    upload_url: str
    asset_path: str
    asset_name: str | None = None
    asset_content_type: str | None = None
    asset_label: str | None = None
    overwrite: bool = False
    api_url: str = DEFAULT_API_URL


def resolve_api_url(env: Mapping[str, str]) -> str:
    """Return the API base URL, honoring GITHUB_API_URL (e.g. for GHES)."""
    return (env.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")


def parse_bool_input(name: str, value: str) -> Result[bool, ConfigError]:
    """Parse a boolean action input.

    Accepts the YAML 1.2 core schema spellings of true/false. An empty value
    means the input was not set and reads as False.
    """
    if value == "" or value in _FALSE_VALUES:
        return Ok(False)
    if value in _TRUE_VALUES:
        return Ok(True)
    return Err(
        ConfigError(
            f"input does not meet YAML 1.2 core schema boolean: {name}={value!r}",
            hint="use one of: true, True, TRUE, false, False, FALSE",
        )
    )


def _action_input(env: Mapping[str, str], name: str) -> str:
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, "").strip()


def config_from_action_env(env: Mapping[str, str]) -> Result[UploadConfig, ConfigError]:
    """Build an UploadConfig from GitHub Actions `INPUT_*` variables.

    Args:
        env: Environment mapping (usually os.environ)

    Returns:
        Ok(UploadConfig), or Err(ConfigError) when a required input is
        missing or `overwrite` is not a boolean
    """
    required: dict[str, str] = {}
    for name in ("github_token", "upload_url", "asset_path"):
        value = _action_input(env, name)
        if not value:
            return Err(ConfigError(f"input required and not supplied: {name}"))
        required[name] = value

    overwrite = parse_bool_input("overwrite", _action_input(env, "overwrite"))
    if isinstance(overwrite, Err):
        return overwrite

    return Ok(
        UploadConfig(
            github_token=required["github_token"],
            upload_url=required["upload_url"],
            asset_path=required["asset_path"],
            asset_name=_action_input(env, "asset_name") or None,
            asset_content_type=_action_input(env, "asset_content_type") or None,
            asset_label=_action_input(env, "asset_label") or None,
            overwrite=overwrite.value,
            api_url=resolve_api_url(env),
        )
    )
