"""Core types shared by every layer."""

from .config import ConfigError, UploadConfig, config_from_action_env, resolve_api_url
from .errors import ErrorCode
from .result import Err, Ok, Result, collect, is_err, is_ok

__all__ = [
    # config
    "ConfigError",
    "UploadConfig",
    "config_from_action_env",
    "resolve_api_url",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
    "collect",
    "is_err",
    "is_ok",
]
