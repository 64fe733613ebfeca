"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rau.assets.errors import FileError, ParseError, ValidationError
from rau.core.config import ConfigError
from rau.core.errors import ErrorCode
from rau.github.api import InvalidResponseError, UnexpectedStatusError
from rau.github.http import HttpError
from rau.output.console import Style

if TYPE_CHECKING:
    from rau.output.console import ConsoleProtocol
    from rau.services.upload_errors import UploadError

__all__ = ["print_upload_error", "upload_error_exit_code"]


def print_upload_error(error: UploadError | ConfigError, console: ConsoleProtocol) -> None:
    """Print an upload failure with appropriate formatting.

    Validation problems are already reported one by one by the service, so
    only the summary line is printed here.
    """
    match error:
        case ValidationError(hint=hint):
            console.error(error.message)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case ParseError():
            console.error(error.message)
            console.print(
                "hint: expected .../repos/<owner>/<repo>/releases/<id>/assets{?name,label}",
                Style.DIM,
            )
        case UnexpectedStatusError(url=url, status=status, body=body):
            console.error(f"unexpected status code: {status} ({url})")
            if body:
                console.print(body, Style.DIM)
        case InvalidResponseError() | FileError() | ConfigError():
            console.error(error.message)
            hint = getattr(error, "hint", None)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case HttpError():
            console.error(str(error))


def upload_error_exit_code(error: UploadError | ConfigError) -> int:
    match error:
        case ValidationError():
            return int(ErrorCode.VALIDATION_ERROR)
        case ParseError() | ConfigError():
            return int(ErrorCode.USER_ERROR)
        case UnexpectedStatusError() | InvalidResponseError() | HttpError():
            return int(ErrorCode.NETWORK_ERROR)
        case FileError():
            return int(ErrorCode.IO_ERROR)
