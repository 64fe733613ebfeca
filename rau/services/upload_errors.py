from __future__ import annotations

from rau.assets.errors import FileError, ParseError, ValidationError
from rau.github.api import InvalidResponseError, UnexpectedStatusError
from rau.github.http import HttpError

UploadError = (
    ValidationError
    | ParseError
    | FileError
    | UnexpectedStatusError
    | InvalidResponseError
    | HttpError
)
