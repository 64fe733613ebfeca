from __future__ import annotations

import re

from rau.assets.errors import ParseError
from rau.assets.model import ReleaseRef
from rau.core.result import Err, Ok, Result

__all__ = ["parse_upload_url", "strip_url_template"]

_UPLOAD_URL = re.compile(
    r"/repos/(?P<owner>[^/]+)/(?P<repo>[^/]+)/releases/(?P<release_id>[0-9]+)/"
)
_TEMPLATE_SUFFIX = re.compile(r"[{][^}]*[}]$")


def parse_upload_url(url: str) -> Result[ReleaseRef, ParseError]:
    """Extract owner, repo and release id from a release upload URL.

    Example:
        >>> parse_upload_url(
        ...     "https://uploads.github.com/repos/acme/widget/releases/42/assets{?name,label}"
        ... )
        Ok(ReleaseRef(owner='acme', repo='widget', release_id='42'))
    """
    match = _UPLOAD_URL.search(url)
    if match is None:
        return Err(ParseError(url=url))
    return Ok(
        ReleaseRef(
            owner=match.group("owner"),
            repo=match.group("repo"),
            release_id=match.group("release_id"),
        )
    )


def strip_url_template(url: str) -> str:
    """Drop a trailing RFC 6570 expression such as `{?name,label}`."""
    return _TEMPLATE_SUFFIX.sub("", url)
