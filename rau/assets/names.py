"""Predict the name GitHub stores an uploaded asset under.

GitHub renames asset filenames that have special characters,
non-alphanumeric characters, and leading or trailing periods, and the
"list release assets" endpoint reports the renamed form. Renaming locally
first lets collisions be detected before anything is uploaded.

https://docs.github.com/en/rest/releases/assets#upload-a-release-asset
"""

from __future__ import annotations

import re

__all__ = ["canonical_name"]

_SEPARATORS = re.compile(r"[,/]")
_DISALLOWED = re.compile(r"[^-+@_.a-zA-Z0-9]")
_PERIOD_RUNS = re.compile(r"[.]+")
_LEADING_PERIOD = re.compile(r"^[.].+$")
_STEM_THEN_PERIOD = re.compile(r"^[^.]+[.]$")
_TRAILING_PERIOD = re.compile(r"[.]$")


def canonical_name(name: str) -> str:
    """Return the canonical asset name for `name`.

    Idempotent, and the result never starts or ends with a period:

        >>> canonical_name("a/b,c")
        'a.b.c'
        >>> canonical_name(".hidden")
        'default.hidden'
        >>> canonical_name("name.")
        'default.name'
    """
    name = _SEPARATORS.sub(".", name)
    name = _DISALLOWED.sub("", name)
    name = _PERIOD_RUNS.sub(".", name)
    if _LEADING_PERIOD.match(name):
        return "default" + _TRAILING_PERIOD.sub("", name)
    if _STEM_THEN_PERIOD.match(name):
        return "default." + _TRAILING_PERIOD.sub("", name)
    return _TRAILING_PERIOD.sub("", name)
