"""GitHub Actions output file support."""

from __future__ import annotations

import uuid
from pathlib import Path

__all__ = ["write_action_output"]


def write_action_output(path: Path, name: str, value: str) -> None:
    """Append `name=value` to a $GITHUB_OUTPUT file.

    Uses the heredoc form, which also handles multi-line values:

        name<<ghadelimiter_<uuid>
        value
        ghadelimiter_<uuid>
    """
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"unexpected input: output value contains the delimiter {delimiter}")
    with path.open("a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
