from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

ProblemKind = Literal["shared_name", "duplicated", "already_exists"]


@dataclass(frozen=True, slots=True)
class ValidationProblem:
    kind: ProblemKind
    name: str
    files: tuple[Path, ...] = ()

    @property
    def message(self) -> str:
        match self.kind:
            case "shared_name":
                return "cannot upload multiple files with a shared asset name"
            case "duplicated":
                joined = ", ".join(str(p) for p in self.files)
                return f'file name "{self.name}" is duplicated. ({joined})'
            case "already_exists":
                return f'file name "{self.name}" already exists'


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Every name conflict found in one batch."""

    problems: tuple[ValidationProblem, ...]

    @property
    def message(self) -> str:
        return f"validation error: {len(self.problems)} problem(s) found"

    @property
    def hint(self) -> str | None:
        if any(p.kind == "already_exists" for p in self.problems):
            return "pass --overwrite to replace existing assets"
        return None

    def of_kind(self, kind: ProblemKind) -> tuple[ValidationProblem, ...]:
        return tuple(p for p in self.problems if p.kind == kind)


@dataclass(frozen=True, slots=True)
class ParseError:
    url: str

    @property
    def message(self) -> str:
        return f"failed to parse the upload url: {self.url}"


@dataclass(frozen=True, slots=True)
class FileError:
    """A local file could not be stat'ed or read."""

    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"{self.path}: {self.reason}"
