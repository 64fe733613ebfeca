from __future__ import annotations

from dataclasses import dataclass

from rau.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    console: ConsoleProtocol


def build_context(*, verbose: bool = False) -> CLIContext:
    return CLIContext(console=RichConsole(verbose=verbose))
