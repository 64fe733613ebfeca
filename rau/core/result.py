"""Result type for explicit error handling.

Operations that can fail in an expected way (validation, HTTP status checks,
filesystem access) return a Result instead of raising:

    def parse_port(text: str) -> Result[int, str]:
        if not text.isdigit():
            return Err(f"not a port: {text}")
        return Ok(int(text))

    match parse_port("8080"):
        case Ok(value):
            print(value)
        case Err(error):
            print(error)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeGuard


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result holding a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the contained value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[..., object]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result holding an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raises ValueError, since there is no value.

        Raises:
            ValueError: Always.
        """
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or[T](self, default: T) -> T:
        return default

    def map(self, f: Callable[..., object]) -> Err[E]:
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Transform the contained error."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)


def collect[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Turn a sequence of Results into a Result of a list.

    Values keep their input order. The first Err (in input order) wins.

    Example:
        collect([Ok(1), Ok(2)])          # Ok([1, 2])
        collect([Ok(1), Err("x"), Err("y")])  # Err("x")
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)
