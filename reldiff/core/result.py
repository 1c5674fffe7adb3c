"""Result type for explicit error handling.

Every fallible step of a release comparison (fetching pages, parsing tags,
locating releases) returns a Result instead of raising. Callers branch on
Ok/Err and failures travel up to the CLI as plain values.

Usage:
    match fetch_all_releases(transport, "goharbor", "harbor"):
        case Ok(fetched):
            print(f"{len(fetched.releases)} releases")
        case Err(error):
            print(error.pretty())
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
