"""Error payload for release comparisons."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from reldiff.core.errors import ErrorCode

CompareErrorKind = Literal[
    "validation",
    "invalid_filter",
    "transport",
    "version_parse",
    "empty_set",
    "not_a_release",
    "not_found",
]


@dataclass(frozen=True, slots=True)
class CompareError:
    """Canonical comparison failure.

    Every failure is terminal for its request. repo and tags carry enough
    context for the caller to act on (which repository, which tag(s)).
    """

    kind: CompareErrorKind
    message: str
    repo: str | None = None
    tags: tuple[str, ...] = ()
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


_EXIT_CODES: dict[CompareErrorKind, ErrorCode] = {
    "validation": ErrorCode.USER_ERROR,
    "invalid_filter": ErrorCode.USER_ERROR,
    "transport": ErrorCode.NETWORK_ERROR,
    "version_parse": ErrorCode.DATA_ERROR,
    "empty_set": ErrorCode.DATA_ERROR,
    "not_a_release": ErrorCode.USER_ERROR,
    "not_found": ErrorCode.USER_ERROR,
}


def exit_code_for(error: CompareError) -> ErrorCode:
    return _EXIT_CODES[error.kind]
