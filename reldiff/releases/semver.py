from __future__ import annotations

import re
from dataclasses import dataclass

# Optional tag prefix ("controller-", "cli/", "pkg@"), optional "v", 1-3 numeric
# ASCII components, optional pre-release and build metadata. The prefix is lazy so
# "v1.0.0-1.2" is read as pre-release "1.2", not as prefix "v1.0.0-".
_TAG_RE = re.compile(
    r"^(?P<prefix>(?:.*?[-_/@])??)"
    r"[vV]?(?P<major>[0-9]+)(?:\.(?P<minor>[0-9]+))?(?:\.(?P<patch>[0-9]+))?"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

type Identifier = int | str
type PrecedenceKey = tuple[int, int, int, int, tuple[tuple[int, int, str], ...]]


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int = 0
    patch: int = 0
    prerelease: tuple[Identifier, ...] = ()
    build: str = ""
    prefix: str = ""

    def precedence(self) -> PrecedenceKey:
        """Ordering key following semantic versioning precedence.

        A release sorts after its own pre-releases. Numeric identifiers sort
        below alphanumeric ones; a shorter identifier list sorts first when
        the shared identifiers are equal. Build metadata and prefix are ignored.
        """
        release_rank = 0 if self.prerelease else 1
        identifiers = tuple(
            (0, ident, "") if isinstance(ident, int) else (1, 0, ident) for ident in self.prerelease
        )
        return (self.major, self.minor, self.patch, release_rank, identifiers)


def _identifier(raw: str) -> Identifier:
    if raw.isdigit():
        return int(raw)
    return raw


def parse_version(tag: str) -> SemVer | None:
    """Parse a release tag, returning None when it is not a version."""
    m = _TAG_RE.match(tag.strip())
    if m is None:
        return None
    pre = m.group("pre")
    return SemVer(
        major=int(m.group("major")),
        minor=int(m.group("minor") or 0),
        patch=int(m.group("patch") or 0),
        prerelease=tuple(_identifier(p) for p in pre.split(".")) if pre else (),
        build=m.group("build") or "",
        prefix=m.group("prefix") or "",
    )

