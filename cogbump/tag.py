"""Version tags and the objects a changelog range points at."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

import semver

from cogbump.errors import BumpError
from cogbump.version import Increment, IncrementCommand, IncrementKind, command_for


@dataclass(frozen=True)
class Tag:
    """A semantic version tag, optionally prefixed and bound to a commit."""

    version: semver.Version
    oid: str | None = None
    prefix: str | None = None

    def __str__(self) -> str:
        return f"{self.prefix or ''}{self.version}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.version < other.version

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.version > other.version

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.version <= other.version

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return self.version >= other.version

    def _with_core(self, major: int, minor: int, patch: int) -> Tag:
        return replace(self, version=semver.Version(major, minor, patch), oid=None)

    def manual_bump(self, version: str) -> Tag:
        """Return a copy set to ``version``; raise ValueError if it is not semver."""
        return replace(self, version=semver.Version.parse(version))

    def major_bump(self) -> Tag:
        return self._with_core(self.version.major + 1, 0, 0)

    def minor_bump(self) -> Tag:
        return self._with_core(self.version.major, self.version.minor + 1, 0)

    def patch_bump(self) -> Tag:
        v = self.version
        return self._with_core(v.major, v.minor, v.patch + 1)

    def no_bump(self) -> Tag:
        v = self.version
        return self._with_core(v.major, v.minor, v.patch)

    def bump(self, increment: IncrementCommand | Increment) -> Tag:
        """Apply an explicit increment or a manual version.

        Automatic increments depend on commit history and are rejected here.
        """
        command = command_for(increment) if isinstance(increment, Increment) else increment
        simple = {
            IncrementKind.MAJOR: self.major_bump,
            IncrementKind.MINOR: self.minor_bump,
            IncrementKind.PATCH: self.patch_bump,
            IncrementKind.NO_BUMP: self.no_bump,
        }
        if command.kind in simple:
            return simple[command.kind]()
        if command.kind is IncrementKind.MANUAL:
            try:
                return self.manual_bump(command.version)
            except ValueError as err:
                raise BumpError(err) from err
        raise ValueError(
            f"a {command.kind.value} increment is computed from the commit history"
        )


def parse_tag(text: str, oid: str | None = None, prefix: str | None = None) -> Tag:
    """Parse ``text`` as a tag, stripping ``prefix`` which it must then carry."""
    if prefix:
        if not text.startswith(prefix):
            raise ValueError(f"tag {text!r} does not start with prefix {prefix!r}")
        text = text[len(prefix):]
    return Tag(semver.Version.parse(text), oid, prefix)


class OidKind(enum.Enum):
    """What a changelog bound points at."""

    TAG = "tag"
    FIRST_COMMIT = "first_commit"
    HEAD = "head"
    OTHER = "other"


@dataclass(frozen=True)
class OidOf:
    """A tag, the first commit, HEAD or any other commit id."""

    target: Tag | str
    kind: OidKind | None = None

    def __post_init__(self) -> None:
        if isinstance(self.target, Tag):
            object.__setattr__(self, "kind", OidKind.TAG)
        elif self.kind is None:
            object.__setattr__(self, "kind", OidKind.OTHER)
        elif self.kind is OidKind.TAG:
            raise ValueError("a tag bound needs a Tag target")

    @property
    def oid(self) -> str | None:
        if isinstance(self.target, Tag):
            return self.target.oid
        return self.target

    def __str__(self) -> str:
        return str(self.target)

    def serialize(self) -> dict[str, str]:
        """Return the mapping a changelog template sees for this bound."""
        if isinstance(self.target, Tag):
            data = {"tag": str(self.target)}
            if self.target.oid is not None:
                data["id"] = self.target.oid
            return data
        return {"id": self.target}