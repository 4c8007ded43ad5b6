"""Version increments and the commands that request them."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Increment(enum.IntEnum):
    """The size of a version change, ordered from none to major."""

    NO_BUMP = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3


class IncrementKind(enum.Enum):
    """The ways a version bump can be requested."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    AUTO = "auto"
    NO_BUMP = "no_bump"
    AUTO_PACKAGE = "auto_package"
    AUTO_MONOREPO_GLOBAL = "auto_monorepo_global"
    MANUAL = "manual"


@dataclass(frozen=True)
class IncrementCommand:
    """A requested bump, with the argument its kind needs.

    ``package`` goes with AUTO_PACKAGE, ``package_increment`` (optional)
    with AUTO_MONOREPO_GLOBAL and ``version`` with MANUAL.
    """

    kind: IncrementKind = IncrementKind.AUTO
    package: str | None = None
    package_increment: Increment | None = None
    version: str | None = None

    def __post_init__(self) -> None:
        if self.kind is IncrementKind.AUTO_PACKAGE and self.package is None:
            raise ValueError("an automatic package bump needs a package name")
        if self.kind is IncrementKind.MANUAL and self.version is None:
            raise ValueError("a manual bump needs a version")


_COMMAND_KINDS = {
    Increment.MAJOR: IncrementKind.MAJOR,
    Increment.MINOR: IncrementKind.MINOR,
    Increment.PATCH: IncrementKind.PATCH,
    Increment.NO_BUMP: IncrementKind.NO_BUMP,
}


def command_for(increment: Increment) -> IncrementCommand:
    """Return the command that applies ``increment``."""
    return IncrementCommand(_COMMAND_KINDS[Increment(increment)])