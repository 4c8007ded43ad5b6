"""Conventional commit messages: parsing, validation and display."""

from __future__ import annotations

import enum
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from cogbump.errors import (
    CommitFormatError,
    CommitParseError,
    CommitTypeNotAllowedError,
)

logger = logging.getLogger(__name__)

NOT_COMMITTED = "not committed"

_HEADER = re.compile(
    r"^(?P<type>[A-Za-z][A-Za-z0-9_-]*)"
    r"(?:\((?P<scope>[^()\r\n]+)\))?"
    r"(?P<bang>!)?"
    r": (?P<summary>\S.*)$"
)
_FOOTER = re.compile(
    r"^(?P<token>BREAKING[ -]CHANGE|[A-Za-z0-9][A-Za-z0-9-]*)(?P<sep>: | #)(?P<content>.*)$"
)
_BREAKING_TOKENS = frozenset({"BREAKING CHANGE", "BREAKING-CHANGE"})


class Separator(enum.Enum):
    """The separator between a footer token and its content."""

    COLON = ": "
    HASH = " #"


@dataclass
class Footer:
    """A trailer line such as ``Refs: 123`` or ``Closes #42``."""

    token: str
    content: str
    separator: Separator = Separator.COLON

    def __str__(self) -> str:
        return f"{self.token}{self.separator.value}{self.content}"


@dataclass
class ConventionalCommit:
    """The parsed parts of a conventional commit message."""

    commit_type: str
    summary: str
    scope: str | None = None
    body: str | None = None
    footers: list[Footer] = field(default_factory=list)
    is_breaking_change: bool = False

    def __str__(self) -> str:
        scope = f"({self.scope})" if self.scope is not None else ""
        bang = "!" if self.is_breaking_change else ""
        text = f"{self.commit_type}{scope}{bang}: {self.summary}"
        if self.body:
            text += f"\n\n{self.body}"
        if self.footers:
            text += "\n\n" + "\n".join(str(footer) for footer in self.footers)
        return text


def _paragraphs(lines: list[str]) -> list[list[str]]:
    paragraphs: list[list[str]] = []
    current: list[str] = []
    for line in lines:
        if line.strip():
            current.append(line)
        elif current:
            paragraphs.append(current)
            current = []
    if current:
        paragraphs.append(current)
    return paragraphs


def _parse_footers(lines: list[str]) -> list[Footer]:
    footers: list[Footer] = []
    for line in lines:
        match = _FOOTER.match(line)
        if match:
            separator = Separator.COLON if match["sep"] == ": " else Separator.HASH
            footers.append(Footer(match["token"], match["content"], separator))
        else:
            footers[-1].content += "\n" + line
    return footers


def parse(message: str) -> ConventionalCommit:
    """Parse a conventional commit message; raise CommitParseError if it is not one."""
    lines = message.strip().splitlines() or [""]
    header = _HEADER.match(lines[0])
    if header is None:
        raise CommitParseError(
            f"invalid commit header {lines[0]!r}: expected '<type>[(scope)][!]: <summary>'"
        )
    rest = lines[1:]
    if rest and rest[0].strip():
        raise CommitParseError("missing blank line between the summary and the body")

    paragraphs = _paragraphs(rest)
    footers: list[Footer] = []
    if paragraphs and _FOOTER.match(paragraphs[-1][0]):
        footers = _parse_footers(paragraphs.pop())
    body = "\n\n".join("\n".join(p) for p in paragraphs) or None

    breaking = header["bang"] is not None or any(
        footer.token in _BREAKING_TOKENS for footer in footers
    )
    return ConventionalCommit(
        commit_type=header["type"],
        summary=header["summary"].rstrip(),
        scope=header["scope"],
        body=body,
        footers=footers,
        is_breaking_change=breaking,
    )


@dataclass
class CommitConfig:
    """How a commit type appears in changelogs and whether it bumps the version."""

    changelog_title: str
    omit_from_changelog: bool = False
    bump_minor: bool = False
    bump_patch: bool = False

    def with_minor_bump(self) -> CommitConfig:
        return replace(self, bump_minor=True)

    def with_patch_bump(self) -> CommitConfig:
        return replace(self, bump_patch=True)


DEFAULT_COMMIT_TYPES: dict[str, CommitConfig] = {
    "feat": CommitConfig("Features", bump_minor=True),
    "fix": CommitConfig("Bug Fixes", bump_patch=True),
    "chore": CommitConfig("Miscellaneous Chores"),
    "revert": CommitConfig("Revert"),
    "perf": CommitConfig("Performance Improvements"),
    "docs": CommitConfig("Documentation"),
    "style": CommitConfig("Style"),
    "refactor": CommitConfig("Refactoring"),
    "test": CommitConfig("Tests"),
    "build": CommitConfig("Build system"),
    "ci": CommitConfig("Continuous Integration"),
}


def _types(commit_types: Mapping[str, CommitConfig] | None) -> Mapping[str, CommitConfig]:
    return DEFAULT_COMMIT_TYPES if commit_types is None else commit_types


@dataclass(frozen=True)
class RawCommit:
    """A commit as recorded in the repository."""

    oid: str
    message: str
    author: str = ""
    timestamp: int = 0


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit if count == 1 else unit + 's'} ago"


@dataclass
class Commit:
    """A recorded commit whose message is a conventional commit."""

    oid: str
    conventional: ConventionalCommit
    author: str
    date: datetime

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return _scope_key(self) < _scope_key(other)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return _scope_key(self) > _scope_key(other)

    def shorthand(self) -> str:
        """Return the abbreviated commit id."""
        return self.oid if self.oid == NOT_COMMITTED else self.oid[:6]

    def should_omit(self, commit_types: Mapping[str, CommitConfig] | None = None) -> bool:
        config = _types(commit_types).get(self.conventional.commit_type)
        return config is not None and config.omit_from_changelog

    def is_major_bump(self) -> bool:
        return self.conventional.is_breaking_change

    def is_minor_bump(self, commit_types: Mapping[str, CommitConfig] | None = None) -> bool:
        config = _types(commit_types).get(self.conventional.commit_type)
        return config is not None and config.bump_minor

    def is_patch_bump(self, commit_types: Mapping[str, CommitConfig] | None = None) -> bool:
        config = _types(commit_types).get(self.conventional.commit_type)
        return config is not None and config.bump_patch

    def _elapsed(self, now: datetime) -> str:
        seconds = int((now - self.date).total_seconds())
        for unit, size in (("week", 604800), ("day", 86400), ("hour", 3600), ("minute", 60)):
            if seconds // size > 0:
                return _plural(seconds // size, unit)
        if seconds > 0:
            return _plural(seconds, "second")
        return "now"

    def get_log(self, now: datetime | None = None) -> str:
        """Return a multi-line description of the commit, aged relative to ``now``."""
        if now is None:
            now = datetime.now(timezone.utc).replace(tzinfo=None)
        breaking = "BREAKING CHANGE - " if self.conventional.is_breaking_change else ""
        scope = self.conventional.scope if self.conventional.scope is not None else "none"
        return (
            f"{breaking}{short_summary(self.conventional.summary)} "
            f"({self.shorthand()}) - {self._elapsed(now)}\n"
            f"\tAuthor: {self.author}\n"
            f"\tType: {self.conventional.commit_type}\n"
            f"\tScope: {scope}\n"
        )

    def __str__(self) -> str:
        return self.get_log()


def _scope_key(commit: Commit) -> tuple[bool, str]:
    scope = commit.conventional.scope
    return (scope is not None, scope or "")


def commit_from_raw(
    raw: RawCommit, commit_types: Mapping[str, CommitConfig] | None = None
) -> Commit:
    """Build a Commit from a recorded one, raising if its message is not allowed."""
    date = datetime.fromtimestamp(raw.timestamp, timezone.utc).replace(tzinfo=None)
    try:
        conventional = parse(raw.message.strip())
    except CommitParseError as err:
        raise CommitFormatError(
            raw.oid, short_summary(raw.message.rstrip()), raw.author, err.cause
        ) from err

    if conventional.commit_type not in _types(commit_types):
        raise CommitTypeNotAllowedError(
            raw.oid, format_summary(conventional), conventional.commit_type, raw.author
        )
    return Commit(raw.oid, conventional, raw.author, date)


def verify(
    author: str | None,
    message: str,
    ignore_merge_commit: bool = False,
    commit_types: Mapping[str, CommitConfig] | None = None,
) -> Commit | None:
    """Check a commit message before it is committed.

    Comment lines are dropped first. Returns the parsed commit, or None for an
    ignored merge commit; raises a ConventionalCommitError otherwise.
    """
    msg = "\n".join(
        line for line in message.splitlines() if not line.lstrip().startswith("#")
    ).strip()

    if ignore_merge_commit and (msg.startswith("Merge ") or msg.startswith("Pull request")):
        logger.info("Merge commit was ignored")
        return None

    conventional = parse(msg)
    author = author if author is not None else "Unknown"
    if conventional.commit_type not in _types(commit_types):
        raise CommitTypeNotAllowedError(
            NOT_COMMITTED, format_summary(conventional), conventional.commit_type, author
        )
    commit = Commit(
        NOT_COMMITTED,
        conventional,
        author,
        datetime.now(timezone.utc).replace(tzinfo=None),
    )
    logger.info("%s", commit)
    return commit


def format_summary(commit: ConventionalCommit) -> str:
    """Return the header line ``type(scope): summary``."""
    if commit.scope is None:
        return f"{commit.commit_type}: {commit.summary}"
    return f"{commit.commit_type}({commit.scope}): {commit.summary}"


def short_summary(summary: str) -> str:
    """Shorten a summary longer than 80 bytes to 77 characters and an ellipsis."""
    if len(summary.encode("utf-8")) > 80:
        return summary[:77] + "..."
    return summary