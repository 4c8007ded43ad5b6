"""Errors and reports raised while checking commits, bumping and writing changelogs."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike

_SEPARATOR = "\x1b[4m" + " " * 57 + "\x1b[0m"

_NO_COMMIT_FOUND = (
    "cause: No conventional commit found to bump current version.\n"
    "    Only feature, bug fix and breaking change commits will trigger an automatic bump.\n"
    "\n"
    "suggestion: Please see the conventional commits specification summary for more information.\n"
    "    Alternatively consider using `cog bump <--version <VERSION>|--auto|--major|--minor>`\n"
)


class ConventionalCommitError(Exception):
    """A commit message that breaks the conventional commit rules."""


class CommitFormatError(ConventionalCommitError):
    """A recorded commit whose message could not be parsed."""

    def __init__(self, oid: str, summary: str, author: str, cause: object) -> None:
        super().__init__(oid, summary, author, cause)
        self.oid = oid
        self.summary = summary
        self.author = author
        self.cause = cause

    def __str__(self) -> str:
        cause = "\n\t".join(str(self.cause).splitlines())
        return (
            f"Errored commit: {self.oid} <{self.author}>\n"
            f"\tCommit message: '{self.summary}'\n"
            f"\tError: {cause}\n"
        )


class CommitTypeNotAllowedError(ConventionalCommitError):
    """A commit whose type is not among the configured commit types."""

    def __init__(self, oid: str, summary: str, commit_type: str, author: str) -> None:
        super().__init__(oid, summary, commit_type, author)
        self.oid = oid
        self.summary = summary
        self.commit_type = commit_type
        self.author = author

    def __str__(self) -> str:
        return (
            f"Errored commit: {self.oid} <{self.author}>\n"
            f"\tCommit message:'{self.summary}'\n"
            f"\tError:Commit type `{self.commit_type}` not allowed\n"
        )


class CommitParseError(ConventionalCommitError):
    """A message that could not be parsed as a conventional commit."""

    def __init__(self, cause: object) -> None:
        super().__init__(cause)
        self.cause = cause

    def __str__(self) -> str:
        return f"{self.cause}\n"


class BumpError(Exception):
    """A version bump that could not be computed."""

    def __init__(self, cause: object = None) -> None:
        super().__init__(cause)
        self.cause = cause

    def _detail(self) -> str:
        return f"\t{self.cause}\n"

    def __str__(self) -> str:
        return "failed to bump version\n\n" + self._detail()


class NoCommitFoundError(BumpError):
    """No conventional commit was found to compute an automatic bump."""

    def _detail(self) -> str:
        return _NO_COMMIT_FOUND + "\n"


class ChangelogError(Exception):
    """A changelog that could not be rendered or written."""


class TemplateNotFoundError(ChangelogError):
    """A custom changelog template path that does not exist."""

    def __init__(self, path: str | PathLike) -> None:
        self.path = path
        super().__init__(f'changelog template not found in "{path}"\n')


class SeparatorNotFoundError(ChangelogError):
    """A changelog file without the release separator."""

    def __init__(self, path: str | PathLike) -> None:
        self.path = path
        super().__init__(f"cannot find default separator '- - -' in {path}\n")


class EmptyReleaseError(ChangelogError):
    """A release with no commit in it."""

    def __init__(self) -> None:
        super().__init__("No commit found to create a changelog\n")


@dataclass
class CheckReport:
    """The non-compliant commits found between a reference and HEAD."""

    from_ref: object
    errors: list[ConventionalCommitError] = field(default_factory=list)

    def __str__(self) -> str:
        parts = [
            f"\nFound {len(self.errors)} non compliant commits in {self.from_ref}..HEAD:\n\n"
        ]
        for error in self.errors:
            parts.append(f"{_SEPARATOR}\n\n")
            parts.append(str(error))
        return "".join(parts)


class HookBumpError(Exception):
    """A failed pre-bump hook; its changes were stashed."""

    def __init__(self, cause: str, version: str, stash_number: int) -> None:
        super().__init__(cause, version, stash_number)
        self.cause = cause
        self.version = version
        self.stash_number = stash_number

    def __str__(self) -> str:
        return (
            f"Error: prehook run `{self.cause}` failed\n"
            "\tAll changes made during hook runs have been stashed on "
            f"`cog_bump_{self.version}`\n"
            f"\tyou can run `git stash apply stash@{self.stash_number}` "
            "to restore these changes."
        )