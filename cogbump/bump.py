"""Automatic version increments computed from conventional commits."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from cogbump.commit import Commit, CommitConfig
from cogbump.errors import BumpError, NoCommitFoundError
from cogbump.tag import Tag
from cogbump.version import Increment


def version_increment_from_commit_history(
    tag: Tag,
    commits: Iterable[Commit],
    commit_types: Mapping[str, CommitConfig] | None = None,
) -> Increment:
    """Return the increment that ``commits`` call for on top of ``tag``.

    Breaking changes only bump the major version once it is past 0. Commits
    that bump nothing give NO_BUMP; no commit at all raises NoCommitFoundError.
    """
    commits = list(commits)
    if tag.version.major != 0 and any(commit.is_major_bump() for commit in commits):
        return Increment.MAJOR
    if any(commit.is_minor_bump(commit_types) for commit in commits):
        return Increment.MINOR
    if any(commit.is_patch_bump(commit_types) for commit in commits):
        return Increment.PATCH
    if commits:
        return Increment.NO_BUMP
    raise NoCommitFoundError()


def bump_from_commits(
    tag: Tag,
    commits: Iterable[Commit],
    commit_types: Mapping[str, CommitConfig] | None = None,
) -> Tag:
    """Return ``tag`` bumped by the increment its following commits call for."""
    increment = version_increment_from_commit_history(tag, commits, commit_types)
    return tag.bump(increment)


def combine_global_bump(
    tag: Tag,
    history_tag: Tag | BumpError | None,
    package_increment: Increment | None,
) -> Tag:
    """Pick the global monorepo version from its own history and its packages.

    ``history_tag`` is the version computed from the global commits, or the
    error (or None) when that computation failed. With both a history version
    and a package increment the greater version wins.
    """
    history_failed = history_tag is None or isinstance(history_tag, BumpError)

    if package_increment is not None:
        package_tag = tag.bump(package_increment)
        if history_failed:
            return package_tag
        return package_tag if package_tag > history_tag else history_tag

    if isinstance(history_tag, BumpError):
        raise history_tag
    if history_tag is None:
        raise NoCommitFoundError()
    return history_tag