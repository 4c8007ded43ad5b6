"""Releases: commits grouped between tags, and the data templates render."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from cogbump.commit import (
    DEFAULT_COMMIT_TYPES,
    Commit,
    CommitConfig,
    RawCommit,
    commit_from_raw,
)
from cogbump.errors import ConventionalCommitError, EmptyReleaseError
from cogbump.tag import OidKind, OidOf

logger = logging.getLogger(__name__)


@dataclass
class ChangelogCommit:
    """A commit as it appears in a changelog, with its author's username if known."""

    commit: Commit
    author_username: str | None = None


@dataclass
class Release:
    """The commits between two bounds, chained to the release before it."""

    version: OidOf
    from_ref: OidOf
    date: datetime
    commits: list[ChangelogCommit]
    previous: Release | None = None

    def releases(self) -> Iterable[Release]:
        """Yield this release, then every earlier one."""
        release: Release | None = self
        while release is not None:
            yield release
            release = release.previous


def _group_by_tag(
    commits: Iterable[tuple[OidOf, RawCommit | None]],
) -> list[list[tuple[OidOf, RawCommit | None]]]:
    """Split newest-first commits into groups ending at each tag, oldest group first.

    Each group is returned newest first.
    """
    groups: list[list[tuple[OidOf, RawCommit | None]]] = []
    current: list[tuple[OidOf, RawCommit | None]] = []
    for oid, raw in reversed(list(commits)):
        current.append((oid, raw))
        if oid.kind is OidKind.TAG:
            groups.append(current[::-1])
            current = []
    if current:
        groups.append(current[::-1])
    return groups


def _changelog_commits(
    group: Iterable[tuple[OidOf, RawCommit | None]],
    commit_types: Mapping[str, CommitConfig] | None,
    ignore_merge_commits: bool,
    usernames: Mapping[str, str],
) -> list[ChangelogCommit]:
    result: list[ChangelogCommit] = []
    for _oid, raw in group:
        if raw is None or raw.message is None:
            continue
        if ignore_merge_commits and raw.message.startswith("Merge"):
            continue
        try:
            commit = commit_from_raw(raw, commit_types)
        except ConventionalCommitError as err:
            logger.warning("%s", err)
            continue
        if commit.should_omit(commit_types):
            continue
        result.append(ChangelogCommit(commit, usernames.get(commit.author)))
    return result


def release_from_commits(
    commits: Iterable[tuple[OidOf, RawCommit | None]],
    commit_types: Mapping[str, CommitConfig] | None = None,
    ignore_merge_commits: bool = False,
    usernames: Mapping[str, str] | None = None,
) -> Release:
    """Build the chain of releases from newest-first ``(bound, commit)`` pairs.

    Returns the most recent release; raises EmptyReleaseError when there is
    no commit at all. Commits that are not conventional are logged and skipped.
    """
    usernames = usernames or {}
    current: Release | None = None
    for group in _group_by_tag(commits):
        current = Release(
            version=group[0][0],
            from_ref=current.version if current is not None else group[-1][0],
            date=datetime.now(timezone.utc).replace(tzinfo=None),
            commits=_changelog_commits(group, commit_types, ignore_merge_commits, usernames),
            previous=current,
        )
    if current is None:
        raise EmptyReleaseError()
    return current


def serialize_commit(
    commit: ChangelogCommit, commit_types: Mapping[str, CommitConfig] | None = None
) -> dict[str, Any]:
    """Return the mapping a changelog template sees for a commit."""
    types = DEFAULT_COMMIT_TYPES if commit_types is None else commit_types
    conventional = commit.commit.conventional
    config = types.get(conventional.commit_type)
    title = config.changelog_title if config is not None else conventional.commit_type
    return {
        "id": commit.commit.oid,
        "author": commit.author_username,
        "signature": commit.commit.author,
        "type": title,
        "date": commit.commit.date.isoformat(),
        "scope": conventional.scope,
        "summary": conventional.summary,
        "body": conventional.body,
        "breaking_change": conventional.is_breaking_change,
        "footer": [
            {"token": footer.token, "content": footer.content}
            for footer in conventional.footers
        ],
    }


def serialize_release(
    release: Release, commit_types: Mapping[str, CommitConfig] | None = None
) -> dict[str, Any]:
    """Return the mapping a changelog template sees for a release and its predecessors."""
    return {
        "version": release.version.serialize(),
        "from": release.from_ref.serialize(),
        "date": release.date.isoformat(),
        "commits": [serialize_commit(commit, commit_types) for commit in release.commits],
        "previous": (
            serialize_release(release.previous, commit_types)
            if release.previous is not None
            else None
        ),
    }