from datetime import datetime

import pytest
import semver

from cogbump.bump import (
    bump_from_commits,
    combine_global_bump,
    version_increment_from_commit_history,
)
from cogbump.commit import DEFAULT_COMMIT_TYPES, Commit, CommitConfig, ConventionalCommit
from cogbump.errors import BumpError, NoCommitFoundError
from cogbump.tag import Tag, parse_tag
from cogbump.version import Increment


def fixture(commit_type: str, breaking: bool = False) -> Commit:
    return Commit(
        oid="1234",
        conventional=ConventionalCommit(
            commit_type=commit_type,
            summary="message",
            is_breaking_change=breaking,
        ),
        author="",
        date=datetime.now(),
    )


def default_tag() -> Tag:
    return Tag(semver.Version(0, 0, 0))


def test_next_auto_version_patch():
    increment = version_increment_from_commit_history(parse_tag("1.0.0"), [fixture("fix")])
    assert increment is Increment.PATCH


def test_non_bump_commits_do_not_bump():
    commits = [
        fixture(t)
        for t in ("revert", "perf", "docs", "chore", "style", "refactor", "test", "build", "ci")
    ]
    increment = version_increment_from_commit_history(parse_tag("1.0.0"), commits)
    assert increment is Increment.NO_BUMP


def test_breaking_change_is_major():
    commits = [fixture("feat"), fixture("feat", breaking=True)]
    increment = version_increment_from_commit_history(parse_tag("1.0.0"), commits)
    assert increment is Increment.MAJOR


def test_breaking_change_on_initial_dev_version_is_minor():
    commits = [fixture("feat"), fixture("feat", breaking=True)]
    increment = version_increment_from_commit_history(parse_tag("0.1.0"), commits)
    assert increment is Increment.MINOR


def test_next_auto_version_minor():
    commits = [fixture("fix"), fixture("feat")]
    increment = version_increment_from_commit_history(parse_tag("0.1.0"), commits)
    assert increment is Increment.MINOR


def test_custom_commit_type_minor_bump():
    types = {**DEFAULT_COMMIT_TYPES, "ex": CommitConfig("Ex").with_minor_bump()}
    commits = [fixture("fix"), fixture("ex")]
    increment = version_increment_from_commit_history(parse_tag("0.1.0"), commits, types)
    assert increment is Increment.MINOR


def test_custom_commit_type_patch_bump():
    types = {**DEFAULT_COMMIT_TYPES, "ex": CommitConfig("Ex").with_patch_bump()}
    commits = [fixture("chore"), fixture("ex")]
    increment = version_increment_from_commit_history(parse_tag("0.1.0"), commits, types)
    assert increment is Increment.PATCH


def test_override_bump_behaviour_of_existing_type():
    types = {**DEFAULT_COMMIT_TYPES, "perf": CommitConfig("Perf").with_minor_bump()}
    commits = [fixture("chore"), fixture("perf")]
    increment = version_increment_from_commit_history(parse_tag("0.1.0"), commits, types)
    assert increment is Increment.MINOR


def test_chore_and_docs_do_not_fail():
    commits = [fixture("chore"), fixture("docs")]
    increment = version_increment_from_commit_history(parse_tag("0.1.0"), commits)
    assert increment is Increment.NO_BUMP


def test_no_commit_raises():
    with pytest.raises(NoCommitFoundError):
        version_increment_from_commit_history(parse_tag("1.0.0"), [])


def test_no_commit_error_is_bump_error():
    with pytest.raises(BumpError):
        bump_from_commits(parse_tag("1.0.0"), [])


def test_bump_from_commits_patch():
    tag = bump_from_commits(parse_tag("1.0.0"), [fixture("fix")])
    assert tag.version == semver.Version(1, 0, 1)


def test_bump_from_commits_minor_resets_patch():
    tag = bump_from_commits(parse_tag("1.1.1"), [fixture("feat")])
    assert tag.version == semver.Version.parse("1.2.0")


def test_bump_from_commits_major_resets_minor_and_patch():
    tag = bump_from_commits(parse_tag("1.1.1"), [fixture("feat", breaking=True)])
    assert tag.version == semver.Version.parse("2.0.0")


def test_bump_strips_metadata():
    tag = bump_from_commits(parse_tag("1.1.1-pre+10.1"), [fixture("fix")])
    assert tag.version == semver.Version.parse("1.1.2")


def test_no_bump_keeps_version():
    tag = bump_from_commits(parse_tag("1.0.0"), [fixture("chore")])
    assert tag.version == semver.Version(1, 0, 0)


def test_global_bump_only_package_commits():
    base = parse_tag("0.1.0")
    with pytest.raises(NoCommitFoundError) as info:
        bump_from_commits(base, [])
    tag = combine_global_bump(base, info.value, Increment.MINOR)
    assert tag.version == semver.Version(0, 2, 0)


def test_global_bump_only_global_commits():
    base = default_tag()
    history = bump_from_commits(base, [fixture("feat")])
    tag = combine_global_bump(base, history, None)
    assert tag.version == semver.Version(0, 1, 0)


def test_global_bump_selects_history_bump():
    base = default_tag()
    history = bump_from_commits(base, [fixture("fix")])
    tag = combine_global_bump(base, history, Increment.MINOR)
    assert tag.version == semver.Version(0, 1, 0)


def test_global_bump_selects_package_bump():
    base = default_tag()
    history = bump_from_commits(base, [fixture("feat")])
    tag = combine_global_bump(base, history, Increment.PATCH)
    assert tag.version == semver.Version(0, 1, 0)


def test_global_bump_equal_history_and_package():
    base = default_tag()
    history = bump_from_commits(base, [fixture("feat")])
    tag = combine_global_bump(base, history, Increment.MINOR)
    assert tag.version == semver.Version(0, 1, 0)


def test_global_bump_mixed_commit():
    base = parse_tag("0.1.0")
    tag = combine_global_bump(base, None, Increment.MINOR)
    assert tag.version == semver.Version(0, 2, 0)


def test_global_bump_without_anything_reraises_history_error():
    error = NoCommitFoundError()
    with pytest.raises(NoCommitFoundError) as info:
        combine_global_bump(parse_tag("1.0.0"), error, None)
    assert info.value is error


def test_global_bump_without_anything_raises():
    with pytest.raises(NoCommitFoundError):
        combine_global_bump(parse_tag("1.0.0"), None, None)