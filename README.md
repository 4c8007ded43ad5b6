# cogbump

A library for working with conventional commits: parse and verify commit
messages, work out the next semantic version from a list of commits, group
commits into releases and render changelogs from Jinja templates.

## Installation

```
pip install cogbump
```

## Commit messages

```python
from cogbump.commit import format_summary, parse, verify

verify("Alice", "feat(database): add postgresql driver", False)
commit = parse("fix(parser): handle empty input")
print(format_summary(commit))  # fix(parser): handle empty input
```

- `parse(message)` returns a `ConventionalCommit` (type, scope, summary,
  body, footers, breaking-change flag) or raises `CommitParseError`.
- `verify(author, message, ignore_merge_commit, commit_types)` drops lines
  starting with `#`, then parses the message. It returns the parsed `Commit`,
  returns `None` for a message starting with `Merge ` or `Pull request` when
  `ignore_merge_commit` is true, and raises a
  `cogbump.errors.ConventionalCommitError` subclass when the message is not a
  conventional commit or its type is not allowed.
- `commit_from_raw(raw, commit_types)` turns a `RawCommit` (oid, message,
  author, timestamp) into a `Commit`, raising `CommitFormatError` or
  `CommitTypeNotAllowedError`.

Allowed commit types come from a mapping of type name to `CommitConfig`
(`changelog_title`, `omit_from_changelog`, `bump_minor`, `bump_patch`).
When `commit_types` is omitted, `DEFAULT_COMMIT_TYPES` is used: `feat`
bumps the minor version, `fix` the patch version, and `chore`, `revert`,
`perf`, `docs`, `style`, `refactor`, `test`, `build` and `ci` bump nothing.

## Bumping versions

```python
from cogbump.tag import parse_tag
from cogbump.version import IncrementCommand, IncrementKind

tag = parse_tag("1.1.1-pre+10.1", None, None)
print(tag.patch_bump().version)  # 1.1.2
print(tag.bump(IncrementCommand(IncrementKind.MINOR)).version)  # 1.2.0
```

Bumps drop pre-release and build metadata. `Tag.bump` accepts an
`Increment` or an `IncrementCommand` of kind `MAJOR`, `MINOR`, `PATCH`,
`NO_BUMP` or `MANUAL`; the automatic kinds raise `ValueError`, since they
depend on commit history.

In `cogbump.bump`:

- `version_increment_from_commit_history(tag, commits, commit_types)`
  returns the `Increment` the commits call for. A breaking change gives
  `MAJOR` only once the major version is above `0`; otherwise a type with
  `bump_minor` gives `MINOR`, one with `bump_patch` gives `PATCH`, and any
  other commits give `NO_BUMP`. An empty list raises `NoCommitFoundError`.
- `bump_from_commits(tag, commits, commit_types)` applies that increment.
- `combine_global_bump(tag, history_tag, package_increment)` chooses a
  monorepo's global version from the version computed from its own history
  and the increment coming from its packages, keeping the greater one.

## Changelogs

```python
from cogbump.commit import RawCommit
from cogbump.release import release_from_commits
from cogbump.renderer import Renderer
from cogbump.tag import OidKind, OidOf, parse_tag

head = "b" * 40
first = "a" * 40
commits = [  # newest first
    (OidOf(parse_tag("1.0.0", head)), RawCommit(head, "feat: add parser", "Alice", 1441497364)),
    (OidOf(first, OidKind.FIRST_COMMIT), RawCommit(first, "fix: initial fix", "Alice", 1441497000)),
]
release = release_from_commits(commits, usernames={"Alice": "alice"})
print(Renderer().render(release))
```

- `release_from_commits` splits the pairs into releases ending at each tag
  and returns the newest, linked to earlier ones through `previous`. Commits
  that are not conventional are logged and skipped; omitted types and,
  optionally, merge commits are left out. It raises `EmptyReleaseError` when
  there is nothing to group.
- `cogbump.template` provides the built-in templates (`default`, `remote`,
  `full_hash` and their `package_` and `monorepo_` variants),
  `template_from_arg` for a built-in name or a custom template file, and the
  `RemoteContext`, `MonoRepoContext`, `PackageBumpContext` and
  `PackageContext` objects that templates are rendered with.
  `remote_context(remote, repository, owner)` needs all three parts or none.
- `Renderer` renders a release and its predecessors, separated by `- - -`,
  and offers the `upper_first` and `unscoped` template filters.
- `cogbump.changelog.into_markdown` renders with a template and an optional
  `ReleaseType`; `write_to_file` inserts the result after the first `- - -`
  separator of a changelog file, starting from a default header and footer
  when the file does not exist, and raises `SeparatorNotFoundError` when the
  file has no separator.

## What it does not do

cogbump does not read git repositories, create tags, run hooks, load a
configuration file or provide a command-line tool. Callers supply the
commits (as `RawCommit` values paired with `OidOf` bounds), the commit type
configuration and the author usernames themselves.

## Running the tests

```
pip install -e .[test]
pytest
```