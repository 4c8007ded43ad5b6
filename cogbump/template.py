"""Changelog templates and the contexts they are rendered with."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

from cogbump.errors import TemplateNotFoundError
from cogbump.tag import OidOf


class TemplateKind(enum.Enum):
    """A built-in changelog template, or a custom one read from a file."""

    DEFAULT = "default"
    FULL_HASH = "full_hash"
    REMOTE = "remote"
    PACKAGE_DEFAULT = "package_default"
    PACKAGE_FULL_HASH = "package_full_hash"
    PACKAGE_REMOTE = "package_remote"
    MONOREPO_DEFAULT = "monorepo_default"
    MONOREPO_FULL_HASH = "monorepo_full_hash"
    MONOREPO_REMOTE = "monorepo_remote"
    CUSTOM = "custom_template"


# Templates avoid newlines right after block tags so that they render the
# same whatever the environment's trim_blocks/lstrip_blocks settings.
_DATE = "{{ (date | string)[:10] }}"
_BREAKING = "{% if commit.breaking_change %}[**breaking**] {% endif %}"

_SIMPLE_HEADER = (
    "{% if version.tag %}## {{ version.tag }} - " + _DATE + "\n"
    "{% else %}## Unreleased ({{ from.id[:7] }}..{{ version.id[:7] }})\n"
    "{% endif %}"
)

_REMOTE_HEADER = (
    "{% if version.tag and from.tag %}"
    "## [{{ version.tag }}]({{ repository_url }}/compare/{{ from.tag }}..{{ version.tag }})"
    " - " + _DATE + "\n"
    "{% elif version.tag %}"
    "## [{{ version.tag }}]({{ repository_url }}/compare/{{ from.id }}..{{ version.tag }})"
    " - " + _DATE + "\n"
    "{% else %}"
    "## [Unreleased]({{ repository_url }}/compare/{{ from.id }}..{{ version.id }})\n"
    "{% endif %}"
)


def _commit_sections(scoped_line: str, unscoped_line: str) -> str:
    return (
        "{% for type, typed in commits | groupby('type') %}"
        "#### {{ type | upper_first }}\n"
        "{% for scope, scoped in typed | rejectattr('scope', 'none') | groupby('scope') %}"
        "{% for commit in scoped %}" + scoped_line + "\n{% endfor %}"
        "{% endfor %}"
        "{% for commit in typed | selectattr('scope', 'none') %}" + unscoped_line + "\n"
        "{% endfor %}"
        "{% endfor %}"
    )


_SIMPLE_AUTHOR = (
    "{% if commit.author %}*{{ commit.author }}*{% else %}{{ commit.signature }}{% endif %}"
)
_SIMPLE_TAIL = "{{ commit.summary }} - ({{ commit.id[:7] }}) - " + _SIMPLE_AUTHOR
_SIMPLE_COMMITS = _commit_sections(
    "- **({{ scope }})** " + _BREAKING + _SIMPLE_TAIL,
    "- " + _BREAKING + _SIMPLE_TAIL,
)

_FULL_HASH_AUTHOR = (
    "{% if commit.author %}@{{ commit.author }}{% else %}{{ commit.signature }}{% endif %}"
)
_FULL_HASH_COMMITS = _commit_sections(
    "- {{ commit.id }} - **({{ scope }})** " + _BREAKING + "{{ commit.summary }} - "
    + _FULL_HASH_AUTHOR,
    "- {{ commit.id }} - " + _BREAKING + "{{ commit.summary }} - " + _FULL_HASH_AUTHOR,
) + '{{ "\\n" }}'

_REMOTE_AUTHOR = (
    "{% if commit.author %}[@{{ commit.author }}]({{ platform }}/{{ commit.author }})"
    "{% else %}{{ commit.signature }}{% endif %}"
)
_REMOTE_TAIL = (
    "{{ commit.summary }} - ([{{ commit.id[:7] }}]({{ repository_url }}/commit/{{ commit.id }}))"
    " - " + _REMOTE_AUTHOR
)
_REMOTE_COMMITS = _commit_sections(
    "- **({{ scope }})** " + _BREAKING + _REMOTE_TAIL,
    "- " + _BREAKING + _REMOTE_TAIL,
)

_PACKAGES = (
    "{% if package_lock %}### Packages\n"
    "{% for package in packages %}"
    "- {{ package.package_name }} locked to {{ package.version.tag }}\n"
    "{% endfor %}"
    "{% else %}### Package updates\n"
    "{% for package in packages %}"
    "- {{ package.package_name }} bumped to {{ package.version.tag }}\n"
    "{% endfor %}"
    "{% endif %}"
    "### Global changes\n"
)

_TREE_LINK = "[{{ package.version.tag }}]({{ repository_url }}/tree/{{ package.version.tag }})"
_REMOTE_PACKAGES = (
    "{% if package_lock %}### Packages\n"
    "{% for package in packages %}"
    "- [{{ package.version.tag }}]({{ package.package_path }}) locked to " + _TREE_LINK + "\n"
    "{% endfor %}"
    "{% else %}### Package updates\n"
    "{% for package in packages %}"
    "- [{{ package.version.tag }}]({{ package.package_path }}) bumped to "
    "{% if package.from %}[{{ package.version.tag }}]({{ repository_url }}/compare/"
    "{{ package.from.tag }}..{{ package.version.tag }})"
    "{% else %}" + _TREE_LINK + "{% endif %}\n"
    "{% endfor %}"
    "{% endif %}"
    "### Global changes\n"
)

_BUILTIN_TEMPLATES: dict[TemplateKind, str] = {
    TemplateKind.DEFAULT: _SIMPLE_HEADER + _SIMPLE_COMMITS,
    TemplateKind.FULL_HASH: _FULL_HASH_COMMITS,
    TemplateKind.REMOTE: _REMOTE_HEADER + _REMOTE_COMMITS,
    TemplateKind.PACKAGE_DEFAULT: _SIMPLE_HEADER + _SIMPLE_COMMITS,
    TemplateKind.PACKAGE_FULL_HASH: _FULL_HASH_COMMITS,
    TemplateKind.PACKAGE_REMOTE: _REMOTE_HEADER + _REMOTE_COMMITS,
    TemplateKind.MONOREPO_DEFAULT: _SIMPLE_HEADER + _PACKAGES + _SIMPLE_COMMITS,
    TemplateKind.MONOREPO_FULL_HASH: _PACKAGES + _FULL_HASH_COMMITS,
    TemplateKind.MONOREPO_REMOTE: _REMOTE_HEADER + _REMOTE_PACKAGES + _REMOTE_COMMITS,
}


def kind_from_arg(value: str) -> TemplateKind:
    """Return the built-in template named ``value``, or CUSTOM if it is an existing path."""
    if value != TemplateKind.CUSTOM.value:
        try:
            return TemplateKind(value)
        except ValueError:
            pass
    if not Path(value).exists():
        raise TemplateNotFoundError(value)
    return TemplateKind.CUSTOM


@dataclass
class RemoteContext:
    """Remote repository information added to a template's context."""

    remote: str
    repository: str
    owner: str

    def to_context(self) -> dict[str, Any]:
        return {
            "platform": f"https://{self.remote}",
            "owner": self.owner,
            "repository_url": f"https://{self.remote}/{self.owner}/{self.repository}",
        }


def remote_context(
    remote: str | None, repository: str | None, owner: str | None
) -> RemoteContext | None:
    """Return a RemoteContext when all three parts are set, None when none are."""
    parts = (remote, repository, owner)
    if all(part is not None for part in parts):
        return RemoteContext(remote, repository, owner)
    if all(part is None for part in parts):
        return None
    raise ValueError(
        "Changelog remote context should be set. Missing one of 'remote', "
        "'repository', 'owner' in changelog configuration"
    )


@dataclass
class Template:
    """A changelog template, with remote information when it needs some."""

    kind: TemplateKind = TemplateKind.DEFAULT
    remote_context: RemoteContext | None = None
    path: Path | None = None

    def __post_init__(self) -> None:
        if self.kind is TemplateKind.CUSTOM and self.path is None:
            raise ValueError("a custom template needs a path")
        if self.path is not None:
            self.path = Path(self.path)

    @property
    def name(self) -> str:
        return self.kind.value

    def load(self) -> str:
        """Return the template source."""
        if self.kind is TemplateKind.CUSTOM:
            return self.path.read_bytes().decode("utf-8", errors="replace")
        return _BUILTIN_TEMPLATES[self.kind]


def template_from_arg(
    value: str | PathLike, remote_context: RemoteContext | None = None
) -> Template:
    """Return the template named by ``value``: a built-in name or a file path."""
    value = str(value)
    kind = kind_from_arg(value)
    path = Path(value) if kind is TemplateKind.CUSTOM else None
    return Template(kind=kind, remote_context=remote_context, path=path)


@dataclass
class PackageBumpContext:
    """A package's new version within a monorepo release."""

    package_name: str
    package_path: str
    version: OidOf
    from_ref: OidOf | None = None

    def to_context(self) -> dict[str, Any]:
        return {
            "package_name": self.package_name,
            "package_path": self.package_path,
            "version": self.version.serialize(),
            "from": self.from_ref.serialize() if self.from_ref is not None else None,
        }


@dataclass
class MonoRepoContext:
    """The package bumps that go with a global monorepo release."""

    package_lock: bool = False
    packages: list[PackageBumpContext] = field(default_factory=list)

    def to_context(self) -> dict[str, Any]:
        return {
            "package_lock": self.package_lock,
            "packages": [package.to_context() for package in self.packages],
        }


@dataclass
class PackageContext:
    """The package a package changelog is rendered for."""

    package_name: str

    def to_context(self) -> dict[str, Any]:
        return {"package_name": self.package_name}