"""Rendering releases into changelog text with Jinja templates."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, TemplateError

from cogbump.commit import CommitConfig
from cogbump.errors import ChangelogError
from cogbump.release import Release, serialize_release
from cogbump.template import MonoRepoContext, PackageContext, Template

RELEASE_SEPARATOR = "\n- - -\n\n"


def _render_error(err: Exception) -> ChangelogError:
    return ChangelogError(f"failed to render changelog: \n\t{err}\n")


def upper_first(value: Any) -> str:
    """Return ``value`` with its first character in upper case."""
    if not isinstance(value, str):
        raise TypeError(
            f"filter `upper_first` expects a string for `value`, got {value!r}"
        )
    return value[:1].upper() + value[1:]


def _scope_of(item: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get("scope")
    return getattr(item, "scope", None)


def unscoped(commits: Any, value: Any = None) -> list[Any]:
    """Keep the commits without a scope, or those with one when ``value`` is set."""
    if not isinstance(commits, (list, tuple)):
        raise TypeError(
            f"filter `unscoped` expects an array for `scope`, got {commits!r}"
        )
    if not commits:
        return list(commits)
    if value is None:
        return [commit for commit in commits if _scope_of(commit) is None]
    return [commit for commit in commits if _scope_of(commit) is not None]


class Renderer:
    """Renders releases with a changelog template and an accumulated context."""

    def __init__(
        self,
        template: Template | None = None,
        commit_types: Mapping[str, CommitConfig] | None = None,
    ) -> None:
        self.template = template if template is not None else Template()
        self.commit_types = commit_types
        self.context: dict[str, Any] = {}

        try:
            source = self.template.load()
        except OSError as err:
            raise _render_error(err) from err

        environment = Environment(autoescape=False, keep_trailing_newline=True)
        environment.filters["upper_first"] = upper_first
        environment.filters["unscoped"] = unscoped
        try:
            self._compiled = environment.from_string(source)
        except TemplateError as err:
            raise _render_error(err) from err

    def with_package_context(self, context: PackageContext) -> Renderer:
        """Add a package's information to the context and return the renderer."""
        self.context.update(context.to_context())
        return self

    def with_monorepo_context(self, context: MonoRepoContext) -> Renderer:
        """Add monorepo package bumps to the context and return the renderer."""
        self.context.update(context.to_context())
        return self

    def render(self, release: Release) -> str:
        """Render ``release`` and every earlier release chained to it."""
        return RELEASE_SEPARATOR.join(
            self._render_release(item) for item in release.releases()
        )

    def _render_release(self, release: Release) -> str:
        self.context.update(serialize_release(release, self.commit_types))
        if self.template.remote_context is not None:
            self.context.update(self.template.remote_context.to_context())
        try:
            return self._compiled.render(self.context)
        except (TemplateError, TypeError) as err:
            raise _render_error(err) from err