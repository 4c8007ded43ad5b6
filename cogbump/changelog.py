"""Writing rendered releases into a changelog file."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from cogbump.errors import SeparatorNotFoundError
from cogbump.release import Release
from cogbump.renderer import Renderer
from cogbump.template import MonoRepoContext, PackageContext, Template

CHANGELOG_SEPARATOR = "- - -"

DEFAULT_HEADER = (
    "# Changelog\nAll notable changes to this project will be documented in this file. "
    "See conventional commits for commit guidelines.\n\n- - -\n"
)

DEFAULT_FOOTER = "Changelog generated by cogbump."


@dataclass(frozen=True)
class ReleaseType:
    """A standard, monorepo-global or package release, with its extra context."""

    context: MonoRepoContext | PackageContext | None = None

    @classmethod
    def standard(cls) -> ReleaseType:
        return cls()

    @classmethod
    def monorepo(cls, context: MonoRepoContext) -> ReleaseType:
        return cls(context)

    @classmethod
    def package(cls, context: PackageContext) -> ReleaseType:
        return cls(context)

    def apply(self, renderer: Renderer) -> Renderer:
        """Add this release type's context to ``renderer``."""
        if isinstance(self.context, MonoRepoContext):
            return renderer.with_monorepo_context(self.context)
        if isinstance(self.context, PackageContext):
            return renderer.with_package_context(self.context)
        return renderer


def _release_type(
    context: ReleaseType | MonoRepoContext | PackageContext | None,
) -> ReleaseType:
    if isinstance(context, ReleaseType):
        return context
    return ReleaseType(context)


def into_markdown(
    release: Release,
    template: Template | None = None,
    context: ReleaseType | MonoRepoContext | PackageContext | None = None,
) -> str:
    """Render ``release`` and its predecessors with ``template``."""
    renderer = _release_type(context).apply(Renderer(template))
    return renderer.render(release)


def write_to_file(
    release: Release,
    path: str | PathLike,
    template: Template | None = None,
    context: ReleaseType | MonoRepoContext | PackageContext | None = None,
) -> None:
    """Insert the rendered release right after the first separator of the changelog.

    A missing or unreadable file starts from the default header and footer;
    a file without a separator raises SeparatorNotFoundError.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        content = DEFAULT_HEADER + DEFAULT_FOOTER

    changelog = into_markdown(release, template, context)
    index = content.find(CHANGELOG_SEPARATOR)
    if index < 0:
        raise SeparatorNotFoundError(path)

    cut = index + len(CHANGELOG_SEPARATOR)
    path.write_text(
        content[:cut] + "\n" + changelog + "\n- - -\n" + content[cut:],
        encoding="utf-8",
    )