import jinja2
import pytest

from cogbump.errors import TemplateNotFoundError
from cogbump.tag import OidOf, parse_tag
from cogbump.template import (
    MonoRepoContext,
    PackageBumpContext,
    PackageContext,
    RemoteContext,
    Template,
    TemplateKind,
    kind_from_arg,
    remote_context,
    template_from_arg,
)

COMMIT_ID = "17f7e23081db15e9318aeb37529b1d473cf41cbe"


def render(template: Template, context: dict, **env_options) -> str:
    env = jinja2.Environment(**env_options)
    env.filters["upper_first"] = lambda s: s[:1].upper() + s[1:]
    return env.from_string(template.load()).render(**context)


def release_context() -> dict:
    def commit(commit_type, scope, summary, username):
        return {
            "id": COMMIT_ID,
            "author": username,
            "signature": "Jane Doe",
            "type": commit_type,
            "date": "2015-09-05T23:56:04",
            "scope": scope,
            "summary": summary,
            "body": "the body",
            "breaking_change": False,
            "footer": [{"token": "token", "content": "content"}],
        }

    return {
        "version": OidOf(parse_tag("1.0.0", "9bb5fac")).serialize(),
        "from": OidOf(parse_tag("0.1.0", "fae3a28")).serialize(),
        "date": "2015-09-05T23:56:04",
        "commits": [
            commit("Bug Fixes", "parser", "fix parser implementation", "jdoe"),
            commit("Features", None, "awesome feature", None),
            commit("Features", "parser", "implement the changelog generator", "jdoe"),
        ],
    }


def monorepo_context(lock: bool) -> MonoRepoContext:
    def package(name, version, previous):
        return PackageBumpContext(
            package_name=name,
            package_path=f"crates/{name}",
            version=OidOf(parse_tag(version, "fae3a28")),
            from_ref=None if lock else OidOf(parse_tag(previous, "fae3a28")),
        )

    return MonoRepoContext(
        package_lock=lock,
        packages=[package("one", "0.1.0", "0.2.0"), package("two", "0.2.0", "0.3.0")],
    )


@pytest.mark.parametrize("kind", [k for k in TemplateKind if k is not TemplateKind.CUSTOM])
def test_builtin_names_round_trip(kind):
    assert kind_from_arg(kind.value) is kind
    assert template_from_arg(kind.value).kind is kind


def test_builtin_name_lookup():
    assert kind_from_arg("monorepo_full_hash") is TemplateKind.MONOREPO_FULL_HASH
    assert kind_from_arg("package_remote") is TemplateKind.PACKAGE_REMOTE


def test_missing_custom_template(tmp_path):
    missing = tmp_path / "nope.tera"
    with pytest.raises(TemplateNotFoundError) as info:
        template_from_arg(str(missing))
    assert str(missing) in str(info.value)


def test_custom_template_loads_file(tmp_path):
    path = tmp_path / "mine.tera"
    path.write_text("{{ version.tag }} custom")
    template = template_from_arg(str(path))
    assert template.kind is TemplateKind.CUSTOM
    assert template.name == "custom_template"
    assert template.load() == "{{ version.tag }} custom"


def test_custom_kind_needs_path():
    with pytest.raises(ValueError):
        Template(kind=TemplateKind.CUSTOM)


def test_default_template_kind():
    assert Template().kind is TemplateKind.DEFAULT
    assert Template().name == "default"


def test_remote_context_all_none():
    assert remote_context(None, None, None) is None


@pytest.mark.parametrize(
    "parts",
    [("example.com", None, None), (None, "repo", "owner"), ("example.com", "repo", None)],
)
def test_remote_context_partial_raises(parts):
    with pytest.raises(ValueError):
        remote_context(*parts)


def test_remote_context_to_context():
    context = remote_context("example.com", "repo", "owner").to_context()
    assert context["platform"] == "https://example.com"
    assert context["owner"] == "owner"
    assert context["repository_url"] == "https://example.com/owner/repo"


def test_package_context():
    assert PackageContext("one").to_context() == {"package_name": "one"}


def test_package_bump_context_serializes_bounds():
    version = OidOf(parse_tag("0.1.0", "abc"))
    previous = OidOf(parse_tag("0.0.1"))
    context = PackageBumpContext("one", "crates/one", version, previous).to_context()
    assert context["version"] == version.serialize()
    assert context["from"] == previous.serialize()
    assert PackageBumpContext("one", "crates/one", version).to_context()["from"] is None


def test_monorepo_context():
    context = monorepo_context(lock=True).to_context()
    assert context["package_lock"] is True
    assert [p["package_name"] for p in context["packages"]] == ["one", "two"]


def test_default_template_renders():
    output = render(Template(), release_context())
    assert output == (
        "## 1.0.0 - 2015-09-05\n"
        "#### Bug Fixes\n"
        "- **(parser)** fix parser implementation - (17f7e23) - *jdoe*\n"
        "#### Features\n"
        "- **(parser)** implement the changelog generator - (17f7e23) - *jdoe*\n"
        "- awesome feature - (17f7e23) - Jane Doe\n"
    )


def test_monorepo_full_hash_template_renders_locked_packages():
    context = {**release_context(), **monorepo_context(lock=True).to_context()}
    output = render(Template(kind=TemplateKind.MONOREPO_FULL_HASH), context)
    assert output == (
        "### Packages\n"
        "- one locked to 0.1.0\n"
        "- two locked to 0.2.0\n"
        "### Global changes\n"
        "#### Bug Fixes\n"
        f"- {COMMIT_ID} - **(parser)** fix parser implementation - @jdoe\n"
        "#### Features\n"
        f"- {COMMIT_ID} - **(parser)** implement the changelog generator - @jdoe\n"
        f"- {COMMIT_ID} - awesome feature - Jane Doe\n"
        "\n"
    )


@pytest.mark.parametrize("kind", [k for k in TemplateKind if k is not TemplateKind.CUSTOM])
def test_templates_ignore_block_trimming(kind):
    context = {
        **release_context(),
        **monorepo_context(lock=False).to_context(),
        **RemoteContext("example.com", "repo", "owner").to_context(),
        **PackageContext("one").to_context(),
    }
    template = Template(kind=kind)
    plain = render(template, context)
    trimmed = render(template, context, trim_blocks=True, lstrip_blocks=True)
    assert plain == trimmed
    assert "fix parser implementation" in plain


def test_package_templates_match_standard_ones():
    context = {**release_context(), **PackageContext("one").to_context()}
    standard = render(Template(kind=TemplateKind.DEFAULT), context)
    package = render(Template(kind=TemplateKind.PACKAGE_DEFAULT), context)
    assert package == standard