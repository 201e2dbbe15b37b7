import json

import pytest

from docsite.content import ContentStore
from docsite.errors import NavigationError
from docsite.navigation import (
    load_navigation,
    navigation_from_content,
    navigation_from_dict,
    resolve_navigation,
)


@pytest.fixture
def sample_nav(sample_root):
    return load_navigation(sample_root / "navigation.yaml")


def _nav(items):
    return {"navbar": [{"id": "main", "title": "Main", "sections": [{"title": "S", "items": items}]}]}


def test_build_slugs_skip_external_and_coming_soon(sample_nav):
    assert sample_nav.build_slugs() == [
        "readme",
        "installation",
        "getting-started",
        "cli-references",
        "javascript",
        "javascript-node-api",
        "javascript-node-buffer",
        "python",
        "security",
        "performance",
    ]


def test_leaf_slugs(sample_nav):
    leaves = sample_nav.leaf_slugs()
    assert "javascript-node-buffer" in leaves
    assert "javascript" not in leaves
    assert "javascript-node-api" not in leaves
    assert "binary-report" not in leaves


def test_item_context_path(sample_nav):
    ctx = next(c for c in sample_nav.iter_items() if c.item.slug == "javascript-node-buffer")
    assert ctx.path == "JavaScript > Node API > Buffer"
    assert ctx.depth == 3
    assert ctx.navbar.id == "guides-by-language"
    assert ctx.section.title == "Supported Languages"


def test_navbar_for_slug(sample_nav):
    assert sample_nav.navbar_for_slug("javascript-node-buffer").id == "guides-by-language"
    assert sample_nav.navbar_for_slug("security").id == "architecture"
    assert sample_nav.navbar_for_slug("unknown").id == "runtime"
    assert sample_nav.navbar_for_slug(None).id == "runtime"


def test_navbar_href_uses_first_buildable_item(sample_nav):
    guides = sample_nav.navbar[1]
    assert sample_nav.navbar_href(guides) == "/docs/javascript.html"


def test_external_item_url(sample_nav):
    item = sample_nav.find_item("binary-report")
    assert item.external
    assert item.url == "https://dl.example.dev/cli/build-report.html"
    assert not item.buildable


def test_json_navigation(tmp_path):
    path = tmp_path / "nav.json"
    path.write_text(json.dumps(_nav([{"title": "A", "slug": "a"}])), encoding="utf-8")
    assert load_navigation(path).build_slugs() == ["a"]


def test_missing_title_rejected():
    with pytest.raises(NavigationError):
        navigation_from_dict(_nav([{"slug": "a"}]))


def test_external_requires_href():
    with pytest.raises(NavigationError):
        navigation_from_dict(_nav([{"title": "A", "slug": "a", "external": True}]))


def test_bad_slug_rejected():
    with pytest.raises(NavigationError):
        navigation_from_dict(_nav([{"title": "A", "slug": "../etc"}]))


def test_duplicate_slugs_rejected():
    items = [{"title": "A", "slug": "a"}, {"title": "B", "slug": "b", "children": [{"title": "A2", "slug": "a"}]}]
    with pytest.raises(NavigationError, match="duplicate"):
        navigation_from_dict(_nav(items))


def test_nesting_limited_to_three_levels():
    deep = {"title": "1", "slug": "l1", "children": [
        {"title": "2", "slug": "l2", "children": [
            {"title": "3", "slug": "l3", "children": [
                {"title": "4", "slug": "l4"}]}]}]}
    with pytest.raises(NavigationError, match="nested"):
        navigation_from_dict(_nav([deep]))


def test_malformed_navigation_file(tmp_path):
    path = tmp_path / "navigation.yaml"
    path.write_text("navbar: [unclosed\n", encoding="utf-8")
    with pytest.raises(NavigationError, match="Malformed"):
        load_navigation(path)


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_navigation_from_content(tmp_path):
    content = tmp_path / "docs"
    _write(content / "intro.md", "---\ntitle: Intro\norder: 1\n---\n")
    _write(content / "faq.md", "# FAQ\n")
    _write(content / "guides" / "index.md", "---\ntitle: All Guides\n---\n")
    _write(content / "guides" / "deploy.md", "---\norder: 2\n---\n")
    _write(content / "guides" / "build.md", "---\norder: 1\n---\n")
    _write(content / "guides" / "advanced" / "tuning.md", "---\ntitle: Tuning\n---\n")

    nav = navigation_from_content(ContentStore(content))
    assert [n.id for n in nav.navbar] == ["docs", "guides"]
    assert nav.build_slugs() == [
        "intro",
        "faq",
        "guides",
        "guides/build",
        "guides/deploy",
        # advanced/ has no index page, its children are hoisted
        "guides/advanced/tuning",
    ]
    assert nav.navbar[1].title == "All Guides"


def test_resolve_navigation_falls_back_to_content(site):
    site.navigation_file.unlink()
    store = ContentStore(site.content_dir)
    nav = resolve_navigation(site, store)
    assert sorted(nav.build_slugs()) == ["config", "intro", "setup", "setup-linux"]


def test_resolve_navigation_uses_file(site):
    nav = resolve_navigation(site, ContentStore(site.content_dir))
    assert [n.id for n in nav.navbar] == ["guide", "reference"]
