import pytest

from docsite import templates
from docsite.config import SiteConfig
from docsite.navigation import load_navigation
from docsite.renderer import TocEntry


@pytest.fixture
def nav(sample_root):
    return load_navigation(sample_root / "navigation.yaml")


@pytest.fixture
def config(tmp_path):
    return SiteConfig.for_root(tmp_path, site_name="Runtime <Docs>")


def test_navbar_marks_active_section(nav):
    html = templates.navbar_html(nav, "python", "Docs")
    assert 'class="navbar-link active navbar-left" data-nav-id="guides-by-language"' in html
    assert 'class="navbar-link navbar-left" data-nav-id="runtime"' in html
    assert 'id="search-input"' in html


def test_sidebar_shows_only_current_section(nav):
    html = templates.sidebar_html(nav, "javascript-node-buffer")
    assert "Supported Languages" in html
    assert "Installation" not in html


def test_sidebar_expands_ancestors_of_active_item(nav):
    html = templates.sidebar_html(nav, "javascript-node-buffer")
    assert 'id="javascript-children" class="nav-children"' in html
    assert 'id="javascript-node-api-children" class="nav-children"' in html
    assert 'class="nav-link active" href="/docs/javascript-node-buffer.html"' in html
    assert 'aria-current="page"' in html


def test_sidebar_collapses_other_branches(nav):
    html = templates.sidebar_html(nav, "python")
    assert 'id="javascript-children" class="nav-children hidden"' in html


def test_coming_soon_items_have_no_link(nav):
    html = templates.sidebar_html(nav, "javascript")
    assert "coming-soon" in html
    assert 'title="Available soon"' in html
    assert "/docs/javascript-node-crypto.html" not in html


def test_external_items_open_in_new_tab(nav):
    html = templates.sidebar_html(nav, "readme")
    assert 'href="https://dl.example.dev/cli/build-report.html" target="_blank"' in html


def test_toc_html():
    toc = [TocEntry("install", "Install", 2), TocEntry("from-source", "From source", 3)]
    html = templates.toc_html(toc)
    assert 'class="toc-link toc-level-2 active"' in html
    assert 'href="#from-source"' in html
    assert "toc-level-3" in html


def test_empty_toc():
    assert "No sections found" in templates.toc_html([])


def test_page_frame_escapes_titles(config, nav):
    html = templates.page_frame(config, nav, "A & B", "<p>body</p>", "python")
    assert "<title>A &amp; B - Runtime &lt;Docs&gt;</title>" in html
    assert "<p>body</p>" in html
    assert 'href="/assets/pygments.css"' in html


def test_redirect_page():
    html = templates.redirect_page("/docs/readme.html", "README")
    assert 'http-equiv="refresh" content="0; url=/docs/readme.html"' in html
    assert ">README</a>" in html


def test_not_found_page(config, nav):
    assert "Page not found" in templates.not_found_page(config, nav)


def test_index_page(config):
    html = templates.index_page(config, "/docs/readme.html")
    assert 'href="/docs/readme.html">View Documentation</a>' in html
