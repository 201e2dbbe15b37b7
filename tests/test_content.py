import pytest

from docsite.content import ContentStore, DocNode, SectionNode
from docsite.errors import DocumentNotFound


def _write(path, text=""):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


@pytest.fixture
def store(tmp_path):
    root = tmp_path / "docs"
    _write(root / "index.md", "---\ntitle: Home\n---\nwelcome")
    _write(root / "guide.md", "plain md")
    _write(root / "guide.mdx", "---\ntitle: Guide MDX\n---\nmdx wins")
    _write(root / "api" / "index.mdx", "---\ntitle: API\norder: 1\n---\n")
    _write(root / "api" / "client.md", "---\ndescription: The client\n---\n")
    return ContentStore(root)


def test_load_prefers_mdx(store):
    doc = store.load("guide")
    assert doc.path.name == "guide.mdx"
    assert doc.title == "Guide MDX"
    assert doc.body == "mdx wins"


def test_directory_index(store):
    doc = store.load("api")
    assert doc.path.name == "index.mdx"
    assert doc.title == "API"
    assert doc.order == 1


def test_root_index(store):
    assert store.load("").title == "Home"


def test_title_fallback(store):
    doc = store.load("api/client")
    assert doc.title == "Client"
    assert doc.description == "The client"


def test_missing_document(store):
    with pytest.raises(DocumentNotFound) as exc:
        store.load("nope")
    assert exc.value.slug == "nope"
    assert not store.exists("nope")


@pytest.mark.parametrize("slug", ["../secret", "api/../../x", "/etc/passwd", "api//client", "a\\b", "./guide"])
def test_unsafe_slugs_rejected(store, tmp_path, slug):
    _write(tmp_path / "secret.md", "nope")
    with pytest.raises(DocumentNotFound):
        store.resolve_path(slug)


def test_all_slugs(store):
    assert store.all_slugs() == ["api", "api/client", "guide", "index"]


def test_all_slugs_without_directory(tmp_path):
    assert ContentStore(tmp_path / "missing").all_slugs() == []


def test_content_tree_order(store):
    tree = store.content_tree()
    # explicit order first, then title
    assert [node.title for node in tree] == ["API", "Guide MDX", "Home"]
    api = tree[0]
    assert isinstance(api, SectionNode)
    assert api.order == 1
    assert [c.slug for c in api.children] == [("api",), ("api", "client")]
    assert all(isinstance(c, DocNode) for c in api.children)
