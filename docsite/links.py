from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import DocsiteError
from .frontmatter import parse_frontmatter
from .renderer import render_markdown

MD_LINK = re.compile(r"\[(?P<text>[^\]]*)\]\((?P<link>[^)\s]+)(?:\s+\"[^\"]*\")?\)")
HREF_LINK = re.compile(r"""href=["'](?P<link>[^"']+)["']""")
DOCS_LINK = re.compile(r"^/docs/(?P<slug>[^#?]+?)(?:\.html)?(?:#(?P<anchor>[^?]*))?$")
FENCE = re.compile(r"(```|~~~)[\s\S]*?\1")


@dataclass(frozen=True)
class LinkProblem:
    source: str
    target: str
    reason: str

    def __str__(self) -> str:
        return f"{self.source}: {self.reason} {self.target}"


def check_navigation(navigation, store) -> list[LinkProblem]:
    """Buildable navigation slugs that have no content file."""
    return [
        LinkProblem("navigation", slug, "missing content for")
        for slug in navigation.build_slugs()
        if not store.exists(slug)
    ]


def _links(body: str):
    body = FENCE.sub("", body)
    for m in MD_LINK.finditer(body):
        yield m.group("link")
    for m in HREF_LINK.finditer(body):
        yield m.group("link")


def check_content_links(navigation, store, redirects=(), toc_depth: str = "1-6") -> list[LinkProblem]:
    """Internal ``/docs/<slug>`` links in content that point nowhere."""
    problems: list[LinkProblem] = []
    anchors: dict[str, set[str]] = {}

    def anchors_for(slug: str) -> set[str]:
        if slug not in anchors:
            try:
                _, toc = render_markdown(store.load(slug).body, toc_depth, heading_anchors=False)
            except (DocsiteError, OSError, UnicodeDecodeError):
                toc = []
            anchors[slug] = {entry.id for entry in toc}
        return anchors[slug]

    for source in navigation.build_slugs():
        try:
            _, body = parse_frontmatter(store.resolve_path(source).read_text(encoding="utf-8"))
        except (DocsiteError, OSError, UnicodeDecodeError):
            continue
        for link in _links(body):
            m = DOCS_LINK.match(link)
            if not m:
                continue
            slug, anchor = m.group("slug"), m.group("anchor")
            if slug in redirects:
                continue
            if not store.exists(slug):
                problems.append(LinkProblem(source, link, "broken link to"))
            elif anchor and anchor not in anchors_for(slug):
                problems.append(LinkProblem(source, link, "missing anchor in"))
    return problems
