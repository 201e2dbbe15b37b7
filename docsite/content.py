from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .errors import DocumentNotFound, FrontmatterError
from .frontmatter import meta_int, meta_str, parse_frontmatter
from .utils import format_title

EXTENSIONS = (".mdx", ".md")
INDEX = "index"


@dataclass
class Document:
    slug: str
    path: Path
    title: str
    body: str
    description: Optional[str] = None
    order: Optional[int] = None
    frontmatter: dict = field(default_factory=dict)


@dataclass
class DocNode:
    title: str
    slug: tuple[str, ...]
    path: Path
    order: Optional[int] = None
    description: Optional[str] = None


@dataclass
class SectionNode:
    title: str
    slug: tuple[str, ...]
    children: list["TreeNode"] = field(default_factory=list)
    order: Optional[int] = None
    description: Optional[str] = None


TreeNode = Union[DocNode, SectionNode]


def _sort_key(node: TreeNode):
    order = node.order if node.order is not None else sys.maxsize
    return (order, node.title.casefold())


class ContentStore:
    """Markdown/MDX sources under one directory, addressed by slug."""

    def __init__(self, content_dir: Path):
        self.content_dir = Path(content_dir)

    def _candidates(self, slug: str) -> list[Path]:
        if not slug:
            return [self.content_dir / f"{INDEX}{ext}" for ext in EXTENSIONS]
        base = self.content_dir.joinpath(*slug.split("/"))
        direct = [base.with_name(base.name + ext) for ext in EXTENSIONS]
        return direct + [base / f"{INDEX}{ext}" for ext in EXTENSIONS]

    @staticmethod
    def _safe(slug: str) -> bool:
        if not slug:
            return True
        if "\\" in slug or slug.startswith("/"):
            return False
        return all(part not in ("", ".", "..") for part in slug.split("/"))

    def resolve_path(self, slug: str) -> Path:
        if self._safe(slug):
            for candidate in self._candidates(slug):
                if candidate.is_file():
                    return candidate
        raise DocumentNotFound(slug)

    def exists(self, slug: str) -> bool:
        try:
            self.resolve_path(slug)
        except DocumentNotFound:
            return False
        return True

    def load(self, slug: str) -> Document:
        path = self.resolve_path(slug)
        data, body = parse_frontmatter(path.read_text(encoding="utf-8"))
        fallback = format_title(slug.rsplit("/", 1)[-1]) if slug else "Overview"
        return Document(
            slug=slug,
            path=path,
            title=meta_str(data, "title") or fallback,
            body=body,
            description=meta_str(data, "description"),
            order=meta_int(data, "order"),
            frontmatter=data,
        )

    def all_slugs(self) -> list[str]:
        if not self.content_dir.is_dir():
            return []
        slugs = set()
        for path in self.content_dir.rglob("*"):
            if not path.is_file() or path.suffix not in EXTENSIONS:
                continue
            parts = list(path.relative_to(self.content_dir).with_suffix("").parts)
            if parts[-1] == INDEX and len(parts) > 1:
                parts.pop()
            slugs.add("/".join(parts))
        return sorted(slugs)

    # Directory tree

    def content_tree(self) -> list[TreeNode]:
        if not self.content_dir.is_dir():
            return []
        return self._read_dir(self.content_dir, ())

    def _doc_node(self, path: Path, slug: tuple[str, ...], fallback: str) -> DocNode:
        try:
            data, _ = parse_frontmatter(path.read_text(encoding="utf-8"))
        except (FrontmatterError, OSError, UnicodeDecodeError):
            # listed anyway; the page build reports the failure
            data = {}
        return DocNode(
            title=meta_str(data, "title") or fallback,
            slug=slug,
            path=path,
            order=meta_int(data, "order"),
            description=meta_str(data, "description"),
        )

    def _read_dir(self, directory: Path, slug: tuple[str, ...]) -> list[TreeNode]:
        docs: list[TreeNode] = []
        sections: list[TreeNode] = []
        seen: set[tuple[str, ...]] = set()
        for entry in sorted(directory.iterdir(), key=lambda p: (p.stem, p.suffix != ".mdx")):
            if entry.is_dir():
                sections.append(self._section_node(entry, slug + (entry.name,)))
                continue
            if not entry.is_file() or entry.suffix not in EXTENSIONS:
                continue
            stem = entry.stem
            if stem == INDEX:
                doc_slug = slug
                fallback = format_title(slug[-1]) if slug else "Overview"
            else:
                doc_slug = slug + (stem,)
                fallback = format_title(stem)
            # a.mdx wins over a.md
            if doc_slug in seen:
                continue
            seen.add(doc_slug)
            docs.append(self._doc_node(entry, doc_slug, fallback))
        return sorted(docs + sections, key=_sort_key)

    def _section_node(self, directory: Path, slug: tuple[str, ...]) -> SectionNode:
        children = self._read_dir(directory, slug)
        index = next(
            (c for c in children if isinstance(c, DocNode) and c.slug == slug), None
        )
        return SectionNode(
            title=index.title if index else format_title(slug[-1]),
            slug=slug,
            children=children,
            order=index.order if index else None,
            description=index.description if index else None,
        )
