"""
Navigation tree: navbar sections hold sidebar sections which hold items.

Items nest at most three levels deep (item, child, grandchild). Items that are
external links or marked as coming soon are listed but never built.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

import yaml

from .errors import NavigationError
from .schema import validate

MAX_DEPTH = 3


@dataclass
class NavItem:
    title: str
    slug: str
    href: Optional[str] = None
    external: bool = False
    coming_soon: bool = False
    description: Optional[str] = None
    children: list["NavItem"] = field(default_factory=list)

    @property
    def url(self) -> str:
        if self.external and self.href:
            return self.href
        return f"/docs/{self.slug}.html"

    @property
    def buildable(self) -> bool:
        return not (self.external or self.coming_soon)


@dataclass
class NavSection:
    title: str
    items: list[NavItem] = field(default_factory=list)


@dataclass
class NavbarSection:
    id: str
    title: str
    sections: list[NavSection] = field(default_factory=list)
    href: Optional[str] = None
    position: str = "left"


@dataclass
class ItemContext:
    item: NavItem
    section: NavSection
    navbar: NavbarSection
    parents: tuple[NavItem, ...] = ()

    @property
    def depth(self) -> int:
        return len(self.parents) + 1

    @property
    def path(self) -> str:
        return " > ".join([p.title for p in self.parents] + [self.item.title])


def contains_slug(item: NavItem, slug: str) -> bool:
    if item.slug == slug:
        return True
    return any(contains_slug(child, slug) for child in item.children)


@dataclass
class Navigation:
    navbar: list[NavbarSection] = field(default_factory=list)

    def iter_items(self) -> Iterator[ItemContext]:
        """Depth-first walk over every item in declaration order."""

        def walk(items, section, nav, parents):
            for item in items:
                yield ItemContext(item, section, nav, parents)
                yield from walk(item.children, section, nav, parents + (item,))

        for nav in self.navbar:
            for section in nav.sections:
                yield from walk(section.items, section, nav, ())

    def build_slugs(self) -> list[str]:
        slugs: list[str] = []

        def collect(item: NavItem):
            if not item.buildable:
                return
            slugs.append(item.slug)
            for child in item.children:
                collect(child)

        for nav in self.navbar:
            for section in nav.sections:
                for item in section.items:
                    collect(item)
        return slugs

    def leaf_slugs(self) -> list[str]:
        build = set(self.build_slugs())
        leaves = []
        for ctx in self.iter_items():
            item = ctx.item
            if item.slug not in build:
                continue
            if not any(child.slug in build for child in item.children):
                leaves.append(item.slug)
        return leaves

    def find_item(self, slug: str) -> Optional[NavItem]:
        for ctx in self.iter_items():
            if ctx.item.slug == slug:
                return ctx.item
        return None

    def navbar_for_slug(self, slug: Optional[str]) -> Optional[NavbarSection]:
        if not self.navbar:
            return None
        if slug is not None:
            for nav in self.navbar:
                for section in nav.sections:
                    if any(contains_slug(item, slug) for item in section.items):
                        return nav
        return self.navbar[0]

    def navbar_href(self, nav: NavbarSection) -> str:
        if nav.href:
            return nav.href
        for section in nav.sections:
            for item in section.items:
                if item.buildable:
                    return item.url
        return "/"


def _item_from_dict(data: dict, depth: int, source: str) -> NavItem:
    if depth > MAX_DEPTH:
        raise NavigationError(
            f"{source}: item '{data['slug']}' nested deeper than {MAX_DEPTH} levels"
        )
    return NavItem(
        title=data["title"],
        slug=data["slug"],
        href=data.get("href"),
        external=bool(data.get("external", False)),
        coming_soon=bool(data.get("coming_soon", False)),
        description=data.get("description"),
        children=[_item_from_dict(c, depth + 1, source) for c in data.get("children", [])],
    )


def navigation_from_dict(data, source: str = "<navigation>") -> Navigation:
    validate(data, "navigation", NavigationError, source)
    navbar = []
    for nav in data["navbar"]:
        sections = [
            NavSection(
                title=s["title"],
                items=[_item_from_dict(i, 1, source) for i in s["items"]],
            )
            for s in nav["sections"]
        ]
        navbar.append(
            NavbarSection(
                id=nav["id"],
                title=nav["title"],
                sections=sections,
                href=nav.get("href"),
                position=nav.get("position", "left"),
            )
        )
    navigation = Navigation(navbar)

    seen: set[str] = set()
    for slug in navigation.build_slugs():
        if slug in seen:
            raise NavigationError(f"{source}: duplicate slug '{slug}'")
        seen.add(slug)
    return navigation


def load_navigation(path: Path) -> Navigation:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise NavigationError(f"Cannot read navigation file {path}: {e}") from e
    try:
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (ValueError, yaml.YAMLError) as e:
        raise NavigationError(f"Malformed navigation file {path}: {e}") from e
    return navigation_from_dict(data, str(path))


def navigation_from_content(store) -> Navigation:
    """Derive a navigation tree from the content directory layout.

    Top-level documents go into a single "Docs" navbar section; each top-level
    directory becomes its own navbar section with one sidebar section.
    """
    from .content import DocNode, SectionNode

    def to_items(node) -> list[NavItem]:
        slug = "/".join(node.slug) or "index"
        if isinstance(node, DocNode):
            return [NavItem(title=node.title, slug=slug, description=node.description)]
        children: list[NavItem] = []
        for child in node.children:
            if child.slug != node.slug:
                children.extend(to_items(child))
        if not store.exists(slug):
            # no index page: hoist the children
            return children
        return [NavItem(title=node.title, slug=slug, description=node.description, children=children)]

    tree = store.content_tree()
    navbar: list[NavbarSection] = []
    top_docs: list[NavItem] = []
    for node in tree:
        if isinstance(node, DocNode):
            top_docs.extend(to_items(node))
    if top_docs:
        navbar.append(NavbarSection("docs", "Docs", [NavSection("Docs", top_docs)]))
    for node in tree:
        if isinstance(node, SectionNode):
            items: list[NavItem] = []
            for child in node.children:
                if child.slug == node.slug:
                    # index page leads its section
                    items.insert(0, NavItem(title=child.title, slug="/".join(child.slug), description=child.description))
                else:
                    items.extend(to_items(child))
            navbar.append(
                NavbarSection(node.slug[-1], node.title, [NavSection(node.title, items)])
            )
    return Navigation(navbar)


def resolve_navigation(config, store) -> Navigation:
    nav_file = config.navigation_file
    if nav_file is not None and Path(nav_file).is_file():
        return load_navigation(nav_file)
    return navigation_from_content(store)
