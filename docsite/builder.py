"""
Build the static documentation site.

Outputs ``dist/index.html``, ``dist/docs/<slug>.html`` for every buildable
navigation item, redirect pages, ``dist/search-index.json`` and the copied
assets under ``dist/assets/``.
"""
from __future__ import annotations

import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from . import templates
from .assets import copy_assets
from .content import ContentStore
from .errors import BuildError, DocsiteError
from .navigation import Navigation, resolve_navigation
from .renderer import render_document
from .search import build_search_index, write_search_index

logger = logging.getLogger(__name__)


@dataclass
class BuiltPage:
    slug: str
    title: str
    path: Path
    frontmatter: dict = field(default_factory=dict)


@dataclass
class BuildReport:
    pages: list[BuiltPage] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


class SiteBuilder:
    def __init__(self, config, navigation: Optional[Navigation] = None):
        self.config = config
        self.store = ContentStore(config.content_dir)
        self._navigation = navigation

    @property
    def navigation(self) -> Navigation:
        if self._navigation is None:
            self._navigation = resolve_navigation(self.config, self.store)
        return self._navigation

    def output_path(self, slug: str) -> Path:
        base = self.config.docs_out_dir.joinpath(*slug.split("/"))
        return base.with_name(base.name + ".html")

    def setup(self) -> None:
        dist = self.config.dist_dir
        try:
            if dist.exists():
                shutil.rmtree(dist)
            self.config.docs_out_dir.mkdir(parents=True, exist_ok=True)
            self.config.assets_out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BuildError(f"Cannot prepare output directory {dist}: {e}") from e

    def build_page(self, slug: str) -> BuiltPage:
        document = self.store.load(slug)
        rendered = render_document(
            document,
            toc_depth=self.config.toc_depth,
            heading_anchors=self.config.heading_anchors,
        )
        html = templates.page_frame(
            self.config,
            self.navigation,
            document.title,
            rendered.html,
            slug,
            toc=rendered.toc,
            description=document.description,
        )
        out = self.output_path(slug)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(html, encoding="utf-8")
        return BuiltPage(slug=slug, title=document.title, path=out, frontmatter=document.frontmatter)

    def home_url(self, slugs: list[str]) -> str:
        if self.config.home_slug:
            return f"/docs/{self.config.home_slug}.html"
        if slugs:
            return f"/docs/{slugs[0]}.html"
        return "/"

    def write_index(self, slugs: list[str]) -> None:
        html = templates.index_page(self.config, self.home_url(slugs))
        self._write(self.config.dist_dir / "index.html", html)

    def write_redirects(self) -> None:
        for source, target in self.config.redirects.items():
            item = self.navigation.find_item(target)
            label = item.title if item else target
            html = templates.redirect_page(f"/docs/{target}.html", label)
            self._write(self.output_path(source), html)

    def _write(self, path: Path, text: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise BuildError(f"Cannot write {path}: {e}") from e

    def build(self) -> BuildReport:
        start = time.monotonic()
        report = BuildReport()
        if not self.config.content_dir.is_dir():
            raise BuildError(f"Content directory not found: {self.config.content_dir}")

        logger.info("Cleaning %s", self.config.dist_dir)
        self.setup()
        copy_assets(self.config, self.config.assets_out_dir)

        search_index = build_search_index(
            self.navigation, self.store, self.config.search_excerpt_length
        )

        slugs = self.navigation.build_slugs()
        logger.info("Building %d pages", len(slugs))
        for slug in slugs:
            try:
                page = self.build_page(slug)
            except (DocsiteError, OSError, UnicodeDecodeError) as e:
                report.errors.append((slug, str(e)))
                continue
            logger.debug("Built %s -> %s", slug, page.path)
            report.pages.append(page)

        self.write_index(slugs)
        self.write_redirects()
        try:
            write_search_index(search_index, self.config.dist_dir / "search-index.json")
        except OSError as e:
            raise BuildError(f"Cannot write search index: {e}") from e

        report.elapsed = time.monotonic() - start
        return report


def log_report(report: BuildReport) -> None:
    if report.errors:
        logger.warning(
            "[BUILD COMPLETED WITH ERRORS] %d pages built, %d failed (%.2fs)",
            len(report.pages), len(report.errors), report.elapsed,
        )
        for slug, message in report.errors:
            logger.error("  [ERROR] %s: %s", slug, message)
    else:
        logger.info("[SUCCESS] All %d pages built successfully (%.2fs)", len(report.pages), report.elapsed)


def build(config) -> BuildReport:
    report = SiteBuilder(config).build()
    log_report(report)
    return report
