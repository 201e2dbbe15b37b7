from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from .errors import DocsiteError
from .frontmatter import parse_frontmatter

logger = logging.getLogger(__name__)

_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style\b[^<]*(?:(?!</style>)<[^<]*)*</style>", re.IGNORECASE)
_FENCE_RE = re.compile(r"(```|~~~)[\s\S]*?\1")
_INLINE_CODE_RE = re.compile(r"`[^`]+`")
_TAG_RE = re.compile(r"<[^>]+>")
_MODULE_LINE_RE = re.compile(r"^\s*(?:import|export)\s.*$", re.MULTILINE)
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")


def strip_markup(text: str) -> str:
    """Reduce Markdown/MDX/HTML source to plain searchable text."""
    text = _SCRIPT_RE.sub("", text)
    text = _STYLE_RE.sub("", text)
    text = _FENCE_RE.sub("", text)
    text = _INLINE_CODE_RE.sub("", text)
    text = _MODULE_LINE_RE.sub("", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _TAG_RE.sub(" ", text)
    text = re.sub(r"[{}\[\]]", "", text)
    text = re.sub(r"[\"'\\]", "", text)
    text = re.sub(r"[#*`_>|]", "", text)
    return re.sub(r"\s+", " ", text).strip()


def _excerpt(store, slug: str, length: int) -> str:
    try:
        _, body = parse_frontmatter(store.resolve_path(slug).read_text(encoding="utf-8"))
    except (DocsiteError, OSError, UnicodeDecodeError):
        return ""
    return strip_markup(body)[:length].strip()


def build_search_index(navigation, store, excerpt_length: int = 500) -> list[dict]:
    """One entry per navigation item, coming-soon items and their subtrees excluded."""
    entries: list[dict] = []
    skipped: set[int] = set()
    for ctx in navigation.iter_items():
        item = ctx.item
        if item.coming_soon or any(id(p) in skipped for p in ctx.parents):
            skipped.add(id(item))
            continue
        content = "" if item.external else _excerpt(store, item.slug, excerpt_length)
        entries.append(
            {
                "title": item.title,
                "slug": item.slug,
                "href": item.url,
                "section": ctx.section.title,
                "category": ctx.navbar.title,
                "path": ctx.path,
                "content": content,
            }
        )
    logger.debug("search index: %d entries", len(entries))
    return entries


def write_search_index(entries: list[dict], path: Path) -> None:
    path.write_text(json.dumps(entries, ensure_ascii=False, indent=None), encoding="utf-8")
