from __future__ import annotations

import html as _html
import re
from dataclasses import dataclass, field

import markdown as _markdown
from markdown.extensions.toc import TocExtension

from .content import Document
from .highlighter import CSS_CLASS, FenceLanguageExtension
from .mdx import MdxExtension
from .utils import slugify


@dataclass
class TocEntry:
    id: str
    title: str
    level: int


@dataclass
class RenderedDocument:
    document: Document
    html: str
    toc: list[TocEntry] = field(default_factory=list)


def _flatten_toc(tokens) -> list[TocEntry]:
    entries: list[TocEntry] = []
    for token in tokens:
        entries.append(TocEntry(id=token["id"], title=_html.unescape(token["name"]), level=token["level"]))
        entries.extend(_flatten_toc(token.get("children", [])))
    return entries


def _postprocess(body: str) -> str:
    # Task lists: [ ] / [x] at list starts become checkboxes
    body = re.sub(r"<li>\s*\[ \]\s+", "<li class=\"task\"><input type='checkbox' disabled> ", body)
    body = re.sub(r"<li>\s*\[x\]\s+", "<li class=\"task\"><input type='checkbox' checked disabled> ", body, flags=re.IGNORECASE)
    # Wide tables scroll inside a wrapper
    body = body.replace("<table>", '<div class="table-wrapper"><table>').replace("</table>", "</table></div>")
    return body


def markdown_processor(toc_depth: str = "2-3", heading_anchors: bool = True) -> _markdown.Markdown:
    return _markdown.Markdown(
        extensions=[
            "extra",
            "codehilite",
            FenceLanguageExtension(),
            MdxExtension(),
            TocExtension(
                slugify=slugify,
                toc_depth=toc_depth,
                permalink="#" if heading_anchors else False,
                permalink_class="heading-anchor",
                permalink_title="Link to this section",
            ),
        ],
        extension_configs={
            'codehilite': {
                'guess_lang': False,
                'noclasses': False,
                'css_class': CSS_CLASS,
            }
        },
    )


def render_markdown(text: str, toc_depth: str = "2-3", heading_anchors: bool = True) -> tuple[str, list[TocEntry]]:
    """Render Markdown/MDX to an HTML fragment and its table of contents.

    The TOC holds every heading whose level falls within ``toc_depth``, in
    source order, with the same ids that were put on the headings.
    """
    md = markdown_processor(toc_depth, heading_anchors)
    body = md.convert(text)
    return _postprocess(body), _flatten_toc(md.toc_tokens)


def render_document(document: Document, toc_depth: str = "2-3", heading_anchors: bool = True) -> RenderedDocument:
    html, toc = render_markdown(document.body, toc_depth, heading_anchors)
    return RenderedDocument(document=document, html=html, toc=toc)
