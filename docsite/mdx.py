"""
MDX support for Python-Markdown.

MDX files are Markdown with ES module lines and JSX components. This
extension drops the module lines and turns the known components into plain
HTML elements that the ``md_in_html`` extension (part of ``extra``) renders
with their Markdown bodies intact.
"""
from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Optional

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor


@dataclass(frozen=True)
class Component:
    tag: str
    css: str
    # "block" or "span" renders the body as Markdown; None leaves it alone
    markdown: Optional[str] = "block"
    variants: bool = False
    void: bool = False


COMPONENTS: dict[str, Component] = {
    "Card": Component("div", "card"),
    "CardHeader": Component("div", "card-header"),
    "CardTitle": Component("div", "card-title", markdown="span"),
    "CardDescription": Component("p", "card-description", markdown="span"),
    "CardContent": Component("div", "card-content"),
    "CardFooter": Component("div", "card-footer"),
    "Callout": Component("div", "callout", variants=True),
    "Alert": Component("div", "alert", variants=True),
    "AlertTitle": Component("div", "alert-title", markdown="span"),
    "AlertDescription": Component("div", "alert-description"),
    "Badge": Component("span", "badge", markdown=None, variants=True),
    "Separator": Component("hr", "separator", markdown=None, void=True),
}

CALLOUT_ICONS = {
    "default": "⚡",
    "info": "ℹ",
    "warning": "⚠",
    "success": "✓",
    "danger": "✕",
}

IMPORT_RE = re.compile(r"""^\s*import\s+(?:.+?\s+from\s+)?['"][^'"]+['"];?\s*$""")
EXPORT_RE = re.compile(r"^\s*export\s+(?:const|let|var|default|function)\b")
JSX_COMMENT_RE = re.compile(r"\{/\*.*?\*/\}")
INLINE_CODE_RE = re.compile(r"(`+)(.+?)\1")
OPEN_TAG_RE = re.compile(r"<([A-Z][A-Za-z0-9]*)((?:\s+[^<>]*?)?)\s*(/?)>")
CLOSE_TAG_RE = re.compile(r"</([A-Z][A-Za-z0-9]*)\s*>")
ATTR_RE = re.compile(r"""([A-Za-z_][\w-]*)(?:=(?:"([^"]*)"|'([^']*)'|\{([^}]*)\}))?""")
INDENTED_RE = re.compile(r"^(?: {4}|\t)")
LIST_ITEM_RE = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s")


def parse_attrs(raw: str) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for m in ATTR_RE.finditer(raw or ""):
        name = m.group(1)
        value = next((g for g in m.group(2, 3, 4) if g is not None), "true")
        attrs[name] = value.strip().strip("'\"") if m.group(4) is not None else value
    return attrs


def _open_tag(name: str, attrs: dict[str, str], self_closing: bool) -> str:
    comp = COMPONENTS.get(name)
    if comp is None:
        opening = f'<div data-component="{html.escape(name)}" markdown="1">'
        return opening + "</div>" if self_closing else opening

    classes = [comp.css]
    variant = attrs.get("variant", "default")
    if comp.variants:
        classes.append(f"{comp.css}-{html.escape(variant)}")
    if "class" in attrs or "className" in attrs:
        classes.append(html.escape(attrs.get("class") or attrs["className"]))
    extra = ' role="alert"' if name == "Alert" else ""
    md = f' markdown="{comp.markdown}"' if comp.markdown else ""
    opening = f'<{comp.tag} class="{" ".join(classes)}"{extra}{md}>'

    if comp.void:
        return f'<{comp.tag} class="{" ".join(classes)}" />'
    if name == "Callout":
        icon = attrs.get("icon") or CALLOUT_ICONS.get(variant, CALLOUT_ICONS["default"])
        head = f'<span class="callout-icon">{html.escape(icon)}</span>'
        if attrs.get("title"):
            head += f' <span class="callout-title">{html.escape(attrs["title"])}</span>'
        opening += f'\n<div class="callout-header">{head}</div>\n\n'
    if self_closing:
        return opening + f"</{comp.tag}>"
    return opening


def _close_tag(name: str) -> str:
    comp = COMPONENTS.get(name)
    if comp is None:
        return "</div>"
    if comp.void:
        return ""
    return f"</{comp.tag}>"


def transform_segment(text: str) -> str:
    text = JSX_COMMENT_RE.sub("", text)
    text = text.replace("className=", "class=")
    text = OPEN_TAG_RE.sub(
        lambda m: _open_tag(m.group(1), parse_attrs(m.group(2)), bool(m.group(3))), text
    )
    return CLOSE_TAG_RE.sub(lambda m: _close_tag(m.group(1)), text)


def transform_line(line: str) -> str:
    """Rewrite JSX in a line, leaving inline code spans untouched."""
    out = []
    pos = 0
    for m in INLINE_CODE_RE.finditer(line):
        out.append(transform_segment(line[pos:m.start()]))
        out.append(m.group(0))
        pos = m.end()
    out.append(transform_segment(line[pos:]))
    return "".join(out)


def indented_code_lines(lines: list[str]) -> set[int]:
    """Indexes of lines that Markdown reads as an indented code block."""
    code: set[int] = set()
    in_code = in_list = False
    prev_blank = True
    for i, line in enumerate(lines):
        if not line.strip():
            prev_blank = True
            continue
        indented = bool(INDENTED_RE.match(line))
        if indented and (in_code or (prev_blank and not in_list)):
            in_code = True
            code.add(i)
        else:
            in_code = False
            if LIST_ITEM_RE.match(line):
                in_list = True
            elif prev_blank and not indented:
                in_list = False
        prev_blank = False
    return code


def strip_module_lines(lines: list[str], keep: set[int] = frozenset()) -> list[str]:
    kept: list[str] = []
    depth = 0
    for i, line in enumerate(lines):
        if i in keep:
            kept.append(line)
            continue
        if depth > 0:
            depth += line.count("{") - line.count("}")
            continue
        if IMPORT_RE.match(line):
            continue
        if EXPORT_RE.match(line):
            depth = max(0, line.count("{") - line.count("}"))
            continue
        kept.append(line)
    return kept


class MdxPreprocessor(Preprocessor):
    def run(self, lines):
        lines = strip_module_lines(lines, indented_code_lines(lines))
        code = indented_code_lines(lines)
        out = [line if i in code else transform_line(line) for i, line in enumerate(lines)]
        # transformed lines may contain newlines
        return "\n".join(out).split("\n")


class MdxExtension(Extension):
    def extendMarkdown(self, md):
        # after fenced code is stashed (25), before raw html blocks (20)
        md.preprocessors.register(MdxPreprocessor(md), "mdx", 22)


def makeExtension(**kwargs):  # pragma: no cover
    return MdxExtension(**kwargs)
