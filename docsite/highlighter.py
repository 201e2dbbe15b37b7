from __future__ import annotations

import re

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

CSS_CLASS = "codehilite"

# Fence labels seen in docs that Pygments does not know under that name
LANGUAGE_ALIASES = {
    "plain": "text",
    "plaintext": "text",
    "txt": "text",
    "mdx": "markdown",
    "jsonc": "json",
    "json5": "json",
    "env": "bash",
    "dotenv": "bash",
    "kts": "kotlin",
    "shell-session": "console",
}

FENCE_RE = re.compile(r"^(?P<indent>\s*)(?P<fence>`{3,}|~{3,})[ \t]*(?P<lang>[\w.+#-]+)(?P<rest>.*)$")


def normalize_language(lang: str | None) -> str:
    """Map a fence label to a Pygments lexer name; unknown labels become ``text``."""
    if not lang:
        return "text"
    lang = LANGUAGE_ALIASES.get(lang.lower(), lang.lower())
    try:
        get_lexer_by_name(lang)
    except ClassNotFound:
        return "text"
    return lang


class FenceLanguagePreprocessor(Preprocessor):
    def run(self, lines):
        out = []
        for line in lines:
            m = FENCE_RE.match(line)
            if m:
                line = f"{m['indent']}{m['fence']}{normalize_language(m['lang'])}{m['rest']}"
            out.append(line)
        return out


class FenceLanguageExtension(Extension):
    def extendMarkdown(self, md):
        # must see the raw fences, before fenced_code_block (25)
        md.preprocessors.register(FenceLanguagePreprocessor(md), "fence_language", 28)


def pygments_css(dark: bool) -> str:
    style = 'monokai' if dark else 'default'
    try:
        return HtmlFormatter(style=style).get_style_defs(f'.{CSS_CLASS}')
    except ClassNotFound:
        return HtmlFormatter().get_style_defs(f'.{CSS_CLASS}')
