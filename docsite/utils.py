from __future__ import annotations

import re
import unicodedata

_NON_SLUG = re.compile(r"[^a-z0-9]+")
_WORD_SPLIT = re.compile(r"[-_\s]+")


def slugify(text: str, separator: str = "-") -> str:
    """Return a URL-safe slug. Applying it twice yields the same string."""
    text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    text = _NON_SLUG.sub(separator, text.lower())
    return text.strip(separator)


def format_title(segment: str) -> str:
    words = [w for w in _WORD_SPLIT.split(segment.strip()) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def normalize_newlines(s: str) -> str:
    return s.replace("\r\n", "\n").replace("\r", "\n")
