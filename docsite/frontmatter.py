from __future__ import annotations

import yaml

from .errors import FrontmatterError
from .utils import normalize_newlines

DELIMITER = "---"


def parse_frontmatter(text: str) -> tuple[dict, str]:
    """Split a leading YAML block delimited by ``---`` lines from the body."""
    text = normalize_newlines(text.lstrip("\ufeff"))
    lines = text.split("\n")
    if not lines or lines[0].strip() != DELIMITER:
        return {}, text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == DELIMITER:
            end = i
            break
    if end is None:
        raise FrontmatterError("Unterminated frontmatter block")

    raw = "\n".join(lines[1:end])
    try:
        data = yaml.safe_load(raw) if raw.strip() else {}
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Malformed frontmatter: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError("Frontmatter must be a mapping")

    body = "\n".join(lines[end + 1:])
    return data, body.lstrip("\n")


def meta_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def meta_int(data: dict, key: str) -> int | None:
    value = data.get(key)
    # bool is an int subclass
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None
