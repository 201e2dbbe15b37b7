from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .errors import BuildError
from .highlighter import pygments_css

logger = logging.getLogger(__name__)

FONTS = "fonts"


def copy_tree(src: Path, dest: Path) -> int:
    """Copy a file or directory tree byte for byte. Returns the number of files."""
    if src.is_file():
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
        return 1
    count = 0
    dest.mkdir(parents=True, exist_ok=True)
    for entry in sorted(src.iterdir()):
        count += copy_tree(entry, dest / entry.name)
    return count


def _require_dir(path: Path, label: str) -> None:
    if not path.is_dir():
        raise BuildError(f"Failed to copy {label}: directory not found: {path}")


def copy_assets(config, dest: Path) -> int:
    """Copy ``public/`` and ``assets/`` into ``dest`` and write the highlight CSS."""
    _require_dir(config.public_dir, "public assets")
    _require_dir(config.assets_dir, "assets")
    dest.mkdir(parents=True, exist_ok=True)
    count = 0
    try:
        for entry in sorted(config.public_dir.iterdir()):
            count += copy_tree(entry, dest / entry.name)
    except OSError as e:
        raise BuildError(f"Failed to copy public assets: {e}") from e

    try:
        fonts = config.assets_dir / FONTS
        if fonts.is_dir():
            count += copy_tree(fonts, dest / FONTS)
        # only top-level files besides fonts/
        for entry in sorted(config.assets_dir.iterdir()):
            if entry.is_file():
                count += copy_tree(entry, dest / entry.name)
    except OSError as e:
        raise BuildError(f"Failed to copy assets: {e}") from e

    try:
        (dest / "pygments.css").write_text(pygments_css(config.dark), encoding="utf-8")
    except OSError as e:
        raise BuildError(f"Failed to write pygments.css: {e}") from e
    logger.info("Copied %d asset files", count)
    return count
