"""
docsite: static documentation site builder.

Turns Markdown/MDX content with YAML frontmatter into HTML pages with
navigation, search index and per-page table of contents.
"""

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "ContentStore",
    "DocsiteError",
    "DocumentNotFound",
    "Navigation",
    "SiteBuilder",
    "SiteConfig",
    "load_config",
    "load_navigation",
    "render_markdown",
    "slugify",
]

from .builder import SiteBuilder  # noqa: E402
from .config import SiteConfig, load_config  # noqa: E402
from .content import ContentStore  # noqa: E402
from .errors import BuildError, DocsiteError, DocumentNotFound  # noqa: E402
from .navigation import Navigation, load_navigation  # noqa: E402
from .renderer import render_markdown  # noqa: E402
from .utils import slugify  # noqa: E402
