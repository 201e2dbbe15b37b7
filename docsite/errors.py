from __future__ import annotations


class DocsiteError(Exception):
    pass


class ConfigError(DocsiteError):
    pass


class NavigationError(DocsiteError):
    pass


class FrontmatterError(DocsiteError):
    pass


class DocumentNotFound(DocsiteError, LookupError):
    def __init__(self, slug: str):
        super().__init__(f"Document not found: {slug}")
        self.slug = slug


class BuildError(DocsiteError):
    """Infrastructure failure that aborts the whole build."""
