"""
Site configuration.

A site is described by an optional ``docsite.yaml`` at its root. Relative
paths in the file are resolved against the file's directory.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError
from .schema import validate

CONFIG_FILENAME = "docsite.yaml"
CONFIG_ENV = "DOCSITE_CONFIG"

_PATH_FIELDS = ("content_dir", "dist_dir", "public_dir", "assets_dir")


@dataclass
class Link:
    title: str
    href: str


@dataclass
class SiteConfig:
    root: Path
    content_dir: Path
    dist_dir: Path
    public_dir: Path
    assets_dir: Path
    navigation_file: Optional[Path]
    site_name: str = "Documentation"
    description: str = ""
    home_slug: Optional[str] = None
    redirects: dict[str, str] = field(default_factory=dict)
    links: list[Link] = field(default_factory=list)
    toc_depth: str = "2-3"
    search_excerpt_length: int = 500
    code_style: str = "dark"
    heading_anchors: bool = True

    @classmethod
    def for_root(cls, root: Path, **overrides) -> "SiteConfig":
        root = Path(root).resolve()
        values = dict(
            root=root,
            content_dir=root / "content" / "docs",
            dist_dir=root / "dist",
            public_dir=root / "public",
            assets_dir=root / "assets",
            navigation_file=root / "navigation.yaml",
        )
        values.update(overrides)
        return cls(**values)

    @property
    def docs_out_dir(self) -> Path:
        return self.dist_dir / "docs"

    @property
    def assets_out_dir(self) -> Path:
        return self.dist_dir / "assets"

    @property
    def dark(self) -> bool:
        return self.code_style == "dark"


def _read_yaml(path: Path) -> dict:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config {path}: {e}") from e
    return data or {}


def load_config(path: str | Path | None = None) -> SiteConfig:
    explicit = path is not None or bool(os.environ.get(CONFIG_ENV))
    if path is None:
        path = os.environ.get(CONFIG_ENV) or CONFIG_FILENAME
    path = Path(path)

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        # No config file: plain defaults under the working directory
        return SiteConfig.for_root(Path.cwd())

    data = _read_yaml(path)
    validate(data, "config", ConfigError, str(path))
    root = path.resolve().parent

    overrides: dict = {}
    for key in _PATH_FIELDS:
        if key in data:
            overrides[key] = (root / data.pop(key)).resolve()
    if "navigation_file" in data:
        nav = data.pop("navigation_file")
        overrides["navigation_file"] = (root / nav).resolve() if nav else None
    if "links" in data:
        overrides["links"] = [Link(**link) for link in data.pop("links")]
    overrides.update(data)
    return SiteConfig.for_root(root, **overrides)
