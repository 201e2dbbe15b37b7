from pathlib import Path

import pytest

from docsite.config import SiteConfig

REPO_ROOT = Path(__file__).resolve().parent.parent
SAMPLE_SITE = REPO_ROOT / "docs"

NAVIGATION = """\
navbar:
  - id: guide
    title: Guide
    sections:
      - title: Basics
        items:
          - {title: Intro, slug: intro}
          - title: Setup
            slug: setup
            children:
              - {title: Linux, slug: setup-linux}
              - {title: Windows, slug: setup-windows, coming_soon: true}
      - title: Links
        items:
          - {title: Homepage, slug: homepage, href: "https://example.com", external: true}
  - id: reference
    title: Reference
    sections:
      - title: API
        items:
          - {title: Config, slug: config}
"""

DOCS = {
    "intro.mdx": """---
title: Introduction
description: Start here
order: 1
---

import { Callout } from '@/components/mdx-components'

# Introduction

## Overview

Welcome to the **docs**.

### Details

See [Setup](/docs/setup.html#requirements).
""",
    "setup.md": """---
title: Setup
---

## Requirements

- Python
- Git
""",
    "setup-linux.md": """---
title: Linux
---

## Packages

```bash
apt install runtime
```
""",
    "config.mdx": """---
title: Config
---

## Options

| Key | Default |
| --- | --- |
| debug | false |
""",
}


def write_site(root: Path, navigation: str = NAVIGATION, docs: dict = DOCS) -> SiteConfig:
    content = root / "content" / "docs"
    content.mkdir(parents=True)
    for name, text in docs.items():
        path = content / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    (root / "public").mkdir()
    (root / "public" / "styles.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    (root / "assets" / "fonts").mkdir(parents=True)
    (root / "assets" / "logo.svg").write_text("<svg></svg>\n", encoding="utf-8")
    (root / "assets" / "fonts" / "inter.woff2").write_bytes(b"\x00\x01wOF2\xff")
    if navigation is not None:
        (root / "navigation.yaml").write_text(navigation, encoding="utf-8")
    return SiteConfig.for_root(root)


@pytest.fixture
def site(tmp_path) -> SiteConfig:
    return write_site(tmp_path / "site")


@pytest.fixture
def sample_root() -> Path:
    """The example site shipped under docs/."""
    return SAMPLE_SITE
