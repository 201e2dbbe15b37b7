"""
HTML page templates.

Everything here returns plain strings. Titles and other text coming from
navigation or frontmatter are escaped; rendered Markdown bodies are inserted
as they are.
"""
from __future__ import annotations

from html import escape
from typing import Iterable, Optional

from .navigation import NavItem, Navigation, contains_slug

EXTERNAL_ICON = (
    '<svg class="icon-external" xmlns="http://www.w3.org/2000/svg" fill="none" viewBox="0 0 24 24" '
    'stroke="currentColor"><path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" '
    'd="M10 6H6a2 2 0 00-2 2v10a2 2 0 002 2h10a2 2 0 002-2v-4M14 4h6m0 0v6m0-6L10 14"/></svg>'
)
CHEVRON_ICON = (
    '<svg class="icon-chevron" xmlns="http://www.w3.org/2000/svg" fill="none" viewBox="0 0 24 24" '
    'stroke="currentColor"><path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" '
    'd="M9 5l7 7-7 7"/></svg>'
)


def _head(title: str, description: str, asset_prefix: str, extra: str = "") -> str:
    return f"""<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{escape(title)}</title>
  <meta name="description" content="{escape(description)}" />
  <link rel="stylesheet" href="{asset_prefix}/styles.css" />
  <link rel="stylesheet" href="{asset_prefix}/pygments.css" />
  <link rel="icon" href="{asset_prefix}/icon.svg" type="image/svg+xml" />{extra}
</head>"""


def navbar_html(navigation: Navigation, current_slug: Optional[str], site_name: str) -> str:
    active = navigation.navbar_for_slug(current_slug)
    parts = [
        '<header class="navbar">',
        f'<a class="brand" href="/">{escape(site_name)}</a>',
        '<nav class="navbar-sections">',
    ]
    for nav in navigation.navbar:
        cls = "navbar-link active" if active is not None and nav.id == active.id else "navbar-link"
        parts.append(
            f'<a class="{cls} navbar-{escape(nav.position)}" data-nav-id="{escape(nav.id)}" '
            f'href="{escape(navigation.navbar_href(nav))}">{escape(nav.title)}</a>'
        )
    parts.append("</nav>")
    parts.append(
        '<div class="search"><input id="search-input" type="search" placeholder="Search docs..." '
        'autocomplete="off" /></div>'
    )
    parts.append("</header>")
    return "".join(parts)


def _item_html(item: NavItem, current_slug: Optional[str], level: int) -> str:
    title = escape(item.title)
    if item.coming_soon:
        return (
            f'<li class="nav-item level-{level} coming-soon"><span class="nav-disabled">'
            f'<span>{title}</span><span class="coming-soon-icon" title="Available soon">i</span>'
            f'</span></li>'
        )

    is_active = item.slug == current_slug
    expanded = contains_slug(item, current_slug) if current_slug else False
    cls = "nav-link active" if is_active else "nav-link"
    attrs = ' target="_blank" rel="noopener noreferrer"' if item.external else ""
    icon = f" {EXTERNAL_ICON}" if item.external else ""
    aria = ' aria-current="page"' if is_active else ""
    parts = [
        f'<li class="nav-item level-{level}">',
        '<div class="nav-row">',
        f'<a class="{cls}" href="{escape(item.url)}"{attrs}{aria}>{title}{icon}</a>',
    ]
    children = item.children
    if children:
        rotated = " expanded" if expanded else ""
        parts.append(
            f'<button class="sidebar-toggle{rotated}" data-target="{escape(item.slug)}-children" '
            f'aria-label="Toggle {title} submenu">{CHEVRON_ICON}</button>'
        )
    parts.append("</div>")
    if children:
        hidden = "" if expanded else " hidden"
        parts.append(f'<ul id="{escape(item.slug)}-children" class="nav-children{hidden}">')
        parts.extend(_item_html(child, current_slug, level + 1) for child in children)
        parts.append("</ul>")
    parts.append("</li>")
    return "".join(parts)


def sidebar_html(navigation: Navigation, current_slug: Optional[str], links: Iterable = ()) -> str:
    """Sidebar for the navbar section that holds ``current_slug``."""
    nav = navigation.navbar_for_slug(current_slug)
    parts = ['<aside class="sidebar"><nav class="sidebar-nav">']
    if nav is not None:
        last = len(nav.sections) - 1
        for idx, section in enumerate(nav.sections):
            parts.append('<div class="nav-section">')
            parts.append(f'<h3 class="nav-title">{escape(section.title)}</h3>')
            parts.append('<ul class="nav-list">')
            parts.extend(_item_html(item, current_slug, 1) for item in section.items)
            parts.append("</ul>")
            if idx != last:
                parts.append('<div class="nav-separator"></div>')
            parts.append("</div>")
    parts.append("</nav>")
    links = list(links)
    if links:
        parts.append('<div class="sidebar-links">')
        for link in links:
            parts.append(
                f'<a href="{escape(link.href)}" target="_blank" rel="noopener noreferrer">'
                f'{escape(link.title)}</a>'
            )
        parts.append("</div>")
    parts.append("</aside>")
    return "".join(parts)


def toc_html(toc) -> str:
    if not toc:
        return (
            '<aside class="toc"><div class="toc-title">On this page</div>'
            '<nav class="toc-nav"><p class="toc-empty">No sections found</p></nav></aside>'
        )
    parts = ['<aside id="toc-sidebar" class="toc"><div class="toc-title">On this page</div><nav id="toc-nav" class="toc-nav">']
    for idx, entry in enumerate(toc):
        classes = ["toc-link", f"toc-level-{entry.level}"]
        if idx == 0:
            classes.append("active")
        parts.append(
            f'<a href="#{escape(entry.id)}" data-toc-id="{escape(entry.id)}" '
            f'class="{" ".join(classes)}">{escape(entry.title)}</a>'
        )
    parts.append("</nav></aside>")
    return "".join(parts)


def page_frame(
    config,
    navigation: Navigation,
    title: str,
    body_html: str,
    slug: Optional[str],
    toc=(),
    description: Optional[str] = None,
    asset_prefix: str = "/assets",
) -> str:
    desc = description or f"{config.site_name} - {title}"
    head = _head(f"{title} - {config.site_name}", desc, asset_prefix)
    return f"""<!DOCTYPE html>
<html lang="en" class="{'dark' if config.dark else 'light'}">
{head}
<body data-search-index="/search-index.json">
  {navbar_html(navigation, slug, config.site_name)}
  <div class="layout">
    {sidebar_html(navigation, slug, config.links)}
    <main class="content">
      <article class="doc markdown">
{body_html}
      </article>
      <footer class="footer"><div>{escape(config.site_name)}</div></footer>
    </main>
    {toc_html(toc)}
  </div>
</body>
</html>
"""


def index_page(config, target_url: str, asset_prefix: str = "/assets") -> str:
    links = "".join(
        f'<a href="{escape(link.href)}">{escape(link.title)}</a>' for link in config.links
    )
    head = _head(config.site_name, config.description or config.site_name, asset_prefix)
    return f"""<!DOCTYPE html>
<html lang="en" class="{'dark' if config.dark else 'light'}">
{head}
<body class="home">
  <div class="hero">
    <img src="{asset_prefix}/logo.svg" alt="{escape(config.site_name)}" class="hero-logo" />
    <h1>{escape(config.site_name)}</h1>
    <p class="tagline">{escape(config.description)}</p>
    <a class="button-primary" href="{escape(target_url)}">View Documentation</a>
    <div class="quick-links">{links}</div>
  </div>
</body>
</html>
"""


def redirect_page(target_url: str, label: str) -> str:
    url = escape(target_url)
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta http-equiv="refresh" content="0; url={url}" />
  <link rel="canonical" href="{url}" />
  <title>Redirecting...</title>
</head>
<body>
  <p>Redirecting to <a href="{url}">{escape(label)}</a>...</p>
</body>
</html>
"""


def not_found_page(config, navigation: Navigation, asset_prefix: str = "/assets") -> str:
    body = (
        '<h1>Page not found</h1>'
        '<p>The page you are looking for does not exist. '
        '<a href="/">Back to the documentation home</a>.</p>'
    )
    return page_frame(config, navigation, "Not Found", body, None, asset_prefix=asset_prefix)


def app_shell(config, body_html: str, asset_prefix: str = "/public") -> str:
    head = _head(config.site_name, config.description or config.site_name, asset_prefix)
    return f"""<!DOCTYPE html>
<html lang="en">
{head}
<body>
  <div id="root">{body_html}</div>
  <script type="module" src="{asset_prefix}/client.js"></script>
</body>
</html>
"""
