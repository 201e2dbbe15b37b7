from __future__ import annotations

import logging
import os
import re
import time
from html import escape
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from . import __version__, templates
from .assets import FONTS as ASSET_FONTS
from .config import SiteConfig, load_config
from .content import ContentStore
from .errors import DocumentNotFound, FrontmatterError
from .highlighter import pygments_css
from .navigation import resolve_navigation
from .renderer import render_document

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("docsite.request")

CONTENT_TYPES = {
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "woff": "font/woff",
    "woff2": "font/woff2",
    "ttf": "font/ttf",
}

DOC_ROUTE = re.compile(r"^/docs/(?P<slug>.+?)(?:\.html)?/?$")


def content_type_for(path: str) -> str:
    ext = path.rsplit(".", 1)[-1].lower() if "." in path else ""
    return CONTENT_TYPES.get(ext, "text/plain")


class RequestLogMiddleware(BaseHTTPMiddleware):
    """One log line per request with status and duration."""

    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            dur_ms = (time.perf_counter() - start) * 1000.0
            request_logger.exception("%s %s 500 dur_ms=%.2f", request.method, request.url.path, dur_ms)
            raise
        dur_ms = (time.perf_counter() - start) * 1000.0
        request_logger.info(
            "%s %s %s dur_ms=%.2f", request.method, request.url.path, response.status_code, dur_ms
        )
        return response


def _public_file(public_dir: Path, path: str) -> Optional[Path]:
    if not public_dir.is_dir():
        return None
    root = public_dir.resolve()
    target = (root / path.lstrip("/")).resolve()
    if not target.is_relative_to(root) or not target.is_file():
        return None
    return target


def _doc_payload(rendered) -> dict:
    doc = rendered.document
    return {
        "slug": doc.slug,
        "title": doc.title,
        "description": doc.description,
        "order": doc.order,
        "frontmatter": doc.frontmatter,
        "html": rendered.html,
        "toc": [{"id": e.id, "title": e.title, "level": e.level} for e in rendered.toc],
    }


def create_app(config: Optional[SiteConfig] = None) -> FastAPI:
    config = config or load_config()
    store = ContentStore(config.content_dir)

    app = FastAPI(title=f"{config.site_name} Docs Server", version=__version__)
    app.add_middleware(RequestLogMiddleware)
    app.state.config = config
    app.state.store = store

    def render(slug: str):
        return render_document(
            store.load(slug),
            toc_depth=config.toc_depth,
            heading_anchors=config.heading_anchors,
        )

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    @app.get("/api/docs")
    def list_docs():
        return store.all_slugs()

    @app.get("/api/docs/{slug:path}")
    def get_doc(slug: str):
        try:
            rendered = render(slug)
        except DocumentNotFound:
            return JSONResponse({"error": "Document not found"}, status_code=404)
        except FrontmatterError as e:
            return JSONResponse({"error": str(e)}, status_code=422)
        return _doc_payload(rendered)

    @app.get("/assets/pygments.css")
    def highlight_css():
        return Response(pygments_css(config.dark), media_type="text/css")

    @app.get("/assets/{path:path}")
    def asset(path: str):
        # same tree as dist/assets: public/ first, then top-level assets/ files and fonts/
        found = _public_file(config.public_dir, path)
        if found is None and ("/" not in path or path.startswith(ASSET_FONTS + "/")):
            found = _public_file(config.assets_dir, path)
        if found is None:
            return PlainTextResponse("Not Found", status_code=404)
        return FileResponse(found, media_type=content_type_for(found.name))

    # Static mounts
    if config.public_dir.is_dir():
        app.mount("/public", StaticFiles(directory=str(config.public_dir)), name="public")

    @app.get("/{path:path}")
    def page(path: str):
        path = "/" + path
        static = _public_file(config.public_dir, path) if "." in path.rsplit("/", 1)[-1] else None
        if static is not None:
            return FileResponse(static, media_type=content_type_for(static.name))

        try:
            navigation = resolve_navigation(config, store)
            m = DOC_ROUTE.match(path)
            if m:
                slug = m.group("slug")
                try:
                    rendered = render(slug)
                except DocumentNotFound:
                    return HTMLResponse(templates.not_found_page(config, navigation), status_code=404)
                doc = rendered.document
                html = templates.page_frame(
                    config, navigation, doc.title, rendered.html, slug,
                    toc=rendered.toc, description=doc.description,
                )
                return HTMLResponse(html)

            slugs = navigation.build_slugs()
            target = f"/docs/{config.home_slug or (slugs[0] if slugs else '')}"
            body = (
                f'<div class="hero"><h1>{escape(config.site_name)}</h1>'
                f'<p class="tagline">{escape(config.description)}</p>'
                f'<a class="button-primary" href="{escape(target)}">View Documentation</a></div>'
            )
            return HTMLResponse(templates.app_shell(config, body))
        except Exception:
            logger.exception("Render error for %s", path)
            return PlainTextResponse("Internal Server Error", status_code=500)

    return app


def main():
    # Allow: python -m docsite.server
    import uvicorn

    host = os.environ.get("DOCS_HOST", "127.0.0.1")
    port = int(os.environ.get("DOCS_PORT", "8808"))
    uvicorn.run("docsite.server:create_app", factory=True, host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
