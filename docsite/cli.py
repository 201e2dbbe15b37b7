"""
Command line entry point.

Usage:
  docsite build [--config docsite.yaml] [-v]
  docsite serve [--config docsite.yaml] [--host HOST] [--port PORT]
  docsite check-links [--config docsite.yaml]
  docsite toc SLUG [--config docsite.yaml]

Exit codes: 0 on success, 1 when any page failed or the build could not run,
2 on usage errors.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

from .builder import SiteBuilder, log_report
from .config import load_config
from .content import ContentStore
from .errors import DocsiteError
from .links import check_content_links, check_navigation
from .logging_setup import configure_logging
from .navigation import resolve_navigation
from .renderer import render_document

logger = logging.getLogger(__name__)


def cmd_build(args) -> int:
    config = load_config(args.config)
    try:
        report = SiteBuilder(config).build()
    except DocsiteError as e:
        logger.error("[BUILD FAILED] %s", e)
        return 1
    log_report(report)
    return report.exit_code


def cmd_serve(args) -> int:
    import uvicorn

    from .server import create_app

    config = load_config(args.config)
    host = args.host or os.environ.get("DOCS_HOST", "127.0.0.1")
    port = args.port or int(os.environ.get("DOCS_PORT", "8808"))
    logger.info("Serving %s at http://%s:%s", config.root, host, port)
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def cmd_check_links(args) -> int:
    config = load_config(args.config)
    store = ContentStore(config.content_dir)
    navigation = resolve_navigation(config, store)
    problems = check_navigation(navigation, store)
    problems += check_content_links(navigation, store, redirects=config.redirects)
    for problem in problems:
        print(f"ERROR: {problem}")
    if problems:
        return 1
    print(f"OK: {len(navigation.build_slugs())} pages checked")
    return 0


def cmd_toc(args) -> int:
    config = load_config(args.config)
    store = ContentStore(config.content_dir)
    rendered = render_document(store.load(args.slug), toc_depth=config.toc_depth)
    for entry in rendered.toc:
        indent = "  " * max(0, entry.level - 2)
        print(f"{indent}- {entry.title} (#{entry.id})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docsite", description="Static documentation site builder")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--log-file", default=None, help="also log to a rotating file")
    sub = parser.add_subparsers(dest="command", required=True)

    def with_config(p):
        p.add_argument("--config", default=None, help="path to docsite.yaml")
        return p

    with_config(sub.add_parser("build", help="build the static site")).set_defaults(func=cmd_build)

    serve = with_config(sub.add_parser("serve", help="run the docs server"))
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=cmd_serve)

    with_config(sub.add_parser("check-links", help="check navigation and content links")).set_defaults(
        func=cmd_check_links
    )

    toc = with_config(sub.add_parser("toc", help="print a page's table of contents"))
    toc.add_argument("slug")
    toc.set_defaults(func=cmd_toc)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.log_file)
    try:
        return args.func(args)
    except DocsiteError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
