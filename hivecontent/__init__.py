"""Hive markdown renderer, editor and composer utilities."""

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Optional

from hivecontent.batch import render_posts
from hivecontent.core.config import EmojiOptions, RendererOptions

logger = logging.getLogger(__name__)


def build_options(args: argparse.Namespace) -> RendererOptions:
    """
    builds the rendering profile from parsed CLI flags.

    Args:
        args: parsed arguments

    Returns:
        RendererOptions with the flags applied over the defaults
    """
    options = RendererOptions()
    overrides: dict[str, object] = {
        "convert_hive_urls": not args.no_convert_urls,
        "internal_url_prefix": args.url_prefix,
        "additional_frontends": tuple(args.frontend),
    }
    if args.gateway:
        overrides["ipfs_gateway"] = args.gateway[0]
        overrides["ipfs_fallback_gateways"] = tuple(args.gateway[1:])
    if args.emoji or args.emoji_owner:
        overrides["emoji"] = EmojiOptions(enabled=True, default_owner=args.emoji_owner)
    return dataclasses.replace(options, **overrides)  # type: ignore[arg-type]


def main(argv: Optional[list[str]] = None) -> int:
    """
    main entry point for hivecontent CLI.

    Args:
        argv: command line arguments (defaults to sys.argv[1:])

    Returns:
        exit code (0 success, 1 partial failure, 2 fatal error)
    """
    parser = argparse.ArgumentParser(description="Render Hive markdown posts to safe HTML")
    parser.add_argument(
        "source",
        help="markdown file, JSON post export, directory of those, or ZIP archive",
    )
    parser.add_argument(
        "output",
        nargs="?",
        default="html",
        help="output directory (default: html)",
    )
    parser.add_argument(
        "--author",
        help="author of markdown sources (JSON posts carry their own)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="render posts but don't write any file",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="replace existing HTML files",
    )
    parser.add_argument(
        "--emoji",
        action="store_true",
        help="render :owner/name: emoji tokens as images",
    )
    parser.add_argument(
        "--emoji-owner",
        help="fallback owner for :name: emoji tokens (implies --emoji)",
    )
    parser.add_argument(
        "--no-convert-urls",
        action="store_true",
        help="keep links to other Hive front-ends as they are",
    )
    parser.add_argument(
        "--url-prefix",
        default="",
        help="prefix for rewritten front-end links",
    )
    parser.add_argument(
        "--gateway",
        action="append",
        default=[],
        metavar="URL",
        help="IPFS gateway, repeat for fallbacks (first is preferred)",
    )
    parser.add_argument(
        "--frontend",
        action="append",
        default=[],
        metavar="DOMAIN",
        help="additional Hive front-end domain to rewrite links for",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="only print errors",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="show a progress bar",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable debug logging",
    )

    args = parser.parse_args(argv)

    # configures logging
    level = logging.DEBUG if args.verbose else logging.INFO
    if args.quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )

    # validates source path exists
    source_path = Path(args.source)
    if not source_path.exists():
        logger.error("Source not found: %s", args.source)
        return 2

    try:
        return render_posts(
            source=source_path,
            output=Path(args.output),
            options=build_options(args),
            author=args.author,
            dry_run=args.dry_run,
            overwrite=args.overwrite,
            quiet=args.quiet,
            progress=args.progress,
        )
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Fatal error: %s", e)
        return 2
