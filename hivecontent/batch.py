"""Batch module for rendering markdown files and post exports to HTML."""

import json
import logging
import tempfile
import zipfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Optional

import ijson

from hivecontent.core.config import RendererOptions
from hivecontent.core.parser import process_post
from hivecontent.exporters.html import SKIPPED, HTMLExporter
from hivecontent.progress import ProgressHandler
from hivecontent.renderer import create_renderer

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES = (".md", ".markdown")
SOURCE_SUFFIXES = (*MARKDOWN_SUFFIXES, ".json")


def discover_files(source: Path, extract_dir: Optional[Path] = None) -> list[Path]:
    """
    discovers markdown and JSON files from source path.

    Args:
        source: path to a .md or .json file, a directory, or a ZIP archive
        extract_dir: where ZIP members are extracted (a new temp dir when omitted)

    Returns:
        sorted list of source files

    Raises:
        FileNotFoundError: if source doesn't exist
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    if source.is_file():
        suffix = source.suffix.lower()
        if suffix == ".zip":
            target = extract_dir or Path(tempfile.mkdtemp(prefix="hivecontent_"))
            return _extract_zip(source, target)
        if suffix in SOURCE_SUFFIXES:
            return [source]
        return []

    if source.is_dir():
        return sorted(
            p for p in source.iterdir() if p.is_file() and p.suffix.lower() in SOURCE_SUFFIXES
        )

    return []


def _extract_zip(zip_path: Path, target_dir: Path) -> list[Path]:
    """extracts markdown and JSON members of a ZIP archive into target_dir."""
    target_dir.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(zip_path, "r") as zf:
        for name in zf.namelist():
            if name.endswith("/") or Path(name).suffix.lower() not in SOURCE_SUFFIXES:
                continue
            # extracts using only the filename, preventing path traversal
            target_path = target_dir / Path(name).name
            target_path.write_bytes(zf.read(zf.getinfo(name)))

    return sorted(p for p in target_dir.iterdir() if p.suffix.lower() in SOURCE_SUFFIXES)


def count_posts(file_path: Path) -> int:
    """
    counts the posts in a source file without loading it.

    Markdown files and single-object JSON files hold one post; JSON lists are
    stream-parsed and their top-level objects counted.

    Args:
        file_path: markdown or JSON file

    Returns:
        number of posts (unparseable files count as one, so they are reported)
    """
    if file_path.suffix.lower() in MARKDOWN_SUFFIXES:
        return 1

    with open(file_path, "rb") as f:
        if _peek_first_char(f) != ord("["):
            return 1
        f.seek(0)
        try:
            return _count_list_items(f)
        except ijson.JSONError:
            logger.warning("could not index %s", file_path, exc_info=True)
            return 1


def _peek_first_char(f: Any) -> int:
    """returns first non-whitespace byte from file."""
    while True:
        char = f.read(1)
        if not char:
            return 0
        if not char.isspace():
            return int(char[0])


def _count_list_items(f: Any) -> int:
    """counts top-level objects of a JSON list using streaming."""
    count = 0
    for prefix, event, _value in ijson.parse(f):
        if prefix == "item" and event == "start_map":
            count += 1
    return count


def iter_entries(file_path: Path, author: Optional[str] = None) -> Iterator[Any]:
    """
    yields the raw post objects of one source file.

    Markdown files yield a single post object built from the file: the stem
    is both permlink and title.

    Args:
        file_path: markdown or JSON file
        author: author for markdown files (JSON posts carry their own)

    Yields:
        post objects in file order (JSON list items are streamed)
    """
    if file_path.suffix.lower() in MARKDOWN_SUFFIXES:
        yield {
            "author": author or "",
            "permlink": file_path.stem,
            "title": file_path.stem,
            "body": file_path.read_text(encoding="utf-8"),
        }
        return

    with open(file_path, "rb") as f:
        first_char = _peek_first_char(f)
        f.seek(0)
        if first_char == ord("["):
            yield from ijson.items(f, "item")
        else:
            yield json.load(f)


def render_posts(
    source: Path,
    output: Path,
    options: Optional[RendererOptions] = None,
    author: Optional[str] = None,
    dry_run: bool = False,
    overwrite: bool = False,
    quiet: bool = False,
    progress: bool = False,
) -> int:
    """
    renders every post found in source to HTML files in output.

    Args:
        source: path to a markdown/JSON file, directory, or ZIP archive
        output: destination directory
        options: rendering profile
        author: author of markdown sources (also their emoji owner)
        dry_run: if True, don't write any file
        overwrite: if True, replace existing HTML files
        quiet: if True, suppress non-error output
        progress: if True, show progress bar

    Returns:
        exit code (0 success, 1 partial failure)
    """
    with ProgressHandler(quiet=quiet, show_progress=progress) as handler:
        with tempfile.TemporaryDirectory(prefix="hivecontent_") as extract_dir:
            handler.start_discovery()

            files = discover_files(source, Path(extract_dir))
            if not files:
                handler.log_info(f"No markdown or JSON files found in {source}")
                return 0

            counts = [(file_path, count_posts(file_path)) for file_path in files]
            total = sum(count for _, count in counts)

            handler.log_info(f"Found {total} post(s) to render")
            handler.set_total(total)

            exporter = HTMLExporter(create_renderer(options))

            rendered = 0
            skipped = 0
            failed = 0

            for file_path, expected in counts:
                file_rendered, file_skipped, file_failed = _render_file(
                    file_path, expected, exporter, output, author, dry_run, overwrite, handler
                )
                rendered += file_rendered
                skipped += file_skipped
                failed += file_failed

        handler.finish(rendered, skipped, failed)

        if failed > 0:
            return 1
        return 0


def _render_file(
    file_path: Path,
    expected: int,
    exporter: HTMLExporter,
    output: Path,
    author: Optional[str],
    dry_run: bool,
    overwrite: bool,
    handler: ProgressHandler,
) -> tuple[int, int, int]:
    """
    renders the posts of one file, continuing past individual failures.

    Args:
        file_path: source file
        expected: number of posts counted during discovery
        exporter: the HTMLExporter instance
        output: destination directory
        author: author for markdown sources
        dry_run: if True, don't write any file
        overwrite: if True, replace existing HTML files
        handler: progress handler

    Returns:
        tuple of (rendered, skipped, failed) counts
    """
    rendered = skipped = failed = 0
    seen = 0
    entries = iter_entries(file_path, author)

    while True:
        try:
            entry = next(entries)
        except StopIteration:
            break
        except Exception as e:  # pylint: disable=broad-exception-caught
            # unreadable file or broken JSON, the stream cannot resume
            handler.log_error(f"Failed: {file_path.name}: {e}")
            remaining = max(expected - seen, 1)
            failed += remaining
            for _ in range(remaining):
                handler.update(file_path.name)
            break

        seen += 1
        label = file_path.name
        try:
            if not isinstance(entry, dict):
                raise ValueError(f"expected a post object, got {type(entry).__name__}")
            post = process_post(entry)
            label = post.title or post.slug
            status = exporter.export(post, str(output), dry_run=dry_run, overwrite=overwrite)
        except Exception as e:  # pylint: disable=broad-exception-caught
            handler.log_error(f"Failed: {file_path.name} - {label}: {e}")
            failed += 1
        else:
            if status == SKIPPED:
                skipped += 1
            else:
                rendered += 1
        handler.update(label)

    return rendered, skipped, failed
