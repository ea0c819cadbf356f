"""tests for HTML exporter."""

from pathlib import Path

from bs4 import BeautifulSoup

from hivecontent.core.config import EmojiOptions
from hivecontent.core.models import Post
from hivecontent.exporters.html import DRY_RUN, SKIPPED, WRITTEN, HTMLExporter, output_filename
from hivecontent.renderer import create_renderer


def _post() -> Post:
    return Post(author="alice", permlink="my-post", title="Hello <World>", body="Hi **there** :wave:")


def test_html_exporter_basic(tmp_path: Path) -> None:
    """writes a document with the rendered body."""
    exporter = HTMLExporter()

    status = exporter.export(_post(), str(tmp_path / "out"))

    output_file = tmp_path / "out" / "alice-my-post.html"
    assert status == WRITTEN
    html = output_file.read_text(encoding="utf-8")
    assert html.startswith("<!DOCTYPE html>")
    assert "Hello &lt;World&gt;" in html
    assert BeautifulSoup(html, "html.parser").find("strong").get_text() == "there"


def test_html_exporter_dry_run(tmp_path: Path) -> None:
    """dry run mode doesn't write files."""
    status = HTMLExporter().export(_post(), str(tmp_path), dry_run=True)

    assert status == DRY_RUN
    assert not (tmp_path / "alice-my-post.html").exists()


def test_html_exporter_no_overwrite(tmp_path: Path) -> None:
    """existing files are kept unless overwrite is set."""
    output_file = tmp_path / "alice-my-post.html"
    output_file.write_text("original", encoding="utf-8")
    exporter = HTMLExporter()

    assert exporter.export(_post(), str(tmp_path)) == SKIPPED
    assert output_file.read_text(encoding="utf-8") == "original"

    assert exporter.export(_post(), str(tmp_path), overwrite=True) == WRITTEN
    assert output_file.read_text(encoding="utf-8") != "original"


def test_author_owns_emoji() -> None:
    """the post author is the default emoji owner."""
    exporter = HTMLExporter(create_renderer(emoji=EmojiOptions(enabled=True)))

    html = exporter.generate_html(_post())

    assert "/@alice/@wave" in html


def test_output_filename_is_safe() -> None:
    """path separators and odd characters never reach the file name."""
    post = Post(author="", permlink="../../etc/passwd", body="x")

    assert "/" not in output_filename(post)
    assert output_filename(post).endswith(".html")
