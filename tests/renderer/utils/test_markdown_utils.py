"""tests for markdown to HTML conversion."""

from bs4 import BeautifulSoup

from hivecontent.core.config import RendererOptions
from hivecontent.renderer.utils.markdown import link_tags, markdown_to_html, proxy_ipfs_image


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_mentions_and_hashtags_linked() -> None:
    """@mentions and #hashtags become links."""
    soup = _soup(markdown_to_html("Hello @alice and #Hive"))
    hrefs = {a.get_text(): a["href"] for a in soup.find_all("a")}

    assert hrefs == {"@alice": "/@alice", "#Hive": "/trending/hive"}


def test_custom_tag_url_functions() -> None:
    """mention and hashtag URLs come from the configured functions."""
    options = RendererOptions(
        usertag_url_fn=lambda account: f"/u/{account}",
        hashtag_url_fn=lambda tag: f"/t/{tag}",
    )
    soup = _soup(markdown_to_html("@bob #news", options))

    assert [a["href"] for a in soup.find_all("a")] == ["/u/bob", "/t/news"]


def test_emails_and_numbers_not_linked() -> None:
    """emails, #1 and entity-like text stay plain."""
    html = link_tags("mail me@example.com about issue #1 &#38;", str, str)

    assert "<a" not in html


def test_mentions_inside_links_not_nested() -> None:
    """link text is never linked again."""
    soup = _soup(markdown_to_html("[@alice](https://example.com)"))

    assert len(soup.find_all("a")) == 1


def test_external_links_marked() -> None:
    """links to other hosts get nofollow and the external class."""
    soup = _soup(markdown_to_html("[x](https://example.com/page)"))
    anchor = soup.find("a")

    assert anchor["rel"] == ["nofollow", "noopener"]
    assert anchor["class"] == ["link-external"]


def test_internal_links_not_marked() -> None:
    """links to the base host and relative links stay plain."""
    soup = _soup(markdown_to_html("[a](https://hive.blog/@a/b) [b](/trending/hive)"))

    for anchor in soup.find_all("a"):
        assert not anchor.has_attr("rel")
        assert not anchor.has_attr("class")


def test_bare_urls_linkified() -> None:
    """bare URLs become anchors."""
    soup = _soup(markdown_to_html("visit https://example.com today"))

    assert soup.find("a")["href"] == "https://example.com"


def test_line_breaks_tables_strikethrough() -> None:
    """single newlines break lines; tables and ~~strike~~ are enabled."""
    soup = _soup(markdown_to_html("one\ntwo\n\n~~gone~~\n\n| a | b |\n|---|---|\n| 1 | 2 |"))

    assert soup.find("br") is not None
    assert soup.find("s").get_text() == "gone"
    assert soup.find("table") is not None


def test_images_proxied() -> None:
    """IPFS image paths are served from ipfs.io."""
    img = _soup(markdown_to_html("![pic](https://gateway.pinata.cloud/ipfs/QmAbc)")).find("img")

    assert img["src"] == "https://ipfs.io/ipfs/QmAbc"
    assert img["alt"] == "pic"


def test_custom_image_proxy() -> None:
    """a configured proxy is applied to every image."""
    options = RendererOptions(image_proxy_fn=lambda url: "https://proxy.example/" + url)
    img = _soup(markdown_to_html("![](https://img.example/a.png)", options)).find("img")

    assert img["src"] == "https://proxy.example/https://img.example/a.png"


def test_proxy_leaves_other_urls() -> None:
    """non-IPFS URLs pass through the default proxy."""
    assert proxy_ipfs_image("https://img.example/a.png") == "https://img.example/a.png"
    assert proxy_ipfs_image("https://ipfs.example/no-path") == "https://ipfs.example/no-path"


def test_raw_html_passes_through() -> None:
    """raw HTML is kept for the sanitizer to judge."""
    html = markdown_to_html("<center>hi</center>")

    assert "<center>hi</center>" in html
