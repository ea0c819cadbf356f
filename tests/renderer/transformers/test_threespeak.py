"""tests for 3Speak embeds."""

from bs4 import BeautifulSoup

from hivecontent.renderer.transformers import EmbedLedger, apply_transformer


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_legacy_watch_link() -> None:
    """legacy 3speak.tv links embed through play.3speak.tv."""
    html = apply_transformer('<p><a href="https://3speak.tv/watch?v=alice/abc">x</a></p>', "threespeak")

    iframe = _soup(html).find("div", class_="video-container").find("iframe")
    assert iframe["src"] == "https://play.3speak.tv/watch?v=alice/abc&mode=iframe"
    assert iframe.has_attr("allowfullscreen")


def test_embed_link_keeps_embed_path() -> None:
    """play.3speak.tv/embed links keep the /embed player."""
    html = apply_transformer('<a href="https://play.3speak.tv/embed?v=alice/abc">x</a>', "threespeak")

    assert _soup(html).find("iframe")["src"] == "https://play.3speak.tv/embed?v=alice/abc&mode=iframe"


def test_extra_query_parameters_are_dropped() -> None:
    """the video id stops at the next query parameter."""
    html = apply_transformer(
        '<a href="http://play.3speak.tv/watch?v=alice/abc&t=10">x</a>', "threespeak"
    )

    assert _soup(html).find("iframe")["src"] == "https://play.3speak.tv/watch?v=alice/abc&mode=iframe"


def test_audio_link() -> None:
    """audio links become audio player iframes without fullscreen."""
    html = apply_transformer('<a href="https://audio.3speak.tv/play?a=bob/tune">listen</a>', "threespeak")

    iframe = _soup(html).find("div", class_="audio-container").find("iframe")
    assert iframe["src"] == "https://audio.3speak.tv/play?a=bob/tune"
    assert not iframe.has_attr("allowfullscreen")
    assert iframe["loading"] == "lazy"


def test_duplicates_across_link_forms() -> None:
    """watch and embed links to the same id embed once."""
    html = apply_transformer(
        '<a href="https://play.3speak.tv/watch?v=alice/abc">one</a>'
        '<a href="https://play.3speak.tv/embed?v=alice/abc">two</a>',
        "threespeak",
    )
    soup = _soup(html)

    assert len(soup.find_all("iframe")) == 1
    assert soup.find("a", string="two") is not None


def test_video_and_audio_ids_are_separate() -> None:
    """a video and an audio clip may share an id."""
    html = apply_transformer(
        '<a href="https://play.3speak.tv/watch?v=alice/same">v</a>'
        '<a href="https://audio.3speak.tv/play?a=alice/same">a</a>',
        "threespeak",
    )

    assert len(_soup(html).find_all("iframe")) == 2


def test_shared_ledger_spans_calls() -> None:
    """a ledger passed in carries dedup state between calls."""
    ledger = EmbedLedger()
    html = '<a href="https://play.3speak.tv/watch?v=alice/abc">x</a>'

    first = apply_transformer(html, "threespeak", ledger=ledger)
    second = apply_transformer(html, "threespeak", ledger=ledger)

    assert "iframe" in first
    assert second == html


def test_other_links_untouched() -> None:
    """non-3Speak links pass through unchanged."""
    html = '<a href="https://example.com/watch?v=alice/abc">x</a>'

    assert apply_transformer(html, "threespeak") == html
