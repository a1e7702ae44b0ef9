from event_feed.core.extract import Link, extract_links, markdown, plain_text

DESC = "hello <a href=https://pub.dev>world</a>! See <a href='https://example.edu/a?b=1'>the form</a>."


def test_extract_links():
    assert extract_links(DESC) == [
        Link(text="world", href="https://pub.dev"),
        Link(text="the form", href="https://example.edu/a?b=1"),
    ]
    assert extract_links("no links here") == []


def test_plain_text():
    assert plain_text(DESC) == "hello world! See the form."
    assert plain_text("") == ""


def test_markdown():
    assert markdown("hello <a href=https://pub.dev>world</a>!") == "hello [world](https://pub.dev)!"
