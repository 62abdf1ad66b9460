import pytest
from linkmap.crawler.urls import hostname, identity_key, is_fetchable, parse_entrypoint, resolve
from linkmap.errors import InvalidEntrypoint, MalformedURL

BASE = "http://example.com/dir/page"


@pytest.mark.parametrize(
    "href,expected",
    [
        ("/foo", "http://example.com/foo"),
        ("foo", "http://example.com/dir/foo"),
        ("../foo", "http://example.com/foo"),
        ("../../../foo", "http://example.com/foo"),
        ("//other.org", "http://other.org/"),
        ("https://other.org", "https://other.org/"),
        ("https://other.org/x/", "https://other.org/x/"),
        ("?q=1", "http://example.com/dir/page?q=1"),
        ("#top", "http://example.com/dir/page#top"),
        ("  /padded  ", "http://example.com/padded"),
    ],
)
def test_resolve(href, expected):
    assert resolve(href, BASE) == expected


@pytest.mark.parametrize(
    "href",
    ["/bad%zz", "%", "/x%2", "http://[::1/", "http://example.com:99999/", "/a\x00b", "/a\x7fb"],
)
def test_resolve_malformed(href):
    with pytest.raises(MalformedURL):
        resolve(href, BASE)


def test_malformed_url_is_value_error():
    with pytest.raises(ValueError):
        resolve("%zz", BASE)


def test_identity_ignores_scheme():
    assert identity_key("http://h/p") == identity_key("https://h/p")
    assert identity_key("http://h/p") == "//h/p"


def test_identity_is_stable():
    url = "https://example.com/a?b=c#d"
    assert identity_key(url) == identity_key(url) == "//example.com/a?b=c#d"


def test_identity_keeps_trailing_slash():
    assert identity_key("h/p") != identity_key("h/p/")
    assert identity_key("http://h/bla") != identity_key("http://h/bla/")


def test_identity_drops_empty_query_and_fragment():
    assert identity_key("http://h/p?") == identity_key("http://h/p#") == identity_key("http://h/p")


def test_identity_of_opaque_url():
    assert identity_key("mailto:someone@example.com") == "someone@example.com"


def test_hostname_and_scheme():
    assert hostname("http://Example.COM:8080/x") == "example.com"
    assert hostname("mailto:someone@example.com") is None
    assert is_fetchable("https://example.com/")
    assert not is_fetchable("mailto:someone@example.com")


@pytest.mark.parametrize(
    "link,expected",
    [
        ("http://example.com", "http://example.com/"),
        ("https://example.com/entry", "https://example.com/entry"),
        (" http://example.com/x ", "http://example.com/x"),
    ],
)
def test_parse_entrypoint(link, expected):
    assert parse_entrypoint(link) == expected


@pytest.mark.parametrize("link", ["", "example.com", "/path", "mailto:a@b.c", "http://", "http://x/%g0"])
def test_parse_entrypoint_rejects(link):
    with pytest.raises(InvalidEntrypoint):
        parse_entrypoint(link)
