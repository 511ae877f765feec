import pytest

from snuggle.utils import extract_first_image_url, like_pattern, parse_pagination, truncate


@pytest.mark.parametrize("limit,offset,expected", [
    (None, None, (20, 0)),
    ("10", "5", (10, 5)),
    ("0", "0", (20, 0)),
    ("500", "40", (100, 40)),
    ("-7", "-3", (1, 0)),
    ("abc", "x", (20, 0)),
])
def test_parse_pagination(limit, offset, expected):
    assert parse_pagination(limit, offset) == expected


def test_parse_pagination_custom_default():
    assert parse_pagination(None, None, default_limit=3) == (3, 0)


def test_extract_first_image_url():
    html = '<p>hola</p><img class="x" src="https://a/1.png"><img src="https://a/2.png">'
    assert extract_first_image_url(html) == "https://a/1.png"
    assert extract_first_image_url("<img src='https://a/q.jpg' />") == "https://a/q.jpg"
    assert extract_first_image_url("<p>sin imagen</p>") is None
    assert extract_first_image_url("") is None


def test_truncate():
    assert truncate("abcdef", 3) == "abc"
    assert truncate("ab", 3) == "ab"


def test_like_pattern_escapes_wildcards():
    assert like_pattern("hola") == "%hola%"
    assert like_pattern("50%_off") == "%50\\%\\_off%"
    assert like_pattern("a\\b") == "%a\\\\b%"
