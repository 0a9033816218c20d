# ruff: noqa: S101
import pytest

from tfast.utils.url import absolute_url, format_base_url

BASE_URL = "http://127.0.0.1:53262"


@pytest.mark.parametrize(
    "path, expected",
    [
        ("", BASE_URL),
        ("/", BASE_URL + "/"),
        ("/hello", BASE_URL + "/hello"),
        ("hello", BASE_URL + "/hello"),
        ("/hello?name=world", BASE_URL + "/hello?name=world"),
        ("my/path", BASE_URL + "/my/path"),
        ("?q=1", BASE_URL + "/?q=1"),
    ],
)
def test_absolute_url(path, expected):
    """Test that exactly one slash separates the base URL and the path."""
    assert absolute_url(BASE_URL, path) == expected


def test_format_base_url():
    """Test that IPv6 hosts are enclosed in brackets."""
    assert format_base_url("http", "127.0.0.1", 8080) == "http://127.0.0.1:8080"
    assert format_base_url("https", "localhost", 443) == "https://localhost:443"
    assert format_base_url("http", "::1", 8080) == "http://[::1]:8080"
