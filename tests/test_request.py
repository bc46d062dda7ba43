import urllib.parse

import pytest

from geminipy.errors import InvalidRequestError, InvalidUrlError
from geminipy.request import GeminiRequest, resolve_redirect_target, with_input


def test_from_url_uses_default_port():
    req = GeminiRequest.from_url("gemini://example.org/index.gmi")

    assert req.host == "example.org"
    assert req.port == 1965
    assert req.request_line == b"gemini://example.org/index.gmi\r\n"


def test_from_url_uses_explicit_port():
    req = GeminiRequest.from_url("gemini://example.org:1966/")

    assert req.port == 1966


def test_from_url_honours_custom_default_port():
    assert GeminiRequest.from_url("gemini://example.org/", default_port=7000).port == 7000


def test_request_line_is_utf8():
    req = GeminiRequest.from_url("gemini://example.org/café")

    assert req.request_line == "gemini://example.org/café\r\n".encode("utf-8")


def test_ipv6_host():
    req = GeminiRequest.from_url("gemini://[::1]:1970/")

    assert req.host == "::1"
    assert req.port == 1970


@pytest.mark.parametrize("url", ["", "example.org/page", "gemini:///no-host", "/relative/path"])
def test_missing_host_is_invalid(url):
    with pytest.raises(InvalidUrlError):
        GeminiRequest.from_url(url)


def test_bad_port_is_invalid():
    with pytest.raises(InvalidUrlError):
        GeminiRequest.from_url("gemini://example.org:notaport/")


def test_url_at_length_limit_is_accepted():
    prefix = "gemini://example.org/"
    url = prefix + "a" * (1024 - len(prefix))

    assert len(GeminiRequest.from_url(url).request_line) == 1026


def test_url_over_length_limit_is_rejected():
    prefix = "gemini://example.org/"
    url = prefix + "a" * (1025 - len(prefix))

    with pytest.raises(InvalidRequestError):
        GeminiRequest.from_url(url)


def test_length_limit_counts_encoded_bytes():
    prefix = "gemini://example.org/"
    url = prefix + "é" * 510

    with pytest.raises(InvalidRequestError):
        GeminiRequest.from_url(url)


def test_redirect_relative_to_directory_of_current_url():
    assert resolve_redirect_target("gemini://a/dir/page", "other") == "gemini://a/dir/other"


def test_redirect_absolute_path():
    assert resolve_redirect_target("gemini://a/dir/page", "/root.gmi") == "gemini://a/root.gmi"


def test_redirect_parent_reference():
    assert resolve_redirect_target("gemini://a/dir/sub/page", "../up") == "gemini://a/dir/up"


def test_redirect_absolute_gemini_url_used_verbatim():
    target = "gemini://elsewhere.example:1999/x?y"

    assert resolve_redirect_target("gemini://a/dir/page", target) == target


def test_redirect_network_path_reference():
    assert resolve_redirect_target("gemini://a/dir/page", "//b/c") == "gemini://b/c"


def test_redirect_other_scheme_is_kept():
    assert resolve_redirect_target("gemini://a/", "https://example.com/") == "https://example.com/"


def test_redirect_falls_back_to_meta_when_unresolvable():
    assert resolve_redirect_target("gemini://[::1/", "next") == "next"


def test_redirect_keeps_query_and_port_of_relative_target():
    assert resolve_redirect_target("gemini://a:1999/dir/page", "next?x=1") == "gemini://a:1999/dir/next?x=1"


def test_redirect_resolution_leaves_urllib_scheme_registry_alone():
    resolve_redirect_target("gemini://a/dir/page", "other")

    assert "gemini" not in urllib.parse.uses_relative
    assert "gemini" not in urllib.parse.uses_netloc


def test_with_input_percent_encodes_value():
    assert with_input("gemini://a/search", "hello world&more") == "gemini://a/search?hello%20world%26more"


def test_with_input_replaces_existing_query():
    assert with_input("gemini://a/search?old", "new") == "gemini://a/search?new"
