import pytest
from starlette.requests import Request

from fretdeck.integrations.oauth.redirects import get_base_url, sanitize_redirect

BASE = "http://localhost:3000"


def _request(headers: dict[str, str], host: str = "localhost:3000", scheme: str = "http") -> Request:
    raw_headers = [(b"host", host.encode())]
    raw_headers += [(key.lower().encode(), value.encode()) for key, value in headers.items()]
    return Request(
        {
            "type": "http",
            "method": "GET",
            "scheme": scheme,
            "server": (host.split(":")[0], int(host.split(":")[1]) if ":" in host else 80),
            "path": "/api/youtube/auth",
            "query_string": b"",
            "headers": raw_headers,
        }
    )


@pytest.mark.parametrize("candidate", [None, ""])
def test_empty_candidate_is_rejected(candidate):
    assert sanitize_redirect(candidate, BASE) is None


@pytest.mark.parametrize("candidate", ["/", "/settings", "/spotify?tab=search#top", "//evil.com"])
def test_relative_paths_pass_through_unchanged(candidate):
    assert sanitize_redirect(candidate, BASE) == candidate


def test_same_origin_absolute_url_becomes_path():
    assert sanitize_redirect("http://localhost:3000/settings/profile", BASE) == "/settings/profile"


def test_same_origin_keeps_query_and_fragment():
    assert (
        sanitize_redirect("http://localhost:3000/library?tag=blues#row-3", BASE)
        == "/library?tag=blues#row-3"
    )


def test_same_origin_without_path_is_root():
    assert sanitize_redirect("http://localhost:3000", BASE) == "/"


def test_default_port_matches_implicit_port():
    assert sanitize_redirect("https://app.example.com:443/x", "https://app.example.com") == "/x"


@pytest.mark.parametrize(
    "candidate",
    [
        "https://evil.com/steal",
        "https://localhost:3000/settings",
        "http://localhost:4000/settings",
        "http://evil.localhost:3000/",
        "javascript:alert(1)",
        "settings/profile",
        "http://localhost:notaport/x",
    ],
)
def test_foreign_or_unparseable_candidates_are_rejected(candidate):
    assert sanitize_redirect(candidate, BASE) is None


def test_base_url_from_request_origin():
    assert get_base_url(_request({})) == "http://localhost:3000"


def test_base_url_prefers_forwarded_headers():
    request = _request({"x-forwarded-proto": "https", "x-forwarded-host": "app.example.com"})
    assert get_base_url(request) == "https://app.example.com"


def test_base_url_needs_both_forwarded_headers():
    request = _request({"x-forwarded-host": "app.example.com"})
    assert get_base_url(request) == "http://localhost:3000"
