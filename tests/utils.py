from http.cookies import SimpleCookie

from fretdeck.config import Settings


def make_settings(**overrides) -> Settings:
    """Settings with both providers configured unless overridden."""
    values = {
        "environment": "development",
        "youtube_client_id": "yt-client",
        "youtube_client_secret": "yt-secret",
        "youtube_redirect_uri": None,
        "spotify_client_id": "sp-client",
        "spotify_client_secret": "sp-secret",
        "spotify_redirect_uri": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def parse_set_cookies(response) -> SimpleCookie:
    """Parse every Set-Cookie header of a response into one SimpleCookie."""
    jar = SimpleCookie()
    for header in response.headers.get_list("set-cookie"):
        jar.load(header)
    return jar


def cookie_header(**cookies: str) -> dict[str, str]:
    return {"Cookie": "; ".join(f"{name}={value}" for name, value in cookies.items())}
