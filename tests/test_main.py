from fastapi.testclient import TestClient

from fretdeck.core.errors import APIError, InvalidUpstreamResponseError, error_response


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_oauth_endpoints_are_served_for_both_providers(client):
    for provider in ("youtube", "spotify"):
        assert client.get(f"/api/{provider}/auth").status_code == 302
        assert client.get(f"/api/{provider}/callback").status_code == 400
        assert client.get(f"/api/{provider}/status").status_code == 200
        assert client.post(f"/api/{provider}/logout").json() == {"ok": True}


def test_invalid_query_parameters_use_error_envelope(client):
    response = client.get("/api/spotify/search", params={"q": "blues", "limit": "abc"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid request parameters."
    assert body["details"][0]["loc"] == ["query", "limit"]


def test_invalid_offset_uses_error_envelope(client):
    response = client.get(
        "/api/spotify/playlist/tracks",
        params={"playlistId": "abc", "offset": "ten"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request parameters."


def test_unexpected_errors_are_sanitized(app):
    @app.get("/boom")
    async def boom():
        raise RuntimeError("database password is hunter2")

    response = TestClient(app, raise_server_exceptions=False).get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "An unexpected error occurred."}


def test_error_response_envelope():
    assert error_response(APIError("Nope.", status_code=418)).status_code == 418

    response = error_response(InvalidUpstreamResponseError("Invalid token payload.", details={"a": 1}))
    assert response.status_code == 500
    assert response.body == b'{"error":"Invalid token payload.","details":{"a":1}}'
