"""Tests for the login page and the OAuth routes."""

from urllib.parse import parse_qs, urlparse


def test_login_page(client):
    """Test that the static login page links to the OAuth flow."""
    response = client.get("/login.html")

    assert response.status_code == 200
    assert 'href="/oauth"' in response.text


def test_oauth_redirect(client):
    """Test that /oauth redirects to Google's consent page with 307."""
    response = client.get("/oauth")

    assert response.status_code == 307
    location = urlparse(response.headers["location"])
    assert location.netloc == "accounts.google.com"
    params = parse_qs(location.query)
    assert params["access_type"] == ["offline"]
    assert params["state"][0]
    assert "user" in response.cookies


def test_callback_authorized(client, login, database):
    """Test that an authorized callback sets the session and redirects to the links page."""
    response = login()

    assert response.status_code == 307
    assert response.headers["location"] == "/links.html"
    assert client.get("/links.html").status_code == 200
    assert len(database.get_collection("sessions").docs) == 1


def test_callback_unknown_user(client, login, google, database):
    """Test that an unknown identity gets 403, no session record, and no access."""
    google.profile_id = "1337"

    response = login()

    assert response.status_code == 403
    assert response.json()["type"] == "authorization_error"
    assert len(database.get_collection("sessions").docs) == 0
    assert client.get("/links.html").status_code == 307


def test_callback_state_mismatch(client, google):
    """Test that a callback with a forged state is rejected."""
    client.get("/oauth")

    response = client.get("/oauth/callback", params={"code": "auth-code", "state": "forged"})

    assert response.status_code == 403
    assert google.requests == []


def test_callback_state_is_single_use(client):
    """Test that a state cannot be replayed after a callback consumed it."""
    state = parse_qs(urlparse(client.get("/oauth").headers["location"]).query)["state"][0]
    client.get("/oauth/callback", params={"code": "auth-code", "state": state})

    response = client.get("/oauth/callback", params={"code": "auth-code", "state": state})
    assert response.status_code == 403


def test_callback_provider_failure(client, login, google):
    """Test that a provider failure is a 502 for this request only."""
    google.token_status = 503

    response = login()

    assert response.status_code == 502
    assert response.json()["type"] == "provider_error"
    assert client.get("/health").status_code == 200


def test_callback_non_ascii_state(client, google):
    """Test that a non-ASCII state is rejected as a forged state."""
    client.get("/oauth")

    response = client.get("/oauth/callback", params={"code": "auth-code", "state": "été"})

    assert response.status_code == 403
    assert response.json()["type"] == "authorization_error"
    assert google.requests == []


def test_failed_callback_signs_out_previous_user(signed_in_client, login, google):
    """Test that a failed sign-in leaves the visitor anonymous even if previously signed in."""
    assert signed_in_client.get("/links.html").status_code == 200
    google.profile_id = "1337"

    response = login()

    assert response.status_code == 403
    assert signed_in_client.get("/links.html").status_code == 307


def test_successful_callback_replaces_previous_user(signed_in_client, login, database):
    """Test that signing in again keeps the visitor authenticated."""
    response = login()

    assert response.status_code == 307
    assert signed_in_client.get("/links.html").status_code == 200
    assert len(database.get_collection("sessions").docs) == 2
