from vivafit.security_headers import get_security_headers


def test_headers_on_api_responses(api, auth_session, client_account):
    auth_session.login_as(client_account)

    response = api.get("/consultations")

    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["Cache-Control"] == "no-store"
    assert "camera=()" in response.headers["Permissions-Policy"]


def test_health_is_excluded(api):
    response = api.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
    assert "X-Frame-Options" not in response.headers


def test_hsts_only_in_production():
    assert "Strict-Transport-Security" not in get_security_headers(is_production=False)
    assert get_security_headers(is_production=True)["Strict-Transport-Security"].startswith("max-age=")
