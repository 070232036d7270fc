"""Tests for the Flask application factory."""
from __future__ import annotations


def test_health_endpoint_returns_ok(client, tmp_path):
    """The health endpoint should respond with OK and the file directories exist."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
    assert (tmp_path / "tmp").is_dir()
    assert (tmp_path / "public" / "avatars").is_dir()


def test_auth_blueprint_registered(app):
    assert "auth" in app.blueprints
    rules = {rule.rule for rule in app.url_map.iter_rules()}
    assert "/api/auth/register" in rules
    assert "/api/auth/verify/<verification_token>" in rules


def test_mail_settings_built_from_config(app):
    settings = app.extensions["mail_sender"].settings
    assert settings.suppress_send is True
    assert settings.server == app.config["MAIL_SERVER"]
    assert settings.default_sender == app.config["MAIL_DEFAULT_SENDER"]


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
