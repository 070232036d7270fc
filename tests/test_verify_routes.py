"""Tests for email verification and resending the verification link."""

from __future__ import annotations

from models import db
from models.user import User


def _create_user(email: str, *, verified: bool = False, token: str = "tok-123") -> User:
    user = User(
        email=email,
        name="Worker",
        verify=verified,
        verification_token="" if verified else token,
    )
    user.set_password("secret")
    db.session.add(user)
    db.session.commit()
    return user


def test_verify_token_marks_user_verified(app, client):
    with app.app_context():
        user_id = _create_user("worker@example.com").id

    response = client.get("/api/auth/verify/tok-123")

    assert response.status_code == 200
    assert response.get_json() == {"message": "Verification successful"}
    with app.app_context():
        user = db.session.get(User, user_id)
        assert user.verify is True
        assert user.verification_token == ""

    second = client.get("/api/auth/verify/tok-123")
    assert second.status_code == 404
    assert second.get_json()["detail"] == "User not found"


def test_verify_unknown_token_is_not_found(client):
    response = client.get("/api/auth/verify/does-not-exist")

    assert response.status_code == 404


def test_registration_link_verifies_account(app, client, outbox):
    client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@example.com", "password": "pw"},
    )
    with app.app_context():
        token = User.query.filter_by(email="ann@example.com").one().verification_token

    response = client.get(f"/api/auth/verify/{token}")

    assert response.status_code == 200


def test_resend_verification_uses_existing_token(app, client, outbox):
    with app.app_context():
        _create_user("pending@example.com", token="keep-me")
        _create_user("other@example.com", token="not-me")

    response = client.post("/api/auth/verify", json={"email": "pending@example.com"})

    assert response.status_code == 200
    assert response.get_json() == {"message": "Verification email sent"}
    assert len(outbox) == 1
    assert outbox[0]["To"] == "pending@example.com"
    assert "/api/auth/verify/keep-me" in outbox[0].get_content()


def test_resend_for_verified_user_is_rejected(app, client, outbox):
    with app.app_context():
        _create_user("done@example.com", verified=True)

    response = client.post("/api/auth/verify", json={"email": "done@example.com"})

    assert response.status_code == 400
    assert response.get_json()["detail"] == "Verification has already been passed"
    assert outbox == []


def test_resend_for_unknown_email_is_not_found(client):
    response = client.post("/api/auth/verify", json={"email": "ghost@example.com"})

    assert response.status_code == 404


def test_resend_requires_email(client):
    response = client.post("/api/auth/verify", json={"name": "no email"})

    assert response.status_code == 400
    assert "email" in response.get_json()["detail"]
